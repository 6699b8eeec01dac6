import logging
from decimal import Decimal, localcontext
from typing import Dict, List, Sequence, Tuple

from bonds_core.common.enums import FunctionType
from bonds_core.common.errors import (
    FunctionNotAvailable,
    InvalidBond,
    InvalidReserveToken,
    InvariantViolation,
    NegativeArgument,
    RequiresNonZeroSupply,
    ReserveDepletion,
    SwapTooSmall,
)
from bonds_core.common.math import DEC_CONTEXT, ONE, ZERO, minimal_unit, quantize_dec, round_down
from bonds_core.common.model import Bond, Coin, SwapResult
from bonds_core.curves.base import CurveFunction
from bonds_core.curves.registry import get_function
from bonds_core.curves.utils.fee_helper import FeeHelper
from bonds_core.curves.utils.invariant_helper import InvariantHelper


logger = logging.getLogger(__name__)


class BondCurve:
    """
    Pricing operations for a Bond.

    Every method is a pure read of the bond plus the caller-supplied reserve balances; the
    bond is never mutated. Amounts that are charged or paid out per reserve token are returned
    as a {denom: amount} dict sorted by denomination.

    Non-swapper bonds move all their reserve balances in lockstep, so the balance of the first
    reserve token stands for all of them.
    """

    def __init__(self, bond: Bond):
        """
        :param bond: Bond - the configuration and current supply to price against
        """
        self._bond = bond

    @property
    def bond(self) -> Bond:
        return self._bond

    @property
    def function(self) -> CurveFunction:
        return get_function(self._bond.function_type)

    @property
    def current_supply(self) -> Decimal:
        """Returns the bond's current supply amount."""
        return self._bond.current_supply.amount

    @property
    def args(self) -> Dict[str, Decimal]:
        return self._bond.function_parameters.as_map()

    def new_reserve_dec_coins(self, amount: Decimal) -> Dict[str, Decimal]:
        """The same amount for every reserve token."""
        return {denom: amount for denom in sorted(self._bond.reserve_tokens)}

    # Curve primitives

    def get_prices_at_supply(self, supply: Decimal) -> Dict[str, Decimal]:
        """
        Spot price per reserve token at 'supply'.
        Raises FunctionNotAvailable for swapper bonds.
        """
        function_type = self._bond.function_type
        if function_type in (FunctionType.POWER, FunctionType.SIGMOID, FunctionType.AUGMENTED):
            price = self.function.spot_price(supply, self.args)
        elif function_type == FunctionType.SWAPPER:
            raise FunctionNotAvailable("Prices at supply are not available for swapper functions.")
        else:
            raise InvariantViolation(f"unrecognized function type {function_type!r}")

        logger.debug("Price for %s at supply %s: %s", self._bond.token, supply, price)
        return self.new_reserve_dec_coins(price)

    def get_current_prices_pt(self, reserve_balances: Dict[str, Decimal]) -> Dict[str, Decimal]:
        """
        Price per token at the current state. For swapper bonds this is the price of minting one token.
        """
        function_type = self._bond.function_type
        if function_type in (FunctionType.POWER, FunctionType.SIGMOID, FunctionType.AUGMENTED):
            return self.get_prices_at_supply(self.current_supply)
        elif function_type == FunctionType.SWAPPER:
            return self.get_prices_to_mint(ONE, reserve_balances)
        raise InvariantViolation(f"unrecognized function type {function_type!r}")

    def curve_integral(self, supply: Decimal) -> Decimal:
        """
        Reserve required to back 'supply' tokens. Not defined for swapper bonds.
        """
        return self.function.integral(supply, self.args)

    # Transaction pricing

    def get_reserve_delta_for_liquidity_delta(
        self,
        mint_or_burn: Decimal,
        reserve_balances: Dict[str, Decimal]
    ) -> Dict[str, Decimal]:
        """
        Swapper liquidity pricing. Reserves scale in proportion to the supply change:
            delta_i = (mint_or_burn / current_supply) * reserve_i

        :param mint_or_burn: Decimal - number of pool tokens added or removed
        :param reserve_balances: Dict[str, Decimal] - current reserve balances
        """
        self._check_amount("mint_or_burn", mint_or_burn)
        self._check_balances(reserve_balances)

        function_type = self._bond.function_type
        if function_type in (FunctionType.POWER, FunctionType.SIGMOID, FunctionType.AUGMENTED):
            raise InvariantViolation(f"invalid function for function type {function_type}")
        elif function_type != FunctionType.SWAPPER:
            raise InvariantViolation(f"unrecognized function type {function_type!r}")

        if self.current_supply == ZERO:
            raise RequiresNonZeroSupply("Function requires the bond to have a non-zero current supply.")

        token_1, token_2 = self._pool_tokens()
        with localcontext(DEC_CONTEXT):
            alpha = mint_or_burn / self.current_supply
            result = {
                token_1: quantize_dec(alpha * reserve_balances.get(token_1, ZERO)),
                token_2: quantize_dec(alpha * reserve_balances.get(token_2, ZERO)),
            }

        if any(amount < ZERO for amount in result.values()):
            raise InvariantViolation(f"negative reserve delta result for bond {self._bond.token}")
        return dict(sorted(result.items()))

    def get_prices_to_mint(self, mint: Decimal, reserve_balances: Dict[str, Decimal]) -> Dict[str, Decimal]:
        """
        Reserve each reserve token must receive to mint 'mint' tokens. Fees are not included.

        Power / sigmoid:  integral(supply + mint) - common reserve balance, at least one
                          smallest reserve unit when earlier rounding already covers the cost.
        Augmented:        float mint formula, rounded to 6 places.
        Swapper:          proportional liquidity delta; the pool must already hold supply.
        """
        self._check_amount("mint", mint)
        self._check_balances(reserve_balances)

        function_type = self._bond.function_type
        if function_type in (FunctionType.POWER, FunctionType.SIGMOID):
            with localcontext(DEC_CONTEXT):
                integral = self.curve_integral(self.current_supply + mint)
                price_to_mint = integral - self._common_reserve_balance(reserve_balances)
            if price_to_mint < ZERO:
                # An earlier buyer overpaid through rounding enough to cover this purchase.
                price_to_mint = minimal_unit(self._bond.reserve_decimals)
                logger.warning(
                    "Price to mint %s %s was covered by existing reserve; charging %s",
                    mint, self._bond.token, price_to_mint
                )
        elif function_type == FunctionType.AUGMENTED:
            price_to_mint = self.function.reserve_to_mint(
                mint, self._common_reserve_balance(reserve_balances), self.current_supply, self.args
            )
        elif function_type == FunctionType.SWAPPER:
            if self.current_supply == ZERO:
                raise RequiresNonZeroSupply("Function requires the bond to have a non-zero current supply.")
            return self.get_reserve_delta_for_liquidity_delta(mint, reserve_balances)
        else:
            raise InvariantViolation(f"unrecognized function type {function_type!r}")

        logger.debug("Price to mint %s %s: %s per reserve token", mint, self._bond.token, price_to_mint)
        return self.new_reserve_dec_coins(price_to_mint)

    def get_returns_for_burn(self, burn: Decimal, reserve_balances: Dict[str, Decimal]) -> Dict[str, Decimal]:
        """
        Reserve each reserve token pays out for burning 'burn' tokens. Fees are not deducted.

        Power / sigmoid:  common reserve balance - integral(supply - burn)
        Augmented:        float withdraw formula, rounded to 6 places.
        Swapper:          proportional liquidity delta.
        """
        self._check_amount("burn", burn)
        self._check_balances(reserve_balances)

        function_type = self._bond.function_type
        if function_type in (FunctionType.POWER, FunctionType.SIGMOID):
            with localcontext(DEC_CONTEXT):
                remaining_supply = self.current_supply - burn
            integral = self.curve_integral(remaining_supply)
            reserve_balance = self._common_reserve_balance(reserve_balances)
            if integral > reserve_balance:
                logger.error(
                    "Reserve %s cannot back %s %s after burn (needs %s)",
                    reserve_balance, remaining_supply, self._bond.token, integral
                )
                raise InvariantViolation("not enough reserve available for burn")
            with localcontext(DEC_CONTEXT):
                return_for_burn = reserve_balance - integral
        elif function_type == FunctionType.AUGMENTED:
            return_for_burn = self.function.reserve_for_burn(
                burn, self._common_reserve_balance(reserve_balances), self.current_supply, self.args
            )
        elif function_type == FunctionType.SWAPPER:
            return self.get_reserve_delta_for_liquidity_delta(burn, reserve_balances)
        else:
            raise InvariantViolation(f"unrecognized function type {function_type!r}")

        logger.debug("Return for burning %s %s: %s per reserve token", burn, self._bond.token, return_for_burn)
        return self.new_reserve_dec_coins(return_for_burn)

    def get_returns_for_swap(
        self,
        from_coin: Coin,
        to_token: str,
        reserve_balances: Dict[str, Decimal]
    ) -> SwapResult:
        """
        Swaps 'from_coin' into 'to_token' on a swapper bond using the constant product rule
            out = in_adj * out_reserve / (in_reserve + in_adj)
        where in_adj is the input minus the transaction fee. The output is rounded down to
        the reserve token's smallest unit.

        :param from_coin: Coin - amount and denomination going in
        :param to_token: str - denomination coming out
        :param reserve_balances: Dict[str, Decimal] - current pool balances
        :return: SwapResult with the output and the fee charged on the input
        """
        self._check_amount("from", from_coin.amount)
        self._check_balances(reserve_balances)

        function_type = self._bond.function_type
        if function_type in (FunctionType.POWER, FunctionType.SIGMOID, FunctionType.AUGMENTED):
            raise FunctionNotAvailable("Swaps are only available for swapper functions.")
        elif function_type != FunctionType.SWAPPER:
            raise InvariantViolation(f"unrecognized function type {function_type!r}")

        reserve_tokens = self._pool_tokens()
        if from_coin.denom not in reserve_tokens:
            raise InvalidReserveToken(from_coin.denom)
        if to_token not in reserve_tokens:
            raise InvalidReserveToken(to_token)

        in_reserve = reserve_balances.get(from_coin.denom, ZERO)
        out_reserve = reserve_balances.get(to_token, ZERO)

        tx_fee = self.get_tx_fee(from_coin.denom, from_coin.amount)
        with localcontext(DEC_CONTEXT):
            in_amount = from_coin.amount - tx_fee.amount
        if in_amount <= ZERO:
            raise SwapTooSmall(from_coin.denom, to_token)

        with localcontext(DEC_CONTEXT):
            out_amount = round_down(in_amount * out_reserve / (in_reserve + in_amount), self._bond.reserve_decimals)

        if out_amount == out_reserve:
            raise ReserveDepletion(from_coin.denom, to_token)
        elif out_amount == ZERO:
            raise SwapTooSmall(from_coin.denom, to_token)
        elif out_amount < ZERO:
            raise InvariantViolation(f"negative return for swap result for bond {self._bond.token}")

        logger.debug("Swap %s -> %s%s (fee %s)", from_coin, out_amount, to_token, tx_fee)
        return SwapResult(returns={to_token: out_amount}, tx_fee=tx_fee)

    # Fees

    def get_tx_fee(self, denom: str, amount: Decimal) -> Coin:
        return FeeHelper.fee_for(self._bond.tx_fee_percentage, denom, amount, self._bond.reserve_decimals)

    def get_exit_fee(self, denom: str, amount: Decimal) -> Coin:
        return FeeHelper.fee_for(self._bond.exit_fee_percentage, denom, amount, self._bond.reserve_decimals)

    def get_tx_fees(self, reserve_amounts: Dict[str, Decimal]) -> Dict[str, Decimal]:
        return {denom: self.get_tx_fee(denom, amount).amount for denom, amount in sorted(reserve_amounts.items())}

    def get_exit_fees(self, reserve_amounts: Dict[str, Decimal]) -> Dict[str, Decimal]:
        return {denom: self.get_exit_fee(denom, amount).amount for denom, amount in sorted(reserve_amounts.items())}

    # Invariant checks

    def signers_equal_to(self, signers: Sequence[str]) -> bool:
        return InvariantHelper.signers_equal_to(self._bond.signers, signers)

    def reserve_denoms_equal_to(self, coins: Dict[str, Decimal]) -> bool:
        return InvariantHelper.reserve_denoms_equal_to(self._bond.reserve_tokens, coins)

    def any_order_quantity_limits_exceeded(self, amounts: Dict[str, Decimal]) -> bool:
        return InvariantHelper.any_order_quantity_limits_exceeded(amounts, self._bond.order_quantity_limits)

    def reserves_violate_sanity_rate(self, new_reserves: Dict[str, Decimal]) -> bool:
        return InvariantHelper.reserves_violate_sanity_rate(
            self._bond.reserve_tokens,
            new_reserves,
            self._bond.sanity_rate,
            self._bond.sanity_margin_percentage,
        )

    def exceeds_max_supply(self, mint: Decimal) -> bool:
        return InvariantHelper.exceeds_max_supply(self.current_supply, mint, self._bond.max_supply.amount)

    # Internals

    def _pool_tokens(self) -> Tuple[str, str]:
        reserve_tokens = self._bond.reserve_tokens
        if len(reserve_tokens) != 2:
            raise InvalidBond(
                [f"{self._bond.function_type}: expected 2 reserve tokens, got {len(reserve_tokens)}."]
            )
        return reserve_tokens[0], reserve_tokens[1]

    def _common_reserve_balance(self, reserve_balances: Dict[str, Decimal]) -> Decimal:
        if not reserve_balances:
            return ZERO
        balances: List[Decimal] = [reserve_balances[denom] for denom in sorted(reserve_balances)]
        if any(balance != balances[0] for balance in balances[1:]):
            logger.warning(
                "Reserve balances for %s are not uniform (%s); using %s",
                self._bond.token, reserve_balances, balances[0]
            )
        return balances[0]

    @staticmethod
    def _check_amount(label: str, amount: Decimal) -> None:
        if amount < ZERO:
            raise NegativeArgument(label)

    @staticmethod
    def _check_balances(reserve_balances: Dict[str, Decimal]) -> None:
        for denom, balance in reserve_balances.items():
            if balance < ZERO:
                raise NegativeArgument(f"reserve balance {denom}")
