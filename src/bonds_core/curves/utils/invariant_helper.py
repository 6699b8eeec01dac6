from decimal import Decimal, localcontext
from typing import Dict, List, Sequence

from bonds_core.common.math import DEC_CONTEXT, HUNDRED, ONE, ZERO


class InvariantHelper:
    """
    Checks run by the bond operations against caller-supplied amounts, signers and reserve
    balances. All of them are pure predicates.
    """

    @staticmethod
    def any_order_quantity_limits_exceeded(amounts: Dict[str, Decimal], limits: Dict[str, Decimal]) -> bool:
        """True if any amount is above the limit for its denomination. Denominations without a limit are uncapped."""
        return any(
            denom in limits and amount > limits[denom]
            for denom, amount in amounts.items()
        )

    @staticmethod
    def reserve_denoms_equal_to(reserve_tokens: Sequence[str], coins: Dict[str, Decimal]) -> bool:
        """True only if 'coins' holds exactly the reserve tokens, each with a non-zero amount."""
        if len(reserve_tokens) != len(coins):
            return False
        return all(coins.get(denom, ZERO) != ZERO for denom in reserve_tokens)

    @staticmethod
    def signers_equal_to(expected: Sequence[str], signers: Sequence[str]) -> bool:
        """Same length, same identities, same order."""
        if len(expected) != len(signers):
            return False
        return all(e == s for e, s in zip(expected, signers))

    @staticmethod
    def reserves_violate_sanity_rate(
        reserve_tokens: List[str],
        new_reserves: Dict[str, Decimal],
        sanity_rate: Decimal,
        sanity_margin_percentage: Decimal,
    ) -> bool:
        """
        For a two-reserve pool, checks that balance[token0] / balance[token1] lies within
            [sanity_rate * (1 - margin%), sanity_rate * (1 + margin%)]
        with the lower bound clamped to zero. A zero sanity rate disables the check.
        A zero balance of token1 leaves the rate undefined and counts as a violation.
        Bonds with fewer than two reserve tokens have no exchange rate to check.
        """
        if sanity_rate == ZERO or len(reserve_tokens) < 2:
            return False

        balance_0 = new_reserves.get(reserve_tokens[0], ZERO)
        balance_1 = new_reserves.get(reserve_tokens[1], ZERO)
        if balance_1 == ZERO:
            return True

        with localcontext(DEC_CONTEXT):
            exchange_rate = balance_0 / balance_1
            margin = sanity_margin_percentage / HUNDRED
            max_rate = sanity_rate * (ONE + margin)
            min_rate = sanity_rate * (ONE - margin)

        if min_rate < ZERO:
            min_rate = ZERO

        return exchange_rate < min_rate or exchange_rate > max_rate

    @staticmethod
    def exceeds_max_supply(current_supply: Decimal, mint: Decimal, max_supply: Decimal) -> bool:
        with localcontext(DEC_CONTEXT):
            return current_supply + mint > max_supply
