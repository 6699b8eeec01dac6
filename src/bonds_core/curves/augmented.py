import logging
from decimal import Decimal
from typing import Callable, Dict

from bonds_core.common.enums import FunctionType
from bonds_core.common.errors import InvariantViolation
from bonds_core.curves.base import CurveFunction, ANY_NUMBER_OF_RESERVE_TOKENS
from bonds_core.curves.helpers.augmented import AugmentedCurveHelper as helper


logger = logging.getLogger(__name__)


class AugmentedFunction(CurveFunction):
    """
    Augmented bonding curve parameterised by the hatch values d0, p0, theta and kappa.

    Unlike the other families, this one is evaluated in native float arithmetic and the results
    are rounded to 6 decimal places before coming back to Decimal. Results may therefore
    differ in the last place across platforms.
    """
    function_type = FunctionType.AUGMENTED
    required_params = ("d0", "p0", "theta", "kappa")
    reserve_token_count = ANY_NUMBER_OF_RESERVE_TOKENS

    @staticmethod
    def _floats(args: Dict[str, Decimal]) -> Dict[str, float]:
        return {name: float(args[name]) for name in AugmentedFunction.required_params}

    @staticmethod
    def v0(args: Dict[str, Decimal]) -> float:
        f = AugmentedFunction._floats(args)
        return helper.invariant_from_hatch(f["d0"], f["p0"], f["theta"], f["kappa"])

    def _evaluate(self, formula: Callable[[], float]) -> Decimal:
        try:
            return helper.to_rounded_decimal(formula())
        except (ArithmeticError, ValueError) as e:
            logger.error("augmented formula failed: %s", e)
            raise InvariantViolation(f"augmented function evaluation failed: {e}") from e

    def _spot_price(self, x: Decimal, args: Dict[str, Decimal]) -> Decimal:
        kappa = float(args["kappa"])

        def formula():
            v0 = self.v0(args)
            reserve = helper.reserve(float(x), kappa, v0)
            return helper.spot_price(reserve, kappa, v0)

        return self._evaluate(formula)

    def _integral(self, x: Decimal, args: Dict[str, Decimal]) -> Decimal:
        kappa = float(args["kappa"])
        return self._evaluate(lambda: helper.reserve(float(x), kappa, self.v0(args)))

    def reserve_to_mint(self, mint: Decimal, reserve: Decimal, supply: Decimal, args: Dict[str, Decimal]) -> Decimal:
        """
        Reserve that must be added to mint 'mint' tokens at the given reserve and supply.

        :param mint: Decimal - number of tokens to mint
        :param reserve: Decimal - current (common) reserve balance
        :param supply: Decimal - current supply
        :param args: Dict[str, Decimal] - function parameters
        :return: Decimal rounded to 6 places
        """
        kappa = float(args["kappa"])
        result = self._evaluate(
            lambda: helper.mint(float(mint), float(reserve), float(supply), kappa, self.v0(args))[0]
        )
        return self._check_result(result, "price to mint")

    def reserve_for_burn(self, burn: Decimal, reserve: Decimal, supply: Decimal, args: Dict[str, Decimal]) -> Decimal:
        """
        Reserve released by burning 'burn' tokens at the given reserve and supply.

        :return: Decimal rounded to 6 places
        """
        if burn > supply:
            raise InvariantViolation(f"cannot burn {burn} from supply {supply}")
        kappa = float(args["kappa"])
        result = self._evaluate(
            lambda: helper.withdraw(float(burn), float(reserve), float(supply), kappa, self.v0(args))[0]
        )
        return self._check_result(result, "return for burn")
