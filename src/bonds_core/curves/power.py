from decimal import Decimal
from typing import Dict

from bonds_core.common.enums import FunctionType
from bonds_core.common.errors import ArgumentMustBeInteger, InvariantViolation
from bonds_core.common.math import ONE, is_integral, power, truncate_dec
from bonds_core.curves.base import CurveFunction, ANY_NUMBER_OF_RESERVE_TOKENS


class PowerFunction(CurveFunction):
    """
    Power curve:
        price(x) = m * x^n + c

    The integral from 0 to x is:
        reserve(x) = m * x^(n+1) / (n+1) + c * x

    'n' must hold an integral value; the exponent used is its truncation.
    """
    function_type = FunctionType.POWER
    required_params = ("m", "n", "c")
    reserve_token_count = ANY_NUMBER_OF_RESERVE_TOKENS

    def check_restrictions(self, args: Dict[str, Decimal]) -> None:
        if "n" not in args:
            raise InvariantViolation("did not find parameter n for power function")
        if not is_integral(args["n"]):
            raise ArgumentMustBeInteger("FunctionParams:n")

    @staticmethod
    def _exponent(args: Dict[str, Decimal]) -> int:
        return int(truncate_dec(args["n"]))

    def _spot_price(self, x: Decimal, args: Dict[str, Decimal]) -> Decimal:
        m, c = args["m"], args["c"]
        return m * power(x, self._exponent(args)) + c

    def _integral(self, x: Decimal, args: Dict[str, Decimal]) -> Decimal:
        m, n, c = args["m"], args["n"], args["c"]
        return m * power(x, self._exponent(args) + 1) / (n + ONE) + c * x
