from decimal import Decimal
from typing import Dict

from bonds_core.common.enums import FunctionType
from bonds_core.common.errors import ArgumentMustBePositive, InvariantViolation
from bonds_core.common.math import ONE, ZERO, approx_sqrt
from bonds_core.curves.base import CurveFunction, ANY_NUMBER_OF_RESERVE_TOKENS


class SigmoidFunction(CurveFunction):
    """
    Sigmoid curve centred on supply b, with height 2a and steepness controlled by c:
        price(x) = a * ((x - b) / sqrt((x - b)^2 + c) + 1)

    The integral from 0 to x is:
        reserve(x) = a * (sqrt((x - b)^2 + c) + x) - a * sqrt(b^2 + c)

    c must be strictly positive, otherwise the price divides by zero at x = b.
    """
    function_type = FunctionType.SIGMOID
    required_params = ("a", "b", "c")
    reserve_token_count = ANY_NUMBER_OF_RESERVE_TOKENS

    def check_restrictions(self, args: Dict[str, Decimal]) -> None:
        if "c" not in args:
            raise InvariantViolation("did not find parameter c for sigmoid function")
        if args["c"] <= ZERO:
            raise ArgumentMustBePositive("FunctionParams:c")

    def _spot_price(self, x: Decimal, args: Dict[str, Decimal]) -> Decimal:
        a, b, c = args["a"], args["b"], args["c"]
        offset = x - b
        root = approx_sqrt(offset * offset + c)
        return a * (offset / root + ONE)

    def _integral(self, x: Decimal, args: Dict[str, Decimal]) -> Decimal:
        a, b, c = args["a"], args["b"], args["c"]
        offset = x - b
        root = approx_sqrt(offset * offset + c)
        constant = a * approx_sqrt(b * b + c)
        return a * (root + x) - constant
