from decimal import Decimal
from typing import Dict

from bonds_core.common.enums import FunctionType
from bonds_core.common.errors import FunctionNotAvailable, InvariantViolation
from bonds_core.curves.base import CurveFunction


class SwapperFunction(CurveFunction):
    """
    Two-asset constant-product pool. There is no price-vs-supply curve: liquidity is priced
    proportionally to the pool and swaps follow x * y = k (see BondCurve).
    """
    function_type = FunctionType.SWAPPER
    required_params = ()
    reserve_token_count = 2

    def spot_price(self, supply: Decimal, args: Dict[str, Decimal]) -> Decimal:
        raise FunctionNotAvailable("Spot price is not available for swapper functions.")

    def integral(self, supply: Decimal, args: Dict[str, Decimal]) -> Decimal:
        raise InvariantViolation("invalid function for function type swapper_function")

    def _spot_price(self, x: Decimal, args: Dict[str, Decimal]) -> Decimal:
        raise FunctionNotAvailable("Spot price is not available for swapper functions.")

    def _integral(self, x: Decimal, args: Dict[str, Decimal]) -> Decimal:
        raise InvariantViolation("invalid function for function type swapper_function")
