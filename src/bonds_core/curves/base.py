import logging
from abc import ABC, abstractmethod
from decimal import Decimal, localcontext
from typing import Dict, Tuple

from bonds_core.common.enums import FunctionType
from bonds_core.common.errors import InvariantViolation
from bonds_core.common.math import DEC_CONTEXT, ZERO, quantize_dec


logger = logging.getLogger(__name__)

ANY_NUMBER_OF_RESERVE_TOKENS = -1


class CurveFunction(ABC):
    """
    Abstract base class for a curve family.

    A family declares its required parameter names, how many reserve tokens it needs and
    any extra restrictions on parameter values, and implements the spot price and the
    integral from 0 to a given supply. The public methods guard the non-negativity
    post-conditions; subclasses only implement the formulas.
    """
    function_type: FunctionType
    required_params: Tuple[str, ...] = ()
    reserve_token_count: int = ANY_NUMBER_OF_RESERVE_TOKENS

    def check_restrictions(self, args: Dict[str, Decimal]) -> None:
        """
        Extra legality checks over the parameter mapping, run after presence and sign checks.
        Raises a BondsError subclass when a value is not allowed. Default: no restrictions.

        :param args: Dict[str, Decimal] - parameter name -> value
        """
        return None

    def spot_price(self, supply: Decimal, args: Dict[str, Decimal]) -> Decimal:
        """
        Returns the price per token at 'supply'.

        :param supply: Decimal - non-negative supply
        :param args: Dict[str, Decimal] - parameter name -> value
        :return: Decimal - the non-negative spot price
        """
        self._check_supply(supply)
        with localcontext(DEC_CONTEXT):
            result = self._spot_price(supply, args)
        return self._check_result(result, "price")

    def integral(self, supply: Decimal, args: Dict[str, Decimal]) -> Decimal:
        """
        Returns the reserve needed to back 'supply' tokens, i.e. the integral of the spot price
        from 0 to 'supply'.

        :param supply: Decimal - non-negative supply
        :param args: Dict[str, Decimal] - parameter name -> value
        :return: Decimal - the non-negative integral
        """
        self._check_supply(supply)
        with localcontext(DEC_CONTEXT):
            result = self._integral(supply, args)
        return self._check_result(result, "integral")

    @abstractmethod
    def _spot_price(self, x: Decimal, args: Dict[str, Decimal]) -> Decimal:
        pass

    @abstractmethod
    def _integral(self, x: Decimal, args: Dict[str, Decimal]) -> Decimal:
        pass

    def _check_supply(self, supply: Decimal) -> None:
        if supply < ZERO:
            logger.error("%s evaluated at negative supply %s", self.function_type, supply)
            raise InvariantViolation(f"negative supply {supply} for {self.function_type}")

    def _check_result(self, result: Decimal, label: str) -> Decimal:
        result = quantize_dec(result)
        # The curve is assumed to lie above the x-axis and never cross it.
        if result < ZERO:
            logger.error("%s produced negative %s %s", self.function_type, label, result)
            raise InvariantViolation(f"negative {label} result {result} for {self.function_type}")
        return result

    def __repr__(self):
        return f"{type(self).__name__}()"
