"""
Static table of curve families.

Built once at import time and exposed read-only. Each entry carries the family's required
parameter names, its required number of reserve tokens and its extra parameter restrictions,
along with the formulas themselves.
"""
from types import MappingProxyType
from typing import Mapping, Tuple

from bonds_core.common.enums import FunctionType
from bonds_core.common.errors import InvariantViolation
from bonds_core.curves.augmented import AugmentedFunction
from bonds_core.curves.base import CurveFunction
from bonds_core.curves.power import PowerFunction
from bonds_core.curves.sigmoid import SigmoidFunction
from bonds_core.curves.swapper import SwapperFunction


FUNCTION_REGISTRY: Mapping[FunctionType, CurveFunction] = MappingProxyType({
    FunctionType.POWER: PowerFunction(),
    FunctionType.SIGMOID: SigmoidFunction(),
    FunctionType.SWAPPER: SwapperFunction(),
    FunctionType.AUGMENTED: AugmentedFunction(),
})

_missing = set(FunctionType) - set(FUNCTION_REGISTRY)
if _missing:
    raise ImportError(f"No curve function registered for {sorted(str(m) for m in _missing)}")


def get_function(function_type: FunctionType) -> CurveFunction:
    try:
        return FUNCTION_REGISTRY[function_type]
    except KeyError:
        raise InvariantViolation(f"unrecognized function type {function_type!r}") from None


def get_required_params(function_type: FunctionType) -> Tuple[str, ...]:
    return get_function(function_type).required_params


def get_reserve_token_count(function_type: FunctionType) -> int:
    return get_function(function_type).reserve_token_count
