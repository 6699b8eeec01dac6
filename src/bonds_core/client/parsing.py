import re
from decimal import Decimal, InvalidOperation
from typing import Dict, List

from bonds_core.common.errors import InvalidCoinDenomination, InvalidParameterFormat
from bonds_core.common.math import ZERO
from bonds_core.common.model import Coin, FunctionParam, FunctionParams


DENOM_PATTERN = re.compile(r"^[a-z][a-z0-9/]{2,127}$")


def _split_parameters(fn_params_str: str) -> List[str]:
    # "a:1,b:2" -> ["a:1", "b:2"]
    if not fn_params_str.strip():
        return []
    return fn_params_str.split(",")


def _params_list_to_map(param_value_pairs: List[str]) -> Dict[str, str]:
    params_field_map: Dict[str, str] = {}
    for pv in param_value_pairs:
        # "a:1" -> ["a", "1"]; only the first colon splits
        parts = pv.split(":", 1)
        if len(parts) != 2:
            raise InvalidParameterFormat(pv)
        params_field_map[parts[0].strip()] = parts[1].strip()
    return params_field_map


def parse_function_params(fn_params_str: str) -> FunctionParams:
    """
    Parses "a:1,b:2" into FunctionParams. A blank string gives an empty set.
    Raises InvalidParameterFormat for an entry without a colon or with a non-decimal value.
    """
    params_field_map = _params_list_to_map(_split_parameters(fn_params_str))

    function_params = FunctionParams()
    for param, value in params_field_map.items():
        try:
            dec = Decimal(value)
        except InvalidOperation:
            raise InvalidParameterFormat(f"{param}:{value}") from None
        if not dec.is_finite():
            raise InvalidParameterFormat(f"{param}:{value}")
        function_params.append(FunctionParam(param, dec))
    return function_params


def parse_signers(signers_str: str) -> List[str]:
    """Parses a comma separated list of signer identities, keeping their order."""
    signers = [s.strip() for s in signers_str.split(",")]
    for signer in signers:
        if not signer:
            raise InvalidParameterFormat(signers_str)
    return signers


def parse_two_part_coin(amount: str, denom: str) -> Coin:
    """
    Builds a Coin from separately entered amount and denomination.
    """
    if not DENOM_PATTERN.match(denom):
        raise InvalidCoinDenomination(denom)
    try:
        value = Decimal(amount)
    except InvalidOperation:
        raise InvalidParameterFormat(f"{amount}{denom}") from None
    if not value.is_finite() or value < ZERO:
        raise InvalidParameterFormat(f"{amount}{denom}")
    return Coin(denom, value)
