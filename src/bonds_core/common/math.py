from decimal import Context, Decimal, ROUND_CEILING, ROUND_DOWN, ROUND_FLOOR, ROUND_HALF_EVEN, InvalidOperation
from typing import Union

from bonds_core.common.errors import InvariantViolation


# Context for every fixed-decimal computation, independent of the thread-local context.
# 100 digits hold integer parts up to 10^82 at DEC_PLACES decimal places.
DEC_CONTEXT = Context(prec=100, rounding=ROUND_HALF_EVEN)
DEC_PLACES = 18
DEC_QUANTUM = Decimal(1).scaleb(-DEC_PLACES)

ZERO = Decimal("0")
ONE = Decimal("1")
HUNDRED = Decimal("100")


def decimal_approx_equal(a: Decimal, b: Decimal, tol: Decimal = Decimal(10**14)) -> bool:
    return abs(a - b) < tol


def to_decimal(value: Union[Decimal, int, str]) -> Decimal:
    """Converts ints, strings and Decimals to Decimal. Floats are refused to keep results exact."""
    if isinstance(value, float):
        raise TypeError("Floats are not accepted as amounts; pass a str or Decimal.")
    try:
        return Decimal(value)
    except InvalidOperation as e:
        raise ValueError(f"Not a decimal value: {value!r}") from e


def _quantize(value: Decimal, quantum: Decimal, rounding: str) -> Decimal:
    try:
        return value.quantize(quantum, rounding=rounding, context=DEC_CONTEXT)
    except InvalidOperation:
        raise InvariantViolation(
            f"{value} does not fit in {DEC_CONTEXT.prec} digits at exponent {quantum.as_tuple().exponent}"
        ) from None


def quantize_dec(value: Decimal) -> Decimal:
    """
    Rounds to DEC_PLACES decimal places, half-even.
    Raises InvariantViolation when the result is too large for DEC_CONTEXT.
    """
    return _quantize(value, DEC_QUANTUM, ROUND_HALF_EVEN)


def truncate_dec(value: Decimal) -> Decimal:
    """Drops the fractional part, rounding toward zero."""
    return value.to_integral_value(rounding=ROUND_DOWN, context=DEC_CONTEXT)


def is_integral(value: Decimal) -> bool:
    return truncate_dec(value) == value


def approx_sqrt(value: Decimal) -> Decimal:
    if value < ZERO:
        raise InvariantViolation(f"square root of negative value {value}")
    return value.sqrt(context=DEC_CONTEXT)


def minimal_unit(decimals: int) -> Decimal:
    """Smallest representable amount of a token with 'decimals' places, e.g. 6 -> 0.000001."""
    return ONE.scaleb(-decimals)


def round_up(amount: Decimal, decimals: int) -> Decimal:
    return _quantize(amount, minimal_unit(decimals), ROUND_CEILING)


def round_down(amount: Decimal, decimals: int) -> Decimal:
    return _quantize(amount, minimal_unit(decimals), ROUND_FLOOR)


def power(x: Decimal, n: int) -> Decimal:
    """x raised to a non-negative integer power, with power(0, 0) == 1."""
    if n < 0:
        raise InvariantViolation(f"negative exponent {n}")
    if n == 0:
        return ONE
    return x ** n
