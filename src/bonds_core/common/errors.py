"""
Exception classes for the bonds pricing engine.

Two tiers are kept strictly apart:

- BondsError and its subclasses are recoverable validation failures. They are raised
  when a caller supplies a configuration or an argument that the engine refuses to price,
  and the caller decides how to present or retry.
- InvariantViolation signals a condition that valid inputs can never produce (negative
  price, negative integral, a burn the reserve cannot cover, an unknown curve family).
  It derives from RuntimeError, not BondsError.
"""


class BondsError(Exception):
    """Base class for recoverable pricing and validation failures."""
    code = "bonds_error"

    def __init__(self, message: str = ""):
        super().__init__(message or self.__doc__)
        self.message = message or self.__doc__


class WrongParameterCount(BondsError):
    """Raised when a function parameter set does not have the number of parameters its family requires."""
    code = "wrong_parameter_count"

    def __init__(self, expected: int, actual: int):
        super().__init__(f"Expected {expected} function parameters, got {actual}.")
        self.expected = expected
        self.actual = actual


class ParameterMissing(BondsError):
    """Raised when a required function parameter is absent from the set."""
    code = "parameter_missing"

    def __init__(self, param: str):
        super().__init__(f"Function parameter '{param}' is missing or not a decimal.")
        self.param = param


class NegativeArgument(BondsError):
    """Raised when an argument that must be non-negative is negative."""
    code = "negative_argument"

    def __init__(self, argument: str):
        super().__init__(f"Argument '{argument}' cannot be negative.")
        self.argument = argument


class ArgumentMustBeInteger(BondsError):
    """Raised when an argument that must hold an integral value does not."""
    code = "argument_must_be_integer"

    def __init__(self, argument: str):
        super().__init__(f"Argument '{argument}' must be an integer value.")
        self.argument = argument


class ArgumentMustBePositive(BondsError):
    """Raised when an argument that must be strictly positive is zero or negative."""
    code = "argument_must_be_positive"

    def __init__(self, argument: str):
        super().__init__(f"Argument '{argument}' must be positive.")
        self.argument = argument


class FunctionNotAvailable(BondsError):
    """Raised when an operation is not defined for the bond's function type."""
    code = "function_not_available"


class RequiresNonZeroSupply(BondsError):
    """Raised when an operation requires the bond to have a non-zero current supply."""
    code = "requires_non_zero_supply"


class InvalidReserveToken(BondsError):
    """Raised when a denomination is not one of the bond's reserve tokens."""
    code = "invalid_reserve_token"

    def __init__(self, denom: str):
        super().__init__(f"Token '{denom}' is not a valid reserve token.")
        self.denom = denom


class SwapTooSmall(BondsError):
    """Raised when a swap amount is too small to give any return."""
    code = "swap_too_small"

    def __init__(self, from_denom: str, to_denom: str):
        super().__init__(f"Swap from {from_denom} to {to_denom} is too small to give any return.")
        self.from_denom = from_denom
        self.to_denom = to_denom


class ReserveDepletion(BondsError):
    """Raised when a swap would drain the entire output reserve."""
    code = "reserve_depletion"

    def __init__(self, from_denom: str, to_denom: str):
        super().__init__(f"Swap from {from_denom} to {to_denom} would deplete the {to_denom} reserve.")
        self.from_denom = from_denom
        self.to_denom = to_denom


class InvalidParameterFormat(BondsError):
    """Raised when a human-entered parameter string cannot be parsed."""
    code = "invalid_parameter_format"

    def __init__(self, entry: str):
        super().__init__(f"Invalid function parameter entry '{entry}'.")
        self.entry = entry


class InvalidCoinDenomination(BondsError):
    """Raised when a coin denomination is malformed or does not match the expected one."""
    code = "invalid_coin_denomination"

    def __init__(self, denom: str):
        super().__init__(f"Invalid coin denomination '{denom}'.")
        self.denom = denom


class InvalidBond(BondsError):
    """Raised when a bond configuration fails structural validation."""
    code = "invalid_bond"

    def __init__(self, errors):
        super().__init__("; ".join(errors))
        self.errors = list(errors)


class InvariantViolation(RuntimeError):
    """Raised when a condition that valid inputs cannot produce is reached. Not recoverable."""


class ConfigurationError(Exception):
    """Raised when an environment setting is missing or malformed."""
