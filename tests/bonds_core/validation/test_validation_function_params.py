import pytest

from decimal import Decimal

from bonds_core.common.enums import FunctionType
from bonds_core.common.errors import (
    ArgumentMustBeInteger,
    ArgumentMustBePositive,
    NegativeArgument,
    ParameterMissing,
    WrongParameterCount,
)
from bonds_core.common.model import FunctionParam, FunctionParams
from bonds_core.validation.function_params_validator import FunctionParamsValidator


def _params(*pairs):
    return FunctionParams(FunctionParam(name, Decimal(value)) for name, value in pairs)


@pytest.mark.parametrize(
    "function_type, params",
    [
        (FunctionType.POWER, _params(("m", "1"), ("n", "2"), ("c", "0"))),
        (FunctionType.POWER, _params(("c", "5"), ("m", "0.01"), ("n", "3.0"))),
        (FunctionType.SIGMOID, _params(("a", "1"), ("b", "0"), ("c", "0.0001"))),
        (FunctionType.SWAPPER, _params()),
        (FunctionType.AUGMENTED, _params(("d0", "500"), ("p0", "0.01"), ("theta", "0.4"), ("kappa", "3"))),
    ]
)
def test_valid_params(function_type, params):
    """Valid parameter sets pass without raising."""
    FunctionParamsValidator.validate(params, function_type)


@pytest.mark.parametrize(
    "function_type, params, expected",
    [
        (FunctionType.POWER, _params(("m", "1"), ("n", "2")), 3),
        (FunctionType.POWER, _params(("m", "1"), ("n", "2"), ("c", "0"), ("d", "0")), 3),
        (FunctionType.SWAPPER, _params(("a", "1")), 0),
        (FunctionType.AUGMENTED, _params(), 4),
    ]
)
def test_wrong_parameter_count(function_type, params, expected):
    with pytest.raises(WrongParameterCount) as exc:
        FunctionParamsValidator.validate(params, function_type)
    assert exc.value.expected == expected
    assert exc.value.actual == len(params)


def test_parameter_missing():
    with pytest.raises(ParameterMissing) as exc:
        FunctionParamsValidator.validate(_params(("m", "1"), ("n", "2"), ("x", "0")), FunctionType.POWER)
    assert exc.value.param == "c"


def test_duplicate_names_leave_a_parameter_missing():
    """With the count fixed, a duplicate always displaces a required name."""
    with pytest.raises(ParameterMissing) as exc:
        FunctionParamsValidator.validate(_params(("m", "1"), ("m", "2"), ("c", "0")), FunctionType.POWER)
    assert exc.value.param == "n"


@pytest.mark.parametrize(
    "function_type, params, argument",
    [
        (FunctionType.POWER, _params(("m", "-1"), ("n", "2"), ("c", "0")), "FunctionParams:m"),
        (FunctionType.SIGMOID, _params(("a", "1"), ("b", "-0.5"), ("c", "1")), "FunctionParams:b"),
        (FunctionType.AUGMENTED, _params(("d0", "1"), ("p0", "1"), ("theta", "1"), ("kappa", "-2")), "FunctionParams:kappa"),
    ]
)
def test_negative_argument(function_type, params, argument):
    with pytest.raises(NegativeArgument) as exc:
        FunctionParamsValidator.validate(params, function_type)
    assert exc.value.argument == argument


def test_power_n_must_be_integer():
    """{m:1, n:1.5, c:0} fails on n."""
    with pytest.raises(ArgumentMustBeInteger) as exc:
        FunctionParamsValidator.validate(_params(("m", "1"), ("n", "1.5"), ("c", "0")), FunctionType.POWER)
    assert exc.value.argument == "FunctionParams:n"


def test_sigmoid_c_must_be_positive():
    with pytest.raises(ArgumentMustBePositive) as exc:
        FunctionParamsValidator.validate(_params(("a", "1"), ("b", "1"), ("c", "0")), FunctionType.SIGMOID)
    assert exc.value.argument == "FunctionParams:c"


def test_negative_checked_before_restrictions():
    """A negative non-integral n reports the sign first."""
    with pytest.raises(NegativeArgument):
        FunctionParamsValidator.validate(_params(("m", "1"), ("n", "-1.5"), ("c", "0")), FunctionType.POWER)
