from bonds_core.common.enums import FunctionType
from bonds_core.common.errors import NegativeArgument, ParameterMissing, WrongParameterCount
from bonds_core.common.math import ZERO
from bonds_core.common.model import FunctionParams
from bonds_core.curves.registry import get_function


class FunctionParamsValidator:
    """
    Validates a FunctionParams set against the schema of a function type:
      1) parameter count matches the required names
      2) every required name is present and non-negative
      3) the family's extra restrictions hold (power: integral n, sigmoid: positive c)

    Raises the first failure as a BondsError subclass; returns None when valid.
    """

    @staticmethod
    def validate(params: FunctionParams, function_type: FunctionType) -> None:
        function = get_function(function_type)
        expected = function.required_params

        if len(params) != len(expected):
            raise WrongParameterCount(len(expected), len(params))

        # With the count fixed, a duplicated name always leaves some required name missing.
        params_map = FunctionParams(params).as_map()
        for name in expected:
            if name not in params_map:
                raise ParameterMissing(name)
            if params_map[name] < ZERO:
                raise NegativeArgument(f"FunctionParams:{name}")

        function.check_restrictions(params_map)
