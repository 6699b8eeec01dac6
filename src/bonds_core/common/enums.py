from enum import Enum


class FunctionType(Enum):
    POWER = "power_function"
    SIGMOID = "sigmoid_function"
    SWAPPER = "swapper_function"
    AUGMENTED = "augmented_function"

    @classmethod
    def from_str(cls, type_str: str) -> "FunctionType":
        """
        Convert a string to a FunctionType enum.
        Accepts either the wire value ("power_function") or the name ("POWER"), in any case.
        :param type_str: str
        :return: FunctionType or NotImplementedError
        """
        normalized = type_str.strip().lower()
        for function_type in cls:
            if normalized in (function_type.value, function_type.name.lower()):
                return function_type
        raise NotImplementedError(f"No function type enum for {type_str}")

    def __hash__(self):
        return hash(self.value)

    def __str__(self):
        return self.name

    def __repr__(self):
        return self.__str__()


class AllowSells(Enum):
    TRUE = "true"
    FALSE = "false"

    @classmethod
    def from_str(cls, flag_str):
        if flag_str.lower() == AllowSells.TRUE.value:
            return AllowSells.TRUE
        elif flag_str.lower() == AllowSells.FALSE.value:
            return AllowSells.FALSE
        else:
            raise NotImplementedError(f"No allow sells enum for {flag_str}")

    def __bool__(self):
        return self is AllowSells.TRUE

    def __str__(self):
        return self.value

    def __repr__(self):
        return self.__str__()
