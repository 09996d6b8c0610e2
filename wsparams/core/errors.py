"""Faults raised while defining web services and reading their parameters."""

from collections.abc import Iterable

MSG_PARAMETER_MISSING = "The '{key}' parameter is missing"


class DefinitionError(ValueError):
    """Invalid web service, action or parameter definition."""


class DateFormatError(ValueError):
    """Value does not match the expected date or datetime format."""


class ParamError(ValueError):
    """Base class for parameter access failures."""

    def __init__(self, key: str, message: str) -> None:
        super().__init__(message)
        self.key = key
        self.message = message


class UndefinedParamError(ParamError):
    """The parameter is not declared on the bound action. This is a bug in the caller."""

    def __init__(self, key: str, action_key: str | None) -> None:
        if action_key is None:
            message = f"BUG - parameter '{key}' is undefined, no action is bound to the request"
        else:
            message = f"BUG - parameter '{key}' is undefined for action '{action_key}'"
        super().__init__(key, message)
        self.action_key = action_key


class ParamValidationError(ParamError):
    """The value supplied by the client is missing or invalid."""

    status_code: int = 400


class MissingParamError(ParamValidationError):
    def __init__(self, key: str) -> None:
        super().__init__(key, MSG_PARAMETER_MISSING.format(key=key))


class InvalidValueError(ParamValidationError):
    """Value is not one of the declared possible values."""

    def __init__(self, key: str, value: str, possible_values: Iterable[str]) -> None:
        self.value = value
        self.possible_values = tuple(possible_values)
        allowed = ", ".join(self.possible_values)
        super().__init__(key, f"Value of parameter '{key}' ({value}) must be one of: [{allowed}]")


class TypeCoercionError(ParamValidationError):
    """Value cannot be converted to the requested type."""
