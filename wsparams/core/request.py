"""Typed access to the parameters of a web service request.

``Request`` declares the raw accessors and derives every typed accessor
from them. ``ValidatingRequest`` implements the raw accessors against the
definition of the action being served: undeclared keys are rejected,
deprecated keys and default values are resolved, and values are checked
against the declared possible values before any conversion.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime
from enum import Enum
from io import BytesIO
from typing import BinaryIO, Self, TypeVar

from wsparams.core import coercion, dates
from wsparams.core.errors import (
    DateFormatError,
    InvalidValueError,
    MissingParamError,
    TypeCoercionError,
    UndefinedParamError,
)
from wsparams.core.logger import LogIcon, logger
from wsparams.core.settings import settings
from wsparams.models.core import Part
from wsparams.models.definition import Action, Param

E = TypeVar("E", bound=Enum)


class Request(ABC):
    """Parameters of an inbound request, with typed and mandatory accessors."""

    @property
    @abstractmethod
    def method(self) -> str:
        """HTTP method, for example ``GET``."""

    @property
    @abstractmethod
    def media_type(self) -> str:
        """Media type expected by the client."""

    @property
    @abstractmethod
    def path(self) -> str | None: ...

    @abstractmethod
    def has_param(self, key: str) -> bool:
        """True if the request holds a value under exactly this key."""

    @abstractmethod
    def param(self, key: str) -> str | None:
        """Trimmed value of the parameter, its default value, or None."""

    @abstractmethod
    def multi_param(self, key: str) -> list[str]:
        """All values of a repeated parameter, empty when absent."""

    @abstractmethod
    def param_as_strings(self, key: str) -> list[str] | None:
        """Comma separated values of the parameter, None when absent."""

    @abstractmethod
    def param_as_enums(self, key: str, enum_cls: type[E]) -> set[E] | None: ...

    @abstractmethod
    def param_as_input_stream(self, key: str) -> BinaryIO | None: ...

    @abstractmethod
    def param_as_part(self, key: str) -> Part | None: ...

    def mandatory_param(self, key: str) -> str:
        value = self.param(key)
        if value is None:
            raise MissingParamError(key)
        return value

    def mandatory_param_as_boolean(self, key: str) -> bool:
        return coercion.parse_boolean(key, self.mandatory_param(key))

    def mandatory_param_as_int(self, key: str) -> int:
        return coercion.parse_int(key, self.mandatory_param(key))

    def mandatory_param_as_long(self, key: str) -> int:
        return coercion.parse_long(key, self.mandatory_param(key))

    def mandatory_param_as_enum(self, key: str, enum_cls: type[E]) -> E:
        return coercion.parse_enum(key, self.mandatory_param(key), enum_cls)

    def mandatory_param_as_strings(self, key: str) -> list[str]:
        values = self.param_as_strings(key)
        if values is None:
            raise MissingParamError(key)
        return values

    def mandatory_multi_param(self, key: str) -> list[str]:
        values = self.multi_param(key)
        if not values:
            raise MissingParamError(key)
        return values

    def mandatory_param_as_date(self, key: str) -> date:
        return self._to_date(key, self.mandatory_param(key))

    def mandatory_param_as_datetime(self, key: str) -> datetime:
        return self._to_datetime(key, self.mandatory_param(key))

    def mandatory_param_as_part(self, key: str) -> Part:
        part = self.param_as_part(key)
        if part is None:
            raise MissingParamError(key)
        return part

    def param_as_boolean(self, key: str) -> bool | None:
        value = self.param(key)
        return None if value is None else coercion.parse_boolean(key, value)

    def param_as_int(self, key: str, default: int | None = None) -> int | None:
        """Integer value of the parameter.

        ``default`` applies only when neither the request nor the parameter
        definition provides a value.
        """
        value = self.param(key)
        return default if value is None else coercion.parse_int(key, value)

    def param_as_long(self, key: str, default: int | None = None) -> int | None:
        value = self.param(key)
        return default if value is None else coercion.parse_long(key, value)

    def param_as_enum(self, key: str, enum_cls: type[E]) -> E | None:
        value = self.param(key)
        return None if value is None else coercion.parse_enum(key, value, enum_cls)

    def param_as_date(self, key: str) -> date | None:
        value = self.param(key)
        return None if value is None else self._to_date(key, value)

    def param_as_datetime(self, key: str) -> datetime | None:
        """Aware datetime of the parameter.

        A date without time is read as midnight in the configured timezone.
        """
        value = self.param(key)
        return None if value is None else self._to_datetime(key, value)

    @staticmethod
    def _to_date(key: str, value: str) -> date:
        try:
            return dates.parse_date(value)
        except DateFormatError as ex:
            raise TypeCoercionError(key, str(ex)) from ex

    @staticmethod
    def _to_datetime(key: str, value: str) -> datetime:
        try:
            return dates.parse_date_or_datetime(value, settings.timezone)
        except DateFormatError as ex:
            raise TypeCoercionError(key, str(ex)) from ex


class ValidatingRequest(Request):
    """Request whose parameters are resolved against an action definition.

    Subclasses provide the raw stores through ``_read_param``,
    ``_read_multi_param`` and ``_read_part``.
    """

    def __init__(self, action: Action | None = None) -> None:
        self._action = action

    @property
    def action(self) -> Action | None:
        return self._action

    def set_action(self, action: Action) -> Self:
        """Bind the action definition. Returns self for chaining."""
        self._action = action
        return self

    @abstractmethod
    def _read_param(self, key: str) -> str | None: ...

    @abstractmethod
    def _read_multi_param(self, key: str) -> list[str]: ...

    @abstractmethod
    def _read_part(self, key: str) -> Part | None: ...

    def _read_input_stream_param(self, key: str) -> BinaryIO | None:
        value = self._read_param(key)
        return None if value is None else BytesIO(value.encode(settings.INPUT_STREAM_ENCODING))

    def param(self, key: str) -> str | None:
        definition = self._definition(key)
        value = self._resolve(key, definition)
        if value is None:
            return None
        value = value.strip()
        self._validate_value(value, definition)
        return value

    def multi_param(self, key: str) -> list[str]:
        definition = self._definition(key)
        values = self._read_multi_param(key)
        if not values and definition.deprecated_key is not None:
            values = self._read_multi_param(definition.deprecated_key)
            if values:
                self._log_deprecated_key(definition)
        if not values and definition.default_value is not None:
            values = [definition.default_value]
        values = list(values)
        for value in values:
            self._validate_value(value, definition)
        return values

    def param_as_strings(self, key: str) -> list[str] | None:
        definition = self._definition(key)
        value = self._resolve(key, definition)
        if value is None:
            return None
        values = coercion.split_values(value)
        for token in values:
            self._validate_value(token, definition)
        return values

    def param_as_enums(self, key: str, enum_cls: type[E]) -> set[E] | None:
        values = self.param_as_strings(key)
        if values is None:
            return None
        return {coercion.parse_enum(key, value, enum_cls) for value in values}

    def param_as_input_stream(self, key: str) -> BinaryIO | None:
        return self._read_input_stream_param(key)

    def param_as_part(self, key: str) -> Part | None:
        return self._read_part(key)

    def _definition(self, key: str) -> Param:
        if self._action is None:
            raise UndefinedParamError(key, None)
        definition = self._action.param(key)
        if definition is None:
            raise UndefinedParamError(key, self._action.key)
        return definition

    def _resolve(self, key: str, definition: Param) -> str | None:
        """Raw value under the key, then under its deprecated key, then the default value."""
        value = self._read_param(key)
        if value is None and definition.deprecated_key is not None:
            value = self._read_param(definition.deprecated_key)
            if value is not None:
                self._log_deprecated_key(definition)
        if value is None:
            value = definition.default_value
        return value

    def _log_deprecated_key(self, definition: Param) -> None:
        logger.info(
            "Deprecated parameter key used",
            icon=LogIcon.DEPRECATION,
            key=definition.key,
            deprecated_key=definition.deprecated_key,
            action=self._action.key if self._action else None,
        )

    @staticmethod
    def _validate_value(value: str, definition: Param) -> None:
        possible_values = definition.possible_values
        if possible_values is not None and value not in possible_values:
            raise InvalidValueError(definition.key, value, possible_values)
