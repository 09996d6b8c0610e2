"""Conversions from trimmed parameter strings to typed values."""

import re
from enum import Enum
from typing import TypeVar

from beartype import beartype

from wsparams.core.errors import TypeCoercionError

E = TypeVar("E", bound=Enum)

TRUE_VALUES = frozenset({"true", "yes"})
FALSE_VALUES = frozenset({"false", "no"})
BOOLEAN_POSSIBLE_VALUES = ("true", "false", "yes", "no")

INT_MIN, INT_MAX = -(2**31), 2**31 - 1
LONG_MIN, LONG_MAX = -(2**63), 2**63 - 1

LIST_SEPARATOR = ","

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


@beartype
def parse_boolean(key: str, value: str) -> bool:
    lowered = value.lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    raise TypeCoercionError(key, f"Property {key} is not a boolean value: {value}")


def _parse_integer(key: str, value: str, low: int, high: int, kind: str) -> int:
    message = f"The '{key}' parameter cannot be parsed as {kind} value: {value}"
    if not _INTEGER_RE.fullmatch(value):
        raise TypeCoercionError(key, message)
    number = int(value)
    if not low <= number <= high:
        raise TypeCoercionError(key, message)
    return number


@beartype
def parse_int(key: str, value: str) -> int:
    """Parse a signed 32-bit decimal integer."""
    return _parse_integer(key, value, INT_MIN, INT_MAX, "an integer")


@beartype
def parse_long(key: str, value: str) -> int:
    """Parse a signed 64-bit decimal integer."""
    return _parse_integer(key, value, LONG_MIN, LONG_MAX, "a long")


@beartype
def parse_enum(key: str, value: str, enum_cls: type[E]) -> E:
    """Look up an enum member by its exact name."""
    try:
        return enum_cls[value]
    except KeyError as ex:
        raise TypeCoercionError(key, f"'{value}' is not a valid {enum_cls.__name__}") from ex


@beartype
def split_values(value: str) -> list[str]:
    """Split a comma separated value, trimming tokens and dropping empty ones."""
    return [token for token in (part.strip() for part in value.split(LIST_SEPARATOR)) if token]
