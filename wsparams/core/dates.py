"""Strict parsing and formatting of the date formats accepted by web services.

Dates use ``yyyy-MM-dd``. Datetimes use ``yyyy-MM-dd'T'HH:mm:ssZ`` where the
offset is written in RFC 822 form (``+0100``).
"""

import re
from datetime import date, datetime, time, tzinfo

from beartype import beartype

from wsparams.core.errors import DateFormatError

DATE_FORMAT = "yyyy-MM-dd"
DATETIME_FORMAT = "yyyy-MM-dd'T'HH:mm:ssZ"

_DATE_PATTERN = "%Y-%m-%d"
_DATETIME_PATTERN = "%Y-%m-%dT%H:%M:%S%z"

_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)
_DATETIME_RE = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}[+-]\d{4}", re.ASCII)


@beartype
def parse_date(value: str) -> date:
    """Parse a ``yyyy-MM-dd`` date. Calendar-invalid dates are rejected."""
    message = f"The date '{value}' does not respect format '{DATE_FORMAT}'"
    if not _DATE_RE.fullmatch(value):
        raise DateFormatError(message)
    try:
        return datetime.strptime(value, _DATE_PATTERN).date()
    except ValueError as ex:
        raise DateFormatError(message) from ex


@beartype
def parse_datetime(value: str) -> datetime:
    """Parse a ``yyyy-MM-dd'T'HH:mm:ssZ`` datetime into an aware datetime."""
    message = f"The datetime '{value}' does not respect format '{DATETIME_FORMAT}'"
    if not _DATETIME_RE.fullmatch(value):
        raise DateFormatError(message)
    try:
        return datetime.strptime(value, _DATETIME_PATTERN)
    except ValueError as ex:
        raise DateFormatError(message) from ex


@beartype
def parse_date_or_datetime(value: str, tz: tzinfo) -> datetime:
    """Parse a datetime, falling back to a date at midnight in ``tz``."""
    try:
        return parse_datetime(value)
    except DateFormatError:
        pass
    try:
        return datetime.combine(parse_date(value), time.min, tzinfo=tz)
    except DateFormatError as ex:
        raise DateFormatError(f"'{value}' cannot be parsed as either a date or date+time") from ex


def format_date(value: date) -> str:
    return value.strftime(_DATE_PATTERN)


def format_datetime(value: datetime) -> str:
    """Format an aware datetime. Naive datetimes have no offset to render."""
    if value.tzinfo is None or value.utcoffset() is None:
        raise DateFormatError(f"Datetime '{value.isoformat()}' has no timezone offset")
    return value.strftime(_DATETIME_PATTERN)
