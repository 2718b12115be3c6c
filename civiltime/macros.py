"""Literal helpers for writing fixed dates, times and durations in code.

Each helper takes a single string literal in the grammar of
civiltime.literals.grammar and returns the runtime value:

    >>> from civiltime import macros
    >>> macros.date("2020-W01-1")
    Date(2019, 12, 30)
    >>> macros.duration("1.5h")
    Duration(seconds=5400, nanoseconds=0)

The ``civiltime-literals`` tool validates these calls before the program
runs (``check``) and can rewrite them into direct constructor calls
(``expand``). Code that has not been expanded still works: the helpers
parse the literal with the same grammar at call time.
"""

from __future__ import annotations

from civiltime.core.date import Date
from civiltime.core.datetime import PrimitiveDateTime
from civiltime.core.duration import Duration
from civiltime.core.offset_datetime import OffsetDateTime
from civiltime.core.time import Time
from civiltime.errors import ParseError, ParseErrorKind
from civiltime.literals.grammar import (
    DateLiteral,
    LiteralError,
    OffsetLiteral,
    TimeLiteral,
    parse_date,
    parse_datetime,
    parse_duration,
    parse_offset,
    parse_offset_datetime,
    parse_time,
)
from civiltime.units.offset import UtcOffset

# Literal component names mapped to the parse failure they correspond to.
_COMPONENT_KINDS: dict[str, ParseErrorKind] = {
    "year": ParseErrorKind.INVALID_YEAR,
    "month": ParseErrorKind.INVALID_MONTH,
    "day": ParseErrorKind.INVALID_DAY_OF_MONTH,
    "ordinal": ParseErrorKind.INVALID_DAY_OF_YEAR,
    "week": ParseErrorKind.INVALID_WEEK,
    "weekday": ParseErrorKind.INVALID_DAY_OF_WEEK,
    "hour": ParseErrorKind.INVALID_HOUR,
    "minute": ParseErrorKind.INVALID_MINUTE,
    "second": ParseErrorKind.INVALID_SECOND,
    "nanosecond": ParseErrorKind.INVALID_NANOSECOND,
    "offset": ParseErrorKind.INVALID_OFFSET,
    "hours": ParseErrorKind.INVALID_OFFSET,
    "minutes": ParseErrorKind.INVALID_OFFSET,
    "seconds": ParseErrorKind.INVALID_OFFSET,
}


def _parse_error(error: LiteralError) -> ParseError:
    if error.component == "literal":
        return ParseError(ParseErrorKind.UNEXPECTED_CHARACTER, actual=error.found)
    kind = _COMPONENT_KINDS.get(error.component, ParseErrorKind.INSUFFICIENT_INFORMATION)
    return ParseError(kind)


def _date(value: DateLiteral) -> Date:
    return Date(value.year, value.month, value.day)


def _time(value: TimeLiteral) -> Time:
    return Time(value.hour, value.minute, value.second, value.nanosecond)


def _offset(value: OffsetLiteral) -> UtcOffset:
    return UtcOffset(value.hours, value.minutes, value.seconds)


def date(literal: str) -> Date:
    """Return the Date written as ``literal``.

    Accepts calendar (2020-02-29), ordinal (2020-060) and ISO week
    (2020-W09-6) forms.

    Raises:
        ParseError: If the literal is invalid. The LiteralError naming the
            failing component is chained as the cause.
    """
    try:
        return _date(parse_date(literal))
    except LiteralError as exc:
        raise _parse_error(exc) from exc


def time(literal: str) -> Time:
    """Return the Time written as ``literal``, e.g. "13:30" or "1:30 pm"."""
    try:
        return _time(parse_time(literal))
    except LiteralError as exc:
        raise _parse_error(exc) from exc


def offset(literal: str) -> UtcOffset:
    """Return the UtcOffset written as ``literal``, e.g. "UTC" or "-04:30"."""
    try:
        return _offset(parse_offset(literal))
    except LiteralError as exc:
        raise _parse_error(exc) from exc


def datetime(literal: str) -> PrimitiveDateTime:
    """Return the PrimitiveDateTime written as ``literal``."""
    try:
        value = parse_datetime(literal)
    except LiteralError as exc:
        raise _parse_error(exc) from exc
    return PrimitiveDateTime(_date(value.date), _time(value.time))


def offset_datetime(literal: str) -> OffsetDateTime:
    """Return the OffsetDateTime written as ``literal``.

    Examples:
        >>> offset_datetime("2020-01-01 0:00 UTC").unix_timestamp
        1577836800
    """
    try:
        value = parse_offset_datetime(literal)
    except LiteralError as exc:
        raise _parse_error(exc) from exc
    local = PrimitiveDateTime(_date(value.date), _time(value.time))
    return OffsetDateTime(local, _offset(value.offset))


def duration(literal: str) -> Duration:
    """Return the Duration written as ``literal``, e.g. "90s" or "-1.5d"."""
    try:
        value = parse_duration(literal)
    except LiteralError as exc:
        raise _parse_error(exc) from exc
    return Duration(value.seconds, value.nanoseconds)


__all__ = ["date", "time", "offset", "datetime", "offset_datetime", "duration"]
