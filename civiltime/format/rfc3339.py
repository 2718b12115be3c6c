"""RFC 3339 formatting and parsing.

RFC 3339 is a profile of ISO 8601 for timestamps in internet protocols.
Key differences from the general format descriptions:

1. Date and time must be separated by 'T' (either case)
2. An offset is required
3. The offset must be 'Z' or '+/-HH:MM'; offsets with seconds cannot be
   written
4. The year must be 0000 through 9999
5. Fractional seconds are optional

Functions:
    parse_rfc3339: Parse an RFC 3339 string into an OffsetDateTime.
    format_rfc3339: Format an OffsetDateTime as an RFC 3339 string.

Examples:
    >>> dt = parse_rfc3339("2024-01-15T14:30:45Z")
    >>> dt.year
    2024

    >>> format_rfc3339(dt)
    '2024-01-15T14:30:45Z'
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from civiltime._internal.rules import (
    NANOS_PER_MICROSECOND,
    NANOS_PER_MILLISECOND,
)
from civiltime._internal.validation import validate_range
from civiltime.errors import ComponentRange, ParseError, ParseErrorKind
from civiltime.format.formatter import format_fraction
from civiltime.format.parser import Cursor, read_fraction

if TYPE_CHECKING:
    from civiltime.core.offset_datetime import OffsetDateTime

_PRECISIONS = ("auto", "seconds", "millis", "micros", "nanos")


def parse_rfc3339(text: str) -> OffsetDateTime:
    """Parse an RFC 3339 timestamp.

    Args:
        text: The RFC 3339 string, e.g. "2024-01-15T14:30:45.5+05:30".

    Returns:
        The parsed OffsetDateTime, at the offset given in the text.

    Raises:
        ParseError: If the text is not RFC 3339, or a component is out of
            range (COMPONENT_OUT_OF_RANGE).

    Examples:
        >>> parse_rfc3339("2024-01-15T14:30:45.123456789Z").nanosecond
        123456789

        >>> parse_rfc3339("2024-01-15T14:30:45+05:30").offset
        UtcOffset(5, 30, 0)

        >>> parse_rfc3339("2024-01-15 14:30:45Z")
        Traceback (most recent call last):
        ...
        civiltime.errors.ParseError: Unexpected character. Expected `T`, found ` `.
    """
    from civiltime.core.date import Date
    from civiltime.core.datetime import PrimitiveDateTime
    from civiltime.core.offset_datetime import OffsetDateTime
    from civiltime.core.time import Time
    from civiltime.units.offset import UtcOffset

    cursor = Cursor(text)
    year = int(cursor.digits(4, 4, ParseErrorKind.INVALID_YEAR))
    cursor.expect("-")
    month = int(cursor.digits(2, 2, ParseErrorKind.INVALID_MONTH))
    cursor.expect("-")
    day = int(cursor.digits(2, 2, ParseErrorKind.INVALID_DAY_OF_MONTH))
    cursor.expect_any("Tt")
    hour = int(cursor.digits(2, 2, ParseErrorKind.INVALID_HOUR))
    cursor.expect(":")
    minute = int(cursor.digits(2, 2, ParseErrorKind.INVALID_MINUTE))
    cursor.expect(":")
    second = int(cursor.digits(2, 2, ParseErrorKind.INVALID_SECOND))
    nanosecond = 0
    if cursor.peek() == ".":
        cursor.pos += 1
        nanosecond = read_fraction(cursor)

    if cursor.at_end():
        raise ParseError(ParseErrorKind.UNEXPECTED_END_OF_STRING)
    if cursor.peek() in ("Z", "z"):
        cursor.pos += 1
        offset_parts = (0, 0)
    else:
        sign_char = cursor.expect_any("+-")
        sign = -1 if sign_char == "-" else 1
        offset_hours = int(cursor.digits(2, 2, ParseErrorKind.INVALID_OFFSET))
        cursor.expect(":")
        offset_minutes = int(cursor.digits(2, 2, ParseErrorKind.INVALID_OFFSET))
        offset_parts = (sign * offset_hours, sign * offset_minutes)
    cursor.finish()

    try:
        local = PrimitiveDateTime(
            Date(year, month, day),
            Time(hour, minute, second, nanosecond),
        )
        offset = UtcOffset.from_hms(*offset_parts, 0)
    except ComponentRange as exc:
        raise ParseError.component_out_of_range(exc) from exc
    return OffsetDateTime(local, offset)


def format_rfc3339(value: OffsetDateTime, *, precision: str = "auto") -> str:
    """Format an OffsetDateTime as an RFC 3339 string.

    Args:
        value: The OffsetDateTime to format.
        precision: Subsecond precision:
            - "auto": Include subseconds only if non-zero, minimal digits
            - "seconds": No subseconds
            - "millis": Always 3 decimal places
            - "micros": Always 6 decimal places
            - "nanos": Always 9 decimal places

    Returns:
        RFC 3339 formatted string. A zero offset is written as "Z".

    Raises:
        ValueError: If ``precision`` is not one of the names above.
        ComponentRange: If the year is negative or the offset has a
            seconds component, neither of which RFC 3339 can express.

    Examples:
        >>> from civiltime import Date, Time, UtcOffset
        >>> dt = Date(2024, 1, 15).with_time(Time(14, 30, 45, 123_000_000))
        >>> format_rfc3339(dt.assume_utc(), precision="millis")
        '2024-01-15T14:30:45.123Z'

        >>> format_rfc3339(dt.assume_offset(UtcOffset.from_hms(-8, 0, 0)), precision="seconds")
        '2024-01-15T14:30:45-08:00'
    """
    from civiltime.core.offset_datetime import OffsetDateTime

    if not isinstance(value, OffsetDateTime):
        raise TypeError(f"expected OffsetDateTime, got {type(value).__name__}")
    if precision not in _PRECISIONS:
        raise ValueError(f"precision must be one of {', '.join(_PRECISIONS)}, got {precision!r}")

    validate_range("year", value.year, bounds=(0, 9999))
    hours, minutes, seconds = value.offset.as_hms()
    validate_range("seconds", seconds, (("hours", hours), ("minutes", minutes)), bounds=(0, 0))

    text = (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    )

    nanos = value.nanosecond
    if precision == "auto":
        if nanos:
            text += "." + format_fraction(nanos)
    elif precision == "millis":
        text += f".{nanos // NANOS_PER_MILLISECOND:03d}"
    elif precision == "micros":
        text += f".{nanos // NANOS_PER_MICROSECOND:06d}"
    elif precision == "nanos":
        text += f".{nanos:09d}"

    if value.offset.is_utc:
        return text + "Z"
    sign = "-" if value.offset.is_negative else "+"
    return text + f"{sign}{abs(hours):02d}:{abs(minutes):02d}"


__all__ = ["parse_rfc3339", "format_rfc3339"]
