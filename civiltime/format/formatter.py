"""Rendering values through a format description."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol, Union

from civiltime.errors import FormatError, FormatErrorKind
from civiltime.format.description import (
    Component,
    FormatDescription,
    Literal,
    Padding,
    Requires,
    compile_format,
)

if TYPE_CHECKING:
    from civiltime.core.date import Date
    from civiltime.core.datetime import PrimitiveDateTime
    from civiltime.core.offset_datetime import OffsetDateTime
    from civiltime.core.time import Time
    from civiltime.units.offset import UtcOffset

logger = logging.getLogger(__name__)

Formattable = Union["Date", "Time", "PrimitiveDateTime", "OffsetDateTime", "UtcOffset"]

WEEKDAY_NAMES: tuple[str, ...] = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

MONTH_NAMES: tuple[str, ...] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


class TextSink(Protocol):
    """Anything with a ``write(str)`` method, such as an open text file."""

    def write(self, text: str, /) -> object: ...


def _parts(value: Formattable) -> tuple[Date | None, Time | None, UtcOffset | None]:
    """Split a value into the date, time and offset it can supply."""
    from civiltime.core.date import Date
    from civiltime.core.datetime import PrimitiveDateTime
    from civiltime.core.offset_datetime import OffsetDateTime
    from civiltime.core.time import Time
    from civiltime.units.offset import UtcOffset

    if isinstance(value, OffsetDateTime):
        return value.date, value.time, value.offset
    if isinstance(value, PrimitiveDateTime):
        return value.date, value.time, None
    if isinstance(value, Date):
        return value, None, None
    if isinstance(value, Time):
        return None, value, None
    if isinstance(value, UtcOffset):
        return None, None, value
    raise TypeError(f"cannot format {type(value).__name__}")


def _pad(value: int, width: int, padding: Padding, negative: bool | None = None) -> str:
    """Pad the digits of ``value`` to ``width``; a minus sign is never counted.

    ``negative`` overrides the sign of ``value``, for a century of 0 in a
    negative year.
    """
    digits = str(abs(value))
    sign = "-" if (value < 0 if negative is None else negative) else ""
    if padding is Padding.ZERO:
        return sign + digits.zfill(width)
    if padding is Padding.SPACE:
        return " " * (width - len(digits)) + sign + digits
    return sign + digits


def format_offset(offset: UtcOffset) -> str:
    """Render an offset as ±HH:MM, adding :SS when the seconds are non-zero.

    Examples:
        >>> from civiltime.units.offset import UtcOffset
        >>> format_offset(UtcOffset.from_hms(-4, -30, 0))
        '-04:30'
        >>> format_offset(UtcOffset.from_hms(0, 0, 15))
        '+00:00:15'
    """
    hours, minutes, seconds = offset.as_hms()
    sign = "-" if offset.is_negative else "+"
    text = f"{sign}{abs(hours):02d}:{abs(minutes):02d}"
    if seconds:
        text += f":{abs(seconds):02d}"
    return text


def format_fraction(nanosecond: int) -> str:
    """Render a fractional second with the fewest digits, at least one."""
    return f"{nanosecond:09d}".rstrip("0") or "0"


def _render(
    component: Component,
    date: Date | None,
    time: Time | None,
    offset: UtcOffset | None,
) -> str:
    char = component.specifier.char
    width = component.specifier.width
    padding = component.padding

    if date is not None:
        if char == "a":
            return WEEKDAY_NAMES[date.weekday.value - 1][:3]
        if char == "A":
            return WEEKDAY_NAMES[date.weekday.value - 1]
        if char == "b":
            return MONTH_NAMES[date.month - 1][:3]
        if char == "B":
            return MONTH_NAMES[date.month - 1]
        if char == "C":
            return _pad(abs(date.year) // 100, width, padding, negative=date.year < 0)
        if char == "d":
            return _pad(date.day, width, padding)
        if char == "g":
            return _pad(abs(date.iso_year_week()[0]) % 100, width, padding)
        if char == "G":
            return _pad(date.iso_year_week()[0], width, padding)
        if char == "j":
            return _pad(date.ordinal, width, padding)
        if char == "m":
            return _pad(date.month, width, padding)
        if char == "u":
            return _pad(date.weekday.number_from_monday(), width, padding)
        if char == "U":
            return _pad(date.sunday_based_week, width, padding)
        if char == "V":
            return _pad(date.iso_week, width, padding)
        if char == "w":
            return _pad(date.weekday.number_days_from_sunday(), width, padding)
        if char == "W":
            return _pad(date.monday_based_week, width, padding)
        if char == "y":
            return _pad(abs(date.year) % 100, width, padding)
        if char == "Y":
            return _pad(date.year, width, padding)

    if time is not None:
        if char == "H":
            return _pad(time.hour, width, padding)
        if char == "I":
            return _pad(time.hour % 12 or 12, width, padding)
        if char == "M":
            return _pad(time.minute, width, padding)
        if char == "S":
            return _pad(time.second, width, padding)
        if char == "N":
            return format_fraction(time.nanosecond)
        if char == "p":
            return "am" if time.hour < 12 else "pm"
        if char == "P":
            return "AM" if time.hour < 12 else "PM"

    if offset is not None and char == "z":
        return format_offset(offset)

    raise FormatError(FormatErrorKind.INSUFFICIENT_TYPE_INFORMATION)


def format(value: Formattable, fmt: str | FormatDescription) -> str:
    """Format a value with a format description.

    Args:
        value: A Date, Time, PrimitiveDateTime, OffsetDateTime or UtcOffset.
        fmt: A format description string, or a compiled FormatDescription.

    Returns:
        The formatted text.

    Raises:
        ParseError: If ``fmt`` is not a valid format description.
        FormatError: INSUFFICIENT_TYPE_INFORMATION if ``fmt`` asks for a
            component the value's type does not have.

    Examples:
        >>> from civiltime import Date, Time, PrimitiveDateTime
        >>> format(Date(2019, 12, 30), "%G-W%V-%u")
        '2020-W01-1'

        >>> format(Time(13, 5, 0, 500_000_000), "%-I:%M:%S.%N %P")
        '1:05:00.5 PM'

        >>> format(PrimitiveDateTime(Date(2020, 1, 1), Time(0, 0)), "%F %z")
        Traceback (most recent call last):
        ...
        civiltime.errors.FormatError: The format provided requires more information than the type provides.
    """
    description = compile_format(fmt)
    date, time, offset = _parts(value)

    available = set()
    if date is not None:
        available.add(Requires.DATE)
    if time is not None:
        available.add(Requires.TIME)
    if offset is not None:
        available.add(Requires.OFFSET)
    if not description.requires <= available:
        raise FormatError(FormatErrorKind.INSUFFICIENT_TYPE_INFORMATION)

    pieces = []
    for item in description.items:
        if isinstance(item, Literal):
            pieces.append(item.text)
        else:
            pieces.append(_render(item, date, time, offset))
    return "".join(pieces)


def format_into(sink: TextSink, value: Formattable, fmt: str | FormatDescription) -> int:
    """Format a value and write the text to ``sink``.

    The text is rendered in full before anything is written, so a format
    mismatch leaves the sink untouched.

    Args:
        sink: An object with a ``write(str)`` method.
        value: The value to format.
        fmt: A format description string, or a compiled FormatDescription.

    Returns:
        The number of characters written.

    Raises:
        FormatError: INSUFFICIENT_TYPE_INFORMATION as for ``format``, or
            STD_FMT_ERROR if the sink raises. The sink's exception is
            chained as the cause.
    """
    text = format(value, fmt)
    try:
        sink.write(text)
    except Exception as exc:
        logger.debug("Format sink %r failed: %s", sink, exc)
        raise FormatError(FormatErrorKind.STD_FMT_ERROR) from exc
    return len(text)


__all__ = [
    "WEEKDAY_NAMES",
    "MONTH_NAMES",
    "TextSink",
    "format",
    "format_into",
    "format_offset",
    "format_fraction",
]
