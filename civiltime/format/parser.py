"""Parsing text through a format description.

Parsing is a single left-to-right pass over the compiled items with no
backtracking. Each numeric component consumes at most its width in
digits; ``%N`` consumes up to nine. The first mismatch raises. Once the
whole input is consumed, the collected components are resolved into the
requested type through the same validated constructors used everywhere
else, so an out-of-range component surfaces as the constructor's
ComponentRange wrapped in a ParseError. Components read beyond those the
value was built from must agree with it: `Mon 2020-01-01` under `%a %F`
fails with INVALID_DAY_OF_WEEK instead of yielding a Wednesday.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

from civiltime._internal.validation import validate_range
from civiltime.errors import ComponentRange, ParseError, ParseErrorKind
from civiltime.format.description import (
    Component,
    FormatDescription,
    Literal,
    Padding,
    compile_format,
)
from civiltime.format.formatter import MONTH_NAMES, WEEKDAY_NAMES

if TYPE_CHECKING:
    from civiltime.core.date import Date
    from civiltime.core.time import Time
    from civiltime.units.offset import UtcOffset
    from civiltime.units.weekday import Weekday

T = TypeVar("T")


class Cursor:
    """Read position over the input text.

    Shared by the format parser and the RFC 3339 reader. Failures raise
    ParseError.

    Examples:
        >>> cursor = Cursor("+05:30")
        >>> read_offset(cursor)
        UtcOffset(5, 30, 0)
        >>> cursor.at_end()
        True
    """

    __slots__ = ("text", "pos")

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self) -> str | None:
        return None if self.at_end() else self.text[self.pos]

    def expect(self, expected: str) -> None:
        """Consume ``expected`` exactly, one character at a time."""
        for char in expected:
            if self.at_end():
                raise ParseError(ParseErrorKind.UNEXPECTED_END_OF_STRING)
            actual = self.text[self.pos]
            if actual != char:
                raise ParseError(
                    ParseErrorKind.UNEXPECTED_CHARACTER, expected=char, actual=actual
                )
            self.pos += 1

    def expect_any(self, choices: str) -> str:
        """Consume one character that must be among ``choices``."""
        if self.at_end():
            raise ParseError(ParseErrorKind.UNEXPECTED_END_OF_STRING)
        actual = self.text[self.pos]
        if actual not in choices:
            raise ParseError(
                ParseErrorKind.UNEXPECTED_CHARACTER, expected=choices[0], actual=actual
            )
        self.pos += 1
        return actual

    def digits(self, minimum: int, maximum: int, error: ParseErrorKind) -> str:
        """Consume between ``minimum`` and ``maximum`` ASCII digits."""
        if self.at_end():
            raise ParseError(ParseErrorKind.UNEXPECTED_END_OF_STRING)
        start = self.pos
        while self.pos - start < maximum and not self.at_end() and self.text[self.pos] in "0123456789":
            self.pos += 1
        if self.pos - start < minimum:
            if self.at_end():
                raise ParseError(ParseErrorKind.UNEXPECTED_END_OF_STRING)
            raise ParseError(error)
        return self.text[start : self.pos]

    def choice(self, names: tuple[str, ...], error: ParseErrorKind) -> int:
        """Consume one of ``names`` (case-insensitive) and return its index."""
        if self.at_end():
            raise ParseError(ParseErrorKind.UNEXPECTED_END_OF_STRING)
        rest = self.text[self.pos :].lower()
        for index, name in enumerate(names):
            if rest.startswith(name.lower()):
                self.pos += len(name)
                return index
        raise ParseError(error)

    def finish(self) -> None:
        """Require that the whole input has been consumed."""
        if not self.at_end():
            raise ParseError(ParseErrorKind.UNEXPECTED_CHARACTER, actual=self.text[self.pos])


def _read_number(cursor: Cursor, component: Component) -> int:
    specifier = component.specifier
    width = specifier.width
    negative = False

    if component.padding is Padding.SPACE:
        while width > 1 and cursor.peek() == " ":
            cursor.pos += 1
            width -= 1

    if specifier.signed and cursor.peek() in ("-", "+"):
        negative = cursor.text[cursor.pos] == "-"
        cursor.pos += 1

    value = int(cursor.digits(1, width, specifier.error))
    return -value if negative else value


def read_offset(cursor: Cursor) -> UtcOffset:
    """Read ``±HH:MM`` or ``±HH:MM:SS`` into a UtcOffset.

    Raises:
        ParseError: INVALID_OFFSET on a missing sign or malformed number,
            COMPONENT_OUT_OF_RANGE if a component is out of range.
    """
    from civiltime.units.offset import UtcOffset

    if cursor.at_end():
        raise ParseError(ParseErrorKind.UNEXPECTED_END_OF_STRING)
    sign_char = cursor.peek()
    if sign_char not in ("+", "-"):
        raise ParseError(ParseErrorKind.INVALID_OFFSET)
    cursor.pos += 1
    sign = -1 if sign_char == "-" else 1

    hours = int(cursor.digits(2, 2, ParseErrorKind.INVALID_OFFSET))
    cursor.expect(":")
    minutes = int(cursor.digits(2, 2, ParseErrorKind.INVALID_OFFSET))
    seconds = 0
    if cursor.peek() == ":":
        cursor.pos += 1
        seconds = int(cursor.digits(2, 2, ParseErrorKind.INVALID_OFFSET))

    try:
        return UtcOffset.from_hms(sign * hours, sign * minutes, sign * seconds)
    except ComponentRange as exc:
        raise ParseError.component_out_of_range(exc) from exc


def read_fraction(cursor: Cursor) -> int:
    """Read one to nine fraction digits and return them as nanoseconds."""
    digits = cursor.digits(1, 9, ParseErrorKind.INVALID_NANOSECOND)
    return int(digits.ljust(9, "0"))


def _read_component(cursor: Cursor, component: Component, parsed: dict[str, Any]) -> None:
    char = component.specifier.char
    error = component.specifier.error

    if char in ("a", "A"):
        names = WEEKDAY_NAMES if char == "A" else tuple(name[:3] for name in WEEKDAY_NAMES)
        parsed["weekday"] = cursor.choice(names, error) + 1
    elif char in ("b", "B"):
        names = MONTH_NAMES if char == "B" else tuple(name[:3] for name in MONTH_NAMES)
        parsed["month"] = cursor.choice(names, error) + 1
    elif char in ("p", "P"):
        parsed["pm"] = cursor.choice(("am", "pm"), error) == 1
    elif char == "N":
        parsed["nanosecond"] = read_fraction(cursor)
    elif char == "z":
        parsed["offset"] = read_offset(cursor)
    else:
        if char == "C":
            parsed["century_negative"] = cursor.peek() == "-"
        value = _read_number(cursor, component)
        if char == "u":
            parsed["weekday"] = value
        elif char == "w":
            # Sunday = 0 becomes ISO 7.
            validate_range("weekday", value, bounds=(0, 6))
            parsed["weekday"] = value or 7
        else:
            parsed[_NUMERIC_KEYS[char]] = value


_NUMERIC_KEYS: dict[str, str] = {
    "C": "century",
    "d": "day",
    "g": "iso_year_last_two",
    "G": "iso_year",
    "H": "hour",
    "I": "hour_12",
    "j": "ordinal",
    "m": "month",
    "M": "minute",
    "S": "second",
    "U": "sunday_week",
    "V": "iso_week",
    "W": "monday_week",
    "y": "year_last_two",
    "Y": "year",
}


def _resolve_year(parsed: dict[str, Any]) -> int | None:
    if "year" in parsed:
        return parsed["year"]
    if "century" in parsed and "year_last_two" in parsed:
        magnitude = abs(parsed["century"]) * 100 + parsed["year_last_two"]
        return -magnitude if parsed.get("century_negative") else magnitude
    return None


def _build_date(parsed: dict[str, Any], year: int | None, weekday: Weekday | None) -> Date:
    from civiltime.core.date import Date

    if year is not None and "month" in parsed and "day" in parsed:
        return Date(year, parsed["month"], parsed["day"])
    if year is not None and "ordinal" in parsed:
        return Date.from_ordinal_date(year, parsed["ordinal"])
    if "iso_year" in parsed and "iso_week" in parsed and weekday is not None:
        return Date.from_iso_week_date(parsed["iso_year"], parsed["iso_week"], weekday)
    if year is not None and weekday is not None and "sunday_week" in parsed:
        jan1 = Date.from_ordinal_date(year, 1).weekday.number_days_from_sunday()
        first_sunday = (7 - jan1) % 7 + 1
        ordinal = first_sunday + (parsed["sunday_week"] - 1) * 7 + weekday.number_days_from_sunday()
        return Date.from_ordinal_date(year, ordinal)
    if year is not None and weekday is not None and "monday_week" in parsed:
        jan1 = Date.from_ordinal_date(year, 1).weekday.number_days_from_monday()
        first_monday = (7 - jan1) % 7 + 1
        ordinal = first_monday + (parsed["monday_week"] - 1) * 7 + weekday.number_days_from_monday()
        return Date.from_ordinal_date(year, ordinal)
    raise ParseError(ParseErrorKind.INSUFFICIENT_INFORMATION)


def _check_date(
    parsed: dict[str, Any], date: Date, year: int | None, weekday: Weekday | None
) -> None:
    """Reject components that were read but disagree with ``date``."""
    iso_year, iso_week = date.iso_year_week()
    century_negative = parsed.get("century_negative", False)
    mismatches = (
        (year is not None and year != date.year, ParseErrorKind.INVALID_YEAR),
        (
            "century" in parsed
            and (
                abs(parsed["century"]) != abs(date.year) // 100
                or (century_negative and date.year > 0)
                or (not century_negative and date.year < 0)
            ),
            ParseErrorKind.INVALID_YEAR,
        ),
        (parsed.get("year_last_two", abs(date.year) % 100) != abs(date.year) % 100, ParseErrorKind.INVALID_YEAR),
        (parsed.get("month", date.month) != date.month, ParseErrorKind.INVALID_MONTH),
        (parsed.get("day", date.day) != date.day, ParseErrorKind.INVALID_DAY_OF_MONTH),
        (parsed.get("ordinal", date.ordinal) != date.ordinal, ParseErrorKind.INVALID_DAY_OF_YEAR),
        (weekday is not None and weekday is not date.weekday, ParseErrorKind.INVALID_DAY_OF_WEEK),
        (parsed.get("iso_year", iso_year) != iso_year, ParseErrorKind.INVALID_YEAR),
        (
            parsed.get("iso_year_last_two", abs(iso_year) % 100) != abs(iso_year) % 100,
            ParseErrorKind.INVALID_YEAR,
        ),
        (parsed.get("iso_week", iso_week) != iso_week, ParseErrorKind.INVALID_WEEK),
        (
            parsed.get("sunday_week", date.sunday_based_week) != date.sunday_based_week,
            ParseErrorKind.INVALID_WEEK,
        ),
        (
            parsed.get("monday_week", date.monday_based_week) != date.monday_based_week,
            ParseErrorKind.INVALID_WEEK,
        ),
    )
    for mismatched, kind in mismatches:
        if mismatched:
            raise ParseError(kind)


def _resolve_date(parsed: dict[str, Any]) -> Date:
    from civiltime.units.weekday import Weekday

    year = _resolve_year(parsed)
    weekday = parsed.get("weekday")
    if weekday is not None:
        validate_range("weekday", weekday)
        weekday = Weekday(weekday)

    date = _build_date(parsed, year, weekday)
    _check_date(parsed, date, year, weekday)
    return date


def _resolve_time(parsed: dict[str, Any]) -> Time:
    from civiltime.core.time import Time

    if "hour" in parsed:
        hour = parsed["hour"]
    elif "hour_12" in parsed and "pm" in parsed:
        hour_12 = validate_range("hour", parsed["hour_12"], bounds=(1, 12))
        hour = hour_12 % 12 + (12 if parsed["pm"] else 0)
    else:
        raise ParseError(ParseErrorKind.INSUFFICIENT_INFORMATION)
    time = Time(
        hour,
        parsed.get("minute", 0),
        parsed.get("second", 0),
        parsed.get("nanosecond", 0),
    )
    # %I and %p, when also present, must agree with %H.
    if parsed.get("hour_12", time.hour % 12 or 12) != (time.hour % 12 or 12):
        raise ParseError(ParseErrorKind.INVALID_HOUR)
    if parsed.get("pm", time.hour >= 12) != (time.hour >= 12):
        raise ParseError(ParseErrorKind.INVALID_AM_PM)
    return time


def _resolve_offset(parsed: dict[str, Any]) -> UtcOffset:
    if "offset" not in parsed:
        raise ParseError(ParseErrorKind.INSUFFICIENT_INFORMATION)
    return parsed["offset"]


def _resolve(parsed: dict[str, Any], into: type) -> Any:
    from civiltime.core.date import Date
    from civiltime.core.datetime import PrimitiveDateTime
    from civiltime.core.offset_datetime import OffsetDateTime
    from civiltime.core.time import Time
    from civiltime.units.offset import UtcOffset

    if into is Date:
        return _resolve_date(parsed)
    if into is Time:
        return _resolve_time(parsed)
    if into is PrimitiveDateTime:
        return PrimitiveDateTime(_resolve_date(parsed), _resolve_time(parsed))
    if into is OffsetDateTime:
        local = PrimitiveDateTime(_resolve_date(parsed), _resolve_time(parsed))
        return OffsetDateTime(local, _resolve_offset(parsed))
    if into is UtcOffset:
        return _resolve_offset(parsed)
    raise TypeError(f"cannot parse into {into.__name__}")


def parse_components(text: str, fmt: str | FormatDescription) -> dict[str, Any]:
    """Read the raw components of ``text`` without resolving them.

    Returns:
        A mapping of component names to the values read.

    Raises:
        ParseError: If the text does not match the format.
    """
    description = compile_format(fmt)
    cursor = Cursor(text)
    parsed: dict[str, Any] = {}
    try:
        for item in description.items:
            if isinstance(item, Literal):
                cursor.expect(item.text)
            else:
                _read_component(cursor, item, parsed)
    except ComponentRange as exc:
        raise ParseError.component_out_of_range(exc) from exc
    cursor.finish()
    return parsed


def parse(text: str, fmt: str | FormatDescription, into: type[T]) -> T:
    """Parse ``text`` into a value of type ``into``.

    Args:
        text: The input text.
        fmt: A format description string, or a compiled FormatDescription.
        into: Date, Time, PrimitiveDateTime, OffsetDateTime or UtcOffset.

    Returns:
        The parsed value.

    Raises:
        ParseError: If ``fmt`` is invalid, the text does not match, the
            components do not determine a value of type ``into``
            (INSUFFICIENT_INFORMATION), or a component is out of range
            (COMPONENT_OUT_OF_RANGE, wrapping the ComponentRange).

    Examples:
        >>> from civiltime import Date, OffsetDateTime
        >>> parse("2020-060", "%Y-%j", Date)
        Date(2020, 2, 29)

        >>> parse("2021-02-29", "%F", Date)
        Traceback (most recent call last):
        ...
        civiltime.errors.ParseError: day must be in the range 1..=28 given year=2021, month=2 (was 29)

        >>> parse("2020-01-01", "%F", OffsetDateTime)
        Traceback (most recent call last):
        ...
        civiltime.errors.ParseError: Insufficient information to construct value.
    """
    parsed = parse_components(text, fmt)
    try:
        return _resolve(parsed, into)
    except ComponentRange as exc:
        raise ParseError.component_out_of_range(exc) from exc


__all__ = ["Cursor", "parse", "parse_components", "read_offset", "read_fraction"]
