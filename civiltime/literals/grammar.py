"""Grammar and validation for date/time literals.

This module reads the literal text that appears inside ``civiltime.macros``
calls and either returns a fully validated description of the value or
raises LiteralError naming the literal and the component that failed.

It runs before the program does (from the ``civiltime-literals`` tool), so
it must not construct runtime values. The only part of civiltime it reads
is the rules table; every bound it enforces comes from there.

Grammar:
    date:             [+-]YYYY-MM-DD, [+-]YYYY-DDD (ordinal), [+-]YYYY-Www-D
    time:             H[H]:MM[:SS[.fffffffff]] [am|pm]
    offset:           UTC, +HH, +HH:MM, +HH:MM:SS (or -)
    datetime:         <date> <time>
    offset_datetime:  <date> <time> <offset>
    duration:         [+-]N[.fff]<unit>, unit one of ns us ms s m h d w

Sub-grammars are read left to right and each is validated as soon as it
is read. The first failure aborts the whole literal.

Examples:
    >>> parse_date("2020-02-29")
    DateLiteral(year=2020, month=2, day=29)

    >>> parse_date("2021-02-29")
    Traceback (most recent call last):
    ...
    civiltime.literals.grammar.LiteralError: invalid day in literal '2021-02-29': must be in the range 1..=28 given year=2021, month=2, got 29

    >>> parse_duration("1.5h")
    DurationLiteral(seconds=5400, nanoseconds=0)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, NoReturn

from civiltime._internal.rules import (
    MAX_DURATION_SECONDS,
    MIN_DURATION_SECONDS,
    NANOS_PER_DAY,
    NANOS_PER_HOUR,
    NANOS_PER_MICROSECOND,
    NANOS_PER_MILLISECOND,
    NANOS_PER_MINUTE,
    NANOS_PER_SECOND,
    RANGES,
    days_in_year,
    days_in_year_month,
    iso_weeks_in_year,
    ordinal_to_md,
    weekday_index,
    ymd_to_ordinal,
)


class LiteralError(ValueError):
    """A literal failed to parse or validate.

    Attributes:
        literal: The full literal text.
        component: The component that failed, e.g. "day" or "unit".
        message: What was wrong with it.
        found: The first unexpected character, for trailing text.
    """

    def __init__(self, literal: str, component: str, message: str, found: str | None = None) -> None:
        self.literal = literal
        self.component = component
        self.message = message
        self.found = found
        super().__init__(f"invalid {component} in literal {literal!r}: {message}")


@dataclass(frozen=True)
class DateLiteral:
    year: int
    month: int
    day: int

    @property
    def ordinal(self) -> int:
        return ymd_to_ordinal(self.year, self.month, self.day)


@dataclass(frozen=True)
class TimeLiteral:
    hour: int
    minute: int
    second: int
    nanosecond: int


@dataclass(frozen=True)
class OffsetLiteral:
    """An offset; all three components share one sign."""

    hours: int
    minutes: int
    seconds: int

    @property
    def whole_seconds(self) -> int:
        return self.hours * 3600 + self.minutes * 60 + self.seconds


@dataclass(frozen=True)
class DateTimeLiteral:
    date: DateLiteral
    time: TimeLiteral


@dataclass(frozen=True)
class OffsetDateTimeLiteral:
    date: DateLiteral
    time: TimeLiteral
    offset: OffsetLiteral


@dataclass(frozen=True)
class DurationLiteral:
    """A duration; ``nanoseconds`` has the same sign as ``seconds``."""

    seconds: int
    nanoseconds: int


DURATION_UNITS: dict[str, int] = {
    "ns": 1,
    "us": NANOS_PER_MICROSECOND,
    "ms": NANOS_PER_MILLISECOND,
    "s": NANOS_PER_SECOND,
    "m": NANOS_PER_MINUTE,
    "h": NANOS_PER_HOUR,
    "d": NANOS_PER_DAY,
    "w": 7 * NANOS_PER_DAY,
}

# Longest digit runs a duration can need: the whole part in nanoseconds at
# the range limit, and a fraction of a week down to one nanosecond.
_MAX_WHOLE_DIGITS = len(str(MAX_DURATION_SECONDS * NANOS_PER_SECOND))
_MAX_FRACTION_DIGITS = len(str(DURATION_UNITS["w"]))


class _Scanner:
    """Position within a literal's text."""

    def __init__(self, literal: str) -> None:
        self.literal = literal
        self.text = literal.strip()
        self.pos = 0

    def fail(self, component: str, message: str, found: str | None = None) -> NoReturn:
        raise LiteralError(self.literal, component, message, found)

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def accept(self, chars: str) -> str | None:
        char = self.peek()
        if char and char in chars:
            self.pos += 1
            return char
        return None

    def accept_word(self, word: str) -> bool:
        """Consume ``word`` case-insensitively if it comes next."""
        end = self.pos + len(word)
        if self.text[self.pos:end].lower() == word:
            self.pos = end
            return True
        return False

    def expect(self, char: str, component: str) -> None:
        if self.accept(char) is None:
            found = self.peek() or "end of literal"
            self.fail(component, f"expected {char!r}, found {found!r}")

    def skip_spaces(self) -> int:
        start = self.pos
        while self.peek() in (" ", "\t") and self.peek():
            self.pos += 1
        return self.pos - start

    def digits(self, component: str, min_count: int, max_count: int) -> tuple[int, int]:
        """Read a run of ASCII digits, returning (value, digit count)."""
        start = self.pos
        while self.peek() and self.peek() in "0123456789":
            self.pos += 1
        count = self.pos - start
        if count < min_count:
            found = self.peek() or "end of literal"
            self.fail(component, f"expected at least {min_count} digit(s), found {found!r}")
        if count > max_count:
            self.fail(component, f"expected at most {max_count} digit(s), found {count}")
        return int(self.text[start:self.pos]), count

    def finish(self) -> None:
        if not self.at_end():
            self.fail("literal", f"unexpected trailing text {self.text[self.pos:]!r}", self.peek())


def _check(
    scanner: _Scanner,
    component: str,
    value: int,
    bounds: tuple[int, int],
    given: tuple[tuple[str, int], ...] = (),
) -> None:
    low, high = bounds
    if not low <= value <= high:
        message = f"must be in the range {low}..={high}"
        if given:
            message += " given " + ", ".join(f"{name}={bound}" for name, bound in given)
        scanner.fail(component, f"{message}, got {value}")


def _read_date(scanner: _Scanner) -> DateLiteral:
    sign = -1 if scanner.accept("+-") == "-" else 1
    year, _ = scanner.digits("year", 1, 6)
    year *= sign
    _check(scanner, "year", year, RANGES["year"])
    scanner.expect("-", "month")

    if scanner.accept("Ww"):
        week, _ = scanner.digits("week", 2, 2)
        _check(scanner, "week", week, (1, iso_weeks_in_year(year)), (("year", year),))
        scanner.expect("-", "weekday")
        weekday, _ = scanner.digits("weekday", 1, 1)
        _check(scanner, "weekday", weekday, RANGES["weekday"])
        return _from_iso_week(scanner, year, week, weekday)

    value, count = scanner.digits("month", 2, 3)
    if count == 3:
        _check(scanner, "ordinal", value, (1, days_in_year(year)), (("year", year),))
        month, day = ordinal_to_md(year, value)
        return DateLiteral(year, month, day)

    month = value
    _check(scanner, "month", month, RANGES["month"])
    scanner.expect("-", "day")
    day, _ = scanner.digits("day", 2, 2)
    _check(
        scanner, "day", day, (1, days_in_year_month(year, month)), (("year", year), ("month", month))
    )
    return DateLiteral(year, month, day)


def _from_iso_week(scanner: _Scanner, year: int, week: int, weekday: int) -> DateLiteral:
    # January 4th is always in week 1.
    jan4 = weekday_index(year, 4) + 1
    ordinal = week * 7 + weekday - (jan4 + 3)
    if ordinal < 1:
        year -= 1
        ordinal += days_in_year(year)
    elif ordinal > days_in_year(year):
        ordinal -= days_in_year(year)
        year += 1
    _check(scanner, "year", year, RANGES["year"])
    month, day = ordinal_to_md(year, ordinal)
    return DateLiteral(year, month, day)


def _read_time(scanner: _Scanner) -> TimeLiteral:
    hour, _ = scanner.digits("hour", 1, 2)
    scanner.expect(":", "minute")
    minute, _ = scanner.digits("minute", 2, 2)
    second = 0
    nanosecond = 0
    if scanner.accept(":"):
        second, _ = scanner.digits("second", 2, 2)
        if scanner.accept("."):
            fraction, count = scanner.digits("nanosecond", 1, 9)
            nanosecond = fraction * 10 ** (9 - count)

    mark = scanner.pos
    scanner.skip_spaces()
    if scanner.accept_word("am") or scanner.accept_word("pm"):
        is_pm = scanner.text[scanner.pos - 2:scanner.pos].lower() == "pm"
        _check(scanner, "hour", hour, (1, 12))
        hour = hour % 12 + (12 if is_pm else 0)
    else:
        scanner.pos = mark

    _check(scanner, "hour", hour, RANGES["hour"])
    _check(scanner, "minute", minute, RANGES["minute"])
    _check(scanner, "second", second, RANGES["second"])
    return TimeLiteral(hour, minute, second, nanosecond)


def _read_offset(scanner: _Scanner) -> OffsetLiteral:
    if scanner.accept_word("utc"):
        return OffsetLiteral(0, 0, 0)

    sign_char = scanner.accept("+-")
    if sign_char is None:
        found = scanner.peek() or "end of literal"
        scanner.fail("offset", f"expected '+', '-' or 'UTC', found {found!r}")
    sign = -1 if sign_char == "-" else 1

    hours, _ = scanner.digits("hours", 1, 2)
    minutes = 0
    seconds = 0
    if scanner.accept(":"):
        minutes, _ = scanner.digits("minutes", 2, 2)
        if scanner.accept(":"):
            seconds, _ = scanner.digits("seconds", 2, 2)

    _check(scanner, "hours", hours, (0, RANGES["hours"][1]))
    _check(scanner, "minutes", minutes, (0, RANGES["minutes"][1]))
    _check(scanner, "seconds", seconds, (0, RANGES["seconds"][1]))
    return OffsetLiteral(sign * hours, sign * minutes, sign * seconds)


def _separator(scanner: _Scanner, component: str) -> None:
    if not scanner.skip_spaces():
        found = scanner.peek() or "end of literal"
        scanner.fail(component, f"expected a space, found {found!r}")


def _read_duration(scanner: _Scanner) -> DurationLiteral:
    sign = -1 if scanner.accept("+-") == "-" else 1
    whole, _ = scanner.digits("duration", 1, _MAX_WHOLE_DIGITS)
    fraction, fraction_digits = 0, 0
    if scanner.accept("."):
        fraction, fraction_digits = scanner.digits("duration", 1, _MAX_FRACTION_DIGITS)
    scanner.skip_spaces()

    unit = scanner.text[scanner.pos:]
    scanner.pos = len(scanner.text)
    unit_nanos = DURATION_UNITS.get(unit)
    if unit_nanos is None:
        scanner.fail("unit", f"expected one of {', '.join(DURATION_UNITS)}, found {unit or 'nothing'!r}")

    scale = 10**fraction_digits
    if fraction * unit_nanos % scale:
        scanner.fail("duration", "fraction is finer than one nanosecond")
    total = sign * (whole * unit_nanos + fraction * unit_nanos // scale)

    seconds = abs(total) // NANOS_PER_SECOND * (-1 if total < 0 else 1)
    nanoseconds = total - seconds * NANOS_PER_SECOND
    _check(scanner, "duration", seconds, (MIN_DURATION_SECONDS, MAX_DURATION_SECONDS))
    return DurationLiteral(seconds, nanoseconds)


def parse_date(literal: str) -> DateLiteral:
    """Parse and validate a date literal."""
    scanner = _Scanner(literal)
    date = _read_date(scanner)
    scanner.finish()
    return date


def parse_time(literal: str) -> TimeLiteral:
    """Parse and validate a time literal.

    Examples:
        >>> parse_time("12:00 am")
        TimeLiteral(hour=0, minute=0, second=0, nanosecond=0)
        >>> parse_time("23:59:59.5")
        TimeLiteral(hour=23, minute=59, second=59, nanosecond=500000000)
    """
    scanner = _Scanner(literal)
    time = _read_time(scanner)
    scanner.finish()
    return time


def parse_offset(literal: str) -> OffsetLiteral:
    """Parse and validate a UTC offset literal."""
    scanner = _Scanner(literal)
    offset = _read_offset(scanner)
    scanner.finish()
    return offset


def parse_datetime(literal: str) -> DateTimeLiteral:
    """Parse and validate a date and time separated by whitespace."""
    scanner = _Scanner(literal)
    date = _read_date(scanner)
    _separator(scanner, "hour")
    time = _read_time(scanner)
    scanner.finish()
    return DateTimeLiteral(date, time)


def parse_offset_datetime(literal: str) -> OffsetDateTimeLiteral:
    """Parse and validate a date, time and offset.

    Whitespace between the time and the offset is optional.
    """
    scanner = _Scanner(literal)
    date = _read_date(scanner)
    _separator(scanner, "hour")
    time = _read_time(scanner)
    scanner.skip_spaces()
    offset = _read_offset(scanner)
    scanner.finish()
    return OffsetDateTimeLiteral(date, time, offset)


def parse_duration(literal: str) -> DurationLiteral:
    """Parse and validate a duration literal.

    The fractional part must resolve to a whole number of nanoseconds.

    Examples:
        >>> parse_duration("-250ms")
        DurationLiteral(seconds=0, nanoseconds=-250000000)
    """
    scanner = _Scanner(literal)
    return _read_duration(scanner)


Literal = DateLiteral | TimeLiteral | OffsetLiteral | DateTimeLiteral | OffsetDateTimeLiteral | DurationLiteral

PARSERS: dict[str, Callable[[str], Literal]] = {
    "date": parse_date,
    "time": parse_time,
    "offset": parse_offset,
    "datetime": parse_datetime,
    "offset_datetime": parse_offset_datetime,
    "duration": parse_duration,
}


def parse_literal(kind: str, literal: str) -> Literal:
    """Parse a literal of the named kind.

    Raises:
        KeyError: If ``kind`` is not one of PARSERS.
        LiteralError: If the literal is invalid.
    """
    return PARSERS[kind](literal)


__all__ = [
    "LiteralError",
    "DateLiteral",
    "TimeLiteral",
    "OffsetLiteral",
    "DateTimeLiteral",
    "OffsetDateTimeLiteral",
    "DurationLiteral",
    "Literal",
    "DURATION_UNITS",
    "PARSERS",
    "parse_date",
    "parse_time",
    "parse_offset",
    "parse_datetime",
    "parse_offset_datetime",
    "parse_duration",
    "parse_literal",
]
