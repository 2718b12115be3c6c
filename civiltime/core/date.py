"""Date class representing a calendar date.

This module provides the Date class for representing calendar dates in
the proleptic Gregorian calendar, years -9999 through 9999.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from civiltime._internal.rules import (
    JULIAN_DAY_OF_YEAR_ONE,
    MAX_YEAR,
    MIN_YEAR,
    days_before_year,
    days_in_year,
    iso_weeks_in_year,
    ordinal_to_md,
    weekday_index,
    ymd_to_ordinal,
)
from civiltime._internal.validation import (
    validate_day,
    validate_iso_week,
    validate_month,
    validate_ordinal,
    validate_range,
    validate_year,
)
from civiltime.errors import ComponentRange, ConversionRange
from civiltime.units.weekday import Weekday

if TYPE_CHECKING:
    from civiltime.core.datetime import PrimitiveDateTime
    from civiltime.core.duration import Duration
    from civiltime.core.time import Time

# Days in one 400-year Gregorian cycle, and its sub-periods.
_DAYS_PER_400_YEARS = 146_097
_DAYS_PER_100_YEARS = 36_524
_DAYS_PER_4_YEARS = 1_461


def _julian_day(year: int, ordinal: int) -> int:
    return JULIAN_DAY_OF_YEAR_ONE + days_before_year(year) + ordinal - 1


def _ordinal_date_from_julian_day(julian_day: int) -> tuple[int, int]:
    """Return (year, ordinal) for a Julian day number.

    Works for days before year 1 as well, since divmod floors.
    """
    n = julian_day - JULIAN_DAY_OF_YEAR_ONE
    n400, n = divmod(n, _DAYS_PER_400_YEARS)
    n100, n = divmod(n, _DAYS_PER_100_YEARS)
    n4, n = divmod(n, _DAYS_PER_4_YEARS)
    n1, n = divmod(n, 365)
    year = n400 * 400 + n100 * 100 + n4 * 4 + n1 + 1
    if n100 == 4 or n1 == 4:
        # Last day of a leap year.
        return year - 1, 366
    return year, n + 1


MIN_JULIAN_DAY: int = _julian_day(MIN_YEAR, 1)
MAX_JULIAN_DAY: int = _julian_day(MAX_YEAR, days_in_year(MAX_YEAR))


class Date:
    """A calendar date in the proleptic Gregorian calendar.

    Date represents a specific calendar day. Years use astronomical
    numbering, so year 0 exists and equals 1 BCE.

    Internal representation is the year plus the day of the year
    (ordinal), which makes the ISO week and leap-year rules direct to
    evaluate.

    Attributes:
        year: The year (-9999 to 9999).
        month: The month (1-12).
        day: The day of the month (1-31).
        ordinal: The day of the year (1-366).

    Examples:
        >>> d = Date(2024, 1, 15)
        >>> d.ordinal
        15
        >>> d.weekday
        <Weekday.MONDAY: 1>

        >>> Date(2021, 2, 29)
        Traceback (most recent call last):
        ...
        civiltime.errors.ComponentRange: day must be in the range 1..=28 given year=2021, month=2 (was 29)

        >>> Date.from_iso_week_date(2020, 53, Weekday.FRIDAY)
        Date(2021, 1, 1)
    """

    __slots__ = ("_year", "_ordinal")

    MIN: Date
    MAX: Date

    def __init__(self, year: int, month: int, day: int) -> None:
        """Create a Date from year, month, and day.

        Args:
            year: The year (-9999 to 9999).
            month: The month (1-12).
            day: The day of the month.

        Raises:
            ComponentRange: If any component is out of range. A day
                failure reports the year and month it was checked against.
        """
        validate_year(year)
        validate_month(month)
        validate_day(year, month, day)

        self._year: int = year
        self._ordinal: int = ymd_to_ordinal(year, month, day)

    @classmethod
    def _from_ordinal_unchecked(cls, year: int, ordinal: int) -> Date:
        """Create a Date without validation.

        The caller guarantees that the year is in range and that
        1 <= ordinal <= days_in_year(year).
        """
        instance = object.__new__(cls)
        instance._year = year
        instance._ordinal = ordinal
        return instance

    @classmethod
    def from_calendar_date(cls, year: int, month: int, day: int) -> Date:
        """Create a Date from year, month and day. Same as ``Date(...)``."""
        return cls(year, month, day)

    @classmethod
    def from_ordinal_date(cls, year: int, ordinal: int) -> Date:
        """Create a Date from the year and day of the year.

        Raises:
            ComponentRange: If the year or ordinal is out of range.

        Examples:
            >>> Date.from_ordinal_date(2020, 366)
            Date(2020, 12, 31)

            >>> Date.from_ordinal_date(2019, 366)
            Traceback (most recent call last):
            ...
            civiltime.errors.ComponentRange: ordinal must be in the range 1..=365 given year=2019 (was 366)
        """
        validate_year(year)
        validate_ordinal(year, ordinal)
        return cls._from_ordinal_unchecked(year, ordinal)

    @classmethod
    def from_iso_week_date(cls, year: int, week: int, weekday: Weekday) -> Date:
        """Create a Date from an ISO year, ISO week and weekday.

        The calendar year of the result may differ from the ISO year in
        the first and last week.

        Raises:
            ComponentRange: If the ISO year or week is out of range, or the
                resulting calendar year is.
        """
        validate_year(year)
        validate_iso_week(year, week)

        jan4 = weekday_index(year, 4) + 1
        ordinal = week * 7 + weekday.number_from_monday() - (jan4 + 3)

        if ordinal < 1:
            year -= 1
            ordinal += days_in_year(year)
        elif ordinal > days_in_year(year):
            ordinal -= days_in_year(year)
            year += 1

        validate_year(year)
        return cls._from_ordinal_unchecked(year, ordinal)

    @classmethod
    def from_julian_day(cls, julian_day: int) -> Date:
        """Create a Date from a Julian day number.

        Raises:
            ComponentRange: If the day falls outside years -9999..=9999.

        Examples:
            >>> Date.from_julian_day(2_440_588)
            Date(1970, 1, 1)
        """
        validate_range(
            "julian_day",
            julian_day,
            bounds=(MIN_JULIAN_DAY, MAX_JULIAN_DAY),
        )
        year, ordinal = _ordinal_date_from_julian_day(julian_day)
        return cls._from_ordinal_unchecked(year, ordinal)

    @classmethod
    def today(cls) -> Date:
        """Return today's date at the local UTC offset.

        Raises:
            IndeterminateOffset: If the local offset cannot be determined.
        """
        from civiltime.core.offset_datetime import OffsetDateTime

        return OffsetDateTime.now_local().date

    @classmethod
    def parse(cls, text: str, fmt: str) -> Date:
        """Parse a Date from ``text`` using a format description.

        Raises:
            ParseError: If the text does not match the format or does not
                determine a date.

        Examples:
            >>> Date.parse("2020-W53-5", "%G-W%V-%u")
            Date(2021, 1, 1)
        """
        from civiltime.format import parse

        return parse(text, fmt, cls)

    @property
    def year(self) -> int:
        """Return the calendar year."""
        return self._year

    @property
    def month(self) -> int:
        """Return the month (1-12)."""
        return ordinal_to_md(self._year, self._ordinal)[0]

    @property
    def day(self) -> int:
        """Return the day of the month (1-31)."""
        return ordinal_to_md(self._year, self._ordinal)[1]

    @property
    def ordinal(self) -> int:
        """Return the day of the year (1-366)."""
        return self._ordinal

    @property
    def weekday(self) -> Weekday:
        """Return the day of the week.

        Examples:
            >>> Date(2019, 1, 1).weekday
            <Weekday.TUESDAY: 2>
        """
        return Weekday.from_days_from_monday(weekday_index(self._year, self._ordinal))

    @property
    def iso_week(self) -> int:
        """Return the ISO 8601 week number (1-53)."""
        return self.iso_year_week()[1]

    @property
    def sunday_based_week(self) -> int:
        """Return the week number where week 1 starts on the first Sunday (0-53)."""
        return (self._ordinal - self.weekday.number_days_from_sunday() + 6) // 7

    @property
    def monday_based_week(self) -> int:
        """Return the week number where week 1 starts on the first Monday (0-53)."""
        return (self._ordinal - self.weekday.number_days_from_monday() + 6) // 7

    @property
    def is_leap_year(self) -> bool:
        """Return True if this date is in a leap year."""
        return days_in_year(self._year) == 366

    def iso_year_week(self) -> tuple[int, int]:
        """Return the ISO 8601 (year, week) pair.

        Examples:
            >>> Date(2021, 1, 1).iso_year_week()
            (2020, 53)
            >>> Date(2019, 12, 30).iso_year_week()
            (2020, 1)
        """
        week = (self._ordinal - self.weekday.number_from_monday() + 10) // 7
        if week == 0:
            return self._year - 1, iso_weeks_in_year(self._year - 1)
        if week > iso_weeks_in_year(self._year):
            return self._year + 1, 1
        return self._year, week

    def to_calendar_date(self) -> tuple[int, int, int]:
        """Return (year, month, day)."""
        month, day = ordinal_to_md(self._year, self._ordinal)
        return self._year, month, day

    def to_ordinal_date(self) -> tuple[int, int]:
        """Return (year, ordinal)."""
        return self._year, self._ordinal

    def to_iso_week_date(self) -> tuple[int, int, Weekday]:
        """Return (ISO year, ISO week, weekday)."""
        year, week = self.iso_year_week()
        return year, week, self.weekday

    def to_julian_day(self) -> int:
        """Return the Julian day number of this date."""
        return _julian_day(self._year, self._ordinal)

    def next_day(self) -> Date:
        """Return the following day.

        Raises:
            ConversionRange: If this is Date.MAX.
        """
        if self._ordinal < days_in_year(self._year):
            return Date._from_ordinal_unchecked(self._year, self._ordinal + 1)
        if self._year == MAX_YEAR:
            raise ConversionRange()
        return Date._from_ordinal_unchecked(self._year + 1, 1)

    def previous_day(self) -> Date:
        """Return the preceding day.

        Raises:
            ConversionRange: If this is Date.MIN.
        """
        if self._ordinal > 1:
            return Date._from_ordinal_unchecked(self._year, self._ordinal - 1)
        if self._year == MIN_YEAR:
            raise ConversionRange()
        return Date._from_ordinal_unchecked(self._year - 1, days_in_year(self._year - 1))

    def _add_days(self, days: int) -> Date:
        """Return the date ``days`` later, raising ConversionRange past the limits."""
        try:
            return Date.from_julian_day(self.to_julian_day() + days)
        except ComponentRange:
            raise ConversionRange() from None

    def checked_add(self, duration: Duration) -> Date | None:
        """Return ``self + duration``, or None if out of range."""
        try:
            return self + duration
        except ConversionRange:
            return None

    def checked_sub(self, duration: Duration) -> Date | None:
        """Return ``self - duration``, or None if out of range."""
        try:
            return self - duration
        except ConversionRange:
            return None

    def with_time(self, time: Time) -> PrimitiveDateTime:
        """Combine this date with a time of day."""
        from civiltime.core.datetime import PrimitiveDateTime

        return PrimitiveDateTime(self, time)

    def with_hms(self, hour: int, minute: int, second: int) -> PrimitiveDateTime:
        """Combine this date with a time built from hour, minute and second.

        Raises:
            ComponentRange: If any time component is out of range.
        """
        from civiltime.core.time import Time

        return self.with_time(Time.from_hms(hour, minute, second))

    def midnight(self) -> PrimitiveDateTime:
        """Return the PrimitiveDateTime at the start of this date."""
        from civiltime.core.time import Time

        return self.with_time(Time.MIDNIGHT)

    def format(self, fmt: str) -> str:
        """Format this date with a format description.

        Raises:
            FormatError: If the format asks for a time or offset component.

        Examples:
            >>> Date(2020, 2, 29).format("%a, %d %b %Y")
            'Sat, 29 Feb 2020'
        """
        from civiltime.format import format as format_value

        return format_value(self, fmt)

    def __add__(self, other: object) -> Date:
        """Add the whole days of a Duration.

        Raises:
            ConversionRange: If the result is outside the supported years.

        Examples:
            >>> Date(2020, 2, 28) + Duration.from_days(2)
            Date(2020, 3, 1)
        """
        from civiltime.core.duration import Duration

        if not isinstance(other, Duration):
            return NotImplemented
        return self._add_days(other.whole_days)

    def __radd__(self, other: object) -> Date:
        return self.__add__(other)

    def __sub__(self, other: object) -> Date | Duration:
        """Subtract a Duration or another Date.

        Examples:
            >>> Date(2021, 1, 1) - Date(2020, 1, 1)
            Duration(seconds=31622400, nanoseconds=0)
        """
        from civiltime.core.duration import Duration

        if isinstance(other, Duration):
            return self._add_days(-other.whole_days)
        if isinstance(other, Date):
            return Duration.from_days(self.to_julian_day() - other.to_julian_day())
        return NotImplemented

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Date):
            return NotImplemented
        return (self._year, self._ordinal) == (other._year, other._ordinal)

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return NotImplemented
        return not result

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Date):
            return NotImplemented
        return (self._year, self._ordinal) < (other._year, other._ordinal)

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Date):
            return NotImplemented
        return (self._year, self._ordinal) <= (other._year, other._ordinal)

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Date):
            return NotImplemented
        return (self._year, self._ordinal) > (other._year, other._ordinal)

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Date):
            return NotImplemented
        return (self._year, self._ordinal) >= (other._year, other._ordinal)

    def __hash__(self) -> int:
        return hash((self._year, self._ordinal))

    def __repr__(self) -> str:
        year, month, day = self.to_calendar_date()
        return f"Date({year}, {month}, {day})"

    def __str__(self) -> str:
        """Return the date as YYYY-MM-DD.

        Examples:
            >>> str(Date(-44, 3, 15))
            '-0044-03-15'
        """
        return self.format("%Y-%m-%d")

    def __bool__(self) -> bool:
        """Dates are always truthy."""
        return True


Date.MIN = Date._from_ordinal_unchecked(MIN_YEAR, 1)
Date.MAX = Date._from_ordinal_unchecked(MAX_YEAR, days_in_year(MAX_YEAR))


__all__ = ["Date", "MIN_JULIAN_DAY", "MAX_JULIAN_DAY"]
