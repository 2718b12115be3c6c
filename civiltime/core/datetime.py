"""PrimitiveDateTime class combining a date and a time without an offset.

This module provides the PrimitiveDateTime class for "naive" local
date-times. Attach a UtcOffset with ``assume_offset`` to obtain an
OffsetDateTime.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from civiltime._internal.rules import NANOS_PER_DAY
from civiltime.core.date import Date
from civiltime.core.time import Time
from civiltime.errors import ComponentRange, ConversionRange
from civiltime.units.weekday import Weekday

if TYPE_CHECKING:
    from civiltime.core.duration import Duration
    from civiltime.core.offset_datetime import OffsetDateTime
    from civiltime.units.offset import UtcOffset


class PrimitiveDateTime:
    """A date and a time of day with no associated UTC offset.

    Adding a Duration carries through the time of day into the date, so
    ``23:00 + 2h`` moves to the next day.

    Attributes:
        date: The Date component.
        time: The Time component.

    Examples:
        >>> dt = PrimitiveDateTime(Date(2020, 12, 31), Time(23, 0))
        >>> dt + Duration.from_hours(2)
        PrimitiveDateTime(Date(2021, 1, 1), Time(1, 0, 0, nanosecond=0))

        >>> dt.assume_utc().unix_timestamp
        1609455600
    """

    __slots__ = ("_date", "_time")

    def __init__(self, date: Date, time: Time) -> None:
        """Create a PrimitiveDateTime from a Date and a Time."""
        if not isinstance(date, Date):
            raise TypeError(f"date must be a Date, got {type(date).__name__}")
        if not isinstance(time, Time):
            raise TypeError(f"time must be a Time, got {type(time).__name__}")
        self._date = date
        self._time = time

    @classmethod
    def _from_day_nanos(cls, julian_day: int, nanos: int) -> PrimitiveDateTime:
        """Build from a Julian day and a nanosecond offset that may exceed a day.

        Raises:
            ConversionRange: If the carried date leaves the supported years.
        """
        carry, nanos = divmod(nanos, NANOS_PER_DAY)
        try:
            date = Date.from_julian_day(julian_day + carry)
        except ComponentRange:
            raise ConversionRange() from None
        return cls(date, Time._from_nanos(nanos))

    @classmethod
    def parse(cls, text: str, fmt: str) -> PrimitiveDateTime:
        """Parse a PrimitiveDateTime from ``text`` using a format description.

        Raises:
            ParseError: If the text does not match the format.
        """
        from civiltime.format import parse

        return parse(text, fmt, cls)

    @property
    def date(self) -> Date:
        """Return the Date component."""
        return self._date

    @property
    def time(self) -> Time:
        """Return the Time component."""
        return self._time

    @property
    def year(self) -> int:
        return self._date.year

    @property
    def month(self) -> int:
        return self._date.month

    @property
    def day(self) -> int:
        return self._date.day

    @property
    def ordinal(self) -> int:
        return self._date.ordinal

    @property
    def weekday(self) -> Weekday:
        return self._date.weekday

    @property
    def iso_week(self) -> int:
        return self._date.iso_week

    @property
    def hour(self) -> int:
        return self._time.hour

    @property
    def minute(self) -> int:
        return self._time.minute

    @property
    def second(self) -> int:
        return self._time.second

    @property
    def millisecond(self) -> int:
        return self._time.millisecond

    @property
    def microsecond(self) -> int:
        return self._time.microsecond

    @property
    def nanosecond(self) -> int:
        return self._time.nanosecond

    def _day_nanos(self) -> tuple[int, int]:
        return self._date.to_julian_day(), self._time._nanos

    def assume_offset(self, offset: UtcOffset) -> OffsetDateTime:
        """Treat this date-time as local time at ``offset``.

        Examples:
            >>> from civiltime.units.offset import UtcOffset
            >>> dt = Date(2020, 1, 1).midnight().assume_offset(UtcOffset.from_hms(1, 0, 0))
            >>> dt.unix_timestamp
            1577833200
        """
        from civiltime.core.offset_datetime import OffsetDateTime

        return OffsetDateTime(self, offset)

    def assume_utc(self) -> OffsetDateTime:
        """Treat this date-time as UTC."""
        from civiltime.units.offset import UtcOffset

        return self.assume_offset(UtcOffset.UTC)

    def checked_add(self, duration: Duration) -> PrimitiveDateTime | None:
        """Return ``self + duration``, or None if out of range."""
        try:
            return self + duration
        except ConversionRange:
            return None

    def checked_sub(self, duration: Duration) -> PrimitiveDateTime | None:
        """Return ``self - duration``, or None if out of range."""
        try:
            return self - duration
        except ConversionRange:
            return None

    def format(self, fmt: str) -> str:
        """Format this date-time with a format description.

        Raises:
            FormatError: If the format asks for an offset component.

        Examples:
            >>> PrimitiveDateTime(Date(2020, 1, 2), Time(3, 4, 5)).format("%F %T")
            '2020-01-02 03:04:05'
        """
        from civiltime.format import format as format_value

        return format_value(self, fmt)

    def __add__(self, other: object) -> PrimitiveDateTime:
        """Add a Duration, carrying into the date.

        Raises:
            ConversionRange: If the result leaves the supported years.
        """
        from civiltime.core.duration import Duration

        if not isinstance(other, Duration):
            return NotImplemented
        julian_day, nanos = self._day_nanos()
        return PrimitiveDateTime._from_day_nanos(julian_day, nanos + other.whole_nanoseconds)

    def __radd__(self, other: object) -> PrimitiveDateTime:
        return self.__add__(other)

    def __sub__(self, other: object) -> PrimitiveDateTime | Duration:
        """Subtract a Duration, or another PrimitiveDateTime.

        Examples:
            >>> a = PrimitiveDateTime(Date(2020, 1, 2), Time(0, 0))
            >>> b = PrimitiveDateTime(Date(2020, 1, 1), Time(12, 0))
            >>> a - b
            Duration(seconds=43200, nanoseconds=0)
        """
        from civiltime.core.duration import Duration

        julian_day, nanos = self._day_nanos()
        if isinstance(other, Duration):
            return PrimitiveDateTime._from_day_nanos(julian_day, nanos - other.whole_nanoseconds)
        if isinstance(other, PrimitiveDateTime):
            other_day, other_nanos = other._day_nanos()
            return Duration._from_nanos(
                (julian_day - other_day) * NANOS_PER_DAY + nanos - other_nanos
            )
        return NotImplemented

    def _key(self) -> tuple[Date, Time]:
        return self._date, self._time

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PrimitiveDateTime):
            return NotImplemented
        return self._key() == other._key()

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return NotImplemented
        return not result

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, PrimitiveDateTime):
            return NotImplemented
        return self._key() < other._key()

    def __le__(self, other: object) -> bool:
        if not isinstance(other, PrimitiveDateTime):
            return NotImplemented
        return self._key() <= other._key()

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, PrimitiveDateTime):
            return NotImplemented
        return self._key() > other._key()

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, PrimitiveDateTime):
            return NotImplemented
        return self._key() >= other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        return f"PrimitiveDateTime({self._date!r}, {self._time!r})"

    def __str__(self) -> str:
        return f"{self._date} {self._time}"

    def __bool__(self) -> bool:
        return True


__all__ = ["PrimitiveDateTime"]
