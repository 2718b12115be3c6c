"""OffsetDateTime class representing an unambiguous instant.

This module provides the OffsetDateTime class, a local date-time paired
with the UtcOffset that pins it to a single instant.
"""

from __future__ import annotations

import time as _time
from typing import TYPE_CHECKING

from civiltime._internal.rules import (
    NANOS_PER_DAY,
    NANOS_PER_SECOND,
    SECONDS_PER_DAY,
    UNIX_EPOCH_JULIAN_DAY,
)
from civiltime._internal.validation import validate_range
from civiltime.core.date import MAX_JULIAN_DAY, MIN_JULIAN_DAY, Date
from civiltime.core.datetime import PrimitiveDateTime
from civiltime.core.time import Time
from civiltime.errors import ConversionRange
from civiltime.units.offset import UtcOffset
from civiltime.units.weekday import Weekday

if TYPE_CHECKING:
    from civiltime.core.duration import Duration
    from civiltime.units.local import OffsetProvider

MIN_UNIX_TIMESTAMP: int = (MIN_JULIAN_DAY - UNIX_EPOCH_JULIAN_DAY) * SECONDS_PER_DAY
MAX_UNIX_TIMESTAMP: int = (MAX_JULIAN_DAY - UNIX_EPOCH_JULIAN_DAY + 1) * SECONDS_PER_DAY - 1

_UNIX_EPOCH_NANOS = UNIX_EPOCH_JULIAN_DAY * NANOS_PER_DAY


class OffsetDateTime:
    """A date-time at a known UTC offset.

    The value is stored as the local PrimitiveDateTime plus its offset.
    Equality, ordering and hashing compare the instant, so the same moment
    seen from two offsets compares equal.

    Attributes:
        date: The local Date.
        time: The local Time.
        offset: The UtcOffset.

    Examples:
        >>> utc = OffsetDateTime.from_unix_timestamp(0)
        >>> utc.date, utc.time
        (Date(1970, 1, 1), Time(0, 0, 0, nanosecond=0))

        >>> plus_one = utc.to_offset(UtcOffset.from_hms(1, 0, 0))
        >>> plus_one.hour
        1
        >>> plus_one == utc
        True
    """

    __slots__ = ("_local", "_offset")

    def __init__(self, datetime: PrimitiveDateTime, offset: UtcOffset) -> None:
        """Pair a local date-time with the offset it was observed at."""
        if not isinstance(datetime, PrimitiveDateTime):
            raise TypeError(
                f"datetime must be a PrimitiveDateTime, got {type(datetime).__name__}"
            )
        if not isinstance(offset, UtcOffset):
            raise TypeError(f"offset must be a UtcOffset, got {type(offset).__name__}")
        self._local = datetime
        self._offset = offset

    @classmethod
    def _from_instant(cls, instant_nanos: int, offset: UtcOffset) -> OffsetDateTime:
        """Create from nanoseconds since Julian day 0 (UTC) and an offset.

        Raises:
            ConversionRange: If the local date leaves the supported years.
        """
        local_nanos = instant_nanos + offset.whole_seconds * NANOS_PER_SECOND
        return cls(PrimitiveDateTime._from_day_nanos(0, local_nanos), offset)

    @classmethod
    def from_unix_timestamp(cls, timestamp: int) -> OffsetDateTime:
        """Create the UTC date-time at a Unix timestamp in seconds.

        Raises:
            ComponentRange: If the timestamp is outside years -9999..=9999.

        Examples:
            >>> OffsetDateTime.from_unix_timestamp(1_546_300_800)
            OffsetDateTime(PrimitiveDateTime(Date(2019, 1, 1), Time(0, 0, 0, nanosecond=0)), UtcOffset(0, 0, 0))
        """
        validate_range(
            "unix_timestamp",
            timestamp,
            bounds=(MIN_UNIX_TIMESTAMP, MAX_UNIX_TIMESTAMP),
        )
        return cls._from_instant(_UNIX_EPOCH_NANOS + timestamp * NANOS_PER_SECOND, UtcOffset.UTC)

    @classmethod
    def from_unix_timestamp_nanos(cls, timestamp: int) -> OffsetDateTime:
        """Create the UTC date-time at a Unix timestamp in nanoseconds.

        Raises:
            ComponentRange: If the timestamp is outside years -9999..=9999.
        """
        validate_range(
            "unix_timestamp_nanos",
            timestamp,
            bounds=(
                MIN_UNIX_TIMESTAMP * NANOS_PER_SECOND,
                MAX_UNIX_TIMESTAMP * NANOS_PER_SECOND + NANOS_PER_SECOND - 1,
            ),
        )
        return cls._from_instant(_UNIX_EPOCH_NANOS + timestamp, UtcOffset.UTC)

    @classmethod
    def now_utc(cls) -> OffsetDateTime:
        """Return the current instant in UTC."""
        return cls.from_unix_timestamp_nanos(_time.time_ns())

    @classmethod
    def now_local(cls, provider: OffsetProvider | None = None) -> OffsetDateTime:
        """Return the current instant at the local offset.

        Raises:
            IndeterminateOffset: If the platform cannot supply the offset.
        """
        from civiltime.units.local import local_offset_at

        now = cls.now_utc()
        return now.to_offset(local_offset_at(now.unix_timestamp, provider))

    @classmethod
    def parse(cls, text: str, fmt: str) -> OffsetDateTime:
        """Parse an OffsetDateTime from ``text`` using a format description.

        Raises:
            ParseError: If the text does not match the format or lacks an
                offset.
        """
        from civiltime.format import parse

        return parse(text, fmt, cls)

    def _instant(self) -> int:
        julian_day, nanos = self._local._day_nanos()
        return julian_day * NANOS_PER_DAY + nanos - self._offset.whole_seconds * NANOS_PER_SECOND

    @property
    def offset(self) -> UtcOffset:
        return self._offset

    @property
    def date(self) -> Date:
        """Return the local Date."""
        return self._local.date

    @property
    def time(self) -> Time:
        """Return the local Time."""
        return self._local.time

    @property
    def year(self) -> int:
        return self._local.year

    @property
    def month(self) -> int:
        return self._local.month

    @property
    def day(self) -> int:
        return self._local.day

    @property
    def ordinal(self) -> int:
        return self._local.ordinal

    @property
    def weekday(self) -> Weekday:
        return self._local.weekday

    @property
    def iso_week(self) -> int:
        return self._local.iso_week

    @property
    def hour(self) -> int:
        return self._local.hour

    @property
    def minute(self) -> int:
        return self._local.minute

    @property
    def second(self) -> int:
        return self._local.second

    @property
    def millisecond(self) -> int:
        return self._local.millisecond

    @property
    def microsecond(self) -> int:
        return self._local.microsecond

    @property
    def nanosecond(self) -> int:
        return self._local.nanosecond

    @property
    def unix_timestamp(self) -> int:
        """Return whole seconds since the Unix epoch, truncated toward zero."""
        nanos = self.unix_timestamp_nanos
        seconds = abs(nanos) // NANOS_PER_SECOND
        return -seconds if nanos < 0 else seconds

    @property
    def unix_timestamp_nanos(self) -> int:
        """Return nanoseconds since the Unix epoch."""
        return self._instant() - _UNIX_EPOCH_NANOS

    def to_offset(self, offset: UtcOffset) -> OffsetDateTime:
        """Return the same instant seen at another offset.

        Raises:
            ConversionRange: If the local date at ``offset`` leaves the
                supported years.
        """
        return OffsetDateTime._from_instant(self._instant(), offset)

    def to_primitive(self) -> PrimitiveDateTime:
        """Return the local date-time without its offset."""
        return self._local

    def checked_add(self, duration: Duration) -> OffsetDateTime | None:
        """Return ``self + duration``, or None if out of range."""
        try:
            return self + duration
        except ConversionRange:
            return None

    def checked_sub(self, duration: Duration) -> OffsetDateTime | None:
        """Return ``self - duration``, or None if out of range."""
        try:
            return self - duration
        except ConversionRange:
            return None

    def format(self, fmt: str) -> str:
        """Format this date-time with a format description.

        Examples:
            >>> dt = Date(2020, 1, 2).midnight().assume_offset(UtcOffset.from_hms(-5, 0, 0))
            >>> dt.format("%F %T %z")
            '2020-01-02 00:00:00 -05:00'
        """
        from civiltime.format import format as format_value

        return format_value(self, fmt)

    def __add__(self, other: object) -> OffsetDateTime:
        """Add a Duration, keeping the offset.

        Raises:
            ConversionRange: If the result leaves the supported years.
        """
        from civiltime.core.duration import Duration

        if not isinstance(other, Duration):
            return NotImplemented
        return OffsetDateTime(self._local + other, self._offset)

    def __radd__(self, other: object) -> OffsetDateTime:
        return self.__add__(other)

    def __sub__(self, other: object) -> OffsetDateTime | Duration:
        """Subtract a Duration, or another OffsetDateTime.

        The difference between two OffsetDateTimes is the time between
        their instants, whatever their offsets.
        """
        from civiltime.core.duration import Duration

        if isinstance(other, Duration):
            return OffsetDateTime(self._local - other, self._offset)
        if isinstance(other, OffsetDateTime):
            return Duration._from_nanos(self._instant() - other._instant())
        return NotImplemented

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OffsetDateTime):
            return NotImplemented
        return self._instant() == other._instant()

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return NotImplemented
        return not result

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, OffsetDateTime):
            return NotImplemented
        return self._instant() < other._instant()

    def __le__(self, other: object) -> bool:
        if not isinstance(other, OffsetDateTime):
            return NotImplemented
        return self._instant() <= other._instant()

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, OffsetDateTime):
            return NotImplemented
        return self._instant() > other._instant()

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, OffsetDateTime):
            return NotImplemented
        return self._instant() >= other._instant()

    def __hash__(self) -> int:
        return hash(self._instant())

    def __repr__(self) -> str:
        return f"OffsetDateTime({self._local!r}, {self._offset!r})"

    def __str__(self) -> str:
        return f"{self._local} {self._offset}"

    def __bool__(self) -> bool:
        return True


__all__ = ["OffsetDateTime", "MIN_UNIX_TIMESTAMP", "MAX_UNIX_TIMESTAMP"]
