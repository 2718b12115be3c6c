"""Wall-clock time of day.

``Time`` counts nanoseconds from midnight. There is no second 60, so leap
seconds cannot be expressed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from civiltime._internal.rules import (
    NANOS_PER_DAY,
    NANOS_PER_HOUR,
    NANOS_PER_MICROSECOND,
    NANOS_PER_MILLISECOND,
    NANOS_PER_MINUTE,
    NANOS_PER_SECOND,
)
from civiltime._internal.validation import validate_range

if TYPE_CHECKING:
    from civiltime.core.duration import Duration


class Time:
    """An hour, minute, second and nanosecond on a 24-hour clock.

    Values run from 00:00:00 through 23:59:59.999999999 and carry neither a
    date nor an offset. A single `_nanos` slot holds the count of
    nanoseconds since midnight.

    Adding or subtracting a Duration wraps around the 24-hour clock; use
    PrimitiveDateTime when the day carry matters.

    Attributes:
        hour: 0 through 23.
        minute: 0 through 59.
        second: 0 through 59.
        nanosecond: 0 through 999_999_999.

    Examples:
        >>> t = Time(14, 30, 45)
        >>> t.hour
        14

        >>> Time.from_hms_milli(12, 0, 0, 123).nanosecond
        123000000

        >>> Time(23, 0) + Duration.from_hours(2)
        Time(1, 0, 0, nanosecond=0)
    """

    __slots__ = ("_nanos",)

    MIDNIGHT: Time

    def __init__(
        self,
        hour: int,
        minute: int = 0,
        second: int = 0,
        nanosecond: int = 0,
    ) -> None:
        """Validate each component and build the time.

        Args:
            hour: Hour of the day, 0..=23.
            minute: Minute of the hour, 0..=59.
            second: Second of the minute, 0..=59.
            nanosecond: Fraction of the second, 0..=999_999_999.

        Raises:
            ComponentRange: If any component is out of range.

        Examples:
            >>> Time(24, 0)
            Traceback (most recent call last):
            ...
            civiltime.errors.ComponentRange: hour must be in the range 0..=23 (was 24)
        """
        validate_range("hour", hour)
        validate_range("minute", minute)
        validate_range("second", second)
        validate_range("nanosecond", nanosecond)

        self._nanos: int = (
            hour * NANOS_PER_HOUR
            + minute * NANOS_PER_MINUTE
            + second * NANOS_PER_SECOND
            + nanosecond
        )

    @classmethod
    def _from_nanos(cls, nanos: int) -> Time:
        """Build from a nanosecond count without validating it.

        The caller guarantees 0 <= nanos < NANOS_PER_DAY.
        """
        instance = object.__new__(cls)
        instance._nanos = nanos
        return instance

    @classmethod
    def from_hms(cls, hour: int, minute: int, second: int) -> Time:
        """Create a Time from hour, minute and second."""
        return cls(hour, minute, second)

    @classmethod
    def from_hms_milli(
        cls, hour: int, minute: int, second: int, millisecond: int
    ) -> Time:
        """Create a Time from hour, minute, second and millisecond.

        Raises:
            ComponentRange: If any component is out of range.
        """
        validate_range("millisecond", millisecond)
        return cls(hour, minute, second, millisecond * NANOS_PER_MILLISECOND)

    @classmethod
    def from_hms_micro(
        cls, hour: int, minute: int, second: int, microsecond: int
    ) -> Time:
        """Create a Time from hour, minute, second and microsecond.

        Raises:
            ComponentRange: If any component is out of range.
        """
        validate_range("microsecond", microsecond)
        return cls(hour, minute, second, microsecond * NANOS_PER_MICROSECOND)

    @classmethod
    def from_hms_nano(
        cls, hour: int, minute: int, second: int, nanosecond: int
    ) -> Time:
        """Create a Time from hour, minute, second and nanosecond."""
        return cls(hour, minute, second, nanosecond)

    @classmethod
    def parse(cls, text: str, fmt: str) -> Time:
        """Parse a Time from ``text`` using a format description.

        Raises:
            ParseError: If the text does not match the format.

        Examples:
            >>> Time.parse("14:30:05", "%T")
            Time(14, 30, 5, nanosecond=0)
        """
        from civiltime.format import parse

        return parse(text, fmt, cls)

    @property
    def hour(self) -> int:
        """Return the hour component (0-23)."""
        return self._nanos // NANOS_PER_HOUR

    @property
    def minute(self) -> int:
        """Return the minute component (0-59)."""
        return (self._nanos % NANOS_PER_HOUR) // NANOS_PER_MINUTE

    @property
    def second(self) -> int:
        """Return the second component (0-59)."""
        return (self._nanos % NANOS_PER_MINUTE) // NANOS_PER_SECOND

    @property
    def millisecond(self) -> int:
        """Return the fractional second in whole milliseconds (0-999)."""
        return self.nanosecond // NANOS_PER_MILLISECOND

    @property
    def microsecond(self) -> int:
        """Return the fractional second in whole microseconds (0-999999)."""
        return self.nanosecond // NANOS_PER_MICROSECOND

    @property
    def nanosecond(self) -> int:
        """Return the fractional second in nanoseconds (0-999999999)."""
        return self._nanos % NANOS_PER_SECOND

    def as_hms(self) -> tuple[int, int, int]:
        """Return (hour, minute, second)."""
        return self.hour, self.minute, self.second

    def as_hms_milli(self) -> tuple[int, int, int, int]:
        """Return (hour, minute, second, millisecond)."""
        return self.hour, self.minute, self.second, self.millisecond

    def as_hms_micro(self) -> tuple[int, int, int, int]:
        """Return (hour, minute, second, microsecond)."""
        return self.hour, self.minute, self.second, self.microsecond

    def as_hms_nano(self) -> tuple[int, int, int, int]:
        """Return (hour, minute, second, nanosecond)."""
        return self.hour, self.minute, self.second, self.nanosecond

    def format(self, fmt: str) -> str:
        """Format this time with a format description.

        Raises:
            FormatError: If the format asks for a date or offset component.

        Examples:
            >>> Time(9, 5).format("%-I:%M %p")
            '9:05 am'
        """
        from civiltime.format import format as format_value

        return format_value(self, fmt)

    def __add__(self, other: object) -> Time:
        """Add a Duration, wrapping around midnight.

        Examples:
            >>> Time(12, 0) + Duration.from_minutes(90)
            Time(13, 30, 0, nanosecond=0)
        """
        from civiltime.core.duration import Duration

        if not isinstance(other, Duration):
            return NotImplemented
        return Time._from_nanos((self._nanos + other.whole_nanoseconds) % NANOS_PER_DAY)

    def __radd__(self, other: object) -> Time:
        return self.__add__(other)

    def __sub__(self, other: object) -> Time | Duration:
        """Subtract a Duration (wrapping) or another Time.

        Subtracting a Time returns the signed Duration between the two on
        the same day.

        Examples:
            >>> Time(0, 30) - Duration.from_hours(1)
            Time(23, 30, 0, nanosecond=0)

            >>> Time(8, 0) - Time(9, 30)
            Duration(seconds=-5400, nanoseconds=0)
        """
        from civiltime.core.duration import Duration

        if isinstance(other, Duration):
            return Time._from_nanos((self._nanos - other.whole_nanoseconds) % NANOS_PER_DAY)
        if isinstance(other, Time):
            return Duration._from_nanos(self._nanos - other._nanos)
        return NotImplemented

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Time):
            return NotImplemented
        return self._nanos == other._nanos

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return NotImplemented
        return not result

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Time):
            return NotImplemented
        return self._nanos < other._nanos

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Time):
            return NotImplemented
        return self._nanos <= other._nanos

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Time):
            return NotImplemented
        return self._nanos > other._nanos

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Time):
            return NotImplemented
        return self._nanos >= other._nanos

    def __hash__(self) -> int:
        return hash(self._nanos)

    def __repr__(self) -> str:
        return f"Time({self.hour}, {self.minute}, {self.second}, nanosecond={self.nanosecond})"

    def __str__(self) -> str:
        """Return the time as HH:MM:SS.f with the fraction trimmed.

        Examples:
            >>> str(Time(7, 5, 3, 250_000_000))
            '07:05:03.25'
        """
        return self.format("%H:%M:%S.%N")

    def __bool__(self) -> bool:
        """Times are always truthy, midnight included."""
        return True


Time.MIDNIGHT = Time._from_nanos(0)


__all__ = ["Time"]
