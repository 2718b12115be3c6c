"""Duration class representing a signed span of time.

This module provides the Duration class, stored as whole seconds plus a
nanosecond remainder that carries the same sign.
"""

from __future__ import annotations

import math

from civiltime._internal.rules import (
    MAX_DURATION_SECONDS,
    MIN_DURATION_SECONDS,
    NANOS_PER_MICROSECOND,
    NANOS_PER_MILLISECOND,
    NANOS_PER_SECOND,
    SECONDS_PER_DAY,
    SECONDS_PER_HOUR,
    SECONDS_PER_MINUTE,
    SECONDS_PER_WEEK,
)
from civiltime.errors import ConversionRange


def _truncating_divmod(value: int, divisor: int) -> tuple[int, int]:
    """Split ``value`` so that both parts carry the sign of ``value``."""
    quotient, remainder = divmod(abs(value), divisor)
    if value < 0:
        return -quotient, -remainder
    return quotient, remainder


class Duration:
    """A signed span of time with nanosecond precision.

    The internal representation is normalized such that:
    - ``_seconds`` fits in a signed 64-bit integer
    - ``abs(_nanos) < 1_000_000_000``
    - ``_nanos`` is zero or has the same sign as ``_seconds``

    Arithmetic that would leave the representable range raises
    ConversionRange rather than wrapping. The ``checked_*`` methods return
    None instead.

    Examples:
        >>> Duration(90, 500_000_000)
        Duration(seconds=90, nanoseconds=500000000)

        >>> Duration(1, -1)
        Duration(seconds=0, nanoseconds=999999999)

        >>> Duration.from_hours(25).whole_days
        1

        >>> Duration.from_seconds(30) + Duration.from_seconds(45)
        Duration(seconds=75, nanoseconds=0)
    """

    __slots__ = ("_seconds", "_nanos")

    ZERO: Duration
    MIN: Duration
    MAX: Duration

    def __init__(
        self,
        seconds: int = 0,
        nanoseconds: int = 0,
        *,
        weeks: int = 0,
        days: int = 0,
        hours: int = 0,
        minutes: int = 0,
        milliseconds: int = 0,
        microseconds: int = 0,
    ) -> None:
        """Create a Duration from component parts.

        All parameters can be positive, negative, or zero. The result is
        normalized so that the nanosecond remainder agrees in sign with
        the seconds.

        Args:
            seconds: Number of seconds.
            nanoseconds: Number of nanoseconds.
            weeks: Number of weeks.
            days: Number of days.
            hours: Number of hours.
            minutes: Number of minutes.
            milliseconds: Number of milliseconds.
            microseconds: Number of microseconds.

        Raises:
            ConversionRange: If the total exceeds the representable range.

        Examples:
            >>> Duration(days=1, seconds=1)
            Duration(seconds=86401, nanoseconds=0)

            >>> Duration(milliseconds=-1500)
            Duration(seconds=-1, nanoseconds=-500000000)
        """
        total_seconds = (
            weeks * SECONDS_PER_WEEK
            + days * SECONDS_PER_DAY
            + hours * SECONDS_PER_HOUR
            + minutes * SECONDS_PER_MINUTE
            + seconds
        )
        total_nanos = (
            total_seconds * NANOS_PER_SECOND
            + milliseconds * NANOS_PER_MILLISECOND
            + microseconds * NANOS_PER_MICROSECOND
            + nanoseconds
        )
        self._seconds, self._nanos = self._split(total_nanos)

    @staticmethod
    def _split(total_nanos: int) -> tuple[int, int]:
        seconds, nanos = _truncating_divmod(total_nanos, NANOS_PER_SECOND)
        if seconds < MIN_DURATION_SECONDS or seconds > MAX_DURATION_SECONDS:
            raise ConversionRange()
        return seconds, nanos

    @classmethod
    def _from_nanos(cls, total_nanos: int) -> Duration:
        """Create a Duration from a total nanosecond count.

        Raises:
            ConversionRange: If the seconds do not fit a signed 64-bit integer.
        """
        seconds, nanos = cls._split(total_nanos)
        instance = object.__new__(cls)
        instance._seconds = seconds
        instance._nanos = nanos
        return instance

    @classmethod
    def from_weeks(cls, weeks: int) -> Duration:
        """Create a Duration of the given number of weeks."""
        return cls._from_nanos(weeks * SECONDS_PER_WEEK * NANOS_PER_SECOND)

    @classmethod
    def from_days(cls, days: int) -> Duration:
        """Create a Duration of the given number of days.

        Examples:
            >>> Duration.from_days(2)
            Duration(seconds=172800, nanoseconds=0)
        """
        return cls._from_nanos(days * SECONDS_PER_DAY * NANOS_PER_SECOND)

    @classmethod
    def from_hours(cls, hours: int) -> Duration:
        """Create a Duration of the given number of hours."""
        return cls._from_nanos(hours * SECONDS_PER_HOUR * NANOS_PER_SECOND)

    @classmethod
    def from_minutes(cls, minutes: int) -> Duration:
        """Create a Duration of the given number of minutes."""
        return cls._from_nanos(minutes * SECONDS_PER_MINUTE * NANOS_PER_SECOND)

    @classmethod
    def from_seconds(cls, seconds: int) -> Duration:
        """Create a Duration of the given number of seconds."""
        return cls._from_nanos(seconds * NANOS_PER_SECOND)

    @classmethod
    def from_seconds_f(cls, seconds: float) -> Duration:
        """Create a Duration from a floating point number of seconds.

        Sub-nanosecond precision is truncated.

        Raises:
            ConversionRange: If ``seconds`` is not finite or out of range.

        Examples:
            >>> Duration.from_seconds_f(0.5)
            Duration(seconds=0, nanoseconds=500000000)
        """
        if not math.isfinite(seconds):
            raise ConversionRange()
        return cls._from_nanos(int(seconds * NANOS_PER_SECOND))

    @classmethod
    def from_milliseconds(cls, milliseconds: int) -> Duration:
        """Create a Duration of the given number of milliseconds."""
        return cls._from_nanos(milliseconds * NANOS_PER_MILLISECOND)

    @classmethod
    def from_microseconds(cls, microseconds: int) -> Duration:
        """Create a Duration of the given number of microseconds."""
        return cls._from_nanos(microseconds * NANOS_PER_MICROSECOND)

    @classmethod
    def from_nanoseconds(cls, nanoseconds: int) -> Duration:
        """Create a Duration of the given number of nanoseconds."""
        return cls._from_nanos(nanoseconds)

    @property
    def whole_weeks(self) -> int:
        """Return the number of whole weeks, truncated toward zero."""
        return _truncating_divmod(self._seconds, SECONDS_PER_WEEK)[0]

    @property
    def whole_days(self) -> int:
        """Return the number of whole days, truncated toward zero.

        Examples:
            >>> Duration.from_hours(-36).whole_days
            -1
        """
        return _truncating_divmod(self._seconds, SECONDS_PER_DAY)[0]

    @property
    def whole_hours(self) -> int:
        """Return the number of whole hours, truncated toward zero."""
        return _truncating_divmod(self._seconds, SECONDS_PER_HOUR)[0]

    @property
    def whole_minutes(self) -> int:
        """Return the number of whole minutes, truncated toward zero."""
        return _truncating_divmod(self._seconds, SECONDS_PER_MINUTE)[0]

    @property
    def whole_seconds(self) -> int:
        """Return the number of whole seconds."""
        return self._seconds

    @property
    def whole_milliseconds(self) -> int:
        """Return the number of whole milliseconds, truncated toward zero."""
        return _truncating_divmod(self.whole_nanoseconds, NANOS_PER_MILLISECOND)[0]

    @property
    def whole_microseconds(self) -> int:
        """Return the number of whole microseconds, truncated toward zero."""
        return _truncating_divmod(self.whole_nanoseconds, NANOS_PER_MICROSECOND)[0]

    @property
    def whole_nanoseconds(self) -> int:
        """Return the total length in nanoseconds."""
        return self._seconds * NANOS_PER_SECOND + self._nanos

    @property
    def subsec_milliseconds(self) -> int:
        """Return the fractional second in whole milliseconds, signed."""
        return _truncating_divmod(self._nanos, NANOS_PER_MILLISECOND)[0]

    @property
    def subsec_microseconds(self) -> int:
        """Return the fractional second in whole microseconds, signed."""
        return _truncating_divmod(self._nanos, NANOS_PER_MICROSECOND)[0]

    @property
    def subsec_nanoseconds(self) -> int:
        """Return the fractional second in nanoseconds, signed."""
        return self._nanos

    @property
    def is_zero(self) -> bool:
        """Return True if this is a zero-length duration."""
        return self._seconds == 0 and self._nanos == 0

    @property
    def is_negative(self) -> bool:
        """Return True if this duration is shorter than zero."""
        return self._seconds < 0 or self._nanos < 0

    @property
    def is_positive(self) -> bool:
        """Return True if this duration is longer than zero."""
        return self._seconds > 0 or self._nanos > 0

    def as_seconds_f(self) -> float:
        """Return the duration as a floating point number of seconds.

        Examples:
            >>> Duration(1, 500_000_000).as_seconds_f()
            1.5
        """
        return self._seconds + self._nanos / NANOS_PER_SECOND

    def checked_add(self, other: Duration) -> Duration | None:
        """Return ``self + other``, or None if the sum is out of range."""
        try:
            return self + other
        except ConversionRange:
            return None

    def checked_sub(self, other: Duration) -> Duration | None:
        """Return ``self - other``, or None if the difference is out of range."""
        try:
            return self - other
        except ConversionRange:
            return None

    def checked_mul(self, factor: int) -> Duration | None:
        """Return ``self * factor``, or None if the product is out of range."""
        try:
            return self * factor
        except ConversionRange:
            return None

    def checked_div(self, divisor: int) -> Duration | None:
        """Return ``self / divisor``, or None on a zero divisor or out-of-range quotient.

        Examples:
            >>> Duration.MIN.checked_div(-1) is None
            True
        """
        if divisor == 0:
            return None
        try:
            return self / divisor
        except ConversionRange:
            return None

    def checked_neg(self) -> Duration | None:
        """Return ``-self``, or None if the negation is out of range.

        Examples:
            >>> Duration.MIN.checked_neg() is None
            True
        """
        try:
            return -self
        except ConversionRange:
            return None

    def __add__(self, other: object) -> Duration:
        """Add two durations.

        Raises:
            ConversionRange: If the sum is out of range.
        """
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration._from_nanos(self.whole_nanoseconds + other.whole_nanoseconds)

    def __sub__(self, other: object) -> Duration:
        """Subtract one duration from another.

        Raises:
            ConversionRange: If the difference is out of range.
        """
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration._from_nanos(self.whole_nanoseconds - other.whole_nanoseconds)

    def __mul__(self, other: object) -> Duration:
        """Multiply a duration by an integer or float.

        Float products are truncated to whole nanoseconds.

        Examples:
            >>> Duration.from_seconds(30) * 3
            Duration(seconds=90, nanoseconds=0)
        """
        if isinstance(other, bool) or not isinstance(other, (int, float)):
            return NotImplemented
        if isinstance(other, float):
            if not math.isfinite(other):
                raise ConversionRange()
            return Duration._from_nanos(int(self.whole_nanoseconds * other))
        return Duration._from_nanos(self.whole_nanoseconds * other)

    def __rmul__(self, other: object) -> Duration:
        """Support scalar * Duration."""
        return self.__mul__(other)

    def __truediv__(self, other: object) -> Duration | float:
        """Divide by a scalar, or by another Duration.

        Dividing by an integer truncates toward zero. Dividing by another
        Duration returns the ratio as a float.

        Raises:
            ZeroDivisionError: If the divisor is zero.

        Examples:
            >>> Duration.from_seconds(-7) / 2
            Duration(seconds=-3, nanoseconds=-500000000)

            >>> Duration.from_hours(1) / Duration.from_minutes(15)
            4.0
        """
        if isinstance(other, Duration):
            if other.is_zero:
                raise ZeroDivisionError("division by zero duration")
            return self.whole_nanoseconds / other.whole_nanoseconds
        if isinstance(other, bool) or not isinstance(other, (int, float)):
            return NotImplemented
        if other == 0:
            raise ZeroDivisionError("division by zero")
        if isinstance(other, float):
            return Duration._from_nanos(int(self.whole_nanoseconds / other))
        quotient, _ = _truncating_divmod(self.whole_nanoseconds, abs(other))
        return Duration._from_nanos(quotient if other > 0 else -quotient)

    def __floordiv__(self, other: object) -> Duration:
        """Divide a duration by an integer, rounding toward negative infinity."""
        if isinstance(other, bool) or not isinstance(other, int):
            return NotImplemented
        if other == 0:
            raise ZeroDivisionError("integer division or modulo by zero")
        return Duration._from_nanos(self.whole_nanoseconds // other)

    def __neg__(self) -> Duration:
        """Return the negation of this duration.

        Raises:
            ConversionRange: If the duration is MIN.
        """
        return Duration._from_nanos(-self.whole_nanoseconds)

    def __pos__(self) -> Duration:
        return self

    def __abs__(self) -> Duration:
        """Return the absolute value of this duration.

        Raises:
            ConversionRange: If the duration is MIN.
        """
        if self.is_negative:
            return -self
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return (self._seconds, self._nanos) == (other._seconds, other._nanos)

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return NotImplemented
        return not result

    def __lt__(self, other: object) -> bool:
        """Check if this duration is shorter than another.

        Examples:
            >>> Duration.from_seconds(-1) < Duration.ZERO
            True
        """
        if not isinstance(other, Duration):
            return NotImplemented
        return self.whole_nanoseconds < other.whole_nanoseconds

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self.whole_nanoseconds <= other.whole_nanoseconds

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self.whole_nanoseconds > other.whole_nanoseconds

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self.whole_nanoseconds >= other.whole_nanoseconds

    def __hash__(self) -> int:
        return hash((self._seconds, self._nanos))

    def __repr__(self) -> str:
        return f"Duration(seconds={self._seconds}, nanoseconds={self._nanos})"

    def __str__(self) -> str:
        """Return a compact human-readable form such as "-1d2h3m4.5s"."""
        if self.is_zero:
            return "0s"

        sign = "-" if self.is_negative else ""
        seconds = abs(self._seconds)
        nanos = abs(self._nanos)
        days, seconds = divmod(seconds, SECONDS_PER_DAY)
        hours, seconds = divmod(seconds, SECONDS_PER_HOUR)
        minutes, seconds = divmod(seconds, SECONDS_PER_MINUTE)

        parts = []
        if days:
            parts.append(f"{days}d")
        if hours:
            parts.append(f"{hours}h")
        if minutes:
            parts.append(f"{minutes}m")
        if seconds or nanos:
            fraction = f".{nanos:09d}".rstrip("0") if nanos else ""
            parts.append(f"{seconds}{fraction}s")
        return sign + "".join(parts)

    def __bool__(self) -> bool:
        """Return True if this is a non-zero duration."""
        return not self.is_zero


Duration.ZERO = Duration()
Duration.MIN = Duration(MIN_DURATION_SECONDS, -(NANOS_PER_SECOND - 1))
Duration.MAX = Duration(MAX_DURATION_SECONDS, NANOS_PER_SECOND - 1)


__all__ = ["Duration"]
