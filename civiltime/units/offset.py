"""UtcOffset class representing a fixed offset from UTC.

Only fixed numeric offsets are modelled; named zones and their daylight
saving history are out of scope.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from civiltime._internal.rules import SECONDS_PER_HOUR, SECONDS_PER_MINUTE
from civiltime._internal.validation import validate_range

if TYPE_CHECKING:
    from civiltime.core.offset_datetime import OffsetDateTime
    from civiltime.units.local import OffsetProvider


def _split_hms(seconds: int) -> tuple[int, int, int]:
    """Split signed seconds into hours, minutes and seconds sharing its sign."""
    magnitude = abs(seconds)
    hours, rest = divmod(magnitude, SECONDS_PER_HOUR)
    minutes, secs = divmod(rest, SECONDS_PER_MINUTE)
    if seconds < 0:
        return -hours, -minutes, -secs
    return hours, minutes, secs


def _same_sign_bounds(sign: int, limit: int) -> tuple[int, int]:
    if sign > 0:
        return 0, limit
    if sign < 0:
        return -limit, 0
    return -limit, limit


class UtcOffset:
    """A signed offset from UTC with one-second resolution.

    The offset is stored in seconds east of UTC. Its magnitude is strictly
    less than 24 hours and its hour, minute and second components always
    share one sign.

    Examples:
        >>> UtcOffset.from_hms(5, 30, 0).whole_seconds
        19800

        >>> UtcOffset.from_hms(-5, 30, 0)
        Traceback (most recent call last):
        ...
        civiltime.errors.ComponentRange: minutes must be in the range -59..=0 given hours=-5 (was 30)

        >>> str(UtcOffset.from_whole_seconds(-3600))
        '-01:00'
    """

    __slots__ = ("_seconds",)

    UTC: UtcOffset

    def __init__(self, hours: int = 0, minutes: int = 0, seconds: int = 0) -> None:
        """Create an offset from hours, minutes and seconds.

        Args:
            hours: Hours east of UTC (-23 to 23).
            minutes: Minutes (-59 to 59), with the sign of ``hours``.
            seconds: Seconds (-59 to 59), with the sign of the larger units.

        Raises:
            ComponentRange: If a component is out of range or its sign
                disagrees with a larger non-zero component. The larger
                components are reported as context.
        """
        validate_range("hours", hours)
        sign = (hours > 0) - (hours < 0)
        validate_range(
            "minutes",
            minutes,
            (("hours", hours),) if sign else (),
            bounds=_same_sign_bounds(sign, 59),
        )
        context: tuple[tuple[str, int], ...] = ()
        if sign:
            context = (("hours", hours), ("minutes", minutes))
        else:
            sign = (minutes > 0) - (minutes < 0)
            if sign:
                context = (("minutes", minutes),)
        validate_range("seconds", seconds, context, bounds=_same_sign_bounds(sign, 59))

        self._seconds: int = hours * SECONDS_PER_HOUR + minutes * SECONDS_PER_MINUTE + seconds

    @classmethod
    def _from_seconds(cls, seconds: int) -> UtcOffset:
        """Create an offset without validation.

        The caller guarantees abs(seconds) <= MAX_OFFSET_SECONDS.
        """
        instance = object.__new__(cls)
        instance._seconds = seconds
        return instance

    @classmethod
    def from_hms(cls, hours: int, minutes: int, seconds: int) -> UtcOffset:
        """Create an offset from hours, minutes and seconds. Same as ``UtcOffset(...)``."""
        return cls(hours, minutes, seconds)

    @classmethod
    def from_whole_seconds(cls, seconds: int) -> UtcOffset:
        """Create an offset from a signed number of seconds.

        Raises:
            ComponentRange: If ``seconds`` is outside -86399..=86399.
        """
        validate_range("offset", seconds)
        return cls._from_seconds(seconds)

    @classmethod
    def local_offset_at(
        cls, datetime: OffsetDateTime, provider: OffsetProvider | None = None
    ) -> UtcOffset:
        """Return the local offset in effect at the instant ``datetime``.

        Raises:
            IndeterminateOffset: If the platform cannot supply the offset.
        """
        from civiltime.units.local import local_offset_at

        return local_offset_at(datetime.unix_timestamp, provider)

    @classmethod
    def current_local_offset(cls, provider: OffsetProvider | None = None) -> UtcOffset:
        """Return the local offset in effect now.

        Raises:
            IndeterminateOffset: If the platform cannot supply the offset.
        """
        from civiltime.core.offset_datetime import OffsetDateTime

        return cls.local_offset_at(OffsetDateTime.now_utc(), provider)

    @classmethod
    def parse(cls, text: str, fmt: str = "%z") -> UtcOffset:
        """Parse an offset from ``text`` using a format description.

        Examples:
            >>> UtcOffset.parse("-03:30")
            UtcOffset(-3, -30, 0)
        """
        from civiltime.format import parse

        return parse(text, fmt, cls)

    @property
    def whole_hours(self) -> int:
        """Return the whole hours, truncated toward zero."""
        return _split_hms(self._seconds)[0]

    @property
    def whole_minutes(self) -> int:
        """Return the offset in whole minutes, truncated toward zero."""
        magnitude = abs(self._seconds) // SECONDS_PER_MINUTE
        return -magnitude if self._seconds < 0 else magnitude

    @property
    def whole_seconds(self) -> int:
        """Return the offset in seconds east of UTC."""
        return self._seconds

    @property
    def minutes_past_hour(self) -> int:
        return _split_hms(self._seconds)[1]

    @property
    def seconds_past_minute(self) -> int:
        return _split_hms(self._seconds)[2]

    @property
    def is_utc(self) -> bool:
        return self._seconds == 0

    @property
    def is_positive(self) -> bool:
        return self._seconds > 0

    @property
    def is_negative(self) -> bool:
        return self._seconds < 0

    def as_hms(self) -> tuple[int, int, int]:
        """Return (hours, minutes, seconds), all sharing one sign."""
        return _split_hms(self._seconds)

    def format(self, fmt: str = "%z") -> str:
        """Format this offset with a format description."""
        from civiltime.format import format as format_value

        return format_value(self, fmt)

    def __neg__(self) -> UtcOffset:
        return UtcOffset._from_seconds(-self._seconds)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UtcOffset):
            return NotImplemented
        return self._seconds == other._seconds

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return NotImplemented
        return not result

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, UtcOffset):
            return NotImplemented
        return self._seconds < other._seconds

    def __le__(self, other: object) -> bool:
        if not isinstance(other, UtcOffset):
            return NotImplemented
        return self._seconds <= other._seconds

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, UtcOffset):
            return NotImplemented
        return self._seconds > other._seconds

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, UtcOffset):
            return NotImplemented
        return self._seconds >= other._seconds

    def __hash__(self) -> int:
        return hash(self._seconds)

    def __repr__(self) -> str:
        hours, minutes, seconds = self.as_hms()
        return f"UtcOffset({hours}, {minutes}, {seconds})"

    def __str__(self) -> str:
        """Return the offset as ±HH:MM, with :SS when seconds are non-zero."""
        return self.format("%z")


UtcOffset.UTC = UtcOffset._from_seconds(0)


__all__ = ["UtcOffset"]
