"""Tests for UtcOffset and the local offset lookup."""

from __future__ import annotations

import pytest

from civiltime.core.offset_datetime import OffsetDateTime
from civiltime.errors import ComponentRange, IndeterminateOffset
from civiltime.units.local import local_offset_at
from civiltime.units.offset import UtcOffset


class TestUtcOffsetConstruction:
    """Tests for UtcOffset construction."""

    def test_components(self) -> None:
        """Components share one sign."""
        offset = UtcOffset(-5, -30, 0)
        assert offset.whole_seconds == -(5 * 3600 + 30 * 60)
        assert offset.as_hms() == (-5, -30, 0)
        assert offset.whole_hours == -5
        assert offset.whole_minutes == -330
        assert offset.minutes_past_hour == -30

    def test_minutes_only(self) -> None:
        """A negative offset under an hour is expressed in minutes."""
        assert UtcOffset(0, -30).whole_seconds == -1800

    @pytest.mark.parametrize("hours", [-24, 24])
    def test_hours_bounds(self, hours: int) -> None:
        """An offset is strictly less than a day."""
        with pytest.raises(ComponentRange) as info:
            UtcOffset(hours)
        assert info.value.component_name == "hours"

    def test_sign_disagreement(self) -> None:
        """Minutes of the opposite sign to hours fail with hours as context."""
        with pytest.raises(ComponentRange) as info:
            UtcOffset(1, -30)
        assert info.value.component_name == "minutes"
        assert info.value.given == (("hours", 1),)

    def test_seconds_sign_disagreement(self) -> None:
        """Seconds disagreeing with minutes name the minutes."""
        with pytest.raises(ComponentRange) as info:
            UtcOffset(0, 30, -5)
        assert info.value.component_name == "seconds"
        assert info.value.given == (("minutes", 30),)

    def test_from_whole_seconds(self) -> None:
        """Whole seconds map to components."""
        assert UtcOffset.from_whole_seconds(-3661).as_hms() == (-1, -1, -1)
        with pytest.raises(ComponentRange):
            UtcOffset.from_whole_seconds(86_400)

    def test_predicates(self) -> None:
        """is_utc, is_positive and is_negative."""
        assert UtcOffset.UTC.is_utc
        assert UtcOffset(1).is_positive
        assert (-UtcOffset(1)).is_negative


class TestUtcOffsetText:
    """Tests for formatting and parsing."""

    def test_str(self) -> None:
        """Offsets render as ±HH:MM, with seconds only when present."""
        assert str(UtcOffset(5, 30)) == "+05:30"
        assert str(UtcOffset(-4, -30)) == "-04:30"
        assert str(UtcOffset.UTC) == "+00:00"
        assert str(UtcOffset(0, 0, 15)) == "+00:00:15"

    def test_parse(self) -> None:
        """parse reads the default %z format."""
        assert UtcOffset.parse("-03:30") == UtcOffset(-3, -30)
        assert UtcOffset.parse("+01:02:03") == UtcOffset(1, 2, 3)

    def test_repr(self) -> None:
        """repr shows the signed components."""
        assert repr(UtcOffset(-3, -30)) == "UtcOffset(-3, -30, 0)"

    def test_ordering(self) -> None:
        """Offsets order by seconds east of UTC."""
        assert UtcOffset(-1) < UtcOffset.UTC < UtcOffset(0, 0, 1)


class TestLocalOffset:
    """Tests for the local offset lookup through a provider."""

    def test_provider_value(self, fixed_offset_provider) -> None:
        """The provider's seconds become a UtcOffset."""
        assert local_offset_at(0, fixed_offset_provider) == UtcOffset(2)

    def test_provider_receives_timestamp(self) -> None:
        """The lookup passes the Unix timestamp through."""
        seen: list[int] = []

        def provider(timestamp: int) -> int:
            seen.append(timestamp)
            return 0

        instant = OffsetDateTime.from_unix_timestamp(1_600_000_000)
        assert UtcOffset.local_offset_at(instant, provider) == UtcOffset.UTC
        assert seen == [1_600_000_000]

    def test_provider_failure(self) -> None:
        """A failing provider gives IndeterminateOffset with the cause."""

        def provider(timestamp: int) -> int:
            raise OSError("no tz database")

        with pytest.raises(IndeterminateOffset) as info:
            local_offset_at(0, provider)
        assert isinstance(info.value.source, OSError)

    def test_provider_out_of_range(self) -> None:
        """An offset of a day or more is not accepted."""
        with pytest.raises(IndeterminateOffset):
            local_offset_at(0, lambda timestamp: 86_400)

    def test_not_cached(self) -> None:
        """Each call queries the provider again."""
        answers = iter([3600, 7200])

        def provider(timestamp: int) -> int:
            return next(answers)

        assert local_offset_at(0, provider) == UtcOffset(1)
        assert local_offset_at(0, provider) == UtcOffset(2)

    def test_now_local_uses_provider(self, fixed_offset_provider) -> None:
        """now_local applies the provider's offset."""
        now = OffsetDateTime.now_local(fixed_offset_provider)
        assert now.offset == UtcOffset(2)

    def test_current_local_offset(self, fixed_offset_provider) -> None:
        """current_local_offset goes through the same lookup."""
        assert UtcOffset.current_local_offset(fixed_offset_provider) == UtcOffset(2)
