"""Tests for the Date class."""

from __future__ import annotations

import pytest

from civiltime.core.date import MAX_JULIAN_DAY, MIN_JULIAN_DAY, Date
from civiltime.core.duration import Duration
from civiltime.core.time import Time
from civiltime.errors import ComponentRange, ConversionRange
from civiltime.units.weekday import Weekday
from civiltime.util import days_in_year_month


class TestDateConstruction:
    """Tests for Date construction and validation."""

    def test_basic_construction(self) -> None:
        """Test basic date construction."""
        d = Date(2024, 1, 15)
        assert (d.year, d.month, d.day) == (2024, 1, 15)
        assert d.ordinal == 15

    def test_leap_day(self) -> None:
        """Feb 29 exists in leap years only."""
        assert Date(2020, 2, 29).ordinal == 60
        with pytest.raises(ComponentRange):
            Date(2021, 2, 29)

    @pytest.mark.parametrize("year, month", [(2019, 2), (2020, 2), (2020, 4), (2020, 12)])
    def test_day_bounds(self, year: int, month: int) -> None:
        """Day 0 and the day after month end fail with the day's bounds."""
        last = days_in_year_month(year, month)
        for day in (0, last + 1):
            with pytest.raises(ComponentRange) as info:
                Date(year, month, day)
            error = info.value
            assert error.component_name == "day"
            assert (error.minimum, error.maximum) == (1, last)
            assert error.value == day
            assert ("month", month) in error.given
            assert ("year", year) in error.given

    @pytest.mark.parametrize("month", [0, 13])
    def test_month_bounds(self, month: int) -> None:
        """Month 0 and 13 fail with the month's bounds."""
        with pytest.raises(ComponentRange) as info:
            Date(2020, month, 1)
        assert info.value.component_name == "month"
        assert (info.value.minimum, info.value.maximum) == (1, 12)

    @pytest.mark.parametrize("year", [-10000, 10000])
    def test_year_bounds(self, year: int) -> None:
        """Years outside -9999..=9999 fail."""
        with pytest.raises(ComponentRange) as info:
            Date(year, 1, 1)
        assert info.value.component_name == "year"

    def test_non_integer_rejected(self) -> None:
        """Components must be integers."""
        with pytest.raises(TypeError):
            Date(2020, 1.5, 1)  # type: ignore[arg-type]

    def test_negative_years(self) -> None:
        """Astronomical year numbering includes year 0."""
        assert Date(0, 2, 29).is_leap_year
        assert Date(-44, 3, 15).year == -44

    def test_limits(self) -> None:
        """MIN and MAX are the first and last supported days."""
        assert Date.MIN == Date(-9999, 1, 1)
        assert Date.MAX == Date(9999, 12, 31)


class TestAlternateConstructors:
    """Tests for ordinal, ISO week and Julian day constructors."""

    def test_from_ordinal_date(self) -> None:
        """Day of year 60 in a leap year is Feb 29."""
        assert Date.from_ordinal_date(2020, 60) == Date(2020, 2, 29)
        assert Date.from_ordinal_date(2019, 60) == Date(2019, 3, 1)

    def test_from_ordinal_date_bounds(self) -> None:
        """Ordinal 366 exists only in leap years."""
        assert Date.from_ordinal_date(2020, 366) == Date(2020, 12, 31)
        with pytest.raises(ComponentRange) as info:
            Date.from_ordinal_date(2019, 366)
        assert info.value.component_name == "ordinal"
        assert info.value.given == (("year", 2019),)

    def test_from_calendar_date(self) -> None:
        """from_calendar_date is the plain constructor."""
        assert Date.from_calendar_date(2019, 7, 4) == Date(2019, 7, 4)

    @pytest.mark.parametrize(
        "iso, expected",
        [
            ((2020, 1, Weekday.MONDAY), Date(2019, 12, 30)),
            ((2020, 53, Weekday.FRIDAY), Date(2021, 1, 1)),
            ((2021, 52, Weekday.SUNDAY), Date(2022, 1, 2)),
            ((2019, 1, Weekday.TUESDAY), Date(2019, 1, 1)),
        ],
    )
    def test_from_iso_week_date(self, iso: tuple[int, int, Weekday], expected: Date) -> None:
        """ISO weeks map across calendar year boundaries."""
        assert Date.from_iso_week_date(*iso) == expected

    def test_from_iso_week_date_invalid_week(self) -> None:
        """Week 53 only exists in long years."""
        with pytest.raises(ComponentRange) as info:
            Date.from_iso_week_date(2019, 53, Weekday.MONDAY)
        assert info.value.component_name == "week"
        assert info.value.maximum == 52

    def test_julian_day_round_trip(self) -> None:
        """to_julian_day and from_julian_day are inverse."""
        assert Date(1970, 1, 1).to_julian_day() == 2_440_588
        assert Date(2000, 1, 1).to_julian_day() == 2_451_545
        for day in (MIN_JULIAN_DAY, -1, 0, 1_721_426, 2_459_000, MAX_JULIAN_DAY):
            assert Date.from_julian_day(day).to_julian_day() == day

    def test_julian_day_limits(self) -> None:
        """The Julian day limits are Date.MIN and Date.MAX."""
        assert Date.from_julian_day(MIN_JULIAN_DAY) == Date.MIN
        assert Date.from_julian_day(MAX_JULIAN_DAY) == Date.MAX
        with pytest.raises(ComponentRange):
            Date.from_julian_day(MAX_JULIAN_DAY + 1)


class TestDateProperties:
    """Tests for derived properties."""

    def test_weekday(self) -> None:
        """Known weekdays."""
        assert Date(2019, 1, 1).weekday is Weekday.TUESDAY
        assert Date(2020, 2, 29).weekday is Weekday.SATURDAY
        assert Date(1970, 1, 1).weekday is Weekday.THURSDAY
        assert Date(1, 1, 1).weekday is Weekday.MONDAY

    def test_consecutive_weekdays(self) -> None:
        """Each following day advances the weekday."""
        d = Date(2019, 12, 25)
        for _ in range(20):
            assert d.next_day().weekday is d.weekday.next()
            d = d.next_day()

    def test_iso_year_week(self) -> None:
        """ISO weeks at year boundaries."""
        assert Date(2021, 1, 1).iso_year_week() == (2020, 53)
        assert Date(2019, 12, 30).iso_year_week() == (2020, 1)
        assert Date(2020, 6, 15).iso_week == 25

    def test_to_iso_week_date(self) -> None:
        """to_iso_week_date inverts from_iso_week_date."""
        d = Date(2021, 1, 3)
        assert d.to_iso_week_date() == (2020, 53, Weekday.SUNDAY)
        assert Date.from_iso_week_date(*d.to_iso_week_date()) == d

    def test_sunday_and_monday_weeks(self) -> None:
        """Week numbers count from the first Sunday or Monday."""
        # 2019-01-01 is a Tuesday: the first Sunday is Jan 6, the first Monday Jan 7.
        assert Date(2019, 1, 1).sunday_based_week == 0
        assert Date(2019, 1, 6).sunday_based_week == 1
        assert Date(2019, 1, 6).monday_based_week == 0
        assert Date(2019, 1, 7).monday_based_week == 1

    def test_to_tuples(self) -> None:
        """Calendar and ordinal tuples."""
        d = Date(2020, 3, 1)
        assert d.to_calendar_date() == (2020, 3, 1)
        assert d.to_ordinal_date() == (2020, 61)

    def test_bool_always_true(self) -> None:
        """Dates are truthy."""
        assert Date.MIN


class TestDateArithmetic:
    """Tests for Date arithmetic."""

    def test_add_days(self) -> None:
        """Adding days crosses month and year boundaries."""
        assert Date(2020, 2, 28) + Duration.from_days(1) == Date(2020, 2, 29)
        assert Date(2019, 12, 31) + Duration.from_days(1) == Date(2020, 1, 1)
        assert Duration.from_days(366) + Date(2020, 1, 1) == Date(2021, 1, 1)

    def test_partial_days_ignored(self) -> None:
        """Only whole days of the duration apply."""
        assert Date(2020, 1, 1) + Duration.from_hours(47) == Date(2020, 1, 2)
        assert Date(2020, 1, 1) - Duration.from_hours(23) == Date(2020, 1, 1)

    def test_sub_date(self) -> None:
        """Subtracting dates yields a Duration of whole days."""
        assert Date(2021, 1, 1) - Date(2020, 1, 1) == Duration.from_days(366)
        assert Date(2020, 1, 1) - Date(2020, 1, 8) == Duration.from_weeks(-1)

    def test_overflow(self) -> None:
        """Leaving the supported range raises ConversionRange."""
        with pytest.raises(ConversionRange):
            Date.MAX + Duration.from_days(1)
        with pytest.raises(ConversionRange):
            Date.MIN - Duration.from_days(1)

    def test_checked(self) -> None:
        """Checked arithmetic returns None on overflow."""
        assert Date.MAX.checked_add(Duration.from_days(1)) is None
        assert Date.MIN.checked_sub(Duration.from_days(1)) is None
        assert Date(2020, 1, 1).checked_add(Duration.from_days(1)) == Date(2020, 1, 2)

    def test_next_previous_day(self) -> None:
        """Stepping a single day, including at the limits."""
        assert Date(2020, 12, 31).next_day() == Date(2021, 1, 1)
        assert Date(2020, 1, 1).previous_day() == Date(2019, 12, 31)
        with pytest.raises(ConversionRange):
            Date.MAX.next_day()
        with pytest.raises(ConversionRange):
            Date.MIN.previous_day()

    def test_unsupported_operand(self) -> None:
        """Adding a non-Duration is a TypeError."""
        with pytest.raises(TypeError):
            Date(2020, 1, 1) + 1  # type: ignore[operator]


class TestDateComparison:
    """Tests for comparison and hashing."""

    def test_ordering(self) -> None:
        """Dates order chronologically."""
        assert Date(2019, 12, 31) < Date(2020, 1, 1)
        assert Date(-1, 12, 31) < Date(0, 1, 1)
        assert max(Date(2020, 5, 1), Date(2020, 4, 30)) == Date(2020, 5, 1)

    def test_hash(self) -> None:
        """Equal dates hash alike."""
        assert len({Date(2020, 1, 1), Date.from_ordinal_date(2020, 1)}) == 1

    def test_foreign_types(self) -> None:
        """Dates never equal other types."""
        assert Date(2020, 1, 1) != "2020-01-01"
        with pytest.raises(TypeError):
            Date(2020, 1, 1) < "2020-01-02"  # type: ignore[operator]


class TestDateCombination:
    """Tests for with_time and friends."""

    def test_with_time(self) -> None:
        """Pair a date with a time."""
        dt = Date(2020, 1, 1).with_time(Time(12, 30))
        assert (dt.year, dt.hour, dt.minute) == (2020, 12, 30)

    def test_with_hms_validates(self) -> None:
        """with_hms validates its components."""
        with pytest.raises(ComponentRange):
            Date(2020, 1, 1).with_hms(24, 0, 0)

    def test_midnight(self) -> None:
        """midnight() is the start of the day."""
        assert Date(2020, 1, 1).midnight().time == Time.MIDNIGHT


class TestDateRepr:
    """Tests for repr and str."""

    def test_repr(self) -> None:
        """repr shows the constructor call."""
        assert repr(Date(2020, 2, 29)) == "Date(2020, 2, 29)"

    def test_str(self) -> None:
        """str is YYYY-MM-DD with a sign for negative years."""
        assert str(Date(2020, 2, 29)) == "2020-02-29"
        assert str(Date(-44, 3, 15)) == "-0044-03-15"
