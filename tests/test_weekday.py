"""Tests for the Weekday enum."""

from __future__ import annotations

from civiltime.units.weekday import Weekday


class TestWeekdayCycle:
    """Tests for next() and previous()."""

    def test_next_wraps(self) -> None:
        """Sunday is followed by Monday."""
        assert Weekday.SUNDAY.next() is Weekday.MONDAY
        assert Weekday.MONDAY.next() is Weekday.TUESDAY

    def test_previous_wraps(self) -> None:
        """Monday is preceded by Sunday."""
        assert Weekday.MONDAY.previous() is Weekday.SUNDAY
        assert Weekday.SUNDAY.previous() is Weekday.SATURDAY

    def test_seven_steps_return(self) -> None:
        """Seven steps forward return to the start."""
        for day in Weekday:
            current = day
            for _ in range(7):
                current = current.next()
            assert current is day
            assert day.next().previous() is day


class TestWeekdayNumbering:
    """Tests for the numbering schemes."""

    def test_from_monday(self) -> None:
        """ISO numbering runs Monday=1 to Sunday=7."""
        assert Weekday.MONDAY.number_from_monday() == 1
        assert Weekday.SUNDAY.number_from_monday() == 7
        assert Weekday.MONDAY.number_days_from_monday() == 0

    def test_from_sunday(self) -> None:
        """Sunday-based numbering."""
        assert Weekday.SUNDAY.number_from_sunday() == 1
        assert Weekday.SATURDAY.number_from_sunday() == 7
        assert Weekday.SUNDAY.number_days_from_sunday() == 0
        assert Weekday.MONDAY.number_days_from_sunday() == 1

    def test_from_days_from_monday(self) -> None:
        """The offset from Monday wraps modulo 7."""
        assert Weekday.from_days_from_monday(0) is Weekday.MONDAY
        assert Weekday.from_days_from_monday(6) is Weekday.SUNDAY
        assert Weekday.from_days_from_monday(-1) is Weekday.SUNDAY
        assert Weekday.from_days_from_monday(7) is Weekday.MONDAY


class TestWeekdayNames:
    """Tests for names."""

    def test_names(self) -> None:
        """Short and long English names."""
        assert Weekday.WEDNESDAY.short_name == "Wed"
        assert Weekday.WEDNESDAY.long_name == "Wednesday"
        assert str(Weekday.FRIDAY) == "Friday"
