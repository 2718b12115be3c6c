"""Weekday enumeration.

This module provides the Weekday enum with its successor/predecessor cycle
and the common numbering schemes.
"""

from __future__ import annotations

from enum import Enum


class Weekday(Enum):
    """Day of the week.

    Member values follow ISO 8601 numbering (Monday = 1 ... Sunday = 7).

    Examples:
        >>> Weekday.SUNDAY.next()
        <Weekday.MONDAY: 1>

        >>> Weekday.MONDAY.previous()
        <Weekday.SUNDAY: 7>

        >>> Weekday.WEDNESDAY.number_from_sunday()
        4
    """

    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6
    SUNDAY = 7

    @classmethod
    def from_days_from_monday(cls, days: int) -> Weekday:
        """Return the weekday ``days`` after Monday, modulo 7."""
        return cls(days % 7 + 1)

    def previous(self) -> Weekday:
        """Return the previous day of the week."""
        return Weekday.from_days_from_monday(self.value - 2)

    def next(self) -> Weekday:
        """Return the next day of the week."""
        return Weekday.from_days_from_monday(self.value)

    def number_from_monday(self) -> int:
        """Return the one-indexed number of days from Monday (ISO numbering)."""
        return self.value

    def number_from_sunday(self) -> int:
        """Return the one-indexed number of days from Sunday."""
        return self.value % 7 + 1

    def number_days_from_monday(self) -> int:
        """Return the zero-indexed number of days from Monday."""
        return self.value - 1

    def number_days_from_sunday(self) -> int:
        """Return the zero-indexed number of days from Sunday."""
        return self.value % 7

    @property
    def short_name(self) -> str:
        """Return the three-letter English abbreviation, e.g. "Mon"."""
        return self.name[:3].title()

    @property
    def long_name(self) -> str:
        """Return the full English name, e.g. "Monday"."""
        return self.name.title()

    def __str__(self) -> str:
        return self.long_name


__all__ = ["Weekday"]
