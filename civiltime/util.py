"""Calendar helpers.

These functions answer calendar questions about a year or month without
constructing a value.
"""

from __future__ import annotations

from civiltime._internal import rules
from civiltime._internal.validation import validate_month


def is_leap_year(year: int) -> bool:
    """Return True if ``year`` is a leap year in the proleptic Gregorian calendar.

    Defined for every integer, including years before 1.

    Examples:
        >>> is_leap_year(2000)
        True
        >>> is_leap_year(1900)
        False
        >>> is_leap_year(-4)
        True
    """
    return rules.is_leap_year(year)


def days_in_year(year: int) -> int:
    """Return the number of days in ``year``: 366 in leap years, else 365."""
    return rules.days_in_year(year)


def days_in_year_month(year: int, month: int) -> int:
    """Return the number of days in a month of a year.

    Args:
        year: Any year.
        month: The month (1-12).

    Returns:
        28 to 31.

    Raises:
        ComponentRange: If ``month`` is outside 1..=12.

    Examples:
        >>> days_in_year_month(2020, 2)
        29
        >>> days_in_year_month(2019, 2)
        28
    """
    validate_month(month)
    return rules.days_in_year_month(year, month)


def weeks_in_year(year: int) -> int:
    """Return the number of ISO 8601 weeks in ``year`` (52 or 53).

    A year has 53 weeks when January 1 is a Thursday, or a Wednesday in
    a leap year.

    Examples:
        >>> weeks_in_year(2019)
        52
        >>> weeks_in_year(2020)
        53
    """
    from civiltime.core.date import Date
    from civiltime.units.weekday import Weekday

    jan1 = Date._from_ordinal_unchecked(year, 1).weekday
    if jan1 is Weekday.THURSDAY:
        return 53
    if jan1 is Weekday.WEDNESDAY and rules.is_leap_year(year):
        return 53
    return 52


__all__ = ["is_leap_year", "days_in_year", "days_in_year_month", "weeks_in_year"]
