"""Calendar and range rules shared by the runtime and the literal validator.

This module is the single source for every bound civiltime enforces. Both
the value constructors (through civiltime._internal.validation) and the
build-time literal validator (civiltime.literals.grammar) read from here,
so the two stay in sync. It must stay free of imports from the rest of
civiltime.

This module is not part of the public API.
"""

from __future__ import annotations

# Time unit conversions
NANOS_PER_MICROSECOND: int = 1_000
NANOS_PER_MILLISECOND: int = 1_000_000
NANOS_PER_SECOND: int = 1_000_000_000

SECONDS_PER_MINUTE: int = 60
SECONDS_PER_HOUR: int = 60 * SECONDS_PER_MINUTE
SECONDS_PER_DAY: int = 24 * SECONDS_PER_HOUR  # 86_400
SECONDS_PER_WEEK: int = 7 * SECONDS_PER_DAY

NANOS_PER_MINUTE: int = SECONDS_PER_MINUTE * NANOS_PER_SECOND
NANOS_PER_HOUR: int = SECONDS_PER_HOUR * NANOS_PER_SECOND
NANOS_PER_DAY: int = SECONDS_PER_DAY * NANOS_PER_SECOND

# Year limits
MIN_YEAR: int = -9999
MAX_YEAR: int = 9999

# Duration seconds are held to a signed 64-bit integer.
MIN_DURATION_SECONDS: int = -(2**63)
MAX_DURATION_SECONDS: int = 2**63 - 1

# An offset is strictly less than a day in magnitude.
MAX_OFFSET_SECONDS: int = SECONDS_PER_DAY - 1

# Julian day number of 0001-01-01 in the proleptic Gregorian calendar.
JULIAN_DAY_OF_YEAR_ONE: int = 1_721_426
# Julian day number of 1970-01-01.
UNIX_EPOCH_JULIAN_DAY: int = 2_440_588

# Inclusive bounds per component name.
RANGES: dict[str, tuple[int, int]] = {
    "year": (MIN_YEAR, MAX_YEAR),
    "month": (1, 12),
    "week": (1, 53),
    "weekday": (1, 7),
    "hour": (0, 23),
    "minute": (0, 59),
    "second": (0, 59),
    "millisecond": (0, 999),
    "microsecond": (0, 999_999),
    "nanosecond": (0, 999_999_999),
    "hours": (-23, 23),
    "minutes": (-59, 59),
    "seconds": (-59, 59),
    "offset": (-MAX_OFFSET_SECONDS, MAX_OFFSET_SECONDS),
}

# Days in each month, common years first, then leap years.
DAYS_IN_MONTH_COMMON_LEAP: tuple[tuple[int, ...], tuple[int, ...]] = (
    (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31),
    (31, 29, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31),
)

# Ordinal of the last day of each month, common years first, then leap
# years. Index 0 is the day before January 1.
CUMULATIVE_DAYS_COMMON_LEAP: tuple[tuple[int, ...], tuple[int, ...]] = (
    (0, 31, 59, 90, 120, 151, 181, 212, 243, 273, 304, 334, 365),
    (0, 31, 60, 91, 121, 152, 182, 213, 244, 274, 305, 335, 366),
)


def is_leap_year(year: int) -> bool:
    """Check if a year is a leap year in the proleptic Gregorian calendar.

    A year is a leap year if:
    - Divisible by 4, AND
    - NOT divisible by 100, unless also divisible by 400

    Examples:
        >>> is_leap_year(2000)
        True
        >>> is_leap_year(1900)
        False
    """
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_year(year: int) -> int:
    """Return 366 for leap years, 365 otherwise."""
    return 365 + is_leap_year(year)


def days_in_year_month(year: int, month: int) -> int:
    """Return the number of days in a month.

    The caller guarantees 1 <= month <= 12.
    """
    return DAYS_IN_MONTH_COMMON_LEAP[is_leap_year(year)][month - 1]


def ymd_to_ordinal(year: int, month: int, day: int) -> int:
    """Return the day of the year for a calendar date known to be valid."""
    return CUMULATIVE_DAYS_COMMON_LEAP[is_leap_year(year)][month - 1] + day


def ordinal_to_md(year: int, ordinal: int) -> tuple[int, int]:
    """Return (month, day) for a day of the year known to be valid."""
    cumulative = CUMULATIVE_DAYS_COMMON_LEAP[is_leap_year(year)]
    month = 12
    while ordinal <= cumulative[month - 1]:
        month -= 1
    return month, ordinal - cumulative[month - 1]


def days_before_year(year: int) -> int:
    """Return the number of days from 0001-01-01 to January 1 of ``year``.

    Negative for years before 1. Python's floor division makes the formula
    hold for the proleptic years as well.
    """
    y = year - 1
    return y * 365 + y // 4 - y // 100 + y // 400


def weekday_index(year: int, ordinal: int) -> int:
    """Return the weekday of a date as days from Monday (Monday=0)."""
    # 0001-01-01 was a Monday.
    return (days_before_year(year) + ordinal - 1) % 7


def iso_weeks_in_year(year: int) -> int:
    """Return 52 or 53 per the ISO 8601 week-numbering rule."""
    jan1 = weekday_index(year, 1)
    if jan1 == 3 or (jan1 == 2 and is_leap_year(year)):
        return 53
    return 52


__all__ = [
    "NANOS_PER_MICROSECOND",
    "NANOS_PER_MILLISECOND",
    "NANOS_PER_SECOND",
    "NANOS_PER_MINUTE",
    "NANOS_PER_HOUR",
    "NANOS_PER_DAY",
    "SECONDS_PER_MINUTE",
    "SECONDS_PER_HOUR",
    "SECONDS_PER_DAY",
    "SECONDS_PER_WEEK",
    "MIN_YEAR",
    "MAX_YEAR",
    "MIN_DURATION_SECONDS",
    "MAX_DURATION_SECONDS",
    "MAX_OFFSET_SECONDS",
    "JULIAN_DAY_OF_YEAR_ONE",
    "UNIX_EPOCH_JULIAN_DAY",
    "RANGES",
    "DAYS_IN_MONTH_COMMON_LEAP",
    "CUMULATIVE_DAYS_COMMON_LEAP",
    "is_leap_year",
    "days_in_year",
    "days_in_year_month",
    "ymd_to_ordinal",
    "ordinal_to_md",
    "days_before_year",
    "weekday_index",
    "iso_weeks_in_year",
]
