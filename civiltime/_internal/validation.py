"""Validation utilities for civiltime.

Every validated constructor funnels its range checks through these
helpers so that all failures raise the same ComponentRange shape.

This module is not part of the public API.
"""

from __future__ import annotations

from civiltime._internal.rules import (
    RANGES,
    days_in_year,
    days_in_year_month,
    iso_weeks_in_year,
)
from civiltime.errors import ComponentRange


def validate_range(
    name: str,
    value: int,
    given: tuple[tuple[str, int], ...] = (),
    *,
    bounds: tuple[int, int] | None = None,
) -> int:
    """Check ``value`` against the named component's inclusive bounds.

    Args:
        name: Component name; looked up in the rules table unless
            ``bounds`` is supplied.
        value: The value to check.
        given: Context values the bounds depend on.
        bounds: Explicit (minimum, maximum) overriding the table entry.

    Returns:
        The value, unchanged.

    Raises:
        ComponentRange: If the value is outside the bounds.
    """
    minimum, maximum = bounds if bounds is not None else RANGES[name]
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an integer, got {type(value).__name__}")
    if value < minimum or value > maximum:
        raise ComponentRange(name, minimum, maximum, value, given)
    return value


def validate_year(year: int) -> int:
    """Validate that a year is within MIN_YEAR..=MAX_YEAR."""
    return validate_range("year", year)


def validate_month(month: int) -> int:
    """Validate that a month is within 1..=12."""
    return validate_range("month", month)


def validate_day(year: int, month: int, day: int) -> int:
    """Validate a day of the month.

    The year and month must already be valid. A failure names both, since
    they decide the upper bound.

    Examples:
        >>> validate_day(2021, 2, 29)
        Traceback (most recent call last):
        ...
        civiltime.errors.ComponentRange: day must be in the range 1..=28 given year=2021, month=2 (was 29)
    """
    return validate_range(
        "day",
        day,
        (("year", year), ("month", month)),
        bounds=(1, days_in_year_month(year, month)),
    )


def validate_ordinal(year: int, ordinal: int) -> int:
    """Validate a day of the year for an already valid year."""
    return validate_range(
        "ordinal",
        ordinal,
        (("year", year),),
        bounds=(1, days_in_year(year)),
    )


def validate_iso_week(year: int, week: int) -> int:
    """Validate an ISO week number for an already valid ISO year."""
    return validate_range(
        "week",
        week,
        (("year", year),),
        bounds=(1, iso_weeks_in_year(year)),
    )


__all__ = [
    "validate_range",
    "validate_year",
    "validate_month",
    "validate_day",
    "validate_ordinal",
    "validate_iso_week",
]
