"""Internal utilities for civiltime.

This module contains private implementation details:
    - The shared table of calendar and range rules
    - ComponentRange-raising validation helpers

Note: This module is not part of the public API.
"""

from __future__ import annotations

from civiltime._internal.validation import (
    validate_day,
    validate_month,
    validate_range,
    validate_year,
)

__all__: list[str] = [
    "validate_day",
    "validate_month",
    "validate_range",
    "validate_year",
]
