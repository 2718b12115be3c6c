"""Calendar units and offsets.

This module provides:
    - Weekday: Day of the week with ISO numbering
    - UtcOffset: Fixed offset from UTC
    - local_offset_at: Platform lookup of the local offset
"""

from __future__ import annotations

from civiltime.units.local import local_offset_at
from civiltime.units.offset import UtcOffset
from civiltime.units.weekday import Weekday

__all__: list[str] = [
    "UtcOffset",
    "Weekday",
    "local_offset_at",
]
