"""Core value types.

This module provides the fundamental calendar types:
    - Date: Calendar date in the proleptic Gregorian calendar
    - Time: Time of day with nanosecond precision
    - Duration: Signed span of time with nanosecond precision
    - PrimitiveDateTime: Date and time without an offset
    - OffsetDateTime: Date and time at a fixed UTC offset
"""

from __future__ import annotations

from civiltime.core.date import Date
from civiltime.core.datetime import PrimitiveDateTime
from civiltime.core.duration import Duration
from civiltime.core.offset_datetime import OffsetDateTime
from civiltime.core.time import Time

__all__: list[str] = [
    "Date",
    "Duration",
    "OffsetDateTime",
    "PrimitiveDateTime",
    "Time",
]
