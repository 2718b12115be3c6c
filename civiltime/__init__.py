"""civiltime: calendar dates, times and offsets with nanosecond precision.

civiltime models civil time in the proleptic Gregorian calendar, for years
-9999 through 9999. Every value is immutable and validated on
construction; arithmetic that leaves the representable range raises
instead of wrapping.

Core Types:
    Date: Calendar date (year, month, day)
    Time: Time of day (hour, minute, second, nanosecond)
    PrimitiveDateTime: Date and time without an offset
    OffsetDateTime: Date and time at a fixed UTC offset
    Duration: Signed span of time with nanosecond precision

Units:
    Weekday: Day of the week
    UtcOffset: Fixed offset from UTC, strictly less than a day

Format Functions:
    format, parse: strftime-like format descriptions
    format_rfc3339, parse_rfc3339: RFC 3339 timestamps

Exceptions:
    Error: Base exception
    ConversionRange: Arithmetic left the representable range
    ComponentRange: A component is outside its valid range
    ParseError: Text did not match its format description
    FormatError: A value could not be formatted
    IndeterminateOffset: The local offset could not be determined

Example:
    >>> from civiltime import Date, Duration
    >>> Date(2020, 2, 28) + Duration.from_days(1)
    Date(2020, 2, 29)
    >>> Date(2020, 2, 29).format("%A %-d %B %Y")
    'Saturday 29 February 2020'
"""

from __future__ import annotations

__version__ = "0.2.0"

# Core types
from civiltime.core.date import Date
from civiltime.core.datetime import PrimitiveDateTime
from civiltime.core.duration import Duration
from civiltime.core.offset_datetime import OffsetDateTime
from civiltime.core.time import Time

# Units
from civiltime.units.offset import UtcOffset
from civiltime.units.weekday import Weekday

# Exceptions
from civiltime.errors import (
    ComponentRange,
    ConversionRange,
    Error,
    ErrorKind,
    FormatError,
    FormatErrorKind,
    IndeterminateOffset,
    ParseError,
    ParseErrorKind,
)

# Calendar helpers
from civiltime.util import days_in_year, days_in_year_month, is_leap_year, weeks_in_year

# Format functions
from civiltime.format import (
    FormatDescription,
    format,
    format_into,
    format_rfc3339,
    parse,
    parse_rfc3339,
)

__all__: list[str] = [
    "__version__",
    # Core types
    "Date",
    "Duration",
    "OffsetDateTime",
    "PrimitiveDateTime",
    "Time",
    # Units
    "UtcOffset",
    "Weekday",
    # Exceptions
    "Error",
    "ErrorKind",
    "ConversionRange",
    "ComponentRange",
    "ParseError",
    "ParseErrorKind",
    "FormatError",
    "FormatErrorKind",
    "IndeterminateOffset",
    # Calendar helpers
    "is_leap_year",
    "days_in_year",
    "days_in_year_month",
    "weeks_in_year",
    # Format functions
    "FormatDescription",
    "format",
    "format_into",
    "parse",
    "format_rfc3339",
    "parse_rfc3339",
]
