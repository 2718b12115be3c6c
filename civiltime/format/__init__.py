"""Formatting and parsing.

This module converts values to and from text with a strftime-like
format description language:
    - format / format_into: render a value
    - parse: recover a value from text
    - FormatDescription: a compiled, reusable format description
    - RFC 3339 formatting and parsing

Examples:
    >>> from civiltime import Date
    >>> from civiltime.format import format, parse

    >>> format(Date(2020, 2, 29), "%A %-d %B %Y")
    'Saturday 29 February 2020'

    >>> parse("29/02/20", "%d/%m/%y", Date)
    Traceback (most recent call last):
    ...
    civiltime.errors.ParseError: Insufficient information to construct value.
"""

from __future__ import annotations

from civiltime.format.description import FormatDescription, Padding
from civiltime.format.formatter import format, format_into
from civiltime.format.parser import parse
from civiltime.format.rfc3339 import format_rfc3339, parse_rfc3339

__all__: list[str] = [
    "FormatDescription",
    "Padding",
    # Format descriptions
    "format",
    "format_into",
    "parse",
    # RFC 3339
    "format_rfc3339",
    "parse_rfc3339",
]
