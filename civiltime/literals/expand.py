"""Turn validated literals into construction expressions.

The emitted expression calls the public constructors of the runtime
module, so the checks they perform at import time always pass for a
literal that validated here.
"""

from __future__ import annotations

from civiltime.literals.grammar import (
    DateLiteral,
    DateTimeLiteral,
    DurationLiteral,
    Literal,
    OffsetDateTimeLiteral,
    OffsetLiteral,
    TimeLiteral,
    parse_literal,
)

DEFAULT_RUNTIME_MODULE = "civiltime"


def _date(value: DateLiteral, module: str) -> str:
    return f"{module}.Date({value.year}, {value.month}, {value.day})"


def _time(value: TimeLiteral, module: str) -> str:
    return f"{module}.Time({value.hour}, {value.minute}, {value.second}, {value.nanosecond})"


def _offset(value: OffsetLiteral, module: str) -> str:
    return f"{module}.UtcOffset({value.hours}, {value.minutes}, {value.seconds})"


def _datetime(date: DateLiteral, time: TimeLiteral, module: str) -> str:
    return f"{module}.PrimitiveDateTime({_date(date, module)}, {_time(time, module)})"


def render(value: Literal, module: str = DEFAULT_RUNTIME_MODULE) -> str:
    """Render a parsed literal as a Python expression.

    Args:
        value: A literal returned by one of the grammar parsers.
        module: The name the runtime package is reachable under.

    Returns:
        Source text of an expression that builds the value.

    Examples:
        >>> from civiltime.literals.grammar import parse_time
        >>> render(parse_time("1:30 pm"))
        'civiltime.Time(13, 30, 0, 0)'
    """
    if isinstance(value, DateLiteral):
        return _date(value, module)
    if isinstance(value, TimeLiteral):
        return _time(value, module)
    if isinstance(value, OffsetLiteral):
        return _offset(value, module)
    if isinstance(value, DateTimeLiteral):
        return _datetime(value.date, value.time, module)
    if isinstance(value, OffsetDateTimeLiteral):
        return (
            f"{module}.OffsetDateTime("
            f"{_datetime(value.date, value.time, module)}, {_offset(value.offset, module)})"
        )
    if isinstance(value, DurationLiteral):
        return f"{module}.Duration({value.seconds}, {value.nanoseconds})"
    raise TypeError(f"cannot render {type(value).__name__}")


def expand(kind: str, text: str, module: str = DEFAULT_RUNTIME_MODULE) -> str:
    """Validate a literal and return its construction expression.

    Args:
        kind: One of "date", "time", "offset", "datetime",
            "offset_datetime" or "duration".
        text: The literal text.
        module: The name the runtime package is reachable under.

    Raises:
        LiteralError: If the literal is invalid.

    Examples:
        >>> expand("date", "2020-060")
        'civiltime.Date(2020, 2, 29)'
        >>> expand("duration", "90s", module="ct")
        'ct.Duration(90, 0)'
    """
    return render(parse_literal(kind, text), module)


__all__ = ["DEFAULT_RUNTIME_MODULE", "render", "expand"]
