"""Format descriptions: the strftime-like specifier language.

A format description is compiled once into a tuple of items, either
literal text or a component specifier with its padding. Both the
formatter and the parser walk the same compiled items, so a description
that compiles is valid for both directions.

Supported Specifiers:
    %a - Abbreviated weekday name (Mon)
    %A - Full weekday name (Monday)
    %b - Abbreviated month name (Jan)
    %B - Full month name (January)
    %C - Century, year // 100 (20)
    %d - Day of the month (01-31)
    %D - Equivalent to %m/%d/%y
    %F - Equivalent to %Y-%m-%d
    %g - Last two digits of the ISO week-based year (20)
    %G - ISO week-based year (2020)
    %H - Hour, 24-hour clock (00-23)
    %I - Hour, 12-hour clock (01-12)
    %j - Day of the year (001-366)
    %m - Month (01-12)
    %M - Minute (00-59)
    %N - Fractional second, minimal digits (5, 123, 000000001)
    %p - am/pm
    %P - AM/PM
    %r - Equivalent to %I:%M:%S %p
    %R - Equivalent to %H:%M
    %S - Second (00-59)
    %T - Equivalent to %H:%M:%S
    %u - Weekday, Monday = 1 (1-7)
    %U - Week of the year, Sunday-based (00-53)
    %V - ISO week number (01-53)
    %w - Weekday, Sunday = 0 (0-6)
    %W - Week of the year, Monday-based (00-53)
    %y - Last two digits of the year (20)
    %Y - Year, at least four digits, signed when negative (2020, -0044)
    %z - UTC offset, +HH:MM with :SS when the seconds are non-zero
    %% - Literal %

Padding Modifiers (numeric specifiers only):
    %-d - No padding (5)
    %_d - Pad with spaces ( 5)
    %0d - Pad with zeros (05), the default
"""

from __future__ import annotations

import functools
from dataclasses import dataclass
from enum import Enum

from civiltime.errors import ParseError, ParseErrorKind


class Padding(Enum):
    """How a numeric component is padded to its width."""

    NONE = "-"
    SPACE = "_"
    ZERO = "0"


class Requires(Enum):
    """Which part of a value a specifier reads or writes."""

    DATE = "date"
    TIME = "time"
    OFFSET = "offset"


@dataclass(frozen=True)
class Specifier:
    """Static description of one specifier character.

    Attributes:
        char: The specifier character following ``%``.
        requires: The value part it needs.
        width: Digit count for numeric specifiers, 0 otherwise.
        signed: Whether a leading ``-`` is part of the number.
        error: Parse error kind when the component cannot be read.
    """

    char: str
    requires: Requires
    width: int
    signed: bool
    error: ParseErrorKind

    @property
    def numeric(self) -> bool:
        return self.width > 0


def _spec(char: str, requires: Requires, width: int, error: ParseErrorKind, signed: bool = False) -> Specifier:
    return Specifier(char, requires, width, signed, error)


_D, _T, _O = Requires.DATE, Requires.TIME, Requires.OFFSET
_K = ParseErrorKind

SPECIFIERS: dict[str, Specifier] = {
    "a": _spec("a", _D, 0, _K.INVALID_DAY_OF_WEEK),
    "A": _spec("A", _D, 0, _K.INVALID_DAY_OF_WEEK),
    "b": _spec("b", _D, 0, _K.INVALID_MONTH),
    "B": _spec("B", _D, 0, _K.INVALID_MONTH),
    "C": _spec("C", _D, 2, _K.INVALID_YEAR, signed=True),
    "d": _spec("d", _D, 2, _K.INVALID_DAY_OF_MONTH),
    "g": _spec("g", _D, 2, _K.INVALID_YEAR),
    "G": _spec("G", _D, 4, _K.INVALID_YEAR, signed=True),
    "H": _spec("H", _T, 2, _K.INVALID_HOUR),
    "I": _spec("I", _T, 2, _K.INVALID_HOUR),
    "j": _spec("j", _D, 3, _K.INVALID_DAY_OF_YEAR),
    "m": _spec("m", _D, 2, _K.INVALID_MONTH),
    "M": _spec("M", _T, 2, _K.INVALID_MINUTE),
    "N": _spec("N", _T, 0, _K.INVALID_NANOSECOND),
    "p": _spec("p", _T, 0, _K.INVALID_AM_PM),
    "P": _spec("P", _T, 0, _K.INVALID_AM_PM),
    "S": _spec("S", _T, 2, _K.INVALID_SECOND),
    "u": _spec("u", _D, 1, _K.INVALID_DAY_OF_WEEK),
    "U": _spec("U", _D, 2, _K.INVALID_WEEK),
    "V": _spec("V", _D, 2, _K.INVALID_WEEK),
    "w": _spec("w", _D, 1, _K.INVALID_DAY_OF_WEEK),
    "W": _spec("W", _D, 2, _K.INVALID_WEEK),
    "y": _spec("y", _D, 2, _K.INVALID_YEAR),
    "Y": _spec("Y", _D, 4, _K.INVALID_YEAR, signed=True),
    "z": _spec("z", _O, 0, _K.INVALID_OFFSET),
}

# Shorthands that expand to other specifiers.
COMPOSITES: dict[str, str] = {
    "D": "%m/%d/%y",
    "F": "%Y-%m-%d",
    "r": "%I:%M:%S %p",
    "R": "%H:%M",
    "T": "%H:%M:%S",
}


@dataclass(frozen=True)
class Literal:
    """Text copied verbatim when formatting and matched exactly when parsing."""

    text: str


@dataclass(frozen=True)
class Component:
    """A specifier together with its padding."""

    specifier: Specifier
    padding: Padding = Padding.ZERO


Item = Literal | Component


class FormatDescription:
    """A compiled format description.

    Compile with ``FormatDescription.compile(text)``; the most
    recently used texts are cached, so repeated use of the same text is
    cheap.

    Examples:
        >>> desc = FormatDescription.compile("%F")
        >>> [type(item).__name__ for item in desc.items]
        ['Component', 'Literal', 'Component', 'Literal', 'Component']

        >>> FormatDescription.compile("%Q")
        Traceback (most recent call last):
        ...
        civiltime.errors.ParseError: Invalid format specifier `Q`.
    """

    __slots__ = ("_text", "_items")

    def __init__(self, text: str, items: tuple[Item, ...]) -> None:
        self._text = text
        self._items = items

    @classmethod
    def compile(cls, text: str) -> FormatDescription:
        """Compile ``text`` into a FormatDescription.

        Raises:
            ParseError: INVALID_FORMAT_SPECIFIER for an unknown specifier
                or a padding modifier on a non-numeric one,
                MISSING_FORMAT_SPECIFIER for a trailing ``%``.
        """
        return _compile(text)

    @property
    def text(self) -> str:
        return self._text

    @property
    def items(self) -> tuple[Item, ...]:
        return self._items

    @property
    def requires(self) -> frozenset[Requires]:
        """Return the value parts this description reads."""
        return frozenset(item.specifier.requires for item in self._items if isinstance(item, Component))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FormatDescription):
            return NotImplemented
        return self._items == other._items

    def __hash__(self) -> int:
        return hash(self._items)

    def __repr__(self) -> str:
        return f"FormatDescription({self._text!r})"


def _parse_items(text: str) -> list[Item]:
    items: list[Item] = []
    literal: list[str] = []

    def flush() -> None:
        if literal:
            items.append(Literal("".join(literal)))
            literal.clear()

    i = 0
    while i < len(text):
        char = text[i]
        i += 1
        if char != "%":
            literal.append(char)
            continue

        if i >= len(text):
            raise ParseError(ParseErrorKind.MISSING_FORMAT_SPECIFIER)
        char = text[i]
        i += 1

        if char == "%":
            literal.append("%")
            continue

        padding = None
        if char in "-_0":
            padding = Padding(char)
            if i >= len(text):
                raise ParseError(ParseErrorKind.MISSING_FORMAT_SPECIFIER)
            char = text[i]
            i += 1

        if char in COMPOSITES:
            if padding is not None:
                raise ParseError(ParseErrorKind.INVALID_FORMAT_SPECIFIER, actual=char)
            flush()
            items.extend(_parse_items(COMPOSITES[char]))
            continue

        specifier = SPECIFIERS.get(char)
        if specifier is None or (padding is not None and not specifier.numeric):
            raise ParseError(ParseErrorKind.INVALID_FORMAT_SPECIFIER, actual=char)

        flush()
        items.append(Component(specifier, padding or Padding.ZERO))

    flush()
    return items


_CACHE_SIZE = 256


@functools.lru_cache(maxsize=_CACHE_SIZE)
def _compile(text: str) -> FormatDescription:
    items = _parse_items(text)

    # Merge literals that meet across a composite expansion.
    merged: list[Item] = []
    for item in items:
        if isinstance(item, Literal) and merged and isinstance(merged[-1], Literal):
            merged[-1] = Literal(merged[-1].text + item.text)
        else:
            merged.append(item)
    return FormatDescription(text, tuple(merged))


def compile_format(fmt: str | FormatDescription) -> FormatDescription:
    """Return ``fmt`` compiled, passing FormatDescription instances through."""
    if isinstance(fmt, FormatDescription):
        return fmt
    return FormatDescription.compile(fmt)


__all__ = [
    "Padding",
    "Requires",
    "Specifier",
    "SPECIFIERS",
    "COMPOSITES",
    "Literal",
    "Component",
    "Item",
    "FormatDescription",
    "compile_format",
]
