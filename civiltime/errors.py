"""civiltime exception hierarchy.

All civiltime exceptions inherit from Error, so callers that do not care
which operation failed can catch a single type. Callers that need the
specifics either catch the subclass or inspect ``kind``.

The kind enums may gain members in later releases. Code that dispatches on
``error.kind`` must keep a default branch.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    """The kind of failure carried by an Error."""

    CONVERSION_RANGE = "conversion_range"
    COMPONENT_RANGE = "component_range"
    PARSE = "parse"
    FORMAT = "format"
    INDETERMINATE_OFFSET = "indeterminate_offset"


class Error(Exception):
    """Base exception for all civiltime errors."""

    kind: ErrorKind

    @property
    def source(self) -> BaseException | None:
        """Return the underlying cause of this error, if any."""
        return self.__cause__

    @staticmethod
    def from_component_range(error: ComponentRange) -> Error:
        """Convert a component range failure into the unified error.

        ComponentRange is already an Error, so this is the identity. It
        exists so that call sites read the same as the other conversions.
        """
        return error


class ConversionRange(Error):
    """A value fits one type but not the narrower target type.

    Raised when arithmetic leaves the representable range, e.g. adding a
    Duration that carries a Date past year 9999.
    """

    kind = ErrorKind.CONVERSION_RANGE

    def __init__(self) -> None:
        super().__init__("Source value is out of range for the target type")

    def __eq__(self, other: object) -> bool:
        return isinstance(other, ConversionRange)

    def __hash__(self) -> int:
        return hash(ConversionRange)


class ComponentRange(Error):
    """A component provided to a constructor was out of range.

    Attributes:
        component_name: Name of the component, e.g. "day".
        minimum: Minimum allowed value, inclusive.
        maximum: Maximum allowed value, inclusive.
        value: The value that was provided.
        given: (name, value) pairs the bounds depend on. A day-of-month
            bound depends on the year and month, for instance.

    Examples:
        >>> str(ComponentRange("day", 1, 28, 29, given=(("year", 2021), ("month", 2))))
        'day must be in the range 1..=28 given year=2021, month=2 (was 29)'
    """

    kind = ErrorKind.COMPONENT_RANGE

    def __init__(
        self,
        component_name: str,
        minimum: int,
        maximum: int,
        value: int,
        given: tuple[tuple[str, int], ...] = (),
    ) -> None:
        self.component_name = component_name
        self.minimum = minimum
        self.maximum = maximum
        self.value = value
        self.given = tuple(given)
        super().__init__(self._message())

    def _message(self) -> str:
        message = f"{self.component_name} must be in the range {self.minimum}..={self.maximum}"
        if self.given:
            context = ", ".join(f"{name}={value}" for name, value in self.given)
            message += f" given {context}"
        return f"{message} (was {self.value})"

    def _key(self) -> tuple:
        return (self.component_name, self.minimum, self.maximum, self.value, self.given)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ComponentRange):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        return (
            f"ComponentRange({self.component_name!r}, {self.minimum}, {self.maximum}, "
            f"{self.value}, given={self.given!r})"
        )


class ParseErrorKind(Enum):
    """Reasons a parse can fail."""

    INVALID_NANOSECOND = "nanosecond"
    INVALID_SECOND = "second"
    INVALID_MINUTE = "minute"
    INVALID_HOUR = "hour"
    INVALID_AM_PM = "am/pm"
    INVALID_MONTH = "month"
    INVALID_YEAR = "year"
    INVALID_WEEK = "week"
    INVALID_DAY_OF_WEEK = "day of the week"
    INVALID_DAY_OF_MONTH = "day of the month"
    INVALID_DAY_OF_YEAR = "day of the year"
    INVALID_OFFSET = "offset"
    INVALID_FORMAT_SPECIFIER = "invalid_format_specifier"
    MISSING_FORMAT_SPECIFIER = "missing_format_specifier"
    UNEXPECTED_CHARACTER = "unexpected_character"
    UNEXPECTED_END_OF_STRING = "unexpected_end_of_string"
    INSUFFICIENT_INFORMATION = "insufficient_information"
    COMPONENT_OUT_OF_RANGE = "component_out_of_range"


class ParseError(Error):
    """Failed to parse a string into a value.

    Attributes:
        parse_kind: Which step of the parse failed.
        expected: For UNEXPECTED_CHARACTER, the character the format wanted,
            or None when the input continues past the end of the format.
        actual: For UNEXPECTED_CHARACTER, the character found. For
            INVALID_FORMAT_SPECIFIER, the offending specifier character.
        component: For COMPONENT_OUT_OF_RANGE, the wrapped range error.
    """

    kind = ErrorKind.PARSE

    def __init__(
        self,
        parse_kind: ParseErrorKind,
        *,
        expected: str | None = None,
        actual: str | None = None,
        component: ComponentRange | None = None,
    ) -> None:
        self.parse_kind = parse_kind
        self.expected = expected
        self.actual = actual
        self.component = component
        super().__init__(self._message())
        if component is not None:
            self.__cause__ = component

    @classmethod
    def component_out_of_range(cls, error: ComponentRange) -> ParseError:
        """Wrap a range failure found while resolving parsed components."""
        return cls(ParseErrorKind.COMPONENT_OUT_OF_RANGE, component=error)

    def _message(self) -> str:
        kind = self.parse_kind
        if kind is ParseErrorKind.INVALID_FORMAT_SPECIFIER:
            return f"Invalid format specifier `{self.actual}`."
        if kind is ParseErrorKind.MISSING_FORMAT_SPECIFIER:
            return "Missing format specifier after `%`."
        if kind is ParseErrorKind.UNEXPECTED_CHARACTER:
            if self.expected is None:
                return f"Unexpected trailing character `{self.actual}`."
            return f"Unexpected character. Expected `{self.expected}`, found `{self.actual}`."
        if kind is ParseErrorKind.UNEXPECTED_END_OF_STRING:
            return "Unexpected end of string."
        if kind is ParseErrorKind.INSUFFICIENT_INFORMATION:
            return "Insufficient information to construct value."
        if kind is ParseErrorKind.COMPONENT_OUT_OF_RANGE:
            return str(self.component)
        return f"The {kind.value} could not be parsed."

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParseError):
            return NotImplemented
        return (self.parse_kind, self.expected, self.actual, self.component) == (
            other.parse_kind,
            other.expected,
            other.actual,
            other.component,
        )

    def __hash__(self) -> int:
        return hash((self.parse_kind, self.expected, self.actual, self.component))


class FormatErrorKind(Enum):
    """Reasons formatting can fail."""

    INSUFFICIENT_TYPE_INFORMATION = "insufficient_type_information"
    STD_FMT_ERROR = "std_fmt_error"


class FormatError(Error):
    """An error occurred while formatting.

    INSUFFICIENT_TYPE_INFORMATION signals a mismatch between the format
    description and the value's type, a programming error that retrying
    cannot fix. STD_FMT_ERROR means the output sink failed; the sink's
    exception is chained as the cause.
    """

    kind = ErrorKind.FORMAT

    def __init__(self, format_kind: FormatErrorKind) -> None:
        self.format_kind = format_kind
        if format_kind is FormatErrorKind.INSUFFICIENT_TYPE_INFORMATION:
            message = "The format provided requires more information than the type provides."
        else:
            message = "An error occurred when formatting."
        super().__init__(message)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FormatError):
            return NotImplemented
        return self.format_kind is other.format_kind

    def __hash__(self) -> int:
        return hash(self.format_kind)


class IndeterminateOffset(Error):
    """The system's UTC offset could not be determined.

    The lookup is not retried and no fallback offset is substituted.
    """

    kind = ErrorKind.INDETERMINATE_OFFSET

    def __init__(self) -> None:
        super().__init__("The system's UTC offset could not be determined")

    def __eq__(self, other: object) -> bool:
        return isinstance(other, IndeterminateOffset)

    def __hash__(self) -> int:
        return hash(IndeterminateOffset)


__all__ = [
    "ErrorKind",
    "Error",
    "ConversionRange",
    "ComponentRange",
    "ParseErrorKind",
    "ParseError",
    "FormatErrorKind",
    "FormatError",
    "IndeterminateOffset",
]
