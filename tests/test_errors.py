"""Tests for the civiltime exception hierarchy."""

from __future__ import annotations

import pytest

from civiltime.core.date import Date
from civiltime.core.time import Time
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


def _describe(error: Error) -> str:
    """Dispatch on kind the way callers are expected to, with a default arm."""
    if error.kind is ErrorKind.COMPONENT_RANGE:
        return "range"
    if error.kind is ErrorKind.PARSE:
        return "parse"
    return "other"


class TestHierarchy:
    """Every error is a civiltime Error with a kind."""

    @pytest.mark.parametrize(
        "error, kind",
        [
            (ConversionRange(), ErrorKind.CONVERSION_RANGE),
            (ComponentRange("hour", 0, 23, 24), ErrorKind.COMPONENT_RANGE),
            (ParseError(ParseErrorKind.INVALID_HOUR), ErrorKind.PARSE),
            (FormatError(FormatErrorKind.STD_FMT_ERROR), ErrorKind.FORMAT),
            (IndeterminateOffset(), ErrorKind.INDETERMINATE_OFFSET),
        ],
    )
    def test_kind(self, error: Error, kind: ErrorKind) -> None:
        """Each subclass reports its kind."""
        assert isinstance(error, Error)
        assert error.kind is kind

    def test_catch_all(self) -> None:
        """A single except clause catches every civiltime failure."""
        with pytest.raises(Error):
            Date(2021, 2, 29)

    def test_dispatch_with_default(self) -> None:
        """Kinds without an explicit branch fall through to the default."""
        assert _describe(ComponentRange("hour", 0, 23, 24)) == "range"
        assert _describe(IndeterminateOffset()) == "other"

    def test_from_component_range_is_identity(self) -> None:
        """Converting a ComponentRange keeps the same object."""
        error = ComponentRange("minute", 0, 59, 60)
        assert Error.from_component_range(error) is error


class TestComponentRange:
    """Tests for ComponentRange."""

    def test_fields(self) -> None:
        """The error records name, bounds, value and context."""
        with pytest.raises(ComponentRange) as info:
            Date(2021, 2, 29)
        error = info.value
        assert error.component_name == "day"
        assert (error.minimum, error.maximum) == (1, 28)
        assert error.value == 29
        assert error.given == (("year", 2021), ("month", 2))

    def test_message(self) -> None:
        """The message names the bounds and the context."""
        error = ComponentRange("day", 1, 28, 29, given=(("year", 2021), ("month", 2)))
        assert str(error) == "day must be in the range 1..=28 given year=2021, month=2 (was 29)"

    def test_message_without_context(self) -> None:
        """Context-free errors omit the given clause."""
        assert str(ComponentRange("hour", 0, 23, 24)) == "hour must be in the range 0..=23 (was 24)"

    def test_equality(self) -> None:
        """Errors with the same fields are equal and hash alike."""
        a = ComponentRange("hour", 0, 23, 24)
        b = ComponentRange("hour", 0, 23, 24)
        assert a == b
        assert hash(a) == hash(b)
        assert a != ComponentRange("hour", 0, 23, 25)

    def test_time_components(self) -> None:
        """Time construction reports the failing component."""
        with pytest.raises(ComponentRange) as info:
            Time(12, 60)
        assert info.value.component_name == "minute"


class TestParseError:
    """Tests for ParseError."""

    def test_component_out_of_range_chains_cause(self) -> None:
        """The wrapped ComponentRange is reachable as the source."""
        inner = ComponentRange("month", 1, 12, 13)
        error = ParseError.component_out_of_range(inner)
        assert error.parse_kind is ParseErrorKind.COMPONENT_OUT_OF_RANGE
        assert error.component is inner
        assert error.source is inner
        assert str(error) == str(inner)

    def test_unexpected_character_message(self) -> None:
        """UNEXPECTED_CHARACTER names both characters."""
        error = ParseError(ParseErrorKind.UNEXPECTED_CHARACTER, expected="-", actual="/")
        assert str(error) == "Unexpected character. Expected `-`, found `/`."

    def test_trailing_character_message(self) -> None:
        """Without an expected character the input ran past the format."""
        error = ParseError(ParseErrorKind.UNEXPECTED_CHARACTER, actual="x")
        assert str(error) == "Unexpected trailing character `x`."

    def test_invalid_component_message(self) -> None:
        """Component kinds produce a generic message."""
        assert str(ParseError(ParseErrorKind.INVALID_HOUR)) == "The hour could not be parsed."

    def test_equality(self) -> None:
        """ParseErrors compare by their fields."""
        assert ParseError(ParseErrorKind.INVALID_YEAR) == ParseError(ParseErrorKind.INVALID_YEAR)
        assert ParseError(ParseErrorKind.INVALID_YEAR) != ParseError(ParseErrorKind.INVALID_MONTH)


class TestFormatError:
    """Tests for FormatError."""

    def test_insufficient_type_information(self) -> None:
        """The message explains the mismatch."""
        error = FormatError(FormatErrorKind.INSUFFICIENT_TYPE_INFORMATION)
        assert "requires more information" in str(error)

    def test_equality(self) -> None:
        """FormatErrors compare by kind."""
        assert FormatError(FormatErrorKind.STD_FMT_ERROR) == FormatError(FormatErrorKind.STD_FMT_ERROR)
        assert FormatError(FormatErrorKind.STD_FMT_ERROR) != FormatError(
            FormatErrorKind.INSUFFICIENT_TYPE_INFORMATION
        )


class TestSourceChain:
    """Tests for Error.source."""

    def test_no_source_by_default(self) -> None:
        """An error raised directly has no source."""
        assert ConversionRange().source is None

    def test_source_follows_cause(self) -> None:
        """An error raised from another exposes it as the source."""
        try:
            try:
                raise OSError("boom")
            except OSError as exc:
                raise IndeterminateOffset() from exc
        except IndeterminateOffset as error:
            assert isinstance(error.source, OSError)
