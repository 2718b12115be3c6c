"""Tests for the literal helpers in civiltime.macros."""

from __future__ import annotations

import pytest

from civiltime import macros
from civiltime.core.date import Date
from civiltime.core.datetime import PrimitiveDateTime
from civiltime.core.duration import Duration
from civiltime.core.offset_datetime import OffsetDateTime
from civiltime.core.time import Time
from civiltime.errors import ComponentRange, ParseError, ParseErrorKind
from civiltime.literals.grammar import LiteralError, parse_date
from civiltime.units.offset import UtcOffset
from civiltime.units.weekday import Weekday


class TestHelpers:
    """Each helper returns the runtime value."""

    def test_date(self) -> None:
        """All three date forms."""
        assert macros.date("2020-02-29") == Date(2020, 2, 29)
        assert macros.date("2020-060") == Date(2020, 2, 29)
        assert macros.date("2020-W09-6") == Date(2020, 2, 29)

    def test_time(self) -> None:
        """24- and 12-hour clocks."""
        assert macros.time("13:30") == Time(13, 30)
        assert macros.time("1:30 pm") == Time(13, 30)

    def test_offset(self) -> None:
        """UTC and numeric offsets."""
        assert macros.offset("UTC") == UtcOffset.UTC
        assert macros.offset("-04:30") == UtcOffset(-4, -30)

    def test_datetime(self) -> None:
        """A PrimitiveDateTime."""
        assert macros.datetime("2020-02-29 23:59:59.5") == PrimitiveDateTime(
            Date(2020, 2, 29), Time(23, 59, 59, 500_000_000)
        )

    def test_offset_datetime(self) -> None:
        """An OffsetDateTime."""
        value = macros.offset_datetime("2020-01-01 0:00 UTC")
        assert value == OffsetDateTime.from_unix_timestamp(1_577_836_800)
        assert macros.offset_datetime("2020-01-01 5:30 +05:30") == value

    def test_duration(self) -> None:
        """A Duration."""
        assert macros.duration("90s") == Duration.from_seconds(90)
        assert macros.duration("-1.5d") == Duration.from_hours(-36)


class TestHelperErrors:
    """Invalid literals raise ParseError with the LiteralError chained."""

    @pytest.mark.parametrize(
        "helper, literal, kind",
        [
            (macros.date, "2021-02-29", ParseErrorKind.INVALID_DAY_OF_MONTH),
            (macros.date, "2020-13-01", ParseErrorKind.INVALID_MONTH),
            (macros.date, "2019-366", ParseErrorKind.INVALID_DAY_OF_YEAR),
            (macros.date, "2019-W53-1", ParseErrorKind.INVALID_WEEK),
            (macros.time, "24:00", ParseErrorKind.INVALID_HOUR),
            (macros.time, "12:60", ParseErrorKind.INVALID_MINUTE),
            (macros.offset, "+24", ParseErrorKind.INVALID_OFFSET),
            (macros.duration, "5 parsecs", ParseErrorKind.INSUFFICIENT_INFORMATION),
        ],
    )
    def test_kinds(self, helper, literal: str, kind: ParseErrorKind) -> None:
        """The failing component maps to a parse error kind."""
        with pytest.raises(ParseError) as info:
            helper(literal)
        assert info.value.parse_kind is kind
        assert isinstance(info.value.source, LiteralError)

    def test_trailing_text(self) -> None:
        """Trailing text is an unexpected character."""
        with pytest.raises(ParseError) as info:
            macros.date("2020-01-01x")
        assert info.value.parse_kind is ParseErrorKind.UNEXPECTED_CHARACTER
        assert info.value.actual == "x"


class TestValidatorAgreesWithRuntime:
    """The literal validator accepts exactly what the constructors accept."""

    @pytest.mark.parametrize("year", [1900, 2000, 2019, 2020, -4])
    def test_month_ends(self, year: int) -> None:
        """Days 28 to 32 of every month."""
        for month in range(1, 13):
            for day in range(28, 33):
                literal = f"{year:04d}-{month:02d}-{day:02d}"
                try:
                    expected = Date(year, month, day)
                except ComponentRange:
                    with pytest.raises(LiteralError):
                        parse_date(literal)
                else:
                    assert macros.date(literal) == expected

    @pytest.mark.parametrize("year", [2004, 2009, 2015, 2019, 2020, 2021])
    def test_iso_weeks(self, year: int) -> None:
        """Week 53 exists exactly when the runtime says so."""
        literal = f"{year}-W53-1"
        try:
            expected = Date.from_iso_week_date(year, 53, Weekday.MONDAY)
        except ComponentRange:
            with pytest.raises(LiteralError):
                parse_date(literal)
        else:
            assert macros.date(literal) == expected
