"""Tests for date pattern parsing."""

import pytest

from qalendr.dates.patterns import (
    EasterPattern,
    FixedDatePattern,
    NamedPattern,
    Occurrence,
    Weekday,
    WeekdayOfMonthPattern,
    parse_pattern,
)
from qalendr.exceptions import DateResolutionError, UnknownPatternError

pytestmark = pytest.mark.unit


class TestParsePattern:
    """Test the pattern grammar."""

    def test_parse_pattern_when_month_day_then_fixed(self) -> None:
        assert parse_pattern("12-25") == FixedDatePattern(month=12, day=25)

    def test_parse_pattern_when_feb_29_then_accepted(self) -> None:
        """Feb 29 is a valid key; whether it exists depends on the year."""
        assert parse_pattern("02-29") == FixedDatePattern(month=2, day=29)

    @pytest.mark.parametrize(
        ("text", "offset"),
        [("easter", 0), ("easter+1", 1), ("easter-2", -2), ("easter+60", 60)],
    )
    def test_parse_pattern_when_easter_then_offset(self, text: str, offset: int) -> None:
        assert parse_pattern(text) == EasterPattern(offset=offset)

    def test_parse_pattern_when_weekday_of_month_then_parsed(self) -> None:
        assert parse_pattern("second-sunday-05") == WeekdayOfMonthPattern(
            occurrence=Occurrence.SECOND, weekday=Weekday.SUNDAY, month=5
        )

    def test_parse_pattern_when_last_weekday_then_occurrence_last(self) -> None:
        pattern = parse_pattern("last-friday-07")

        assert isinstance(pattern, WeekdayOfMonthPattern)
        assert pattern.occurrence is Occurrence.LAST
        assert pattern.occurrence.ordinal == 0

    def test_parse_pattern_when_symbolic_name_then_named(self) -> None:
        assert parse_pattern("buss-und-bettag") == NamedPattern(name="buss-und-bettag")

    @pytest.mark.parametrize(
        "text", ["04-31", "13-01", "00-10", "2025-01-01", "Easter", "easter+", "", "first-monday-13"]
    )
    def test_parse_pattern_when_malformed_then_raises(self, text: str) -> None:
        with pytest.raises(UnknownPatternError):
            parse_pattern(text)

    def test_unknown_pattern_error_when_raised_then_is_resolution_error(self) -> None:
        with pytest.raises(DateResolutionError) as exc_info:
            parse_pattern("??")

        assert exc_info.value.pattern == "??"

    def test_weekday_when_indexed_then_sunday_based(self) -> None:
        assert Weekday.SUNDAY == 0
        assert Weekday.SATURDAY == 6
