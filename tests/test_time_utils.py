"""Tests for duration parsing and date formatting utilities."""
from datetime import date

import pytest

from utils.time_utils import (
    INVALID_FORMAT_MESSAGE,
    NOT_POSITIVE_MESSAGE,
    DurationError,
    format_entry_date,
    format_hours,
    parse_duration,
    today_iso,
)


class TestParseDuration:
    """Test duration string parsing."""

    def test_parse_decimal(self):
        """Decimal numbers are hours."""
        assert parse_duration("1.5") == 1.5
        assert parse_duration("2") == 2.0
        assert parse_duration("0.25") == 0.25

    def test_parse_time_notation(self):
        """H:MM is hours plus minutes."""
        assert parse_duration("1:30") == 1.5
        assert parse_duration("0:45") == 0.75
        assert parse_duration("2:00") == 2.0

    def test_surrounding_whitespace_ignored(self):
        """Whitespace around the value is stripped."""
        assert parse_duration("  1.5 ") == 1.5
        assert parse_duration(" 1:30\t") == 1.5

    def test_zero_decimal_rejected(self):
        """A decimal that parses but is not positive is rejected immediately."""
        with pytest.raises(DurationError) as exc:
            parse_duration("0")
        assert str(exc.value) == NOT_POSITIVE_MESSAGE

    def test_negative_decimal_rejected(self):
        """Negative hours are not positive."""
        with pytest.raises(DurationError) as exc:
            parse_duration("-1.5")
        assert str(exc.value) == NOT_POSITIVE_MESSAGE

    def test_zero_time_rejected(self):
        """0:00 adds up to zero hours."""
        with pytest.raises(DurationError) as exc:
            parse_duration("0:00")
        assert str(exc.value) == NOT_POSITIVE_MESSAGE

    def test_minutes_out_of_range(self):
        """Minutes must be below 60."""
        with pytest.raises(DurationError) as exc:
            parse_duration("1:60")
        assert str(exc.value) == INVALID_FORMAT_MESSAGE

    def test_negative_minutes(self):
        """Minutes must not be negative."""
        with pytest.raises(DurationError) as exc:
            parse_duration("1:-5")
        assert str(exc.value) == INVALID_FORMAT_MESSAGE

    @pytest.mark.parametrize("value", ["", "abc", "1h", "1:30:00", "1:", ":30", "1.5.2", "1_5", "1:3_0", "1e1"])
    def test_invalid_formats(self, value):
        """Anything that is neither decimal nor H:MM is an invalid format."""
        with pytest.raises(DurationError) as exc:
            parse_duration(value)
        assert str(exc.value) == INVALID_FORMAT_MESSAGE

    @pytest.mark.parametrize("value", ["inf", "nan", "-inf"])
    def test_non_finite_numbers_rejected(self, value):
        """inf and nan are not durations."""
        with pytest.raises(DurationError) as exc:
            parse_duration(value)
        assert str(exc.value) == INVALID_FORMAT_MESSAGE

    def test_overflowing_number_rejected(self):
        """A digit string too long for a float is not a duration."""
        with pytest.raises(DurationError) as exc:
            parse_duration("9" * 400)
        assert str(exc.value) == INVALID_FORMAT_MESSAGE

    def test_duration_error_is_value_error(self):
        """Callers may catch ValueError."""
        with pytest.raises(ValueError):
            parse_duration("nope")


class TestFormatting:
    """Test hour and date formatting."""

    def test_format_hours(self):
        """Hours always show two decimals."""
        assert format_hours(1.5) == "1.50"
        assert format_hours(2) == "2.00"
        assert format_hours(0.333) == "0.33"

    def test_format_entry_date_german(self):
        """ISO dates become German weekday and day-first date."""
        assert format_entry_date("2024-01-03") == "Mittwoch, 03.01.2024"
        assert format_entry_date("2024-01-07") == "Sonntag, 07.01.2024"
        assert format_entry_date("2024-01-01") == "Montag, 01.01.2024"

    def test_format_entry_date_unparseable(self):
        """Values that are not ISO dates are shown verbatim."""
        assert format_entry_date("someday") == "someday"
        assert format_entry_date("") == ""

    def test_today_iso(self):
        """Dates are rendered as YYYY-MM-DD."""
        assert today_iso(date(2024, 2, 5)) == "2024-02-05"
        assert len(today_iso()) == 10
