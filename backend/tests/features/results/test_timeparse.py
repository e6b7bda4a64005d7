"""
Tests for datasport time parsing and formatting.
"""

import pytest

from app.features.results.timeparse import (
    format_net_time,
    format_offset,
    minutes_to_label,
    parse_net_time,
    parse_start_time,
)


# =============================================================================
# Test Net Time Parsing
# =============================================================================

class TestParseNetTime:
    """Tests for parse_net_time ("HH:MM:SS,fff")."""

    def test_full_format(self):
        assert parse_net_time("01:02:03,456") == pytest.approx(3723.456)

    def test_zero_is_valid(self):
        """Zero seconds is a value, not a failure."""
        result = parse_net_time("00:00:00,000")
        assert result is not None
        assert result == 0.0

    def test_single_digit_fraction(self):
        assert parse_net_time("00:45:12,5") == pytest.approx(2712.5)

    def test_whitespace_removed(self):
        assert parse_net_time(" 00:45: 12,000 ") == pytest.approx(2712.0)

    def test_missing_fraction(self):
        assert parse_net_time("1:2:3") is None

    def test_two_parts(self):
        assert parse_net_time("45:12,000") is None

    def test_garbage(self):
        assert parse_net_time("bad") is None

    def test_non_numeric_component(self):
        assert parse_net_time("01:xx:03,456") is None

    def test_extra_comma(self):
        assert parse_net_time("01:02:03,4,5") is None

    @pytest.mark.parametrize("value", ["", None])
    def test_empty(self, value):
        assert parse_net_time(value) is None

    def test_nan_rejected(self):
        assert parse_net_time("nan:00:00,000") is None

    def test_negative_rejected(self):
        assert parse_net_time("-1:00:00,000") is None


# =============================================================================
# Test Start Time Parsing
# =============================================================================

class TestParseStartTime:
    """Tests for parse_start_time ("HH:MM" / "HH:MM:SS")."""

    def test_hours_minutes(self):
        assert parse_start_time("08:15") == 29700

    def test_with_seconds(self):
        assert parse_start_time("08:15:30") == 29730

    def test_midnight_is_valid(self):
        result = parse_start_time("00:00")
        assert result is not None
        assert result == 0

    def test_surrounding_whitespace(self):
        assert parse_start_time("  08:00:05 ") == 28805

    def test_empty(self):
        assert parse_start_time("") is None
        assert parse_start_time(None) is None

    def test_single_part(self):
        assert parse_start_time("08") is None

    def test_four_parts(self):
        assert parse_start_time("08:00:00:00") is None

    def test_non_numeric(self):
        assert parse_start_time("08:ab") is None


# =============================================================================
# Test Formatting
# =============================================================================

class TestFormatting:
    """Tests for time label helpers."""

    def test_minutes_to_label(self):
        assert minutes_to_label(45) == "00:45"
        assert minutes_to_label(135) == "02:15"

    def test_minutes_to_label_floors(self):
        assert minutes_to_label(45.9) == "00:45"

    def test_format_net_time(self):
        assert format_net_time(3723.456) == "01:02:03"

    def test_format_offset(self):
        assert format_offset(65) == "+1:05"
        assert format_offset(0) == "+0:00"
