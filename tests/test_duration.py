"""
Tests for relative duration parsing.
"""

from __future__ import annotations

from datetime import timedelta

import pytest

from silence_manager.core import MS_PER_DAY, MS_PER_HOUR, MS_PER_WEEK, InvalidDurationError
from silence_manager.silences import duration_to_timedelta, parse_duration, split_duration


class TestParseDuration:
    """Tests for parse_duration."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("6h", 6 * MS_PER_HOUR),
            ("2d", 2 * MS_PER_DAY),
            ("1w", MS_PER_WEEK),
            ("1h", 3_600_000),
        ],
    )
    def test_known_units(self, text, expected):
        """Test h, d and w units."""
        assert parse_duration(text) == expected

    def test_missing_unit_means_hours(self):
        """Test a bare number is taken as hours."""
        assert parse_duration("5") == 18_000_000

    def test_unknown_unit_means_hours(self):
        """Test an unrecognised unit falls back to hours."""
        assert parse_duration("3m") == 3 * MS_PER_HOUR
        assert parse_duration("2.5d") == 2 * MS_PER_HOUR

    def test_units_are_case_sensitive(self):
        """Test upper-case units are not recognised."""
        assert parse_duration("2D") == 2 * MS_PER_HOUR

    def test_zero_and_negative_pass_through(self):
        """Test zero and negative magnitudes are not rejected."""
        assert parse_duration("0d") == 0
        assert parse_duration("-1h") == -MS_PER_HOUR

    def test_leading_whitespace_ignored(self):
        """Test whitespace before the magnitude is skipped."""
        assert parse_duration("  4d") == 4 * MS_PER_DAY

    def test_unit_token_taken_literally(self):
        """Test whitespace around the unit makes it unrecognised."""
        assert parse_duration("4 d") == 4 * MS_PER_HOUR
        assert parse_duration("4d ") == 4 * MS_PER_HOUR
        assert split_duration("4 d") == (4, " d")

    @pytest.mark.parametrize("text", ["", "abc", "h", "  ", "d2"])
    def test_no_magnitude_is_invalid(self, text):
        """Test strings without a leading integer are rejected."""
        with pytest.raises(InvalidDurationError) as exc_info:
            parse_duration(text)
        assert exc_info.value.field == "duration"


class TestSplitDuration:
    """Tests for split_duration."""

    def test_split(self):
        """Test magnitude and unit token are separated."""
        assert split_duration("12w") == (12, "w")
        assert split_duration("7") == (7, "")
        assert split_duration("+3d") == (3, "d")


class TestDurationToTimedelta:
    """Tests for duration_to_timedelta."""

    def test_timedelta(self):
        """Test conversion to a timedelta."""
        assert duration_to_timedelta("2d") == timedelta(days=2)
        assert duration_to_timedelta("1w") == timedelta(weeks=1)
