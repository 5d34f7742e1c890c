"""
Unit tests for set text parsing.

Tests cover:
- Reps objectives (single, range, fallbacks)
- Intensity objectives (strict N/10)
- Logged number parsing and actual-data detection
"""
import pytest

from backend.core.set_parser import (
    REPS_FALLBACK,
    has_actual_data,
    parse_intensity,
    parse_number,
    parse_reps,
)
from domain.models import PerformedSet


@pytest.mark.unit
class TestParseReps:
    """Tests for parse_reps."""

    def test_single_value(self):
        assert parse_reps("8") == 8

    def test_range_returns_mean(self):
        assert parse_reps("8-12") == 10

    def test_range_with_spaces(self):
        assert parse_reps(" 6 - 9 ") == 7.5

    def test_amrap_falls_back(self):
        assert parse_reps("AMRAP") == REPS_FALLBACK

    def test_missing_falls_back(self):
        assert parse_reps(None) == 10
        assert parse_reps("") == 10

    def test_zero_falls_back(self):
        assert parse_reps("0") == 10

    def test_numeric_input_accepted(self):
        assert parse_reps(5) == 5

    def test_garbage_falls_back(self):
        assert parse_reps("to failure") == 10


@pytest.mark.unit
class TestParseIntensity:
    """Tests for parse_intensity."""

    def test_valid(self):
        assert parse_intensity("8/10") == 8

    def test_whitespace_removed(self):
        assert parse_intensity(" 7 / 10 ") == 7

    def test_bounds(self):
        assert parse_intensity("1/10") == 1
        assert parse_intensity("10/10") == 10

    def test_zero_rejected(self):
        assert parse_intensity("0/10") is None

    def test_above_ten_rejected(self):
        assert parse_intensity("11/10") is None

    def test_other_denominator_rejected(self):
        assert parse_intensity("8/9") is None

    def test_plain_number_rejected(self):
        """There is no fallback for intensity."""
        assert parse_intensity("8") is None

    def test_none(self):
        assert parse_intensity(None) is None


@pytest.mark.unit
class TestActualData:
    """Tests for parse_number and has_actual_data."""

    def test_parse_number_variants(self):
        assert parse_number("80") == 80.0
        assert parse_number(80) == 80.0
        assert parse_number("80.5") == 80.5
        assert parse_number("") is None
        assert parse_number("abc") is None
        assert parse_number(None) is None

    def test_reps_only_counts(self):
        assert has_actual_data(PerformedSet(reps="8")) is True

    def test_weight_only_counts(self):
        assert has_actual_data(PerformedSet(weight=60)) is True

    def test_empty_set_has_no_data(self):
        assert has_actual_data(PerformedSet(reps="", weight=None, intensity="8/10")) is False

    def test_dict_input(self):
        assert has_actual_data({"reps": 5}) is True
        assert has_actual_data({}) is False
