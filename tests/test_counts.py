"""Tests for engagement count parsing."""

import pytest

from core.counts import parse_count


class TestParseCount:
    """Test parse_count function."""

    @pytest.mark.parametrize("raw, expected", [
        ("12.3K", 12300),
        ("1M", 1_000_000),
        ("42", 42),
        ("2.5b", 2_500_000_000),
        ("1,204", 1204),
        ("3.4k", 3400),
    ])
    def test_parses_displayed_counts(self, raw, expected):
        """Should expand suffixes and strip thousands separators."""
        assert parse_count(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "   ", "Like", "K"])
    def test_missing_data_is_zero(self, raw):
        """Should return 0 instead of failing when there is no number."""
        assert parse_count(raw) == 0

    def test_reads_leading_number_from_aria_label(self):
        """aria-labels such as '1234 Likes. Like' carry the count first."""
        assert parse_count("1234 Likes. Like") == 1234

    def test_rounds_to_nearest_integer(self):
        """Fractional results are rounded, not truncated."""
        assert parse_count("1.2345K") == 1235
        assert parse_count("0.6") == 1

    @pytest.mark.parametrize("raw, expected", [
        ("2.5", 3),
        ("0.5", 1),
        ("1.5K", 1500),
        ("0.0005K", 1),
    ])
    def test_halves_round_up(self, raw, expected):
        """Exact halves go up, as displayed counts are never negative."""
        assert parse_count(raw) == expected
