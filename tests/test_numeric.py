"""Tests for numeric summaries."""

import pytest

from k9fetch.aggregation.numeric import (
    compute_numeric_summary,
    percent,
    round_half_up,
    round_percent,
)


class TestNumericSummary:
    """Test mean / median / mode."""

    def test_empty_is_unavailable(self):
        assert compute_numeric_summary([]) is None

    def test_mean_is_sum_over_count(self):
        values = [3.0, 1.5, 7.25, 2.0]
        summary = compute_numeric_summary(values)
        assert summary.mean == pytest.approx(sum(values) / len(values))

    def test_median_even_count(self):
        assert compute_numeric_summary([1, 2, 3, 4]).median == 2.5

    def test_median_odd_count(self):
        assert compute_numeric_summary([1, 2, 3]).median == 2

    def test_median_sorts_first(self):
        assert compute_numeric_summary([9, 1, 5]).median == 5

    def test_mode_tie_breaks_to_smallest(self):
        assert compute_numeric_summary([1, 1, 2, 2]).mode == 1
        assert compute_numeric_summary([2, 2, 1, 1]).mode == 1

    def test_mode_most_frequent(self):
        assert compute_numeric_summary([5, 3, 5, 1]).mode == 5

    def test_single_value(self):
        summary = compute_numeric_summary([4.2])
        assert (summary.mean, summary.median, summary.mode) == (4.2, 4.2, 4.2)

    def test_input_not_mutated(self):
        values = [3, 1, 2]
        compute_numeric_summary(values)
        assert values == [3, 1, 2]


class TestPercent:
    """Test percentage helpers."""

    def test_round_half_up(self):
        assert round_percent(1, 8) == 13  # 12.5
        assert round_percent(5, 8) == 63  # 62.5

    def test_round_regular(self):
        assert round_percent(2, 3) == 67
        assert round_percent(1, 3) == 33

    def test_zero_total(self):
        assert round_percent(0, 0) == 0
        assert percent(0, 0) == 0.0

    def test_unrounded(self):
        assert percent(1, 3) == pytest.approx(33.3333, rel=1e-4)

    def test_round_half_up_value(self):
        assert round_half_up(87.5) == 88
        assert round_half_up(87.4) == 87
        assert round_half_up(-0.5) == 0
