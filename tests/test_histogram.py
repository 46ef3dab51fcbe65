"""Tests for aligned cohort histograms."""

import warnings

import pytest

from k9fetch.aggregation.histogram import bin_cohorts, build_condition_distribution
from k9fetch.models.domain import TrainingSessionEntity


def counts(bins):
    return [b.count for b in bins]


def labels(bins):
    return [b.range for b in bins]


class TestBinCohorts:
    """Test bin_cohorts()."""

    def test_both_empty_is_unavailable(self):
        assert bin_cohorts([], []) is None

    def test_single_value_collapses_to_one_bin(self):
        result = bin_cohorts([1, 1, 1], [1, 1, 1])
        assert labels(result.bins_success) == ["1.0"]
        assert counts(result.bins_success) == [3]
        assert counts(result.bins_fail) == [3]

    def test_boundary_value_goes_to_upper_bin(self):
        """[0, 5) and [5, 10]: 5 lands in the last, right-closed bin."""
        result = bin_cohorts([0, 10], [5], bin_count=2)
        assert labels(result.bins_success) == ["0.0–5.0", "5.0–10.0"]
        assert counts(result.bins_success) == [1, 1]
        assert counts(result.bins_fail) == [0, 1]

    def test_default_six_bins(self):
        result = bin_cohorts([0, 6], [])
        assert len(result.bins_success) == 6
        assert len(result.bins_fail) == 6
        assert counts(result.bins_fail) == [0] * 6

    def test_max_included_in_last_bin(self):
        result = bin_cohorts([0.0, 0.5, 0.9, 1.0], [], bin_count=3)
        assert counts(result.bins_success) == [1, 1, 2]

    def test_cohorts_share_edges(self):
        result = bin_cohorts([10, 12], [20], bin_count=2)
        assert labels(result.bins_success) == labels(result.bins_fail)
        assert labels(result.bins_success) == ["10.0–15.0", "15.0–20.0"]

    def test_last_label_ends_at_max(self):
        result = bin_cohorts([0], [1], bin_count=3)
        assert labels(result.bins_success)[-1] == "0.7–1.0"

    def test_counts_total_matches_input(self):
        success = [1.2, 3.4, 5.6, 7.8, 9.9]
        fail = [2.2, 2.3, 8.8]
        result = bin_cohorts(success, fail, bin_count=4)
        assert sum(counts(result.bins_success)) == len(success)
        assert sum(counts(result.bins_fail)) == len(fail)

    def test_one_cohort_empty_still_bins(self):
        result = bin_cohorts([], [4, 8], bin_count=2)
        assert counts(result.bins_success) == [0, 0]
        assert counts(result.bins_fail) == [1, 1]

    def test_underflowing_width_falls_back_to_unit_bins(self):
        """A range narrower than bin_count * smallest float still bins cleanly."""
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            result = bin_cohorts([0.0], [5e-324])

        assert len(result.bins_success) == 6
        assert counts(result.bins_success) == [1, 0, 0, 0, 0, 0]
        assert counts(result.bins_fail) == [1, 0, 0, 0, 0, 0]
        assert labels(result.bins_success)[0] == "0.0–1.0"

    def test_invalid_bin_count(self):
        with pytest.raises(ValueError):
            bin_cohorts([1], [2], bin_count=0)


class TestBuildConditionDistribution:
    """Test build_condition_distribution()."""

    def _session(self, sid, temp):
        return TrainingSessionEntity(id=sid, dog_id="dog-1", conditions={"temp": temp})

    def test_excludes_unparsable_values(self):
        success = [self._session("a", 10), self._session("b", "not-a-number")]
        fail = [self._session("c", "20")]
        dist = build_condition_distribution(success, fail, "temp", bin_count=2)
        assert sum(counts(dist.bins_success)) == 1
        assert sum(counts(dist.bins_fail)) == 1
        assert dist.stats_success.mean == 10
        assert dist.stats_fail.mean == 20

    def test_no_values_is_unavailable(self):
        success = [self._session("a", None)]
        assert build_condition_distribution(success, [], "temp") is None

    def test_other_condition_key_ignored(self):
        success = [self._session("a", 10)]
        assert build_condition_distribution(success, [], "hum") is None

    def test_empty_cohort_has_no_summary(self):
        dist = build_condition_distribution([self._session("a", 10)], [], "temp")
        assert dist.condition == "temp"
        assert dist.stats_fail is None
        assert dist.stats_success.median == 10
