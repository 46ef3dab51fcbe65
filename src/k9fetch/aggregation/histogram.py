"""Aligned success/failure histograms for one condition.

Both cohorts share the same bin edges so the two charts read on one
scale. Bins are half-open except the last, which ends exactly at the
maximum observed value.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from k9fetch.aggregation.numeric import compute_numeric_summary
from k9fetch.aggregation.records import get_condition_value
from k9fetch.models.domain import ConditionKey, TrainingSessionEntity
from k9fetch.models.types import ConditionDistribution, HistogramBin

DEFAULT_BIN_COUNT = 6


@dataclass
class CohortHistogram:
    """Bins for both cohorts over shared edges."""

    bins_success: list[HistogramBin]
    bins_fail: list[HistogramBin]


def _bin_indices(values: np.ndarray, low: float, width: float, bin_count: int) -> np.ndarray:
    """Bucket index per value, clamped to absorb float error at the max."""
    idx = np.floor((values - low) / width).astype(int)
    return np.clip(idx, 0, bin_count - 1)


def _count(values: np.ndarray, low: float, width: float, bin_count: int) -> list[int]:
    if values.size == 0:
        return [0] * bin_count
    counts = np.bincount(_bin_indices(values, low, width, bin_count), minlength=bin_count)
    return [int(c) for c in counts]


def bin_cohorts(
    success_values: Sequence[float],
    fail_values: Sequence[float],
    bin_count: int = DEFAULT_BIN_COUNT,
) -> CohortHistogram | None:
    """Bin two cohorts over their combined range.

    Args:
        success_values: Finite values from successful sessions.
        fail_values: Finite values from failed sessions.
        bin_count: Desired number of bins (>= 1).

    Returns:
        CohortHistogram, or None when both cohorts are empty.

    Raises:
        ValueError: If bin_count < 1.
    """
    if bin_count < 1:
        raise ValueError(f"bin_count must be >= 1, got {bin_count}")

    success = np.asarray(success_values, dtype=float)
    fail = np.asarray(fail_values, dtype=float)
    combined = np.concatenate([success, fail])

    if combined.size == 0:
        return None

    low = float(combined.min())
    high = float(combined.max())

    # A single distinct value collapses to one bin
    effective = 1 if low == high else bin_count
    # A range too narrow to split (width underflows to 0) uses unit-width bins
    width = ((high - low) / effective or 1.0) if effective > 1 else 1.0

    labels: list[str] = []
    for i in range(effective):
        start = low + i * width
        end = high if i == effective - 1 else low + (i + 1) * width
        labels.append(f"{start:.1f}" if effective == 1 else f"{start:.1f}–{end:.1f}")

    success_counts = _count(success, low, width, effective)
    fail_counts = _count(fail, low, width, effective)

    return CohortHistogram(
        bins_success=[HistogramBin(range=lbl, count=c) for lbl, c in zip(labels, success_counts)],
        bins_fail=[HistogramBin(range=lbl, count=c) for lbl, c in zip(labels, fail_counts)],
    )


def build_condition_distribution(
    success_sessions: Sequence[TrainingSessionEntity],
    fail_sessions: Sequence[TrainingSessionEntity],
    key: ConditionKey,
    bin_count: int = DEFAULT_BIN_COUNT,
) -> ConditionDistribution | None:
    """Histogram and summaries of one condition for both cohorts.

    Sessions whose condition is absent or malformed are left out.

    Returns:
        ConditionDistribution, or None when no session has a usable value.
    """
    success_values = [
        v for v in (get_condition_value(s, key) for s in success_sessions) if v is not None
    ]
    fail_values = [v for v in (get_condition_value(s, key) for s in fail_sessions) if v is not None]

    histogram = bin_cohorts(success_values, fail_values, bin_count)
    if histogram is None:
        return None

    return ConditionDistribution(
        condition=key,
        bins_success=histogram.bins_success,
        bins_fail=histogram.bins_fail,
        stats_success=compute_numeric_summary(success_values),
        stats_fail=compute_numeric_summary(fail_values),
    )
