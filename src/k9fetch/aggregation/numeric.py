"""Numeric summaries for chart captions.

Uses numpy over small in-memory value sets.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from k9fetch.models.types import NumericSummary


def compute_numeric_summary(values: Sequence[float]) -> NumericSummary | None:
    """Compute mean, median and mode.

    Mode ties resolve to the smallest of the most frequent values.

    Args:
        values: Numbers in any order.

    Returns:
        NumericSummary, or None for an empty input.
    """
    if len(values) == 0:
        return None

    ordered = np.sort(np.asarray(values, dtype=float))
    n = ordered.size

    mean = float(ordered.sum() / n)

    if n % 2 == 1:
        median = float(ordered[(n - 1) // 2])
    else:
        median = float((ordered[n // 2 - 1] + ordered[n // 2]) / 2)

    # np.unique returns ascending values; argmax picks the first maximum
    unique, counts = np.unique(ordered, return_counts=True)
    mode = float(unique[int(np.argmax(counts))])

    return NumericSummary(mean=mean, median=median, mode=mode)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (12.5 -> 13)."""
    return int(math.floor(value + 0.5))


def round_percent(part: int, total: int) -> int:
    """Percentage rounded half-up to an integer; 0 when total is 0."""
    if total == 0:
        return 0
    return round_half_up(part / total * 100)


def percent(part: int, total: int) -> float:
    """Unrounded percentage; 0.0 when total is 0."""
    if total == 0:
        return 0.0
    return part / total * 100
