"""Per-dog record view derivations.

Turns one dog's sessions (oldest first) into the rate chart, the
condition distribution and the duration series.
"""

from __future__ import annotations

import math
from typing import Sequence

from k9fetch.aggregation.histogram import DEFAULT_BIN_COUNT, build_condition_distribution
from k9fetch.aggregation.numeric import percent, round_half_up
from k9fetch.aggregation.records import split_cohorts
from k9fetch.models.domain import ConditionKey, DogEntity, TrainingSessionEntity
from k9fetch.models.types import (
    DogDetail,
    DogStatsDetail,
    DurationPoint,
    RatePoint,
)

NO_DATE = "no date"


def dog_to_detail(dog: DogEntity) -> DogDetail:
    """Convert DogEntity to DogDetail."""
    return DogDetail(
        id=dog.id,
        dog_code=dog.dog_code,
        name=dog.name,
        breed=dog.breed,
        sex=dog.sex,
        birthdate=dog.birthdate,
        notes=dog.notes,
        active=dog.active,
        created_at=dog.created_at,
    )


def build_rate_series(success_count: int, total: int) -> list[RatePoint]:
    """Success and false-positive rates; both 0 without sessions.

    Each rate is rounded on its own, so the pair can sum to 101
    (1 of 8 gives 13 and 88).
    """
    if total == 0:
        return [
            RatePoint(label="success", rate=0),
            RatePoint(label="false_positive", rate=0),
        ]
    success_rate = percent(success_count, total)
    return [
        RatePoint(label="success", rate=round_half_up(success_rate)),
        RatePoint(label="false_positive", rate=round_half_up(100 - success_rate)),
    ]


def build_duration_series(sessions: Sequence[TrainingSessionEntity]) -> list[DurationPoint]:
    """Session duration by date, skipping sessions without a finite duration."""
    points: list[DurationPoint] = []
    for session in sessions:
        duration = session.duration_s
        if duration is None or not math.isfinite(duration):
            continue
        day = session.started_at.isoformat()[:10] if session.started_at else NO_DATE
        points.append(DurationPoint(date=day, duration=float(duration)))
    return points


def build_dog_stats(
    dog: DogEntity,
    sessions: Sequence[TrainingSessionEntity],
    condition: ConditionKey = "temp",
    bin_count: int = DEFAULT_BIN_COUNT,
) -> DogStatsDetail:
    """Assemble the per-dog record view.

    Args:
        dog: Dog being viewed.
        sessions: That dog's sessions, oldest first.
        condition: Condition whose distribution is shown.
        bin_count: Histogram bins for the distribution.

    Returns:
        DogStatsDetail. distribution is None without usable values.
    """
    success, fail = split_cohorts(list(sessions))
    total = len(sessions)

    return DogStatsDetail(
        dog=dog_to_detail(dog),
        total_sessions=total,
        rates=build_rate_series(len(success), total),
        condition=condition,
        distribution=build_condition_distribution(success, fail, condition, bin_count),
        durations=build_duration_series(sessions),
    )
