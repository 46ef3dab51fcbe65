"""Aggregate statistics across every dog's training sessions.

One traversal of the session list feeds four independent outputs:
global KPIs, per-dog counts, per-scent counts and per-condition
success-rate series. Domain logic is pure - the caller fetches sessions
through repo.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Sequence

from k9fetch.aggregation.numeric import compute_numeric_summary, percent, round_percent
from k9fetch.aggregation.records import get_scent_label, is_success_result, parse_conditions
from k9fetch.models.domain import CONDITION_KEYS, TrainingSessionEntity
from k9fetch.models.types import (
    ConditionGroup,
    DogCounts,
    GlobalKpis,
    NumericSummary,
    RankingMode,
    ScentCounts,
    SessionAggregate,
)

UNNAMED_DOG = "Unnamed dog"

RankKey = Literal["success", "fail", "success_rate", "fail_rate"]


@dataclass
class _Tally:
    """Running success/fail counter for one group."""

    total: int = 0
    success: int = 0
    fail: int = 0

    def add(self, hit: bool) -> None:
        self.total += 1
        if hit:
            self.success += 1
        else:
            self.fail += 1


@dataclass
class _DogTally(_Tally):
    name: str = UNNAMED_DOG
    code: str = ""


def aggregate_sessions(sessions: Sequence[TrainingSessionEntity]) -> SessionAggregate:
    """Compute the aggregate statistics view in one pass.

    Groups keep encounter order; condition series are sorted by value.

    Args:
        sessions: Every training session, with dog name/code joined.

    Returns:
        SessionAggregate. kpis is None when there are no sessions.
    """
    overall = _Tally()
    per_dog: dict[str, _DogTally] = {}
    per_scent: dict[str, _Tally] = {}
    per_condition: dict[str, dict[float, _Tally]] = {key: {} for key in CONDITION_KEYS}

    for session in sessions:
        hit = is_success_result(session.result)
        overall.add(hit)

        dog = per_dog.get(session.dog_id)
        if dog is None:
            dog = _DogTally(
                name=session.dog_name or UNNAMED_DOG,
                code=session.dog_code or "",
            )
            per_dog[session.dog_id] = dog
        dog.add(hit)

        per_scent.setdefault(get_scent_label(session), _Tally()).add(hit)

        conditions = parse_conditions(session)
        for key in CONDITION_KEYS:
            value = conditions.get(key)
            if value is None:
                continue
            per_condition[key].setdefault(value, _Tally()).add(hit)

    kpis = None
    if overall.total:
        kpis = GlobalKpis(
            total_sessions=overall.total,
            total_dogs=len(per_dog),
            success_rate=round_percent(overall.success, overall.total),
            total_fails=overall.fail,
        )

    return SessionAggregate(
        kpis=kpis,
        per_dog=[
            DogCounts(
                dog_id=dog_id,
                name=t.name,
                code=t.code,
                total=t.total,
                success=t.success,
                fail=t.fail,
                success_rate=percent(t.success, t.total),
                fail_rate=percent(t.fail, t.total),
            )
            for dog_id, t in per_dog.items()
        ],
        scents=[
            ScentCounts(
                scent=scent,
                total=t.total,
                success=t.success,
                fail=t.fail,
                success_rate=round_percent(t.success, t.total),
            )
            for scent, t in per_scent.items()
        ],
        condition_series={
            key: [
                ConditionGroup(
                    value=value,
                    total=t.total,
                    success=t.success,
                    fail=t.fail,
                    success_rate=round_percent(t.success, t.total),
                )
                for value, t in sorted(groups.items())
            ]
            for key, groups in per_condition.items()
        },
    )


def rank_dogs(counts: Sequence[DogCounts], key: RankKey) -> list[DogCounts]:
    """Sort dogs descending by one metric.

    The sort is stable: dogs that tie keep their encounter order.
    """
    return sorted(counts, key=lambda d: getattr(d, key), reverse=True)


def ranking_keys(mode: RankingMode) -> tuple[RankKey, RankKey]:
    """(success key, fail key) used to rank dogs in a display mode."""
    if mode == "rate":
        return "success_rate", "fail_rate"
    return "success", "fail"


def rank_with_summary(
    counts: Sequence[DogCounts], key: RankKey
) -> tuple[list[DogCounts], NumericSummary | None]:
    """Rank dogs and summarize the ranked values."""
    ranking = rank_dogs(counts, key)
    return ranking, compute_numeric_summary([getattr(d, key) for d in ranking])
