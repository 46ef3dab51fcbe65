"""Aggregate statistics API endpoint.

GET /api/stats - Statistics across every dog's sessions
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from k9fetch.aggregation.sessions import aggregate_sessions, rank_with_summary, ranking_keys
from k9fetch.api.deps import get_db_session, require_user
from k9fetch.db import repo
from k9fetch.db.repo import DbSession
from k9fetch.models.domain import AuthState
from k9fetch.models.types import RankingMode, StatsOverview

router = APIRouter()


@router.get("/stats", response_model=StatsOverview)
def get_stats(
    mode: RankingMode = "absolute",
    _: AuthState = Depends(require_user),
    session: DbSession = Depends(get_db_session),
) -> StatsOverview:
    """Get aggregate statistics.

    Args:
        mode: Rank dogs by absolute counts or by rates.
        session: Database session (injected).

    Returns:
        StatsOverview with KPIs, rankings, scent counts and condition series.
    """
    aggregate = aggregate_sessions(repo.get_all_sessions(session))

    success_key, fail_key = ranking_keys(mode)
    success_ranking, success_summary = rank_with_summary(aggregate.per_dog, success_key)
    fail_ranking, fail_summary = rank_with_summary(aggregate.per_dog, fail_key)

    return StatsOverview(
        mode=mode,
        kpis=aggregate.kpis,
        success_ranking=success_ranking,
        fail_ranking=fail_ranking,
        success_summary=success_summary,
        fail_summary=fail_summary,
        scents=aggregate.scents,
        condition_series=aggregate.condition_series,
    )
