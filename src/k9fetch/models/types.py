"""Pydantic models for the K-9 Smart Fetch API.

Derived statistics are plain data shapes; chart rendering belongs to the
client.
"""

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, field_validator

from k9fetch.models.domain import ConditionKey

RankingMode = Literal["absolute", "rate"]


# ============================================================================
# Statistics
# ============================================================================


class NumericSummary(BaseModel):
    """Mean, median and mode of a non-empty value set."""

    mean: float
    median: float
    mode: float


class HistogramBin(BaseModel):
    """One histogram bucket for one cohort."""

    range: str
    count: int


class ConditionDistribution(BaseModel):
    """Aligned success/failure histograms for one condition."""

    condition: ConditionKey
    bins_success: list[HistogramBin]
    bins_fail: list[HistogramBin]
    stats_success: NumericSummary | None
    stats_fail: NumericSummary | None


class ConditionGroup(BaseModel):
    """Success counts for one exact observed condition value."""

    value: float
    total: int
    success: int
    fail: int
    success_rate: int


class DogCounts(BaseModel):
    """Session counts for one dog. Rates are unrounded percentages."""

    dog_id: str
    name: str
    code: str
    total: int
    success: int
    fail: int
    success_rate: float
    fail_rate: float


class ScentCounts(BaseModel):
    """Session counts for one scent category."""

    scent: str
    total: int
    success: int
    fail: int
    success_rate: int


class GlobalKpis(BaseModel):
    """Headline numbers across all sessions."""

    total_sessions: int
    total_dogs: int
    success_rate: int
    total_fails: int


class SessionAggregate(BaseModel):
    """Everything the aggregate statistics view needs, from one pass."""

    kpis: GlobalKpis | None
    per_dog: list[DogCounts]
    scents: list[ScentCounts]
    condition_series: dict[str, list[ConditionGroup]]


class RatePoint(BaseModel):
    """Success or false-positive rate for one dog."""

    label: Literal["success", "false_positive"]
    rate: int


class DurationPoint(BaseModel):
    """Duration of one session on its date."""

    date: str
    duration: float


# ============================================================================
# Accounts
# ============================================================================


class LoginRequest(BaseModel):
    """Email and password sign-in."""

    email: str
    password: str


class UserDetail(BaseModel):
    """Signed-in user for API response."""

    id: str
    email: str


class ProfileDetail(BaseModel):
    """User profile for API response."""

    role: str
    full_name: str | None


class AuthStateDetail(BaseModel):
    """Current authentication state."""

    user: UserDetail
    profile: ProfileDetail | None
    is_admin: bool


class LoginResponse(AuthStateDetail):
    """Issued bearer token plus the resulting auth state."""

    access_token: str
    token_type: str = "bearer"


# ============================================================================
# Dogs
# ============================================================================


class DogCreate(BaseModel):
    """New dog form submission."""

    dog_code: str
    name: str
    breed: str | None = None
    sex: str | None = None
    birthdate: date | None = None
    notes: str | None = None
    active: bool = True

    @field_validator("birthdate", mode="before")
    @classmethod
    def _blank_birthdate(cls, value: object) -> object:
        # Forms submit an empty string for "not set"
        if isinstance(value, str) and not value.strip():
            return None
        return value


class DogDetail(BaseModel):
    """Dog details for API response."""

    id: str
    dog_code: str
    name: str
    breed: str | None
    sex: str | None
    birthdate: date | None
    notes: str | None
    active: bool
    created_at: datetime | None


class DogStatsDetail(BaseModel):
    """Per-dog record view: dog info and its session statistics."""

    dog: DogDetail
    total_sessions: int
    rates: list[RatePoint]
    condition: ConditionKey
    distribution: ConditionDistribution | None
    durations: list[DurationPoint]


class StatsOverview(BaseModel):
    """Aggregate statistics view across all dogs."""

    mode: RankingMode
    kpis: GlobalKpis | None
    success_ranking: list[DogCounts]
    fail_ranking: list[DogCounts]
    success_summary: NumericSummary | None
    fail_summary: NumericSummary | None
    scents: list[ScentCounts]
    condition_series: dict[str, list[ConditionGroup]]
