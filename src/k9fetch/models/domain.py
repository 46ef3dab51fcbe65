"""Domain models for K-9 Smart Fetch.

Pure Python dataclasses representing domain entities.
These models are independent of SQLAlchemy and used throughout
the application for clean separation from the database layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Literal

# ============================================================================
# Dog Domain
# ============================================================================


@dataclass
class DogEntity:
    """Domain model for a dog record."""

    id: str
    dog_code: str
    name: str
    breed: str | None = None
    sex: str | None = None
    birthdate: date | None = None
    notes: str | None = None
    active: bool = True
    created_at: datetime | None = None


# ============================================================================
# Training Session Domain
# ============================================================================

ConditionKey = Literal["temp", "wind", "press", "hum"]

CONDITION_KEYS: tuple[ConditionKey, ...] = ("temp", "wind", "press", "hum")


@dataclass(frozen=True)
class TrainingSessionEntity:
    """Domain model for a training session as fetched from the store.

    ``conditions`` and ``type`` are the raw blobs; they are only read
    through the parsers in ``k9fetch.aggregation.records``.
    """

    id: str
    dog_id: str
    result: str | None = None
    started_at: datetime | None = None
    duration_s: float | None = None
    conditions: dict[str, Any] = field(default_factory=dict)
    type: dict[str, Any] = field(default_factory=dict)
    dog_name: str | None = None
    dog_code: str | None = None


# ============================================================================
# Account Domain
# ============================================================================


@dataclass
class UserEntity:
    """Domain model for a user account."""

    id: str
    email: str


@dataclass
class ProfileEntity:
    """Domain model for a user profile."""

    id: str
    role: str
    full_name: str | None = None


@dataclass
class AuthSessionEntity:
    """Domain model for an issued access token."""

    token: str
    user_id: str
    expires_at: datetime


@dataclass
class AuthState:
    """Authentication state resolved for a single request."""

    user: UserEntity | None = None
    profile: ProfileEntity | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def is_admin(self) -> bool:
        return self.profile is not None and self.profile.role == "admin"
