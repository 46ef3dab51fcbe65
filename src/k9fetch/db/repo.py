"""Repository pattern for database operations.

Encapsulates all SQLAlchemy queries, keeping domain logic pure.
Returns domain models (not SQLAlchemy entities) to external callers.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy.orm import Session, joinedload

from k9fetch.db.schema import AuthSession, Dog, Profile, TrainingSession, User
from k9fetch.models.domain import (
    AuthSessionEntity,
    DogEntity,
    ProfileEntity,
    TrainingSessionEntity,
    UserEntity,
)

if TYPE_CHECKING:
    from sqlalchemy.orm import Session as DbSession
else:
    DbSession = Session

# Re-export for external use
__all__ = ["DbSession"]

logger = logging.getLogger(__name__)


# ============================================================================
# Converters: SQLAlchemy -> Domain
# ============================================================================


def _load_json_blob(raw: str | None, column: str, row_id: str) -> dict[str, Any]:
    """Decode a JSON object column, tolerating malformed entries.

    Anything that is not a JSON object reads as an empty mapping.
    """
    if not raw:
        return {}
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        logger.debug(f"Ignoring malformed {column} on training session {row_id}")
        return {}
    if not isinstance(value, dict):
        logger.debug(f"Ignoring non-object {column} on training session {row_id}")
        return {}
    return value


def _dog_to_entity(dog: Dog) -> DogEntity:
    """Convert SQLAlchemy Dog to domain entity."""
    return DogEntity(
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


def _training_session_to_entity(
    row: TrainingSession, include_dog: bool = False
) -> TrainingSessionEntity:
    """Convert SQLAlchemy TrainingSession to domain entity."""
    dog = row.dog if include_dog else None
    return TrainingSessionEntity(
        id=row.id,
        dog_id=row.dog_id,
        result=row.result,
        started_at=row.started_at,
        duration_s=row.duration_s,
        conditions=_load_json_blob(row.conditions_json, "conditions", row.id),
        type=_load_json_blob(row.type_json, "type", row.id),
        dog_name=dog.name if dog else None,
        dog_code=dog.dog_code if dog else None,
    )


def _user_to_entity(user: User) -> UserEntity:
    """Convert SQLAlchemy User to domain entity."""
    return UserEntity(id=user.id, email=user.email)


def _profile_to_entity(profile: Profile) -> ProfileEntity:
    """Convert SQLAlchemy Profile to domain entity."""
    return ProfileEntity(id=profile.id, role=profile.role, full_name=profile.full_name)


def _auth_session_to_entity(auth: AuthSession) -> AuthSessionEntity:
    """Convert SQLAlchemy AuthSession to domain entity."""
    return AuthSessionEntity(token=auth.token, user_id=auth.user_id, expires_at=auth.expires_at)


# ============================================================================
# Dog Repository
# ============================================================================


def get_dog(session: DbSession, dog_id: str) -> DogEntity | None:
    """Get dog by ID."""
    dog = session.query(Dog).filter(Dog.id == dog_id).first()
    return _dog_to_entity(dog) if dog else None


def get_dog_by_code(session: DbSession, dog_code: str) -> DogEntity | None:
    """Get dog by its human-readable code."""
    dog = session.query(Dog).filter(Dog.dog_code == dog_code).first()
    return _dog_to_entity(dog) if dog else None


def list_dogs(session: DbSession) -> list[DogEntity]:
    """Get all dogs, newest first."""
    dogs = session.query(Dog).order_by(Dog.created_at.desc(), Dog.id).all()
    return [_dog_to_entity(d) for d in dogs]


def create_dog(session: DbSession, entity: DogEntity) -> DogEntity:
    """Create a new dog."""
    dog = Dog(
        id=entity.id,
        dog_code=entity.dog_code,
        name=entity.name,
        breed=entity.breed,
        sex=entity.sex,
        birthdate=entity.birthdate,
        notes=entity.notes,
        active=entity.active,
        created_at=entity.created_at,
    )
    session.add(dog)
    return entity


# ============================================================================
# Training Session Repository
# ============================================================================


def get_sessions_for_dog(session: DbSession, dog_id: str) -> list[TrainingSessionEntity]:
    """Get all training sessions for a dog, oldest first."""
    rows = (
        session.query(TrainingSession)
        .filter(TrainingSession.dog_id == dog_id)
        .order_by(TrainingSession.started_at.asc(), TrainingSession.id)
        .all()
    )
    return [_training_session_to_entity(r) for r in rows]


def get_all_sessions(session: DbSession) -> list[TrainingSessionEntity]:
    """Get every training session with its dog's name and code joined."""
    rows = (
        session.query(TrainingSession)
        .options(joinedload(TrainingSession.dog))
        .order_by(TrainingSession.started_at.asc(), TrainingSession.id)
        .all()
    )
    return [_training_session_to_entity(r, include_dog=True) for r in rows]


def create_training_session(
    session: DbSession, entity: TrainingSessionEntity
) -> TrainingSessionEntity:
    """Create a new training session."""
    row = TrainingSession(
        id=entity.id,
        dog_id=entity.dog_id,
        result=entity.result,
        started_at=entity.started_at,
        duration_s=entity.duration_s,
        conditions_json=json.dumps(entity.conditions) if entity.conditions else None,
        type_json=json.dumps(entity.type) if entity.type else None,
    )
    session.add(row)
    return entity


# ============================================================================
# Account Repository
# ============================================================================


def get_user(session: DbSession, user_id: str) -> UserEntity | None:
    """Get user by ID."""
    user = session.query(User).filter(User.id == user_id).first()
    return _user_to_entity(user) if user else None


def get_user_credentials(session: DbSession, email: str) -> tuple[UserEntity, str] | None:
    """Get user and stored password hash by email."""
    user = session.query(User).filter(User.email == email).first()
    return (_user_to_entity(user), user.password_hash) if user else None


def create_user(session: DbSession, entity: UserEntity, password_hash: str) -> UserEntity:
    """Create a new user."""
    user = User(id=entity.id, email=entity.email, password_hash=password_hash)
    session.add(user)
    return entity


def get_profile(session: DbSession, user_id: str) -> ProfileEntity | None:
    """Get profile for a user."""
    profile = session.query(Profile).filter(Profile.id == user_id).first()
    return _profile_to_entity(profile) if profile else None


def create_profile(session: DbSession, entity: ProfileEntity) -> ProfileEntity:
    """Create a profile for a user."""
    profile = Profile(id=entity.id, role=entity.role, full_name=entity.full_name)
    session.add(profile)
    return entity


def get_auth_session(session: DbSession, token: str) -> AuthSessionEntity | None:
    """Get issued token record."""
    auth = session.query(AuthSession).filter(AuthSession.token == token).first()
    return _auth_session_to_entity(auth) if auth else None


def create_auth_session(session: DbSession, entity: AuthSessionEntity) -> AuthSessionEntity:
    """Store a newly issued token."""
    auth = AuthSession(token=entity.token, user_id=entity.user_id, expires_at=entity.expires_at)
    session.add(auth)
    return entity


def delete_auth_session(session: DbSession, token: str) -> bool:
    """Delete a token record. Returns True if one existed."""
    deleted = session.query(AuthSession).filter(AuthSession.token == token).delete()
    return deleted > 0


def delete_expired_auth_sessions(session: DbSession, now: datetime) -> int:
    """Delete every token that expired before now."""
    return session.query(AuthSession).filter(AuthSession.expires_at < now).delete()


# ============================================================================
# Batch Operations
# ============================================================================


def commit(session: DbSession) -> None:
    """Commit current transaction."""
    session.commit()


def rollback(session: DbSession) -> None:
    """Roll back current transaction."""
    session.rollback()
