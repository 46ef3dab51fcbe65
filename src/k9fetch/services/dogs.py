"""Dog record creation.

Handles form normalization and uniqueness of the dog code.
Domain logic is pure - database operations go through repo.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone

from sqlalchemy.exc import IntegrityError

from k9fetch.core.identity import new_record_id
from k9fetch.db import repo
from k9fetch.db.repo import DbSession
from k9fetch.models.domain import DogEntity

logger = logging.getLogger(__name__)


class DuplicateDogCodeError(Exception):
    """Raised when a dog code is already taken."""


@dataclass
class DogInput:
    """Input for dog creation, as submitted by the form."""

    dog_code: str
    name: str
    breed: str | None = None
    sex: str | None = None
    birthdate: date | None = None
    notes: str | None = None
    active: bool = True


def _clean(value: str | None) -> str | None:
    """Trim optional text; blank becomes None."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def build_dog_entity(dog_input: DogInput) -> DogEntity:
    """Validate and normalize form input.

    Pure function - no database access.

    Raises:
        ValueError: If code or name is blank after trimming.
    """
    dog_code = dog_input.dog_code.strip()
    name = dog_input.name.strip()
    if not dog_code or not name:
        raise ValueError("Code and name are required")

    return DogEntity(
        id=new_record_id(),
        dog_code=dog_code,
        name=name,
        breed=_clean(dog_input.breed),
        sex=_clean(dog_input.sex),
        birthdate=dog_input.birthdate,
        notes=_clean(dog_input.notes),
        active=dog_input.active,
        created_at=datetime.now(timezone.utc).replace(tzinfo=None),
    )


def create_dog(session: DbSession, dog_input: DogInput) -> DogEntity:
    """Create a dog record.

    Args:
        session: Database session.
        dog_input: Form data.

    Returns:
        The stored dog.

    Raises:
        ValueError: If code or name is blank.
        DuplicateDogCodeError: If the code already exists.
    """
    dog = build_dog_entity(dog_input)

    if repo.get_dog_by_code(session, dog.dog_code) is not None:
        raise DuplicateDogCodeError(f"Dog code already exists: {dog.dog_code}")

    repo.create_dog(session, dog)
    try:
        repo.commit(session)
    except IntegrityError as e:
        # Lost a race with a concurrent insert of the same code
        repo.rollback(session)
        raise DuplicateDogCodeError(f"Dog code already exists: {dog.dog_code}") from e

    logger.info(f"Created dog {dog.dog_code} ({dog.id})")
    return dog
