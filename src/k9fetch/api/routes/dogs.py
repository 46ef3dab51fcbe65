"""Dogs API endpoints.

GET /api/dogs - List dogs, newest first
POST /api/dogs - Create a dog (admin only)
GET /api/dogs/{dog_id} - Dog record with its session statistics
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from k9fetch.aggregation.detail import build_dog_stats, dog_to_detail
from k9fetch.aggregation.histogram import DEFAULT_BIN_COUNT
from k9fetch.api.deps import get_db_session, require_admin, require_user
from k9fetch.db import repo
from k9fetch.db.repo import DbSession
from k9fetch.models.domain import AuthState, ConditionKey
from k9fetch.models.types import DogCreate, DogDetail, DogStatsDetail
from k9fetch.services.dogs import DogInput, DuplicateDogCodeError, create_dog

router = APIRouter()


@router.get("/dogs", response_model=list[DogDetail])
def list_dogs(
    _: AuthState = Depends(require_user),
    session: DbSession = Depends(get_db_session),
) -> list[DogDetail]:
    """List every dog, most recently registered first."""
    return [dog_to_detail(dog) for dog in repo.list_dogs(session)]


@router.post("/dogs", response_model=DogDetail, status_code=201)
def add_dog(
    payload: DogCreate,
    _: AuthState = Depends(require_admin),
    session: DbSession = Depends(get_db_session),
) -> DogDetail:
    """Create a new dog.

    Args:
        payload: Dog form data.
        session: Database session (injected).

    Returns:
        DogDetail of the stored dog.

    Raises:
        HTTPException: 400 if code or name is blank, 409 if the code exists.
    """
    dog_input = DogInput(
        dog_code=payload.dog_code,
        name=payload.name,
        breed=payload.breed,
        sex=payload.sex,
        birthdate=payload.birthdate,
        notes=payload.notes,
        active=payload.active,
    )

    try:
        dog = create_dog(session, dog_input)
    except DuplicateDogCodeError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    return dog_to_detail(dog)


@router.get("/dogs/{dog_id}", response_model=DogStatsDetail)
def get_dog(
    dog_id: str,
    condition: ConditionKey = "temp",
    bins: int = Query(DEFAULT_BIN_COUNT, ge=1, le=50),
    _: AuthState = Depends(require_user),
    session: DbSession = Depends(get_db_session),
) -> DogStatsDetail:
    """Get a dog's record view.

    Args:
        dog_id: Dog ID to fetch.
        condition: Condition whose distribution is returned.
        bins: Histogram bin count.
        session: Database session (injected).

    Returns:
        DogStatsDetail with rates, distribution and durations.

    Raises:
        HTTPException: 404 if dog not found.
    """
    dog = repo.get_dog(session, dog_id)

    if dog is None:
        raise HTTPException(status_code=404, detail="Dog not found")

    sessions = repo.get_sessions_for_dog(session, dog_id)

    return build_dog_stats(dog, sessions, condition=condition, bin_count=bins)
