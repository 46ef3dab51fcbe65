"""Auth API endpoints.

POST /api/auth/login - Sign in with email and password
POST /api/auth/logout - Revoke the current token
GET /api/auth/me - Current auth state
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response

from k9fetch.api.deps import get_bearer_token, get_db_session, require_user
from k9fetch.db.repo import DbSession
from k9fetch.models.domain import AuthState
from k9fetch.models.types import (
    AuthStateDetail,
    LoginRequest,
    LoginResponse,
    ProfileDetail,
    UserDetail,
)
from k9fetch.services.accounts import AuthenticationError, sign_in, sign_out

router = APIRouter()


def _state_to_detail(state: AuthState) -> AuthStateDetail:
    """Convert a signed-in AuthState to AuthStateDetail."""
    profile = (
        ProfileDetail(role=state.profile.role, full_name=state.profile.full_name)
        if state.profile
        else None
    )
    return AuthStateDetail(
        user=UserDetail(id=state.user.id, email=state.user.email),
        profile=profile,
        is_admin=state.is_admin,
    )


@router.post("/auth/login", response_model=LoginResponse)
def login(
    credentials: LoginRequest,
    session: DbSession = Depends(get_db_session),
) -> LoginResponse:
    """Sign in and issue a bearer token.

    Raises:
        HTTPException: 401 if the credentials are invalid.
    """
    try:
        result = sign_in(session, credentials.email, credentials.password)
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e)) from e

    detail = _state_to_detail(result.state)
    return LoginResponse(access_token=result.access_token, **detail.model_dump())


@router.post("/auth/logout", status_code=204)
def logout(
    _: AuthState = Depends(require_user),
    token: str | None = Depends(get_bearer_token),
    session: DbSession = Depends(get_db_session),
) -> Response:
    """Revoke the bearer token used for this request."""
    if token:
        sign_out(session, token)
    return Response(status_code=204)


@router.get("/auth/me", response_model=AuthStateDetail)
def me(state: AuthState = Depends(require_user)) -> AuthStateDetail:
    """Current user, profile and admin flag."""
    return _state_to_detail(state)
