"""Request-scoped dependencies.

- get_db_session: one database session per request
- get_auth_state: auth state resolved once per request from the bearer token
- require_user / require_admin: route guards
"""

from __future__ import annotations

from typing import Generator

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from k9fetch.db.repo import DbSession
from k9fetch.db.session import get_session
from k9fetch.models.domain import AuthState
from k9fetch.services.accounts import resolve_auth_state

bearer_scheme = HTTPBearer(auto_error=False)


def get_db_session() -> Generator[DbSession, None, None]:
    """Dependency to get database session.

    Yields:
        Database session that is automatically closed after request.
    """
    session = get_session()
    try:
        yield session
    finally:
        session.close()


def get_bearer_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str | None:
    """Bearer token from the Authorization header, if any."""
    return credentials.credentials if credentials else None


def get_auth_state(
    token: str | None = Depends(get_bearer_token),
    session: DbSession = Depends(get_db_session),
) -> AuthState:
    """Resolve the auth state for this request."""
    return resolve_auth_state(session, token)


def require_user(state: AuthState = Depends(get_auth_state)) -> AuthState:
    """Require a signed-in user.

    Raises:
        HTTPException: 401 if not signed in.
    """
    if not state.is_authenticated:
        raise HTTPException(
            status_code=401,
            detail="Sign in to continue",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return state


def require_admin(state: AuthState = Depends(require_user)) -> AuthState:
    """Require a signed-in admin.

    Raises:
        HTTPException: 403 if the user's role is not admin.
    """
    if not state.is_admin:
        raise HTTPException(status_code=403, detail="Only admins can create dogs")
    return state
