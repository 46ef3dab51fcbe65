"""Sign-in, sign-out and per-request auth state.

Tokens are opaque and stored server-side with an expiry. Domain logic
is pure - database operations go through repo.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from k9fetch.core.identity import hash_password, new_access_token, new_record_id, verify_password
from k9fetch.db import repo
from k9fetch.db.repo import DbSession
from k9fetch.models.domain import AuthSessionEntity, AuthState, ProfileEntity, UserEntity

logger = logging.getLogger(__name__)

DEFAULT_SESSION_TTL_HOURS = 12


class AuthenticationError(Exception):
    """Raised when credentials do not match an account."""


@dataclass
class SignInResult:
    """Issued token and the auth state it grants."""

    access_token: str
    state: AuthState


def _utcnow() -> datetime:
    # SQLite stores naive datetimes; keep everything naive UTC
    return datetime.now(timezone.utc).replace(tzinfo=None)


def session_ttl() -> timedelta:
    """Token lifetime from K9_SESSION_TTL_HOURS."""
    hours = float(os.environ.get("K9_SESSION_TTL_HOURS", DEFAULT_SESSION_TTL_HOURS))
    return timedelta(hours=hours)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def register_user(
    session: DbSession,
    email: str,
    password: str,
    role: str = "trainer",
    full_name: str | None = None,
) -> UserEntity:
    """Create an account with a profile.

    Args:
        session: Database session.
        email: Sign-in email (case-insensitive).
        password: Plain-text password.
        role: Profile role; "admin" may create dogs.
        full_name: Optional display name.

    Returns:
        The created user.

    Raises:
        ValueError: If the email is blank, the password is empty or the
            email is already registered.
    """
    email = normalize_email(email)
    if not email:
        raise ValueError("Email is required")
    if not password:
        raise ValueError("Password is required")
    if repo.get_user_credentials(session, email) is not None:
        raise ValueError(f"User already exists: {email}")

    user = UserEntity(id=new_record_id(), email=email)
    repo.create_user(session, user, hash_password(password))
    repo.create_profile(session, ProfileEntity(id=user.id, role=role, full_name=full_name))
    repo.commit(session)

    logger.info(f"Registered user {email} with role {role}")
    return user


def sign_in(
    session: DbSession,
    email: str,
    password: str,
    ttl: timedelta | None = None,
) -> SignInResult:
    """Check credentials and issue a bearer token.

    Raises:
        AuthenticationError: If the email is unknown or the password is wrong.
    """
    email = normalize_email(email)
    credentials = repo.get_user_credentials(session, email)
    if credentials is None or not verify_password(password, credentials[1]):
        logger.warning(f"Failed sign-in for {email}")
        raise AuthenticationError("Invalid email or password")

    user = credentials[0]
    now = _utcnow()
    auth = AuthSessionEntity(
        token=new_access_token(),
        user_id=user.id,
        expires_at=now + (ttl if ttl is not None else session_ttl()),
    )
    repo.delete_expired_auth_sessions(session, now)
    repo.create_auth_session(session, auth)
    repo.commit(session)

    logger.info(f"User {email} signed in")
    return SignInResult(
        access_token=auth.token,
        state=AuthState(user=user, profile=repo.get_profile(session, user.id)),
    )


def sign_out(session: DbSession, token: str) -> bool:
    """Invalidate a token. Returns True if it was active."""
    removed = repo.delete_auth_session(session, token)
    repo.commit(session)
    if removed:
        logger.info("Access token revoked")
    return removed


def resolve_auth_state(session: DbSession, token: str | None) -> AuthState:
    """Auth state for a bearer token.

    Unknown, expired or missing tokens resolve to a signed-out state;
    expired tokens are removed.
    """
    if not token:
        return AuthState()

    auth = repo.get_auth_session(session, token)
    if auth is None:
        return AuthState()

    if auth.expires_at <= _utcnow():
        repo.delete_auth_session(session, token)
        repo.commit(session)
        return AuthState()

    user = repo.get_user(session, auth.user_id)
    if user is None:
        return AuthState()

    return AuthState(user=user, profile=repo.get_profile(session, user.id))
