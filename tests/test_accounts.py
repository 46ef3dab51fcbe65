"""Tests for sign-in, sign-out and auth state resolution."""

from datetime import timedelta

import pytest

from k9fetch.db import repo
from k9fetch.db.schema import Profile
from k9fetch.services.accounts import (
    AuthenticationError,
    register_user,
    resolve_auth_state,
    session_ttl,
    sign_in,
    sign_out,
)


@pytest.fixture
def admin(session):
    return register_user(session, "Admin@Example.com ", "pw-admin", role="admin", full_name="Ana")


@pytest.fixture
def trainer(session):
    return register_user(session, "trainer@example.com", "pw-trainer")


class TestRegisterUser:
    """Test register_user()."""

    def test_email_normalized(self, session, admin):
        assert admin.email == "admin@example.com"
        assert repo.get_profile(session, admin.id).full_name == "Ana"

    def test_default_role_is_trainer(self, session, trainer):
        assert repo.get_profile(session, trainer.id).role == "trainer"

    def test_duplicate_email_rejected(self, session, admin):
        with pytest.raises(ValueError, match="already exists"):
            register_user(session, "ADMIN@example.com", "other")

    @pytest.mark.parametrize("email,password", [("  ", "pw"), ("x@example.com", "")])
    def test_blank_input_rejected(self, session, email, password):
        with pytest.raises(ValueError):
            register_user(session, email, password)


class TestSignIn:
    """Test sign_in()."""

    def test_admin_state(self, session, admin):
        result = sign_in(session, "admin@example.com", "pw-admin")
        assert result.access_token
        assert result.state.is_authenticated
        assert result.state.is_admin

    def test_trainer_is_not_admin(self, session, trainer):
        result = sign_in(session, "TRAINER@example.com", "pw-trainer")
        assert result.state.is_authenticated
        assert not result.state.is_admin

    def test_wrong_password(self, session, admin):
        with pytest.raises(AuthenticationError):
            sign_in(session, "admin@example.com", "nope")

    def test_unknown_email(self, session):
        with pytest.raises(AuthenticationError):
            sign_in(session, "ghost@example.com", "pw")


class TestResolveAuthState:
    """Test resolve_auth_state()."""

    def test_missing_token(self, session):
        state = resolve_auth_state(session, None)
        assert not state.is_authenticated
        assert not state.is_admin

    def test_unknown_token(self, session):
        assert not resolve_auth_state(session, "bogus").is_authenticated

    def test_valid_token(self, session, admin):
        token = sign_in(session, "admin@example.com", "pw-admin").access_token
        state = resolve_auth_state(session, token)
        assert state.user.id == admin.id
        assert state.profile.role == "admin"

    def test_expired_token_removed(self, session, admin):
        token = sign_in(
            session, "admin@example.com", "pw-admin", ttl=timedelta(seconds=-1)
        ).access_token
        assert not resolve_auth_state(session, token).is_authenticated
        assert repo.get_auth_session(session, token) is None

    def test_user_without_profile_is_not_admin(self, session, trainer):
        token = sign_in(session, "trainer@example.com", "pw-trainer").access_token
        session.query(Profile).delete()
        session.commit()

        state = resolve_auth_state(session, token)
        assert state.is_authenticated
        assert state.profile is None
        assert not state.is_admin


class TestSignOut:
    """Test sign_out()."""

    def test_token_revoked(self, session, admin):
        token = sign_in(session, "admin@example.com", "pw-admin").access_token
        assert sign_out(session, token) is True
        assert not resolve_auth_state(session, token).is_authenticated
        assert sign_out(session, token) is False


class TestSessionTtl:
    """Test session_ttl()."""

    def test_default(self, monkeypatch):
        monkeypatch.delenv("K9_SESSION_TTL_HOURS", raising=False)
        assert session_ttl() == timedelta(hours=12)

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("K9_SESSION_TTL_HOURS", "1.5")
        assert session_ttl() == timedelta(minutes=90)
