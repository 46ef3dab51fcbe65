"""Database schema for K-9 Smart Fetch.

Tables mirror the hosted store: accounts, dogs and training sessions,
with unique constraints on the human-facing keys.
"""

from datetime import date, datetime, timezone

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    Float,
    ForeignKey,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class User(Base):
    """Account that can sign in with email and password."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=lambda: datetime.now(timezone.utc)
    )

    __table_args__ = (UniqueConstraint("email", name="uq_user_email"),)


class Profile(Base):
    """Role and display name for a user (optional)."""

    __tablename__ = "profiles"

    id: Mapped[str] = mapped_column(String(64), ForeignKey("users.id"), primary_key=True)
    role: Mapped[str] = mapped_column(String(32), nullable=False, default="trainer")
    full_name: Mapped[str | None] = mapped_column(String(255), nullable=True)


class AuthSession(Base):
    """Opaque bearer token issued on sign-in."""

    __tablename__ = "auth_sessions"

    token: Mapped[str] = mapped_column(String(128), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(64), ForeignKey("users.id"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=lambda: datetime.now(timezone.utc)
    )
    expires_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)


class Dog(Base):
    """Dog record.

    Invariant: UNIQUE(dog_code)
    The human-readable code identifies a dog across the kennel.
    """

    __tablename__ = "dogs"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    dog_code: Mapped[str] = mapped_column(String(64), nullable=False)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    breed: Mapped[str | None] = mapped_column(String(128), nullable=True)
    sex: Mapped[str | None] = mapped_column(String(16), nullable=True)
    birthdate: Mapped[date | None] = mapped_column(Date, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=lambda: datetime.now(timezone.utc)
    )

    __table_args__ = (UniqueConstraint("dog_code", name="uq_dog_code"),)


class TrainingSession(Base):
    """A single detection training session for a dog.

    conditions_json and type_json hold free-form JSON blobs as entered
    by trainers; they are validated only when read.
    """

    __tablename__ = "training_sessions"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    dog_id: Mapped[str] = mapped_column(String(64), ForeignKey("dogs.id"), nullable=False)
    result: Mapped[str | None] = mapped_column(String(64), nullable=True)
    started_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    duration_s: Mapped[float | None] = mapped_column(Float, nullable=True)
    conditions_json: Mapped[str | None] = mapped_column(Text, nullable=True)
    type_json: Mapped[str | None] = mapped_column(Text, nullable=True)

    dog: Mapped[Dog] = relationship()
