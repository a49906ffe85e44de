"""ORM models for users and the per-game session tables.

Each game keeps its own append-only session table; the shared columns live
on ``SessionMixin`` so the recorder and aggregator can treat them alike.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import (
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, declared_attr, mapped_column, relationship

from gamehub.db.base import Base, UTCDateTime


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


class User(Base):
    """Maps to the 'users' table. The id comes from the identity provider."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    username: Mapped[str | None] = mapped_column(String(20), nullable=True)
    username_normalized: Mapped[str | None] = mapped_column(String(20), nullable=True, unique=True)
    avatar_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    wallet_address: Mapped[str | None] = mapped_column(String(255), nullable=True)
    total_games_played: Mapped[int] = mapped_column(Integer, default=0, server_default="0", nullable=False)
    # Declared for profile display; nothing increments it yet.
    total_score: Mapped[int] = mapped_column(Integer, default=0, server_default="0", nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), default=_utcnow, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), default=_utcnow, server_default=func.now(), nullable=False
    )

    mathmode_sessions: Mapped[list[MathModeSession]] = relationship(
        "MathModeSession", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )
    snake_sessions: Mapped[list[SnakeSession]] = relationship(
        "SnakeSession", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )
    typemaster_sessions: Mapped[list[TypeMasterSession]] = relationship(
        "TypeMasterSession", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )


# ---------------------------------------------------------------------------
# Game sessions
# ---------------------------------------------------------------------------


class SessionMixin:
    """Columns every game session row carries."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), default=_utcnow, server_default=func.now(), nullable=False, index=True
    )

    @declared_attr
    def user_id(cls) -> Mapped[str]:  # noqa: N805
        return mapped_column(String(255), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)


class MathModeSession(SessionMixin, Base):
    """One finished MathMode drill."""

    __tablename__ = "mathmode_sessions"

    operator: Mapped[str] = mapped_column(String(1), nullable=False, index=True)
    total_questions: Mapped[int] = mapped_column(Integer, nullable=False)
    correct_answers: Mapped[int] = mapped_column(Integer, nullable=False)
    incorrect_answers: Mapped[int] = mapped_column(Integer, nullable=False)
    difficulty: Mapped[Decimal] = mapped_column(Numeric(4, 2), nullable=False)
    digits1: Mapped[int | None] = mapped_column(Integer, nullable=True)
    digits2: Mapped[int | None] = mapped_column(Integer, nullable=True)

    user: Mapped[User] = relationship("User", back_populates="mathmode_sessions")


class SnakeSession(SessionMixin, Base):
    """One finished Snake run."""

    __tablename__ = "snake_sessions"

    score: Mapped[int] = mapped_column(Integer, nullable=False)
    high_score: Mapped[int] = mapped_column(Integer, nullable=False)

    user: Mapped[User] = relationship("User", back_populates="snake_sessions")


class TypeMasterSession(SessionMixin, Base):
    """One finished TypeMaster lesson. Custom word lists use lesson ids ``custom-<listId>``."""

    __tablename__ = "typemaster_sessions"

    lesson_id: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    wpm: Mapped[int] = mapped_column(Integer, nullable=False)
    accuracy: Mapped[Decimal] = mapped_column(Numeric(5, 2), nullable=False)
    total_keys: Mapped[int] = mapped_column(Integer, nullable=False)
    correct_keys: Mapped[int] = mapped_column(Integer, nullable=False)
    mistakes: Mapped[int] = mapped_column(Integer, nullable=False)
    duration_seconds: Mapped[int] = mapped_column(Integer, nullable=False)
    words_completed: Mapped[int] = mapped_column(Integer, nullable=False)
    custom_list_name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    user: Mapped[User] = relationship("User", back_populates="typemaster_sessions")
