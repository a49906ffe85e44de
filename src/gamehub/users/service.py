"""User store: profile rows keyed by the identity provider's user id."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING

import structlog
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from gamehub.db.models import User
from gamehub.errors import Conflict, NotFound, ValidationFailed
from gamehub.users.validation import is_valid_username, normalize_username, validate_username

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy.ext.asyncio import AsyncSession

logger = structlog.get_logger()


async def get_user_by_id(db: AsyncSession, user_id: str) -> User | None:
    """Fetch a user by the identity provider's id."""
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def get_user_by_username(db: AsyncSession, username: str) -> User | None:
    """Fetch a user by username (case-insensitive)."""
    result = await db.execute(select(User).where(User.username_normalized == normalize_username(username)))
    return result.scalar_one_or_none()


async def is_username_available(
    db: AsyncSession,
    candidate: str,
    excluding_user_id: str | None = None,
) -> bool:
    """
    Check whether ``candidate`` is free, ignoring case.

    ``excluding_user_id`` lets a user re-save their own current username.

    Raises:
        ValidationFailed: If the candidate does not match the username format.
    """
    validate_username(candidate)
    query = select(User.id).where(User.username_normalized == normalize_username(candidate))
    if excluding_user_id is not None:
        query = query.where(User.id != excluding_user_id)
    result = await db.execute(query.limit(1))
    return result.first() is None


async def _insert_user(db: AsyncSession, user_id: str, email: str, username: str | None) -> User | None:
    """Insert a fresh user row; None when a unique constraint rejected it."""
    now = datetime.now(timezone.utc)
    user = User(
        id=user_id,
        email=email,
        username=username,
        username_normalized=normalize_username(username) if username else None,
        total_games_played=0,
        total_score=0,
        created_at=now,
        updated_at=now,
    )
    db.add(user)
    try:
        await db.flush()
    except IntegrityError:
        await db.rollback()
        return None
    return user


async def get_or_create_user(db: AsyncSession, user_id: str, email: str) -> tuple[User, bool]:
    """
    Get the user for ``user_id`` or create one on first contact.

    New users get the local part of their email as username when it is a
    valid, free username; otherwise the username stays empty until they pick one.

    Returns:
        Tuple of (user, created).

    Raises:
        Conflict: If the email already belongs to a different account.
    """
    user = await get_user_by_id(db, user_id)
    if user is not None:
        return user, False

    local_part = email.split("@")[0]
    username: str | None = None
    if is_valid_username(local_part) and await is_username_available(db, local_part):
        username = local_part

    user = await _insert_user(db, user_id, email, username)
    if user is None and username is not None:
        # The default username was claimed in the meantime; start without one
        username = None
        user = await _insert_user(db, user_id, email, None)
    if user is None:
        existing = await get_user_by_id(db, user_id)
        if existing is None:
            msg = "Email is already registered to another account"
            raise Conflict(msg)
        return existing, False

    logger.info("user_created", user_id=user_id, username=username)
    return user, True


async def update_user_profile(
    db: AsyncSession,
    user_id: str,
    username: str | None = None,
    avatar_url: str | None = None,
    wallet_address: str | None = None,
) -> User:
    """
    Update only the supplied profile fields and touch ``updated_at``.

    Raises:
        ValidationFailed: If nothing was supplied or the username is malformed.
        NotFound: If no user has ``user_id``.
        Conflict: If another user already holds the username (case-insensitive).
    """
    if username is None and avatar_url is None and wallet_address is None:
        msg = "No fields to update"
        raise ValidationFailed(msg)
    if username is not None:
        validate_username(username)

    user = await get_user_by_id(db, user_id)
    if user is None:
        msg = "User not found"
        raise NotFound(msg)

    if username is not None:
        if not await is_username_available(db, username, excluding_user_id=user_id):
            msg = "Username is already taken"
            raise Conflict(msg)
        user.username = username
        user.username_normalized = normalize_username(username)

    if avatar_url is not None:
        user.avatar_url = avatar_url
    if wallet_address is not None:
        user.wallet_address = wallet_address

    user.updated_at = datetime.now(timezone.utc)
    try:
        await db.flush()
    except IntegrityError:
        # Another request committed the same username after the availability check
        await db.rollback()
        msg = "Username is already taken"
        raise Conflict(msg) from None
    logger.info("profile_updated", user_id=user_id, username=user.username)
    return user


async def list_users(db: AsyncSession, limit: int = 100) -> Sequence[User]:
    """Public user directory: users with a username, highest total score first."""
    result = await db.execute(
        select(User)
        .where(User.username.is_not(None))
        .order_by(User.total_score.desc(), func.lower(User.username).asc())
        .limit(limit)
    )
    return result.scalars().all()
