"""Leaderboard aggregator: read-only queries over the session tables.

Both query shapes are generic over ``GameDefinition``; nothing here knows
which game it is ranking.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from gamehub.db.models import User
from gamehub.errors import StorageError
from gamehub.games.ranking import rank_entries
from gamehub.games.registry import GameDefinition
from gamehub.users.validation import normalize_username

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from gamehub.games.schemas import LeaderboardEntry, SessionRow

logger = structlog.get_logger()

MAX_LEADERBOARD_ROWS = 50


async def get_leaderboard(
    db: AsyncSession,
    game: GameDefinition,
    dimension: str | None = None,
    limit: int = MAX_LEADERBOARD_ROWS,
) -> list[LeaderboardEntry]:
    """
    Per-user aggregate leaderboard for ``game``.

    Sessions are filtered by ``dimension`` (operator or lesson) before being
    grouped per user; users without a username never appear. At most
    ``limit`` (capped at 50) ranked entries are returned.

    Raises:
        StorageError: If the query fails. No partial results are returned.
    """
    model = game.model
    query = (
        select(User.username, User.avatar_url, *game.aggregates())
        .select_from(model)
        .join(User, model.user_id == User.id)
        .where(User.username.is_not(None))
        .group_by(User.id, User.username, User.avatar_url)
    )
    if dimension:
        query = query.where(game.dimension_filter(dimension))

    try:
        result = await db.execute(query)
        rows = result.mappings().all()
    except SQLAlchemyError as exc:
        logger.error("leaderboard_query_failed", game=game.slug, dimension=dimension, error=str(exc))
        msg = "Failed to fetch leaderboard"
        raise StorageError(msg) from exc

    entries = [game.reduce(row) for row in rows]
    return rank_entries(entries, game.ranking(dimension), limit=min(limit, MAX_LEADERBOARD_ROWS))


async def get_user_sessions(
    db: AsyncSession,
    game: GameDefinition,
    username: str,
    dimension: str | None = None,
) -> list[SessionRow]:
    """
    Every session ``username`` played of ``game``, newest first.

    Each row carries its own derived metric (accuracy percentage or mastery
    score). An unknown username yields an empty list.

    Raises:
        StorageError: If the query fails.
    """
    model = game.model
    query = (
        select(model)
        .join(User, model.user_id == User.id)
        .where(User.username_normalized == normalize_username(username))
        .order_by(model.created_at.desc(), model.id.desc())
    )
    if dimension:
        query = query.where(game.dimension_filter(dimension))

    try:
        result = await db.execute(query)
        sessions = result.scalars().all()
    except SQLAlchemyError as exc:
        logger.error("user_sessions_query_failed", game=game.slug, username=username, error=str(exc))
        msg = "Failed to fetch sessions"
        raise StorageError(msg) from exc

    return [game.history_row(session) for session in sessions]
