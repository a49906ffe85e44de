"""Session recorder: the single write path for finished games."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING

import structlog
from sqlalchemy import select, update

from gamehub.db.models import User
from gamehub.errors import NotFound
from gamehub.games.metrics import MATHMODE
from gamehub.games.registry import get_game

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from gamehub.games.metrics import SessionMetrics

logger = structlog.get_logger()


async def record_session(
    db: AsyncSession,
    user_id: str,
    metrics: SessionMetrics,
    *,
    count_mathmode: bool = False,
) -> int:
    """
    Append one session row and, where the game counts plays, bump the user's counter.

    Both statements run in the caller's transaction; the caller commits once
    so the insert and the increment succeed or fail together.

    Returns:
        The new session id.

    Raises:
        NotFound: If ``user_id`` does not reference an existing user.
    """
    game = get_game(metrics.game)

    exists = await db.scalar(select(User.id).where(User.id == user_id))
    if exists is None:
        msg = "User not found"
        raise NotFound(msg)

    session = game.build_row(user_id, metrics)
    db.add(session)
    await db.flush()

    counted = game.counts_games_played or (metrics.game == MATHMODE and count_mathmode)
    if counted:
        await db.execute(
            update(User)
            .where(User.id == user_id)
            .values(
                total_games_played=User.total_games_played + 1,
                updated_at=datetime.now(timezone.utc),
            )
        )

    logger.info(
        "session_recorded",
        game=game.slug,
        session_id=session.id,
        user_id=user_id,
        counted=counted,
    )
    return session.id
