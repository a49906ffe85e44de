"""Game endpoints: session submission, leaderboards and per-user history."""

from __future__ import annotations

from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from gamehub.config import get_settings
from gamehub.database import get_session
from gamehub.errors import StorageError, ValidationFailed
from gamehub.games.aggregator import get_leaderboard, get_user_sessions
from gamehub.games.metrics import (
    MATHMODE,
    SNAKE,
    TYPEMASTER,
    MathModeSubmission,
    SnakeSubmission,
    TypeMasterSubmission,
)
from gamehub.games.recorder import record_session
from gamehub.games.registry import get_game
from gamehub.games.schemas import (
    MathModeHistoryResponse,
    MathModeLeaderboardResponse,
    SessionRecordedResponse,
    SnakeHistoryResponse,
    SnakeLeaderboardResponse,
    SpellingListsResponse,
    TypeMasterHistoryResponse,
    TypeMasterLeaderboardResponse,
)
from gamehub.games.spelling_lists import load_spelling_lists

logger = structlog.get_logger()

router = APIRouter(prefix="/api", tags=["Games"])


# ── Helpers ──


async def _record(
    db: AsyncSession,
    submission: MathModeSubmission | SnakeSubmission | TypeMasterSubmission,
) -> SessionRecordedResponse:
    """Insert the session and its counter update as one unit of work."""
    settings = get_settings()
    try:
        session_id = await record_session(
            db,
            submission.user_id,
            submission.to_metrics(),
            count_mathmode=settings.count_mathmode_sessions,
        )
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error("session_record_failed", game=submission.game, user_id=submission.user_id, error=str(exc))
        msg = "Failed to record session"
        raise StorageError(msg) from exc
    return SessionRecordedResponse(session_id=session_id)


def _required_username(username: str | None) -> str:
    if not username or not username.strip():
        msg = "Username is required"
        raise ValidationFailed(msg)
    return username.strip()


def _operator(value: str | None) -> str | None:
    """Normalise the MathMode operator filter."""
    if value is None or value == "":
        return None
    # An unencoded "+" in a query string arrives as a space
    if value.strip() == "":
        return "+"
    return value.strip()


def _now() -> datetime:
    return datetime.now(timezone.utc)


# ── MathMode ──


@router.post("/mathmode/session", response_model=SessionRecordedResponse)
async def submit_mathmode_session(
    body: MathModeSubmission,
    db: AsyncSession = Depends(get_session),
) -> SessionRecordedResponse:
    return await _record(db, body)


@router.get("/mathmode/leaderboard", response_model=MathModeLeaderboardResponse)
async def mathmode_leaderboard(
    operator: str | None = Query(None),
    db: AsyncSession = Depends(get_session),
) -> MathModeLeaderboardResponse:
    """Ranked by total correct answers, then accuracy. ``operator`` narrows to one operator."""
    op = _operator(operator)
    entries = await get_leaderboard(db, get_game(MATHMODE), op, limit=get_settings().leaderboard_limit)
    return MathModeLeaderboardResponse(leaderboard=entries, operator=op or "global", timestamp=_now())


@router.get("/mathmode/user-sessions", response_model=MathModeHistoryResponse)
async def mathmode_user_sessions(
    username: str | None = Query(None),
    operator: str | None = Query(None),
    db: AsyncSession = Depends(get_session),
) -> MathModeHistoryResponse:
    name = _required_username(username)
    op = _operator(operator)
    sessions = await get_user_sessions(db, get_game(MATHMODE), name, op)
    return MathModeHistoryResponse(sessions=sessions, username=name, operator=op or "all")


# ── Snake ──


@router.post("/snake/session", response_model=SessionRecordedResponse)
async def submit_snake_session(
    body: SnakeSubmission,
    db: AsyncSession = Depends(get_session),
) -> SessionRecordedResponse:
    return await _record(db, body)


@router.get("/snake/leaderboard", response_model=SnakeLeaderboardResponse)
async def snake_leaderboard(
    db: AsyncSession = Depends(get_session),
) -> SnakeLeaderboardResponse:
    """Ranked by best score, then total score."""
    entries = await get_leaderboard(db, get_game(SNAKE), limit=get_settings().leaderboard_limit)
    return SnakeLeaderboardResponse(leaderboard=entries, timestamp=_now())


@router.get("/snake/user-sessions", response_model=SnakeHistoryResponse)
async def snake_user_sessions(
    username: str | None = Query(None),
    db: AsyncSession = Depends(get_session),
) -> SnakeHistoryResponse:
    name = _required_username(username)
    sessions = await get_user_sessions(db, get_game(SNAKE), name)
    return SnakeHistoryResponse(sessions=sessions, username=name)


# ── TypeMaster ──


@router.post("/typemaster/session", response_model=SessionRecordedResponse)
async def submit_typemaster_session(
    body: TypeMasterSubmission,
    db: AsyncSession = Depends(get_session),
) -> SessionRecordedResponse:
    return await _record(db, body)


@router.get("/typemaster/leaderboard", response_model=TypeMasterLeaderboardResponse)
async def typemaster_leaderboard(
    lesson: str | None = Query(None),
    db: AsyncSession = Depends(get_session),
) -> TypeMasterLeaderboardResponse:
    """Global view ranks by mastery score; a lesson view (``custom`` for all word lists) by best wpm."""
    lesson = lesson or None
    entries = await get_leaderboard(db, get_game(TYPEMASTER), lesson, limit=get_settings().leaderboard_limit)
    return TypeMasterLeaderboardResponse(leaderboard=entries, lesson=lesson or "global", timestamp=_now())


@router.get("/typemaster/user-sessions", response_model=TypeMasterHistoryResponse)
async def typemaster_user_sessions(
    username: str | None = Query(None),
    lesson: str | None = Query(None),
    db: AsyncSession = Depends(get_session),
) -> TypeMasterHistoryResponse:
    name = _required_username(username)
    lesson = lesson or None
    sessions = await get_user_sessions(db, get_game(TYPEMASTER), name, lesson)
    return TypeMasterHistoryResponse(sessions=sessions, username=name, lesson=lesson or "all")


@router.get("/spelling-lists", response_model=SpellingListsResponse)
async def spelling_lists() -> SpellingListsResponse:
    """Word lists available as TypeMaster custom lessons."""
    return SpellingListsResponse(lists=load_spelling_lists(get_settings().spelling_lists_path))
