"""Per-game definitions consumed by the session recorder and the leaderboard aggregator.

Every game stores its sessions in its own table but is aggregated the same
way: group sessions by user, reduce them to one leaderboard entry, rank.
A ``GameDefinition`` supplies the game-specific parts of that pipeline.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from sqlalchemy import ColumnElement, func

from gamehub.db.models import MathModeSession, SnakeSession, TypeMasterSession
from gamehub.errors import NotFound
from gamehub.games.metrics import (
    CUSTOM_LESSON,
    CUSTOM_LESSON_PREFIX,
    MATHMODE,
    SNAKE,
    TYPEMASTER,
    MathModeMetrics,
    SnakeMetrics,
    TypeMasterMetrics,
)
from gamehub.games.numeric import percentage, round_half_up, to_float, to_int
from gamehub.games.schemas import (
    LeaderboardEntry,
    MathModeLeaderboardEntry,
    MathModeSessionRow,
    SessionRow,
    SnakeLeaderboardEntry,
    SnakeSessionRow,
    TypeMasterLeaderboardEntry,
    TypeMasterSessionRow,
)


@dataclass(frozen=True)
class GameDefinition:
    slug: str
    model: type
    # Query parameter / column pair for the optional sub-dimension
    dimension_param: str | None
    dimension_column: str | None
    counts_games_played: bool
    build_row: Callable[[str, Any], Any]
    aggregates: Callable[[], list[ColumnElement[Any]]]
    reduce: Callable[[Mapping[str, Any]], LeaderboardEntry]
    ranking: Callable[[str | None], Sequence[str]]
    history_row: Callable[[Any], SessionRow]

    def dimension_filter(self, value: str) -> ColumnElement[bool]:
        """WHERE clause restricting sessions to one sub-dimension value."""
        if self.dimension_column is None:
            msg = f"{self.slug} has no sub-dimension"
            raise ValueError(msg)
        column = getattr(self.model, self.dimension_column)
        if self.slug == TYPEMASTER and value == CUSTOM_LESSON:
            # Every custom word list shares one leaderboard
            return column.startswith(CUSTOM_LESSON_PREFIX, autoescape=True)
        return column == value


def _common(row: Mapping[str, Any]) -> dict[str, Any]:
    return {
        "username": row["username"],
        "avatar_url": row["avatar_url"],
        "sessions_played": to_int(row["sessions_played"]),
    }


def _decimal(value: float, places: int) -> Decimal:
    return Decimal(str(round_half_up(value, places)))


# ---------------------------------------------------------------------------
# MathMode
# ---------------------------------------------------------------------------


def _mathmode_row(user_id: str, metrics: MathModeMetrics) -> MathModeSession:
    return MathModeSession(
        user_id=user_id,
        operator=metrics.operator,
        total_questions=metrics.total_questions,
        correct_answers=metrics.correct_answers,
        incorrect_answers=metrics.incorrect_answers,
        difficulty=_decimal(metrics.difficulty or 0, 2),
        digits1=metrics.digits1,
        digits2=metrics.digits2,
    )


def _mathmode_aggregates() -> list[ColumnElement[Any]]:
    m = MathModeSession
    return [
        func.count(m.id).label("sessions_played"),
        func.sum(m.total_questions).label("total_questions"),
        func.sum(m.correct_answers).label("total_correct"),
        func.sum(m.incorrect_answers).label("total_incorrect"),
        func.avg(m.difficulty).label("avg_difficulty"),
        func.count(func.distinct(m.operator)).label("operators_played"),
    ]


def _mathmode_reduce(row: Mapping[str, Any]) -> MathModeLeaderboardEntry:
    total_questions = to_int(row["total_questions"])
    total_correct = to_int(row["total_correct"])
    return MathModeLeaderboardEntry(
        **_common(row),
        total_questions=total_questions,
        total_correct=total_correct,
        total_incorrect=to_int(row["total_incorrect"]),
        avg_difficulty=round_half_up(row["avg_difficulty"], 2),
        accuracy_percentage=percentage(total_correct, total_questions),
        operators_played=to_int(row["operators_played"]),
    )


def _mathmode_history(session: MathModeSession) -> MathModeSessionRow:
    return MathModeSessionRow(
        id=session.id,
        created_at=session.created_at,
        operator=session.operator,
        total_questions=session.total_questions,
        correct_answers=session.correct_answers,
        incorrect_answers=session.incorrect_answers,
        difficulty=to_float(session.difficulty) or 0.0,
        digits1=session.digits1,
        digits2=session.digits2,
        accuracy_percentage=percentage(session.correct_answers, session.total_questions),
    )


# ---------------------------------------------------------------------------
# Snake
# ---------------------------------------------------------------------------


def _snake_row(user_id: str, metrics: SnakeMetrics) -> SnakeSession:
    return SnakeSession(
        user_id=user_id,
        score=metrics.score,
        high_score=metrics.high_score if metrics.high_score is not None else metrics.score,
    )


def _snake_aggregates() -> list[ColumnElement[Any]]:
    s = SnakeSession
    return [
        func.count(s.id).label("sessions_played"),
        func.max(s.score).label("best_score"),
        func.avg(s.score).label("avg_score"),
        func.sum(s.score).label("total_score"),
    ]


def _snake_reduce(row: Mapping[str, Any]) -> SnakeLeaderboardEntry:
    return SnakeLeaderboardEntry(
        **_common(row),
        best_score=to_int(row["best_score"]),
        avg_score=round_half_up(row["avg_score"], 1),
        total_score=to_int(row["total_score"]),
    )


def _snake_history(session: SnakeSession) -> SnakeSessionRow:
    return SnakeSessionRow(
        id=session.id,
        created_at=session.created_at,
        score=session.score,
        high_score=session.high_score,
    )


# ---------------------------------------------------------------------------
# TypeMaster
# ---------------------------------------------------------------------------


def _typemaster_row(user_id: str, metrics: TypeMasterMetrics) -> TypeMasterSession:
    return TypeMasterSession(
        user_id=user_id,
        lesson_id=metrics.lesson_id,
        wpm=metrics.wpm,
        accuracy=_decimal(metrics.accuracy, 2),
        total_keys=metrics.total_keys,
        correct_keys=metrics.correct_keys,
        mistakes=metrics.mistakes,
        duration_seconds=metrics.duration_seconds,
        words_completed=metrics.words_completed,
        custom_list_name=metrics.custom_list_name,
    )


def _typemaster_aggregates() -> list[ColumnElement[Any]]:
    t = TypeMasterSession
    return [
        func.count(t.id).label("sessions_played"),
        func.max(t.wpm).label("best_wpm"),
        func.avg(t.wpm).label("avg_wpm"),
        func.avg(t.accuracy).label("avg_accuracy"),
        func.max(t.accuracy).label("best_accuracy"),
        func.sum(t.total_keys).label("total_keys_typed"),
        func.sum(t.mistakes).label("total_mistakes"),
        func.count(func.distinct(t.lesson_id)).label("lessons_completed"),
        # wpm * accuracy; the /100 and rounding happen in Decimal in the reducer
        func.max(t.wpm * t.accuracy).label("best_keystroke_product"),
    ]


def _typemaster_reduce(row: Mapping[str, Any]) -> TypeMasterLeaderboardEntry:
    return TypeMasterLeaderboardEntry(
        **_common(row),
        best_wpm=to_int(row["best_wpm"]),
        avg_wpm=round_half_up(row["avg_wpm"], 1),
        avg_accuracy=round_half_up(row["avg_accuracy"], 1),
        best_accuracy=to_float(row["best_accuracy"]),
        total_keys_typed=to_int(row["total_keys_typed"]),
        total_mistakes=to_int(row["total_mistakes"]),
        lessons_completed=to_int(row["lessons_completed"]),
        mastery_score=_mastery_from_product(row["best_keystroke_product"]),
    )


def _typemaster_ranking(lesson: str | None) -> Sequence[str]:
    if lesson:
        return ("best_wpm", "avg_accuracy")
    return ("mastery_score", "best_wpm")


def _mastery_from_product(product: Any) -> float | None:  # noqa: ANN401
    """``round(wpm * accuracy / 100, 1)`` given the product ``wpm * accuracy``.

    Accuracy has two decimal places and wpm is whole, so the product is exact
    at two places; float noise from the driver is cut off there first.
    """
    if product is None:
        return None
    exact = Decimal(str(product)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return round_half_up(exact / 100, 1)


def mastery_score(wpm: Any, accuracy: Any) -> float | None:  # noqa: ANN401
    """Mastery of a single session, rounded the same way as the leaderboard."""
    if wpm is None or accuracy is None:
        return None
    return _mastery_from_product(Decimal(str(wpm)) * Decimal(str(accuracy)))


def _typemaster_history(session: TypeMasterSession) -> TypeMasterSessionRow:
    return TypeMasterSessionRow(
        id=session.id,
        created_at=session.created_at,
        lesson_id=session.lesson_id,
        wpm=session.wpm,
        accuracy=to_float(session.accuracy) or 0.0,
        total_keys=session.total_keys,
        correct_keys=session.correct_keys,
        mistakes=session.mistakes,
        duration_seconds=session.duration_seconds,
        words_completed=session.words_completed,
        custom_list_name=session.custom_list_name,
        mastery_score=mastery_score(session.wpm, session.accuracy),
    )


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


GAMES: dict[str, GameDefinition] = {
    MATHMODE: GameDefinition(
        slug=MATHMODE,
        model=MathModeSession,
        dimension_param="operator",
        dimension_column="operator",
        # Observed behaviour: MathMode never bumped total_games_played
        counts_games_played=False,
        build_row=_mathmode_row,
        aggregates=_mathmode_aggregates,
        reduce=_mathmode_reduce,
        ranking=lambda _operator: ("total_correct", "accuracy_percentage"),
        history_row=_mathmode_history,
    ),
    SNAKE: GameDefinition(
        slug=SNAKE,
        model=SnakeSession,
        dimension_param=None,
        dimension_column=None,
        counts_games_played=True,
        build_row=_snake_row,
        aggregates=_snake_aggregates,
        reduce=_snake_reduce,
        ranking=lambda _unused: ("best_score", "total_score"),
        history_row=_snake_history,
    ),
    TYPEMASTER: GameDefinition(
        slug=TYPEMASTER,
        model=TypeMasterSession,
        dimension_param="lesson",
        dimension_column="lesson_id",
        counts_games_played=True,
        build_row=_typemaster_row,
        aggregates=_typemaster_aggregates,
        reduce=_typemaster_reduce,
        ranking=_typemaster_ranking,
        history_row=_typemaster_history,
    ),
}


def get_game(slug: str) -> GameDefinition:
    """Look up a game by slug; unknown games are a 404."""
    try:
        return GAMES[slug]
    except KeyError:
        msg = f"Unknown game: {slug}"
        raise NotFound(msg) from None
