"""Pydantic schemas for game session, leaderboard and history responses.

Leaderboard and history rows are typed explicitly so that numbers leave the
service as JSON numbers whatever the database driver returned.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


# --- Session submission ---


class SessionRecordedResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str = "Session recorded"
    session_id: int = Field(..., alias="sessionId")


# --- Leaderboards ---


class LeaderboardEntry(BaseModel):
    rank: int = 0
    username: str
    avatar_url: str | None = None
    sessions_played: int


class MathModeLeaderboardEntry(LeaderboardEntry):
    total_questions: int
    total_correct: int
    total_incorrect: int
    avg_difficulty: float | None
    accuracy_percentage: float | None
    operators_played: int


class SnakeLeaderboardEntry(LeaderboardEntry):
    best_score: int
    avg_score: float | None
    total_score: int


class TypeMasterLeaderboardEntry(LeaderboardEntry):
    best_wpm: int
    avg_wpm: float | None
    avg_accuracy: float | None
    best_accuracy: float | None
    total_keys_typed: int
    total_mistakes: int
    lessons_completed: int
    mastery_score: float | None


class MathModeLeaderboardResponse(BaseModel):
    leaderboard: list[MathModeLeaderboardEntry]
    operator: str
    timestamp: datetime


class SnakeLeaderboardResponse(BaseModel):
    leaderboard: list[SnakeLeaderboardEntry]
    timestamp: datetime


class TypeMasterLeaderboardResponse(BaseModel):
    leaderboard: list[TypeMasterLeaderboardEntry]
    lesson: str
    timestamp: datetime


# --- Per-user history ---


class SessionRow(BaseModel):
    id: int
    created_at: datetime


class MathModeSessionRow(SessionRow):
    operator: str
    total_questions: int
    correct_answers: int
    incorrect_answers: int
    difficulty: float
    digits1: int | None
    digits2: int | None
    accuracy_percentage: float | None


class SnakeSessionRow(SessionRow):
    score: int
    high_score: int


class TypeMasterSessionRow(SessionRow):
    lesson_id: str
    wpm: int
    accuracy: float
    total_keys: int
    correct_keys: int
    mistakes: int
    duration_seconds: int
    words_completed: int
    custom_list_name: str | None
    mastery_score: float | None


class MathModeHistoryResponse(BaseModel):
    sessions: list[MathModeSessionRow]
    username: str
    operator: str


class SnakeHistoryResponse(BaseModel):
    sessions: list[SnakeSessionRow]
    username: str


class TypeMasterHistoryResponse(BaseModel):
    sessions: list[TypeMasterSessionRow]
    username: str
    lesson: str


# --- Spelling lists ---


class SpellingList(BaseModel):
    id: str
    name: str
    words: list[str]


class SpellingListsResponse(BaseModel):
    lists: list[SpellingList]
