"""Per-game session metrics as one tagged union.

The recorder and aggregator work on ``SessionMetrics``; the ``game`` field
picks the variant. Field aliases follow the game client's camelCase payloads.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

MATHMODE = "mathmode"
SNAKE = "snake"
TYPEMASTER = "typemaster"

Operator = Literal["+", "-", "×", "÷"]
OPERATORS: tuple[str, ...] = ("+", "-", "×", "÷")

CUSTOM_LESSON = "custom"
CUSTOM_LESSON_PREFIX = "custom-"


class _Metrics(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class MathModeMetrics(_Metrics):
    game: Literal["mathmode"] = MATHMODE
    operator: Operator
    total_questions: int = Field(..., alias="totalQuestions", ge=0)
    correct_answers: int = Field(0, alias="correctAnswers", ge=0)
    incorrect_answers: int = Field(0, alias="incorrectAnswers", ge=0)
    # Average operand digit count; derived from digits1/digits2 when omitted
    difficulty: float | None = Field(None, ge=0, lt=100)
    digits1: int | None = Field(None, ge=1)
    digits2: int | None = Field(None, ge=1)

    @model_validator(mode="after")
    def _check_counts(self) -> MathModeMetrics:
        if self.correct_answers > self.total_questions:
            msg = "correctAnswers cannot exceed totalQuestions"
            raise ValueError(msg)
        if self.difficulty is None:
            derived = (self.digits1 + self.digits2) / 2 if self.digits1 and self.digits2 else 0.0
            self.difficulty = derived
        return self


class SnakeMetrics(_Metrics):
    game: Literal["snake"] = SNAKE
    score: int = Field(..., ge=0)
    high_score: int | None = Field(None, alias="highScore", ge=0)

    @model_validator(mode="after")
    def _default_high_score(self) -> SnakeMetrics:
        if self.high_score is None:
            self.high_score = self.score
        return self


class TypeMasterMetrics(_Metrics):
    game: Literal["typemaster"] = TYPEMASTER
    lesson_id: str = Field(..., alias="lessonId", min_length=1, max_length=100)
    wpm: int = Field(..., ge=0)
    accuracy: float = Field(0, ge=0, le=100)
    total_keys: int = Field(0, alias="totalKeys", ge=0)
    correct_keys: int = Field(0, alias="correctKeys", ge=0)
    mistakes: int = Field(0, ge=0)
    duration_seconds: int = Field(0, alias="durationSeconds", ge=0)
    words_completed: int = Field(0, alias="wordsCompleted", ge=0)
    custom_list_name: str | None = Field(None, alias="customListName", max_length=255)

    @property
    def is_custom(self) -> bool:
        return self.lesson_id.startswith(CUSTOM_LESSON_PREFIX)


SessionMetrics = Annotated[
    Union[MathModeMetrics, SnakeMetrics, TypeMasterMetrics],
    Field(discriminator="game"),
]


class _SessionSubmission(BaseModel):
    """Body of ``POST /api/<game>/session``: the player plus that game's metrics."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="userId", min_length=1, max_length=255)


class MathModeSubmission(_SessionSubmission, MathModeMetrics):
    def to_metrics(self) -> MathModeMetrics:
        return MathModeMetrics.model_validate(self.model_dump(exclude={"user_id"}))


class SnakeSubmission(_SessionSubmission, SnakeMetrics):
    def to_metrics(self) -> SnakeMetrics:
        return SnakeMetrics.model_validate(self.model_dump(exclude={"user_id"}))


class TypeMasterSubmission(_SessionSubmission, TypeMasterMetrics):
    def to_metrics(self) -> TypeMasterMetrics:
        return TypeMasterMetrics.model_validate(self.model_dump(exclude={"user_id"}))
