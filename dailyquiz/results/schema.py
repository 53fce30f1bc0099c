from __future__ import annotations

"""Pydantic models for persisted quiz results.

Field aliases give the stored camelCase layout (``totalQuestions``,
``questionResults``, ...); Python code uses the snake_case names.
"""

from datetime import datetime, timezone
from typing import List, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator, model_validator


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class QuestionResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    question: str
    correct_answer: str = Field(alias="correctAnswer")
    selected_answer: Optional[str] = Field(default=None, alias="selectedAnswer")

    @property
    def answered(self) -> bool:
        return self.selected_answer is not None

    @property
    def is_correct(self) -> bool:
        return self.selected_answer == self.correct_answer


class QuizResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    date: datetime = Field(default_factory=_utcnow)
    score: int = Field(ge=0)
    total_questions: int = Field(ge=0, alias="totalQuestions")
    attempt_number: int = Field(ge=1, alias="attemptNumber")
    question_results: List[QuestionResult] = Field(default_factory=list, alias="questionResults")

    @field_validator("date")
    @classmethod
    def _ensure_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)

    @model_validator(mode="after")
    def _score_le_total(self) -> "QuizResult":
        if self.score > self.total_questions:
            raise ValueError("score must be <= totalQuestions")
        return self

    @property
    def accuracy(self) -> float:
        if self.total_questions == 0:
            return 0.0
        return self.score / self.total_questions


HISTORY_ADAPTER = TypeAdapter(List[QuizResult])


def dump_history(results: List[QuizResult]) -> str:
    """Serialize results to the stored JSON array (camelCase keys, ISO dates)."""
    return HISTORY_ADAPTER.dump_json(results, by_alias=True).decode("utf-8")


def parse_history(blob: str | bytes) -> List[QuizResult]:
    """Parse a stored JSON array; raises pydantic.ValidationError if malformed."""
    return HISTORY_ADAPTER.validate_json(blob)
