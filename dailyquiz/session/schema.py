from __future__ import annotations

"""Pydantic model for trivia questions as held by a session."""

import html
from enum import Enum
from typing import Any, Dict, Tuple
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


DIFFICULTIES = {d.value for d in Difficulty}


def _unescape(s: str) -> str:
    return html.unescape(s or "")


class Question(BaseModel):
    """One multiple-choice question.

    Immutable once created. The ``id`` is generated locally; the provider
    does not supply one.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    category: str
    type: str
    difficulty: Difficulty
    prompt: str
    correct_answer: str
    incorrect_answers: Tuple[str, ...] = Field(min_length=1)

    @property
    def choices(self) -> Tuple[str, ...]:
        """Incorrect answers followed by the correct one (unshuffled)."""
        return self.incorrect_answers + (self.correct_answer,)

    @classmethod
    def from_api(cls, raw: Dict[str, Any]) -> "Question":
        """Build a question from one entry of the provider's ``results`` array.

        Category, prompt and every answer are HTML-entity decoded; the
        provider encodes quotes and other special characters (``&quot;``).
        """
        incorrect = raw.get("incorrect_answers")
        if not isinstance(incorrect, list):
            raise ValueError("incorrect_answers must be a list")
        return cls(
            category=_unescape(str(raw["category"])),
            type=str(raw["type"]),
            difficulty=str(raw["difficulty"]),
            prompt=_unescape(str(raw["question"])),
            correct_answer=_unescape(str(raw["correct_answer"])),
            incorrect_answers=tuple(_unescape(str(x)) for x in incorrect),
        )
