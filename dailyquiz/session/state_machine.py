from __future__ import annotations

"""Quiz session state machine.

States: empty -> loaded -> (answering <-> answered)* -> finished.

Out-of-order calls (confirming twice, advancing before confirming,
selecting after confirming, acting on an empty or finished session) are
ignored by default. Construct with ``strict=True`` to have them raise
:class:`~dailyquiz.errors.CallerMisuseError` instead.
"""

import logging
import random
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from ..app.explain import trace as xtrace
from ..errors import CallerMisuseError
from ..util.randomness import make_rng, shuffled
from .schema import Question

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionSnapshot:
    questions: Tuple[Question, ...]
    current_index: int
    selected_answer: Optional[str]
    is_answered: bool
    score: int
    finished: bool

    @property
    def loaded(self) -> bool:
        return bool(self.questions)

    @property
    def total(self) -> int:
        return len(self.questions)

    @property
    def current_question(self) -> Optional[Question]:
        if not self.questions:
            return None
        return self.questions[self.current_index]

    @property
    def is_last(self) -> bool:
        return bool(self.questions) and self.current_index == len(self.questions) - 1


class QuizSession:
    def __init__(
        self,
        *,
        rng: Optional[random.Random] = None,
        strict: bool = False,
        on_change: Optional[Callable[[SessionSnapshot], None]] = None,
    ) -> None:
        self.rng = rng or make_rng()
        self.strict = strict
        self._on_change = on_change
        self._questions: Tuple[Question, ...] = ()
        self._index = 0
        self._selected: Optional[str] = None
        self._answered = False
        self._score = 0
        self._finished = False

    # --- read-only state ---

    @property
    def questions(self) -> Tuple[Question, ...]:
        return self._questions

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def selected_answer(self) -> Optional[str]:
        return self._selected

    @property
    def is_answered(self) -> bool:
        return self._answered

    @property
    def score(self) -> int:
        return self._score

    @property
    def finished(self) -> bool:
        return self._finished

    @property
    def current_question(self) -> Question:
        if not self._questions:
            raise IndexError("no questions loaded")
        return self._questions[self._index]

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            questions=self._questions,
            current_index=self._index,
            selected_answer=self._selected,
            is_answered=self._answered,
            score=self._score,
            finished=self._finished,
        )

    # --- transitions ---

    def load(self, questions: Sequence[Question]) -> None:
        """Replace the question list and start over at the first question."""
        qs = tuple(questions)
        if not qs:
            raise ValueError("cannot load a session with no questions")
        self._questions = qs
        self._reset_progress()
        xtrace("quiz_loaded", {"questions": len(qs)})
        self._changed()

    def reset(self) -> None:
        """Restart the same questions from the beginning."""
        if not self._questions:
            self._misuse("reset", "no questions loaded")
            return
        self._reset_progress()
        self._changed()

    def clear(self) -> None:
        """Drop all questions, back to the empty state."""
        self._questions = ()
        self._reset_progress()
        self._changed()

    def select(self, answer: str) -> None:
        if not self._can_act("select"):
            return
        if self._answered:
            self._misuse("select", "answer already confirmed")
            return
        self._selected = answer
        self._changed()

    def confirm(self) -> None:
        if not self._can_act("confirm"):
            return
        if self._answered:
            self._misuse("confirm", "answer already confirmed")
            return
        self._answered = True
        correct = self._selected == self.current_question.correct_answer
        if correct:
            self._score += 1
        xtrace("answer_confirmed", {"index": self._index, "correct": correct, "score": self._score})
        self._changed()

    def advance(self) -> None:
        if not self._can_act("advance"):
            return
        if not self._answered:
            self._misuse("advance", "answer not confirmed")
            return
        self._step()
        self._changed()

    def skip(self) -> None:
        """Move past the current question without confirming it."""
        if not self._can_act("skip"):
            return
        if self._answered:
            self._misuse("skip", "answer already confirmed")
            return
        xtrace("question_skipped", {"index": self._index})
        self._step()
        self._changed()

    # --- queries ---

    def shuffled_choices(self) -> List[str]:
        """All answers of the current question in a fresh random order; [] when empty."""
        if not self.check_loaded("shuffled_choices"):
            return []
        return shuffled(self.current_question.choices, self.rng)

    def is_correct(self, answer: Optional[str]) -> bool:
        if not self.check_loaded("is_correct"):
            return False
        return answer == self.current_question.correct_answer

    def check_loaded(self, op: str) -> bool:
        """False (or CallerMisuseError in strict mode) when no questions are loaded."""
        if not self._questions:
            self._misuse(op, "no questions loaded")
            return False
        return True

    # --- internals ---

    def _reset_progress(self) -> None:
        self._index = 0
        self._selected = None
        self._answered = False
        self._score = 0
        self._finished = False

    def _step(self) -> None:
        if self._index == len(self._questions) - 1:
            self._finished = True
            xtrace("quiz_finished", {"score": self._score, "total": len(self._questions)})
            return
        self._index += 1
        self._selected = None
        self._answered = False

    def _can_act(self, op: str) -> bool:
        if not self.check_loaded(op):
            return False
        if self._finished:
            self._misuse(op, "quiz already finished")
            return False
        return True

    def _misuse(self, op: str, reason: str) -> None:
        if self.strict:
            raise CallerMisuseError(f"{op}: {reason}")
        log.debug("ignored %s: %s", op, reason)
        xtrace("ignored", {"op": op, "reason": reason})

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change(self.snapshot())
