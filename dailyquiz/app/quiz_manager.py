from __future__ import annotations

"""Quiz Manager: the boundary a front end talks to.

Owns the active session and its answer log, the history store, and the
run phase. Front ends read immutable snapshots and subscribe to events;
they never mutate state directly.
"""

import logging
import random
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..api.opentdb import fetch_questions
from ..errors import DecodeError, NetworkError, QuizError
from ..results.history import HistoryStore
from ..results.schema import QuestionResult, QuizResult
from ..session.answer_log import AnswerLog
from ..session.schema import Question
from ..session.state_machine import QuizSession, SessionSnapshot
from ..storage.store import JsonFileStore, KeyValueStore
from ..util.randomness import make_rng
from .events import LOAD_FAILED, PHASE_CHANGED, SESSION_CHANGED, EventBus
from .explain import trace as xtrace

log = logging.getLogger(__name__)

Fetcher = Callable[[], List[Question]]


class Phase(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    QUIZ = "quiz"
    RESULTS = "results"
    ERROR = "error"


@dataclass(frozen=True)
class ManagerSnapshot:
    phase: Phase
    session: SessionSnapshot
    history: Tuple[QuizResult, ...]
    last_error: Optional[str]
    last_result: Optional[QuizResult]


def fetcher_from_config(cfg: Dict[str, Any]) -> Fetcher:
    api = cfg.get("api", {})

    def _fetch() -> List[Question]:
        return fetch_questions(
            amount=int(api.get("amount", 5)),
            category=int(api.get("category", 9)),
            difficulty=str(api.get("difficulty", "easy")),
            endpoint=str(api.get("endpoint", "https://opentdb.com/api.php")),
            timeout=api.get("timeout_s"),
        )

    return _fetch


class QuizManager:
    def __init__(
        self,
        fetcher: Fetcher,
        store: KeyValueStore,
        *,
        history_key: str = "quizHistory",
        strict: bool = False,
        rng: Optional[random.Random] = None,
        bus: Optional[EventBus] = None,
    ) -> None:
        self.fetcher = fetcher
        self.bus = bus or EventBus()
        self.session = QuizSession(rng=rng or make_rng(), strict=strict, on_change=self._session_changed)
        self.answers = AnswerLog()
        self.history = HistoryStore(store, key=history_key, bus=self.bus)
        self._phase = Phase.IDLE
        self._last_error: Optional[QuizError] = None
        self._last_result: Optional[QuizResult] = None
        self.history.load()

    @classmethod
    def from_config(cls, cfg: Dict[str, Any], *, fetcher: Optional[Fetcher] = None, bus: Optional[EventBus] = None) -> "QuizManager":
        storage = cfg.get("storage", {})
        return cls(
            fetcher or fetcher_from_config(cfg),
            JsonFileStore(Path(str(storage.get("path", "~/.dailyquiz/store.json")))),
            history_key=str(storage.get("history_key", "quizHistory")),
            strict=bool(cfg.get("session", {}).get("strict", False)),
            bus=bus,
        )

    # --- observation ---

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def last_error(self) -> Optional[QuizError]:
        return self._last_error

    def snapshot(self) -> ManagerSnapshot:
        return ManagerSnapshot(
            phase=self._phase,
            session=self.session.snapshot(),
            history=self.history.entries,
            last_error=str(self._last_error) if self._last_error else None,
            last_result=self._last_result,
        )

    def subscribe(self, event: str, handler: Callable[[Any], None]) -> Callable[[], None]:
        return self.bus.subscribe(event, handler)

    # --- loading ---

    def start_quiz(self) -> bool:
        """Fetch a fresh set of questions; False (phase ``error``) on failure."""
        self._set_phase(Phase.LOADING)
        try:
            questions = list(self.fetcher())
            if not questions:
                raise DecodeError("no questions returned")
        except (NetworkError, DecodeError) as e:
            log.warning("loading questions failed: %s", e)
            self._last_error = e
            self.bus.emit(LOAD_FAILED, e)
            self._set_phase(Phase.ERROR)
            return False
        self._last_error = None
        self._last_result = None
        self.answers.reset(len(questions))
        self.session.load(questions)
        self._set_phase(Phase.QUIZ)
        return True

    retry = start_quiz

    # --- session transitions ---

    def select(self, answer: str) -> None:
        self.session.select(answer)

    def confirm(self) -> None:
        self.session.confirm()

    def advance(self) -> None:
        self.session.advance()

    def skip(self) -> None:
        self.session.skip()

    def reset(self) -> None:
        self.answers.reset(len(self.session.questions))
        self.session.reset()

    def record_current_answer(self) -> None:
        """Store the session's current selection in the answer log slot of the current question."""
        if not self.session.check_loaded("record_current_answer"):
            return
        self.answers.record(self.session.current_index, self.session.selected_answer)

    def submit_answer(self) -> None:
        """Confirm the selection and record it, as one step."""
        if self.session.is_answered or self.session.finished:
            self.session.confirm()  # ignored, or raises in strict mode
            return
        self.session.confirm()
        self.record_current_answer()

    def shuffled_choices(self) -> List[str]:
        return self.session.shuffled_choices()

    def is_correct(self, answer: Optional[str]) -> bool:
        return self.session.is_correct(answer)

    # --- results & history ---

    def save_result(self) -> Optional[QuizResult]:
        """Store the current run in the history and discard the session.

        Works for finished and abandoned runs alike; questions without a
        recorded answer are stored as unanswered. Returns None when no quiz
        is loaded.
        """
        questions = self.session.questions
        if not questions:
            log.debug("ignored save_result: no questions loaded")
            return None
        question_results = [
            QuestionResult(
                question=q.prompt,
                correct_answer=q.correct_answer,
                selected_answer=self.answers.get(i) if i < len(self.answers) else None,
            )
            for i, q in enumerate(questions)
        ]
        result = QuizResult(
            score=self.session.score,
            total_questions=len(questions),
            attempt_number=self.history.next_attempt_number,
            question_results=question_results,
        )
        self.history.append(result)
        xtrace("result_saved", {"id": result.id, "attempt": result.attempt_number, "score": result.score})
        self._last_result = result
        self.answers.reset(0)
        self.session.clear()
        self._set_phase(Phase.RESULTS)
        return result

    def delete_history_entry(self, result_id: str) -> bool:
        removed = self.history.remove(result_id)
        if removed:
            xtrace("history_entry_deleted", {"id": result_id})
        return removed

    def back_to_main(self) -> None:
        self._set_phase(Phase.IDLE)

    # --- internals ---

    def _set_phase(self, phase: Phase) -> None:
        if phase is self._phase:
            return
        self._phase = phase
        self.bus.emit(PHASE_CHANGED, phase)

    def _session_changed(self, snap: SessionSnapshot) -> None:
        self.bus.emit(SESSION_CHANGED, snap)
