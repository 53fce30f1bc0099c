from __future__ import annotations

"""History of completed quiz runs, kept under one key-value slot.

Reads and writes are best effort: a missing or corrupt blob loads as an
empty history, and a failed write leaves the in-memory history intact.
Both cases are reported as a :class:`~dailyquiz.errors.PersistenceWarning`
on the event bus (``persistence_warning``) and logged, never raised.
"""

import logging
from typing import List, Optional, Tuple

from pydantic import ValidationError

from ..app.events import HISTORY_CHANGED, PERSISTENCE_WARNING, EventBus
from ..app.explain import trace as xtrace
from ..errors import PersistenceWarning
from ..storage.store import KeyValueStore, StorageError
from .schema import QuizResult, dump_history, parse_history

log = logging.getLogger(__name__)

HISTORY_KEY = "quizHistory"


class HistoryStore:
    def __init__(self, store: KeyValueStore, *, key: str = HISTORY_KEY, bus: Optional[EventBus] = None) -> None:
        self.store = store
        self.key = key
        self.bus = bus
        self._entries: List[QuizResult] = []
        self._next_attempt = 1

    @property
    def entries(self) -> Tuple[QuizResult, ...]:
        return tuple(self._entries)

    @property
    def next_attempt_number(self) -> int:
        return self._next_attempt

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, result_id: str) -> Optional[QuizResult]:
        for r in self._entries:
            if r.id == result_id:
                return r
        return None

    def load(self) -> Tuple[QuizResult, ...]:
        """Read the stored history; called once at startup."""
        self._entries = self._read()
        self._next_attempt = len(self._entries) + 1
        xtrace("history_loaded", {"entries": len(self._entries)})
        self._notify()
        return self.entries

    def append(self, result: QuizResult) -> None:
        self._entries.append(result)
        self._next_attempt += 1
        self.persist()
        self._notify()

    def remove(self, result_id: str) -> bool:
        """Delete the entry with ``result_id``; returns False if there is none."""
        for i, r in enumerate(self._entries):
            if r.id == result_id:
                del self._entries[i]
                self.persist()
                self._notify()
                return True
        return False

    def persist(self) -> bool:
        """Overwrite the stored blob with the full history; False if the write failed."""
        try:
            self.store.set(self.key, dump_history(self._entries))
        except (StorageError, OSError, ValueError) as e:
            self._warn("save", str(e))
            return False
        return True

    def _read(self) -> List[QuizResult]:
        try:
            blob = self.store.get(self.key)
        except (StorageError, OSError) as e:
            self._warn("load", str(e))
            return []
        if blob is None:
            return []
        try:
            return parse_history(blob)
        except (ValidationError, ValueError) as e:
            self._warn("load", f"stored history is corrupt: {e}")
            return []

    def _warn(self, operation: str, detail: str) -> None:
        warning = PersistenceWarning(operation, detail)
        log.warning("history %s", warning)
        if self.bus is not None:
            self.bus.emit(PERSISTENCE_WARNING, warning)

    def _notify(self) -> None:
        if self.bus is not None:
            self.bus.emit(HISTORY_CHANGED, self.entries)
