from __future__ import annotations

"""Tiny pub/sub event bus used to push snapshots and warnings to front ends."""

import logging
from typing import Any, Callable, Dict, List

log = logging.getLogger(__name__)

SESSION_CHANGED = "session_changed"
PHASE_CHANGED = "phase_changed"
HISTORY_CHANGED = "history_changed"
PERSISTENCE_WARNING = "persistence_warning"
LOAD_FAILED = "load_failed"


class EventBus:
    def __init__(self) -> None:
        self._subs: Dict[str, List[Callable[[Any], None]]] = {}

    def subscribe(self, event: str, handler: Callable[[Any], None]) -> Callable[[], None]:
        """Register ``handler`` for ``event``; returns a callable that unsubscribes it."""
        self._subs.setdefault(event, []).append(handler)

        def _unsubscribe() -> None:
            handlers = self._subs.get(event, [])
            if handler in handlers:
                handlers.remove(handler)

        return _unsubscribe

    def emit(self, event: str, payload: Any) -> None:
        for h in list(self._subs.get(event, [])):
            try:
                h(payload)
            except Exception:
                # A broken subscriber must not stop the quiz
                log.exception("handler for %r failed", event)
