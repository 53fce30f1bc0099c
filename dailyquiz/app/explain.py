from __future__ import annotations

"""Explain Mode: one JSON line per quiz milestone.

Turned on by ``--explain``. Milestones come from the session (``quiz_loaded``,
``answer_confirmed``, ``question_skipped``, ``quiz_finished``, ``ignored``),
the history store (``history_loaded``) and the quiz manager
(``result_saved``, ``history_entry_deleted``). Lines go to stdout unless
another stream is given to :func:`enable`.
"""

import json
import sys
from typing import Any, Dict, Optional, TextIO

PREFIX = "[EXPLAIN]"

_enabled = False
_stream: Optional[TextIO] = None


def enable(flag: bool = True, stream: Optional[TextIO] = None) -> None:
    global _enabled, _stream
    _enabled = bool(flag)
    _stream = stream


def enabled() -> bool:
    return _enabled


def format_line(event: str, payload: Dict[str, Any] | None = None) -> str:
    if not payload:
        return f"{PREFIX} {event}"
    body = json.dumps(payload, separators=(",", ":"), sort_keys=True, default=str)
    return f"{PREFIX} {event} :: {body}"


def trace(event: str, payload: Dict[str, Any] | None = None) -> None:
    if not _enabled:
        return
    out = _stream if _stream is not None else sys.stdout
    out.write(format_line(event, payload) + "\n")
