from __future__ import annotations

"""Per-question answer log, one slot per question, written by index."""

from typing import Iterator, List, Optional, Tuple


class AnswerLog:
    def __init__(self, size: int = 0) -> None:
        self._slots: List[Optional[str]] = [None] * size

    def reset(self, size: int) -> None:
        """Discard all answers and hold ``size`` unanswered slots."""
        if size < 0:
            raise ValueError("size must be >= 0")
        self._slots = [None] * size

    def record(self, index: int, answer: Optional[str]) -> None:
        """Store ``answer`` for question ``index``; a later write replaces it."""
        if not 0 <= index < len(self._slots):
            raise IndexError(f"question index {index} out of range 0..{len(self._slots) - 1}")
        self._slots[index] = answer

    def get(self, index: int) -> Optional[str]:
        return self._slots[index]

    def answers(self) -> Tuple[Optional[str], ...]:
        return tuple(self._slots)

    def __len__(self) -> int:
        return len(self._slots)

    def __iter__(self) -> Iterator[Optional[str]]:
        return iter(tuple(self._slots))
