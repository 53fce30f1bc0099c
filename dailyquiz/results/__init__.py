from .feedback import Verdict, verdict
from .history import HISTORY_KEY, HistoryStore
from .schema import QuestionResult, QuizResult, dump_history, parse_history

__all__ = [
    "HISTORY_KEY",
    "HistoryStore",
    "QuestionResult",
    "QuizResult",
    "Verdict",
    "dump_history",
    "parse_history",
    "verdict",
]
