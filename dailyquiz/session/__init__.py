from .answer_log import AnswerLog
from .schema import DIFFICULTIES, Difficulty, Question
from .state_machine import QuizSession, SessionSnapshot

__all__ = [
    "AnswerLog",
    "DIFFICULTIES",
    "Difficulty",
    "Question",
    "QuizSession",
    "SessionSnapshot",
]
