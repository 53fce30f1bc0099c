from __future__ import annotations

"""Shared builders for quiz tests."""

from typing import List

from dailyquiz.results.schema import QuestionResult, QuizResult
from dailyquiz.session.schema import Question


def make_question(i: int = 0) -> Question:
    return Question(
        category="General Knowledge",
        type="multiple",
        difficulty="easy",
        prompt=f"Question {i}?",
        correct_answer=f"right-{i}",
        incorrect_answers=(f"wrong-{i}-a", f"wrong-{i}-b", f"wrong-{i}-c"),
    )


def make_questions(n: int = 5) -> List[Question]:
    return [make_question(i) for i in range(n)]


def make_result(attempt: int = 1, score: int = 1, total: int = 2) -> QuizResult:
    qrs = [
        QuestionResult(
            question=f"Q{i}?",
            correct_answer=f"right-{i}",
            selected_answer=f"right-{i}" if i < score else None,
        )
        for i in range(total)
    ]
    return QuizResult(score=score, total_questions=total, attempt_number=attempt, question_results=qrs)


def api_entry(i: int = 0, **overrides) -> dict:
    entry = {
        "category": "Entertainment: Film",
        "type": "multiple",
        "difficulty": "easy",
        "question": f"Who said &quot;hello {i}&quot;?",
        "correct_answer": "Tom &amp; Jerry",
        "incorrect_answers": ["Ben &#039;n&#039; Holly", "Bert", "Ernie"],
    }
    entry.update(overrides)
    return entry
