from __future__ import annotations

"""History statistics: tabular view of past attempts and a text summary."""

from typing import Any, Dict, Sequence

import pandas as pd

from ..results.schema import QuizResult


COLUMNS = {
    "attempt_number": "Int64",
    "date": pd.DatetimeTZDtype(tz="UTC"),
    "score": "Int64",
    "total_questions": "Int64",
    "accuracy": "float64",
}


def _empty_df() -> pd.DataFrame:
    return pd.DataFrame({k: pd.Series(dtype=v) for k, v in COLUMNS.items()})


def history_frame(results: Sequence[QuizResult]) -> pd.DataFrame:
    """One row per attempt, sorted by attempt number."""
    if not results:
        return _empty_df()
    df = pd.DataFrame(
        [
            {
                "attempt_number": r.attempt_number,
                "date": r.date,
                "score": r.score,
                "total_questions": r.total_questions,
                "accuracy": r.accuracy,
            }
            for r in results
        ]
    )
    for col, dt in COLUMNS.items():
        df[col] = df[col].astype(dt)
    return df.sort_values("attempt_number").reset_index(drop=True)


def summarize(results: Sequence[QuizResult]) -> Dict[str, Any]:
    df = history_frame(results)
    if df.empty:
        return {"attempts": 0, "best_score": None, "mean_accuracy": None, "last_date": None}
    return {
        "attempts": int(len(df)),
        "best_score": int(df["score"].max()),
        "mean_accuracy": float(df["accuracy"].mean()),
        "last_date": df["date"].max().to_pydatetime(),
    }


def format_summary(results: Sequence[QuizResult]) -> str:
    """Return a human-readable summary of the history."""
    s = summarize(results)
    if not s["attempts"]:
        return "You haven't taken any quizzes yet."
    lines = [
        f"Attempts: {s['attempts']}",
        f"Best score: {s['best_score']}",
        f"Mean accuracy: {s['mean_accuracy']:.0%}",
    ]
    for r in results:
        lines.append(f"Quiz {r.attempt_number}: {r.score}/{r.total_questions}  {r.date:%Y-%m-%d %H:%M}  [{r.id}]")
    return "\n".join(lines)
