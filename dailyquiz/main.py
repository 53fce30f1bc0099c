from __future__ import annotations

"""CLI entry point for DailyQuiz: a terminal front end over QuizManager."""

import argparse
import logging
import sys
from typing import Callable, List, Optional

from . import __version__
from .app import explain
from .app.events import PERSISTENCE_WARNING
from .app.quiz_manager import QuizManager
from .config.config import ALLOWED_DIFFICULTIES, load_config, validate_config
from .results.feedback import verdict
from .results.schema import QuizResult
from .stats.stats import format_summary


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="DailyQuiz CLI")
    p.add_argument("--config", type=str, default=None, help="Path to YAML config")
    p.add_argument("--amount", type=int, default=None, help="Number of questions")
    p.add_argument("--category", type=int, default=None, help="Open Trivia DB category id")
    p.add_argument("--difficulty", choices=sorted(ALLOWED_DIFFICULTIES), default=None)
    p.add_argument("--history", action="store_true", help="Show quiz history and exit")
    p.add_argument("--show", metavar="ID", default=None, help="Show one history entry and exit")
    p.add_argument("--delete", metavar="ID", default=None, help="Delete one history entry and exit")
    p.add_argument("--explain", action="store_true", help="Trace session milestones")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    return p.parse_args(argv)


def format_detail(result: QuizResult) -> str:
    v = verdict(result.score, result.total_questions)
    lines = [
        f"Quiz {result.attempt_number} results",
        f"Date: {result.date:%Y-%m-%d %H:%M}",
        f"Score: {result.score} / {result.total_questions}  {v.title}",
        "",
        "Your answers:",
    ]
    for i, qr in enumerate(result.question_results, 1):
        mark = "+" if qr.is_correct else "x"
        lines.append(f"[{mark}] {i}. {qr.question}")
        lines.append(f"      Correct answer: {qr.correct_answer}")
        lines.append(f"      Your answer: {qr.selected_answer if qr.answered else 'Not answered'}")
    return "\n".join(lines)


def _ask_choice(ask: Callable[[str], str], inform: Callable[[str], None], n: int) -> Optional[int]:
    """Return a 0-based choice, or None to skip the question."""
    while True:
        raw = ask(f"Your answer [1-{n}, s=skip]: ").strip().lower()
        if raw == "s":
            return None
        if raw.isdigit() and 1 <= int(raw) <= n:
            return int(raw) - 1
        inform("Please enter a number from the list.")


def play(
    manager: QuizManager,
    *,
    ask: Callable[[str], str] = input,
    inform: Callable[[str], None] = print,
    show_feedback: bool = True,
) -> Optional[QuizResult]:
    """Run one quiz in the terminal; returns the saved result, or None if loading was abandoned."""
    while not manager.start_quiz():
        inform(f"Error! Could not load questions: {manager.last_error}")
        if ask("Try again? [y/N]: ").strip().lower() != "y":
            return None

    inform("You can't go back to previous questions.")
    while not manager.session.finished:
        snap = manager.session.snapshot()
        q = snap.current_question
        inform("")
        inform(f"Question {snap.current_index + 1} of {snap.total}  ({q.category}, {q.difficulty.value})")
        inform(q.prompt)
        choices = manager.shuffled_choices()
        for i, c in enumerate(choices, 1):
            inform(f"  {i}. {c}")
        idx = _ask_choice(ask, inform, len(choices))
        if idx is None:
            manager.skip()
            continue
        manager.select(choices[idx])
        manager.submit_answer()
        if show_feedback:
            if manager.is_correct(choices[idx]):
                inform("Correct!")
            else:
                inform(f"Wrong. The correct answer is: {q.correct_answer}")
        manager.advance()

    result = manager.save_result()
    if result is not None:
        v = verdict(result.score, result.total_questions)
        inform("")
        inform(f"{result.score} of {result.total_questions}  {v.title}")
        inform(v.message)
    return result


def cli(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    if args.version:
        print(f"dailyquiz {__version__}")
        sys.exit(0)

    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    explain.enable(args.explain)

    cfg = load_config(args.config)
    api = cfg.setdefault("api", {})
    if args.amount is not None:
        api["amount"] = args.amount
    if args.category is not None:
        api["category"] = args.category
    if args.difficulty is not None:
        api["difficulty"] = args.difficulty
    cfg = validate_config(cfg)

    manager = QuizManager.from_config(cfg)
    manager.subscribe(PERSISTENCE_WARNING, lambda w: print(f"[WARN] history {w}", file=sys.stderr))

    if args.history:
        print(format_summary(manager.history.entries))
        return
    if args.show:
        entry = manager.history.get(args.show)
        if entry is None:
            print(f"No history entry with id {args.show}", file=sys.stderr)
            sys.exit(1)
        print(format_detail(entry))
        return
    if args.delete:
        if not manager.delete_history_entry(args.delete):
            print(f"No history entry with id {args.delete}", file=sys.stderr)
            sys.exit(1)
        print(f"Deleted {args.delete}")
        return

    print("Welcome to DailyQuiz!")
    try:
        play(manager, show_feedback=bool(cfg["ui"]["show_feedback"]))
    except (KeyboardInterrupt, EOFError):
        print("\nQuiz abandoned.")
        manager.save_result()


if __name__ == "__main__":
    cli()
