from __future__ import annotations

"""Configuration loading and validation for DailyQuiz.

This module loads YAML configuration, applies defaults, and validates
enumerations and ranges before the quiz manager is built from it.
"""

from pathlib import Path
from typing import Any, Dict, Optional

import sys

import yaml


ALLOWED_DIFFICULTIES = {"easy", "medium", "hard"}
MAX_AMOUNT = 50  # provider limit per request


def _load_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except FileNotFoundError:
        print(f"ERROR: Config file not found: {path}", file=sys.stderr)
        sys.exit(1)
    except yaml.YAMLError as e:
        print(f"ERROR: Config file is not valid YAML: {path}: {e}", file=sys.stderr)
        sys.exit(1)


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from YAML or defaults.

    Args:
        path: Optional path to a YAML config. If None, use package defaults.

    Returns:
        A dictionary with configuration values.
    """
    if path:
        cfg = _load_yaml(Path(path))
    else:
        default_path = Path(__file__).with_name("defaults.yml")
        cfg = _load_yaml(default_path)
    return cfg


def _as_int(value: Any, default: int, name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        print(f"WARNING: {name} '{value}' is not an integer, using {default}.")
        return default


def validate_config(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Apply defaults and validate configuration values.

    Args:
        cfg: The raw configuration dictionary.

    Returns:
        The validated and merged configuration dictionary.
    """
    cfg.setdefault("api", {})
    cfg.setdefault("storage", {})
    cfg.setdefault("session", {})
    cfg.setdefault("ui", {})

    api = cfg["api"]
    storage = cfg["storage"]
    session = cfg["session"]
    ui = cfg["ui"]

    api.setdefault("endpoint", "https://opentdb.com/api.php")
    api.setdefault("amount", 5)
    api.setdefault("category", 9)
    api.setdefault("difficulty", "easy")
    api.setdefault("timeout_s", None)

    storage.setdefault("path", "~/.dailyquiz/store.json")
    storage.setdefault("history_key", "quizHistory")

    session.setdefault("strict", False)

    ui.setdefault("show_feedback", True)

    amount = _as_int(api.get("amount"), 5, "api.amount")
    if not (1 <= amount <= MAX_AMOUNT):
        print(f"WARNING: api.amount {amount} outside 1..{MAX_AMOUNT}, using 5.")
        amount = 5
    api["amount"] = amount

    api["category"] = _as_int(api.get("category"), 9, "api.category")

    difficulty = str(api.get("difficulty", "")).lower()
    if difficulty not in ALLOWED_DIFFICULTIES:
        print(f"WARNING: Unsupported difficulty '{api.get('difficulty')}', using 'easy'.")
        difficulty = "easy"
    api["difficulty"] = difficulty

    timeout = api.get("timeout_s")
    if timeout is not None:
        try:
            timeout = float(timeout)
        except (TypeError, ValueError):
            timeout = -1.0
        if timeout <= 0:
            print(f"WARNING: api.timeout_s '{api.get('timeout_s')}' must be > 0, using transport default.")
            timeout = None
    api["timeout_s"] = timeout

    if not storage.get("history_key"):
        print("WARNING: storage.history_key is empty, using 'quizHistory'.")
        storage["history_key"] = "quizHistory"

    session["strict"] = bool(session.get("strict"))
    ui["show_feedback"] = bool(ui.get("show_feedback"))

    return cfg
