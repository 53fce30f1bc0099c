"""DailyQuiz package initialization.

The quiz session core lives in :mod:`dailyquiz.app.quiz_manager`; the
terminal front end is :mod:`dailyquiz.main`.
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]
