from __future__ import annotations

"""Open Trivia DB client: one GET, decoded into Question records."""

import logging
from typing import Any, Dict, List, Optional

import requests
from pydantic import ValidationError

from ..errors import DecodeError, NetworkError
from ..session.schema import Question

log = logging.getLogger(__name__)

OPENTDB_ENDPOINT = "https://opentdb.com/api.php"
QUESTION_TYPE = "multiple"

# Provider response codes other than 0 (success).
RESPONSE_CODES = {
    1: "no results",
    2: "invalid parameter",
    3: "token not found",
    4: "token empty",
    5: "rate limit",
}


def build_params(amount: int, category: int, difficulty: str) -> Dict[str, Any]:
    return {
        "amount": int(amount),
        "category": int(category),
        "difficulty": str(difficulty),
        "type": QUESTION_TYPE,
    }


def decode_results(data: Any) -> List[Question]:
    """Decode a parsed JSON body into questions.

    Raises:
        DecodeError: the body is not an object with a non-empty ``results``
            list, the provider reported a non-zero ``response_code``, or an
            entry is missing fields.
    """
    if not isinstance(data, dict):
        raise DecodeError("response body is not a JSON object")
    code = data.get("response_code", 0)
    if code not in (0, None):
        reason = RESPONSE_CODES.get(code, "unknown")
        raise DecodeError(f"provider returned response_code={code} ({reason})")
    results = data.get("results")
    if not isinstance(results, list):
        raise DecodeError("response has no 'results' array")
    if not results:
        raise DecodeError("response 'results' array is empty")
    questions: List[Question] = []
    for i, raw in enumerate(results):
        if not isinstance(raw, dict):
            raise DecodeError(f"results[{i}] is not an object")
        try:
            questions.append(Question.from_api(raw))
        except (KeyError, ValueError, ValidationError) as e:
            raise DecodeError(f"results[{i}] is malformed: {e}") from e
    return questions


def fetch_questions(
    amount: int = 5,
    category: int = 9,
    difficulty: str = "easy",
    *,
    endpoint: str = OPENTDB_ENDPOINT,
    timeout: Optional[float] = None,
    session: Optional[requests.Session] = None,
) -> List[Question]:
    """Fetch ``amount`` multiple-choice questions.

    A single attempt; no retry. ``timeout=None`` leaves the transport default.

    Raises:
        NetworkError: invalid URL or parameters, transport failure, or a
            non-2xx status.
        DecodeError: the response does not match the expected shape.
    """
    try:
        params = build_params(amount, category, difficulty)
    except (TypeError, ValueError) as e:
        raise NetworkError(f"invalid request parameters: {e}") from e

    getter = session.get if session is not None else requests.get
    try:
        r = getter(endpoint, params=params, timeout=timeout)
        r.raise_for_status()
    except requests.RequestException as e:
        log.warning("opentdb fetch failed: %s", e)
        raise NetworkError(str(e)) from e

    try:
        data = r.json()
    except ValueError as e:
        raise DecodeError(f"response body is not JSON: {e}") from e
    questions = decode_results(data)
    log.debug("fetched %d questions (category=%s, difficulty=%s)", len(questions), category, difficulty)
    return questions
