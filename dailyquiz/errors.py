from __future__ import annotations

"""Error taxonomy shared by the question client, session and history store."""


class QuizError(Exception):
    """Base class for errors raised by the quiz core."""


class NetworkError(QuizError):
    """Request could not be built or the transport failed."""


class DecodeError(QuizError):
    """Response body does not have the expected shape."""


class CallerMisuseError(QuizError):
    """A session transition was invoked out of order (strict mode only)."""


class PersistenceWarning(UserWarning):
    """History could not be read or written; delivered as an event, never raised."""

    def __init__(self, operation: str, detail: str) -> None:
        super().__init__(f"{operation} failed: {detail}")
        self.operation = operation
        self.detail = detail
