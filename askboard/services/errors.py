"""Domain errors raised by the question handlers.

Each error carries the HTTP status and stable error code the API renders in
its `{"error": {"code", "message", "detail"}}` envelope.
"""

from typing import Any


class QuestionError(RuntimeError):
    status_code: int = 500
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, *, detail: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class NotFound(QuestionError):
    """Unknown question id, or slug that does not match the stored one."""

    status_code = 404
    code = "QUESTION_NOT_FOUND"


class Forbidden(QuestionError):
    """The authorization gate denied the actor."""

    status_code = 403
    code = "FORBIDDEN"


class ValidationFailed(QuestionError):
    status_code = 422
    code = "VALIDATION_FAILED"
