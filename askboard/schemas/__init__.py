"""Pydantic schemas for API request/response validation."""

from askboard.schemas.common import ErrorDetail, ErrorResponse
from askboard.schemas.questions import (
    AnswerOut,
    PageRequest,
    QuestionCreate,
    QuestionEditForm,
    QuestionMutationResult,
    QuestionOut,
    QuestionPage,
    QuestionShow,
    QuestionSummary,
    QuestionUpdate,
    TagOut,
    UserRef,
)

__all__ = [
    "ErrorDetail",
    "ErrorResponse",
    "AnswerOut",
    "PageRequest",
    "QuestionCreate",
    "QuestionEditForm",
    "QuestionMutationResult",
    "QuestionOut",
    "QuestionPage",
    "QuestionShow",
    "QuestionSummary",
    "QuestionUpdate",
    "TagOut",
    "UserRef",
]
