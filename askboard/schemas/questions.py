"""Schemas for the question endpoints (/v1/questions).

Response models are also the cache payloads: list and detail pages are stored
as their JSON dump and restored with `model_validate`.
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from askboard.settings import get_settings

MAX_TAG_NAME_LENGTH = 50  # tags.name


class UserRef(BaseModel):
    """Owner shown next to a question or answer."""

    id: int
    name: str


class TagOut(BaseModel):
    id: int
    name: str
    slug: str


class QuestionSummary(BaseModel):
    """A single row of the question list."""

    id: int
    title: str
    slug: str
    created_at: datetime = Field(alias="createdAt")
    user: UserRef
    tags: list[TagOut] = Field(default_factory=list)
    answers_count: int = Field(alias="answersCount", ge=0, default=0)
    votes: int = 0

    model_config = {"populate_by_name": True}


class QuestionPage(BaseModel):
    """One page of the question list, newest first."""

    items: list[QuestionSummary]
    page: int = Field(ge=1)
    per_page: int = Field(alias="perPage", ge=1)
    total: int = Field(ge=0)
    last_page: int = Field(alias="lastPage", ge=1)

    model_config = {"populate_by_name": True}


class QuestionOut(BaseModel):
    """Question as shown on its detail page."""

    id: int
    title: str
    slug: str
    body: str
    created_at: datetime = Field(alias="createdAt")
    user: UserRef
    tags: list[TagOut] = Field(default_factory=list)
    votes: int = 0

    model_config = {"populate_by_name": True}


class AnswerOut(BaseModel):
    id: int
    question_id: int = Field(alias="questionId")
    body: str
    created_at: datetime = Field(alias="createdAt")
    user: UserRef
    votes: int = 0

    model_config = {"populate_by_name": True}


class QuestionShow(BaseModel):
    """Response payload for GET /v1/questions/{id}/{slug}."""

    question: QuestionOut
    answers: list[AnswerOut] = Field(default_factory=list)


class QuestionEditForm(BaseModel):
    """Response payload for GET /v1/questions/{id}/{slug}/edit.

    `tags` is the comma-separated string the edit form pre-fills.
    """

    question: QuestionOut
    tags: str


class QuestionCreate(BaseModel):
    """Request body for POST /v1/questions."""

    title: str = Field(min_length=1, max_length=255)
    body: str = Field(min_length=1)
    tags: list[str] = Field(default_factory=list, max_length=5)

    @field_validator("title")
    @classmethod
    def _strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("title must not be blank")
        return v

    @field_validator("tags")
    @classmethod
    def _clean_tags(cls, v: list[str]) -> list[str]:
        seen: list[str] = []
        for name in v:
            name = name.strip()
            if len(name) > MAX_TAG_NAME_LENGTH:
                raise ValueError(f"tag must be at most {MAX_TAG_NAME_LENGTH} characters")
            if name and name.lower() not in (s.lower() for s in seen):
                seen.append(name)
        return seen


class QuestionUpdate(QuestionCreate):
    """Request body for PUT /v1/questions/{id}."""


class QuestionMutationResult(BaseModel):
    """Returned by store/update/destroy: what happened and where to go next."""

    message: str
    question_id: int = Field(alias="questionId")
    slug: str
    redirect_to: str = Field(alias="redirectTo")

    model_config = {"populate_by_name": True}


class PageRequest(BaseModel):
    """Parsed list query."""

    page: int = Field(default=1, ge=1)
    per_page: int = Field(default_factory=lambda: get_settings().questions_per_page, ge=1, le=100)
