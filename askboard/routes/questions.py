"""Question endpoints.

GET    /v1/questions                      - Paginated list (first page cached)
POST   /v1/questions                      - Create a question
GET    /v1/questions/{id}/{slug}          - Question with answers (question cached)
GET    /v1/questions/{id}/{slug}/edit     - Edit form data (owner only)
PUT    /v1/questions/{id}                 - Update (owner only)
DELETE /v1/questions/{id}                 - Delete (owner only)

Routers are thin: handlers live in services.questions.
"""

from fastapi import APIRouter, Depends, Path, Query

from askboard.routes.deps import get_actor_id, get_question_controller
from askboard.schemas import (
    ErrorResponse,
    PageRequest,
    QuestionCreate,
    QuestionEditForm,
    QuestionMutationResult,
    QuestionPage,
    QuestionShow,
    QuestionUpdate,
)
from askboard.services.questions import QuestionController

router = APIRouter()

_NOT_FOUND = {404: {"model": ErrorResponse}}
_OWNER_ONLY = {403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}


@router.get("", response_model=QuestionPage)
async def list_questions(
    page: int = Query(default=1, ge=1),
    per_page: int | None = Query(default=None, alias="perPage", ge=1, le=100),
    controller: QuestionController = Depends(get_question_controller),
) -> QuestionPage:
    """List questions, newest first."""
    page_request = PageRequest(page=page) if per_page is None else PageRequest(page=page, per_page=per_page)
    return await controller.index(page_request)


@router.post("", response_model=QuestionMutationResult, status_code=201)
async def create_question(
    payload: QuestionCreate,
    actor_id: int = Depends(get_actor_id),
    controller: QuestionController = Depends(get_question_controller),
) -> QuestionMutationResult:
    return await controller.store(payload, actor_id)


@router.get("/{question_id}/{slug}", response_model=QuestionShow, responses=_NOT_FOUND)
async def show_question(
    question_id: int = Path(ge=1, description="Question id"),
    slug: str = Path(description="Current question slug"),
    controller: QuestionController = Depends(get_question_controller),
) -> QuestionShow:
    """Show a question and its answers. 404 unless the slug is the current one."""
    return await controller.show(question_id, slug)


@router.get("/{question_id}/{slug}/edit", response_model=QuestionEditForm, responses=_OWNER_ONLY)
async def edit_question(
    question_id: int = Path(ge=1, description="Question id"),
    slug: str = Path(description="Current question slug"),
    actor_id: int = Depends(get_actor_id),
    controller: QuestionController = Depends(get_question_controller),
) -> QuestionEditForm:
    return await controller.edit(question_id, slug, actor_id)


@router.put("/{question_id}", response_model=QuestionMutationResult, responses=_OWNER_ONLY)
async def update_question(
    payload: QuestionUpdate,
    question_id: int = Path(ge=1, description="Question id"),
    actor_id: int = Depends(get_actor_id),
    controller: QuestionController = Depends(get_question_controller),
) -> QuestionMutationResult:
    return await controller.update(question_id, payload, actor_id)


@router.delete("/{question_id}", response_model=QuestionMutationResult, responses=_OWNER_ONLY)
async def delete_question(
    question_id: int = Path(ge=1, description="Question id"),
    actor_id: int = Depends(get_actor_id),
    controller: QuestionController = Depends(get_question_controller),
) -> QuestionMutationResult:
    return await controller.destroy(question_id, actor_id)
