"""Question request handlers.

Each handler takes parsed input plus the acting user and returns a response
schema, or raises a QuestionError (NotFound / Forbidden / ValidationFailed)
that the API layer maps to an HTTP status.

Mutations go: gate check -> store write -> cache invalidation. A denied
actor therefore never causes a write or an invalidation.
"""

from askboard.schemas import (
    PageRequest,
    QuestionCreate,
    QuestionEditForm,
    QuestionMutationResult,
    QuestionPage,
    QuestionShow,
    QuestionUpdate,
)
from askboard.services.authoring import QuestionService
from askboard.services.errors import NotFound
from askboard.services.gate import MODIFY_QUESTION, AuthorizationGate
from askboard.services.question_cache import QuestionCache
from askboard.services.slug import question_slug
from askboard.stores.questions import QuestionRecord, QuestionStore

QUESTIONS_PATH = "/v1/questions"


def question_path(question_id: int, slug: str) -> str:
    return f"{QUESTIONS_PATH}/{question_id}/{slug}"


class QuestionController:
    """List, show, edit, store, update and destroy questions."""

    def __init__(
        self,
        *,
        store: QuestionStore,
        cache: QuestionCache,
        service: QuestionService,
        gate: AuthorizationGate,
    ) -> None:
        self._store = store
        self._cache = cache
        self._service = service
        self._gate = gate

    async def _find_or_fail(self, question_id: int) -> QuestionRecord:
        record = await self._store.find_question(question_id)
        if record is None:
            raise NotFound(
                f"Question {question_id} not found",
                detail={"question_id": question_id},
            )
        return record

    async def index(self, page_request: PageRequest) -> QuestionPage:
        return await self._cache.get_question_list(page_request)

    async def show(self, question_id: int, slug: str) -> QuestionShow:
        return await self._cache.get_question_detail(question_id, slug)

    async def edit(self, question_id: int, slug: str, actor_id: int) -> QuestionEditForm:
        """Data for the edit form. Ownership is checked before the slug."""
        record = await self._find_or_fail(question_id)
        self._gate.authorize(MODIFY_QUESTION, actor_id, record.user_id)

        if record.slug != slug:
            raise NotFound(
                f"Question {question_id} not found",
                detail={"question_id": question_id, "slug": slug},
            )

        question = await self._store.load_question(question_id)
        if question is None:
            raise NotFound(f"Question {question_id} not found", detail={"question_id": question_id})

        return QuestionEditForm(
            question=question,
            tags=self._service.edit_question_tag(question.tags),
        )

    async def store(self, payload: QuestionCreate, actor_id: int) -> QuestionMutationResult:
        fields = payload.model_dump()
        fields.update(user_id=actor_id, slug=question_slug(payload.title))

        created = await self._service.create_question(fields)
        await self._cache.invalidate_list()

        return QuestionMutationResult(
            message="Your question has been submitted",
            question_id=created.id,
            slug=created.slug,
            redirect_to=QUESTIONS_PATH,
        )

    async def update(
        self,
        question_id: int,
        payload: QuestionUpdate,
        actor_id: int,
    ) -> QuestionMutationResult:
        record = await self._find_or_fail(question_id)
        self._gate.authorize(MODIFY_QUESTION, actor_id, record.user_id)

        fields = payload.model_dump()
        fields["slug"] = question_slug(payload.title)

        updated = await self._service.update_question(fields, question_id)
        if updated is None:
            raise NotFound(f"Question {question_id} not found", detail={"question_id": question_id})

        # Title/slug changes move the question in (or out of) the list too.
        await self._cache.invalidate_list()
        await self._cache.invalidate_detail(question_id)

        return QuestionMutationResult(
            message="Your question has been updated!",
            question_id=updated.id,
            slug=updated.slug,
            redirect_to=question_path(updated.id, updated.slug),
        )

    async def destroy(self, question_id: int, actor_id: int) -> QuestionMutationResult:
        record = await self._find_or_fail(question_id)
        self._gate.authorize(MODIFY_QUESTION, actor_id, record.user_id)

        if not await self._store.delete_question(question_id):
            raise NotFound(f"Question {question_id} not found", detail={"question_id": question_id})

        await self._cache.invalidate_list()
        await self._cache.invalidate_detail(question_id)

        return QuestionMutationResult(
            message="Question deleted successfully!",
            question_id=record.id,
            slug=record.slug,
            redirect_to=QUESTIONS_PATH,
        )
