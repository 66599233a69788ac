"""Read-through cache for the question list and question detail pages.

Keys:
- "questions": the first list page (page 1 at the default page size)
- "question-{id}": a question's detail (user, tags, vote total)

Both live for QUESTION_CACHE_TTL seconds (default 10 minutes) unless
invalidated first. Any other list page is read live; answers are always read
live.

Concurrency:
- No lock around population: concurrent misses may both load and write
  (last write wins).
- A reader that misses just before a writer invalidates can write back a
  pre-mutation page after the invalidation; it then lives until its TTL.
"""

import logging

from askboard.schemas import PageRequest, QuestionOut, QuestionPage, QuestionShow
from askboard.services.errors import NotFound
from askboard.settings import get_settings
from askboard.stores.cache import CacheBackend
from askboard.stores.questions import QuestionStore

KEY_QUESTION_LIST = "questions"
PREFIX_QUESTION = "question-"

logger = logging.getLogger("uvicorn.error")


def question_key(question_id: int) -> str:
    return f"{PREFIX_QUESTION}{question_id}"


class QuestionCache:
    """Caches question pages in front of a QuestionStore."""

    def __init__(
        self,
        cache: CacheBackend,
        store: QuestionStore,
        *,
        ttl: int | None = None,
        per_page: int | None = None,
    ) -> None:
        settings = get_settings()
        self._cache = cache
        self._store = store
        self._ttl = ttl or settings.question_cache_ttl
        # Only the first page at this size is cached.
        self._per_page = per_page or settings.questions_per_page

    def _is_cached_page(self, page_request: PageRequest) -> bool:
        return page_request.page == 1 and page_request.per_page == self._per_page

    async def get_question_list(self, page_request: PageRequest) -> QuestionPage:
        """Get a page of questions, newest first.

        Only the first page at the default size is cached, under the fixed
        list key; other pages always come from the store.
        """
        if not self._is_cached_page(page_request):
            return await self._store.paginate_questions(page_request.page, page_request.per_page)

        cached = await self._cache.get(KEY_QUESTION_LIST)
        if cached is not None:
            return QuestionPage.model_validate_json(cached)

        logger.info("Question list cache miss, loading from store")
        page = await self._store.paginate_questions(1, self._per_page)
        await self._cache.set(KEY_QUESTION_LIST, page.model_dump_json(), self._ttl)
        return page

    async def get_question_detail(self, question_id: int, expected_slug: str) -> QuestionShow:
        """Get a question with its answers.

        The slug is checked against the live record before the cache is
        consulted, so a renamed question is never served under its old slug.

        Raises:
            NotFound: unknown id or slug mismatch.
        """
        record = await self._store.find_question(question_id)
        if record is None or record.slug != expected_slug:
            raise NotFound(
                f"Question {question_id} not found",
                detail={"question_id": question_id, "slug": expected_slug},
            )

        key = question_key(question_id)
        cached = await self._cache.get(key)
        if cached is not None:
            question = QuestionOut.model_validate_json(cached)
        else:
            logger.info(f"Question {question_id} cache miss, loading from store")
            loaded = await self._store.load_question(question_id)
            if loaded is None:
                # Deleted between the slug check and the load.
                raise NotFound(
                    f"Question {question_id} not found",
                    detail={"question_id": question_id},
                )
            question = loaded
            await self._cache.set(key, question.model_dump_json(), self._ttl)

        answers = await self._store.load_answers(question_id)
        return QuestionShow(question=question, answers=answers)

    async def invalidate_list(self) -> None:
        """Drop the cached first list page."""
        await self._cache.delete(KEY_QUESTION_LIST)
        logger.info("Question list cache invalidated")

    async def invalidate_detail(self, question_id: int) -> None:
        """Drop the cached detail page of one question."""
        await self._cache.delete(question_key(question_id))
        logger.info(f"Question {question_id} cache invalidated")
