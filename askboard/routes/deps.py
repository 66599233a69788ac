"""FastAPI dependencies wiring the question handlers to their collaborators.

Tests swap any of these through `app.dependency_overrides`.
"""

from fastapi import Depends, Header

from askboard.services.authoring import QuestionService
from askboard.services.gate import AuthorizationGate
from askboard.services.question_cache import QuestionCache
from askboard.services.questions import QuestionController
from askboard.stores.cache import CacheBackend, get_cache_backend
from askboard.stores.questions import QuestionStore

_gate = AuthorizationGate()


def get_question_store() -> QuestionStore:
    return QuestionStore()


def get_gate() -> AuthorizationGate:
    return _gate


def get_question_cache(
    store: QuestionStore = Depends(get_question_store),
    backend: CacheBackend = Depends(get_cache_backend),
) -> QuestionCache:
    return QuestionCache(backend, store)


def get_question_controller(
    store: QuestionStore = Depends(get_question_store),
    cache: QuestionCache = Depends(get_question_cache),
    gate: AuthorizationGate = Depends(get_gate),
) -> QuestionController:
    return QuestionController(store=store, cache=cache, service=QuestionService(), gate=gate)


def get_actor_id(
    user_id: int = Header(alias="X-User-Id", ge=1, description="Acting user id"),
) -> int:
    """Acting user. Authentication happens upstream; the header carries its result."""
    return user_id
