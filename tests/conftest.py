"""Shared fixtures: in-memory store/service fakes and a controllable clock.

Nothing here touches Postgres or Redis; `database` runs the real store and
service code on an in-memory SQLite engine.
"""

from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from askboard.schemas import AnswerOut, QuestionOut, QuestionPage, QuestionSummary, TagOut, UserRef
from askboard.services.authoring import QuestionService
from askboard.services.gate import AuthorizationGate
from askboard.services.question_cache import QuestionCache
from askboard.services.questions import QuestionController
from askboard.services.slug import question_slug, slugify
from askboard.stores import postgres as postgres_store
from askboard.stores.memory import MemoryCache
from askboard.stores.postgres import Base
from askboard.stores.questions import QuestionRecord

USER_NAMES = {1: "Ada", 2: "Grace", 3: "Linus"}
EPOCH = datetime(2026, 1, 1, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class SpyCache(MemoryCache):
    """MemoryCache that records every key it was asked to delete."""

    def __init__(self, clock: FakeClock) -> None:
        super().__init__(clock=clock)
        self.deleted: list[str] = []

    async def delete(self, key: str) -> None:
        self.deleted.append(key)
        await super().delete(key)


def _user(user_id: int) -> UserRef:
    return UserRef(id=user_id, name=USER_NAMES.get(user_id, f"user-{user_id}"))


def _tags(names: list[str]) -> list[TagOut]:
    return [TagOut(id=i, name=name, slug=slugify(name)) for i, name in enumerate(sorted(names), start=1)]


class FakeQuestionStore:
    """Dict-backed QuestionStore; `calls` counts every read/write by method name."""

    def __init__(self) -> None:
        self.rows: dict[int, dict[str, Any]] = {}
        self.answers: dict[int, list[AnswerOut]] = {}
        self.deleted: list[int] = []
        self.calls: Counter[str] = Counter()

    def add_question(
        self,
        *,
        title: str,
        user_id: int,
        question_id: int | None = None,
        body: str = "body",
        tags: list[str] | None = None,
        votes: int = 0,
    ) -> QuestionRecord:
        if question_id is None:
            question_id = max(self.rows, default=0) + 1
        self.rows[question_id] = {
            "id": question_id,
            "title": title,
            "slug": question_slug(title),
            "body": body,
            "user_id": user_id,
            "tags": list(tags or []),
            "votes": votes,
            "created_at": EPOCH + timedelta(minutes=len(self.rows)),
        }
        self.answers.setdefault(question_id, [])
        return self._record(question_id)

    def add_answer(self, question_id: int, *, user_id: int, body: str, votes: int = 0) -> AnswerOut:
        answers = self.answers.setdefault(question_id, [])
        answer = AnswerOut(
            id=100 + sum(len(a) for a in self.answers.values()),
            question_id=question_id,
            body=body,
            created_at=EPOCH,
            user=_user(user_id),
            votes=votes,
        )
        answers.append(answer)
        return answer

    def _record(self, question_id: int) -> QuestionRecord:
        row = self.rows[question_id]
        return QuestionRecord(id=row["id"], slug=row["slug"], user_id=row["user_id"], title=row["title"])

    async def find_question(self, question_id: int) -> QuestionRecord | None:
        self.calls["find_question"] += 1
        if question_id not in self.rows:
            return None
        return self._record(question_id)

    async def paginate_questions(self, page: int, per_page: int) -> QuestionPage:
        self.calls["paginate_questions"] += 1
        ordered = sorted(self.rows.values(), key=lambda r: (r["created_at"], r["id"]), reverse=True)
        chunk = ordered[(page - 1) * per_page : page * per_page]
        total = len(ordered)
        return QuestionPage(
            items=[
                QuestionSummary(
                    id=r["id"],
                    title=r["title"],
                    slug=r["slug"],
                    created_at=r["created_at"],
                    user=_user(r["user_id"]),
                    tags=_tags(r["tags"]),
                    answers_count=len(self.answers.get(r["id"], [])),
                    votes=r["votes"],
                )
                for r in chunk
            ],
            page=page,
            per_page=per_page,
            total=total,
            last_page=max(1, -(-total // per_page)),
        )

    async def load_question(self, question_id: int) -> QuestionOut | None:
        self.calls["load_question"] += 1
        row = self.rows.get(question_id)
        if row is None:
            return None
        return QuestionOut(
            id=row["id"],
            title=row["title"],
            slug=row["slug"],
            body=row["body"],
            created_at=row["created_at"],
            user=_user(row["user_id"]),
            tags=_tags(row["tags"]),
            votes=row["votes"],
        )

    async def load_answers(self, question_id: int) -> list[AnswerOut]:
        self.calls["load_answers"] += 1
        return list(self.answers.get(question_id, []))

    async def delete_question(self, question_id: int) -> bool:
        self.calls["delete_question"] += 1
        if self.rows.pop(question_id, None) is None:
            return False
        self.answers.pop(question_id, None)
        self.deleted.append(question_id)
        return True


class FakeQuestionService(QuestionService):
    """QuestionService writing into a FakeQuestionStore."""

    def __init__(self, store: FakeQuestionStore) -> None:
        self._store = store

    async def create_question(self, fields: dict[str, Any]) -> QuestionRecord:
        record = self._store.add_question(
            title=fields["title"],
            user_id=fields["user_id"],
            body=fields["body"],
            tags=fields.get("tags") or [],
        )
        # Keep the slug chosen by the caller.
        self._store.rows[record.id]["slug"] = fields["slug"]
        return self._store._record(record.id)

    async def update_question(self, fields: dict[str, Any], question_id: int) -> QuestionRecord | None:
        row = self._store.rows.get(question_id)
        if row is None:
            return None
        row.update(title=fields["title"], slug=fields["slug"], body=fields["body"], tags=fields.get("tags") or [])
        return self._store._record(question_id)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def backend(clock: FakeClock) -> SpyCache:
    return SpyCache(clock)


@pytest.fixture
def store() -> FakeQuestionStore:
    """Two questions owned by Ada (user 1): id 5 "how-to-sort" and id 7 "delete-me"."""
    s = FakeQuestionStore()
    s.add_question(question_id=5, title="How to sort", user_id=1, tags=["python", "sorting"], votes=3)
    s.add_answer(5, user_id=2, body="Use sorted().", votes=2)
    s.add_question(question_id=7, title="Delete me", user_id=1)
    return s


@pytest.fixture
def question_cache(backend: SpyCache, store: FakeQuestionStore) -> QuestionCache:
    return QuestionCache(backend, store, ttl=600, per_page=15)


@pytest.fixture
def controller(store: FakeQuestionStore, question_cache: QuestionCache) -> QuestionController:
    return QuestionController(
        store=store,
        cache=question_cache,
        service=FakeQuestionService(store),
        gate=AuthorizationGate(),
    )


@pytest.fixture
async def database(monkeypatch):
    """Real SQLAlchemy engine (in-memory SQLite) behind `get_session()`.

    Foreign keys are enforced so ON DELETE CASCADE behaves as on Postgres.
    """
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, _record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    monkeypatch.setattr(postgres_store, "_engine", engine)
    monkeypatch.setattr(
        postgres_store,
        "_session_factory",
        async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False),
    )
    yield engine
    await engine.dispose()
