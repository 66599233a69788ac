"""Question repository on PostgreSQL.

Reads return API schemas (ready to serialize or cache); the live lookup used
for slug and ownership checks returns a small QuestionRecord.

Vote totals are the sum of vote values (0 when a post has no votes).
"""

from dataclasses import dataclass
import math

from sqlalchemy import func, select
from sqlalchemy.orm import selectinload

from askboard.models import Answer, Question, Tag, User, Vote
from askboard.schemas import (
    AnswerOut,
    QuestionOut,
    QuestionPage,
    QuestionSummary,
    TagOut,
    UserRef,
)
from askboard.stores.postgres import get_session


@dataclass(frozen=True)
class QuestionRecord:
    """Live identity of a question: what slug/ownership checks need."""

    id: int
    slug: str
    user_id: int
    title: str


def _question_votes():
    return (
        select(func.coalesce(func.sum(Vote.value), 0))
        .where(Vote.question_id == Question.id)
        .correlate(Question)
        .scalar_subquery()
    )


def _answer_votes():
    return (
        select(func.coalesce(func.sum(Vote.value), 0))
        .where(Vote.answer_id == Answer.id)
        .correlate(Answer)
        .scalar_subquery()
    )


def _answers_count():
    return (
        select(func.count(Answer.id))
        .where(Answer.question_id == Question.id)
        .correlate(Question)
        .scalar_subquery()
    )


def _user_ref(user: User) -> UserRef:
    return UserRef(id=user.id, name=user.name)


def _tags_out(tags: list[Tag]) -> list[TagOut]:
    return [TagOut(id=t.id, name=t.name, slug=t.slug) for t in sorted(tags, key=lambda t: t.name)]


class QuestionStore:
    """Data access for questions, their answers, tags and votes."""

    async def find_question(self, question_id: int) -> QuestionRecord | None:
        """Load the live id/slug/owner of a question (never cached)."""
        async with get_session() as session:
            result = await session.execute(
                select(Question.id, Question.slug, Question.user_id, Question.title).where(
                    Question.id == question_id
                )
            )
            row = result.one_or_none()
            if row is None:
                return None
            return QuestionRecord(id=row.id, slug=row.slug, user_id=row.user_id, title=row.title)

    async def paginate_questions(self, page: int, per_page: int) -> QuestionPage:
        """Load one page of questions, newest first.

        Each row carries its user, tags, answer count and vote total.
        """
        async with get_session() as session:
            total_result = await session.execute(select(func.count(Question.id)))
            total = total_result.scalar() or 0

            query = (
                select(
                    Question,
                    _answers_count().label("answers_count"),
                    _question_votes().label("votes"),
                )
                .options(selectinload(Question.user), selectinload(Question.tags))
                .order_by(Question.created_at.desc(), Question.id.desc())
                .offset((page - 1) * per_page)
                .limit(per_page)
            )
            result = await session.execute(query)

            items: list[QuestionSummary] = []
            for question, answers_count, votes in result.all():
                items.append(
                    QuestionSummary(
                        id=question.id,
                        title=question.title,
                        slug=question.slug,
                        created_at=question.created_at,
                        user=_user_ref(question.user),
                        tags=_tags_out(question.tags),
                        answers_count=int(answers_count or 0),
                        votes=int(votes or 0),
                    )
                )

        return QuestionPage(
            items=items,
            page=page,
            per_page=per_page,
            total=total,
            last_page=max(1, math.ceil(total / per_page)),
        )

    async def load_question(self, question_id: int) -> QuestionOut | None:
        """Load a question with its user, tags and vote total."""
        async with get_session() as session:
            result = await session.execute(
                select(Question, _question_votes().label("votes"))
                .options(selectinload(Question.user), selectinload(Question.tags))
                .where(Question.id == question_id)
            )
            row = result.one_or_none()
            if row is None:
                return None

            question, votes = row
            return QuestionOut(
                id=question.id,
                title=question.title,
                slug=question.slug,
                body=question.body,
                created_at=question.created_at,
                user=_user_ref(question.user),
                tags=_tags_out(question.tags),
                votes=int(votes or 0),
            )

    async def load_answers(self, question_id: int) -> list[AnswerOut]:
        """Load the answers of a question, oldest first, with user and vote total."""
        async with get_session() as session:
            result = await session.execute(
                select(Answer, _answer_votes().label("votes"))
                .options(selectinload(Answer.user))
                .where(Answer.question_id == question_id)
                .order_by(Answer.created_at.asc(), Answer.id.asc())
            )
            return [
                AnswerOut(
                    id=answer.id,
                    question_id=answer.question_id,
                    body=answer.body,
                    created_at=answer.created_at,
                    user=_user_ref(answer.user),
                    votes=int(votes or 0),
                )
                for answer, votes in result.all()
            ]

    async def delete_question(self, question_id: int) -> bool:
        """Detach a question's tags, then delete it.

        Answers and votes go with it (ON DELETE CASCADE).

        Returns:
            False if the question did not exist.
        """
        async with get_session() as session:
            question = await session.get(
                Question,
                question_id,
                options=[selectinload(Question.tags)],
            )
            if question is None:
                return False

            question.tags.clear()
            await session.flush()

            await session.delete(question)
            return True
