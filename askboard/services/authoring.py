"""Question authoring: create/update side effects beyond plain field writes.

- Tags are associated by name; unknown names create new tags.
- Update replaces the whole tag set with the submitted one.
- The edit form receives the current tags as one comma-separated string.

Slug and owner are decided by the caller and arrive in `fields`.
"""

import logging
from collections.abc import Iterable
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from askboard.models import Question, Tag
from askboard.schemas import TagOut
from askboard.services.errors import ValidationFailed
from askboard.services.slug import tag_slug
from askboard.stores.postgres import get_session
from askboard.stores.questions import QuestionRecord

logger = logging.getLogger("uvicorn.error")

TAG_SEPARATOR = ", "

_REQUIRED_CREATE_FIELDS = ("title", "body", "slug", "user_id")
_REQUIRED_UPDATE_FIELDS = ("title", "body", "slug")


def _require(fields: dict[str, Any], names: Iterable[str]) -> None:
    missing = [name for name in names if fields.get(name) in (None, "")]
    if missing:
        raise ValidationFailed(
            "Missing question fields",
            detail={"missing": missing},
        )


class QuestionService:
    """Writes questions and their tag associations."""

    async def create_question(self, fields: dict[str, Any]) -> QuestionRecord:
        """Insert a question and attach its tags.

        Args:
            fields: title, body, slug, user_id and optional tags (names).
        """
        _require(fields, _REQUIRED_CREATE_FIELDS)

        async with get_session() as session:
            question = Question(
                user_id=fields["user_id"],
                title=fields["title"],
                slug=fields["slug"],
                body=fields["body"],
            )
            question.tags = await self._resolve_tags(session, fields.get("tags") or [])
            session.add(question)
            await session.flush()

            logger.info(f"Question {question.id} created by user {question.user_id}")
            return QuestionRecord(
                id=question.id,
                slug=question.slug,
                user_id=question.user_id,
                title=question.title,
            )

    async def update_question(self, fields: dict[str, Any], question_id: int) -> QuestionRecord | None:
        """Rewrite title/slug/body and replace the tag set.

        Returns:
            The updated record, or None if the question does not exist.
        """
        _require(fields, _REQUIRED_UPDATE_FIELDS)

        async with get_session() as session:
            question = await session.get(
                Question,
                question_id,
                options=[selectinload(Question.tags)],
            )
            if question is None:
                return None

            question.title = fields["title"]
            question.slug = fields["slug"]
            question.body = fields["body"]
            question.tags = await self._resolve_tags(session, fields.get("tags") or [])
            await session.flush()

            logger.info(f"Question {question.id} updated (slug={question.slug})")
            return QuestionRecord(
                id=question.id,
                slug=question.slug,
                user_id=question.user_id,
                title=question.title,
            )

    def edit_question_tag(self, current_tags: Iterable[TagOut]) -> str:
        """Format current tags for the edit form: "python, sorting"."""
        return TAG_SEPARATOR.join(tag.name for tag in current_tags)

    async def _resolve_tags(self, session: AsyncSession, names: list[str]) -> list[Tag]:
        """Map tag names to Tag rows, creating the missing ones."""
        wanted: dict[str, str] = {}
        for name in names:
            slug = tag_slug(name)
            if slug and slug not in wanted:
                wanted[slug] = name.strip()

        if not wanted:
            return []

        result = await session.execute(select(Tag).where(Tag.slug.in_(list(wanted))))
        existing = {tag.slug: tag for tag in result.scalars().all()}

        tags: list[Tag] = []
        for slug, name in wanted.items():
            tag = existing.get(slug)
            if tag is None:
                tag = Tag(name=name, slug=slug)
                session.add(tag)
            tags.append(tag)
        return tags
