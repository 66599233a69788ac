"""Question model.

A question is addressed publicly by id + slug; the slug is derived from the
title and rewritten whenever the title changes.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from askboard.models.tag import question_tag
from askboard.stores.postgres import Base

if TYPE_CHECKING:
    from askboard.models.answer import Answer
    from askboard.models.tag import Tag
    from askboard.models.user import User


class Question(Base):
    """Question asked by a user."""

    __tablename__ = "questions"

    id: Mapped[int] = mapped_column(primary_key=True)

    # Relations
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True)

    # Content
    title: Mapped[str] = mapped_column(String(255))
    slug: Mapped[str] = mapped_column(String(255), index=True)  # e.g., "how-to-sort"
    body: Mapped[str] = mapped_column(Text)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )

    user: Mapped[User] = relationship()
    tags: Mapped[list[Tag]] = relationship(secondary=question_tag)
    answers: Mapped[list[Answer]] = relationship(
        back_populates="question",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Question {self.id} {self.slug}>"
