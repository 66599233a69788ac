"""Vote model.

A vote targets either a question or an answer (exactly one of the two FKs is
set). The vote total shown next to a post is the sum of `value`.
"""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, SmallInteger, func
from sqlalchemy.orm import Mapped, mapped_column

from askboard.stores.postgres import Base


class Vote(Base):
    """Up (+1) or down (-1) vote on a question or answer."""

    __tablename__ = "votes"
    __table_args__ = (
        CheckConstraint("value IN (-1, 1)", name="ck_votes_value"),
        CheckConstraint(
            "(question_id IS NULL) <> (answer_id IS NULL)",
            name="ck_votes_single_target",
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True)

    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True)
    question_id: Mapped[int | None] = mapped_column(
        ForeignKey("questions.id", ondelete="CASCADE"),
        index=True,
    )
    answer_id: Mapped[int | None] = mapped_column(
        ForeignKey("answers.id", ondelete="CASCADE"),
        index=True,
    )

    value: Mapped[int] = mapped_column(SmallInteger)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        target = f"q={self.question_id}" if self.question_id else f"a={self.answer_id}"
        return f"<Vote {target} {self.value:+d}>"
