"""SQLAlchemy ORM models.

Models represent database tables:
- users: Question/answer owners
- questions: Questions addressed by id + slug
- answers: Answers to questions
- tags / question_tag: Tags and their many-to-many link to questions
- votes: +1/-1 votes on questions or answers
"""

from askboard.models.answer import Answer
from askboard.models.question import Question
from askboard.models.tag import Tag, question_tag
from askboard.models.user import User
from askboard.models.vote import Vote

__all__ = ["Answer", "Question", "Tag", "User", "Vote", "question_tag"]
