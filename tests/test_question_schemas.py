"""Request schema limits match the columns they are written to."""

import pytest
from pydantic import ValidationError

from askboard.models import Tag
from askboard.schemas import PageRequest, QuestionCreate
from askboard.schemas.questions import MAX_TAG_NAME_LENGTH
from askboard.settings import get_settings


def test_tag_name_limit_matches_column():
    assert MAX_TAG_NAME_LENGTH == Tag.__table__.c.name.type.length


def test_overlong_tag_is_rejected():
    with pytest.raises(ValidationError):
        QuestionCreate(title="t", body="b", tags=["x" * (MAX_TAG_NAME_LENGTH + 1)])


def test_tag_at_limit_is_accepted_after_strip():
    payload = QuestionCreate(title="t", body="b", tags=[f"  {'x' * MAX_TAG_NAME_LENGTH}  "])
    assert payload.tags == ["x" * MAX_TAG_NAME_LENGTH]


def test_duplicate_tags_collapse_case_insensitively():
    payload = QuestionCreate(title="t", body="b", tags=["Python", "python ", "sorting"])
    assert payload.tags == ["Python", "sorting"]


def test_page_request_defaults_to_configured_page_size(monkeypatch):
    monkeypatch.setenv("QUESTIONS_PER_PAGE", "7")
    get_settings.cache_clear()
    try:
        assert PageRequest().per_page == 7
    finally:
        get_settings.cache_clear()
