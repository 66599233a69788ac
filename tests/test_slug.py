from askboard.services.slug import (
    DEFAULT_SLUG,
    MAX_QUESTION_SLUG_LENGTH,
    MAX_TAG_SLUG_LENGTH,
    question_slug,
    slugify,
    tag_slug,
    truncate_slug,
)


def test_title_becomes_hyphenated_lowercase():
    assert slugify("How To Sort Fast") == "how-to-sort-fast"


def test_punctuation_and_whitespace_collapse():
    assert slugify("  Why is my cache -- returning stale pages?!  ") == "why-is-my-cache-returning-stale-pages"
    assert slugify("snake_case vs camelCase") == "snake-case-vs-camelcase"


def test_accents_fold_to_ascii():
    assert slugify("Café crème brûlée") == "cafe-creme-brulee"


def test_at_sign_is_spelled_out():
    assert slugify("Mail me @ home") == "mail-me-at-home"


def test_empty_inputs():
    assert slugify("") == ""
    assert slugify("???") == ""


def test_question_slug_is_never_empty():
    assert question_slug("???") == DEFAULT_SLUG
    assert question_slug("How to sort") == "how-to-sort"


def test_question_slug_fits_column_for_longest_title():
    # "@" spells out to "at", so 255 of them would make a 764-char slug.
    slug = question_slug("@" * MAX_QUESTION_SLUG_LENGTH)
    assert len(slug) <= MAX_QUESTION_SLUG_LENGTH
    assert slug.startswith("at-at")
    assert not slug.endswith("-")


def test_truncation_cuts_on_word_boundary():
    assert truncate_slug("how-to-sort-fast", 10) == "how-to"
    assert truncate_slug("how-to-sort", 11) == "how-to-sort"
    assert truncate_slug("how-to-sort-fast", 11) == "how-to-sort"


def test_truncation_hard_cuts_single_long_word():
    assert truncate_slug("a" * 300, 255) == "a" * 255


def test_tag_slug_fits_tag_column():
    assert len(tag_slug("@" * 50)) <= MAX_TAG_SLUG_LENGTH
