"""URL slugs derived from titles.

Example: "How To Sort Fast" -> "how-to-sort-fast"

Slugs are capped to their column widths; "@" -> " at " and accent folding
can make a slug longer than the text it came from.
"""

import re
import unicodedata

# Used when a title has no ASCII-representable characters at all.
DEFAULT_SLUG = "question"

MAX_QUESTION_SLUG_LENGTH = 255  # questions.slug
MAX_TAG_SLUG_LENGTH = 60  # tags.slug


def slugify(value: str) -> str:
    """Normalize a string into a URL-safe slug.

    - Fold accents to ASCII (NFKD)
    - Lowercase
    - Collapse every run of non-alphanumerics into one hyphen
    - Trim leading/trailing hyphens
    """
    if not value:
        return ""

    result = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")
    result = result.lower().replace("@", " at ")
    result = re.sub(r"[^a-z0-9]+", "-", result)
    return result.strip("-")


def truncate_slug(slug: str, max_length: int) -> str:
    """Cut a slug to max_length, on a hyphen when there is one to cut on."""
    if len(slug) <= max_length:
        return slug

    head, sep, _ = slug[: max_length + 1].rpartition("-")
    if not sep or not head:
        # One long word: hard cut.
        head = slug[:max_length]
    return head.strip("-")


def question_slug(title: str) -> str:
    """Slug for a question title, never empty."""
    return truncate_slug(slugify(title), MAX_QUESTION_SLUG_LENGTH) or DEFAULT_SLUG


def tag_slug(name: str) -> str:
    return truncate_slug(slugify(name), MAX_TAG_SLUG_LENGTH)
