"""Input Validation — content rules for topic titles, summaries and post bodies.

Invariants:
    - Values are stripped before any length check; the stripped value is what gets stored
    - Length is counted in characters (str length), not bytes
    - Raises InvalidArgumentError with the offending field name

Design Decisions:
    - Lives in core, not in Pydantic schemas: every engine caller (HTTP, seeding,
      tests) gets identical errors, and system posts skip this module entirely
"""

from threadboard.core.errors import InvalidArgumentError


def normalize_post_body(body: str | None, max_length: int) -> str:
    """Strip and validate a user post body."""
    text = (body or "").strip()
    if not text:
        raise InvalidArgumentError("body is required", "body")
    if len(text) > max_length:
        raise InvalidArgumentError(
            f"body must be {max_length} characters or less", "body",
        )
    return text


def normalize_topic_title(title: str | None, max_length: int) -> str:
    """Strip and validate a topic title."""
    text = (title or "").strip()
    if not text:
        raise InvalidArgumentError("title is required", "title")
    if len(text) > max_length:
        raise InvalidArgumentError(
            f"title must be {max_length} characters or less", "title",
        )
    return text


def normalize_summary(summary: str | None) -> str | None:
    # blank summaries are stored as NULL
    if summary is None:
        return None
    return summary.strip() or None
