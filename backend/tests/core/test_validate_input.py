"""Input Validation — tests for title, summary and body normalization.

Tests cover:
    - Bodies and titles are stripped before length checks
    - Empty / whitespace-only values are rejected with the field name
    - Exactly-at-limit passes, one over fails
    - Blank summaries become None
"""

import pytest

from threadboard.core.errors import InvalidArgumentError
from threadboard.core.validate_input import (
    normalize_post_body,
    normalize_summary,
    normalize_topic_title,
)


def test_body_at_limit_passes():
    assert normalize_post_body("a" * 200, 200) == "a" * 200


def test_body_over_limit_fails():
    with pytest.raises(InvalidArgumentError) as exc:
        normalize_post_body("a" * 201, 200)
    assert exc.value.field == "body"
    assert exc.value.http_status == 400


def test_body_length_counted_after_strip():
    assert normalize_post_body("  " + "a" * 200 + "  ", 200) == "a" * 200


@pytest.mark.parametrize("body", [None, "", "   ", "\n"])
def test_blank_body_fails(body):
    with pytest.raises(InvalidArgumentError):
        normalize_post_body(body, 200)


def test_body_length_counts_characters_not_bytes():
    assert normalize_post_body("あ" * 200, 200) == "あ" * 200


def test_title_is_stripped():
    assert normalize_topic_title("  Hello  ", 80) == "Hello"


@pytest.mark.parametrize("title", [None, "", "  ", "t" * 81])
def test_bad_title_fails(title):
    with pytest.raises(InvalidArgumentError) as exc:
        normalize_topic_title(title, 80)
    assert exc.value.field == "title"


def test_summary_normalization():
    assert normalize_summary(None) is None
    assert normalize_summary("   ") is None
    assert normalize_summary(" about ") == "about"
