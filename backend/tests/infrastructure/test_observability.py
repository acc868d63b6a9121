"""Structured Logging — JSONFormatter output shape."""

import json
import logging

from threadboard.infrastructure.observability import (
    HANDLER_NAME, JSONFormatter, setup_logging,
)


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "threadboard.test", logging.WARNING, __file__, 1,
        "topic %s locked", (7,), None,
    )
    record.__dict__.update(extra)
    return record


def test_formats_core_fields():
    payload = json.loads(JSONFormatter().format(_record()))
    assert payload["level"] == "WARNING"
    assert payload["logger"] == "threadboard.test"
    assert payload["message"] == "topic 7 locked"
    assert "timestamp" in payload


def test_surfaces_board_extras_only_when_present():
    payload = json.loads(
        JSONFormatter().format(_record(topic_id=7, posts_count=51, locked=True)),
    )
    assert payload["topic_id"] == 7
    assert payload["posts_count"] == 51
    assert payload["locked"] is True
    assert "post_id" not in payload
    assert "error_code" not in payload


def test_setup_logging_replaces_its_own_handler():
    root = logging.getLogger()
    before = list(root.handlers)
    level = root.level
    try:
        setup_logging("DEBUG", "json")
        setup_logging("WARNING", "text")
        ours = [h for h in root.handlers if h.get_name() == HANDLER_NAME]
        assert len(ours) == 1
        assert not isinstance(ours[0].formatter, JSONFormatter)
        assert root.level == logging.WARNING
    finally:
        root.handlers[:] = before
        root.setLevel(level)
