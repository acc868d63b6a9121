"""Domain Types — topic write state and the limits the engine enforces.

Invariants:
    - TopicState has exactly two members; the only transition is OPEN -> LOCKED
    - BoardPolicy is immutable and every limit is >= 1

Design Decisions:
    - BoardPolicy is built by the shell from Settings: core never reads configuration itself
"""

from dataclasses import dataclass
from enum import Enum


# ─── Enums ───────────────────────────────────────────────────────

class TopicState(str, Enum):
    """Topic write state — maps to the `locked` column."""
    OPEN = "open"
    LOCKED = "locked"


# ─── Policy ──────────────────────────────────────────────────────

DEFAULT_LIMIT_NOTICE = (
    "This thread has reached its post limit. Please start a new thread."
)


@dataclass(frozen=True)
class BoardPolicy:
    """Limits enforced by the consistency engine."""
    capacity_limit: int = 50
    max_post_body_length: int = 200
    max_topic_title_length: int = 80
    limit_notice: str = DEFAULT_LIMIT_NOTICE
    default_page_size: int = 10
    max_page_size: int = 10

    def __post_init__(self):
        for name in (
            "capacity_limit", "max_post_body_length", "max_topic_title_length",
            "default_page_size", "max_page_size",
        ):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be >= 1")
        if self.default_page_size > self.max_page_size:
            raise ValueError("default_page_size cannot exceed max_page_size")
        if not self.limit_notice.strip():
            raise ValueError("limit_notice cannot be empty")
