"""Capacity & Lock Enforcement — admission checks and the open -> locked transition.

Invariants:
    - check_post_admission is PURE: returns the error to raise, never raises or mutates
    - Deleted topics reject every post, system posts included
    - Locked and full topics reject user posts; system posts bypass both checks
    - A full topic reports CapacityReachedError even once it auto-locked, so every caller
      racing past the limit sees the same Conflict; LOCKED alone (explicit lock) is Forbidden
    - transition_after_insert fires only on the edge where the count reaches the limit,
      only from OPEN, and never for a system post: the sentinel is appended at most once

Design Decisions:
    - Explicit two-state machine instead of scattered `if posts_count == limit` checks
    - Shell applies the transition (insert sentinel, bump counter, set locked) inside the
      same transaction as the triggering post
"""

from dataclasses import dataclass

from threadboard.core.domain_types import BoardPolicy, TopicState
from threadboard.core.errors import (
    BoardError, CapacityReachedError, TopicDeletedError, TopicLockedError,
)
from threadboard.core.repository_protocols import TopicLike


@dataclass(frozen=True)
class CapacityTransition:
    """What the shell must do after inserting a post."""
    next_state: TopicState
    append_notice: bool = False

    @property
    def locks(self) -> bool:
        return self.next_state is TopicState.LOCKED


def topic_state(topic: TopicLike) -> TopicState:
    return TopicState.LOCKED if topic.locked else TopicState.OPEN


def check_post_admission(
    topic: TopicLike, policy: BoardPolicy, is_system: bool = False,
) -> BoardError | None:
    """Decide whether the topic (read under its row lock) accepts one more post."""
    if topic.deleted_at is not None:
        return TopicDeletedError(topic.id)
    if is_system:
        return None
    if topic.posts_count >= policy.capacity_limit:
        return CapacityReachedError(topic.id, policy.capacity_limit)
    if topic_state(topic) is TopicState.LOCKED:
        return TopicLockedError(topic.id)
    return None


def transition_after_insert(
    state: TopicState, posts_count: int, policy: BoardPolicy, is_system: bool = False,
) -> CapacityTransition:
    """Next topic state once the counter includes the newly inserted post."""
    if (
        state is TopicState.OPEN
        and not is_system
        and posts_count == policy.capacity_limit
    ):
        return CapacityTransition(TopicState.LOCKED, append_notice=True)
    return CapacityTransition(state)
