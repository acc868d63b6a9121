"""Pagination — clamps caller-supplied limit/offset to the policy window.

Invariants:
    - limit is always within [1, max_page_size]; None means default_page_size
    - offset is always >= 0
    - Never raises: out-of-range input is clamped, not rejected
"""

from dataclasses import dataclass

from threadboard.core.domain_types import BoardPolicy


@dataclass(frozen=True)
class PageWindow:
    limit: int
    offset: int


def clamp_page(
    limit: int | None, offset: int | None, policy: BoardPolicy,
) -> PageWindow:
    if limit is None:
        limit = policy.default_page_size
    limit = max(1, min(limit, policy.max_page_size))
    offset = max(offset or 0, 0)
    return PageWindow(limit=limit, offset=offset)
