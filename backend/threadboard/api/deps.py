"""FastAPI dependency injection for the board API.

Provides a per-request BoardEngine bound to the request's database session.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from threadboard.config import get_settings
from threadboard.core.domain_types import BoardPolicy
from threadboard.infrastructure.board_store import SqlBoardStore
from threadboard.infrastructure.database import get_db
from threadboard.services.board_engine import BoardEngine


def get_policy() -> BoardPolicy:
    """Board limits from settings."""
    return get_settings().to_policy()


def get_board_engine(
    db: AsyncSession = Depends(get_db),
    policy: BoardPolicy = Depends(get_policy),
) -> BoardEngine:
    """Engine over this request's session. Never shared between requests."""
    return BoardEngine(SqlBoardStore(db), policy)
