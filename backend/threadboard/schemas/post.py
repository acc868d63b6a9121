"""Post Schemas — Pydantic request/response models for the post endpoints.

Invariants:
    - PostCreate.body is a string; emptiness and length are engine rules (INVALID_ARGUMENT)
    - Clients cannot create system posts: PostCreate has no is_system field
    - PostPage carries total so the caller can compute page counts
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from threadboard.schemas.topic import TopicStateResponse


class PostCreate(BaseModel):
    """Post creation payload."""
    body: str


class PostResponse(BaseModel):
    """Post response — public-facing post data."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    topic_id: int
    body: str
    is_system: bool
    created_at: datetime


class PostCreatedResponse(BaseModel):
    post: PostResponse
    topic: TopicStateResponse


class PostDeletedResponse(BaseModel):
    post_id: int
    topic: TopicStateResponse


class PostPage(BaseModel):
    """One page of live posts in creation order."""
    items: list[PostResponse]
    total: int
    limit: int
    offset: int
