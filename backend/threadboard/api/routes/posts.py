"""Post Routes — paginated listing, creation and deletion of posts within a topic.

Invariants:
    - limit/offset are passed through unvalidated; the engine clamps them
    - POST returns the new post plus the topic's counter and lock state after commit
    - DELETE returns the recounted topic state (posts_count is authoritative, not decremented)
"""

from fastapi import APIRouter, Depends, Query, status

from threadboard.api.deps import get_board_engine
from threadboard.schemas.post import (
    PostCreate, PostCreatedResponse, PostDeletedResponse, PostPage, PostResponse,
)
from threadboard.schemas.topic import TopicStateResponse
from threadboard.services.board_engine import BoardEngine

router = APIRouter(prefix="/api/v1/topics/{topic_id}/posts", tags=["posts"])


@router.get("", response_model=PostPage)
async def list_posts(
    topic_id: int,
    limit: int | None = Query(None),
    offset: int | None = Query(None),
    engine: BoardEngine = Depends(get_board_engine),
):
    page = await engine.list_posts(topic_id, limit=limit, offset=offset)
    return PostPage(
        items=[PostResponse.model_validate(p) for p in page.items],
        total=page.total,
        limit=page.limit,
        offset=page.offset,
    )


@router.post(
    "", response_model=PostCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_post(
    topic_id: int,
    body: PostCreate,
    engine: BoardEngine = Depends(get_board_engine),
):
    result = await engine.create_post(topic_id, body.body)
    return PostCreatedResponse(
        post=PostResponse.model_validate(result.post),
        topic=TopicStateResponse(
            id=result.topic_id,
            posts_count=result.posts_count,
            locked=result.locked,
        ),
    )


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(
    topic_id: int,
    post_id: int,
    engine: BoardEngine = Depends(get_board_engine),
):
    post = await engine.get_post(topic_id, post_id)
    return PostResponse.model_validate(post)


@router.delete("/{post_id}", response_model=PostDeletedResponse)
async def delete_post(
    topic_id: int,
    post_id: int,
    engine: BoardEngine = Depends(get_board_engine),
):
    result = await engine.delete_post(topic_id, post_id)
    return PostDeletedResponse(
        post_id=result.post_id,
        topic=TopicStateResponse(
            id=result.topic_id,
            posts_count=result.posts_count,
            locked=result.locked,
        ),
    )
