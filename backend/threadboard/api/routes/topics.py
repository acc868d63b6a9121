"""Topic Routes — list, create, read, edit and soft-delete topics.

Invariants:
    - Routes hold no business rules: every decision is made by BoardEngine
    - Engine errors propagate to the global BoardError handler (api/error_handlers.py)
    - Deleted topics are invisible: GET/PATCH/DELETE on them return 404
"""

from fastapi import APIRouter, Depends, Response, status

from threadboard.api.deps import get_board_engine
from threadboard.schemas.topic import TopicCreate, TopicResponse, TopicUpdate
from threadboard.services.board_engine import BoardEngine

router = APIRouter(prefix="/api/v1/topics", tags=["topics"])


@router.get("", response_model=list[TopicResponse])
async def list_topics(engine: BoardEngine = Depends(get_board_engine)):
    """Live topics, newest first."""
    topics = await engine.list_topics()
    return [TopicResponse.model_validate(t) for t in topics]


@router.post(
    "", response_model=TopicResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_topic(
    body: TopicCreate, engine: BoardEngine = Depends(get_board_engine),
):
    topic = await engine.create_topic(body.title, body.summary)
    return TopicResponse.model_validate(topic)


@router.get("/{topic_id}", response_model=TopicResponse)
async def get_topic(
    topic_id: int, engine: BoardEngine = Depends(get_board_engine),
):
    topic = await engine.get_topic(topic_id)
    return TopicResponse.model_validate(topic)


@router.patch("/{topic_id}", response_model=TopicResponse)
async def update_topic(
    topic_id: int,
    body: TopicUpdate,
    engine: BoardEngine = Depends(get_board_engine),
):
    """Edit title/summary or lock the topic. Unlocking is rejected."""
    topic = await engine.update_topic(
        topic_id, title=body.title, summary=body.summary, locked=body.locked,
    )
    return TopicResponse.model_validate(topic)


@router.delete("/{topic_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_topic(
    topic_id: int, engine: BoardEngine = Depends(get_board_engine),
):
    await engine.delete_topic(topic_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
