"""Forum index and forum-scoped (mass) moderation endpoints."""

from __future__ import annotations

from fastapi import APIRouter
from sqlalchemy import select

from forum_moderation.api.v1 import messages
from forum_moderation.api.v1.dependencies import (
    CurrentUserDep,
    OptionalUserDep,
    ProcessorDep,
    QueueDep,
    SessionDep,
    VisibilityDep,
)
from forum_moderation.core.errors import NotFoundError, UnauthorizedError
from forum_moderation.core.settings import settings
from forum_moderation.models import Forum, Post, Topic, User
from forum_moderation.models.content import ModeratedContent
from forum_moderation.schemas.common import Alert
from forum_moderation.schemas.forum import ForumIndexResponse, ForumResponse
from forum_moderation.schemas.moderation import (
    ModerationQueueResponse,
    ModerationRequest,
    ModerationResponse,
    QueueItem,
)
from forum_moderation.schemas.topic import TopicResponse
from forum_moderation.services import ModerationResult, VisibilityFilter

router = APIRouter(
    prefix="/forums",
    tags=["forums"],
    responses={403: {"model": Alert}, 404: {"model": Alert}},
)


def to_queue_item(item: ModeratedContent) -> QueueItem:
    """Convert a pending topic or post into its queue listing."""
    if isinstance(item, Topic):
        return QueueItem(
            kind="topic",
            id=item.id,
            forum_id=item.forum_id,
            topic_id=item.id,
            user_id=item.user_id,
            text=item.body,
            created_at=item.created_at,
        )
    if not isinstance(item, Post):
        raise TypeError(f"Cannot queue {type(item).__name__}")
    return QueueItem(
        kind="post",
        id=item.id,
        forum_id=item.topic.forum_id,
        topic_id=item.topic_id,
        user_id=item.user_id,
        text=item.text,
        created_at=item.created_at,
    )


def to_moderation_response(result: ModerationResult) -> ModerationResponse:
    """Collapse a per-item result into the single aggregate notice."""
    return ModerationResponse(
        notice=messages.MODERATED,
        changed=len(result.changed),
        unchanged=len(result.unchanged),
        failed=len(result.failed),
    )


def require_moderator(visibility: VisibilityFilter, user: User, forum: Forum) -> None:
    if not visibility.can_moderate(user, forum):
        raise UnauthorizedError("You are not allowed to moderate this forum.")


@router.get("/", response_model=list[ForumResponse])
async def list_forums(db: SessionDep) -> list[Forum]:
    """List all forums."""
    return list(db.scalars(select(Forum).order_by(Forum.id)))


@router.get("/{forum_id}", response_model=ForumIndexResponse)
async def get_forum(
    forum_id: int,
    viewer: OptionalUserDep,
    visibility: VisibilityDep,
) -> ForumIndexResponse:
    """Forum index: topics the viewer may see, plus the moderation tools flag."""
    forum = visibility.get_forum(forum_id)
    topics = visibility.topics(viewer, forum)
    return ForumIndexResponse(
        forum=ForumResponse.model_validate(forum),
        topics=[TopicResponse.model_validate(topic) for topic in topics],
        moderation_tools=visibility.can_moderate(viewer, forum),
    )


@router.get("/{forum_id}/moderation", response_model=ModerationQueueResponse)
async def get_forum_queue(
    forum_id: int,
    current_user: CurrentUserDep,
    visibility: VisibilityDep,
    queue: QueueDep,
) -> ModerationQueueResponse:
    """Every pending topic and post in the forum, oldest first."""
    forum = visibility.get_forum(forum_id)
    require_moderator(visibility, current_user, forum)
    items = queue.pending_items(forum, limit=settings.queue_page_size)
    return ModerationQueueResponse(items=[to_queue_item(item) for item in items])


@router.post("/{forum_id}/moderation", response_model=ModerationResponse)
async def moderate_forum(
    forum_id: int,
    payload: ModerationRequest,
    current_user: CurrentUserDep,
    db: SessionDep,
    visibility: VisibilityDep,
    processor: ProcessorDep,
) -> ModerationResponse:
    """Mass moderation: apply one verdict to topics and posts from the queue."""
    forum = visibility.get_forum(forum_id)
    require_moderator(visibility, current_user, forum)

    items: list[ModeratedContent] = []
    for topic_id in payload.topic_ids:
        topic = db.get(Topic, topic_id)
        if topic is None or topic.forum_id != forum.id:
            raise NotFoundError("topic", topic_id)
        items.append(topic)
    for post_id in payload.post_ids:
        post = db.get(Post, post_id)
        if post is None or post.topic.forum_id != forum.id:
            raise NotFoundError("post", post_id)
        items.append(post)

    result = processor.apply_verdict(current_user, items, payload.verdict)
    return to_moderation_response(result)
