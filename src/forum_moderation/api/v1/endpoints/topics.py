"""Topic, reply and topic-scoped (singular) moderation endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from forum_moderation.api.v1 import messages
from forum_moderation.api.v1.dependencies import (
    ContentDep,
    CurrentUserDep,
    OptionalUserDep,
    ProcessorDep,
    QueueDep,
    VisibilityDep,
)
from forum_moderation.core.errors import NotFoundError
from forum_moderation.core.settings import settings
from forum_moderation.models import Post
from forum_moderation.schemas.common import Alert
from forum_moderation.schemas.moderation import (
    ModerationQueueResponse,
    ModerationRequest,
    ModerationResponse,
)
from forum_moderation.schemas.post import PostCreate, PostCreated, PostResponse
from forum_moderation.schemas.topic import (
    TopicCreate,
    TopicCreated,
    TopicDetailResponse,
    TopicResponse,
)

from .forums import require_moderator, to_moderation_response, to_queue_item

router = APIRouter(
    prefix="/forums/{forum_id}/topics",
    tags=["topics"],
    responses={403: {"model": Alert}, 404: {"model": Alert}},
)


def to_post_response(post: Post) -> PostResponse:
    """Convert a Post ORM instance to an API schema, flagging pending review."""
    response = PostResponse.model_validate(post)
    if post.is_pending:
        response.moderation_notice = messages.POST_PENDING
    return response


@router.post("/", response_model=TopicCreated, status_code=status.HTTP_201_CREATED)
async def create_topic(
    forum_id: int,
    payload: TopicCreate,
    current_user: CurrentUserDep,
    visibility: VisibilityDep,
    content: ContentDep,
) -> TopicCreated:
    """Open a topic; it is held for review unless the author is approved."""
    forum = visibility.get_forum(forum_id)
    topic = content.create_topic(current_user, forum, payload.subject, payload.text)
    return TopicCreated(
        topic=TopicResponse.model_validate(topic),
        notice=messages.TOPIC_CREATED,
        moderation_notice=messages.TOPIC_PENDING if topic.is_pending else None,
    )


@router.get("/{topic_id}", response_model=TopicDetailResponse)
async def get_topic(
    forum_id: int,
    topic_id: int,
    viewer: OptionalUserDep,
    visibility: VisibilityDep,
) -> TopicDetailResponse:
    """Show a topic and the replies the viewer may see."""
    forum = visibility.get_forum(forum_id)
    topic = visibility.get_topic(viewer, forum, topic_id)
    return TopicDetailResponse(
        topic=TopicResponse.model_validate(topic),
        posts=[to_post_response(post) for post in visibility.posts(viewer, topic)],
        moderation_notice=messages.TOPIC_PENDING if topic.is_pending else None,
        moderation_tools=visibility.can_moderate(viewer, forum),
    )


@router.post(
    "/{topic_id}/posts",
    response_model=PostCreated,
    status_code=status.HTTP_201_CREATED,
)
async def reply_to_topic(
    forum_id: int,
    topic_id: int,
    payload: PostCreate,
    current_user: CurrentUserDep,
    visibility: VisibilityDep,
    content: ContentDep,
) -> PostCreated:
    """Reply to a topic; the reply is held for review unless the author is approved."""
    forum = visibility.get_forum(forum_id)
    topic = visibility.get_topic(current_user, forum, topic_id)
    reply_to = None
    if payload.reply_to_id is not None:
        reply_to = visibility.get_post(current_user, topic, payload.reply_to_id)
    post = content.create_post(current_user, topic, payload.text, reply_to=reply_to)
    return PostCreated(
        post=to_post_response(post),
        notice=messages.REPLY_POSTED,
        moderation_notice=messages.POST_PENDING if post.is_pending else None,
    )


@router.get("/{topic_id}/moderation", response_model=ModerationQueueResponse)
async def get_topic_queue(
    forum_id: int,
    topic_id: int,
    current_user: CurrentUserDep,
    visibility: VisibilityDep,
    queue: QueueDep,
) -> ModerationQueueResponse:
    """Pending replies of a single topic, oldest first."""
    forum = visibility.get_forum(forum_id)
    require_moderator(visibility, current_user, forum)
    topic = visibility.get_topic(current_user, forum, topic_id)
    posts = queue.pending_posts(topic, limit=settings.queue_page_size)
    return ModerationQueueResponse(items=[to_queue_item(post) for post in posts])


@router.post("/{topic_id}/moderation", response_model=ModerationResponse)
async def moderate_topic(
    forum_id: int,
    topic_id: int,
    payload: ModerationRequest,
    current_user: CurrentUserDep,
    visibility: VisibilityDep,
    processor: ProcessorDep,
) -> ModerationResponse:
    """Singular moderation: apply one verdict to replies of this topic."""
    forum = visibility.get_forum(forum_id)
    require_moderator(visibility, current_user, forum)
    topic = visibility.get_topic(current_user, forum, topic_id)
    if payload.topic_ids and payload.topic_ids != [topic.id]:
        raise NotFoundError("topic", payload.topic_ids[0])

    items = [topic] if payload.topic_ids else []
    items += [visibility.get_post(current_user, topic, post_id) for post_id in payload.post_ids]
    result = processor.apply_verdict(current_user, items, payload.verdict)
    return to_moderation_response(result)
