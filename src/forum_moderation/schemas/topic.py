"""Topic-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .post import PostResponse


class TopicCreate(BaseModel):
    """Schema for opening a new topic."""

    subject: str = Field(..., min_length=1, max_length=255)
    text: str = Field(..., min_length=1, max_length=20000)


class TopicResponse(BaseModel):
    """Schema for topic information returned by the API."""

    id: int
    forum_id: int
    user_id: int
    subject: str
    body: str
    moderation_state: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TopicCreated(BaseModel):
    """Result of opening a topic, with the flash messages to show."""

    topic: TopicResponse
    notice: str
    moderation_notice: str | None = None


class TopicDetailResponse(BaseModel):
    """A topic with the replies visible to the current viewer."""

    topic: TopicResponse
    posts: list[PostResponse]
    moderation_notice: str | None = None
    moderation_tools: bool
