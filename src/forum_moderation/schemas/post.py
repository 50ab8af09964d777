"""Post-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class PostCreate(BaseModel):
    """Schema for replying to a topic."""

    text: str = Field(..., min_length=1, max_length=20000)
    reply_to_id: int | None = Field(None, description="Post being quoted, if any")


class PostResponse(BaseModel):
    """Schema for post information returned by the API."""

    id: int
    topic_id: int
    user_id: int
    reply_to_id: int | None
    text: str
    moderation_state: str
    created_at: datetime
    moderation_notice: str | None = None

    model_config = ConfigDict(from_attributes=True)


class PostCreated(BaseModel):
    """Result of posting a reply, with the flash messages to show."""

    post: PostResponse
    notice: str
    moderation_notice: str | None = None
