"""Moderation-related Pydantic schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, model_validator

from forum_moderation.models import Verdict


class QueueItem(BaseModel):
    """A pending item as listed in the moderation queue."""

    kind: Literal["topic", "post"]
    id: int
    forum_id: int
    topic_id: int
    user_id: int
    text: str
    created_at: datetime


class ModerationQueueResponse(BaseModel):
    """Pending items of a forum or topic, oldest first."""

    items: list[QueueItem]


class ModerationRequest(BaseModel):
    """Verdict to apply to the selected topics and posts."""

    verdict: Verdict
    topic_ids: list[int] = Field(default_factory=list)
    post_ids: list[int] = Field(default_factory=list)

    @model_validator(mode="after")
    def _require_selection(self) -> "ModerationRequest":
        if not self.topic_ids and not self.post_ids:
            raise ValueError("Select at least one topic or post to moderate")
        return self


class ModerationResponse(BaseModel):
    """Aggregate outcome of a moderation request."""

    notice: str
    changed: int
    unchanged: int
    failed: int
