"""Forum-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict

from .topic import TopicResponse


class ForumResponse(BaseModel):
    """Schema for forum information returned by the API."""

    id: int
    name: str
    description: str | None

    model_config = ConfigDict(from_attributes=True)


class ForumIndexResponse(BaseModel):
    """A forum with the topics visible to the current viewer."""

    forum: ForumResponse
    topics: list[TopicResponse]
    # Whether the "Moderation Tools" affordance should be rendered.
    moderation_tools: bool
