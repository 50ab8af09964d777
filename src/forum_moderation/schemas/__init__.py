"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .common import Alert
from .forum import ForumIndexResponse, ForumResponse
from .moderation import ModerationQueueResponse, ModerationRequest, ModerationResponse, QueueItem
from .post import PostCreate, PostCreated, PostResponse
from .topic import TopicCreate, TopicCreated, TopicDetailResponse, TopicResponse
from .user import TrustStateUpdate, UserResponse

__all__ = [
    "Alert",
    "ForumIndexResponse", "ForumResponse",
    "ModerationQueueResponse", "ModerationRequest", "ModerationResponse", "QueueItem",
    "PostCreate", "PostCreated", "PostResponse",
    "TopicCreate", "TopicCreated", "TopicDetailResponse", "TopicResponse",
    "TrustStateUpdate", "UserResponse",
]
