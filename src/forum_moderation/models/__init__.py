"""SQLAlchemy models for the forum moderation application."""

from .forum import Forum, Group, forum_moderator, group_member
from .moderation import ModerationState, TrustState, Verdict
from .post import Post
from .topic import Topic
from .user import User

__all__ = [
    "Forum", "Group", "forum_moderator", "group_member",
    "ModerationState", "TrustState", "Verdict",
    "Post",
    "Topic",
    "User",
]
