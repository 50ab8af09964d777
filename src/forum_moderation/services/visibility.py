"""Read-side gating of moderated content.

Content that a viewer may not see is reported exactly like content that does
not exist, so pending or spam items never leak their existence.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TypeVar

from sqlalchemy.orm import Session

from forum_moderation.core.errors import NotFoundError
from forum_moderation.models import Forum, Post, Topic, User
from forum_moderation.models.content import ModeratedContent
from forum_moderation.services.authorization import Authorizer, GroupMembershipAuthorizer

ItemT = TypeVar("ItemT", bound=ModeratedContent)


class VisibilityFilter:
    """Decides whether a viewer (``None`` for anonymous) may see an item."""

    def __init__(self, db: Session, authorizer: Authorizer | None = None) -> None:
        self.db = db
        self.authorizer = authorizer or GroupMembershipAuthorizer(db)

    def visible(self, viewer: User | None, item: ModeratedContent) -> bool:
        # Moderators first, then the author, then everyone else.
        if self.authorizer.authorized(viewer, item.forum):  # type: ignore[attr-defined]
            return True
        if viewer is not None and viewer.id == item.user_id:
            return True
        return item.is_approved

    def filter(self, viewer: User | None, items: Iterable[ItemT]) -> list[ItemT]:
        """Keep the items ``viewer`` may see, preserving order."""
        return [item for item in items if self.visible(viewer, item)]

    def can_moderate(self, viewer: User | None, forum: Forum) -> bool:
        """Whether the moderation tools should be offered to ``viewer``."""
        return self.authorizer.authorized(viewer, forum)

    def get_forum(self, forum_id: int) -> Forum:
        forum = self.db.get(Forum, forum_id)
        if forum is None:
            raise NotFoundError("forum", forum_id)
        return forum

    def get_topic(self, viewer: User | None, forum: Forum, topic_id: int) -> Topic:
        """Return a topic of ``forum`` the viewer may see.

        Raises:
            NotFoundError: If the topic is absent, in another forum, or hidden.
        """
        topic = self.db.get(Topic, topic_id)
        if topic is None or topic.forum_id != forum.id or not self.visible(viewer, topic):
            raise NotFoundError("topic", topic_id)
        return topic

    def get_post(self, viewer: User | None, topic: Topic, post_id: int) -> Post:
        """Return a post of an already-visible topic the viewer may see.

        Raises:
            NotFoundError: If the post is absent, in another topic, or hidden.
        """
        post = self.db.get(Post, post_id)
        if post is None or post.topic_id != topic.id or not self.visible(viewer, post):
            raise NotFoundError("post", post_id)
        return post

    def topics(self, viewer: User | None, forum: Forum) -> list[Topic]:
        """Forum index: the forum's topics visible to ``viewer``, oldest first."""
        return self.filter(viewer, forum.topics)

    def posts(self, viewer: User | None, topic: Topic) -> list[Post]:
        """Topic index: the topic's replies visible to ``viewer``, oldest first."""
        return self.filter(viewer, topic.posts)
