"""Derived moderation queue.

There is no queue table: an item is queued for exactly as long as its
moderation state is pending.
"""

from __future__ import annotations

from sqlalchemy import Subquery, func, literal, select, union_all
from sqlalchemy.orm import Session

from forum_moderation.models import Forum, ModerationState, Post, Topic
from forum_moderation.models.content import ModeratedContent

# Topics sort ahead of posts created at the same instant.
TOPIC_RANK = 0
POST_RANK = 1


class ModerationQueue:
    """Read-only views over pending content."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def _pending_keys(self, forum: Forum) -> Subquery:
        pending = ModerationState.PENDING.value
        topics = select(
            literal(TOPIC_RANK).label("rank"),
            Topic.id.label("item_id"),
            Topic.created_at.label("created_at"),
        ).where(Topic.forum_id == forum.id, Topic.moderation_state == pending)
        posts = (
            select(
                literal(POST_RANK).label("rank"),
                Post.id.label("item_id"),
                Post.created_at.label("created_at"),
            )
            .join(Topic, Post.topic_id == Topic.id)
            .where(Topic.forum_id == forum.id, Post.moderation_state == pending)
        )
        return union_all(topics, posts).subquery("pending")

    def pending_items(self, forum: Forum, limit: int | None = None) -> list[ModeratedContent]:
        """Every pending topic and post in ``forum``, oldest first."""
        keys = self._pending_keys(forum)
        stmt = select(keys.c.rank, keys.c.item_id).order_by(
            keys.c.created_at, keys.c.rank, keys.c.item_id
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        rows = self.db.execute(stmt).all()

        topic_ids = [item_id for rank, item_id in rows if rank == TOPIC_RANK]
        post_ids = [item_id for rank, item_id in rows if rank == POST_RANK]
        topics = {t.id: t for t in self.db.scalars(select(Topic).where(Topic.id.in_(topic_ids)))}
        posts = {p.id: p for p in self.db.scalars(select(Post).where(Post.id.in_(post_ids)))}
        return [topics[item_id] if rank == TOPIC_RANK else posts[item_id] for rank, item_id in rows]

    def pending_posts(self, topic: Topic, limit: int | None = None) -> list[Post]:
        """Pending replies within a single topic, oldest first."""
        stmt = (
            select(Post)
            .where(
                Post.topic_id == topic.id,
                Post.moderation_state == ModerationState.PENDING.value,
            )
            .order_by(Post.created_at, Post.id)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(self.db.scalars(stmt))

    def count(self, forum: Forum) -> int:
        keys = self._pending_keys(forum)
        return self.db.scalar(select(func.count()).select_from(keys)) or 0
