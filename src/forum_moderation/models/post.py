"""SQLAlchemy model for replies within a topic."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from forum_moderation.db.session import Base
from forum_moderation.models.content import ModeratedContent

if TYPE_CHECKING:
    from forum_moderation.models.forum import Forum
    from forum_moderation.models.topic import Topic
    from forum_moderation.models.user import User


class Post(ModeratedContent, Base):
    """A reply posted to a topic."""

    __tablename__ = "post"

    topic_id: Mapped[int] = mapped_column(ForeignKey("topic.id", ondelete="CASCADE"), nullable=False)
    # Optional parent reply for quoting; always within the same topic.
    reply_to_id: Mapped[int | None] = mapped_column(ForeignKey("post.id"), nullable=True)
    text: Mapped[str] = mapped_column(Text, nullable=False)

    topic: Mapped[Topic] = relationship("Topic", back_populates="posts")
    author: Mapped[User] = relationship("User")
    reply_to: Mapped[Post | None] = relationship("Post", remote_side="Post.id")

    @property
    def forum(self) -> Forum:
        return self.topic.forum
