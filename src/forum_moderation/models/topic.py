"""SQLAlchemy model for forum topics."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from forum_moderation.db.session import Base
from forum_moderation.models.content import ModeratedContent

if TYPE_CHECKING:
    from forum_moderation.models.forum import Forum
    from forum_moderation.models.post import Post
    from forum_moderation.models.user import User


class Topic(ModeratedContent, Base):
    """A thread opened in a forum; moderated on its own like any post."""

    __tablename__ = "topic"

    forum_id: Mapped[int] = mapped_column(ForeignKey("forum.id", ondelete="CASCADE"), nullable=False)
    subject: Mapped[str] = mapped_column(String(255), nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)

    forum: Mapped[Forum] = relationship("Forum", back_populates="topics")
    author: Mapped[User] = relationship("User")
    posts: Mapped[list[Post]] = relationship(
        "Post",
        back_populates="topic",
        order_by="Post.created_at",
        cascade="all, delete-orphan",
    )

    @property
    def text(self) -> str:
        return self.body
