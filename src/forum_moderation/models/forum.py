"""SQLAlchemy models for forums and their moderator groups."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from forum_moderation.db.session import Base
from forum_moderation.db.time import utcnow

if TYPE_CHECKING:
    from forum_moderation.models.topic import Topic
    from forum_moderation.models.user import User

# Join table: which users belong to which group.
group_member = Table(
    "group_member",
    Base.metadata,
    Column("group_id", ForeignKey("user_group.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", ForeignKey("user_account.id", ondelete="CASCADE"), primary_key=True),
)

# Join table: which groups moderate which forum.
forum_moderator = Table(
    "forum_moderator",
    Base.metadata,
    Column("forum_id", ForeignKey("forum.id", ondelete="CASCADE"), primary_key=True),
    Column("group_id", ForeignKey("user_group.id", ondelete="CASCADE"), primary_key=True),
)


class Group(Base):
    """Named collection of users; moderation rights are granted per group."""

    __tablename__ = "user_group"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)

    members: Mapped[list[User]] = relationship("User", secondary=group_member)


class Forum(Base):
    """Top-level container of topics."""

    __tablename__ = "forum"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    moderator_groups: Mapped[list[Group]] = relationship("Group", secondary=forum_moderator)
    topics: Mapped[list[Topic]] = relationship(
        "Topic",
        back_populates="forum",
        order_by="Topic.created_at",
    )
