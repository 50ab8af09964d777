"""Capability checks deciding who may moderate a forum."""

from __future__ import annotations

from typing import Protocol

from sqlalchemy import exists, select
from sqlalchemy.orm import Session

from forum_moderation.models import Forum, User, forum_moderator, group_member


class Authorizer(Protocol):
    """Answers whether ``user`` holds moderation capability for ``forum``."""

    def authorized(self, user: User | None, forum: Forum) -> bool:
        ...


class GroupMembershipAuthorizer:
    """Grants moderation rights to members of a forum's moderator groups."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self._cache: dict[tuple[int, int], bool] = {}

    def authorized(self, user: User | None, forum: Forum) -> bool:
        if user is None:
            return False
        key = (user.id, forum.id)
        if key not in self._cache:
            stmt = select(
                exists()
                .where(forum_moderator.c.forum_id == forum.id)
                .where(forum_moderator.c.group_id == group_member.c.group_id)
                .where(group_member.c.user_id == user.id)
            )
            self._cache[key] = bool(self.db.scalar(stmt))
        return self._cache[key]
