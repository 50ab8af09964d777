"""Columns and helpers shared by every moderated content item."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, declared_attr, mapped_column, validates

from forum_moderation.db.time import utcnow
from forum_moderation.models.moderation import ModerationState


class ModeratedContent:
    """Mixin giving topics and posts a uniform moderation surface."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Queue ordering key; ties fall back to id.
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
        index=True,
    )
    moderation_state: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default=ModerationState.PENDING.value,
        index=True,
    )

    @declared_attr
    def user_id(cls) -> Mapped[int]:
        return mapped_column(ForeignKey("user_account.id"), nullable=False)

    @validates("moderation_state")
    def _validate_moderation_state(self, _key: str, value: ModerationState | str) -> str:
        return ModerationState.parse(value).value

    @property
    def state(self) -> ModerationState:
        return ModerationState.parse(self.moderation_state)

    @property
    def is_pending(self) -> bool:
        return self.state is ModerationState.PENDING

    @property
    def is_approved(self) -> bool:
        return self.state is ModerationState.APPROVED

    @property
    def is_spam(self) -> bool:
        return self.state is ModerationState.SPAM

    @property
    def lock_key(self) -> tuple[str, int]:
        """Key used to serialize state changes to this item."""
        return (self.__tablename__, self.id)  # type: ignore[attr-defined]
