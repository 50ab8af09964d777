"""SQLAlchemy models for forum users."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, validates

from forum_moderation.db.session import Base
from forum_moderation.db.time import utcnow
from forum_moderation.models.moderation import TrustState


class User(Base):
    """Forum account carrying its moderation trust state."""

    __tablename__ = "user_account"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    login: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    display_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    # One of TrustState; written by moderator verdicts and admin overrides only.
    trust_state: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default=TrustState.NEW.value,
    )
    is_admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    @validates("trust_state")
    def _validate_trust_state(self, _key: str, value: TrustState | str) -> str:
        return TrustState.parse(value).value

    def __repr__(self) -> str:
        return f"<User id={self.id} login={self.login!r} trust_state={self.trust_state}>"
