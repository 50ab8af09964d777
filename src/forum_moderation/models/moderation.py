"""State enumerations shared by users, topics and posts."""

from __future__ import annotations

from enum import Enum

from forum_moderation.core.errors import InvalidStateError


class TrustState(str, Enum):
    """Reputation of a user, governing whether new content skips the queue."""

    NEW = "new"
    APPROVED = "approved"
    SPAM = "spam"

    @classmethod
    def parse(cls, value: TrustState | str) -> TrustState:
        """Coerce ``value`` into a member, raising InvalidStateError otherwise."""
        try:
            return cls(value)
        except ValueError as err:
            raise InvalidStateError(f"Unknown trust state: {value!r}") from err


class ModerationState(str, Enum):
    """Per-item moderation state; ``approved`` and ``spam`` are terminal."""

    PENDING = "pending"
    APPROVED = "approved"
    SPAM = "spam"

    @classmethod
    def parse(cls, value: ModerationState | str) -> ModerationState:
        """Coerce ``value`` into a member, raising InvalidStateError otherwise."""
        try:
            return cls(value)
        except ValueError as err:
            raise InvalidStateError(f"Unknown moderation state: {value!r}") from err

    @property
    def is_terminal(self) -> bool:
        return self is not ModerationState.PENDING


class Verdict(str, Enum):
    """A moderator's decision on a content item."""

    APPROVE = "approve"
    SPAM = "spam"

    @property
    def moderation_state(self) -> ModerationState:
        """Content state an item moves to under this verdict."""
        if self is Verdict.APPROVE:
            return ModerationState.APPROVED
        return ModerationState.SPAM

    @property
    def trust_state(self) -> TrustState:
        """Trust state cascaded to the item's author under this verdict."""
        if self is Verdict.APPROVE:
            return TrustState.APPROVED
        return TrustState.SPAM
