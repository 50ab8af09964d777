"""Named failures raised by the moderation core.

The web layer turns each of these into a flash-style alert; nothing else
about them should reach the end user.
"""

from __future__ import annotations


class ModerationError(RuntimeError):
    """Base exception for all moderation-core failures."""


class CreationForbiddenError(ModerationError):
    """Raised when an author flagged as spam tries to create content.

    ``kind`` is ``"topic"`` or ``"post"`` so the caller can word the alert.
    """

    def __init__(self, kind: str, user_id: int | None = None) -> None:
        super().__init__(f"user {user_id} is flagged for spam and cannot create a {kind}")
        self.kind = kind
        self.user_id = user_id


class UnauthorizedError(ModerationError):
    """Raised when a user attempts an action outside their capabilities."""


class NotFoundError(ModerationError):
    """Raised for absent items and for items the viewer may not see.

    Both cases are deliberately indistinguishable.
    """

    def __init__(self, kind: str, item_id: int | None = None) -> None:
        super().__init__(f"{kind} {item_id} could not be found")
        self.kind = kind
        self.item_id = item_id


class InvalidStateError(ModerationError):
    """Raised for a state value outside its enumeration (data corruption)."""
