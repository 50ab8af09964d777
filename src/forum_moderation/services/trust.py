"""Storage of per-user trust states."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from forum_moderation.core.errors import UnauthorizedError
from forum_moderation.models import TrustState, User
from forum_moderation.services.locks import KeyedLocks, content_locks, user_key

logger = logging.getLogger(__name__)


class TrustStateStore:
    """Reads and writes ``User.trust_state``.

    ``set`` only mutates the session; callers own the commit so the write can
    share a unit of work with the content change that caused it.
    """

    def __init__(self, db: Session, locks: KeyedLocks | None = None) -> None:
        self.db = db
        self.locks = locks or content_locks

    def get(self, user: User) -> TrustState:
        """Return the user's current trust state.

        Raises:
            InvalidStateError: If the stored value is not a known state.
        """
        return TrustState.parse(user.trust_state)

    def set(self, user: User, state: TrustState | str) -> None:
        """Overwrite the user's trust state unconditionally.

        Raises:
            InvalidStateError: If ``state`` is not a known trust state.
        """
        user.trust_state = TrustState.parse(state).value

    def refresh(self, user: User) -> TrustState:
        """Reload the user's row (locking it where supported) and return its state."""
        self.db.flush()
        self.db.refresh(user, with_for_update=True)
        return self.get(user)

    def override(self, admin: User, user: User, state: TrustState | str) -> TrustState:
        """Administrative override of a user's trust state, committed immediately.

        Raises:
            UnauthorizedError: If ``admin`` is not an administrator.
            InvalidStateError: If ``state`` is not a known trust state.
        """
        if not admin.is_admin:
            raise UnauthorizedError("Only administrators can change trust states")
        target = TrustState.parse(state)
        with self.locks.hold(user_key(user.id)):
            previous = self.refresh(user)
            self.set(user, target)
            self.db.commit()
        logger.info(
            "Trust state of user %s overridden by admin %s: %s -> %s",
            user.id, admin.id, previous.value, target.value,
        )
        return target
