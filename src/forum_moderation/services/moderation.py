"""Application of moderator verdicts to content and their authors."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from forum_moderation.core.errors import InvalidStateError, UnauthorizedError
from forum_moderation.models import User, Verdict
from forum_moderation.models.content import ModeratedContent
from forum_moderation.services.authorization import Authorizer, GroupMembershipAuthorizer
from forum_moderation.services.content import ContentStateMachine
from forum_moderation.services.locks import KeyedLocks, content_locks, user_key
from forum_moderation.services.trust import TrustStateStore

logger = logging.getLogger(__name__)


class OutcomeStatus(Enum):
    """What happened to a single item of a batch."""

    CHANGED = "changed"
    UNCHANGED = "unchanged"
    FAILED = "failed"


@dataclass
class ItemOutcome:
    """Per-item record of a verdict application."""

    kind: str
    item_id: int
    status: OutcomeStatus
    trust_changed: bool = False
    error: str | None = None


@dataclass
class ModerationResult:
    """Summary of a verdict applied to a batch of items."""

    verdict: Verdict
    outcomes: list[ItemOutcome] = field(default_factory=list)

    @property
    def changed(self) -> list[ItemOutcome]:
        return [o for o in self.outcomes if o.status is OutcomeStatus.CHANGED]

    @property
    def unchanged(self) -> list[ItemOutcome]:
        return [o for o in self.outcomes if o.status is OutcomeStatus.UNCHANGED]

    @property
    def failed(self) -> list[ItemOutcome]:
        return [o for o in self.outcomes if o.status is OutcomeStatus.FAILED]

    @property
    def trust_changes(self) -> int:
        return sum(1 for o in self.outcomes if o.trust_changed)


class ModerationActionProcessor:
    """Applies approve/spam verdicts and cascades them to author trust.

    Each item is its own unit of work: a failure rolls back that item only,
    and items committed earlier in the batch stay committed.
    """

    def __init__(
        self,
        db: Session,
        authorizer: Authorizer | None = None,
        machine: ContentStateMachine | None = None,
        locks: KeyedLocks | None = None,
    ) -> None:
        self.db = db
        self.locks = locks or content_locks
        self.authorizer = authorizer or GroupMembershipAuthorizer(db)
        self.machine = machine or ContentStateMachine(db, TrustStateStore(db, self.locks), self.locks)
        self.trust_store = self.machine.trust_store

    def apply_verdict(
        self,
        moderator: User,
        items: Iterable[ModeratedContent],
        verdict: Verdict | str,
    ) -> ModerationResult:
        """Apply ``verdict`` to every item in ``items``.

        Raises:
            UnauthorizedError: If ``moderator`` cannot moderate the forum of
                any selected item. Nothing is changed in that case.
            InvalidStateError: If ``verdict`` is not a known verdict.
        """
        try:
            verdict = Verdict(verdict)
        except ValueError as err:
            raise InvalidStateError(f"Unknown verdict: {verdict!r}") from err

        # Duplicates collapse onto the first occurrence.
        batch = list(dict.fromkeys(items))
        for item in batch:
            if not self.authorizer.authorized(moderator, item.forum):  # type: ignore[attr-defined]
                logger.warning(
                    "User %s refused moderation of %s %s",
                    moderator.id, item.__tablename__, item.id,  # type: ignore[attr-defined]
                )
                raise UnauthorizedError("You are not allowed to moderate this forum.")

        result = ModerationResult(verdict=verdict)
        for item in batch:
            result.outcomes.append(self._apply_one(item, verdict))

        logger.info(
            "Moderator %s applied %s to %d item(s): %d changed, %d unchanged, %d failed",
            moderator.id,
            verdict.value,
            len(batch),
            len(result.changed),
            len(result.unchanged),
            len(result.failed),
        )
        return result

    def _apply_one(self, item: ModeratedContent, verdict: Verdict) -> ItemOutcome:
        kind = item.__tablename__  # type: ignore[attr-defined]
        item_id = item.id
        with self.locks.hold(item.lock_key):
            try:
                # Another moderator may have decided this item meanwhile.
                self.db.refresh(item, with_for_update=True)
                author = item.author  # type: ignore[attr-defined]
                with self.locks.hold(user_key(author.id)):
                    changed = self.machine.transition(item, verdict.moderation_state)
                    # The author is judged even when the item was already decided.
                    trust_changed = False
                    if self.trust_store.refresh(author) is not verdict.trust_state:
                        self.trust_store.set(author, verdict.trust_state)
                        trust_changed = True
                    self.db.commit()
            except SQLAlchemyError as exc:
                self.db.rollback()
                logger.exception("Failed to apply %s to %s %s", verdict.value, kind, item_id)
                return ItemOutcome(kind, item_id, OutcomeStatus.FAILED, error=str(exc))
            except Exception:
                self.db.rollback()
                raise

        if trust_changed:
            logger.info(
                "Trust state of user %s set to %s by %s %s",
                author.id, verdict.trust_state.value, kind, item_id,
            )
        status = OutcomeStatus.CHANGED if changed else OutcomeStatus.UNCHANGED
        return ItemOutcome(kind, item_id, status, trust_changed=trust_changed)
