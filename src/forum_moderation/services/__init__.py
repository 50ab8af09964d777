"""Business logic services for forum moderation."""

from .authorization import Authorizer, GroupMembershipAuthorizer
from .content import ContentStateMachine
from .locks import KeyedLocks
from .moderation import ItemOutcome, ModerationActionProcessor, ModerationResult, OutcomeStatus
from .queue import ModerationQueue
from .trust import TrustStateStore
from .visibility import VisibilityFilter

__all__ = [
    "Authorizer",
    "GroupMembershipAuthorizer",
    "ContentStateMachine",
    "KeyedLocks",
    "ItemOutcome",
    "ModerationActionProcessor",
    "ModerationResult",
    "OutcomeStatus",
    "ModerationQueue",
    "TrustStateStore",
    "VisibilityFilter",
]
