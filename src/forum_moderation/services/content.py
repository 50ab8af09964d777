"""Creation and state transitions of moderated topics and posts."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from forum_moderation.core.errors import CreationForbiddenError, InvalidStateError
from forum_moderation.models import Forum, ModerationState, Post, Topic, TrustState, User
from forum_moderation.models.content import ModeratedContent
from forum_moderation.services.locks import KeyedLocks, content_locks, user_key
from forum_moderation.services.trust import TrustStateStore

logger = logging.getLogger(__name__)


class ContentStateMachine:
    """Owns the initial moderation state of new content and its transitions."""

    def __init__(
        self,
        db: Session,
        trust_store: TrustStateStore | None = None,
        locks: KeyedLocks | None = None,
    ) -> None:
        self.db = db
        self.locks = locks or content_locks
        self.trust_store = trust_store or TrustStateStore(db, self.locks)

    def initial_state(self, author: User, kind: str = "topic") -> ModerationState:
        """Return the state new content by ``author`` starts in.

        Raises:
            CreationForbiddenError: If the author is flagged as spam.
        """
        trust = self.trust_store.get(author)
        if trust is TrustState.SPAM:
            raise CreationForbiddenError(kind, author.id)
        if trust is TrustState.APPROVED:
            return ModerationState.APPROVED
        return ModerationState.PENDING

    def create_topic(self, author: User, forum: Forum, subject: str, body: str) -> Topic:
        """Persist a new topic in the state dictated by the author's trust."""
        with self.locks.hold(user_key(author.id)):
            state = self._checked_initial_state(author, "topic")
            topic = Topic(
                forum=forum,
                author=author,
                subject=subject,
                body=body,
                moderation_state=state,
            )
            self.db.add(topic)
            self.db.commit()
        self.db.refresh(topic)
        logger.info("Topic %s created by user %s as %s", topic.id, author.id, state.value)
        return topic

    def create_post(
        self,
        author: User,
        topic: Topic,
        text: str,
        reply_to: Post | None = None,
    ) -> Post:
        """Persist a reply to ``topic`` in the state dictated by the author's trust."""
        if reply_to is not None and reply_to.topic_id != topic.id:
            raise ValueError("A reply must quote a post from the same topic")
        with self.locks.hold(user_key(author.id)):
            state = self._checked_initial_state(author, "post")
            post = Post(
                topic=topic,
                author=author,
                text=text,
                reply_to=reply_to,
                moderation_state=state,
            )
            self.db.add(post)
            self.db.commit()
        self.db.refresh(post)
        logger.info("Post %s created by user %s as %s", post.id, author.id, state.value)
        return post

    def transition(self, item: ModeratedContent, target: ModerationState | str) -> bool:
        """Move a pending item to a terminal state.

        Returns:
            True if the item changed; False if it was already terminal.

        Raises:
            InvalidStateError: If ``target`` is not a terminal state.
        """
        target = ModerationState.parse(target)
        if not target.is_terminal:
            raise InvalidStateError("Content cannot be moved back to pending")
        if item.state.is_terminal:
            return False
        item.moderation_state = target.value
        return True

    def _checked_initial_state(self, author: User, kind: str) -> ModerationState:
        # Re-read under the author's lock so a demotion committed a moment ago is seen.
        self.trust_store.refresh(author)
        try:
            return self.initial_state(author, kind)
        except CreationForbiddenError:
            logger.info("Refused %s creation by spam-flagged user %s", kind, author.id)
            raise
