"""Tests for the derived moderation queue."""

from datetime import UTC, datetime, timedelta

from sqlalchemy import event

from forum_moderation.models import ModerationState
from forum_moderation.services import ModerationQueue

T0 = datetime(2024, 1, 1, 12, 0, tzinfo=UTC)


def test_forum_queue_lists_pending_topics_and_posts_oldest_first(
    db_session, forum, approved_topic, make_topic, make_post, new_user, other_user
) -> None:
    late_topic = make_topic(forum, new_user, "Late", created_at=T0 + timedelta(minutes=5))
    early_post = make_post(approved_topic, new_user, "Early", created_at=T0)
    make_post(approved_topic, other_user, "Fine", ModerationState.APPROVED, created_at=T0)
    mid_post = make_post(approved_topic, new_user, "Mid", created_at=T0 + timedelta(minutes=1))

    items = ModerationQueue(db_session).pending_items(forum)

    assert items == [early_post, mid_post, late_topic]


def test_forum_queue_is_scoped_to_forum(
    db_session, forum, other_forum, make_topic, new_user
) -> None:
    mine = make_topic(forum, new_user, "Mine")
    make_topic(other_forum, new_user, "Theirs")

    assert ModerationQueue(db_session).pending_items(forum) == [mine]


def test_queue_drops_items_once_decided(db_session, forum, approved_topic, make_post, new_user) -> None:
    post = make_post(approved_topic, new_user)
    queue = ModerationQueue(db_session)
    assert queue.count(forum) == 1

    post.moderation_state = ModerationState.SPAM
    db_session.commit()

    assert queue.pending_items(forum) == []
    assert queue.count(forum) == 0


def test_topic_queue_lists_only_that_topics_posts(
    db_session, forum, approved_topic, make_topic, make_post, new_user, other_user
) -> None:
    elsewhere = make_topic(forum, other_user, "Elsewhere", ModerationState.APPROVED)
    second = make_post(approved_topic, new_user, "Second", created_at=T0 + timedelta(seconds=2))
    first = make_post(approved_topic, new_user, "First", created_at=T0)
    make_post(elsewhere, new_user, "Other topic")

    assert ModerationQueue(db_session).pending_posts(approved_topic) == [first, second]


def test_queue_limit(db_session, forum, make_topic, new_user) -> None:
    first = make_topic(forum, new_user, "One", created_at=T0)
    make_topic(forum, new_user, "Two", created_at=T0 + timedelta(seconds=1))

    assert ModerationQueue(db_session).pending_items(forum, limit=1) == [first]


def test_topics_precede_posts_created_at_the_same_instant(
    db_session, forum, approved_topic, make_topic, make_post, new_user
) -> None:
    post = make_post(approved_topic, new_user, "Same time", created_at=T0)
    topic = make_topic(forum, new_user, "Same time", created_at=T0)

    assert ModerationQueue(db_session).pending_items(forum) == [topic, post]


def test_queue_limit_is_applied_by_the_database(
    db_session, engine, forum, approved_topic, make_topic, make_post, new_user
) -> None:
    make_post(approved_topic, new_user, "Oldest", created_at=T0)
    make_topic(forum, new_user, "Newer", created_at=T0 + timedelta(seconds=1))
    statements: list[str] = []

    def record(conn, cursor, statement, parameters, context, executemany):
        statements.append(statement)

    event.listen(engine, "before_cursor_execute", record)
    try:
        items = ModerationQueue(db_session).pending_items(forum, limit=1)
    finally:
        event.remove(engine, "before_cursor_execute", record)

    assert [item.text for item in items] == ["Oldest"]
    assert any("UNION ALL" in s and "LIMIT" in s for s in statements)
    assert ModerationQueue(db_session).count(forum) == 2
