# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from datetime import datetime

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from forum_moderation.core.security import create_access_token  # noqa: E402
from forum_moderation.db.session import Base  # noqa: E402
from forum_moderation.db.session import get_db as app_get_session  # noqa: E402
from forum_moderation.main import app as fastapi_app  # noqa: E402
from forum_moderation.models import (  # noqa: E402
    Forum,
    Group,
    ModerationState,
    Post,
    Topic,
    TrustState,
    User,
)

TEST_DB_URL = "sqlite://"


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()

        # Ensure each test sees a clean database even though services commit.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def auth_headers() -> Callable[[User], dict[str, str]]:
    """Return a helper building bearer authorization headers for a user."""

    def _auth_headers(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user.id)}"}

    return _auth_headers


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Factory persisting a user in the given trust state."""

    def _make_user(
        login: str,
        trust_state: TrustState = TrustState.NEW,
        is_admin: bool = False,
    ) -> User:
        user = User(login=login, display_name=login.title(), trust_state=trust_state, is_admin=is_admin)
        db_session.add(user)
        db_session.commit()
        return user

    return _make_user


@pytest.fixture()
def new_user(make_user: Callable[..., User]) -> User:
    return make_user("newbie")


@pytest.fixture()
def other_user(make_user: Callable[..., User]) -> User:
    return make_user("bystander", TrustState.APPROVED)


@pytest.fixture()
def approved_user(make_user: Callable[..., User]) -> User:
    return make_user("regular", TrustState.APPROVED)


@pytest.fixture()
def spam_user(make_user: Callable[..., User]) -> User:
    return make_user("spammer", TrustState.SPAM)


@pytest.fixture()
def admin_user(make_user: Callable[..., User]) -> User:
    return make_user("admin", TrustState.APPROVED, is_admin=True)


@pytest.fixture()
def forum(db_session: Session) -> Forum:
    forum = Forum(name="General Discussion", description="Anything goes")
    db_session.add(forum)
    db_session.commit()
    return forum


@pytest.fixture()
def other_forum(db_session: Session) -> Forum:
    forum = Forum(name="Off Topic", description=None)
    db_session.add(forum)
    db_session.commit()
    return forum


@pytest.fixture()
def moderator(db_session: Session, make_user: Callable[..., User], forum: Forum) -> User:
    """A user whose group moderates ``forum`` (and only ``forum``)."""
    user = make_user("moderator", TrustState.APPROVED)
    group = Group(name="Moderators")
    group.members.append(user)
    forum.moderator_groups.append(group)
    db_session.add(group)
    db_session.commit()
    return user


@pytest.fixture()
def make_topic(db_session: Session) -> Callable[..., Topic]:
    """Factory persisting a topic directly in the given moderation state."""

    def _make_topic(
        forum: Forum,
        author: User,
        subject: str = "A topic",
        state: ModerationState = ModerationState.PENDING,
        created_at: datetime | None = None,
    ) -> Topic:
        topic = Topic(
            forum=forum,
            author=author,
            subject=subject,
            body=f"Body of {subject}",
            moderation_state=state,
        )
        if created_at is not None:
            topic.created_at = created_at
        db_session.add(topic)
        db_session.commit()
        return topic

    return _make_topic


@pytest.fixture()
def make_post(db_session: Session) -> Callable[..., Post]:
    """Factory persisting a reply directly in the given moderation state."""

    def _make_post(
        topic: Topic,
        author: User,
        text: str = "A reply",
        state: ModerationState = ModerationState.PENDING,
        created_at: datetime | None = None,
    ) -> Post:
        post = Post(topic=topic, author=author, text=text, moderation_state=state)
        if created_at is not None:
            post.created_at = created_at
        db_session.add(post)
        db_session.commit()
        return post

    return _make_post


@pytest.fixture()
def approved_topic(make_topic: Callable[..., Topic], forum: Forum, other_user: User) -> Topic:
    return make_topic(forum, other_user, "Welcome", ModerationState.APPROVED)
