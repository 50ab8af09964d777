"""Tests for topic creation, replies and the not-found policy over HTTP."""

from fastapi import status
from sqlalchemy import func, select

from forum_moderation.api.v1 import messages
from forum_moderation.models import ModerationState, Post, Topic


def _topics_url(forum) -> str:
    return f"/api/v1/forums/{forum.id}/topics/"


def test_new_user_has_first_topic_moderated(client, forum, new_user, auth_headers) -> None:
    response = client.post(
        _topics_url(forum),
        json={"subject": "FIRST TOPIC", "text": "User's first words"},
        headers=auth_headers(new_user),
    )

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["notice"] == "This topic has been created."
    assert data["moderation_notice"] == (
        "This topic is currently pending review. "
        "Only the user who created it and moderators can view it."
    )
    assert data["topic"]["moderation_state"] == "pending"


def test_pending_topic_hidden_from_third_parties(
    client, forum, new_user, other_user, auth_headers
) -> None:
    created = client.post(
        _topics_url(forum),
        json={"subject": "FIRST TOPIC", "text": "User's first words"},
        headers=auth_headers(new_user),
    ).json()
    topic_id = created["topic"]["id"]

    index = client.get(f"/api/v1/forums/{forum.id}", headers=auth_headers(other_user))
    assert index.status_code == status.HTTP_200_OK
    assert "FIRST TOPIC" not in [t["subject"] for t in index.json()["topics"]]

    for headers in (auth_headers(other_user), {}):
        response = client.get(f"/api/v1/forums/{forum.id}/topics/{topic_id}", headers=headers)
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"alert": "The topic you are looking for could not be found."}

    own = client.get(f"/api/v1/forums/{forum.id}/topics/{topic_id}", headers=auth_headers(new_user))
    assert own.status_code == status.HTTP_200_OK
    assert own.json()["moderation_notice"] == messages.TOPIC_PENDING


def test_hidden_and_missing_topics_look_identical(client, forum, make_topic, new_user) -> None:
    hidden = make_topic(forum, new_user, "In review")

    hidden_response = client.get(f"/api/v1/forums/{forum.id}/topics/{hidden.id}")
    missing_response = client.get(f"/api/v1/forums/{forum.id}/topics/{hidden.id + 1000}")

    assert hidden_response.status_code == missing_response.status_code == status.HTTP_404_NOT_FOUND
    assert hidden_response.json() == missing_response.json()


def test_new_user_has_first_post_moderated(client, forum, approved_topic, new_user, auth_headers) -> None:
    response = client.post(
        f"/api/v1/forums/{forum.id}/topics/{approved_topic.id}/posts",
        json={"text": "I am replying to a topic."},
        headers=auth_headers(new_user),
    )

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["notice"] == "Your reply has been posted."
    assert data["moderation_notice"] == (
        "This post is currently pending review. "
        "Only the user who posted it and moderators can view it."
    )
    assert data["post"]["moderation_state"] == "pending"


def test_unapproved_posts_by_others_are_hidden(
    client, forum, approved_topic, make_post, make_user, new_user, auth_headers
) -> None:
    spammer = make_user("someone-new")
    make_post(approved_topic, spammer, "BUY VIAGRA")

    response = client.get(
        f"/api/v1/forums/{forum.id}/topics/{approved_topic.id}",
        headers=auth_headers(new_user),
    )

    assert response.status_code == status.HTTP_200_OK
    assert "BUY VIAGRA" not in [p["text"] for p in response.json()["posts"]]


def test_author_sees_own_pending_post_with_notice(
    client, forum, approved_topic, make_post, new_user, auth_headers
) -> None:
    make_post(approved_topic, new_user, "Mine")

    response = client.get(
        f"/api/v1/forums/{forum.id}/topics/{approved_topic.id}",
        headers=auth_headers(new_user),
    )

    posts = response.json()["posts"]
    assert [p["text"] for p in posts] == ["Mine"]
    assert posts[0]["moderation_notice"] == messages.POST_PENDING


def test_approved_user_topics_bypass_queue(client, forum, approved_user, auth_headers) -> None:
    response = client.post(
        _topics_url(forum),
        json={"subject": "SECOND TOPIC", "text": "User's second words"},
        headers=auth_headers(approved_user),
    )

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["notice"] == messages.TOPIC_CREATED
    assert data["moderation_notice"] is None
    assert data["topic"]["moderation_state"] == "approved"


def test_approved_user_posts_bypass_queue(client, forum, approved_topic, approved_user, auth_headers) -> None:
    response = client.post(
        f"/api/v1/forums/{forum.id}/topics/{approved_topic.id}/posts",
        json={"text": "Freedom!!"},
        headers=auth_headers(approved_user),
    )

    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["notice"] == messages.REPLY_POSTED
    assert response.json()["moderation_notice"] is None


def test_spam_user_cannot_start_a_topic(client, db_session, forum, spam_user, auth_headers) -> None:
    response = client.post(
        _topics_url(forum),
        json={"subject": "Deals", "text": "Cheap"},
        headers=auth_headers(spam_user),
    )

    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json() == {
        "alert": "Your account has been flagged for spam. You cannot create a new topic at this time."
    }
    assert db_session.scalar(select(func.count()).select_from(Topic)) == 0


def test_spam_user_cannot_reply(client, db_session, forum, approved_topic, spam_user, auth_headers) -> None:
    response = client.post(
        f"/api/v1/forums/{forum.id}/topics/{approved_topic.id}/posts",
        json={"text": "Deals"},
        headers=auth_headers(spam_user),
    )

    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json() == {
        "alert": "Your account has been flagged for spam. You cannot create a new post at this time."
    }
    assert db_session.scalar(select(func.count()).select_from(Post)) == 0


def test_cannot_reply_to_hidden_topic(client, forum, make_topic, new_user, other_user, auth_headers) -> None:
    hidden = make_topic(forum, new_user, "In review")

    response = client.post(
        f"/api/v1/forums/{forum.id}/topics/{hidden.id}/posts",
        json={"text": "Found you"},
        headers=auth_headers(other_user),
    )

    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_reply_quoting_hidden_post_is_not_found(
    client, forum, approved_topic, make_post, new_user, other_user, auth_headers
) -> None:
    hidden = make_post(approved_topic, new_user, "Pending", ModerationState.PENDING)

    response = client.post(
        f"/api/v1/forums/{forum.id}/topics/{approved_topic.id}/posts",
        json={"text": "Quoting", "reply_to_id": hidden.id},
        headers=auth_headers(other_user),
    )

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"alert": "The post you are looking for could not be found."}


def test_anonymous_cannot_create_topics(client, forum) -> None:
    response = client.post(_topics_url(forum), json={"subject": "Hi", "text": "there"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_invalid_token_is_rejected(client, forum) -> None:
    response = client.get(
        f"/api/v1/forums/{forum.id}",
        headers={"Authorization": "Bearer not-a-token"},
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
