"""End-to-end tests for the comment API."""

import asyncio
from uuid import uuid4

import pytest
from dishka.integrations.fastapi import FastapiProvider
from fastapi.testclient import TestClient

from tutor.config import Settings
from tutor.domain.service import JWTService
from tutor.interface.api.app import create_app
from tutor.persistence.repository.inmemory import (
    InMemoryActorRepository,
    InMemoryExerciseRepository,
    InMemoryTransaction,
)
from tutor.util.di.container import setup_di
from tests.conftest import make_actor, make_exercise, make_moderator
from tests.di import build_test_container


class Platform:
    """Seeds the in-memory collaborators behind the API and issues tokens."""

    def __init__(self, container):
        self.exercises = asyncio.run(container.get(InMemoryExerciseRepository))
        self.actors = asyncio.run(container.get(InMemoryActorRepository))
        self.transaction = asyncio.run(container.get(InMemoryTransaction))
        self.jwt_service = JWTService(Settings().auth)

    def exercise(self, **kwargs):
        return self.exercises.add(make_exercise(**kwargs))

    def login(self, actor):
        self.actors.add(actor)
        return {"auth_token": self.jwt_service.create_token(str(actor.id), actor.username)}


@pytest.fixture
def container():
    return build_test_container(set(), FastapiProvider())


@pytest.fixture
def platform(container):
    return Platform(container)


@pytest.fixture
def client(container):
    """Create test client with test container."""
    app_instance = create_app()
    setup_di(app_instance, container)
    return TestClient(app_instance)


def _post_comment(client, exercise_id, cookies, content="What is a numerator?", **extra):
    return client.post(
        f"/exercises/{exercise_id}/comments",
        json={"content": content, **extra},
        cookies=cookies,
    )


class TestCreateComment:
    def test_requires_authentication(self, client, platform):
        exercise = platform.exercise()

        response = _post_comment(client, exercise.id, cookies=None)

        assert response.status_code == 401

    def test_invalid_token_is_unauthenticated(self, client, platform):
        exercise = platform.exercise()

        response = _post_comment(client, exercise.id, cookies={"auth_token": "bogus"})

        assert response.status_code == 401

    def test_token_without_user_id_subject_is_unauthenticated(self, client, platform):
        exercise = platform.exercise()
        token = platform.jwt_service.create_token("not-a-uuid", "ada")

        response = _post_comment(client, exercise.id, cookies={"auth_token": token})

        assert response.status_code == 401

    def test_unknown_exercise(self, client, platform):
        cookies = platform.login(make_actor("ada"))

        response = _post_comment(client, uuid4(), cookies)

        assert response.status_code == 404
        assert response.json()["error"] == "ExerciseNotFoundError"

    def test_create_and_list(self, client, platform):
        # Arrange
        exercise = platform.exercise(title="Number lines")
        cookies = platform.login(make_actor("ada"))

        # Act
        created = _post_comment(client, exercise.id, cookies, session_id="s-1")
        listed = client.get(f"/exercises/{exercise.id}/comments")

        # Assert
        assert created.status_code == 201
        comment = created.json()["comment"]
        assert comment["author_username"] == "ada"
        assert comment["exercise_title"] == "Number lines"
        assert comment["status"] == "VISIBLE"
        assert listed.status_code == 200
        assert [c["comment_id"] for c in listed.json()["comments"]] == [
            comment["comment_id"]
        ]

    def test_blank_content_is_bad_request(self, client, platform):
        exercise = platform.exercise()
        cookies = platform.login(make_actor("ada"))

        response = _post_comment(client, exercise.id, cookies, content="   ")

        assert response.status_code == 400

    def test_closed_exercise_is_unprocessable(self, client, platform):
        exercise = platform.exercise(commentable=False)
        cookies = platform.login(make_actor("ada"))

        response = _post_comment(client, exercise.id, cookies)

        assert response.status_code == 422
        assert response.json()["error"] == "ExerciseNotCommentableError"

    def test_second_comment_is_rate_limited(self, client, platform):
        exercise = platform.exercise()
        cookies = platform.login(make_actor("ada"))
        assert _post_comment(client, exercise.id, cookies).status_code == 201

        response = _post_comment(client, exercise.id, cookies, content="Again")

        assert response.status_code == 429
        assert response.headers["Retry-After"] == "5"


class TestCommentLifecycle:
    def _create(self, client, platform):
        exercise = platform.exercise()
        author_cookies = platform.login(make_actor("ada"))
        response = _post_comment(client, exercise.id, author_cookies)
        return exercise, author_cookies, response.json()["comment"]["comment_id"]

    def test_flag_twice_conflicts(self, client, platform):
        _, _, comment_id = self._create(client, platform)
        flagger = platform.login(make_actor("bob"))

        first = client.post(
            f"/comments/{comment_id}/flags", json={"reason": "rude"}, cookies=flagger
        )
        second = client.post(f"/comments/{comment_id}/flags", cookies=flagger)

        assert first.status_code == 200
        assert first.json()["flags_count"] == 1
        assert second.status_code == 409
        assert platform.transaction.rollbacks == 1

    def test_author_cannot_flag_own_comment(self, client, platform):
        _, author_cookies, comment_id = self._create(client, platform)

        response = client.post(f"/comments/{comment_id}/flags", cookies=author_cookies)

        assert response.status_code == 409
        assert response.json()["error"] == "SelfFlagError"

    def test_other_user_cannot_edit(self, client, platform):
        _, _, comment_id = self._create(client, platform)
        other = platform.login(make_actor("bob"))

        response = client.put(
            f"/comments/{comment_id}", json={"content": "mine now"}, cookies=other
        )

        assert response.status_code == 403

    def test_author_edits_and_patches(self, client, platform):
        _, author_cookies, comment_id = self._create(client, platform)

        edited = client.put(
            f"/comments/{comment_id}", json={"content": "Fixed typo"}, cookies=author_cookies
        )
        patched = client.patch(f"/comments/{comment_id}", json={}, cookies=author_cookies)

        assert edited.status_code == 200
        assert edited.json()["comment"]["content"] == "Fixed typo"
        assert patched.json()["comment"]["content"] == "Fixed typo"

    def test_moderation_flow(self, client, platform):
        # Arrange
        _, author_cookies, comment_id = self._create(client, platform)
        moderator = platform.login(make_moderator())

        # Act
        forbidden = client.post(
            f"/comments/{comment_id}/moderation",
            json={"action": "HIDE"},
            cookies=author_cookies,
        )
        forbidden_unknown = client.post(
            f"/comments/{comment_id}/moderation",
            json={"action": "PURGE"},
            cookies=author_cookies,
        )
        hidden = client.post(
            f"/comments/{comment_id}/moderation",
            json={"action": "hide", "reason": "off-topic"},
            cookies=moderator,
        )
        bad_restore = client.post(
            f"/comments/{comment_id}/moderation",
            json={"action": "RESTORE"},
            cookies=moderator,
        )
        unknown = client.post(
            f"/comments/{comment_id}/moderation",
            json={"action": "PURGE"},
            cookies=moderator,
        )
        fetched = client.get(f"/comments/{comment_id}")

        # Assert
        assert forbidden.status_code == 403
        assert forbidden_unknown.status_code == 403
        assert hidden.status_code == 200
        assert hidden.json()["action"] == "HIDE"
        assert bad_restore.status_code == 422
        assert unknown.status_code == 422
        assert fetched.json()["comment"]["status"] == "HIDDEN"

    def test_soft_then_hard_delete(self, client, platform):
        _, author_cookies, comment_id = self._create(client, platform)
        moderator = platform.login(make_moderator())

        author_hard = client.delete(
            f"/comments/{comment_id}", params={"hard": True}, cookies=author_cookies
        )
        soft = client.delete(f"/comments/{comment_id}", cookies=author_cookies)
        hard = client.delete(
            f"/comments/{comment_id}", params={"hard": True}, cookies=moderator
        )
        gone = client.get(f"/comments/{comment_id}")

        assert author_hard.status_code == 403
        assert soft.status_code == 200
        assert soft.json()["comment"]["status"] == "DELETED"
        assert hard.status_code == 200
        assert hard.json()["comment"] is None
        assert gone.status_code == 404


class TestSearch:
    def test_combined_filters_are_rejected(self, client):
        response = client.get("/comments", params={"q": "ratio", "min_flags": 1})

        assert response.status_code == 400

    def test_text_search(self, client, platform):
        exercise = platform.exercise()
        cookies = platform.login(make_actor("ada"))
        _post_comment(client, exercise.id, cookies, content="Mixed NUMBERS please")

        response = client.get("/comments", params={"q": "numbers"})

        assert response.status_code == 200
        assert response.json()["total"] == 1

    def test_search_by_author_username(self, client, platform):
        exercise = platform.exercise()
        cookies = platform.login(make_actor("grace_hopper"))
        _post_comment(client, exercise.id, cookies, content="Why is 0! equal to 1?")

        response = client.get("/comments", params={"q": "HOPPER"})

        assert response.status_code == 200
        assert response.json()["total"] == 1


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
