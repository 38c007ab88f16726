"""Unit tests for domain error to HTTP translation."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from tutor.domain.error import (
    CommentNotFoundError,
    DomainError,
    DuplicateFlagError,
    ExerciseNotPublishedError,
    InvalidModerationActionError,
    NotAuthorizedError,
    RateLimitExceededError,
    SelfFlagError,
    ValidationError,
)
from tutor.interface.error import register_error_handlers, status_for


@pytest.mark.parametrize(
    "error, expected",
    [
        (ValidationError("blank"), 400),
        (CommentNotFoundError("c1"), 404),
        (NotAuthorizedError("edit", "comment", "c1", "u1"), 403),
        (RateLimitExceededError("slow down", retry_after=5), 429),
        (SelfFlagError("c1"), 409),
        (DuplicateFlagError("c1", "u1"), 409),
        (ExerciseNotPublishedError("e1"), 422),
        (InvalidModerationActionError("BAN"), 422),
        (DomainError("unclassified"), 500),
    ],
)
def test_status_for(error, expected):
    assert status_for(error) == expected


@pytest.fixture
def client():
    app = FastAPI()
    register_error_handlers(app)

    @app.get("/slow")
    async def slow():
        raise RateLimitExceededError("Please wait 5 seconds", retry_after=5)

    @app.get("/daily")
    async def daily():
        raise RateLimitExceededError("Daily limit reached")

    @app.get("/missing")
    async def missing():
        raise CommentNotFoundError("abc")

    return TestClient(app)


def test_rate_limit_sets_retry_after(client):
    response = client.get("/slow")

    assert response.status_code == 429
    assert response.headers["Retry-After"] == "5"
    assert response.json()["error"] == "RateLimitExceededError"


def test_daily_cap_has_no_retry_after(client):
    response = client.get("/daily")

    assert response.status_code == 429
    assert "Retry-After" not in response.headers


def test_body_carries_message_and_kind(client):
    response = client.get("/missing")

    assert response.status_code == 404
    assert response.json() == {
        "detail": "Comment not found: abc",
        "error": "CommentNotFoundError",
    }
