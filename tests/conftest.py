"""Test configuration and fixtures."""

import os
from datetime import datetime
from uuid import uuid4

import logfire

from tutor.domain.model import Actor, Comment, Exercise
from tutor.domain.value import (
    Capability,
    CommentId,
    CommentStatus,
    ExerciseId,
    UserId,
)

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("AUTH__JWT_SECRET", "test-secret")

# Keep test output quiet and never ship spans anywhere
logfire.configure(send_to_logfire=False, console=False)


def make_exercise(
    published: bool = True, commentable: bool = True, title: str = "Fractions 101"
) -> Exercise:
    """Build an exercise that accepts comments unless told otherwise."""
    return Exercise(
        id=ExerciseId(uuid4()),
        title=title,
        published=published,
        commentable=commentable,
    )


def make_actor(username: str = "student", *capabilities: Capability) -> Actor:
    return Actor(
        id=UserId(uuid4()),
        username=username,
        capabilities=frozenset(capabilities),
    )


def make_moderator(username: str = "teacher") -> Actor:
    return make_actor(username, Capability.EXERCISE_EDIT)


def make_comment(
    exercise_id: ExerciseId,
    author_id: UserId,
    content: str = "How do I simplify 4/8?",
    created_at: datetime | None = None,
    parent: Comment | None = None,
    status: CommentStatus = CommentStatus.VISIBLE,
    flags_count: int = 0,
    session_id: str | None = None,
) -> Comment:
    """Build a comment directly, bypassing the service checks."""
    return Comment(
        id=CommentId(uuid4()),
        exercise_id=exercise_id,
        author_id=author_id,
        content=content,
        parent_id=parent.id if parent else None,
        depth=parent.depth + 1 if parent else 0,
        session_id=session_id,
        status=status,
        flags_count=flags_count,
        created_at=created_at or datetime.now(),
    )
