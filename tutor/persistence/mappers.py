"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from tutor.domain.model import Actor, Comment, Exercise, Flag
from tutor.domain.value import (
    Capability,
    CommentId,
    CommentStatus,
    ExerciseId,
    UserId,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def _optional_uuid(value: Any) -> UUID | None:
    return _uuid(value) if value else None


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    parent_id = _optional_uuid(row.get("parent_id"))
    deleted_by = _optional_uuid(row.get("deleted_by"))
    return Comment(
        id=CommentId(_uuid(row["id"])),
        exercise_id=ExerciseId(_uuid(row["exercise_id"])),
        author_id=UserId(_uuid(row["author_id"])),
        content=row["content"],
        parent_id=CommentId(parent_id) if parent_id else None,
        depth=row["depth"],
        session_id=row.get("session_id"),
        status=CommentStatus(row["status"]),
        flags_count=row["flags_count"],
        created_at=row["created_at"],
        edited_at=row.get("edited_at"),
        deleted_at=row.get("deleted_at"),
        deleted_by=UserId(deleted_by) if deleted_by else None,
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict.

    Args:
        comment: Comment domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = comment.model_dump()
    data["status"] = comment.status.value
    return data


def flag_to_dict(flag: Flag) -> Dict[str, Any]:
    return flag.model_dump()


def row_to_exercise(row: Dict[str, Any]) -> Exercise:
    return Exercise(
        id=ExerciseId(_uuid(row["id"])),
        title=row["title"],
        published=row["published"],
        commentable=row["commentable"],
    )


def row_to_actor(row: Dict[str, Any]) -> Actor:
    """Convert a user row joined with its rank to an Actor.

    Each true rank column becomes the capability of the same name. A user
    without a rank has no capabilities.

    Args:
        row: Database row as dict (rank columns may be None)

    Returns:
        Actor domain model
    """
    capabilities = frozenset(
        capability for capability in Capability if row.get(capability.value)
    )
    return Actor(
        id=UserId(_uuid(row["id"])),
        username=row["username"],
        capabilities=capabilities,
    )
