"""Comment entity.

Comments are threaded discussions attached to exercises with unlimited
depth. Visibility is governed by the moderation state machine.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from tutor.domain.model.common import DomainModel
from tutor.domain.value import CommentId, CommentStatus, ExerciseId, UserId

MAX_CONTENT_LENGTH = 10000
MAX_SESSION_ID_LENGTH = 255


class Comment(DomainModel):
    """Comment entity.

    Represents a comment on an exercise or a reply to another comment.

    Threading is managed through:
    - parent_id: Direct parent comment (None for top-level)
    - depth: Nesting level (0 for top-level, increments with each reply)

    Moderation is tracked through status, flags_count and the deletion
    fields. deleted_by/deleted_at are only set while status is DELETED.
    """

    id: CommentId
    exercise_id: ExerciseId
    author_id: UserId
    content: str = Field(min_length=1, max_length=MAX_CONTENT_LENGTH)
    parent_id: Optional[CommentId] = None
    depth: int = Field(default=0, ge=0)
    session_id: Optional[str] = Field(
        default=None, max_length=MAX_SESSION_ID_LENGTH
    )
    status: CommentStatus = CommentStatus.VISIBLE
    flags_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=datetime.now)
    edited_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None
    deleted_by: Optional[UserId] = None
