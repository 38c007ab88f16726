"""Domain events emitted by the comment subsystem."""

from datetime import datetime

from tutor.domain.model.common import DomainModel
from tutor.domain.value import CommentId, ExerciseId, UserId


class CommentCreated(DomainModel):
    """Emitted after a comment is persisted, for real-time consumers."""

    comment_id: CommentId
    exercise_id: ExerciseId
    author_id: UserId
    author_name: str
    content: str
    created_at: datetime
