"""Domain value objects for comment moderation."""

from tutor.domain.value.identifiers import CommentId, ExerciseId, FlagId, UserId
from tutor.domain.value.types import Capability, CommentStatus, ModerationAction

__all__ = [
    # Identifiers
    "CommentId",
    "ExerciseId",
    "FlagId",
    "UserId",
    # Types
    "Capability",
    "CommentStatus",
    "ModerationAction",
]
