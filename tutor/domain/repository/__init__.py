"""Repository interfaces for the comment moderation domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from tutor.domain.repository.actor import ActorRepository
from tutor.domain.repository.comment import CommentRepository
from tutor.domain.repository.exercise import ExerciseRepository
from tutor.domain.repository.flag import FlagRepository

__all__ = [
    "ActorRepository",
    "CommentRepository",
    "ExerciseRepository",
    "FlagRepository",
]
