"""PostgreSQL repository implementations."""

from tutor.persistence.repository.actor import PostgresActorRepository
from tutor.persistence.repository.comment import PostgresCommentRepository
from tutor.persistence.repository.exercise import PostgresExerciseRepository
from tutor.persistence.repository.flag import PostgresFlagRepository

__all__ = [
    "PostgresActorRepository",
    "PostgresCommentRepository",
    "PostgresExerciseRepository",
    "PostgresFlagRepository",
]
