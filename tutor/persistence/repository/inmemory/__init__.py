"""In-memory repository implementations for testing."""

from .actor import InMemoryActorRepository
from .comment import InMemoryCommentRepository
from .exercise import InMemoryExerciseRepository
from .flag import InMemoryFlagRepository
from .transaction import InMemoryTransaction

__all__ = [
    "InMemoryActorRepository",
    "InMemoryCommentRepository",
    "InMemoryExerciseRepository",
    "InMemoryFlagRepository",
    "InMemoryTransaction",
]
