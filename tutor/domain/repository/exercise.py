"""Exercise repository interface (read-only collaborator)."""

from abc import ABC, abstractmethod
from typing import Optional

from tutor.domain.model.exercise import Exercise
from tutor.domain.value import ExerciseId


class ExerciseRepository(ABC):
    """Read access to exercises owned by the exercise catalogue."""

    @abstractmethod
    async def find_by_id(self, exercise_id: ExerciseId) -> Optional[Exercise]:
        """Find an exercise by ID.

        Args:
            exercise_id: The exercise's unique identifier

        Returns:
            The exercise if found, None otherwise
        """
        pass
