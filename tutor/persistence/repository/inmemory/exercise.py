"""In-memory exercise repository for testing."""

from typing import Optional

from tutor.domain.model.exercise import Exercise
from tutor.domain.repository.exercise import ExerciseRepository
from tutor.domain.value import ExerciseId


class InMemoryExerciseRepository(ExerciseRepository):
    """In-memory implementation of ExerciseRepository for testing."""

    def __init__(self) -> None:
        self._exercises: dict[ExerciseId, Exercise] = {}

    def add(self, exercise: Exercise) -> Exercise:
        """Seed an exercise (the real table is owned elsewhere)."""
        self._exercises[exercise.id] = exercise
        return exercise

    async def find_by_id(self, exercise_id: ExerciseId) -> Optional[Exercise]:
        return self._exercises.get(exercise_id)
