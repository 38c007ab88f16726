"""PostgreSQL implementation of Exercise repository."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tutor.domain.model import Exercise
from tutor.domain.repository import ExerciseRepository
from tutor.domain.value import ExerciseId
from tutor.persistence.mappers import row_to_exercise
from tutor.persistence.tables import exercises_table


class PostgresExerciseRepository(ExerciseRepository):
    """Reads exercises owned by the wider platform."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, exercise_id: ExerciseId) -> Optional[Exercise]:
        stmt = select(
            exercises_table.c.id,
            exercises_table.c.title,
            exercises_table.c.published,
            exercises_table.c.commentable,
        ).where(exercises_table.c.id == exercise_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_exercise(row._asdict()) if row else None
