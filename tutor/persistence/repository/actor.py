"""PostgreSQL implementation of Actor repository."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tutor.domain.model import Actor
from tutor.domain.repository import ActorRepository
from tutor.domain.value import Capability, UserId
from tutor.persistence.mappers import row_to_actor
from tutor.persistence.tables import user_ranks_table, users_table


class PostgresActorRepository(ActorRepository):
    """Loads users together with the capability columns of their rank."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[Actor]:
        rank_columns = [user_ranks_table.c[capability.value] for capability in Capability]
        stmt = (
            select(users_table.c.id, users_table.c.username, *rank_columns)
            .select_from(
                users_table.outerjoin(
                    user_ranks_table, users_table.c.rank_id == user_ranks_table.c.id
                )
            )
            .where(users_table.c.id == user_id)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_actor(row._asdict()) if row else None
