"""PostgreSQL implementation of Flag repository."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tutor.domain.model import Flag
from tutor.domain.repository import FlagRepository
from tutor.domain.value import CommentId, UserId
from tutor.persistence.mappers import flag_to_dict
from tutor.persistence.tables import comment_flags_table


class PostgresFlagRepository(FlagRepository):
    """PostgreSQL implementation of FlagRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def exists(self, comment_id: CommentId, flagger_id: UserId) -> bool:
        stmt = (
            select(comment_flags_table.c.id)
            .where(comment_flags_table.c.comment_id == comment_id)
            .where(comment_flags_table.c.flagger_id == flagger_id)
        )
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def save(self, flag: Flag) -> Flag:
        """Save a new flag.

        Raises:
            IntegrityError: If the user already flagged this comment
        """
        stmt = comment_flags_table.insert().values(**flag_to_dict(flag))
        await self.session.execute(stmt)
        await self.session.flush()
        return flag

    async def delete_by_comment(self, comment_id: CommentId) -> int:
        stmt = comment_flags_table.delete().where(
            comment_flags_table.c.comment_id == comment_id
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount or 0
