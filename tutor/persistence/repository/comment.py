"""PostgreSQL implementation of Comment repository."""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import Select, desc, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from tutor.domain.model import Comment
from tutor.domain.repository import CommentRepository
from tutor.domain.value import CommentId, CommentStatus, ExerciseId, UserId
from tutor.persistence.mappers import comment_to_dict, row_to_comment
from tutor.persistence.tables import comments_table, users_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _fetch_all(self, stmt: Select) -> List[Comment]:
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_top_level(
        self,
        exercise_id: ExerciseId,
        limit: int,
        offset: int,
        status: Optional[CommentStatus] = None,
    ) -> List[Comment]:
        """Find top-level comments of an exercise, newest first."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.exercise_id == exercise_id)
            .where(comments_table.c.parent_id.is_(None))
        )
        if status is not None:
            stmt = stmt.where(comments_table.c.status == status.value)

        stmt = (
            stmt.order_by(desc(comments_table.c.created_at)).limit(limit).offset(offset)
        )
        return await self._fetch_all(stmt)

    async def find_replies(
        self,
        parent_id: CommentId,
        limit: int,
        offset: int,
        status: Optional[CommentStatus] = None,
    ) -> List[Comment]:
        """Find direct replies to a comment, oldest first."""
        stmt = select(comments_table).where(comments_table.c.parent_id == parent_id)
        if status is not None:
            stmt = stmt.where(comments_table.c.status == status.value)

        stmt = stmt.order_by(comments_table.c.created_at).limit(limit).offset(offset)
        return await self._fetch_all(stmt)

    async def find_by_exercise(self, exercise_id: ExerciseId) -> List[Comment]:
        stmt = (
            select(comments_table)
            .where(comments_table.c.exercise_id == exercise_id)
            .order_by(desc(comments_table.c.created_at))
        )
        return await self._fetch_all(stmt)

    async def find_by_author(self, author_id: UserId) -> List[Comment]:
        stmt = (
            select(comments_table)
            .where(comments_table.c.author_id == author_id)
            .order_by(desc(comments_table.c.created_at))
        )
        return await self._fetch_all(stmt)

    async def find_by_session(self, session_id: str) -> List[Comment]:
        stmt = (
            select(comments_table)
            .where(comments_table.c.session_id == session_id)
            .order_by(desc(comments_table.c.created_at))
        )
        return await self._fetch_all(stmt)

    async def find_by_status(self, status: CommentStatus) -> List[Comment]:
        stmt = (
            select(comments_table)
            .where(comments_table.c.status == status.value)
            .order_by(desc(comments_table.c.created_at))
        )
        return await self._fetch_all(stmt)

    async def find_by_min_flags(self, min_flags: int) -> List[Comment]:
        stmt = (
            select(comments_table)
            .where(comments_table.c.flags_count >= min_flags)
            .order_by(
                desc(comments_table.c.flags_count), desc(comments_table.c.created_at)
            )
        )
        return await self._fetch_all(stmt)

    async def search(self, text: str) -> List[Comment]:
        """Case-insensitive substring search over content and author username."""
        stmt = (
            select(comments_table)
            .select_from(
                comments_table.outerjoin(
                    users_table, users_table.c.id == comments_table.c.author_id
                )
            )
            .where(
                or_(
                    comments_table.c.content.icontains(text, autoescape=True),
                    users_table.c.username.icontains(text, autoescape=True),
                )
            )
            .order_by(desc(comments_table.c.created_at))
        )
        return await self._fetch_all(stmt)

    async def find_by_date_range(
        self, start: datetime, end: datetime
    ) -> List[Comment]:
        stmt = (
            select(comments_table)
            .where(comments_table.c.created_at.between(start, end))
            .order_by(desc(comments_table.c.created_at))
        )
        return await self._fetch_all(stmt)

    async def find_recent(self, limit: int) -> List[Comment]:
        stmt = (
            select(comments_table)
            .order_by(desc(comments_table.c.created_at))
            .limit(limit)
        )
        return await self._fetch_all(stmt)

    async def find_all(self) -> List[Comment]:
        stmt = select(comments_table).order_by(desc(comments_table.c.created_at))
        return await self._fetch_all(stmt)

    async def count_by_author_since(self, author_id: UserId, since: datetime) -> int:
        """Count an author's comments created strictly after ``since``."""
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(comments_table.c.author_id == author_id)
            .where(comments_table.c.created_at > since)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update)."""
        existing = await self.find_by_id(comment.id)
        comment_dict = comment_to_dict(comment)

        if existing:
            # Ownership and placement never change after creation
            for column in ("id", "exercise_id", "author_id", "parent_id", "depth"):
                comment_dict.pop(column)
            stmt = (
                comments_table.update()
                .where(comments_table.c.id == comment.id)
                .values(**comment_dict)
            )
        else:
            stmt = comments_table.insert().values(**comment_dict)

        await self.session.execute(stmt)
        await self.session.flush()
        return await self.find_by_id(comment.id) or comment

    async def increment_flags_count(self, comment_id: CommentId) -> Optional[Comment]:
        """Atomically increment flags_count by 1."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(flags_count=comments_table.c.flags_count + 1)
            .returning(comments_table)
        )

        result = await self.session.execute(stmt)
        row = result.fetchone()

        if row is None:
            return None

        await self.session.flush()
        return row_to_comment(row._asdict())

    async def delete(self, comment_id: CommentId) -> None:
        """Delete a comment (hard delete).

        Replies and flags go with it through ON DELETE CASCADE.
        """
        stmt = comments_table.delete().where(comments_table.c.id == comment_id)
        await self.session.execute(stmt)
        await self.session.flush()
