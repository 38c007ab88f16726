"""In-memory comment repository for testing."""

from datetime import datetime
from typing import Optional

from tutor.domain.model.actor import Actor
from tutor.domain.model.comment import Comment
from tutor.domain.repository.comment import CommentRepository
from tutor.domain.value import CommentId, CommentStatus, ExerciseId, UserId

from .actor import InMemoryActorRepository


def _newest_first(comments: list[Comment]) -> list[Comment]:
    return sorted(comments, key=lambda c: c.created_at, reverse=True)


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing.

    Search matches author usernames only when an actor repository is given.
    """

    def __init__(
        self, actor_repository: Optional[InMemoryActorRepository] = None
    ) -> None:
        self._comments: dict[CommentId, Comment] = {}
        self._actors = actor_repository

    def _filter(self, predicate) -> list[Comment]:
        return [c for c in self._comments.values() if predicate(c)]

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def find_top_level(
        self,
        exercise_id: ExerciseId,
        limit: int,
        offset: int,
        status: Optional[CommentStatus] = None,
    ) -> list[Comment]:
        """Find top-level comments of an exercise, newest first."""
        comments = self._filter(
            lambda c: c.exercise_id == exercise_id
            and c.parent_id is None
            and (status is None or c.status == status)
        )
        return _newest_first(comments)[offset : offset + limit]

    async def find_replies(
        self,
        parent_id: CommentId,
        limit: int,
        offset: int,
        status: Optional[CommentStatus] = None,
    ) -> list[Comment]:
        """Find direct replies to a comment, oldest first."""
        comments = self._filter(
            lambda c: c.parent_id == parent_id
            and (status is None or c.status == status)
        )
        comments.sort(key=lambda c: c.created_at)
        return comments[offset : offset + limit]

    async def find_by_exercise(self, exercise_id: ExerciseId) -> list[Comment]:
        return _newest_first(self._filter(lambda c: c.exercise_id == exercise_id))

    async def find_by_author(self, author_id: UserId) -> list[Comment]:
        return _newest_first(self._filter(lambda c: c.author_id == author_id))

    async def find_by_session(self, session_id: str) -> list[Comment]:
        return _newest_first(self._filter(lambda c: c.session_id == session_id))

    async def find_by_status(self, status: CommentStatus) -> list[Comment]:
        return _newest_first(self._filter(lambda c: c.status == status))

    async def find_by_min_flags(self, min_flags: int) -> list[Comment]:
        comments = self._filter(lambda c: c.flags_count >= min_flags)
        comments.sort(key=lambda c: (c.flags_count, c.created_at), reverse=True)
        return comments

    async def search(self, text: str) -> list[Comment]:
        needle = text.lower()
        matches = []
        for comment in self._comments.values():
            if needle in comment.content.lower():
                matches.append(comment)
                continue
            author = await self._author(comment.author_id)
            if author is not None and needle in author.username.lower():
                matches.append(comment)
        return _newest_first(matches)

    async def _author(self, author_id: UserId) -> Optional[Actor]:
        if self._actors is None:
            return None
        return await self._actors.find_by_id(author_id)

    async def find_by_date_range(
        self, start: datetime, end: datetime
    ) -> list[Comment]:
        return _newest_first(self._filter(lambda c: start <= c.created_at <= end))

    async def find_recent(self, limit: int) -> list[Comment]:
        return _newest_first(list(self._comments.values()))[:limit]

    async def find_all(self) -> list[Comment]:
        return _newest_first(list(self._comments.values()))

    async def count_by_author_since(self, author_id: UserId, since: datetime) -> int:
        """Count an author's comments created strictly after ``since``."""
        return sum(
            1
            for c in self._comments.values()
            if c.author_id == author_id and c.created_at > since
        )

    async def save(self, comment: Comment) -> Comment:
        """Save or update a comment."""
        self._comments[comment.id] = comment
        return comment

    async def increment_flags_count(self, comment_id: CommentId) -> Optional[Comment]:
        """Increment flags_count by 1."""
        comment = self._comments.get(comment_id)
        if comment is None:
            return None
        updated = comment.model_copy(update={"flags_count": comment.flags_count + 1})
        self._comments[comment_id] = updated
        return updated

    async def delete(self, comment_id: CommentId) -> None:
        """Delete a comment and its whole reply subtree."""
        pending = [comment_id]
        while pending:
            current = pending.pop()
            self._comments.pop(current, None)
            pending.extend(c.id for c in self._comments.values() if c.parent_id == current)

    def ids(self) -> set[CommentId]:
        """IDs of every stored comment (test helper)."""
        return set(self._comments)
