"""Comment repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from tutor.domain.model.comment import Comment
from tutor.domain.value import CommentId, CommentStatus, ExerciseId, UserId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_top_level(
        self,
        exercise_id: ExerciseId,
        limit: int,
        offset: int,
        status: Optional[CommentStatus] = None,
    ) -> List[Comment]:
        """Find top-level comments of an exercise, newest first.

        Args:
            exercise_id: The exercise ID
            limit: Maximum number of comments to return
            offset: Number of comments to skip
            status: Only return comments with this status (all if None)

        Returns:
            One page of top-level comments
        """
        pass

    @abstractmethod
    async def find_replies(
        self,
        parent_id: CommentId,
        limit: int,
        offset: int,
        status: Optional[CommentStatus] = None,
    ) -> List[Comment]:
        """Find direct replies to a comment, oldest first.

        Args:
            parent_id: The parent comment ID
            limit: Maximum number of replies to return
            offset: Number of replies to skip
            status: Only return replies with this status (all if None)

        Returns:
            One page of replies
        """
        pass

    @abstractmethod
    async def find_by_exercise(self, exercise_id: ExerciseId) -> List[Comment]:
        """Find every comment of an exercise regardless of level or status."""
        pass

    @abstractmethod
    async def find_by_author(self, author_id: UserId) -> List[Comment]:
        """Find every comment written by an author, newest first."""
        pass

    @abstractmethod
    async def find_by_session(self, session_id: str) -> List[Comment]:
        """Find comments posted during a tutoring session, newest first."""
        pass

    @abstractmethod
    async def find_by_status(self, status: CommentStatus) -> List[Comment]:
        """Find comments with the given status, newest first."""
        pass

    @abstractmethod
    async def find_by_min_flags(self, min_flags: int) -> List[Comment]:
        """Find comments with at least ``min_flags`` flags, most flagged first."""
        pass

    @abstractmethod
    async def search(self, text: str) -> List[Comment]:
        """Find comments whose content or author username contains ``text``.

        Matching is case-insensitive. Comments whose author is unknown are
        matched on content only.
        """
        pass

    @abstractmethod
    async def find_by_date_range(
        self, start: datetime, end: datetime
    ) -> List[Comment]:
        """Find comments created within [start, end], newest first."""
        pass

    @abstractmethod
    async def find_recent(self, limit: int) -> List[Comment]:
        """Find the most recently created comments."""
        pass

    @abstractmethod
    async def find_all(self) -> List[Comment]:
        """Find every comment, newest first."""
        pass

    @abstractmethod
    async def count_by_author_since(self, author_id: UserId, since: datetime) -> int:
        """Count an author's comments created strictly after ``since``.

        Args:
            author_id: The author's user ID
            since: Exclusive lower bound on created_at

        Returns:
            Number of comments
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update).

        Args:
            comment: The comment to save

        Returns:
            The saved comment
        """
        pass

    @abstractmethod
    async def increment_flags_count(self, comment_id: CommentId) -> Optional[Comment]:
        """Atomically increment a comment's flag count by 1.

        Args:
            comment_id: Comment ID

        Returns:
            The updated comment, None if it does not exist
        """
        pass

    @abstractmethod
    async def delete(self, comment_id: CommentId) -> None:
        """Delete a comment (hard delete).

        Replies and flags of the comment are removed with it.

        Args:
            comment_id: The comment ID to delete
        """
        pass
