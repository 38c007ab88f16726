"""Flag repository interface."""

from abc import ABC, abstractmethod

from tutor.domain.model.flag import Flag
from tutor.domain.value import CommentId, UserId


class FlagRepository(ABC):
    """Repository for Flag entity."""

    @abstractmethod
    async def exists(self, comment_id: CommentId, flagger_id: UserId) -> bool:
        """Check whether a user has already flagged a comment."""
        pass

    @abstractmethod
    async def save(self, flag: Flag) -> Flag:
        """Save a new flag.

        Raises:
            IntegrityError: If the user already flagged this comment
                (unique constraint violation)
        """
        pass

    @abstractmethod
    async def delete_by_comment(self, comment_id: CommentId) -> int:
        """Delete every flag of a comment.

        Returns:
            Number of flags removed
        """
        pass
