"""In-memory flag repository for testing."""

from sqlalchemy.exc import IntegrityError

from tutor.domain.model.flag import Flag
from tutor.domain.repository.flag import FlagRepository
from tutor.domain.value import CommentId, UserId

from .comment import InMemoryCommentRepository


class InMemoryFlagRepository(FlagRepository):
    """In-memory implementation of FlagRepository for testing.

    When given the comment repository it also mimics the ON DELETE CASCADE
    from comments: flags of comments that no longer exist are invisible.
    """

    def __init__(
        self, comment_repository: InMemoryCommentRepository | None = None
    ) -> None:
        self._flags: list[Flag] = []
        self._comment_repository = comment_repository

    def _live(self) -> list[Flag]:
        if self._comment_repository is None:
            return self._flags
        existing = self._comment_repository.ids()
        self._flags = [f for f in self._flags if f.comment_id in existing]
        return self._flags

    async def exists(self, comment_id: CommentId, flagger_id: UserId) -> bool:
        return any(
            f.comment_id == comment_id and f.flagger_id == flagger_id
            for f in self._live()
        )

    def count_by_comment(self, comment_id: CommentId) -> int:
        """Count live flags of a comment (test helper)."""
        return sum(1 for f in self._live() if f.comment_id == comment_id)

    async def save(self, flag: Flag) -> Flag:
        """Save a flag.

        Raises:
            IntegrityError: If the user already flagged this comment
        """
        if await self.exists(flag.comment_id, flag.flagger_id):
            raise IntegrityError("Duplicate flag", None, Exception())

        self._flags.append(flag)
        return flag

    async def delete_by_comment(self, comment_id: CommentId) -> int:
        before = len(self._live())
        self._flags = [f for f in self._flags if f.comment_id != comment_id]
        return before - len(self._flags)
