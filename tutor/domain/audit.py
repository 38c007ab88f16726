"""Moderation audit log port."""

from abc import ABC, abstractmethod

from tutor.domain.value import CommentId, ModerationAction, UserId


class ModerationAuditLog(ABC):
    """Records who moderated which comment, and why.

    The reason is kept here only; it is not stored on the comment.
    """

    @abstractmethod
    async def record(
        self,
        comment_id: CommentId,
        action: ModerationAction,
        moderator_id: UserId,
        reason: str | None,
    ) -> None:
        pass
