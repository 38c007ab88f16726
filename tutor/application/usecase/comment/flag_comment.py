"""Flag comment use case."""

from uuid import UUID

from pydantic import BaseModel, Field

from tutor.application.usecase.base import BaseUseCase
from tutor.domain.service import CommentService
from tutor.domain.value import CommentId, CommentStatus, UserId


class FlagCommentRequest(BaseModel):
    """Flag comment request."""

    comment_id: str  # UUID string
    user_id: str  # Flagging user
    reason: str | None = Field(default=None, max_length=500)


class FlagCommentResponse(BaseModel):
    """Flag comment response.

    Only the moderation outcome is returned; flaggers do not get the
    comment back.
    """

    comment_id: str
    flags_count: int
    status: CommentStatus


class FlagCommentUseCase(BaseUseCase):
    """Use case for flagging a comment as abusive."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: FlagCommentRequest) -> FlagCommentResponse:
        """Execute flag comment flow.

        Raises:
            CommentNotFoundError: If the comment does not exist
            SelfFlagError: If the user wrote the comment
            DuplicateFlagError: If the user already flagged it
        """
        comment = await self.comment_service.flag(
            CommentId(UUID(request.comment_id)),
            UserId(UUID(request.user_id)),
            reason=request.reason,
        )

        return FlagCommentResponse(
            comment_id=str(comment.id),
            flags_count=comment.flags_count,
            status=comment.status,
        )
