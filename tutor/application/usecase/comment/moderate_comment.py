"""Moderate comment use case."""

from uuid import UUID

from pydantic import BaseModel

from tutor.application.usecase.base import BaseUseCase
from tutor.domain.service import CommentService
from tutor.domain.value import CommentId, UserId

from .read_model import CommentItem, CommentItemAssembler


class ModerateCommentRequest(BaseModel):
    """Moderate comment request."""

    comment_id: str  # UUID string
    moderator_id: str
    action: str  # HIDE, SHOW, RESTORE or DELETE (case-insensitive)
    reason: str | None = None  # Written to the audit log only


class ModerateCommentResponse(BaseModel):
    """Moderate comment response."""

    action: str
    comment: CommentItem


class ModerateCommentUseCase(BaseUseCase):
    """Use case for moderator actions on a comment."""

    def __init__(
        self,
        comment_service: CommentService,
        assembler: CommentItemAssembler,
    ) -> None:
        self.comment_service = comment_service
        self.assembler = assembler

    async def execute(
        self, request: ModerateCommentRequest
    ) -> ModerateCommentResponse:
        """Execute moderation flow.

        Raises:
            InvalidModerationActionError: If the action is unknown
            NotAuthorizedError: If the user is not a moderator
            InvalidTransitionError: If the comment's status forbids the action
        """
        comment = await self.comment_service.moderate(
            CommentId(UUID(request.comment_id)),
            request.action,
            UserId(UUID(request.moderator_id)),
            reason=request.reason,
        )

        return ModerateCommentResponse(
            action=request.action.strip().upper(),
            comment=await self.assembler.assemble_one(comment),
        )
