"""Delete comment use case."""

from uuid import UUID

from pydantic import BaseModel

from tutor.application.usecase.base import BaseUseCase
from tutor.domain.service import CommentService
from tutor.domain.value import CommentId, UserId

from .read_model import CommentItem, CommentItemAssembler


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: str  # UUID string
    user_id: str
    hard: bool = False  # Remove the row instead of marking it deleted


class DeleteCommentResponse(BaseModel):
    """Delete comment response.

    ``comment`` is the soft-deleted comment, or None after a hard delete.
    """

    comment_id: str
    hard: bool
    comment: CommentItem | None


class DeleteCommentUseCase(BaseUseCase):
    """Use case for soft or hard deleting a comment."""

    def __init__(
        self,
        comment_service: CommentService,
        assembler: CommentItemAssembler,
    ) -> None:
        self.comment_service = comment_service
        self.assembler = assembler

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        comment = await self.comment_service.delete(
            CommentId(UUID(request.comment_id)),
            UserId(UUID(request.user_id)),
            soft=not request.hard,
        )

        return DeleteCommentResponse(
            comment_id=request.comment_id,
            hard=request.hard,
            comment=await self.assembler.assemble_one(comment) if comment else None,
        )
