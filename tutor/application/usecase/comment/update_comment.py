"""Update comment use case."""

from uuid import UUID

from pydantic import BaseModel

from tutor.application.usecase.base import BaseUseCase
from tutor.domain.service import CommentService
from tutor.domain.value import CommentId, UserId

from .read_model import CommentItem, CommentItemAssembler


class UpdateCommentRequest(BaseModel):
    """Update comment request.

    A full update (``partial=False``) requires non-blank content. A partial
    update leaves the comment untouched when content is missing or blank.
    """

    comment_id: str  # UUID string
    user_id: str  # Current user ID (author or moderator)
    content: str | None = None
    partial: bool = False


class UpdateCommentResponse(BaseModel):
    """Update comment response."""

    comment: CommentItem


class UpdateCommentUseCase(BaseUseCase):
    """Use case for editing a comment's content."""

    def __init__(
        self,
        comment_service: CommentService,
        assembler: CommentItemAssembler,
    ) -> None:
        self.comment_service = comment_service
        self.assembler = assembler

    async def execute(self, request: UpdateCommentRequest) -> UpdateCommentResponse:
        """Execute update comment flow.

        Raises:
            CommentNotFoundError: If the comment does not exist
            NotAuthorizedError: If the user is neither author nor moderator
            InvalidTransitionError: If the comment is deleted
            ValidationError: If a full update has blank content
        """
        comment_id = CommentId(UUID(request.comment_id))
        user_id = UserId(UUID(request.user_id))

        if request.partial:
            comment = await self.comment_service.patch(
                comment_id, user_id, content=request.content
            )
        else:
            comment = await self.comment_service.edit(
                comment_id, request.content, user_id
            )

        return UpdateCommentResponse(comment=await self.assembler.assemble_one(comment))
