"""Get comments use cases."""

from uuid import UUID

from pydantic import BaseModel

from tutor.application.usecase.base import BaseUseCase
from tutor.domain.service import CommentService
from tutor.domain.value import CommentId, CommentStatus, ExerciseId

from .read_model import CommentItem, CommentItemAssembler


class GetCommentsRequest(BaseModel):
    """Get comments request.

    Without ``parent_id`` the page holds top-level comments (newest
    first); with it, replies to that comment (oldest first).
    """

    exercise_id: str  # UUID string
    page: int = 0
    page_size: int | None = None
    parent_id: str | None = None
    status: CommentStatus | None = None


class GetCommentsResponse(BaseModel):
    """Get comments response."""

    exercise_id: str
    parent_id: str | None
    page: int
    comments: list[CommentItem]
    total: int  # Number of comments on this page


class GetCommentsUseCase(BaseUseCase):
    """Use case for paging through an exercise's discussion."""

    def __init__(
        self,
        comment_service: CommentService,
        assembler: CommentItemAssembler,
    ) -> None:
        """Initialize get comments use case.

        Args:
            comment_service: Comment domain service
            assembler: Read model assembler
        """
        self.comment_service = comment_service
        self.assembler = assembler

    async def execute(self, request: GetCommentsRequest) -> GetCommentsResponse:
        """Execute get comments flow.

        Args:
            request: Exercise ID, paging and optional parent/status filters

        Returns:
            One page of comments

        Raises:
            ValidationError: If paging parameters are out of range
            ExerciseNotFoundError: If the exercise does not exist
            ParentNotFoundError: If the parent is not a comment of the exercise
        """
        comments = await self.comment_service.list_for_exercise(
            ExerciseId(UUID(request.exercise_id)),
            page=request.page,
            page_size=request.page_size,
            parent_id=CommentId(UUID(request.parent_id)) if request.parent_id else None,
            status=request.status,
        )
        items = await self.assembler.assemble(comments)

        return GetCommentsResponse(
            exercise_id=request.exercise_id,
            parent_id=request.parent_id,
            page=request.page,
            comments=items,
            total=len(items),
        )


class GetCommentRequest(BaseModel):
    """Get single comment request."""

    comment_id: str  # UUID string


class GetCommentResponse(BaseModel):
    """Get single comment response."""

    comment: CommentItem


class GetCommentUseCase(BaseUseCase):
    """Use case for fetching one comment regardless of its status."""

    def __init__(
        self,
        comment_service: CommentService,
        assembler: CommentItemAssembler,
    ) -> None:
        self.comment_service = comment_service
        self.assembler = assembler

    async def execute(self, request: GetCommentRequest) -> GetCommentResponse:
        comment = await self.comment_service.get(CommentId(UUID(request.comment_id)))
        return GetCommentResponse(comment=await self.assembler.assemble_one(comment))
