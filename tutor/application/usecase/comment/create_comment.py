"""Create comment use case."""

from uuid import UUID

from pydantic import BaseModel

from tutor.application.usecase.base import BaseUseCase
from tutor.domain.service import CommentService
from tutor.domain.value import CommentId, ExerciseId, UserId

from .read_model import CommentItem, CommentItemAssembler


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    exercise_id: str  # UUID string
    content: str
    author_id: str  # User ID from authenticated user
    parent_id: str | None = None  # Parent comment ID for replies
    session_id: str | None = None  # Tutoring session the comment comes from


class CreateCommentResponse(BaseModel):
    """Create comment response."""

    comment: CommentItem


class CreateCommentUseCase(BaseUseCase):
    """Use case for commenting on an exercise or replying to another comment."""

    def __init__(
        self,
        comment_service: CommentService,
        assembler: CommentItemAssembler,
    ) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
            assembler: Read model assembler
        """
        self.comment_service = comment_service
        self.assembler = assembler

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        The comment service checks the exercise, rate limits and parent
        before anything is stored, and publishes the CommentCreated event.

        Args:
            request: Create comment request

        Returns:
            The created comment as a read model
        """
        comment = await self.comment_service.create(
            content=request.content,
            exercise_id=ExerciseId(UUID(request.exercise_id)),
            author_id=UserId(UUID(request.author_id)),
            parent_id=CommentId(UUID(request.parent_id)) if request.parent_id else None,
            session_id=request.session_id,
        )

        return CreateCommentResponse(comment=await self.assembler.assemble_one(comment))
