"""Search comments use case (moderation and reporting queries)."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel

from tutor.application.usecase.base import BaseUseCase
from tutor.domain.error import ValidationError
from tutor.domain.service import CommentService
from tutor.domain.value import CommentStatus, ExerciseId, UserId

from .read_model import CommentItem, CommentItemAssembler


class SearchCommentsRequest(BaseModel):
    """Search comments request.

    At most one filter may be given (``start`` and ``end`` count as one
    and must be given together). Without a filter every comment is
    returned.
    """

    session_id: str | None = None
    status: CommentStatus | None = None
    min_flags: int | None = None
    q: str | None = None
    start: date | None = None
    end: date | None = None
    author_id: str | None = None
    exercise_id: str | None = None
    recent: int | None = None


class SearchCommentsResponse(BaseModel):
    """Search comments response."""

    comments: list[CommentItem]
    total: int


class SearchCommentsUseCase(BaseUseCase):
    """Use case for the read-only comment projections."""

    def __init__(
        self,
        comment_service: CommentService,
        assembler: CommentItemAssembler,
    ) -> None:
        self.comment_service = comment_service
        self.assembler = assembler

    async def execute(self, request: SearchCommentsRequest) -> SearchCommentsResponse:
        """Execute search flow.

        Raises:
            ValidationError: If filters are combined or a date bound is missing
        """
        if (request.start is None) != (request.end is None):
            raise ValidationError("Both start and end dates are required")

        filters = {
            "session_id": request.session_id,
            "status": request.status,
            "min_flags": request.min_flags,
            "q": request.q,
            "date_range": request.start,
            "author_id": request.author_id,
            "exercise_id": request.exercise_id,
            "recent": request.recent,
        }
        given = [name for name, value in filters.items() if value is not None]
        if len(given) > 1:
            raise ValidationError(
                f"Only one filter may be used at a time, got: {', '.join(given)}"
            )

        service = self.comment_service
        if request.session_id is not None:
            comments = await service.list_by_session(request.session_id)
        elif request.status is not None:
            comments = await service.list_by_status(request.status)
        elif request.min_flags is not None:
            comments = await service.list_by_min_flags(request.min_flags)
        elif request.start is not None and request.end is not None:
            comments = await service.filter_by_date_range(request.start, request.end)
        elif request.author_id is not None:
            comments = await service.filter_by_author(UserId(UUID(request.author_id)))
        elif request.exercise_id is not None:
            comments = await service.filter_by_exercise(
                ExerciseId(UUID(request.exercise_id))
            )
        elif request.recent is not None:
            comments = await service.list_recent(request.recent)
        else:
            comments = await service.search(request.q)

        items = await self.assembler.assemble(comments)
        return SearchCommentsResponse(comments=items, total=len(items))
