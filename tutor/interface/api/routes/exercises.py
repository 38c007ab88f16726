"""Exercise discussion routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, status
from pydantic import BaseModel, Field

from tutor.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
    GetCommentsRequest,
    GetCommentsResponse,
    GetCommentsUseCase,
)
from tutor.domain.service import JWTService
from tutor.domain.value import CommentStatus
from tutor.interface.api.dependencies import require_user_id

router = APIRouter(prefix="/exercises", tags=["comments"], route_class=DishkaRoute)


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment.

    Content limits are enforced by the comment service so that blank
    content is reported like any other validation failure.
    """

    content: str
    parent_id: UUID | None = None  # Parent comment ID for replies
    session_id: str | None = Field(default=None, max_length=255)


@router.post(
    "/{exercise_id}/comments",
    response_model=CreateCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    exercise_id: UUID,
    request: CreateCommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CreateCommentResponse:
    """Comment on an exercise or reply to another comment.

    Requires authentication.

    Args:
        exercise_id: Exercise UUID
        request: Comment content, optional parent and tutoring session
        create_comment_use_case: Create comment use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        The created comment
    """
    user_id = require_user_id(jwt_service, auth_token, "create comments")

    return await create_comment_use_case.execute(
        CreateCommentRequest(
            exercise_id=str(exercise_id),
            content=request.content,
            author_id=user_id,
            parent_id=str(request.parent_id) if request.parent_id else None,
            session_id=request.session_id,
        )
    )


@router.get("/{exercise_id}/comments", response_model=GetCommentsResponse)
async def get_comments(
    exercise_id: UUID,
    get_comments_use_case: FromDishka[GetCommentsUseCase],
    page: int = 0,
    page_size: int | None = None,
    parent_id: UUID | None = None,
    status_filter: CommentStatus | None = Query(default=None, alias="status"),
) -> GetCommentsResponse:
    """Get one page of an exercise's comments.

    Without ``parent_id`` the page holds top-level comments, newest first.
    With it, the page holds replies to that comment, oldest first. Hidden
    and deleted comments are included unless ``status`` narrows the page.
    """
    return await get_comments_use_case.execute(
        GetCommentsRequest(
            exercise_id=str(exercise_id),
            page=page,
            page_size=page_size,
            parent_id=str(parent_id) if parent_id else None,
            status=status_filter,
        )
    )
