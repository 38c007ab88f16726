"""Comment routes."""

from datetime import date
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query
from pydantic import BaseModel, Field

from tutor.application.usecase.comment import (
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
    FlagCommentRequest,
    FlagCommentResponse,
    FlagCommentUseCase,
    GetCommentRequest,
    GetCommentResponse,
    GetCommentUseCase,
    ModerateCommentRequest,
    ModerateCommentResponse,
    ModerateCommentUseCase,
    SearchCommentsRequest,
    SearchCommentsResponse,
    SearchCommentsUseCase,
    UpdateCommentRequest,
    UpdateCommentResponse,
    UpdateCommentUseCase,
)
from tutor.domain.service import JWTService
from tutor.domain.value import CommentStatus
from tutor.interface.api.dependencies import require_user_id

router = APIRouter(prefix="/comments", tags=["comments"], route_class=DishkaRoute)


@router.get("", response_model=SearchCommentsResponse)
async def search_comments(
    search_comments_use_case: FromDishka[SearchCommentsUseCase],
    session_id: str | None = None,
    status_filter: CommentStatus | None = Query(default=None, alias="status"),
    min_flags: int | None = None,
    q: str | None = None,
    start: date | None = None,
    end: date | None = None,
    author_id: UUID | None = None,
    exercise_id: UUID | None = None,
    recent: int | None = None,
) -> SearchCommentsResponse:
    """Moderation and reporting queries over all comments.

    At most one filter may be given; ``start`` and ``end`` go together.
    """
    return await search_comments_use_case.execute(
        SearchCommentsRequest(
            session_id=session_id,
            status=status_filter,
            min_flags=min_flags,
            q=q,
            start=start,
            end=end,
            author_id=str(author_id) if author_id else None,
            exercise_id=str(exercise_id) if exercise_id else None,
            recent=recent,
        )
    )


@router.get("/{comment_id}", response_model=GetCommentResponse)
async def get_comment(
    comment_id: UUID,
    get_comment_use_case: FromDishka[GetCommentUseCase],
) -> GetCommentResponse:
    """Get a single comment, whatever its status."""
    return await get_comment_use_case.execute(
        GetCommentRequest(comment_id=str(comment_id))
    )


class EditCommentAPIRequest(BaseModel):
    """API request for replacing a comment's content."""

    content: str


class PatchCommentAPIRequest(BaseModel):
    """API request for a partial update; omitted content changes nothing."""

    content: str | None = None


@router.put("/{comment_id}", response_model=UpdateCommentResponse)
async def edit_comment(
    comment_id: UUID,
    request: EditCommentAPIRequest,
    update_comment_use_case: FromDishka[UpdateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> UpdateCommentResponse:
    """Replace a comment's content.

    Only the comment author or a moderator can edit.
    """
    user_id = require_user_id(jwt_service, auth_token, "edit comments")

    return await update_comment_use_case.execute(
        UpdateCommentRequest(
            comment_id=str(comment_id), user_id=user_id, content=request.content
        )
    )


@router.patch("/{comment_id}", response_model=UpdateCommentResponse)
async def patch_comment(
    comment_id: UUID,
    request: PatchCommentAPIRequest,
    update_comment_use_case: FromDishka[UpdateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> UpdateCommentResponse:
    """Partially update a comment."""
    user_id = require_user_id(jwt_service, auth_token, "edit comments")

    return await update_comment_use_case.execute(
        UpdateCommentRequest(
            comment_id=str(comment_id),
            user_id=user_id,
            content=request.content,
            partial=True,
        )
    )


@router.delete("/{comment_id}", response_model=DeleteCommentResponse)
async def delete_comment(
    comment_id: UUID,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    jwt_service: FromDishka[JWTService],
    hard: bool = False,
    auth_token: str | None = Cookie(default=None),
) -> DeleteCommentResponse:
    """Delete a comment.

    Soft delete (default) is open to the author and moderators. Hard
    delete removes the comment with its replies and flags and is
    reserved for moderators.
    """
    user_id = require_user_id(jwt_service, auth_token, "delete comments")

    return await delete_comment_use_case.execute(
        DeleteCommentRequest(comment_id=str(comment_id), user_id=user_id, hard=hard)
    )


class FlagCommentAPIRequest(BaseModel):
    """API request for flagging a comment."""

    reason: str | None = Field(default=None, max_length=500)


@router.post("/{comment_id}/flags", response_model=FlagCommentResponse)
async def flag_comment(
    comment_id: UUID,
    flag_comment_use_case: FromDishka[FlagCommentUseCase],
    jwt_service: FromDishka[JWTService],
    request: FlagCommentAPIRequest | None = None,
    auth_token: str | None = Cookie(default=None),
) -> FlagCommentResponse:
    """Flag a comment as abusive. Each user may flag a comment once."""
    user_id = require_user_id(jwt_service, auth_token, "flag comments")

    return await flag_comment_use_case.execute(
        FlagCommentRequest(
            comment_id=str(comment_id),
            user_id=user_id,
            reason=request.reason if request else None,
        )
    )


class ModerateCommentAPIRequest(BaseModel):
    """API request for a moderation action."""

    action: str  # HIDE, SHOW, RESTORE or DELETE
    reason: str | None = None


@router.post("/{comment_id}/moderation", response_model=ModerateCommentResponse)
async def moderate_comment(
    comment_id: UUID,
    request: ModerateCommentAPIRequest,
    moderate_comment_use_case: FromDishka[ModerateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ModerateCommentResponse:
    """Apply a moderation action. Moderators only."""
    user_id = require_user_id(jwt_service, auth_token, "moderate comments")

    return await moderate_comment_use_case.execute(
        ModerateCommentRequest(
            comment_id=str(comment_id),
            moderator_id=user_id,
            action=request.action,
            reason=request.reason,
        )
    )
