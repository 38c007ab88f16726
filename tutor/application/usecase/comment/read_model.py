"""Flattened comment read model shared by the comment use cases."""

from datetime import datetime
from typing import Iterable

from pydantic import BaseModel

from tutor.domain.model import Comment
from tutor.domain.repository import ActorRepository, ExerciseRepository
from tutor.domain.value import CommentStatus, ExerciseId, UserId


class CommentItem(BaseModel):
    """Comment item in responses.

    Author username and exercise title are denormalized so clients can
    render a comment without further lookups.
    """

    comment_id: str
    exercise_id: str
    exercise_title: str | None
    author_id: str
    author_username: str | None
    content: str
    parent_id: str | None
    depth: int
    session_id: str | None
    status: CommentStatus
    flags_count: int
    created_at: datetime
    edited_at: datetime | None
    deleted_at: datetime | None
    deleted_by: str | None


class CommentItemAssembler:
    """Builds CommentItems, looking each author and exercise up once."""

    def __init__(
        self,
        actor_repository: ActorRepository,
        exercise_repository: ExerciseRepository,
    ) -> None:
        self.actor_repository = actor_repository
        self.exercise_repository = exercise_repository

    async def assemble(self, comments: Iterable[Comment]) -> list[CommentItem]:
        comments = list(comments)
        usernames: dict[UserId, str | None] = {}
        titles: dict[ExerciseId, str | None] = {}

        for comment in comments:
            if comment.author_id not in usernames:
                actor = await self.actor_repository.find_by_id(comment.author_id)
                usernames[comment.author_id] = actor.username if actor else None
            if comment.exercise_id not in titles:
                exercise = await self.exercise_repository.find_by_id(
                    comment.exercise_id
                )
                titles[comment.exercise_id] = exercise.title if exercise else None

        return [
            CommentItem(
                comment_id=str(comment.id),
                exercise_id=str(comment.exercise_id),
                exercise_title=titles[comment.exercise_id],
                author_id=str(comment.author_id),
                author_username=usernames[comment.author_id],
                content=comment.content,
                parent_id=str(comment.parent_id) if comment.parent_id else None,
                depth=comment.depth,
                session_id=comment.session_id,
                status=comment.status,
                flags_count=comment.flags_count,
                created_at=comment.created_at,
                edited_at=comment.edited_at,
                deleted_at=comment.deleted_at,
                deleted_by=str(comment.deleted_by) if comment.deleted_by else None,
            )
            for comment in comments
        ]

    async def assemble_one(self, comment: Comment) -> CommentItem:
        items = await self.assemble([comment])
        return items[0]
