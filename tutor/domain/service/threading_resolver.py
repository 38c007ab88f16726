"""Threading resolver for replies."""

import logfire

from tutor.domain.error import (
    InvalidParentStateError,
    ParentNotFoundError,
    ThreadDepthExceededError,
)
from tutor.domain.model.comment import Comment
from tutor.domain.repository import CommentRepository
from tutor.domain.value import CommentId, CommentStatus, ExerciseId

from .base import Service


class ThreadingResolver(Service):
    """Validates and resolves parent/child comment relationships."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        max_depth: int | None = None,
    ) -> None:
        """Initialize threading resolver.

        Args:
            comment_repository: Comment repository
            max_depth: Deepest allowed reply level, None for unbounded
        """
        self.comment_repository = comment_repository
        self.max_depth = max_depth

    async def find_parent(
        self, exercise_id: ExerciseId, parent_id: CommentId
    ) -> Comment:
        """Find a parent comment on an exercise, whatever its status.

        Raises:
            ParentNotFoundError: If no such comment exists on the exercise
        """
        parent = await self.comment_repository.find_by_id(parent_id)
        if parent is None or parent.exercise_id != exercise_id:
            logfire.warn(
                "Parent comment not found on exercise",
                parent_id=str(parent_id),
                exercise_id=str(exercise_id),
            )
            raise ParentNotFoundError(str(parent_id))
        return parent

    async def resolve_parent(
        self, exercise_id: ExerciseId, parent_id: CommentId
    ) -> Comment:
        """Resolve the parent of a new reply.

        Args:
            exercise_id: Exercise the reply is posted on
            parent_id: Requested parent comment ID

        Returns:
            The parent comment

        Raises:
            ParentNotFoundError: If the parent does not exist on this exercise
            InvalidParentStateError: If the parent is hidden or deleted
            ThreadDepthExceededError: If the reply would nest too deeply
        """
        with logfire.span(
            "threading_resolver.resolve_parent",
            exercise_id=str(exercise_id),
            parent_id=str(parent_id),
        ):
            parent = await self.find_parent(exercise_id, parent_id)

            if parent.status is not CommentStatus.VISIBLE:
                logfire.warn(
                    "Reply to non-visible comment rejected",
                    parent_id=str(parent_id),
                    status=parent.status.value,
                )
                raise InvalidParentStateError(str(parent_id), parent.status.value)

            if self.max_depth is not None and parent.depth + 1 > self.max_depth:
                raise ThreadDepthExceededError(self.max_depth)

            return parent
