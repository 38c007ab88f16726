"""Flag tracking and auto-hide."""

from datetime import datetime
from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from tutor.domain.error import CommentNotFoundError, DuplicateFlagError, SelfFlagError
from tutor.domain.model.comment import Comment
from tutor.domain.model.flag import Flag
from tutor.domain.repository import CommentRepository, FlagRepository
from tutor.domain.value import FlagId, UserId

from . import moderation
from .base import Service


class FlagTracker(Service):
    """Records abuse flags and hides comments that collect too many."""

    def __init__(
        self,
        flag_repository: FlagRepository,
        comment_repository: CommentRepository,
        auto_hide_threshold: int = 5,
    ) -> None:
        """Initialize flag tracker.

        Args:
            flag_repository: Flag repository
            comment_repository: Comment repository
            auto_hide_threshold: Flag count at which a visible comment is hidden
        """
        self.flag_repository = flag_repository
        self.comment_repository = comment_repository
        self.auto_hide_threshold = auto_hide_threshold

    async def flag(
        self, comment: Comment, flagger_id: UserId, reason: str | None = None
    ) -> Comment:
        """Flag a comment on behalf of a user.

        Args:
            comment: Comment being flagged
            flagger_id: User raising the flag
            reason: Optional free-text reason

        Returns:
            The comment with its updated flag count (and status, if auto-hidden)

        Raises:
            SelfFlagError: If the flagger wrote the comment
            DuplicateFlagError: If the flagger already flagged the comment
        """
        with logfire.span(
            "flag_tracker.flag",
            comment_id=str(comment.id),
            flagger_id=str(flagger_id),
        ):
            if flagger_id == comment.author_id:
                logfire.warn("Self flag attempt", comment_id=str(comment.id))
                raise SelfFlagError(str(comment.id))

            if await self.flag_repository.exists(comment.id, flagger_id):
                logfire.warn(
                    "Duplicate flag attempt",
                    comment_id=str(comment.id),
                    flagger_id=str(flagger_id),
                )
                raise DuplicateFlagError(str(comment.id), str(flagger_id))

            flag = Flag(
                id=FlagId(uuid4()),
                comment_id=comment.id,
                flagger_id=flagger_id,
                reason=reason,
                created_at=datetime.now(),
            )
            try:
                await self.flag_repository.save(flag)
            except IntegrityError:
                # Lost a race against a concurrent flag by the same user
                raise DuplicateFlagError(str(comment.id), str(flagger_id))

            updated = await self.comment_repository.increment_flags_count(comment.id)
            if updated is None:
                raise CommentNotFoundError(str(comment.id))

            hidden = moderation.auto_hide(updated, self.auto_hide_threshold)
            if hidden is not updated:
                updated = await self.comment_repository.save(hidden)
                logfire.info(
                    "Comment auto-hidden",
                    comment_id=str(comment.id),
                    flags_count=updated.flags_count,
                    threshold=self.auto_hide_threshold,
                )

            logfire.info(
                "Comment flagged",
                comment_id=str(comment.id),
                flags_count=updated.flags_count,
            )
            return updated
