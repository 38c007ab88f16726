"""Comment domain service.

Orchestrates comment creation, editing, deletion, flagging, moderation and
listing. Every public method runs inside the caller's request-scoped
transaction and raises before mutating anything when a check fails.
"""

from datetime import date, datetime, time
from uuid import uuid4

import logfire

from tutor.config import ModerationSettings
from tutor.domain.audit import ModerationAuditLog
from tutor.domain.error import (
    ActorNotFoundError,
    CommentNotFoundError,
    ExerciseNotCommentableError,
    ExerciseNotFoundError,
    ExerciseNotPublishedError,
    InvalidTransitionError,
    NotAuthorizedError,
    ValidationError,
)
from tutor.domain.event import CommentEventPublisher
from tutor.domain.model.actor import Actor
from tutor.domain.model.comment import (
    MAX_CONTENT_LENGTH,
    MAX_SESSION_ID_LENGTH,
    Comment,
)
from tutor.domain.model.event import CommentCreated
from tutor.domain.model.exercise import Exercise
from tutor.domain.repository import (
    ActorRepository,
    CommentRepository,
    ExerciseRepository,
    FlagRepository,
)
from tutor.domain.value import (
    CommentId,
    CommentStatus,
    ExerciseId,
    ModerationAction,
    UserId,
)

from . import moderation, permission
from .base import Service
from .flag_tracker import FlagTracker
from .rate_limiter import RateLimiter
from .threading_resolver import ThreadingResolver


def _validate_content(content: str | None) -> str:
    if content is None or not content.strip():
        raise ValidationError("Content is required")
    if len(content) > MAX_CONTENT_LENGTH:
        raise ValidationError(
            f"Content must be at most {MAX_CONTENT_LENGTH} characters"
        )
    return content


def _validate_session_id(session_id: str | None) -> str | None:
    if session_id is not None and len(session_id) > MAX_SESSION_ID_LENGTH:
        raise ValidationError(
            f"Session ID must be at most {MAX_SESSION_ID_LENGTH} characters"
        )
    return session_id


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        flag_repository: FlagRepository,
        exercise_repository: ExerciseRepository,
        actor_repository: ActorRepository,
        rate_limiter: RateLimiter,
        threading_resolver: ThreadingResolver,
        flag_tracker: FlagTracker,
        event_publisher: CommentEventPublisher,
        audit_log: ModerationAuditLog,
        settings: ModerationSettings,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            flag_repository: Flag repository
            exercise_repository: Exercise collaborator
            actor_repository: Actor collaborator
            rate_limiter: Per-author rate limiter
            threading_resolver: Parent comment resolver
            flag_tracker: Flag tracker
            event_publisher: Real-time event publisher
            audit_log: Moderation audit log
            settings: Moderation settings
        """
        self.comment_repository = comment_repository
        self.flag_repository = flag_repository
        self.exercise_repository = exercise_repository
        self.actor_repository = actor_repository
        self.rate_limiter = rate_limiter
        self.threading_resolver = threading_resolver
        self.flag_tracker = flag_tracker
        self.event_publisher = event_publisher
        self.audit_log = audit_log
        self.settings = settings

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    async def _require_comment(self, comment_id: CommentId) -> Comment:
        comment = await self.comment_repository.find_by_id(comment_id)
        if comment is None:
            logfire.warn("Comment not found", comment_id=str(comment_id))
            raise CommentNotFoundError(str(comment_id))
        return comment

    async def _require_actor(self, user_id: UserId) -> Actor:
        actor = await self.actor_repository.find_by_id(user_id)
        if actor is None:
            logfire.warn("Actor not found", user_id=str(user_id))
            raise ActorNotFoundError(str(user_id))
        return actor

    async def _require_exercise(self, exercise_id: ExerciseId) -> Exercise:
        exercise = await self.exercise_repository.find_by_id(exercise_id)
        if exercise is None:
            logfire.warn("Exercise not found", exercise_id=str(exercise_id))
            raise ExerciseNotFoundError(str(exercise_id))
        return exercise

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def create(
        self,
        content: str,
        exercise_id: ExerciseId | None,
        author_id: UserId,
        parent_id: CommentId | None = None,
        session_id: str | None = None,
    ) -> Comment:
        """Create a comment on an exercise or reply to another comment.

        Args:
            content: Comment text
            exercise_id: Exercise the comment is posted on
            author_id: Author user ID
            parent_id: Parent comment ID for replies (None for top-level)
            session_id: Tutoring session the comment was posted from

        Returns:
            Created comment

        Raises:
            ValidationError: If content is blank/too long, exercise_id is
                missing or session_id is too long
            ExerciseNotFoundError: If the exercise does not exist
            ExerciseNotPublishedError: If the exercise is not published
            ExerciseNotCommentableError: If the exercise does not allow comments
            ActorNotFoundError: If the author does not exist
            RateLimitExceededError: If the author posts too often
            ParentNotFoundError: If the parent is not a comment of the exercise
            InvalidParentStateError: If the parent is not visible
        """
        with logfire.span(
            "comment_service.create",
            exercise_id=str(exercise_id),
            author_id=str(author_id),
            parent_id=str(parent_id) if parent_id else None,
        ):
            content = _validate_content(content)
            session_id = _validate_session_id(session_id)
            if exercise_id is None:
                raise ValidationError("Exercise ID is required")

            exercise = await self._require_exercise(exercise_id)
            if not exercise.published:
                raise ExerciseNotPublishedError(str(exercise_id))
            if not exercise.commentable:
                raise ExerciseNotCommentableError(str(exercise_id))

            author = await self._require_actor(author_id)
            now = datetime.now()
            await self.rate_limiter.check_rate_limit(author_id, now)

            depth = 0
            if parent_id is not None:
                parent = await self.threading_resolver.resolve_parent(
                    exercise_id, parent_id
                )
                depth = parent.depth + 1

            comment = Comment(
                id=CommentId(uuid4()),
                exercise_id=exercise_id,
                author_id=author_id,
                content=content,
                parent_id=parent_id,
                depth=depth,
                session_id=session_id,
                status=CommentStatus.VISIBLE,
                flags_count=0,
                created_at=now,
            )
            saved = await self.comment_repository.save(comment)
            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                exercise_id=str(exercise_id),
                author_id=str(author_id),
                depth=depth,
            )

            await self._publish_created(saved, author)
            return saved

    async def _publish_created(self, comment: Comment, author: Actor) -> None:
        event = CommentCreated(
            comment_id=comment.id,
            exercise_id=comment.exercise_id,
            author_id=comment.author_id,
            author_name=author.username,
            content=comment.content,
            created_at=comment.created_at,
        )
        try:
            await self.event_publisher.publish(event)
        except Exception as e:
            # Real-time delivery is best effort and never blocks the comment
            logfire.warn(
                "Comment event publication failed",
                comment_id=str(comment.id),
                error=str(e),
            )

    async def _authorize_edit(self, comment_id: CommentId, editor_id: UserId) -> Comment:
        comment = await self._require_comment(comment_id)
        editor = await self._require_actor(editor_id)
        if not permission.can_edit(editor, comment):
            logfire.warn(
                "Unauthorized comment edit attempt",
                comment_id=str(comment_id),
                editor_id=str(editor_id),
            )
            raise NotAuthorizedError("edit", "comment", str(comment_id), str(editor_id))
        if comment.status is CommentStatus.DELETED:
            raise InvalidTransitionError("edit", comment.status.value)
        return comment

    async def _replace_content(self, comment: Comment, content: str) -> Comment:
        updated = comment.model_copy(
            update={"content": content, "edited_at": datetime.now()}
        )
        saved = await self.comment_repository.save(updated)
        logfire.info(
            "Comment content updated",
            comment_id=str(comment.id),
            content_length=len(content),
        )
        return saved

    async def edit(
        self, comment_id: CommentId, new_content: str, editor_id: UserId
    ) -> Comment:
        """Replace the content of a comment.

        Only the author or a moderator may edit.

        Raises:
            CommentNotFoundError: If the comment does not exist
            ActorNotFoundError: If the editor does not exist
            NotAuthorizedError: If the editor is neither author nor moderator
            InvalidTransitionError: If the comment is deleted
            ValidationError: If the new content is blank or too long
        """
        with logfire.span(
            "comment_service.edit",
            comment_id=str(comment_id),
            editor_id=str(editor_id),
        ):
            comment = await self._authorize_edit(comment_id, editor_id)
            content = _validate_content(new_content)
            return await self._replace_content(comment, content)

    async def patch(
        self,
        comment_id: CommentId,
        editor_id: UserId,
        content: str | None = None,
    ) -> Comment:
        """Partially update a comment.

        Missing or blank content leaves the comment untouched.
        """
        with logfire.span(
            "comment_service.patch",
            comment_id=str(comment_id),
            editor_id=str(editor_id),
        ):
            comment = await self._authorize_edit(comment_id, editor_id)
            if content is None or not content.strip():
                return comment
            return await self._replace_content(comment, _validate_content(content))

    async def delete(
        self, comment_id: CommentId, requester_id: UserId, soft: bool = True
    ) -> Comment | None:
        """Delete a comment.

        Soft delete keeps the row with status DELETED and is open to the
        author and moderators. Hard delete removes the row and is reserved
        for moderators.

        Returns:
            The soft-deleted comment, or None after a hard delete

        Raises:
            CommentNotFoundError: If the comment does not exist
            ActorNotFoundError: If the requester does not exist
            NotAuthorizedError: If the requester lacks permission
            InvalidTransitionError: If a soft delete targets a deleted comment
        """
        with logfire.span(
            "comment_service.delete",
            comment_id=str(comment_id),
            requester_id=str(requester_id),
            soft=soft,
        ):
            comment = await self._require_comment(comment_id)
            requester = await self._require_actor(requester_id)

            if not soft:
                if not permission.can_hard_delete(requester):
                    logfire.warn(
                        "Unauthorized hard delete attempt",
                        comment_id=str(comment_id),
                        requester_id=str(requester_id),
                    )
                    raise NotAuthorizedError(
                        "hard delete", "comment", str(comment_id), str(requester_id)
                    )
                await self.comment_repository.delete(comment_id)
                logfire.info("Comment hard deleted", comment_id=str(comment_id))
                return None

            if not permission.can_soft_delete(requester, comment):
                logfire.warn(
                    "Unauthorized delete attempt",
                    comment_id=str(comment_id),
                    requester_id=str(requester_id),
                )
                raise NotAuthorizedError(
                    "delete", "comment", str(comment_id), str(requester_id)
                )

            deleted = moderation.soft_delete(comment, requester_id, datetime.now())
            saved = await self.comment_repository.save(deleted)
            logfire.info("Comment soft deleted", comment_id=str(comment_id))
            return saved

    async def flag(
        self, comment_id: CommentId, flagger_id: UserId, reason: str | None = None
    ) -> Comment:
        """Flag a comment as abusive.

        Raises:
            CommentNotFoundError: If the comment does not exist
            ActorNotFoundError: If the flagger does not exist
            SelfFlagError: If the flagger wrote the comment
            DuplicateFlagError: If the flagger already flagged it
        """
        with logfire.span(
            "comment_service.flag",
            comment_id=str(comment_id),
            flagger_id=str(flagger_id),
        ):
            comment = await self._require_comment(comment_id)
            await self._require_actor(flagger_id)
            return await self.flag_tracker.flag(comment, flagger_id, reason)

    async def moderate(
        self,
        comment_id: CommentId,
        action: str,
        moderator_id: UserId,
        reason: str | None = None,
    ) -> Comment:
        """Apply a moderator action (HIDE, SHOW, RESTORE or DELETE).

        DELETE through moderation is a soft delete attributed to the
        moderator. SHOW also clears the comment's flags so its flag count
        stays equal to its flag records.

        The action name is parsed only after the comment and the caller
        have been checked.

        Raises:
            CommentNotFoundError: If the comment does not exist
            ActorNotFoundError: If the moderator does not exist
            NotAuthorizedError: If the actor is not a moderator
            InvalidModerationActionError: If the action name is unknown
            InvalidTransitionError: If the comment's status forbids the action
        """
        with logfire.span(
            "comment_service.moderate",
            comment_id=str(comment_id),
            action=action,
            moderator_id=str(moderator_id),
        ):
            comment = await self._require_comment(comment_id)
            moderator = await self._require_actor(moderator_id)
            if not permission.can_moderate(moderator):
                logfire.warn(
                    "Unauthorized moderation attempt",
                    comment_id=str(comment_id),
                    action=action,
                    moderator_id=str(moderator_id),
                )
                raise NotAuthorizedError(
                    "moderate", "comment", str(comment_id), str(moderator_id)
                )

            parsed = moderation.parse_action(action)
            updated = moderation.apply(comment, parsed, moderator_id, datetime.now())
            if parsed is ModerationAction.SHOW:
                await self.flag_repository.delete_by_comment(comment_id)
            saved = await self.comment_repository.save(updated)

            logfire.info(
                "Comment moderated",
                comment_id=str(comment_id),
                action=parsed.value,
                status=saved.status.value,
            )
            await self._record_audit(comment_id, parsed, moderator_id, reason)
            return saved

    async def _record_audit(
        self,
        comment_id: CommentId,
        action: ModerationAction,
        moderator_id: UserId,
        reason: str | None,
    ) -> None:
        try:
            await self.audit_log.record(comment_id, action, moderator_id, reason)
        except Exception as e:
            logfire.warn(
                "Moderation audit logging failed",
                comment_id=str(comment_id),
                action=action.value,
                error=str(e),
            )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get(self, comment_id: CommentId) -> Comment:
        """Get a comment by ID regardless of status.

        Raises:
            CommentNotFoundError: If the comment does not exist
        """
        return await self._require_comment(comment_id)

    async def list_for_exercise(
        self,
        exercise_id: ExerciseId,
        page: int = 0,
        page_size: int | None = None,
        parent_id: CommentId | None = None,
        status: CommentStatus | None = None,
    ) -> list[Comment]:
        """List one page of top-level comments or of replies to a comment.

        No status filter is applied unless ``status`` is given, so hidden
        and deleted comments are included by default.

        Args:
            exercise_id: Exercise ID
            page: Zero-based page number
            page_size: Page size (defaults to the configured page size)
            parent_id: List replies to this comment instead of top-level ones
            status: Only return comments with this status

        Raises:
            ValidationError: If paging parameters are out of range
            ExerciseNotFoundError: If the exercise does not exist
            ParentNotFoundError: If the parent is not a comment of the exercise
        """
        if page_size is None:
            page_size = self.settings.default_page_size
        if page < 0:
            raise ValidationError("Page must not be negative")
        if not 1 <= page_size <= self.settings.max_page_size:
            raise ValidationError(
                f"Page size must be between 1 and {self.settings.max_page_size}"
            )

        with logfire.span(
            "comment_service.list_for_exercise",
            exercise_id=str(exercise_id),
            parent_id=str(parent_id) if parent_id else None,
            page=page,
            page_size=page_size,
        ):
            await self._require_exercise(exercise_id)
            offset = page * page_size

            if parent_id is None:
                comments = await self.comment_repository.find_top_level(
                    exercise_id, limit=page_size, offset=offset, status=status
                )
            else:
                await self.threading_resolver.find_parent(exercise_id, parent_id)
                comments = await self.comment_repository.find_replies(
                    parent_id, limit=page_size, offset=offset, status=status
                )

            logfire.info(
                "Comments listed for exercise",
                exercise_id=str(exercise_id),
                count=len(comments),
            )
            return comments

    async def list_by_session(self, session_id: str) -> list[Comment]:
        return await self.comment_repository.find_by_session(session_id)

    async def list_by_status(self, status: CommentStatus) -> list[Comment]:
        return await self.comment_repository.find_by_status(status)

    async def list_by_min_flags(self, min_flags: int) -> list[Comment]:
        if min_flags < 0:
            raise ValidationError("Minimum flag count must not be negative")
        return await self.comment_repository.find_by_min_flags(min_flags)

    async def search(self, text: str | None) -> list[Comment]:
        """Search comment content and author usernames.

        Blank text returns every comment.
        """
        if text is None or not text.strip():
            return await self.comment_repository.find_all()
        return await self.comment_repository.search(text.strip())

    async def filter_by_date_range(self, start: date, end: date) -> list[Comment]:
        """List comments created between two days, both inclusive."""
        if start > end:
            raise ValidationError("Start date must not be after end date")
        return await self.comment_repository.find_by_date_range(
            datetime.combine(start, time.min), datetime.combine(end, time.max)
        )

    async def filter_by_author(self, author_id: UserId) -> list[Comment]:
        return await self.comment_repository.find_by_author(author_id)

    async def filter_by_exercise(self, exercise_id: ExerciseId) -> list[Comment]:
        return await self.comment_repository.find_by_exercise(exercise_id)

    async def list_recent(self, limit: int = 10) -> list[Comment]:
        if limit <= 0:
            return []
        return await self.comment_repository.find_recent(limit)
