"""Moderation state machine.

Owns the comment visibility lifecycle::

    VISIBLE --HIDE / auto-hide--> HIDDEN --SHOW--> VISIBLE
    VISIBLE, HIDDEN --DELETE (soft)--> DELETED --RESTORE--> VISIBLE
    any --DELETE (hard)--> row removed

Every function is pure: it takes a frozen Comment and returns the next
one, or raises InvalidTransitionError when the current status does not
allow the action. Who may trigger a transition is decided by the caller.
"""

from datetime import datetime

from tutor.domain.error import InvalidModerationActionError, InvalidTransitionError
from tutor.domain.model.comment import Comment
from tutor.domain.value import CommentStatus, ModerationAction, UserId

_LIVE = (CommentStatus.VISIBLE, CommentStatus.HIDDEN)


def parse_action(action: str) -> ModerationAction:
    """Parse a moderation action name.

    Matching ignores case and surrounding whitespace.

    Raises:
        InvalidModerationActionError: If the name is not a known action
    """
    try:
        return ModerationAction(action.strip().upper())
    except (AttributeError, ValueError):
        raise InvalidModerationActionError(str(action))


def _require(comment: Comment, action: str, allowed: tuple[CommentStatus, ...]) -> None:
    if comment.status not in allowed:
        raise InvalidTransitionError(action, comment.status.value)


def hide(comment: Comment) -> Comment:
    _require(comment, "hide", _LIVE)
    return comment.model_copy(update={"status": CommentStatus.HIDDEN})


def show(comment: Comment) -> Comment:
    """Make a comment visible again and reset its flag count.

    Showing an already visible comment is a no-op apart from the reset.
    """
    _require(comment, "show", _LIVE)
    return comment.model_copy(update={"status": CommentStatus.VISIBLE, "flags_count": 0})


def restore(comment: Comment) -> Comment:
    _require(comment, "restore", (CommentStatus.DELETED,))
    return comment.model_copy(
        update={
            "status": CommentStatus.VISIBLE,
            "deleted_by": None,
            "deleted_at": None,
        }
    )


def soft_delete(comment: Comment, actor_id: UserId, now: datetime) -> Comment:
    _require(comment, "delete", _LIVE)
    return comment.model_copy(
        update={
            "status": CommentStatus.DELETED,
            "deleted_by": actor_id,
            "deleted_at": now,
        }
    )


def auto_hide(comment: Comment, threshold: int) -> Comment:
    """Hide a visible comment once its flag count reaches the threshold.

    Hidden and deleted comments are returned unchanged.
    """
    if comment.status is CommentStatus.VISIBLE and comment.flags_count >= threshold:
        return comment.model_copy(update={"status": CommentStatus.HIDDEN})
    return comment


def apply(
    comment: Comment,
    action: ModerationAction,
    actor_id: UserId,
    now: datetime,
) -> Comment:
    """Apply a moderator action. DELETE here means soft delete."""
    if action is ModerationAction.HIDE:
        return hide(comment)
    if action is ModerationAction.SHOW:
        return show(comment)
    if action is ModerationAction.RESTORE:
        return restore(comment)
    return soft_delete(comment, actor_id, now)
