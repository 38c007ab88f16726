"""Domain value types for comment moderation.

Value objects are immutable and defined by their values, not identity.
"""

from enum import Enum


class CommentStatus(str, Enum):
    """Visibility status of a comment.

    Only the moderation state machine moves a comment between these.
    """

    VISIBLE = "VISIBLE"
    HIDDEN = "HIDDEN"
    DELETED = "DELETED"


class ModerationAction(str, Enum):
    """Actions a moderator can apply to a comment."""

    HIDE = "HIDE"
    SHOW = "SHOW"
    RESTORE = "RESTORE"
    DELETE = "DELETE"


class Capability(str, Enum):
    """Capabilities granted to an actor by their rank.

    Ranks are stored as a bag of boolean columns; they are converted into a
    capability set once, when the actor is loaded.
    """

    ADMIN_VIEW = "admin_view"
    EXERCISE_ADD = "exercise_add"
    EXERCISE_EDIT = "exercise_edit"
    EXERCISE_DELETE = "exercise_delete"
    COMMENT_ADD = "comment_add"
    COMMENT_EDIT = "comment_edit"
    COMMENT_DELETE = "comment_delete"
