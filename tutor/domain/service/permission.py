"""Permission evaluation for comment actions.

Actors are always passed in explicitly; nothing here looks up the
"current user".
"""

from tutor.domain.model.actor import Actor
from tutor.domain.model.comment import Comment
from tutor.domain.value import Capability

# Either capability makes an actor a moderator
MODERATOR_CAPABILITIES = frozenset({Capability.EXERCISE_EDIT, Capability.ADMIN_VIEW})


def is_author(actor: Actor, comment: Comment) -> bool:
    return actor.id == comment.author_id


def is_moderator(actor: Actor) -> bool:
    return not MODERATOR_CAPABILITIES.isdisjoint(actor.capabilities)


def can_edit(actor: Actor, comment: Comment) -> bool:
    return is_author(actor, comment) or is_moderator(actor)


def can_soft_delete(actor: Actor, comment: Comment) -> bool:
    return is_author(actor, comment) or is_moderator(actor)


def can_hard_delete(actor: Actor) -> bool:
    return is_moderator(actor)


def can_moderate(actor: Actor) -> bool:
    """HIDE, SHOW and RESTORE are reserved for moderators."""
    return is_moderator(actor)
