"""Domain model entities for comment moderation."""

from tutor.domain.model.actor import Actor
from tutor.domain.model.comment import Comment
from tutor.domain.model.event import CommentCreated
from tutor.domain.model.exercise import Exercise
from tutor.domain.model.flag import Flag

__all__ = [
    "Actor",
    "Comment",
    "CommentCreated",
    "Exercise",
    "Flag",
]
