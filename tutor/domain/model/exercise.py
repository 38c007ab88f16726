"""Exercise as seen by the comment subsystem.

Exercises are owned by another part of the platform; only the fields that
gate commenting and the title shown in read views are loaded here.
"""

from tutor.domain.model.common import DomainModel
from tutor.domain.value import ExerciseId


class Exercise(DomainModel):
    """Read-only exercise view."""

    id: ExerciseId
    title: str
    published: bool = False
    commentable: bool = False
