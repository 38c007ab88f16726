"""Strongly typed identifiers for the comment moderation domain.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

# Core domain entity identifiers
CommentId = NewType("CommentId", UUID)
FlagId = NewType("FlagId", UUID)

# Identifiers owned by external collaborators
ExerciseId = NewType("ExerciseId", UUID)
UserId = NewType("UserId", UUID)
