"""Flag entity.

A flag is one user's abuse report against one comment.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from tutor.domain.model.common import DomainModel
from tutor.domain.value import CommentId, FlagId, UserId


class Flag(DomainModel):
    """Flag entity.

    Business rules:
    - One flag per user per comment (enforced by database unique constraint)
    - Authors cannot flag their own comments
    """

    id: FlagId
    comment_id: CommentId
    flagger_id: UserId
    reason: Optional[str] = Field(default=None, max_length=500)
    created_at: datetime = Field(default_factory=datetime.now)
