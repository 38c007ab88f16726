"""Moderation audit log implementations."""

from dataclasses import dataclass
from datetime import datetime

import logfire

from tutor.domain.audit import ModerationAuditLog
from tutor.domain.value import CommentId, ModerationAction, UserId


class LogfireModerationAuditLog(ModerationAuditLog):
    """Writes one structured logfire record per moderation action."""

    async def record(
        self,
        comment_id: CommentId,
        action: ModerationAction,
        moderator_id: UserId,
        reason: str | None,
    ) -> None:
        logfire.info(
            "Moderation audit: {action} on comment {comment_id}",
            action=action.value,
            comment_id=str(comment_id),
            moderator_id=str(moderator_id),
            reason=reason,
            audit=True,
        )


@dataclass(frozen=True)
class AuditEntry:
    comment_id: CommentId
    action: ModerationAction
    moderator_id: UserId
    reason: str | None
    recorded_at: datetime


class InMemoryModerationAuditLog(ModerationAuditLog):
    """Audit log kept in memory (for tests)."""

    def __init__(self) -> None:
        self.entries: list[AuditEntry] = []

    async def record(
        self,
        comment_id: CommentId,
        action: ModerationAction,
        moderator_id: UserId,
        reason: str | None,
    ) -> None:
        self.entries.append(
            AuditEntry(comment_id, action, moderator_id, reason, datetime.now())
        )
