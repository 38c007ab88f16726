"""Per-author comment rate limiting."""

from datetime import datetime, timedelta

import logfire

from tutor.config import ModerationSettings
from tutor.domain.error import RateLimitExceededError
from tutor.domain.repository import CommentRepository
from tutor.domain.value import UserId

from .base import Service


class RateLimiter(Service):
    """Bounds how often an author may post.

    Two windows are checked against the author's existing comment
    timestamps; no counter state is kept and no slot is reserved, so two
    concurrent submissions can both pass before either commits.
    """

    def __init__(
        self,
        comment_repository: CommentRepository,
        settings: ModerationSettings,
    ) -> None:
        """Initialize rate limiter.

        Args:
            comment_repository: Comment repository
            settings: Moderation settings with window lengths and cap
        """
        self.comment_repository = comment_repository
        self.settings = settings

    async def check_rate_limit(
        self, author_id: UserId, now: datetime | None = None
    ) -> None:
        """Fail if the author may not post right now.

        A comment exactly ``short_window_seconds`` old no longer blocks, and
        the author may post until ``daily_cap`` comments exist in the daily
        window.

        Args:
            author_id: Author user ID
            now: Reference time (defaults to the current time)

        Raises:
            RateLimitExceededError: If either window is violated
        """
        now = now or datetime.now()
        short_window = self.settings.short_window_seconds

        with logfire.span("rate_limiter.check_rate_limit", author_id=str(author_id)):
            recent = await self.comment_repository.count_by_author_since(
                author_id, now - timedelta(seconds=short_window)
            )
            if recent > 0:
                logfire.warn(
                    "Comment rate limit hit (short window)",
                    author_id=str(author_id),
                    window_seconds=short_window,
                )
                raise RateLimitExceededError(
                    f"Please wait {short_window} seconds between comments",
                    retry_after=short_window,
                )

            daily = await self.comment_repository.count_by_author_since(
                author_id, now - timedelta(hours=self.settings.daily_window_hours)
            )
            if daily >= self.settings.daily_cap:
                logfire.warn(
                    "Comment rate limit hit (daily cap)",
                    author_id=str(author_id),
                    count=daily,
                    cap=self.settings.daily_cap,
                )
                raise RateLimitExceededError(
                    f"Daily limit of {self.settings.daily_cap} comments reached"
                )
