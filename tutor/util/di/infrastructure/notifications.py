"""Notification and audit infrastructure providers."""

from dishka import Scope, provide

from tutor.adapter.audit import LogfireModerationAuditLog
from tutor.adapter.notification import BroadcastCommentEventPublisher
from tutor.domain.audit import ModerationAuditLog
from tutor.domain.event import CommentEventPublisher
from tutor.util.di.base import ProviderBase


class NotificationsProvider(ProviderBase):
    """Notifications component base."""

    __mock_component__ = "notifications"


class ProdNotificationsProvider(NotificationsProvider):
    """Production provider: in-process broadcast and logfire audit records.

    The broadcast publisher is APP-scoped so subscribers registered by the
    real-time layer see events from every request.
    """

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_broadcast_publisher(self) -> BroadcastCommentEventPublisher:
        """Provide the shared broadcast publisher."""
        return BroadcastCommentEventPublisher()

    @provide(scope=Scope.APP)
    def get_event_publisher(
        self, publisher: BroadcastCommentEventPublisher
    ) -> CommentEventPublisher:
        """Expose the broadcast publisher through the domain port."""
        return publisher

    @provide(scope=Scope.APP)
    def get_audit_log(self) -> ModerationAuditLog:
        """Provide moderation audit log."""
        return LogfireModerationAuditLog()
