"""Domain layer DI providers."""

from dishka import Scope, provide

from tutor.config import AuthSettings, ModerationSettings
from tutor.domain.audit import ModerationAuditLog
from tutor.domain.event import CommentEventPublisher
from tutor.domain.repository import (
    ActorRepository,
    CommentRepository,
    ExerciseRepository,
    FlagRepository,
)
from tutor.domain.service import (
    CommentService,
    FlagTracker,
    JWTService,
    RateLimiter,
    ThreadingResolver,
)
from tutor.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_rate_limiter(
        self, comment_repository: CommentRepository, settings: ModerationSettings
    ) -> RateLimiter:
        """Provide per-author rate limiter."""
        return RateLimiter(comment_repository=comment_repository, settings=settings)

    @provide
    def get_threading_resolver(
        self, comment_repository: CommentRepository, settings: ModerationSettings
    ) -> ThreadingResolver:
        """Provide threading resolver."""
        return ThreadingResolver(
            comment_repository=comment_repository,
            max_depth=settings.max_thread_depth,
        )

    @provide
    def get_flag_tracker(
        self,
        flag_repository: FlagRepository,
        comment_repository: CommentRepository,
        settings: ModerationSettings,
    ) -> FlagTracker:
        """Provide flag tracker."""
        return FlagTracker(
            flag_repository=flag_repository,
            comment_repository=comment_repository,
            auto_hide_threshold=settings.auto_hide_threshold,
        )

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        flag_repository: FlagRepository,
        exercise_repository: ExerciseRepository,
        actor_repository: ActorRepository,
        rate_limiter: RateLimiter,
        threading_resolver: ThreadingResolver,
        flag_tracker: FlagTracker,
        event_publisher: CommentEventPublisher,
        audit_log: ModerationAuditLog,
        settings: ModerationSettings,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            flag_repository=flag_repository,
            exercise_repository=exercise_repository,
            actor_repository=actor_repository,
            rate_limiter=rate_limiter,
            threading_resolver=threading_resolver,
            flag_tracker=flag_tracker,
            event_publisher=event_publisher,
            audit_log=audit_log,
            settings=settings,
        )
