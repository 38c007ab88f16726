"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from tutor.config import Settings
from tutor.domain.repository import (
    ActorRepository,
    CommentRepository,
    ExerciseRepository,
    FlagRepository,
)
from tutor.persistence.database import create_engine, create_session_factory
from tutor.persistence.repository import (
    PostgresActorRepository,
    PostgresCommentRepository,
    PostgresExerciseRepository,
    PostgresFlagRepository,
)
from tutor.persistence.transaction import SessionTransaction, Transaction
from tutor.util.di.base import ProviderBase
from tutor.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_engine(self, settings: Settings) -> AsyncEngine:
        """Provide database engine."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        return engine

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        The session is committed at the end of the request if no exception
        occurred, or rolled back if one was raised. Domain errors are turned
        into responses before the container closes; their handler rolls back
        through the request Transaction, leaving nothing to commit here.
        """
        async with session_factory() as session:
            try:
                yield session
                if session.in_transaction():
                    await session.commit()
                    logfire.debug("Session committed")
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_transaction(self, session: AsyncSession) -> Transaction:
        """Provide the request transaction handle."""
        return SessionTransaction(session)

    @provide(scope=Scope.REQUEST)
    def get_comment_repository(self, session: AsyncSession) -> CommentRepository:
        """Provide Comment repository."""
        return PostgresCommentRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_flag_repository(self, session: AsyncSession) -> FlagRepository:
        """Provide Flag repository."""
        return PostgresFlagRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_exercise_repository(self, session: AsyncSession) -> ExerciseRepository:
        """Provide Exercise repository."""
        return PostgresExerciseRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_actor_repository(self, session: AsyncSession) -> ActorRepository:
        """Provide Actor repository."""
        return PostgresActorRepository(session)
