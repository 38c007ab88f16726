"""Handle on the current request's transaction.

The request-scoped session commits when the request container closes.
Domain errors are rendered into responses before that happens, so the
error handler aborts the transaction explicitly through this handle.
"""

from abc import ABC, abstractmethod

import logfire
from sqlalchemy.ext.asyncio import AsyncSession


class Transaction(ABC):
    """The unit of work of one request."""

    @abstractmethod
    async def rollback(self) -> None:
        """Discard everything the request has written so far."""
        pass


class SessionTransaction(Transaction):
    """Transaction backed by the request's SQLAlchemy session."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def rollback(self) -> None:
        if not self.session.in_transaction():
            return
        await self.session.rollback()
        logfire.warn("Request transaction rolled back")
