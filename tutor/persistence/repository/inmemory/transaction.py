"""In-memory transaction for testing."""

from tutor.persistence.transaction import Transaction


class InMemoryTransaction(Transaction):
    """Counts rollbacks; in-memory repositories have nothing to undo."""

    def __init__(self) -> None:
        self.rollbacks = 0

    async def rollback(self) -> None:
        self.rollbacks += 1
