"""Event publishing port."""

from abc import ABC, abstractmethod

from tutor.domain.model.event import CommentCreated


class CommentEventPublisher(ABC):
    """Hands comment events to real-time consumers.

    Delivery is fire-and-forget: publishers may drop events, and callers
    must not depend on delivery for correctness.
    """

    @abstractmethod
    async def publish(self, event: CommentCreated) -> None:
        pass
