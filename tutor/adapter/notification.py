"""Comment event publishers.

The real-time layer (WebSocket push, live feeds) lives outside this
service. It registers async callbacks on the broadcast publisher at
start-up and receives every CommentCreated event after the comment is
stored.
"""

from collections.abc import Awaitable, Callable

import logfire

from tutor.adapter.error import PublishError
from tutor.domain.event import CommentEventPublisher
from tutor.domain.model.event import CommentCreated

Subscriber = Callable[[CommentCreated], Awaitable[None]]


class BroadcastCommentEventPublisher(CommentEventPublisher):
    """Fans events out to in-process subscribers.

    Every subscriber is called even if an earlier one fails; failures are
    reported together afterwards.
    """

    def __init__(self) -> None:
        self._subscribers: list[Subscriber] = []

    def subscribe(self, subscriber: Subscriber) -> None:
        self._subscribers.append(subscriber)

    def unsubscribe(self, subscriber: Subscriber) -> None:
        if subscriber in self._subscribers:
            self._subscribers.remove(subscriber)

    async def publish(self, event: CommentCreated) -> None:
        """Deliver an event to every subscriber.

        Raises:
            PublishError: If any subscriber raised
        """
        failures: list[Exception] = []
        for subscriber in list(self._subscribers):
            try:
                await subscriber(event)
            except Exception as e:
                failures.append(e)

        logfire.debug(
            "Comment event broadcast",
            comment_id=str(event.comment_id),
            subscribers=len(self._subscribers),
            failures=len(failures),
        )
        if failures:
            raise PublishError(failures)


class RecordingCommentEventPublisher(CommentEventPublisher):
    """Publisher that keeps every event in memory (for tests)."""

    def __init__(self) -> None:
        self.events: list[CommentCreated] = []

    async def publish(self, event: CommentCreated) -> None:
        self.events.append(event)
