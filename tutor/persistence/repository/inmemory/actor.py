"""In-memory actor repository for testing."""

from typing import Optional

from tutor.domain.model.actor import Actor
from tutor.domain.repository.actor import ActorRepository
from tutor.domain.value import UserId


class InMemoryActorRepository(ActorRepository):
    """In-memory implementation of ActorRepository for testing."""

    def __init__(self) -> None:
        self._actors: dict[UserId, Actor] = {}

    def add(self, actor: Actor) -> Actor:
        """Seed an actor (users and ranks are owned elsewhere)."""
        self._actors[actor.id] = actor
        return actor

    async def find_by_id(self, user_id: UserId) -> Optional[Actor]:
        return self._actors.get(user_id)
