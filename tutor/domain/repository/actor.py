"""Actor repository interface (read-only collaborator)."""

from abc import ABC, abstractmethod
from typing import Optional

from tutor.domain.model.actor import Actor
from tutor.domain.value import UserId


class ActorRepository(ABC):
    """Read access to users and the capabilities of their rank."""

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[Actor]:
        """Find a user by ID, with capabilities resolved from their rank.

        Args:
            user_id: The user's unique identifier

        Returns:
            The actor if found, None otherwise
        """
        pass
