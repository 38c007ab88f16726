"""Actor (user) as seen by the comment subsystem."""

from pydantic import Field

from tutor.domain.model.common import DomainModel
from tutor.domain.value import Capability, UserId


class Actor(DomainModel):
    """A user acting on comments, with the capabilities of their rank."""

    id: UserId
    username: str
    capabilities: frozenset[Capability] = Field(default_factory=frozenset)

    def has_capability(self, capability: Capability) -> bool:
        return capability in self.capabilities
