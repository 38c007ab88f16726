"""Infrastructure providers."""

# Import bases
from .notifications import NotificationsProvider
from .persistence import PersistenceProvider

# Import implementations (needed for __subclasses__())
from .notifications import ProdNotificationsProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401

__all__ = [
    "NotificationsProvider",
    "PersistenceProvider",
    "ProdNotificationsProvider",
    "ProdPersistenceProvider",
]
