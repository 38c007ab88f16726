"""Mock providers for testing."""

from .notifications import MockNotificationsProvider
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "MockNotificationsProvider",
    "MockPersistenceProvider",
    "build_test_container",
]
