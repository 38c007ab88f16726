"""Dependency injection module.

``PROVIDERS`` lists every provider the containers are built from. Core
providers are used as they are. Component bases (persistence,
notifications) are swapped for their production or in-memory subclass.
"""

from typing import Type

from tutor.util.di.application import ProdApplicationProvider
from tutor.util.di.base import Component, ProviderBase
from tutor.util.di.core import ProdConfigProvider
from tutor.util.di.domain import ProdDomainProvider
from tutor.util.di.infrastructure import (
    NotificationsProvider,
    PersistenceProvider,
    ProdNotificationsProvider,
    ProdPersistenceProvider,
)

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    PersistenceProvider,
    NotificationsProvider,
]


def is_component(base: Type[ProviderBase]) -> bool:
    return base.__mock_component__ is not None


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Resolve a provider entry to the class to instantiate.

    Args:
        base: Entry of ``PROVIDERS``
        use_mock: Pick the in-memory implementation of a component

    Raises:
        ValueError: If the component has no implementation of that kind
    """
    if not is_component(base):
        return base

    for implementation in base.__subclasses__():
        if implementation.__is_mock__ == use_mock:
            return implementation

    kind = "in-memory" if use_mock else "production"
    raise ValueError(f"No {kind} provider registered for '{base.__mock_component__}'")


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    "is_component",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "NotificationsProvider",
    "PersistenceProvider",
    "ProdNotificationsProvider",
    "ProdPersistenceProvider",
]
