"""Dependency injection module."""

from typing import Type

from engage.util.di.application import ProdApplicationProvider
from engage.util.di.base import Component, ProviderBase
from engage.util.di.core import ProdConfigProvider
from engage.util.di.domain import ProdDomainProvider
from engage.util.di.infrastructure import (
    PersistenceProvider,
    ProdPersistenceProvider,
    ProdPublisherProvider,
    PublisherProvider,
)

# Single list - all providers treated uniformly
PROVIDERS: list[Type[ProviderBase]] = [
    # Core providers (not mockable)
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    # Infrastructure components (mockable)
    PersistenceProvider,
    PublisherProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Resolve the provider class to install for ``base``.

    Providers without subclasses are installed as-is. Providers with
    subclasses are swappable components ("persistence", "publisher") and
    the subclass whose ``__is_mock__`` matches ``use_mock`` is chosen.

    Raises:
        ValueError: If the component has no matching implementation
    """
    implementations = base.__subclasses__()
    if not implementations:
        return base

    for implementation in implementations:
        if getattr(implementation, "__is_mock__", False) == use_mock:
            return implementation

    component = getattr(base, "__mock_component__", base.__name__)
    raise ValueError(
        f"No {'mock' if use_mock else 'production'} implementation for {component}"
    )


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    # Core providers
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    # Infrastructure base classes
    "PersistenceProvider",
    "PublisherProvider",
    # Infrastructure implementations
    "ProdPersistenceProvider",
    "ProdPublisherProvider",
]
