"""Infrastructure DI providers."""

from .persistence import PersistenceProvider, ProdPersistenceProvider
from .publisher import ProdPublisherProvider, PublisherProvider

__all__ = [
    "PersistenceProvider",
    "ProdPersistenceProvider",
    "ProdPublisherProvider",
    "PublisherProvider",
]
