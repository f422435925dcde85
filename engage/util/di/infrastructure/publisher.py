"""Mutation publisher infrastructure providers."""

from dishka import Scope, provide

from engage.adapter.mutation import LogfireMutationPublisher
from engage.domain.service import MutationPublisher
from engage.util.di.base import ProviderBase


class PublisherProvider(ProviderBase):
    """Mutation publisher component base."""

    __mock_component__ = "publisher"


class ProdPublisherProvider(PublisherProvider):
    """Production publisher emitting logfire events."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_mutation_publisher(self) -> MutationPublisher:
        """Provide mutation publisher."""
        return LogfireMutationPublisher()
