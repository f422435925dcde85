"""Mock providers for testing."""

from .persistence import MockPersistenceProvider
from .publisher import MockPublisherProvider, RecordingMutationPublisher
from .container import build_test_container

__all__ = [
    "MockPersistenceProvider",
    "MockPublisherProvider",
    "RecordingMutationPublisher",
    "build_test_container",
]
