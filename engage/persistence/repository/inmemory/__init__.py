"""In-memory repository implementations for testing."""

from .comment import InMemoryCommentRepository
from .content_item import InMemoryContentItemRepository
from .like import InMemoryLikeRepository
from .store import InMemoryStore
from .unit_of_work import InMemoryUnitOfWork

__all__ = [
    "InMemoryCommentRepository",
    "InMemoryContentItemRepository",
    "InMemoryLikeRepository",
    "InMemoryStore",
    "InMemoryUnitOfWork",
]
