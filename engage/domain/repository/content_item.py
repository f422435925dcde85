"""Content item repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from engage.domain.model.content_item import ContentItem
from engage.domain.value import ContentItemId


class ContentItemRepository(ABC):
    """Repository for ContentItem entity.

    Content items are created by the surrounding application; this core
    reads them and maintains their like counter.
    """

    @abstractmethod
    async def find_by_id(self, content_item_id: ContentItemId) -> Optional[ContentItem]:
        """Find a content item by ID.

        Args:
            content_item_id: The content item's unique identifier

        Returns:
            The content item if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, content_item: ContentItem) -> ContentItem:
        """Save a content item (create or update).

        Args:
            content_item: The content item to save

        Returns:
            The saved content item
        """
        pass

    @abstractmethod
    async def increment_like_count(self, content_item_id: ContentItemId) -> Optional[int]:
        """Atomically increment like_count by 1.

        Args:
            content_item_id: The content item ID

        Returns:
            The like count after the increment, or None if the
            row doesn't exist
        """
        pass

    @abstractmethod
    async def decrement_like_count(self, content_item_id: ContentItemId) -> Optional[int]:
        """Atomically decrement like_count by 1 (minimum 0).

        Args:
            content_item_id: The content item ID

        Returns:
            The like count after the decrement, or None if the
            row doesn't exist
        """
        pass

    @abstractmethod
    async def set_like_count(self, content_item_id: ContentItemId, count: int) -> None:
        """Overwrite like_count with a recomputed value.

        Only used by counter reconciliation.

        Args:
            content_item_id: The content item ID
            count: The recomputed like count
        """
        pass
