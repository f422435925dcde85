"""In-memory content item repository for testing."""

from typing import Optional

from engage.domain.model.content_item import ContentItem
from engage.domain.repository.content_item import ContentItemRepository
from engage.domain.value import ContentItemId

from .store import InMemoryStore


class InMemoryContentItemRepository(ContentItemRepository):
    """In-memory implementation of ContentItemRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def find_by_id(self, content_item_id: ContentItemId) -> Optional[ContentItem]:
        """Find a content item by ID."""
        return self.store.content_items.get(content_item_id)

    async def save(self, content_item: ContentItem) -> ContentItem:
        """Save a content item."""
        self.store.content_items[content_item.id] = content_item
        return content_item

    async def increment_like_count(self, content_item_id: ContentItemId) -> Optional[int]:
        """Increment like_count by 1."""
        return self._set(content_item_id, lambda count: count + 1)

    async def decrement_like_count(self, content_item_id: ContentItemId) -> Optional[int]:
        """Decrement like_count by 1 (minimum 0)."""
        return self._set(content_item_id, lambda count: max(count - 1, 0))

    async def set_like_count(self, content_item_id: ContentItemId, count: int) -> None:
        """Overwrite like_count."""
        self._set(content_item_id, lambda _: count)

    def _set(self, content_item_id: ContentItemId, change) -> Optional[int]:
        item = self.store.content_items.get(content_item_id)
        if not item:
            return None
        updated = item.model_copy(update={"like_count": change(item.like_count)})
        self.store.content_items[content_item_id] = updated
        return updated.like_count
