"""Mutation signal port.

The surrounding application uses the "target mutated" signal to refresh
cached pages of a content item. It is emitted after a write commits.
"""

from abc import ABC, abstractmethod
from enum import Enum

from engage.domain.value import ContentItemId


class MutationReason(str, Enum):
    """Why a content item's engagement data changed."""

    LIKE_TOGGLED = "like_toggled"
    COMMENT_CREATED = "comment_created"
    COMMENT_UPDATED = "comment_updated"
    BEST_ANSWER_CHANGED = "best_answer_changed"
    COUNTERS_SYNCED = "counters_synced"


class MutationPublisher(ABC):
    """Publishes "target mutated" signals."""

    @abstractmethod
    async def publish(
        self, content_item_id: ContentItemId, reason: MutationReason
    ) -> None:
        """Signal that a content item's engagement data changed.

        Args:
            content_item_id: The content item whose views are stale
            reason: What changed
        """
        pass
