"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from engage.domain.model.comment import Comment
from engage.domain.value import CommentId, ContentItemId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_content_item(self, content_item_id: ContentItemId) -> List[Comment]:
        """Find all comments on a content item as flat rows.

        Rows are returned ordered by created_at ascending; tree assembly
        happens in the domain layer.

        Args:
            content_item_id: The content item ID

        Returns:
            List of comments
        """
        pass

    @abstractmethod
    async def find_replies(self, parent_id: CommentId) -> List[Comment]:
        """Find the direct replies to a comment, oldest first.

        Args:
            parent_id: The parent comment ID

        Returns:
            Replies ordered by created_at, then id
        """
        pass

    @abstractmethod
    async def find_many(
        self,
        content_item_id: Optional[ContentItemId] = None,
        comment_ids: Optional[Sequence[CommentId]] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> List[Comment]:
        """Find comments for counter reconciliation.

        Args:
            content_item_id: Restrict to one content item (None for all)
            comment_ids: Restrict to these comments (None for all)
            limit: Maximum number of comments to return
            offset: Number of comments to skip

        Returns:
            List of comments ordered by created_at, then id
        """
        pass

    @abstractmethod
    async def find_best_answer(self, content_item_id: ContentItemId) -> Optional[Comment]:
        """Find the comment currently flagged as best answer.

        Args:
            content_item_id: The content item ID

        Returns:
            The best answer comment if one is selected, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update).

        Args:
            comment: The comment to save

        Returns:
            The saved comment
        """
        pass

    @abstractmethod
    async def update_content(self, comment_id: CommentId, content: str) -> Optional[Comment]:
        """Update the content of a comment and bump updated_at.

        Args:
            comment_id: The comment ID
            content: New, already validated content

        Returns:
            The updated comment, or None if the comment doesn't exist
        """
        pass

    @abstractmethod
    async def increment_replies_count(self, comment_id: CommentId) -> Optional[int]:
        """Atomically increment replies_count by 1.

        Args:
            comment_id: The parent comment ID

        Returns:
            The replies count after the increment, or None if the
            row doesn't exist
        """
        pass

    @abstractmethod
    async def increment_like_count(self, comment_id: CommentId) -> Optional[int]:
        """Atomically increment like_count by 1.

        Args:
            comment_id: The comment ID

        Returns:
            The like count after the increment, or None if the
            row doesn't exist
        """
        pass

    @abstractmethod
    async def decrement_like_count(self, comment_id: CommentId) -> Optional[int]:
        """Atomically decrement like_count by 1 (minimum 0).

        Args:
            comment_id: The comment ID

        Returns:
            The like count after the decrement, or None if the
            row doesn't exist
        """
        pass

    @abstractmethod
    async def set_best_answer(self, comment_id: CommentId, is_best_answer: bool) -> None:
        """Set or clear the best answer flag on one comment.

        Args:
            comment_id: The comment ID
            is_best_answer: New flag value
        """
        pass

    @abstractmethod
    async def clear_best_answers(self, content_item_id: ContentItemId) -> int:
        """Clear the best answer flag on every comment of a content item.

        Args:
            content_item_id: The content item ID

        Returns:
            Number of comments that were flagged
        """
        pass

    @abstractmethod
    async def count_replies(self, comment_ids: Sequence[CommentId]) -> dict[CommentId, int]:
        """Count stored child rows per parent (batch query).

        Args:
            comment_ids: Parent comment IDs

        Returns:
            Mapping of comment ID to its number of direct children
            (0 for comments without children)
        """
        pass

    @abstractmethod
    async def set_counters(
        self,
        comment_id: CommentId,
        like_count: Optional[int] = None,
        replies_count: Optional[int] = None,
    ) -> None:
        """Overwrite counters with recomputed values.

        Only used by counter reconciliation. None leaves a counter unchanged.

        Args:
            comment_id: The comment ID
            like_count: Recomputed like count
            replies_count: Recomputed replies count
        """
        pass
