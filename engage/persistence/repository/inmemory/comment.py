"""In-memory comment repository for testing."""

from datetime import datetime
from typing import Optional, Sequence

from engage.domain.model.comment import Comment
from engage.domain.repository.comment import CommentRepository
from engage.domain.value import CommentId, ContentItemId

from .store import InMemoryStore


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self.store.comments.get(comment_id)

    async def find_by_content_item(self, content_item_id: ContentItemId) -> list[Comment]:
        """Find all comments on a content item as flat rows."""
        comments = [
            c for c in self.store.comments.values() if c.content_item_id == content_item_id
        ]
        comments.sort(key=lambda c: (c.created_at, c.id))
        return comments

    async def find_replies(self, parent_id: CommentId) -> list[Comment]:
        """Find the direct replies to a comment, oldest first."""
        replies = [c for c in self.store.comments.values() if c.parent_id == parent_id]
        replies.sort(key=lambda c: (c.created_at, c.id))
        return replies

    async def find_many(
        self,
        content_item_id: Optional[ContentItemId] = None,
        comment_ids: Optional[Sequence[CommentId]] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Comment]:
        """Find comments for counter reconciliation."""
        comments = list(self.store.comments.values())
        if content_item_id is not None:
            comments = [c for c in comments if c.content_item_id == content_item_id]
        if comment_ids is not None:
            wanted = set(comment_ids)
            comments = [c for c in comments if c.id in wanted]

        comments.sort(key=lambda c: (c.created_at, c.id))
        return comments[offset : offset + limit]

    async def find_best_answer(self, content_item_id: ContentItemId) -> Optional[Comment]:
        """Find the comment currently flagged as best answer."""
        for comment in self.store.comments.values():
            if comment.content_item_id == content_item_id and comment.is_best_answer:
                return comment
        return None

    async def save(self, comment: Comment) -> Comment:
        """Save a comment."""
        self.store.comments[comment.id] = comment
        return comment

    async def update_content(self, comment_id: CommentId, content: str) -> Optional[Comment]:
        """Update the content of a comment and bump updated_at."""
        comment = self.store.comments.get(comment_id)
        if not comment:
            return None

        updated = comment.model_copy(
            update={"content": content, "updated_at": datetime.now()}
        )
        self.store.comments[comment_id] = updated
        return updated

    async def increment_replies_count(self, comment_id: CommentId) -> Optional[int]:
        """Increment replies_count by 1."""
        comment = self._update(comment_id, lambda c: {"replies_count": c.replies_count + 1})
        return comment.replies_count if comment else None

    async def increment_like_count(self, comment_id: CommentId) -> Optional[int]:
        """Increment like_count by 1."""
        comment = self._update(comment_id, lambda c: {"like_count": c.like_count + 1})
        return comment.like_count if comment else None

    async def decrement_like_count(self, comment_id: CommentId) -> Optional[int]:
        """Decrement like_count by 1 (minimum 0)."""
        comment = self._update(
            comment_id, lambda c: {"like_count": max(c.like_count - 1, 0)}
        )
        return comment.like_count if comment else None

    async def set_best_answer(self, comment_id: CommentId, is_best_answer: bool) -> None:
        """Set or clear the best answer flag on one comment."""
        self._update(comment_id, lambda c: {"is_best_answer": is_best_answer})

    async def clear_best_answers(self, content_item_id: ContentItemId) -> int:
        """Clear the best answer flag on every comment of a content item."""
        flagged = [
            c.id
            for c in self.store.comments.values()
            if c.content_item_id == content_item_id and c.is_best_answer
        ]
        for comment_id in flagged:
            self._update(comment_id, lambda c: {"is_best_answer": False})
        return len(flagged)

    async def count_replies(self, comment_ids: Sequence[CommentId]) -> dict[CommentId, int]:
        """Count stored child rows per parent (batch query)."""
        counts = {comment_id: 0 for comment_id in comment_ids}
        for comment in self.store.comments.values():
            if comment.parent_id in counts:
                counts[comment.parent_id] += 1
        return counts

    async def set_counters(
        self,
        comment_id: CommentId,
        like_count: Optional[int] = None,
        replies_count: Optional[int] = None,
    ) -> None:
        """Overwrite counters."""
        values = {}
        if like_count is not None:
            values["like_count"] = like_count
        if replies_count is not None:
            values["replies_count"] = replies_count
        if values:
            self._update(comment_id, lambda c: values)

    def _update(self, comment_id: CommentId, change) -> Optional[Comment]:
        comment = self.store.comments.get(comment_id)
        if not comment:
            return None
        updated = comment.model_copy(update=change(comment))
        self.store.comments[comment_id] = updated
        return updated
