"""PostgreSQL implementation of Comment repository."""

from datetime import datetime
from typing import List, Optional, Sequence

from sqlalchemy import func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from engage.domain.model import Comment
from engage.domain.repository import CommentRepository
from engage.domain.value import CommentId, ContentItemId
from engage.persistence.mappers import comment_to_dict, row_to_comment
from engage.persistence.tables import comments_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_by_content_item(self, content_item_id: ContentItemId) -> List[Comment]:
        """Find all comments on a content item as flat rows."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.content_item_id == content_item_id)
            .order_by(comments_table.c.created_at, comments_table.c.id)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def find_replies(self, parent_id: CommentId) -> List[Comment]:
        """Find the direct replies to a comment, oldest first."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.parent_id == parent_id)
            .order_by(comments_table.c.created_at, comments_table.c.id)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def find_many(
        self,
        content_item_id: Optional[ContentItemId] = None,
        comment_ids: Optional[Sequence[CommentId]] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> List[Comment]:
        """Find comments for counter reconciliation."""
        stmt = select(comments_table)

        if content_item_id is not None:
            stmt = stmt.where(comments_table.c.content_item_id == content_item_id)
        if comment_ids is not None:
            stmt = stmt.where(comments_table.c.id.in_(comment_ids))

        stmt = (
            stmt.order_by(comments_table.c.created_at, comments_table.c.id)
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def find_best_answer(self, content_item_id: ContentItemId) -> Optional[Comment]:
        """Find the comment currently flagged as best answer."""
        stmt = select(comments_table).where(
            comments_table.c.content_item_id == content_item_id,
            comments_table.c.is_best_answer.is_(True),
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update)."""
        comment_dict = comment_to_dict(comment)
        existing = await self.find_by_id(comment.id)

        if existing:
            stmt = (
                update(comments_table)
                .where(comments_table.c.id == comment.id)
                .values(**comment_dict)
            )
        else:
            stmt = insert(comments_table).values(**comment_dict)

        await self.session.execute(stmt)
        await self.session.flush()
        return comment

    async def update_content(self, comment_id: CommentId, content: str) -> Optional[Comment]:
        """Update the content of a comment and bump updated_at."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(content=content, updated_at=datetime.now())
            .returning(comments_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        if row is None:
            return None

        await self.session.flush()
        return row_to_comment(row._asdict())

    async def increment_replies_count(self, comment_id: CommentId) -> Optional[int]:
        """Atomically increment replies_count by 1."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(replies_count=comments_table.c.replies_count + 1)
            .returning(comments_table.c.replies_count)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def increment_like_count(self, comment_id: CommentId) -> Optional[int]:
        """Atomically increment like_count by 1."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(like_count=comments_table.c.like_count + 1)
            .returning(comments_table.c.like_count)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def decrement_like_count(self, comment_id: CommentId) -> Optional[int]:
        """Atomically decrement like_count by 1 (minimum 0)."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(like_count=func.greatest(comments_table.c.like_count - 1, 0))
            .returning(comments_table.c.like_count)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def set_best_answer(self, comment_id: CommentId, is_best_answer: bool) -> None:
        """Set or clear the best answer flag on one comment."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(is_best_answer=is_best_answer)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def clear_best_answers(self, content_item_id: ContentItemId) -> int:
        """Clear the best answer flag on every comment of a content item."""
        stmt = (
            update(comments_table)
            .where(
                comments_table.c.content_item_id == content_item_id,
                comments_table.c.is_best_answer.is_(True),
            )
            .values(is_best_answer=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]

    async def count_replies(self, comment_ids: Sequence[CommentId]) -> dict[CommentId, int]:
        """Count stored child rows per parent (batch query)."""
        if not comment_ids:
            return {}

        stmt = (
            select(comments_table.c.parent_id, func.count())
            .where(comments_table.c.parent_id.in_(comment_ids))
            .group_by(comments_table.c.parent_id)
        )
        result = await self.session.execute(stmt)
        counts = {comment_id: 0 for comment_id in comment_ids}
        for parent_id, count in result.fetchall():
            counts[CommentId(parent_id)] = count
        return counts

    async def set_counters(
        self,
        comment_id: CommentId,
        like_count: Optional[int] = None,
        replies_count: Optional[int] = None,
    ) -> None:
        """Overwrite counters with recomputed values."""
        values = {}
        if like_count is not None:
            values["like_count"] = like_count
        if replies_count is not None:
            values["replies_count"] = replies_count
        if not values:
            return

        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(**values)
        )
        await self.session.execute(stmt)
