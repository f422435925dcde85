"""PostgreSQL implementation of ContentItem repository."""

from typing import Optional

from sqlalchemy import func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from engage.domain.model import ContentItem
from engage.domain.repository import ContentItemRepository
from engage.domain.value import ContentItemId
from engage.persistence.mappers import content_item_to_dict, row_to_content_item
from engage.persistence.tables import content_items_table


class PostgresContentItemRepository(ContentItemRepository):
    """PostgreSQL implementation of ContentItemRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, content_item_id: ContentItemId) -> Optional[ContentItem]:
        """Find a content item by ID."""
        stmt = select(content_items_table).where(
            content_items_table.c.id == content_item_id
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_content_item(row._asdict()) if row else None

    async def save(self, content_item: ContentItem) -> ContentItem:
        """Save a content item (create or update)."""
        item_dict = content_item_to_dict(content_item)
        existing = await self.find_by_id(content_item.id)

        if existing:
            stmt = (
                update(content_items_table)
                .where(content_items_table.c.id == content_item.id)
                .values(**item_dict)
            )
        else:
            stmt = insert(content_items_table).values(**item_dict)

        await self.session.execute(stmt)
        await self.session.flush()
        return content_item

    async def increment_like_count(self, content_item_id: ContentItemId) -> Optional[int]:
        """Atomically increment like_count by 1."""
        stmt = (
            update(content_items_table)
            .where(content_items_table.c.id == content_item_id)
            .values(like_count=content_items_table.c.like_count + 1)
            .returning(content_items_table.c.like_count)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def decrement_like_count(self, content_item_id: ContentItemId) -> Optional[int]:
        """Atomically decrement like_count by 1 (minimum 0)."""
        stmt = (
            update(content_items_table)
            .where(content_items_table.c.id == content_item_id)
            .values(like_count=func.greatest(content_items_table.c.like_count - 1, 0))
            .returning(content_items_table.c.like_count)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def set_like_count(self, content_item_id: ContentItemId, count: int) -> None:
        """Overwrite like_count with a recomputed value."""
        stmt = (
            update(content_items_table)
            .where(content_items_table.c.id == content_item_id)
            .values(like_count=count)
        )
        await self.session.execute(stmt)
