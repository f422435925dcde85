"""PostgreSQL implementation of Like repository."""

from typing import List, Optional, Sequence
from uuid import UUID

from sqlalchemy import and_, delete, func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from engage.domain.model import Like
from engage.domain.repository import LikeRepository
from engage.domain.value import LikeTargetType, UserId
from engage.persistence.mappers import like_to_dict, row_to_like
from engage.persistence.tables import likes_table


class PostgresLikeRepository(LikeRepository):
    """PostgreSQL implementation of LikeRepository.

    Uniqueness is enforced by the unique_like constraint, so a duplicate
    insert raises IntegrityError at flush.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_user_and_target(
        self,
        user_id: UserId,
        target_type: LikeTargetType,
        target_id: UUID,
    ) -> Optional[Like]:
        """Find a user's like on a specific target."""
        stmt = select(likes_table).where(
            and_(
                likes_table.c.user_id == user_id,
                likes_table.c.target_type == target_type.value,
                likes_table.c.target_id == target_id,
            )
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_like(row._asdict()) if row else None

    async def find_by_user_and_targets(
        self,
        user_id: UserId,
        target_type: LikeTargetType,
        target_ids: Sequence[UUID],
    ) -> List[Like]:
        """Find a user's likes on multiple targets (batch query)."""
        if not target_ids:
            return []

        stmt = select(likes_table).where(
            and_(
                likes_table.c.user_id == user_id,
                likes_table.c.target_type == target_type.value,
                likes_table.c.target_id.in_(target_ids),
            )
        )
        result = await self.session.execute(stmt)
        return [row_to_like(row._asdict()) for row in result.fetchall()]

    async def save(self, like: Like) -> Like:
        """Insert a like."""
        stmt = insert(likes_table).values(**like_to_dict(like))
        await self.session.execute(stmt)
        await self.session.flush()
        return like

    async def delete_by_user_and_target(
        self,
        user_id: UserId,
        target_type: LikeTargetType,
        target_id: UUID,
    ) -> bool:
        """Delete a user's like on a target."""
        stmt = delete(likes_table).where(
            and_(
                likes_table.c.user_id == user_id,
                likes_table.c.target_type == target_type.value,
                likes_table.c.target_id == target_id,
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def count_by_targets(
        self,
        target_type: LikeTargetType,
        target_ids: Sequence[UUID],
    ) -> dict[UUID, int]:
        """Count likes per target (batch query)."""
        if not target_ids:
            return {}

        stmt = (
            select(likes_table.c.target_id, func.count())
            .where(
                and_(
                    likes_table.c.target_type == target_type.value,
                    likes_table.c.target_id.in_(target_ids),
                )
            )
            .group_by(likes_table.c.target_id)
        )
        result = await self.session.execute(stmt)
        counts = {target_id: 0 for target_id in target_ids}
        for target_id, count in result.fetchall():
            counts[target_id] = count
        return counts
