"""In-memory like repository for testing."""

from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from engage.domain.model.like import Like
from engage.domain.repository.like import LikeRepository
from engage.domain.value import LikeTargetType, UserId

from .store import InMemoryStore


class InMemoryLikeRepository(LikeRepository):
    """In-memory implementation of LikeRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def find_by_user_and_target(
        self,
        user_id: UserId,
        target_type: LikeTargetType,
        target_id: UUID,
    ) -> Optional[Like]:
        """Find a like by user and target."""
        for like in self.store.likes:
            if (
                like.user_id == user_id
                and like.target_type == target_type
                and like.target_id == target_id
            ):
                return like
        return None

    async def find_by_user_and_targets(
        self,
        user_id: UserId,
        target_type: LikeTargetType,
        target_ids: Sequence[UUID],
    ) -> list[Like]:
        """Find a user's likes on multiple targets (batch query)."""
        if not target_ids:
            return []

        wanted = set(target_ids)
        return [
            like
            for like in self.store.likes
            if like.user_id == user_id
            and like.target_type == target_type
            and like.target_id in wanted
        ]

    async def save(self, like: Like) -> Like:
        """Save a like.

        Raises:
            IntegrityError: If the like already exists (duplicate)
        """
        if any(
            existing.user_id == like.user_id
            and existing.target_type == like.target_type
            and existing.target_id == like.target_id
            for existing in self.store.likes
        ):
            raise IntegrityError("Duplicate like", None, Exception())

        self.store.likes.append(like)
        return like

    async def delete_by_user_and_target(
        self,
        user_id: UserId,
        target_type: LikeTargetType,
        target_id: UUID,
    ) -> bool:
        """Delete a like by user and target."""
        for i, like in enumerate(self.store.likes):
            if (
                like.user_id == user_id
                and like.target_type == target_type
                and like.target_id == target_id
            ):
                self.store.likes.pop(i)
                return True
        return False

    async def count_by_targets(
        self,
        target_type: LikeTargetType,
        target_ids: Sequence[UUID],
    ) -> dict[UUID, int]:
        """Count likes per target (batch query)."""
        counts = {target_id: 0 for target_id in target_ids}
        for like in self.store.likes:
            if like.target_type == target_type and like.target_id in counts:
                counts[like.target_id] += 1
        return counts
