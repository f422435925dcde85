"""Like domain service."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from engage.domain.error import NotFoundError, UnauthorizedError
from engage.domain.model.like import Like
from engage.domain.repository import (
    CommentRepository,
    ContentItemRepository,
    LikeRepository,
    UnitOfWork,
)
from engage.domain.value import (
    CommentId,
    ContentItemId,
    LikeId,
    LikeTargetType,
    UserId,
)

from .base import Service
from .counter_service import CounterService
from .mutation import MutationPublisher, MutationReason


@dataclass(frozen=True)
class LikeToggleResult:
    """State of a target after a toggle."""

    is_liked: bool
    like_count: int


class LikeService(Service):
    """Domain service for like operations.

    The ledger row decides whether a user likes a target; the target's
    like_count follows the ledger by exactly one per toggle, inside the
    same transaction.
    """

    def __init__(
        self,
        like_repository: LikeRepository,
        content_item_repository: ContentItemRepository,
        comment_repository: CommentRepository,
        counter_service: CounterService,
        unit_of_work: UnitOfWork,
        publisher: MutationPublisher,
    ) -> None:
        """Initialize like service.

        Args:
            like_repository: Like ledger repository
            content_item_repository: Content item repository
            comment_repository: Comment repository
            counter_service: Counter domain service
            unit_of_work: Transaction boundary
            publisher: Mutation signal publisher
        """
        self.like_repository = like_repository
        self.content_item_repository = content_item_repository
        self.comment_repository = comment_repository
        self.counter_service = counter_service
        self.unit_of_work = unit_of_work
        self.publisher = publisher

    async def toggle_like(
        self,
        user_id: Optional[UserId],
        target_type: LikeTargetType,
        target_id: UUID,
    ) -> LikeToggleResult:
        """Like a target, or remove the like if the user already likes it.

        Toggling twice restores the original state and count. If a
        concurrent request inserts the same like first, the insert is
        rolled back to a savepoint and this toggle becomes a removal.

        Args:
            user_id: Caller's user ID (None if unauthenticated)
            target_type: Type of target (content item or comment)
            target_id: ID of the target

        Returns:
            Whether the user now likes the target, and its like count

        Raises:
            UnauthorizedError: If no caller
            NotFoundError: If the target doesn't exist
            TransientStoreFailure: If the store aborts the transaction
        """
        with logfire.span(
            "like_service.toggle_like",
            user_id=str(user_id) if user_id else None,
            target_type=target_type.value,
            target_id=str(target_id),
        ):
            if user_id is None:
                logfire.warn("Like toggle without caller", target_id=str(target_id))
                raise UnauthorizedError("like content")

            content_item_id = await self._resolve_content_item_id(
                target_type, target_id
            )

            async with self.unit_of_work.transaction():
                existing = await self.like_repository.find_by_user_and_target(
                    user_id, target_type, target_id
                )
                if existing is None:
                    result = await self._add_like(user_id, target_type, target_id)
                else:
                    result = await self._remove_like(user_id, target_type, target_id)

                self.unit_of_work.after_commit(
                    lambda: self.publisher.publish(
                        content_item_id, MutationReason.LIKE_TOGGLED
                    )
                )

            logfire.info(
                "Like toggled",
                user_id=str(user_id),
                target_type=target_type.value,
                target_id=str(target_id),
                is_liked=result.is_liked,
                like_count=result.like_count,
            )
            return result

    async def get_liked_target_ids(
        self,
        user_id: Optional[UserId],
        target_type: LikeTargetType,
        target_ids: list[UUID],
    ) -> Optional[set[UUID]]:
        """Find which of the given targets a user likes (one ledger query).

        Args:
            user_id: Viewer's user ID (None for anonymous reads)
            target_type: Type of targets
            target_ids: IDs of the targets to check

        Returns:
            Set of liked target IDs, or None for anonymous reads
        """
        if user_id is None:
            return None
        if not target_ids:
            return set()

        likes = await self.like_repository.find_by_user_and_targets(
            user_id, target_type, target_ids
        )
        return {like.target_id for like in likes}

    async def _resolve_content_item_id(
        self, target_type: LikeTargetType, target_id: UUID
    ) -> ContentItemId:
        """Check the target exists and return the content item it belongs to."""
        if target_type == LikeTargetType.CONTENT_ITEM:
            content_item = await self.content_item_repository.find_by_id(
                ContentItemId(target_id)
            )
            if not content_item:
                logfire.warn("Like on non-existent content item", target_id=str(target_id))
                raise NotFoundError("Content item", str(target_id))
            return content_item.id

        comment = await self.comment_repository.find_by_id(CommentId(target_id))
        if not comment:
            logfire.warn("Like on non-existent comment", target_id=str(target_id))
            raise NotFoundError("Comment", str(target_id))
        return comment.content_item_id

    async def _add_like(
        self, user_id: UserId, target_type: LikeTargetType, target_id: UUID
    ) -> LikeToggleResult:
        like = Like(
            id=LikeId(uuid4()),
            user_id=user_id,
            target_type=target_type,
            target_id=target_id,
            created_at=datetime.now(),
        )

        try:
            async with self.unit_of_work.savepoint():
                await self.like_repository.save(like)
        except IntegrityError:
            # Lost the race: a concurrent toggle inserted the row first
            logfire.warn(
                "Concurrent like detected, toggling off",
                user_id=str(user_id),
                target_id=str(target_id),
            )
            return await self._remove_like(user_id, target_type, target_id)

        like_count = await self.counter_service.increment_like_count(
            target_type, target_id
        )
        return LikeToggleResult(is_liked=True, like_count=like_count)

    async def _remove_like(
        self, user_id: UserId, target_type: LikeTargetType, target_id: UUID
    ) -> LikeToggleResult:
        removed = await self.like_repository.delete_by_user_and_target(
            user_id, target_type, target_id
        )
        if not removed:
            # Already removed by a concurrent toggle, which owns the decrement
            like_count = await self.counter_service.get_like_count(
                target_type, target_id
            )
            return LikeToggleResult(is_liked=False, like_count=like_count)

        like_count = await self.counter_service.decrement_like_count(
            target_type, target_id
        )
        return LikeToggleResult(is_liked=False, like_count=like_count)
