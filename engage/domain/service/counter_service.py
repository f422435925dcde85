"""Counter domain service.

Maintains the denormalized like_count / replies_count columns and
reconciles them against the like ledger and the stored child rows.
"""

from dataclasses import dataclass
from typing import Optional, Sequence
from uuid import UUID

import logfire

from engage.domain.error import NotFoundError
from engage.domain.model.comment import Comment
from engage.domain.repository import (
    CommentRepository,
    ContentItemRepository,
    LikeRepository,
    UnitOfWork,
)
from engage.domain.value import CommentId, ContentItemId, LikeTargetType

from .base import Service
from .mutation import MutationPublisher, MutationReason


_TARGET_NAMES = {
    LikeTargetType.CONTENT_ITEM: "Content item",
    LikeTargetType.COMMENT: "Comment",
}


@dataclass(frozen=True)
class CounterDrift:
    """A stored counter that disagrees with the rows it summarizes."""

    target_type: LikeTargetType
    target_id: UUID
    counter: str
    stored: int
    actual: int


@dataclass(frozen=True)
class CounterSyncResult:
    """Outcome of a counter sync run."""

    processed: int
    updated_like_counts: int
    updated_reply_counts: int


class CounterService(Service):
    """Domain service for engagement counters."""

    def __init__(
        self,
        content_item_repository: ContentItemRepository,
        comment_repository: CommentRepository,
        like_repository: LikeRepository,
        unit_of_work: UnitOfWork,
        publisher: MutationPublisher,
    ) -> None:
        """Initialize counter service.

        Args:
            content_item_repository: Content item repository
            comment_repository: Comment repository
            like_repository: Like ledger repository
            unit_of_work: Transaction boundary
            publisher: Mutation signal publisher
        """
        self.content_item_repository = content_item_repository
        self.comment_repository = comment_repository
        self.like_repository = like_repository
        self.unit_of_work = unit_of_work
        self.publisher = publisher

    async def increment_like_count(
        self, target_type: LikeTargetType, target_id: UUID
    ) -> int:
        """Add one like to a target's counter.

        Returns:
            The counter after the increment

        Raises:
            NotFoundError: If the target row no longer exists
        """
        if target_type == LikeTargetType.CONTENT_ITEM:
            count = await self.content_item_repository.increment_like_count(
                ContentItemId(target_id)
            )
        else:
            count = await self.comment_repository.increment_like_count(
                CommentId(target_id)
            )
        return _require_count(count, target_type, target_id)

    async def decrement_like_count(
        self, target_type: LikeTargetType, target_id: UUID
    ) -> int:
        """Remove one like from a target's counter, never going below 0.

        Returns:
            The counter after the decrement

        Raises:
            NotFoundError: If the target row no longer exists
        """
        if target_type == LikeTargetType.CONTENT_ITEM:
            count = await self.content_item_repository.decrement_like_count(
                ContentItemId(target_id)
            )
        else:
            count = await self.comment_repository.decrement_like_count(
                CommentId(target_id)
            )
        return _require_count(count, target_type, target_id)

    async def get_like_count(self, target_type: LikeTargetType, target_id: UUID) -> int:
        """Read a target's stored like counter.

        Raises:
            NotFoundError: If the target doesn't exist
        """
        target = (
            await self.content_item_repository.find_by_id(ContentItemId(target_id))
            if target_type == LikeTargetType.CONTENT_ITEM
            else await self.comment_repository.find_by_id(CommentId(target_id))
        )
        if target is None:
            raise NotFoundError(_TARGET_NAMES[target_type], str(target_id))
        return target.like_count

    async def verify_counters(
        self,
        content_item_id: Optional[ContentItemId] = None,
        limit: int = 1000,
        offset: int = 0,
    ) -> list[CounterDrift]:
        """Report every counter that disagrees with its source rows.

        Comments are scanned in a stable order so callers can page through
        a large table with limit/offset. When a content item is given, its
        own like counter is checked on the first page.

        Args:
            content_item_id: Restrict the scan to one content item
            limit: Maximum number of comments to scan
            offset: Number of comments to skip

        Returns:
            List of drifts, empty when every counter is consistent

        Raises:
            NotFoundError: If the content item doesn't exist
        """
        with logfire.span(
            "counter_service.verify_counters",
            content_item_id=str(content_item_id) if content_item_id else None,
            limit=limit,
            offset=offset,
        ):
            drifts: list[CounterDrift] = []

            if content_item_id is not None and offset == 0:
                drift = await self._content_item_drift(content_item_id)
                if drift:
                    drifts.append(drift)

            comments = await self.comment_repository.find_many(
                content_item_id=content_item_id, limit=limit, offset=offset
            )
            drifts.extend(await self._comment_drifts(comments))

            if drifts:
                logfire.warn(
                    "Counter drift detected",
                    scanned=len(comments),
                    drift_count=len(drifts),
                )
            else:
                logfire.info("Counters consistent", scanned=len(comments))

            return drifts

    async def sync_counters(
        self,
        content_item_id: Optional[ContentItemId] = None,
        comment_ids: Optional[Sequence[CommentId]] = None,
        batch_size: int = 100,
    ) -> CounterSyncResult:
        """Rewrite drifted counters with values recomputed from source rows.

        Runs as a single transaction. Comments are processed in batches of
        batch_size to bound the size of each batched count query.

        Args:
            content_item_id: Restrict the sync to one content item
            comment_ids: Restrict the sync to these comments
            batch_size: Comments per batch

        Returns:
            Number of comments processed and counters rewritten

        Raises:
            NotFoundError: If the content item doesn't exist
        """
        with logfire.span(
            "counter_service.sync_counters",
            content_item_id=str(content_item_id) if content_item_id else None,
            comment_count=len(comment_ids) if comment_ids is not None else None,
            batch_size=batch_size,
        ):
            processed = 0
            updated_like_counts = 0
            updated_reply_counts = 0
            # Content items whose own or comment counters were rewritten
            touched: set[ContentItemId] = set()

            async with self.unit_of_work.transaction():
                if content_item_id is not None and comment_ids is None:
                    drift = await self._content_item_drift(content_item_id)
                    if drift:
                        await self.content_item_repository.set_like_count(
                            content_item_id, drift.actual
                        )
                        updated_like_counts += 1
                        touched.add(content_item_id)

                offset = 0
                while True:
                    batch = await self.comment_repository.find_many(
                        content_item_id=content_item_id,
                        comment_ids=comment_ids,
                        limit=batch_size,
                        offset=offset,
                    )
                    if not batch:
                        break

                    owners = {comment.id: comment.content_item_id for comment in batch}
                    for drift in await self._comment_drifts(batch):
                        touched.add(owners[CommentId(drift.target_id)])
                        if drift.counter == "like_count":
                            await self.comment_repository.set_counters(
                                CommentId(drift.target_id), like_count=drift.actual
                            )
                            updated_like_counts += 1
                        else:
                            await self.comment_repository.set_counters(
                                CommentId(drift.target_id), replies_count=drift.actual
                            )
                            updated_reply_counts += 1

                    processed += len(batch)
                    if len(batch) < batch_size:
                        break
                    offset += batch_size

                for item_id in sorted(touched, key=str):
                    self.unit_of_work.after_commit(
                        lambda item_id=item_id: self.publisher.publish(
                            item_id, MutationReason.COUNTERS_SYNCED
                        )
                    )

            logfire.info(
                "Counters synced",
                processed=processed,
                updated_like_counts=updated_like_counts,
                updated_reply_counts=updated_reply_counts,
                content_items=len(touched),
            )

            return CounterSyncResult(
                processed=processed,
                updated_like_counts=updated_like_counts,
                updated_reply_counts=updated_reply_counts,
            )

    async def _content_item_drift(
        self, content_item_id: ContentItemId
    ) -> Optional[CounterDrift]:
        """Compare a content item's like counter with the ledger."""
        content_item = await self.content_item_repository.find_by_id(content_item_id)
        if not content_item:
            raise NotFoundError("Content item", str(content_item_id))

        counts = await self.like_repository.count_by_targets(
            LikeTargetType.CONTENT_ITEM, [content_item_id]
        )
        actual = counts.get(content_item_id, 0)
        if actual == content_item.like_count:
            return None
        return CounterDrift(
            target_type=LikeTargetType.CONTENT_ITEM,
            target_id=content_item_id,
            counter="like_count",
            stored=content_item.like_count,
            actual=actual,
        )

    async def _comment_drifts(self, comments: list[Comment]) -> list[CounterDrift]:
        """Compare comment counters with the ledger and child rows (batched)."""
        if not comments:
            return []

        comment_ids = [comment.id for comment in comments]
        like_counts = await self.like_repository.count_by_targets(
            LikeTargetType.COMMENT, comment_ids
        )
        reply_counts = await self.comment_repository.count_replies(comment_ids)

        drifts: list[CounterDrift] = []
        for comment in comments:
            actual_likes = like_counts.get(comment.id, 0)
            if actual_likes != comment.like_count:
                drifts.append(
                    CounterDrift(
                        target_type=LikeTargetType.COMMENT,
                        target_id=comment.id,
                        counter="like_count",
                        stored=comment.like_count,
                        actual=actual_likes,
                    )
                )
            actual_replies = reply_counts.get(comment.id, 0)
            if actual_replies != comment.replies_count:
                drifts.append(
                    CounterDrift(
                        target_type=LikeTargetType.COMMENT,
                        target_id=comment.id,
                        counter="replies_count",
                        stored=comment.replies_count,
                        actual=actual_replies,
                    )
                )
        return drifts


def _require_count(
    count: Optional[int], target_type: LikeTargetType, target_id: UUID
) -> int:
    """Fail when a counter update matched no row."""
    if count is None:
        logfire.warn(
            "Counter update on missing target",
            target_type=target_type.value,
            target_id=str(target_id),
        )
        raise NotFoundError(_TARGET_NAMES[target_type], str(target_id))
    return count
