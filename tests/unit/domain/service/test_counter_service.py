"""Unit tests for CounterService."""

from uuid import uuid4

import pytest

from engage.domain.error import NotFoundError
from engage.domain.model.like import Like
from engage.domain.repository import (
    CommentRepository,
    ContentItemRepository,
    LikeRepository,
)
from engage.domain.service import CounterService, MutationPublisher, MutationReason
from engage.domain.value import LikeId, LikeTargetType, UserId
from tests.conftest import at, make_comment, make_content_item
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def add_like(like_repo, target_type: LikeTargetType, target_id) -> None:
    """Insert a ledger row without touching counters."""
    await like_repo.save(
        Like(
            id=LikeId(uuid4()),
            user_id=UserId(uuid4()),
            target_type=target_type,
            target_id=target_id,
        )
    )


class TestLikeCounters:
    """Tests for increment/decrement/get methods."""

    @pytest.mark.asyncio
    async def test_decrement_stops_at_zero(self, unit_env):
        counter_service = await unit_env.get(CounterService)
        content_item_repo = await unit_env.get(ContentItemRepository)
        item = await content_item_repo.save(make_content_item())

        count = await counter_service.decrement_like_count(
            LikeTargetType.CONTENT_ITEM, item.id
        )

        assert count == 0

    @pytest.mark.asyncio
    async def test_get_like_count_for_missing_target_raises(self, unit_env):
        counter_service = await unit_env.get(CounterService)

        with pytest.raises(NotFoundError):
            await counter_service.get_like_count(LikeTargetType.COMMENT, uuid4())


class TestVerifyCounters:
    """Tests for verify_counters method."""

    @pytest.mark.asyncio
    async def test_consistent_counters_report_no_drift(self, unit_env):
        # Arrange
        counter_service = await unit_env.get(CounterService)
        content_item_repo = await unit_env.get(ContentItemRepository)
        comment_repo = await unit_env.get(CommentRepository)
        like_repo = await unit_env.get(LikeRepository)

        item = await content_item_repo.save(make_content_item(like_count=1))
        await add_like(like_repo, LikeTargetType.CONTENT_ITEM, item.id)
        parent = await comment_repo.save(make_comment(item.id, replies_count=1))
        await comment_repo.save(make_comment(item.id, parent=parent))

        # Act
        drifts = await counter_service.verify_counters(item.id)

        # Assert
        assert drifts == []

    @pytest.mark.asyncio
    async def test_reports_like_and_reply_drift(self, unit_env):
        """Each drifted counter is reported with stored and actual values."""
        # Arrange
        counter_service = await unit_env.get(CounterService)
        content_item_repo = await unit_env.get(ContentItemRepository)
        comment_repo = await unit_env.get(CommentRepository)
        like_repo = await unit_env.get(LikeRepository)

        item = await content_item_repo.save(make_content_item(like_count=7))
        parent = await comment_repo.save(make_comment(item.id, like_count=3))
        await comment_repo.save(make_comment(item.id, parent=parent, created_at=at(1)))
        await add_like(like_repo, LikeTargetType.COMMENT, parent.id)

        # Act
        drifts = await counter_service.verify_counters(item.id)

        # Assert
        found = {(d.target_id, d.counter): (d.stored, d.actual) for d in drifts}
        assert found == {
            (item.id, "like_count"): (7, 0),
            (parent.id, "like_count"): (3, 1),
            (parent.id, "replies_count"): (0, 1),
        }

    @pytest.mark.asyncio
    async def test_later_pages_skip_content_item_counter(self, unit_env):
        counter_service = await unit_env.get(CounterService)
        content_item_repo = await unit_env.get(ContentItemRepository)
        item = await content_item_repo.save(make_content_item(like_count=7))

        drifts = await counter_service.verify_counters(item.id, offset=10)

        assert drifts == []

    @pytest.mark.asyncio
    async def test_missing_item_raises_not_found(self, unit_env):
        counter_service = await unit_env.get(CounterService)

        with pytest.raises(NotFoundError):
            await counter_service.verify_counters(make_content_item().id)


class TestSyncCounters:
    """Tests for sync_counters method."""

    @pytest.mark.asyncio
    async def test_rewrites_drifted_counters(self, unit_env):
        # Arrange
        counter_service = await unit_env.get(CounterService)
        content_item_repo = await unit_env.get(ContentItemRepository)
        comment_repo = await unit_env.get(CommentRepository)
        like_repo = await unit_env.get(LikeRepository)
        publisher = await unit_env.get(MutationPublisher)

        item = await content_item_repo.save(make_content_item(like_count=7))
        await add_like(like_repo, LikeTargetType.CONTENT_ITEM, item.id)
        parent = await comment_repo.save(make_comment(item.id, like_count=3))
        await comment_repo.save(make_comment(item.id, parent=parent, created_at=at(1)))

        # Act
        result = await counter_service.sync_counters(item.id)

        # Assert
        assert result.processed == 2
        assert result.updated_like_counts == 2
        assert result.updated_reply_counts == 1
        assert (await content_item_repo.find_by_id(item.id)).like_count == 1
        stored_parent = await comment_repo.find_by_id(parent.id)
        assert stored_parent.like_count == 0
        assert stored_parent.replies_count == 1
        assert await counter_service.verify_counters(item.id) == []
        assert publisher.published == [(item.id, MutationReason.COUNTERS_SYNCED)]

    @pytest.mark.asyncio
    async def test_processes_every_batch(self, unit_env):
        """Comments beyond the first batch are still synced."""
        counter_service = await unit_env.get(CounterService)
        content_item_repo = await unit_env.get(ContentItemRepository)
        comment_repo = await unit_env.get(CommentRepository)

        item = await content_item_repo.save(make_content_item())
        for i in range(5):
            await comment_repo.save(
                make_comment(item.id, created_at=at(i), like_count=2)
            )

        result = await counter_service.sync_counters(item.id, batch_size=2)

        assert result.processed == 5
        assert result.updated_like_counts == 5

    @pytest.mark.asyncio
    async def test_restricts_to_given_comments(self, unit_env):
        counter_service = await unit_env.get(CounterService)
        content_item_repo = await unit_env.get(ContentItemRepository)
        comment_repo = await unit_env.get(CommentRepository)

        item = await content_item_repo.save(make_content_item(like_count=7))
        target = await comment_repo.save(make_comment(item.id, like_count=2))
        untouched = await comment_repo.save(
            make_comment(item.id, like_count=2, created_at=at(1))
        )

        result = await counter_service.sync_counters(comment_ids=[target.id])

        assert result.processed == 1
        assert (await comment_repo.find_by_id(target.id)).like_count == 0
        assert (await comment_repo.find_by_id(untouched.id)).like_count == 2
        assert (await content_item_repo.find_by_id(item.id)).like_count == 7

    @pytest.mark.asyncio
    async def test_consistent_store_sends_no_signal(self, unit_env):
        counter_service = await unit_env.get(CounterService)
        content_item_repo = await unit_env.get(ContentItemRepository)
        publisher = await unit_env.get(MutationPublisher)
        item = await content_item_repo.save(make_content_item())

        result = await counter_service.sync_counters(item.id)

        assert result.updated_like_counts == 0
        assert publisher.published == []

    @pytest.mark.asyncio
    async def test_comment_sync_signals_owning_item(self, unit_env):
        """Rewriting a comment counter signals the comment's content item."""
        # Arrange
        counter_service = await unit_env.get(CounterService)
        content_item_repo = await unit_env.get(ContentItemRepository)
        comment_repo = await unit_env.get(CommentRepository)
        publisher = await unit_env.get(MutationPublisher)

        item = await content_item_repo.save(make_content_item())
        target = await comment_repo.save(make_comment(item.id, like_count=2))

        # Act
        result = await counter_service.sync_counters(comment_ids=[target.id])

        # Assert
        assert result.updated_like_counts == 1
        assert publisher.published == [(item.id, MutationReason.COUNTERS_SYNCED)]

    @pytest.mark.asyncio
    async def test_global_sync_signals_each_drifted_item_once(self, unit_env):
        counter_service = await unit_env.get(CounterService)
        content_item_repo = await unit_env.get(ContentItemRepository)
        comment_repo = await unit_env.get(CommentRepository)
        publisher = await unit_env.get(MutationPublisher)

        drifted = await content_item_repo.save(make_content_item())
        clean = await content_item_repo.save(make_content_item())
        await comment_repo.save(make_comment(drifted.id, like_count=2))
        await comment_repo.save(
            make_comment(drifted.id, replies_count=4, created_at=at(1))
        )
        await comment_repo.save(make_comment(clean.id, created_at=at(2)))

        result = await counter_service.sync_counters()

        assert result.processed == 3
        assert publisher.published == [
            (drifted.id, MutationReason.COUNTERS_SYNCED)
        ]
