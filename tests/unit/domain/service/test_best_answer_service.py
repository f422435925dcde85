"""Unit tests for BestAnswerService."""

from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from engage.domain.error import (
    ForbiddenError,
    InvalidTargetError,
    NotFoundError,
    TransientStoreFailure,
    UnauthorizedError,
)
from engage.domain.repository import CommentRepository, ContentItemRepository
from engage.domain.service import (
    BestAnswerService,
    MutationPublisher,
    MutationReason,
)
from engage.domain.value import CommentId, UserId
from tests.conftest import at, make_comment, make_content_item
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def seed_item_with_answers(unit_env, count: int = 2):
    """Save a content item with `count` top-level comments."""
    content_item_repo = await unit_env.get(ContentItemRepository)
    comment_repo = await unit_env.get(CommentRepository)

    item = await content_item_repo.save(make_content_item())
    answers = [
        await comment_repo.save(make_comment(item.id, created_at=at(i)))
        for i in range(count)
    ]
    return item, answers


class TestSelectBestAnswer:
    """Tests for select_best_answer method."""

    @pytest.mark.asyncio
    async def test_author_selects_best_answer(self, unit_env):
        # Arrange
        service = await unit_env.get(BestAnswerService)
        comment_repo = await unit_env.get(CommentRepository)
        publisher = await unit_env.get(MutationPublisher)
        item, (answer, _) = await seed_item_with_answers(unit_env)

        # Act
        result = await service.select_best_answer(answer.id, item.id, item.author_id)

        # Assert
        assert result == answer.id
        assert (await comment_repo.find_by_id(answer.id)).is_best_answer is True
        assert publisher.published == [(item.id, MutationReason.BEST_ANSWER_CHANGED)]

    @pytest.mark.asyncio
    async def test_selecting_another_replaces_previous(self, unit_env):
        """At most one comment per item is flagged."""
        # Arrange
        service = await unit_env.get(BestAnswerService)
        comment_repo = await unit_env.get(CommentRepository)
        item, (first, second) = await seed_item_with_answers(unit_env)
        await service.select_best_answer(first.id, item.id, item.author_id)

        # Act
        result = await service.select_best_answer(second.id, item.id, item.author_id)

        # Assert
        assert result == second.id
        flagged = [
            c.id
            for c in await comment_repo.find_by_content_item(item.id)
            if c.is_best_answer
        ]
        assert flagged == [second.id]

    @pytest.mark.asyncio
    async def test_selecting_current_best_answer_unselects_it(self, unit_env):
        service = await unit_env.get(BestAnswerService)
        item, (answer, _) = await seed_item_with_answers(unit_env)
        await service.select_best_answer(answer.id, item.id, item.author_id)

        result = await service.select_best_answer(answer.id, item.id, item.author_id)

        assert result is None
        assert await service.get_best_answer(item.id) is None

    @pytest.mark.asyncio
    async def test_non_author_is_forbidden(self, unit_env):
        service = await unit_env.get(BestAnswerService)
        publisher = await unit_env.get(MutationPublisher)
        item, (answer, _) = await seed_item_with_answers(unit_env)

        with pytest.raises(ForbiddenError):
            await service.select_best_answer(answer.id, item.id, UserId(uuid4()))

        assert await service.get_best_answer(item.id) is None
        assert publisher.published == []

    @pytest.mark.asyncio
    async def test_reply_cannot_be_best_answer(self, unit_env):
        service = await unit_env.get(BestAnswerService)
        comment_repo = await unit_env.get(CommentRepository)
        item, (answer, _) = await seed_item_with_answers(unit_env)
        reply = await comment_repo.save(make_comment(item.id, parent=answer))

        with pytest.raises(InvalidTargetError, match="reply"):
            await service.select_best_answer(reply.id, item.id, item.author_id)

    @pytest.mark.asyncio
    async def test_comment_on_other_item_is_invalid_target(self, unit_env):
        service = await unit_env.get(BestAnswerService)
        item, _ = await seed_item_with_answers(unit_env)
        other, (foreign, _) = await seed_item_with_answers(unit_env)

        with pytest.raises(InvalidTargetError, match="does not belong"):
            await service.select_best_answer(foreign.id, item.id, item.author_id)

    @pytest.mark.asyncio
    async def test_missing_comment_raises_not_found(self, unit_env):
        service = await unit_env.get(BestAnswerService)
        item, _ = await seed_item_with_answers(unit_env)

        with pytest.raises(NotFoundError, match="Comment"):
            await service.select_best_answer(
                CommentId(uuid4()), item.id, item.author_id
            )

    @pytest.mark.asyncio
    async def test_missing_item_raises_not_found(self, unit_env):
        service = await unit_env.get(BestAnswerService)

        with pytest.raises(NotFoundError, match="Content item"):
            await service.select_best_answer(
                CommentId(uuid4()), make_content_item().id, UserId(uuid4())
            )

    @pytest.mark.asyncio
    async def test_without_caller_raises_unauthorized(self, unit_env):
        service = await unit_env.get(BestAnswerService)
        item, (answer, _) = await seed_item_with_answers(unit_env)

        with pytest.raises(UnauthorizedError):
            await service.select_best_answer(answer.id, item.id, None)

    @pytest.mark.asyncio
    async def test_lost_selection_race_is_transient(self, unit_env, monkeypatch):
        """A unique index violation on commit surfaces as retryable."""
        service = await unit_env.get(BestAnswerService)
        comment_repo = await unit_env.get(CommentRepository)
        publisher = await unit_env.get(MutationPublisher)
        item, (answer, _) = await seed_item_with_answers(unit_env)

        async def racing_update(*args, **kwargs):
            raise IntegrityError("duplicate best answer", None, Exception())

        monkeypatch.setattr(comment_repo, "set_best_answer", racing_update)

        with pytest.raises(TransientStoreFailure):
            await service.select_best_answer(answer.id, item.id, item.author_id)

        assert publisher.published == []


class TestGetBestAnswer:
    """Tests for get_best_answer method."""

    @pytest.mark.asyncio
    async def test_returns_selected_comment(self, unit_env):
        service = await unit_env.get(BestAnswerService)
        item, (_, answer) = await seed_item_with_answers(unit_env)
        await service.select_best_answer(answer.id, item.id, item.author_id)

        assert await service.get_best_answer(item.id) == answer.id

    @pytest.mark.asyncio
    async def test_missing_item_raises_not_found(self, unit_env):
        service = await unit_env.get(BestAnswerService)

        with pytest.raises(NotFoundError):
            await service.get_best_answer(make_content_item().id)
