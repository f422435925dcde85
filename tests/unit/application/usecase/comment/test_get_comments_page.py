"""Unit tests for GetCommentsPageUseCase."""

from uuid import uuid4

import pytest

from engage.application.usecase.comment import (
    GetCommentsPageRequest,
    GetCommentsPageUseCase,
)
from engage.domain.repository import CommentRepository, ContentItemRepository
from engage.domain.service import LikeService
from engage.domain.value import CommentSortPolicy, LikeTargetType, UserId
from tests.conftest import at, make_comment, make_content_item
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestGetCommentsPageUseCase:
    """Tests for GetCommentsPageUseCase."""

    @pytest.mark.asyncio
    async def test_pages_top_level_threads(self, unit_env):
        """Ten threads at page size seven split into 7 + 3."""
        # Arrange
        use_case = await unit_env.get(GetCommentsPageUseCase)
        content_item_repo = await unit_env.get(ContentItemRepository)
        comment_repo = await unit_env.get(CommentRepository)

        item = await content_item_repo.save(make_content_item())
        for i in range(10):
            top = await comment_repo.save(
                make_comment(item.id, content=f"thread {i}", created_at=at(i))
            )
            await comment_repo.save(
                make_comment(item.id, parent=top, created_at=at(i + 100))
            )

        # Act
        first = await use_case.execute(
            GetCommentsPageRequest(
                content_item_id=str(item.id),
                sort_by=CommentSortPolicy.OLDEST,
                page=1,
                page_size=7,
            )
        )
        second = await use_case.execute(
            GetCommentsPageRequest(
                content_item_id=str(item.id),
                sort_by=CommentSortPolicy.OLDEST,
                page=2,
                page_size=7,
            )
        )

        # Assert
        assert [c.content for c in first.comments] == [f"thread {i}" for i in range(7)]
        assert first.pagination.total == 10
        assert first.pagination.total_pages == 2
        assert first.pagination.has_next is True
        assert first.pagination.has_prev is False
        assert all(len(c.replies) == 1 for c in first.comments)

        assert len(second.comments) == 3
        assert second.pagination.has_next is False
        assert second.pagination.has_prev is True

    @pytest.mark.asyncio
    async def test_page_size_defaults_and_is_capped(self, unit_env):
        use_case = await unit_env.get(GetCommentsPageUseCase)
        content_item_repo = await unit_env.get(ContentItemRepository)
        item = await content_item_repo.save(make_content_item())

        default = await use_case.execute(
            GetCommentsPageRequest(content_item_id=str(item.id))
        )
        capped = await use_case.execute(
            GetCommentsPageRequest(content_item_id=str(item.id), page_size=1000)
        )

        assert default.pagination.page_size == 10
        assert capped.pagination.page_size == 50

    @pytest.mark.asyncio
    async def test_viewer_sees_own_likes(self, unit_env):
        # Arrange
        use_case = await unit_env.get(GetCommentsPageUseCase)
        like_service = await unit_env.get(LikeService)
        content_item_repo = await unit_env.get(ContentItemRepository)
        comment_repo = await unit_env.get(CommentRepository)

        item = await content_item_repo.save(make_content_item())
        comment = await comment_repo.save(make_comment(item.id))
        viewer_id = UserId(uuid4())
        await like_service.toggle_like(viewer_id, LikeTargetType.COMMENT, comment.id)

        # Act
        as_viewer = await use_case.execute(
            GetCommentsPageRequest(
                content_item_id=str(item.id), viewer_id=str(viewer_id)
            )
        )
        anonymous = await use_case.execute(
            GetCommentsPageRequest(content_item_id=str(item.id))
        )

        # Assert
        assert as_viewer.comments[0].is_liked is True
        assert as_viewer.comments[0].like_count == 1
        assert anonymous.comments[0].is_liked is None
