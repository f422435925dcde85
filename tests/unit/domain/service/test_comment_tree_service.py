"""Unit tests for CommentTreeService."""

from uuid import uuid4

import pytest

from engage.domain.error import NotFoundError
from engage.domain.model.like import Like
from engage.domain.repository import (
    CommentRepository,
    ContentItemRepository,
    LikeRepository,
)
from engage.domain.service import CommentTreeService
from engage.domain.service.comment_tree_service import count_nodes
from engage.domain.value import (
    CommentId,
    CommentSortPolicy,
    ContentItemKind,
    LikeId,
    LikeTargetType,
    UserId,
)
from tests.conftest import at, make_comment, make_content_item
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


def contents(nodes):
    return [node.comment.content for node in nodes]


class TestBuildTreeStructure:
    """Tests for how rows are assembled into threads."""

    @pytest.mark.asyncio
    async def test_nests_replies_under_parents(self, unit_env):
        """Replies hang under their parent, oldest first."""
        # Arrange
        tree_service = await unit_env.get(CommentTreeService)
        content_item_repo = await unit_env.get(ContentItemRepository)
        comment_repo = await unit_env.get(CommentRepository)

        item = await content_item_repo.save(make_content_item())
        root = await comment_repo.save(
            make_comment(item.id, content="root", created_at=at(0))
        )
        await comment_repo.save(
            make_comment(item.id, parent=root, content="second", created_at=at(5))
        )
        first = await comment_repo.save(
            make_comment(item.id, parent=root, content="first", created_at=at(2))
        )
        await comment_repo.save(
            make_comment(item.id, parent=first, content="nested", created_at=at(3))
        )

        # Act
        forest = await tree_service.build_tree(item.id)

        # Assert
        assert contents(forest) == ["root"]
        assert contents(forest[0].children) == ["first", "second"]
        assert contents(forest[0].children[0].children) == ["nested"]
        assert forest[0].comment.replies_count == 2
        assert count_nodes(forest) == 4

    @pytest.mark.asyncio
    async def test_omits_orphans_and_cycles(self, unit_env):
        """Rows that can't be reached from a top-level row are dropped."""
        # Arrange
        tree_service = await unit_env.get(CommentTreeService)
        content_item_repo = await unit_env.get(ContentItemRepository)
        comment_repo = await unit_env.get(CommentRepository)

        item = await content_item_repo.save(make_content_item())
        await comment_repo.save(make_comment(item.id, content="root"))

        # Parent missing entirely
        await comment_repo.save(
            make_comment(
                item.id, content="orphan", parent_id=CommentId(uuid4()), depth=1
            )
        )

        # Two rows pointing at each other
        a_id, b_id = CommentId(uuid4()), CommentId(uuid4())
        await comment_repo.save(
            make_comment(item.id, content="cycle-a", id=a_id, parent_id=b_id, depth=1)
        )
        await comment_repo.save(
            make_comment(item.id, content="cycle-b", id=b_id, parent_id=a_id, depth=1)
        )

        # Act
        forest = await tree_service.build_tree(item.id)

        # Assert
        assert contents(forest) == ["root"]
        assert count_nodes(forest) == 1

    @pytest.mark.asyncio
    async def test_omits_parent_on_another_content_item(self, unit_env):
        """A reply whose parent lives on another item is unreachable."""
        tree_service = await unit_env.get(CommentTreeService)
        content_item_repo = await unit_env.get(ContentItemRepository)
        comment_repo = await unit_env.get(CommentRepository)

        item = await content_item_repo.save(make_content_item())
        other = await content_item_repo.save(make_content_item())
        foreign = await comment_repo.save(make_comment(other.id))
        await comment_repo.save(
            make_comment(item.id, content="stray", parent_id=foreign.id, depth=1)
        )

        forest = await tree_service.build_tree(item.id)

        assert forest == []

    @pytest.mark.asyncio
    async def test_truncates_below_max_depth(self, unit_env):
        """Rows deeper than the item's limit are dropped from the tree."""
        # Arrange
        tree_service = await unit_env.get(CommentTreeService)
        content_item_repo = await unit_env.get(ContentItemRepository)
        comment_repo = await unit_env.get(CommentRepository)

        item = await content_item_repo.save(make_content_item(ContentItemKind.POST))
        root = await comment_repo.save(make_comment(item.id, content="root"))
        reply = await comment_repo.save(
            make_comment(item.id, parent=root, content="reply", created_at=at(1))
        )
        # Written before the limit was lowered
        await comment_repo.save(
            make_comment(
                item.id,
                parent=reply,
                content="too deep",
                created_at=at(2),
                replies_count=0,
            )
        )
        await comment_repo.set_counters(reply.id, replies_count=1)

        # Act
        forest = await tree_service.build_tree(item.id)

        # Assert
        assert contents(forest[0].children) == ["reply"]
        assert forest[0].children[0].children == []
        assert forest[0].children[0].comment.replies_count == 0

    @pytest.mark.asyncio
    async def test_empty_item_returns_empty_forest(self, unit_env):
        tree_service = await unit_env.get(CommentTreeService)
        content_item_repo = await unit_env.get(ContentItemRepository)
        item = await content_item_repo.save(make_content_item())

        assert await tree_service.build_tree(item.id) == []

    @pytest.mark.asyncio
    async def test_nonexistent_item_raises_not_found(self, unit_env):
        tree_service = await unit_env.get(CommentTreeService)

        with pytest.raises(NotFoundError):
            await tree_service.build_tree(make_content_item().id)


class TestBuildTreeOrdering:
    """Tests for top-level sort policies."""

    async def _seed(self, unit_env):
        content_item_repo = await unit_env.get(ContentItemRepository)
        comment_repo = await unit_env.get(CommentRepository)

        item = await content_item_repo.save(make_content_item())
        await comment_repo.save(
            make_comment(item.id, content="old", created_at=at(0), like_count=5)
        )
        await comment_repo.save(
            make_comment(item.id, content="middle", created_at=at(10), like_count=9)
        )
        await comment_repo.save(
            make_comment(item.id, content="new", created_at=at(20), like_count=5)
        )
        return item

    @pytest.mark.asyncio
    async def test_latest_puts_newest_first(self, unit_env):
        tree_service = await unit_env.get(CommentTreeService)
        item = await self._seed(unit_env)

        forest = await tree_service.build_tree(item.id, CommentSortPolicy.LATEST)

        assert contents(forest) == ["new", "middle", "old"]

    @pytest.mark.asyncio
    async def test_oldest_puts_oldest_first(self, unit_env):
        tree_service = await unit_env.get(CommentTreeService)
        item = await self._seed(unit_env)

        forest = await tree_service.build_tree(item.id, CommentSortPolicy.OLDEST)

        assert contents(forest) == ["old", "middle", "new"]

    @pytest.mark.asyncio
    async def test_most_liked_breaks_ties_by_newest(self, unit_env):
        """Equal like counts fall back to created_at, newest first."""
        tree_service = await unit_env.get(CommentTreeService)
        item = await self._seed(unit_env)

        forest = await tree_service.build_tree(item.id, CommentSortPolicy.MOST_LIKED)

        assert contents(forest) == ["middle", "new", "old"]

    @pytest.mark.asyncio
    async def test_best_answer_comes_first_under_any_policy(self, unit_env):
        """The best answer leads, the rest keep the policy order."""
        tree_service = await unit_env.get(CommentTreeService)
        comment_repo = await unit_env.get(CommentRepository)
        item = await self._seed(unit_env)
        old = next(
            c for c in await comment_repo.find_by_content_item(item.id)
            if c.content == "old"
        )
        await comment_repo.set_best_answer(old.id, True)

        latest = await tree_service.build_tree(item.id, CommentSortPolicy.LATEST)
        most_liked = await tree_service.build_tree(
            item.id, CommentSortPolicy.MOST_LIKED
        )

        assert contents(latest) == ["old", "new", "middle"]
        assert contents(most_liked) == ["old", "middle", "new"]


class TestBuildTreeViewerLikes:
    """Tests for per-viewer like flags."""

    @pytest.mark.asyncio
    async def test_flags_liked_comments_for_viewer(self, unit_env):
        # Arrange
        tree_service = await unit_env.get(CommentTreeService)
        content_item_repo = await unit_env.get(ContentItemRepository)
        comment_repo = await unit_env.get(CommentRepository)
        like_repo = await unit_env.get(LikeRepository)

        item = await content_item_repo.save(make_content_item())
        root = await comment_repo.save(make_comment(item.id, content="root"))
        reply = await comment_repo.save(
            make_comment(item.id, parent=root, content="reply", created_at=at(1))
        )
        viewer_id = UserId(uuid4())
        await like_repo.save(
            Like(
                id=LikeId(uuid4()),
                user_id=viewer_id,
                target_type=LikeTargetType.COMMENT,
                target_id=reply.id,
            )
        )

        # Act
        forest = await tree_service.build_tree(item.id, viewer_id=viewer_id)

        # Assert
        assert forest[0].is_liked_by_viewer is False
        assert forest[0].children[0].is_liked_by_viewer is True

    @pytest.mark.asyncio
    async def test_anonymous_viewer_gets_no_like_state(self, unit_env):
        tree_service = await unit_env.get(CommentTreeService)
        content_item_repo = await unit_env.get(ContentItemRepository)
        comment_repo = await unit_env.get(CommentRepository)

        item = await content_item_repo.save(make_content_item())
        await comment_repo.save(make_comment(item.id))

        forest = await tree_service.build_tree(item.id)

        assert forest[0].is_liked_by_viewer is None


class TestListReplies:
    """Tests for paging through one comment's direct replies."""

    @pytest.mark.asyncio
    async def test_lists_direct_replies_oldest_first(self, unit_env):
        """Only direct replies are listed, with their own reply counts."""
        # Arrange
        tree_service = await unit_env.get(CommentTreeService)
        content_item_repo = await unit_env.get(ContentItemRepository)
        comment_repo = await unit_env.get(CommentRepository)

        item = await content_item_repo.save(make_content_item())
        root = await comment_repo.save(make_comment(item.id, content="root"))
        late = await comment_repo.save(
            make_comment(item.id, parent=root, content="late", created_at=at(9))
        )
        await comment_repo.save(
            make_comment(item.id, parent=root, content="early", created_at=at(1))
        )
        await comment_repo.save(
            make_comment(item.id, parent=late, content="nested", created_at=at(10))
        )

        # Act
        page = await tree_service.list_replies(
            root.id, item.id, page=1, page_size=10
        )

        # Assert
        assert contents(page.items) == ["early", "late"]
        assert [n.comment.replies_count for n in page.items] == [0, 1]
        assert all(n.children == [] for n in page.items)
        assert page.total == 2
        assert page.has_next is False

    @pytest.mark.asyncio
    async def test_pages_replies(self, unit_env):
        """Five replies at page size two span three pages."""
        tree_service = await unit_env.get(CommentTreeService)
        content_item_repo = await unit_env.get(ContentItemRepository)
        comment_repo = await unit_env.get(CommentRepository)

        item = await content_item_repo.save(make_content_item())
        root = await comment_repo.save(make_comment(item.id))
        for i in range(5):
            await comment_repo.save(
                make_comment(item.id, parent=root, content=f"r{i}", created_at=at(i))
            )

        page = await tree_service.list_replies(root.id, item.id, page=2, page_size=2)

        assert contents(page.items) == ["r2", "r3"]
        assert page.total == 5
        assert page.total_pages == 3
        assert page.has_prev is True
        assert page.has_next is True

    @pytest.mark.asyncio
    async def test_flags_viewer_likes(self, unit_env):
        """Viewer like state is set per reply, None when anonymous."""
        tree_service = await unit_env.get(CommentTreeService)
        content_item_repo = await unit_env.get(ContentItemRepository)
        comment_repo = await unit_env.get(CommentRepository)
        like_repo = await unit_env.get(LikeRepository)
        viewer_id = UserId(uuid4())

        item = await content_item_repo.save(make_content_item())
        root = await comment_repo.save(make_comment(item.id))
        liked = await comment_repo.save(
            make_comment(item.id, parent=root, content="liked", created_at=at(1))
        )
        await comment_repo.save(
            make_comment(item.id, parent=root, content="plain", created_at=at(2))
        )
        await like_repo.save(
            Like(
                id=LikeId(uuid4()),
                user_id=viewer_id,
                target_type=LikeTargetType.COMMENT,
                target_id=liked.id,
            )
        )

        seen = await tree_service.list_replies(
            root.id, item.id, page=1, page_size=10, viewer_id=viewer_id
        )
        anonymous = await tree_service.list_replies(
            root.id, item.id, page=1, page_size=10
        )

        assert [n.is_liked_by_viewer for n in seen.items] == [True, False]
        assert [n.is_liked_by_viewer for n in anonymous.items] == [None, None]

    @pytest.mark.asyncio
    async def test_parent_at_max_depth_has_no_replies(self, unit_env):
        """Posts allow one reply level, so deeper rows stay hidden."""
        tree_service = await unit_env.get(CommentTreeService)
        content_item_repo = await unit_env.get(ContentItemRepository)
        comment_repo = await unit_env.get(CommentRepository)

        item = await content_item_repo.save(make_content_item(ContentItemKind.POST))
        root = await comment_repo.save(make_comment(item.id))
        reply = await comment_repo.save(
            make_comment(item.id, parent=root, created_at=at(1))
        )
        await comment_repo.save(make_comment(item.id, parent=reply, created_at=at(2)))

        under_root = await tree_service.list_replies(
            root.id, item.id, page=1, page_size=10
        )
        under_reply = await tree_service.list_replies(
            reply.id, item.id, page=1, page_size=10
        )

        assert [n.comment.id for n in under_root.items] == [reply.id]
        assert under_root.items[0].comment.replies_count == 0
        assert under_reply.items == []
        assert under_reply.total == 0

    @pytest.mark.asyncio
    async def test_missing_parent_raises_not_found(self, unit_env):
        tree_service = await unit_env.get(CommentTreeService)
        content_item_repo = await unit_env.get(ContentItemRepository)

        item = await content_item_repo.save(make_content_item())

        with pytest.raises(NotFoundError, match="Comment"):
            await tree_service.list_replies(
                CommentId(uuid4()), item.id, page=1, page_size=10
            )

    @pytest.mark.asyncio
    async def test_parent_on_another_item_raises_not_found(self, unit_env):
        tree_service = await unit_env.get(CommentTreeService)
        content_item_repo = await unit_env.get(ContentItemRepository)
        comment_repo = await unit_env.get(CommentRepository)

        item = await content_item_repo.save(make_content_item())
        other = await content_item_repo.save(make_content_item())
        root = await comment_repo.save(make_comment(other.id))

        with pytest.raises(NotFoundError, match="Comment"):
            await tree_service.list_replies(root.id, item.id, page=1, page_size=10)
