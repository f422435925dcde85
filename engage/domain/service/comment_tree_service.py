"""Comment tree domain service."""

from collections import defaultdict
from dataclasses import dataclass, field, replace
from typing import Optional

import logfire

from engage.config import CommentSettings
from engage.domain.error import NotFoundError
from engage.domain.model.comment import Comment
from engage.domain.repository import (
    CommentRepository,
    ContentItemRepository,
    LikeRepository,
)
from engage.domain.value import (
    CommentId,
    CommentSortPolicy,
    ContentItemId,
    LikeTargetType,
    UserId,
)

from .base import Service
from .pagination import CommentPage, paginate


@dataclass
class CommentNode:
    """Node in a comment thread.

    In a tree the comment's replies_count matches len(children): replies
    that were omitted while building the tree are not counted. Nodes from a
    reply listing have no children loaded.
    """

    comment: Comment
    is_liked_by_viewer: bool | None
    children: list["CommentNode"] = field(default_factory=list)


class CommentTreeService(Service):
    """Assembles flat comment rows into a depth-bounded forest."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        content_item_repository: ContentItemRepository,
        like_repository: LikeRepository,
        comment_settings: CommentSettings,
    ) -> None:
        """Initialize comment tree service.

        Args:
            comment_repository: Comment repository
            content_item_repository: Content item repository
            like_repository: Like ledger repository
            comment_settings: Depth limits per content item kind
        """
        self.comment_repository = comment_repository
        self.content_item_repository = content_item_repository
        self.like_repository = like_repository
        self.comment_settings = comment_settings

    async def build_tree(
        self,
        content_item_id: ContentItemId,
        sort_policy: CommentSortPolicy = CommentSortPolicy.LATEST,
        viewer_id: Optional[UserId] = None,
    ) -> list[CommentNode]:
        """Build the comment forest for a content item.

        Algorithm:
        1. Fetch all comment rows for the item (flat)
        2. Build an arena (id -> comment) and a parent -> children index
        3. Look up the viewer's likes for every row in one query
        4. Walk down from top-level rows, stopping below max_depth
        5. Order top-level nodes by sort policy (best answer first),
           replies oldest first

        Rows that can't be reached from a top-level row are dropped: their
        parent is missing, lives on another content item, or they sit in a
        parent cycle. So are rows below max_depth. This is not an error.

        Args:
            content_item_id: Content item ID
            sort_policy: Ordering of top-level comments
            viewer_id: Viewer's user ID (None for anonymous reads)

        Returns:
            List of top-level CommentNode objects with children populated

        Raises:
            NotFoundError: If the content item doesn't exist
        """
        with logfire.span(
            "comment_tree_service.build_tree",
            content_item_id=str(content_item_id),
            sort_policy=sort_policy.value,
            viewer_id=str(viewer_id) if viewer_id else None,
        ):
            content_item = await self.content_item_repository.find_by_id(
                content_item_id
            )
            if not content_item:
                raise NotFoundError("Content item", str(content_item_id))
            max_depth = self.comment_settings.max_depth_for(content_item.kind)

            rows = await self.comment_repository.find_by_content_item(content_item_id)

            arena: dict[CommentId, Comment] = {row.id: row for row in rows}
            children_index: dict[CommentId, list[CommentId]] = defaultdict(list)
            roots: list[CommentId] = []
            for row in rows:
                if row.parent_id is None:
                    roots.append(row.id)
                else:
                    children_index[row.parent_id].append(row.id)

            liked_ids: set[CommentId] | None = None
            if viewer_id is not None and arena:
                likes = await self.like_repository.find_by_user_and_targets(
                    viewer_id, LikeTargetType.COMMENT, list(arena)
                )
                liked_ids = {CommentId(like.target_id) for like in likes}

            def build_subtree(comment_id: CommentId, depth: int) -> CommentNode:
                """Build a node and its replies down to max_depth."""
                children: list[CommentNode] = []
                if depth < max_depth:
                    children = [
                        build_subtree(child_id, depth + 1)
                        for child_id in children_index.get(comment_id, [])
                    ]
                    children.sort(key=_chronological_key)

                comment = arena[comment_id]
                if comment.replies_count != len(children):
                    comment = comment.model_copy(
                        update={"replies_count": len(children)}
                    )
                return CommentNode(
                    comment=comment,
                    is_liked_by_viewer=(
                        comment_id in liked_ids if liked_ids is not None else None
                    ),
                    children=children,
                )

            forest = [build_subtree(root_id, 0) for root_id in roots]
            forest = sort_top_level(forest, sort_policy)

            logfire.info(
                "Comment tree built",
                content_item_id=str(content_item_id),
                rows=len(rows),
                top_level=len(forest),
                returned=count_nodes(forest),
            )
            return forest

    async def list_replies(
        self,
        parent_id: CommentId,
        content_item_id: ContentItemId,
        page: int,
        page_size: int,
        viewer_id: Optional[UserId] = None,
    ) -> CommentPage:
        """Page through the direct replies to one comment, oldest first.

        Replies follow the same omission rules as the tree: rows on another
        content item are skipped, and a parent already at max_depth has no
        listable replies. Returned nodes carry no children; each reply's
        replies_count counts its stored replies, or is 0 when those would sit
        below max_depth.

        Raises:
            NotFoundError: If the parent comment doesn't exist on the item
        """
        with logfire.span(
            "comment_tree_service.list_replies",
            parent_id=str(parent_id),
            page=page,
            page_size=page_size,
            viewer_id=str(viewer_id) if viewer_id else None,
        ):
            content_item = await self.content_item_repository.find_by_id(
                content_item_id
            )
            if not content_item:
                raise NotFoundError("Content item", str(content_item_id))

            parent = await self.comment_repository.find_by_id(parent_id)
            if not parent or parent.content_item_id != content_item_id:
                raise NotFoundError("Comment", str(parent_id))

            max_depth = self.comment_settings.max_depth_for(content_item.kind)
            replies: list[Comment] = []
            if parent.depth < max_depth:
                replies = [
                    reply
                    for reply in await self.comment_repository.find_replies(parent_id)
                    if reply.content_item_id == content_item_id
                ]

            window = paginate(replies, page=page, page_size=page_size)
            shown: list[Comment] = window.items

            reply_counts: dict[CommentId, int] = {}
            if shown and parent.depth + 1 < max_depth:
                reply_counts = await self.comment_repository.count_replies(
                    [reply.id for reply in shown]
                )

            liked_ids: set[CommentId] | None = None
            if viewer_id is not None and shown:
                likes = await self.like_repository.find_by_user_and_targets(
                    viewer_id, LikeTargetType.COMMENT, [reply.id for reply in shown]
                )
                liked_ids = {CommentId(like.target_id) for like in likes}

            nodes = []
            for reply in shown:
                replies_count = reply_counts.get(reply.id, 0)
                if reply.replies_count != replies_count:
                    reply = reply.model_copy(update={"replies_count": replies_count})
                nodes.append(
                    CommentNode(
                        comment=reply,
                        is_liked_by_viewer=(
                            reply.id in liked_ids if liked_ids is not None else None
                        ),
                    )
                )

            return replace(window, items=nodes)


def _chronological_key(node: CommentNode) -> tuple:
    return (node.comment.created_at, node.comment.id)


def sort_top_level(
    nodes: list[CommentNode], sort_policy: CommentSortPolicy
) -> list[CommentNode]:
    """Order top-level nodes by policy, with the best answer first.

    Ties break on created_at, then id, in the policy's direction.
    """
    if sort_policy == CommentSortPolicy.OLDEST:
        ordered = sorted(nodes, key=_chronological_key)
    elif sort_policy == CommentSortPolicy.MOST_LIKED:
        ordered = sorted(
            nodes,
            key=lambda node: (
                node.comment.like_count,
                node.comment.created_at,
                node.comment.id,
            ),
            reverse=True,
        )
    else:
        ordered = sorted(nodes, key=_chronological_key, reverse=True)

    # Stable sort keeps the policy order for everything but the best answer
    return sorted(ordered, key=lambda node: not node.comment.is_best_answer)


def count_nodes(nodes: list[CommentNode]) -> int:
    """Count nodes in a forest, replies included."""
    return sum(1 + count_nodes(node.children) for node in nodes)
