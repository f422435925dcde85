"""Get comments page use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from engage.application.usecase.base import BaseUseCase
from engage.config import CommentSettings
from engage.domain.service import CommentNode, CommentTreeService, paginate
from engage.domain.value import CommentSortPolicy, ContentItemId, UserId


class CommentItem(BaseModel):
    """Comment thread node in response."""

    comment_id: str
    content_item_id: str
    author_id: str
    content: str
    parent_id: str | None
    depth: int
    like_count: int
    replies_count: int
    is_best_answer: bool
    is_liked: bool | None  # None for anonymous viewers
    created_at: datetime
    updated_at: datetime
    replies: list["CommentItem"]


class PaginationInfo(BaseModel):
    """Pagination metadata for top-level comments."""

    page: int
    page_size: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool


class GetCommentsPageRequest(BaseModel):
    """Get comments page request."""

    content_item_id: str  # UUID string
    sort_by: CommentSortPolicy = CommentSortPolicy.LATEST
    page: int = 1  # Values below 1 are treated as 1
    page_size: int | None = Field(default=None, ge=1)
    viewer_id: str | None = None  # User ID from authenticated user (optional)


class GetCommentsPageResponse(BaseModel):
    """Get comments page response."""

    content_item_id: str
    comments: list[CommentItem]
    pagination: PaginationInfo


class GetCommentsPageUseCase(BaseUseCase):
    """Use case for reading one page of threaded comments."""

    def __init__(
        self,
        comment_tree_service: CommentTreeService,
        comment_settings: CommentSettings,
    ) -> None:
        """Initialize get comments page use case.

        Args:
            comment_tree_service: Comment tree domain service
            comment_settings: Page size defaults and limits
        """
        self.comment_tree_service = comment_tree_service
        self.comment_settings = comment_settings

    async def execute(self, request: GetCommentsPageRequest) -> GetCommentsPageResponse:
        """Execute get comments page flow.

        Steps:
        1. Build the full comment forest with the viewer's like state
        2. Slice the top-level threads for the requested page

        Args:
            request: Get comments page request

        Returns:
            Page of comment threads with pagination metadata

        Raises:
            NotFoundError: If the content item doesn't exist
        """
        page_size = min(
            request.page_size or self.comment_settings.default_page_size,
            self.comment_settings.max_page_size,
        )

        forest = await self.comment_tree_service.build_tree(
            content_item_id=ContentItemId(UUID(request.content_item_id)),
            sort_policy=request.sort_by,
            viewer_id=UserId(UUID(request.viewer_id)) if request.viewer_id else None,
        )
        page = paginate(forest, page=request.page, page_size=page_size)

        return GetCommentsPageResponse(
            content_item_id=request.content_item_id,
            comments=[to_comment_item(node) for node in page.items],
            pagination=PaginationInfo(
                page=page.page,
                page_size=page.page_size,
                total=page.total,
                total_pages=page.total_pages,
                has_next=page.has_next,
                has_prev=page.has_prev,
            ),
        )


def to_comment_item(node: CommentNode) -> CommentItem:
    comment = node.comment
    return CommentItem(
        comment_id=str(comment.id),
        content_item_id=str(comment.content_item_id),
        author_id=str(comment.author_id),
        content=comment.content,
        parent_id=str(comment.parent_id) if comment.parent_id else None,
        depth=comment.depth,
        like_count=comment.like_count,
        replies_count=comment.replies_count,
        is_best_answer=comment.is_best_answer,
        is_liked=node.is_liked_by_viewer,
        created_at=comment.created_at,
        updated_at=comment.updated_at,
        replies=[to_comment_item(child) for child in node.children],
    )
