"""Get replies use case."""

from uuid import UUID

from pydantic import BaseModel, Field

from engage.application.usecase.base import BaseUseCase
from engage.config import CommentSettings
from engage.domain.service import CommentTreeService
from engage.domain.value import CommentId, ContentItemId, UserId

from .get_comments_page import CommentItem, PaginationInfo, to_comment_item


class GetRepliesRequest(BaseModel):
    """Get replies request."""

    content_item_id: str  # UUID string
    comment_id: str  # Parent comment UUID string
    page: int = 1  # Values below 1 are treated as 1
    page_size: int | None = Field(default=None, ge=1)
    viewer_id: str | None = None  # User ID from authenticated user (optional)


class GetRepliesResponse(BaseModel):
    """Get replies response."""

    comment_id: str
    replies: list[CommentItem]
    pagination: PaginationInfo


class GetRepliesUseCase(BaseUseCase):
    """Use case for paging through the replies to one comment."""

    def __init__(
        self,
        comment_tree_service: CommentTreeService,
        comment_settings: CommentSettings,
    ) -> None:
        """Initialize get replies use case.

        Args:
            comment_tree_service: Comment tree domain service
            comment_settings: Page size defaults and limits
        """
        self.comment_tree_service = comment_tree_service
        self.comment_settings = comment_settings

    async def execute(self, request: GetRepliesRequest) -> GetRepliesResponse:
        """Execute get replies flow.

        Raises:
            NotFoundError: If the content item or parent comment doesn't exist
        """
        page_size = min(
            request.page_size or self.comment_settings.default_page_size,
            self.comment_settings.max_page_size,
        )

        page = await self.comment_tree_service.list_replies(
            parent_id=CommentId(UUID(request.comment_id)),
            content_item_id=ContentItemId(UUID(request.content_item_id)),
            page=request.page,
            page_size=page_size,
            viewer_id=UserId(UUID(request.viewer_id)) if request.viewer_id else None,
        )

        return GetRepliesResponse(
            comment_id=request.comment_id,
            replies=[to_comment_item(node) for node in page.items],
            pagination=PaginationInfo(
                page=page.page,
                page_size=page.page_size,
                total=page.total,
                total_pages=page.total_pages,
                has_next=page.has_next,
                has_prev=page.has_prev,
            ),
        )
