"""Create comment use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from engage.application.usecase.base import BaseUseCase
from engage.domain.service import CommentService
from engage.domain.value import CommentId, ContentItemId, UserId


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    content_item_id: str  # UUID string
    content: str
    author_id: str | None = None  # User ID from authenticated user
    parent_id: str | None = None  # Parent comment ID for replies


class CreateCommentResponse(BaseModel):
    """Create comment response."""

    comment_id: str
    content_item_id: str
    author_id: str
    content: str
    parent_id: str | None
    depth: int
    created_at: datetime


class CreateCommentUseCase(BaseUseCase):
    """Use case for commenting on a content item or replying to a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        Args:
            request: Create comment request

        Returns:
            Create comment response with comment details

        Raises:
            UnauthorizedError: If no author
            ValidationFailedError: If content is empty or too long
            NotFoundError: If the content item or parent doesn't exist
            DepthExceededError: If the reply would nest too deep
        """
        comment = await self.comment_service.create_comment(
            content_item_id=ContentItemId(UUID(request.content_item_id)),
            author_id=UserId(UUID(request.author_id)) if request.author_id else None,
            content=request.content,
            parent_id=CommentId(UUID(request.parent_id)) if request.parent_id else None,
        )

        return CreateCommentResponse(
            comment_id=str(comment.id),
            content_item_id=str(comment.content_item_id),
            author_id=str(comment.author_id),
            content=comment.content,
            parent_id=str(comment.parent_id) if comment.parent_id else None,
            depth=comment.depth,
            created_at=comment.created_at,
        )
