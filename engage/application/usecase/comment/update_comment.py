"""Update comment use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from engage.application.usecase.base import BaseUseCase
from engage.domain.service import CommentService
from engage.domain.value import CommentId, ContentItemId, UserId


class UpdateCommentRequest(BaseModel):
    """Update comment request."""

    comment_id: str  # UUID string
    content_item_id: str  # UUID string
    content: str
    user_id: str | None = None  # User ID from authenticated user


class UpdateCommentResponse(BaseModel):
    """Update comment response."""

    comment_id: str
    content: str
    updated_at: datetime


class UpdateCommentUseCase(BaseUseCase):
    """Use case for editing a comment's content."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize update comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: UpdateCommentRequest) -> UpdateCommentResponse:
        """Execute update comment flow.

        Raises:
            UnauthorizedError: If no user
            NotFoundError: If the comment doesn't exist on the content item
            ForbiddenError: If the user is not the author
            ValidationFailedError: If content is empty or too long
        """
        comment = await self.comment_service.update_comment(
            caller_id=UserId(UUID(request.user_id)) if request.user_id else None,
            comment_id=CommentId(UUID(request.comment_id)),
            content_item_id=ContentItemId(UUID(request.content_item_id)),
            content=request.content,
        )

        return UpdateCommentResponse(
            comment_id=str(comment.id),
            content=comment.content,
            updated_at=comment.updated_at,
        )
