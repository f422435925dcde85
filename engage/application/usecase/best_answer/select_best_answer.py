"""Select best answer use case."""

from uuid import UUID

from pydantic import BaseModel

from engage.application.usecase.base import BaseUseCase
from engage.domain.service import BestAnswerService
from engage.domain.value import CommentId, ContentItemId, UserId


class SelectBestAnswerRequest(BaseModel):
    """Select best answer request."""

    content_item_id: str  # UUID string
    comment_id: str  # UUID string
    user_id: str | None = None  # User ID from authenticated user


class SelectBestAnswerResponse(BaseModel):
    """Select best answer response."""

    content_item_id: str
    best_answer_id: str | None  # None when the selection was toggled off


class SelectBestAnswerUseCase(BaseUseCase):
    """Use case for the content item author to pick or unpick a best answer."""

    def __init__(self, best_answer_service: BestAnswerService) -> None:
        """Initialize select best answer use case.

        Args:
            best_answer_service: Best answer domain service
        """
        self.best_answer_service = best_answer_service

    async def execute(self, request: SelectBestAnswerRequest) -> SelectBestAnswerResponse:
        """Execute select best answer flow.

        Raises:
            UnauthorizedError: If no user
            NotFoundError: If the content item or comment doesn't exist
            ForbiddenError: If the user is not the content item's author
            InvalidTargetError: If the comment is a reply or on another item
        """
        best_answer_id = await self.best_answer_service.select_best_answer(
            comment_id=CommentId(UUID(request.comment_id)),
            content_item_id=ContentItemId(UUID(request.content_item_id)),
            caller_id=UserId(UUID(request.user_id)) if request.user_id else None,
        )

        return SelectBestAnswerResponse(
            content_item_id=request.content_item_id,
            best_answer_id=str(best_answer_id) if best_answer_id else None,
        )
