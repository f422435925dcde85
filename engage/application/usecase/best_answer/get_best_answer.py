"""Get best answer use case."""

from uuid import UUID

from pydantic import BaseModel

from engage.application.usecase.base import BaseUseCase
from engage.domain.service import BestAnswerService
from engage.domain.value import ContentItemId


class GetBestAnswerRequest(BaseModel):
    """Get best answer request."""

    content_item_id: str  # UUID string


class GetBestAnswerResponse(BaseModel):
    """Get best answer response."""

    content_item_id: str
    best_answer_id: str | None


class GetBestAnswerUseCase(BaseUseCase):
    """Use case for listing views that mark answered content items."""

    def __init__(self, best_answer_service: BestAnswerService) -> None:
        self.best_answer_service = best_answer_service

    async def execute(self, request: GetBestAnswerRequest) -> GetBestAnswerResponse:
        best_answer_id = await self.best_answer_service.get_best_answer(
            ContentItemId(UUID(request.content_item_id))
        )
        return GetBestAnswerResponse(
            content_item_id=request.content_item_id,
            best_answer_id=str(best_answer_id) if best_answer_id else None,
        )
