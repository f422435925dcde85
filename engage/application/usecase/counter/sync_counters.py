"""Sync counters use case."""

from uuid import UUID

from pydantic import BaseModel, Field

from engage.application.usecase.base import BaseUseCase
from engage.domain.error import UnauthorizedError
from engage.domain.service import CounterService
from engage.domain.value import CommentId, ContentItemId


class SyncCountersRequest(BaseModel):
    """Sync counters request."""

    content_item_id: str | None = None  # UUID string
    comment_ids: list[str] | None = None  # UUID strings
    batch_size: int = Field(default=100, ge=1, le=1000)
    user_id: str | None = None  # User ID from authenticated user


class SyncCountersResponse(BaseModel):
    """Sync counters response."""

    processed: int
    updated_like_counts: int
    updated_reply_counts: int


class SyncCountersUseCase(BaseUseCase):
    """Use case for rewriting drifted like/reply counters."""

    def __init__(self, counter_service: CounterService) -> None:
        """Initialize sync counters use case.

        Args:
            counter_service: Counter domain service
        """
        self.counter_service = counter_service

    async def execute(self, request: SyncCountersRequest) -> SyncCountersResponse:
        """Execute sync counters flow.

        Raises:
            UnauthorizedError: If no user
            NotFoundError: If the content item doesn't exist
        """
        if not request.user_id:
            raise UnauthorizedError("sync counters")

        result = await self.counter_service.sync_counters(
            content_item_id=(
                ContentItemId(UUID(request.content_item_id))
                if request.content_item_id
                else None
            ),
            comment_ids=(
                [CommentId(UUID(cid)) for cid in request.comment_ids]
                if request.comment_ids is not None
                else None
            ),
            batch_size=request.batch_size,
        )

        return SyncCountersResponse(
            processed=result.processed,
            updated_like_counts=result.updated_like_counts,
            updated_reply_counts=result.updated_reply_counts,
        )
