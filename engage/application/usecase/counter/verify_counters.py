"""Verify counters use case."""

from uuid import UUID

from pydantic import BaseModel, Field

from engage.application.usecase.base import BaseUseCase
from engage.domain.error import UnauthorizedError
from engage.domain.service import CounterService
from engage.domain.value import ContentItemId, LikeTargetType


class CounterDriftItem(BaseModel):
    """A counter whose stored value disagrees with its source rows."""

    target_type: LikeTargetType
    target_id: str
    counter: str  # "like_count" or "replies_count"
    stored: int
    actual: int


class VerifyCountersRequest(BaseModel):
    """Verify counters request."""

    content_item_id: str | None = None  # UUID string, None for all comments
    limit: int = Field(default=1000, ge=1, le=10000)
    offset: int = Field(default=0, ge=0)
    user_id: str | None = None  # User ID from authenticated user


class VerifyCountersResponse(BaseModel):
    """Verify counters response."""

    is_consistent: bool
    drifts: list[CounterDriftItem]


class VerifyCountersUseCase(BaseUseCase):
    """Use case for reporting drifted like/reply counters."""

    def __init__(self, counter_service: CounterService) -> None:
        """Initialize verify counters use case.

        Args:
            counter_service: Counter domain service
        """
        self.counter_service = counter_service

    async def execute(self, request: VerifyCountersRequest) -> VerifyCountersResponse:
        """Execute verify counters flow.

        Raises:
            UnauthorizedError: If no user
            NotFoundError: If the content item doesn't exist
        """
        if not request.user_id:
            raise UnauthorizedError("verify counters")

        drifts = await self.counter_service.verify_counters(
            content_item_id=(
                ContentItemId(UUID(request.content_item_id))
                if request.content_item_id
                else None
            ),
            limit=request.limit,
            offset=request.offset,
        )

        return VerifyCountersResponse(
            is_consistent=not drifts,
            drifts=[
                CounterDriftItem(
                    target_type=drift.target_type,
                    target_id=str(drift.target_id),
                    counter=drift.counter,
                    stored=drift.stored,
                    actual=drift.actual,
                )
                for drift in drifts
            ],
        )
