"""Toggle like use case."""

from uuid import UUID

from pydantic import BaseModel

from engage.application.usecase.base import BaseUseCase
from engage.domain.service import LikeService
from engage.domain.value import LikeTargetType, UserId


class ToggleLikeRequest(BaseModel):
    """Toggle like request."""

    target_type: LikeTargetType
    target_id: str  # UUID string
    user_id: str | None = None  # User ID from authenticated user


class ToggleLikeResponse(BaseModel):
    """Toggle like response."""

    target_type: LikeTargetType
    target_id: str
    is_liked: bool
    like_count: int


class ToggleLikeUseCase(BaseUseCase):
    """Use case for liking or unliking a content item or comment."""

    def __init__(self, like_service: LikeService) -> None:
        """Initialize toggle like use case.

        Args:
            like_service: Like domain service
        """
        self.like_service = like_service

    async def execute(self, request: ToggleLikeRequest) -> ToggleLikeResponse:
        """Execute toggle like flow.

        Args:
            request: Toggle like request

        Returns:
            Like state and count after the toggle

        Raises:
            UnauthorizedError: If no user
            NotFoundError: If the target doesn't exist
            TransientStoreFailure: If the store aborted; safe to retry
        """
        user_id = UserId(UUID(request.user_id)) if request.user_id else None

        result = await self.like_service.toggle_like(
            user_id=user_id,
            target_type=request.target_type,
            target_id=UUID(request.target_id),
        )

        return ToggleLikeResponse(
            target_type=request.target_type,
            target_id=request.target_id,
            is_liked=result.is_liked,
            like_count=result.like_count,
        )
