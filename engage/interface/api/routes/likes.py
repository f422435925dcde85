"""Like routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Request

from engage.application.usecase.like import (
    ToggleLikeRequest,
    ToggleLikeResponse,
    ToggleLikeUseCase,
)
from engage.config import AuthSettings
from engage.domain.service import IdentityService
from engage.domain.value import LikeTargetType
from engage.interface.api.auth import resolve_caller_id

router = APIRouter(tags=["likes"], route_class=DishkaRoute)


@router.post("/content-items/{content_item_id}/like", response_model=ToggleLikeResponse)
async def toggle_content_item_like(
    content_item_id: UUID,
    request: Request,
    toggle_like_use_case: FromDishka[ToggleLikeUseCase],
    identity_service: FromDishka[IdentityService],
    auth_settings: FromDishka[AuthSettings],
) -> ToggleLikeResponse:
    """Like or unlike a content item.

    Requires authentication. Calling twice restores the original state.
    """
    return await toggle_like_use_case.execute(
        ToggleLikeRequest(
            target_type=LikeTargetType.CONTENT_ITEM,
            target_id=str(content_item_id),
            user_id=resolve_caller_id(request, identity_service, auth_settings),
        )
    )


@router.post("/comments/{comment_id}/like", response_model=ToggleLikeResponse)
async def toggle_comment_like(
    comment_id: UUID,
    request: Request,
    toggle_like_use_case: FromDishka[ToggleLikeUseCase],
    identity_service: FromDishka[IdentityService],
    auth_settings: FromDishka[AuthSettings],
) -> ToggleLikeResponse:
    """Like or unlike a comment.

    Requires authentication. Calling twice restores the original state.
    """
    return await toggle_like_use_case.execute(
        ToggleLikeRequest(
            target_type=LikeTargetType.COMMENT,
            target_id=str(comment_id),
            user_id=resolve_caller_id(request, identity_service, auth_settings),
        )
    )
