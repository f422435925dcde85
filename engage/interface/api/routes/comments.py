"""Comment routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query, Request, status
from pydantic import BaseModel

from engage.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
    GetCommentStatsRequest,
    GetCommentStatsResponse,
    GetCommentStatsUseCase,
    GetCommentsPageRequest,
    GetCommentsPageResponse,
    GetCommentsPageUseCase,
    GetRepliesRequest,
    GetRepliesResponse,
    GetRepliesUseCase,
    UpdateCommentRequest,
    UpdateCommentResponse,
    UpdateCommentUseCase,
)
from engage.config import AuthSettings
from engage.domain.service import IdentityService
from engage.domain.value import CommentSortPolicy, StatsTimeRange
from engage.interface.api.auth import resolve_caller_id

router = APIRouter(
    prefix="/content-items/{content_item_id}/comments",
    tags=["comments"],
    route_class=DishkaRoute,
)


class CreateCommentBody(BaseModel):
    """Request body for creating a comment."""

    content: str
    parent_id: UUID | None = None


class UpdateCommentBody(BaseModel):
    """Request body for editing a comment."""

    content: str


@router.get("", response_model=GetCommentsPageResponse)
async def get_comments(
    content_item_id: UUID,
    request: Request,
    get_comments_use_case: FromDishka[GetCommentsPageUseCase],
    identity_service: FromDishka[IdentityService],
    auth_settings: FromDishka[AuthSettings],
    sort_by: CommentSortPolicy = Query(default=CommentSortPolicy.LATEST),
    page: int = Query(default=1),
    page_size: int | None = Query(default=None, ge=1),
) -> GetCommentsPageResponse:
    """Get a page of threaded comments.

    Authentication is optional; authenticated viewers get is_liked per comment.
    """
    return await get_comments_use_case.execute(
        GetCommentsPageRequest(
            content_item_id=str(content_item_id),
            sort_by=sort_by,
            page=page,
            page_size=page_size,
            viewer_id=resolve_caller_id(request, identity_service, auth_settings),
        )
    )


@router.get("/stats", response_model=GetCommentStatsResponse)
async def get_comment_stats(
    content_item_id: UUID,
    get_comment_stats_use_case: FromDishka[GetCommentStatsUseCase],
    time_range: StatsTimeRange = Query(default=StatsTimeRange.ALL),
) -> GetCommentStatsResponse:
    """Summarize comment activity on a content item within a time range."""
    return await get_comment_stats_use_case.execute(
        GetCommentStatsRequest(
            content_item_id=str(content_item_id), time_range=time_range
        )
    )


@router.get("/{comment_id}/replies", response_model=GetRepliesResponse)
async def get_replies(
    content_item_id: UUID,
    comment_id: UUID,
    request: Request,
    get_replies_use_case: FromDishka[GetRepliesUseCase],
    identity_service: FromDishka[IdentityService],
    auth_settings: FromDishka[AuthSettings],
    page: int = Query(default=1),
    page_size: int | None = Query(default=None, ge=1),
) -> GetRepliesResponse:
    """Get a page of direct replies to a comment, oldest first.

    Authentication is optional; authenticated viewers get is_liked per reply.
    """
    return await get_replies_use_case.execute(
        GetRepliesRequest(
            content_item_id=str(content_item_id),
            comment_id=str(comment_id),
            page=page,
            page_size=page_size,
            viewer_id=resolve_caller_id(request, identity_service, auth_settings),
        )
    )


@router.post(
    "",
    response_model=CreateCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    content_item_id: UUID,
    body: CreateCommentBody,
    request: Request,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    identity_service: FromDishka[IdentityService],
    auth_settings: FromDishka[AuthSettings],
) -> CreateCommentResponse:
    """Comment on a content item, or reply when parent_id is given.

    Requires authentication.
    """
    return await create_comment_use_case.execute(
        CreateCommentRequest(
            content_item_id=str(content_item_id),
            content=body.content,
            author_id=resolve_caller_id(request, identity_service, auth_settings),
            parent_id=str(body.parent_id) if body.parent_id else None,
        )
    )


@router.patch("/{comment_id}", response_model=UpdateCommentResponse)
async def update_comment(
    content_item_id: UUID,
    comment_id: UUID,
    body: UpdateCommentBody,
    request: Request,
    update_comment_use_case: FromDishka[UpdateCommentUseCase],
    identity_service: FromDishka[IdentityService],
    auth_settings: FromDishka[AuthSettings],
) -> UpdateCommentResponse:
    """Edit a comment. Only the author can edit."""
    return await update_comment_use_case.execute(
        UpdateCommentRequest(
            comment_id=str(comment_id),
            content_item_id=str(content_item_id),
            content=body.content,
            user_id=resolve_caller_id(request, identity_service, auth_settings),
        )
    )
