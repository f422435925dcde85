"""Counter reconciliation routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query, Request
from pydantic import BaseModel, Field

from engage.application.usecase.counter import (
    SyncCountersRequest,
    SyncCountersResponse,
    SyncCountersUseCase,
    VerifyCountersRequest,
    VerifyCountersResponse,
    VerifyCountersUseCase,
)
from engage.config import AuthSettings
from engage.domain.service import IdentityService
from engage.interface.api.auth import resolve_caller_id

router = APIRouter(prefix="/counters", tags=["counters"], route_class=DishkaRoute)


class SyncCountersBody(BaseModel):
    """Request body for a counter sync run."""

    content_item_id: UUID | None = None
    comment_ids: list[UUID] | None = None
    batch_size: int = Field(default=100, ge=1, le=1000)


@router.get("/verify", response_model=VerifyCountersResponse)
async def verify_counters(
    request: Request,
    verify_counters_use_case: FromDishka[VerifyCountersUseCase],
    identity_service: FromDishka[IdentityService],
    auth_settings: FromDishka[AuthSettings],
    content_item_id: UUID | None = Query(default=None),
    limit: int = Query(default=1000, ge=1, le=10000),
    offset: int = Query(default=0, ge=0),
) -> VerifyCountersResponse:
    """Report like/reply counters that disagree with their source rows.

    Requires authentication, like sync.
    """
    return await verify_counters_use_case.execute(
        VerifyCountersRequest(
            content_item_id=str(content_item_id) if content_item_id else None,
            limit=limit,
            offset=offset,
            user_id=resolve_caller_id(request, identity_service, auth_settings),
        )
    )


@router.post("/sync", response_model=SyncCountersResponse)
async def sync_counters(
    body: SyncCountersBody,
    request: Request,
    sync_counters_use_case: FromDishka[SyncCountersUseCase],
    identity_service: FromDishka[IdentityService],
    auth_settings: FromDishka[AuthSettings],
) -> SyncCountersResponse:
    """Rewrite drifted counters. Requires authentication."""
    return await sync_counters_use_case.execute(
        SyncCountersRequest(
            content_item_id=str(body.content_item_id) if body.content_item_id else None,
            comment_ids=(
                [str(cid) for cid in body.comment_ids]
                if body.comment_ids is not None
                else None
            ),
            batch_size=body.batch_size,
            user_id=resolve_caller_id(request, identity_service, auth_settings),
        )
    )
