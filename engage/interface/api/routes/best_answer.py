"""Best answer routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Request
from pydantic import BaseModel

from engage.application.usecase.best_answer import (
    GetBestAnswerRequest,
    GetBestAnswerResponse,
    GetBestAnswerUseCase,
    SelectBestAnswerRequest,
    SelectBestAnswerResponse,
    SelectBestAnswerUseCase,
)
from engage.config import AuthSettings
from engage.domain.service import IdentityService
from engage.interface.api.auth import resolve_caller_id

router = APIRouter(
    prefix="/content-items/{content_item_id}/best-answer",
    tags=["best-answer"],
    route_class=DishkaRoute,
)


class SelectBestAnswerBody(BaseModel):
    """Request body for selecting a best answer."""

    comment_id: UUID


@router.get("", response_model=GetBestAnswerResponse)
async def get_best_answer(
    content_item_id: UUID,
    get_best_answer_use_case: FromDishka[GetBestAnswerUseCase],
) -> GetBestAnswerResponse:
    """Get the current best answer of a content item."""
    return await get_best_answer_use_case.execute(
        GetBestAnswerRequest(content_item_id=str(content_item_id))
    )


@router.post("", response_model=SelectBestAnswerResponse)
async def select_best_answer(
    content_item_id: UUID,
    body: SelectBestAnswerBody,
    request: Request,
    select_best_answer_use_case: FromDishka[SelectBestAnswerUseCase],
    identity_service: FromDishka[IdentityService],
    auth_settings: FromDishka[AuthSettings],
) -> SelectBestAnswerResponse:
    """Select a best answer, or unselect it when it is already selected.

    Only the content item's author can select.
    """
    return await select_best_answer_use_case.execute(
        SelectBestAnswerRequest(
            content_item_id=str(content_item_id),
            comment_id=str(body.comment_id),
            user_id=resolve_caller_id(request, identity_service, auth_settings),
        )
    )
