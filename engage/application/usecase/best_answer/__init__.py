"""Best answer use cases."""

from .get_best_answer import (
    GetBestAnswerRequest,
    GetBestAnswerResponse,
    GetBestAnswerUseCase,
)
from .select_best_answer import (
    SelectBestAnswerRequest,
    SelectBestAnswerResponse,
    SelectBestAnswerUseCase,
)

__all__ = [
    "GetBestAnswerRequest",
    "GetBestAnswerResponse",
    "GetBestAnswerUseCase",
    "SelectBestAnswerRequest",
    "SelectBestAnswerResponse",
    "SelectBestAnswerUseCase",
]
