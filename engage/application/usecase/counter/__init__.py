"""Counter reconciliation use cases."""

from .sync_counters import SyncCountersRequest, SyncCountersResponse, SyncCountersUseCase
from .verify_counters import (
    CounterDriftItem,
    VerifyCountersRequest,
    VerifyCountersResponse,
    VerifyCountersUseCase,
)

__all__ = [
    "CounterDriftItem",
    "SyncCountersRequest",
    "SyncCountersResponse",
    "SyncCountersUseCase",
    "VerifyCountersRequest",
    "VerifyCountersResponse",
    "VerifyCountersUseCase",
]
