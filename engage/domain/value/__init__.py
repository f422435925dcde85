"""Domain value objects for the engagement core."""

from engage.domain.value.identifiers import (
    CommentId,
    ContentItemId,
    LikeId,
    UserId,
)
from engage.domain.value.types import (
    CommentSortPolicy,
    ContentItemKind,
    LikeTargetType,
    StatsTimeRange,
)

__all__ = [
    # Identifiers
    "UserId",
    "ContentItemId",
    "CommentId",
    "LikeId",
    # Types
    "ContentItemKind",
    "LikeTargetType",
    "CommentSortPolicy",
    "StatsTimeRange",
]
