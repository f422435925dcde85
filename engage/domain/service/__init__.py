"""Domain services."""

from .base import Service
from .best_answer_service import BestAnswerService
from .comment_service import CommentService
from .comment_stats_service import (
    CommenterStats,
    CommentStats,
    CommentStatsService,
    DailyCommentCount,
)
from .comment_tree_service import CommentNode, CommentTreeService
from .counter_service import CounterDrift, CounterService, CounterSyncResult
from .identity_service import IdentityService
from .like_service import LikeService, LikeToggleResult
from .mutation import MutationPublisher, MutationReason
from .pagination import CommentPage, paginate

__all__ = [
    "BestAnswerService",
    "CommentNode",
    "CommentPage",
    "CommentService",
    "CommenterStats",
    "CommentStats",
    "CommentStatsService",
    "CommentTreeService",
    "CounterDrift",
    "CounterService",
    "CounterSyncResult",
    "DailyCommentCount",
    "IdentityService",
    "LikeService",
    "LikeToggleResult",
    "MutationPublisher",
    "MutationReason",
    "Service",
    "paginate",
]
