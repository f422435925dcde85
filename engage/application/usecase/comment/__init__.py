"""Comment use cases."""

from .create_comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
)
from .get_comment_stats import (
    GetCommentStatsRequest,
    GetCommentStatsResponse,
    GetCommentStatsUseCase,
)
from .get_comments_page import (
    CommentItem,
    GetCommentsPageRequest,
    GetCommentsPageResponse,
    GetCommentsPageUseCase,
    PaginationInfo,
)
from .get_replies import GetRepliesRequest, GetRepliesResponse, GetRepliesUseCase
from .update_comment import (
    UpdateCommentRequest,
    UpdateCommentResponse,
    UpdateCommentUseCase,
)

__all__ = [
    "CommentItem",
    "CreateCommentRequest",
    "CreateCommentResponse",
    "CreateCommentUseCase",
    "GetCommentStatsRequest",
    "GetCommentStatsResponse",
    "GetCommentStatsUseCase",
    "GetCommentsPageRequest",
    "GetCommentsPageResponse",
    "GetCommentsPageUseCase",
    "GetRepliesRequest",
    "GetRepliesResponse",
    "GetRepliesUseCase",
    "PaginationInfo",
    "UpdateCommentRequest",
    "UpdateCommentResponse",
    "UpdateCommentUseCase",
]
