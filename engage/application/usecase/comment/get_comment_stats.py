"""Get comment stats use case."""

from uuid import UUID

from pydantic import BaseModel

from engage.application.usecase.base import BaseUseCase
from engage.domain.model.comment import Comment
from engage.domain.service import CommentStatsService
from engage.domain.value import ContentItemId, StatsTimeRange


class CommentHighlight(BaseModel):
    """A standout comment in the stats window."""

    comment_id: str
    author_id: str
    content: str
    like_count: int
    replies_count: int


class DailyCount(BaseModel):
    """Comments created on one day."""

    date: str
    count: int


class TopCommenter(BaseModel):
    """One of the most active authors in the window."""

    author_id: str
    comment_count: int
    total_likes: int


class GetCommentStatsRequest(BaseModel):
    """Get comment stats request."""

    content_item_id: str  # UUID string
    time_range: StatsTimeRange = StatsTimeRange.ALL


class GetCommentStatsResponse(BaseModel):
    """Get comment stats response."""

    content_item_id: str
    time_range: StatsTimeRange
    total_comments: int
    total_replies: int
    total_likes: int
    average_replies_per_comment: float
    most_liked_comment: CommentHighlight | None
    most_replied_comment: CommentHighlight | None
    comments_by_date: list[DailyCount]
    top_commenters: list[TopCommenter]


class GetCommentStatsUseCase(BaseUseCase):
    """Use case for summarizing comment activity on a content item."""

    def __init__(self, comment_stats_service: CommentStatsService) -> None:
        """Initialize get comment stats use case.

        Args:
            comment_stats_service: Comment stats domain service
        """
        self.comment_stats_service = comment_stats_service

    async def execute(self, request: GetCommentStatsRequest) -> GetCommentStatsResponse:
        """Execute get comment stats flow.

        Raises:
            NotFoundError: If the content item doesn't exist
        """
        stats = await self.comment_stats_service.get_stats(
            content_item_id=ContentItemId(UUID(request.content_item_id)),
            time_range=request.time_range,
        )

        return GetCommentStatsResponse(
            content_item_id=request.content_item_id,
            time_range=request.time_range,
            total_comments=stats.total_comments,
            total_replies=stats.total_replies,
            total_likes=stats.total_likes,
            average_replies_per_comment=stats.average_replies_per_comment,
            most_liked_comment=_highlight(stats.most_liked),
            most_replied_comment=_highlight(stats.most_replied),
            comments_by_date=[
                DailyCount(date=day.date, count=day.count)
                for day in stats.comments_by_date
            ],
            top_commenters=[
                TopCommenter(
                    author_id=str(commenter.author_id),
                    comment_count=commenter.comment_count,
                    total_likes=commenter.total_likes,
                )
                for commenter in stats.top_commenters
            ],
        )


def _highlight(comment: Comment | None) -> CommentHighlight | None:
    if comment is None:
        return None
    return CommentHighlight(
        comment_id=str(comment.id),
        author_id=str(comment.author_id),
        content=comment.content,
        like_count=comment.like_count,
        replies_count=comment.replies_count,
    )
