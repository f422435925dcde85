"""Comment statistics domain service."""

from collections import Counter, defaultdict
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

import logfire

from engage.domain.error import NotFoundError
from engage.domain.model.comment import Comment
from engage.domain.repository import (
    CommentRepository,
    ContentItemRepository,
    LikeRepository,
)
from engage.domain.value import ContentItemId, LikeTargetType, StatsTimeRange, UserId

from .base import Service

TOP_COMMENTERS_LIMIT = 5

_WINDOWS = {
    StatsTimeRange.LAST_DAY: timedelta(hours=24),
    StatsTimeRange.LAST_WEEK: timedelta(days=7),
    StatsTimeRange.LAST_MONTH: timedelta(days=30),
}


@dataclass(frozen=True)
class DailyCommentCount:
    """Comments created on one calendar day."""

    date: str  # YYYY-MM-DD
    count: int


@dataclass(frozen=True)
class CommenterStats:
    """Activity of one author within the window."""

    author_id: UserId
    comment_count: int
    total_likes: int


@dataclass(frozen=True)
class CommentStats:
    """Comment activity summary for a content item."""

    total_comments: int
    total_replies: int
    total_likes: int
    average_replies_per_comment: float
    most_liked: Optional[Comment]
    most_replied: Optional[Comment]
    comments_by_date: list[DailyCommentCount]
    top_commenters: list[CommenterStats]


class CommentStatsService(Service):
    """Summarizes comment activity on a content item."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        content_item_repository: ContentItemRepository,
        like_repository: LikeRepository,
    ) -> None:
        """Initialize comment stats service.

        Args:
            comment_repository: Comment repository
            content_item_repository: Content item repository
            like_repository: Like ledger repository
        """
        self.comment_repository = comment_repository
        self.content_item_repository = content_item_repository
        self.like_repository = like_repository

    async def get_stats(
        self,
        content_item_id: ContentItemId,
        time_range: StatsTimeRange = StatsTimeRange.ALL,
        now: Optional[datetime] = None,
    ) -> CommentStats:
        """Summarize the comments created within a time range.

        Only comments created at or after ``now - range`` count. Likes are
        counted from the ledger; per-author like totals use the stored
        counters. Most-liked and most-replied are None when nothing in the
        window has a like or reply; ties go to the oldest comment.

        Args:
            content_item_id: Content item ID
            time_range: Window to summarize
            now: End of the window (defaults to the current time)

        Returns:
            Comment statistics for the window

        Raises:
            NotFoundError: If the content item doesn't exist
        """
        with logfire.span(
            "comment_stats_service.get_stats",
            content_item_id=str(content_item_id),
            time_range=time_range.value,
        ):
            content_item = await self.content_item_repository.find_by_id(
                content_item_id
            )
            if not content_item:
                raise NotFoundError("Content item", str(content_item_id))

            comments = await self.comment_repository.find_by_content_item(
                content_item_id
            )
            window = _WINDOWS.get(time_range)
            if window is not None:
                since = (now or datetime.now()) - window
                comments = [c for c in comments if c.created_at >= since]
            comments.sort(key=lambda c: (c.created_at, c.id))

            replies = sum(1 for c in comments if c.parent_id is not None)
            top_level = len(comments) - replies

            like_counts = await self.like_repository.count_by_targets(
                LikeTargetType.COMMENT, [c.id for c in comments]
            )

            stats = CommentStats(
                total_comments=len(comments),
                total_replies=replies,
                total_likes=sum(like_counts.values()),
                average_replies_per_comment=(
                    round(replies / top_level, 2) if top_level else 0.0
                ),
                most_liked=_leader(comments, lambda c: c.like_count),
                most_replied=_leader(comments, lambda c: c.replies_count),
                comments_by_date=_by_date(comments),
                top_commenters=_top_commenters(comments),
            )

            logfire.info(
                "Comment stats computed",
                content_item_id=str(content_item_id),
                time_range=time_range.value,
                total_comments=stats.total_comments,
            )
            return stats


def _leader(comments: list[Comment], metric) -> Optional[Comment]:
    # comments are oldest first, and max() keeps the first maximum
    leader = max(comments, key=metric, default=None)
    if leader is None or metric(leader) == 0:
        return None
    return leader


def _by_date(comments: list[Comment]) -> list[DailyCommentCount]:
    per_day = Counter(c.created_at.date().isoformat() for c in comments)
    return [DailyCommentCount(date=day, count=per_day[day]) for day in sorted(per_day)]


def _top_commenters(comments: list[Comment]) -> list[CommenterStats]:
    counts: dict[UserId, int] = defaultdict(int)
    likes: dict[UserId, int] = defaultdict(int)
    for comment in comments:
        counts[comment.author_id] += 1
        likes[comment.author_id] += comment.like_count

    ranked = sorted(
        counts,
        key=lambda author: (-counts[author], -likes[author], str(author)),
    )
    return [
        CommenterStats(
            author_id=author,
            comment_count=counts[author],
            total_likes=likes[author],
        )
        for author in ranked[:TOP_COMMENTERS_LIMIT]
    ]
