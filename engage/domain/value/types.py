"""Domain enumerations for the engagement core."""

from enum import Enum


class ContentItemKind(str, Enum):
    """Kind of content item that comments and likes attach to.

    Each kind carries its own reply depth limit (see CommentSettings).
    """

    PROJECT = "project"
    POST = "post"


class LikeTargetType(str, Enum):
    """Type of entity that can be liked."""

    CONTENT_ITEM = "content_item"
    COMMENT = "comment"


class CommentSortPolicy(str, Enum):
    """Ordering applied to top-level comments.

    Replies are always ordered oldest first regardless of this policy.
    """

    LATEST = "latest"
    OLDEST = "oldest"
    MOST_LIKED = "mostLiked"


class StatsTimeRange(str, Enum):
    """Window of comment creation times covered by comment statistics."""

    LAST_DAY = "24h"
    LAST_WEEK = "7d"
    LAST_MONTH = "30d"
    ALL = "all"
