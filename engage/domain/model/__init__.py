"""Domain model entities for the engagement core."""

from engage.domain.model.comment import Comment
from engage.domain.model.content_item import ContentItem
from engage.domain.model.like import Like

__all__ = [
    "ContentItem",
    "Comment",
    "Like",
]
