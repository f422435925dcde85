"""PostgreSQL repository implementations."""

from engage.persistence.repository.comment import PostgresCommentRepository
from engage.persistence.repository.content_item import PostgresContentItemRepository
from engage.persistence.repository.like import PostgresLikeRepository

__all__ = [
    "PostgresCommentRepository",
    "PostgresContentItemRepository",
    "PostgresLikeRepository",
]
