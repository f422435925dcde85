"""Repository interfaces for the engagement domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from engage.domain.repository.comment import CommentRepository
from engage.domain.repository.content_item import ContentItemRepository
from engage.domain.repository.like import LikeRepository
from engage.domain.repository.unit_of_work import AfterCommitCallback, UnitOfWork

__all__ = [
    "AfterCommitCallback",
    "CommentRepository",
    "ContentItemRepository",
    "LikeRepository",
    "UnitOfWork",
]
