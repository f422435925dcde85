"""Like entity.

Likes are the ledger behind every denormalized like counter.
Each user can like a given target at most once.
"""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from engage.domain.model.common import DomainModel
from engage.domain.value import LikeId, LikeTargetType, UserId


class Like(DomainModel):
    """Like entity.

    Business rules:
    - One like per user per target (enforced by database unique constraint)
    - Polymorphic reference to the target (content item or comment)
    """

    id: LikeId
    user_id: UserId
    target_type: LikeTargetType
    target_id: UUID  # ContentItemId or CommentId (both are UUIDs)
    created_at: datetime = Field(default_factory=datetime.now)
