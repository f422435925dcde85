"""Comment entity.

Comments form a forest rooted at a content item. Each row points at its
parent through parent_id; the tree itself is assembled on read by
CommentTreeService.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from engage.domain.model.common import DomainModel
from engage.domain.value import CommentId, ContentItemId, UserId


class Comment(DomainModel):
    """Comment entity.

    Represents a top-level comment on a content item or a reply to another
    comment.

    Threading is managed through:
    - parent_id: Direct parent comment (None for top-level)
    - depth: Nesting level (0 for top-level, parent depth + 1 for replies)

    Derived counters:
    - like_count: number of likes in the ledger for this comment
    - replies_count: number of comments whose parent_id is this comment
    """

    id: CommentId
    content_item_id: ContentItemId
    author_id: UserId
    content: str = Field(min_length=1)  # Length bound lives in CommentSettings
    parent_id: Optional[CommentId] = None
    depth: int = Field(default=0, ge=0)
    like_count: int = Field(default=0, ge=0)
    replies_count: int = Field(default=0, ge=0)
    is_best_answer: bool = False
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def is_top_level(self) -> bool:
        """Whether this comment has no parent."""
        return self.parent_id is None
