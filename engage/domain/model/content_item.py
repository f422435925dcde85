"""Content item entity.

Content items (projects and community posts) are owned by the surrounding
application. This core only reads their author and maintains their
denormalized like counter.
"""

from datetime import datetime

from pydantic import Field

from engage.domain.model.common import DomainModel
from engage.domain.value import ContentItemId, ContentItemKind, UserId


class ContentItem(DomainModel):
    """Content item that comments and likes attach to."""

    id: ContentItemId
    kind: ContentItemKind
    author_id: UserId
    like_count: int = Field(default=0, ge=0)  # Denormalized from likes
    created_at: datetime = Field(default_factory=datetime.now)
