"""Shared in-memory store for testing."""

from dataclasses import dataclass, field

from engage.domain.model import Comment, ContentItem, Like
from engage.domain.value import CommentId, ContentItemId


@dataclass
class StoreSnapshot:
    """Copy of the store's tables at one point in time."""

    content_items: dict[ContentItemId, ContentItem]
    comments: dict[CommentId, Comment]
    likes: list[Like]


@dataclass
class InMemoryStore:
    """Tables shared by the in-memory repositories of one request.

    Models are immutable, so a shallow copy of each table is enough to
    restore it after a rollback.
    """

    content_items: dict[ContentItemId, ContentItem] = field(default_factory=dict)
    comments: dict[CommentId, Comment] = field(default_factory=dict)
    likes: list[Like] = field(default_factory=list)

    def snapshot(self) -> StoreSnapshot:
        return StoreSnapshot(
            content_items=dict(self.content_items),
            comments=dict(self.comments),
            likes=list(self.likes),
        )

    def restore(self, snapshot: StoreSnapshot) -> None:
        self.content_items = dict(snapshot.content_items)
        self.comments = dict(snapshot.comments)
        self.likes = list(snapshot.likes)
