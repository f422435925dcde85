"""Test configuration and fixtures."""

from datetime import datetime, timedelta
from uuid import uuid4

from engage.domain.model import Comment, ContentItem
from engage.domain.value import CommentId, ContentItemId, ContentItemKind, UserId

BASE_TIME = datetime(2024, 1, 1, 12, 0, 0)


def at(minutes: int) -> datetime:
    """Timestamp a fixed number of minutes after BASE_TIME."""
    return BASE_TIME + timedelta(minutes=minutes)


def make_content_item(
    kind: ContentItemKind = ContentItemKind.PROJECT,
    author_id: UserId | None = None,
    like_count: int = 0,
) -> ContentItem:
    """Helper to build a content item owned by a random (or given) author."""
    return ContentItem(
        id=ContentItemId(uuid4()),
        kind=kind,
        author_id=author_id or UserId(uuid4()),
        like_count=like_count,
        created_at=BASE_TIME,
    )


def make_comment(
    content_item_id: ContentItemId,
    parent: Comment | None = None,
    created_at: datetime = BASE_TIME,
    author_id: UserId | None = None,
    content: str = "Test comment",
    **overrides,
) -> Comment:
    """Helper to build a comment, deriving depth and parent_id from parent."""
    fields = dict(
        id=CommentId(uuid4()),
        content_item_id=content_item_id,
        author_id=author_id or UserId(uuid4()),
        content=content,
        parent_id=parent.id if parent else None,
        depth=parent.depth + 1 if parent else 0,
        created_at=created_at,
        updated_at=created_at,
    )
    fields.update(overrides)
    return Comment(**fields)
