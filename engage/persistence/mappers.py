"""Mappers for converting between database rows and domain models.

Domain models are immutable pydantic models, so rows are mapped by hand
instead of through SQLAlchemy's ORM.
"""

from typing import Any, Dict
from uuid import UUID

from engage.domain.model import Comment, ContentItem, Like
from engage.domain.value import (
    CommentId,
    ContentItemId,
    ContentItemKind,
    LikeId,
    LikeTargetType,
    UserId,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_content_item(row: Dict[str, Any]) -> ContentItem:
    """Convert database row to ContentItem domain model.

    Args:
        row: Database row as dict

    Returns:
        ContentItem domain model
    """
    return ContentItem(
        id=ContentItemId(_uuid(row["id"])),
        kind=ContentItemKind(row["kind"]),
        author_id=UserId(_uuid(row["author_id"])),
        like_count=row["like_count"],
        created_at=row["created_at"],
    )


def content_item_to_dict(content_item: ContentItem) -> Dict[str, Any]:
    """Convert ContentItem domain model to database dict."""
    data = content_item.model_dump()
    data["kind"] = content_item.kind.value
    return data


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    return Comment(
        id=CommentId(_uuid(row["id"])),
        content_item_id=ContentItemId(_uuid(row["content_item_id"])),
        author_id=UserId(_uuid(row["author_id"])),
        content=row["content"],
        parent_id=CommentId(_uuid(row["parent_id"])) if row.get("parent_id") else None,
        depth=row["depth"],
        like_count=row["like_count"],
        replies_count=row["replies_count"],
        is_best_answer=row["is_best_answer"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict."""
    return comment.model_dump()


def row_to_like(row: Dict[str, Any]) -> Like:
    """Convert database row to Like domain model.

    Args:
        row: Database row as dict

    Returns:
        Like domain model
    """
    return Like(
        id=LikeId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        target_type=LikeTargetType(row["target_type"]),
        target_id=_uuid(row["target_id"]),
        created_at=row["created_at"],
    )


def like_to_dict(like: Like) -> Dict[str, Any]:
    """Convert Like domain model to database dict."""
    data = like.model_dump()
    data["target_type"] = like.target_type.value
    return data
