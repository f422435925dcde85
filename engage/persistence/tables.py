"""SQLAlchemy table definitions for the engagement core.

These table definitions are used with SQLAlchemy Core queries.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Enum,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# CONTENT ITEMS TABLE (projects and community posts)
# ============================================================================
content_items_table = Table(
    "content_items",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "kind",
        Enum("project", "post", name="content_item_kind", create_type=False),
        nullable=False,
    ),
    Column("author_id", UUID, nullable=False),
    Column("like_count", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("like_count >= 0", name="content_item_like_count_non_negative"),
)

Index("idx_content_items_author_id", content_items_table.c.author_id)

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "content_item_id",
        UUID,
        ForeignKey("content_items.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "parent_id", UUID, ForeignKey("comments.id", ondelete="CASCADE"), nullable=True
    ),
    Column("author_id", UUID, nullable=False),
    Column("content", Text, nullable=False),
    Column("depth", Integer, nullable=False, server_default="0"),
    Column("like_count", Integer, nullable=False, server_default="0"),
    Column("replies_count", Integer, nullable=False, server_default="0"),
    Column("is_best_answer", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("depth >= 0", name="comment_depth_non_negative"),
    CheckConstraint("like_count >= 0", name="comment_like_count_non_negative"),
    CheckConstraint("replies_count >= 0", name="comment_replies_count_non_negative"),
)

Index(
    "idx_comments_content_item_created_at",
    comments_table.c.content_item_id,
    comments_table.c.created_at,
)
Index("idx_comments_parent_id", comments_table.c.parent_id)

# At most one best answer per content item
Index(
    "idx_comments_unique_best_answer",
    comments_table.c.content_item_id,
    unique=True,
    postgresql_where=comments_table.c.is_best_answer.is_(True),
)

# ============================================================================
# LIKES TABLE (ledger)
# ============================================================================
likes_table = Table(
    "likes",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("user_id", UUID, nullable=False),
    Column(
        "target_type",
        Enum("content_item", "comment", name="like_target_type", create_type=False),
        nullable=False,
    ),
    Column("target_id", UUID, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("user_id", "target_type", "target_id", name="unique_like"),
)

Index("idx_likes_target", likes_table.c.target_type, likes_table.c.target_id)
