"""initial_schema

Create the engagement schema:
- Content items (projects and community posts, with a denormalized like count)
- Comments (threaded by parent_id, with like and reply counters)
- Likes (ledger, one row per user and target)

Revision ID: 3f2c9a1d7b40
Revises:
Create Date: 2026-10-19 10:12:44.318204

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3f2c9a1d7b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # Create ENUM types (idempotent)
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE content_item_kind AS ENUM ('project', 'post');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    op.execute("""
        DO $$ BEGIN
            CREATE TYPE like_target_type AS ENUM ('content_item', 'comment');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    # ========================================================================
    # CONTENT_ITEMS table
    # ========================================================================
    op.create_table(
        "content_items",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column(
            "kind",
            postgresql.ENUM(
                "project", "post", name="content_item_kind", create_type=False
            ),
            nullable=False,
        ),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("like_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "like_count >= 0", name="content_item_like_count_non_negative"
        ),
    )
    op.create_index("idx_content_items_author_id", "content_items", ["author_id"])

    # ========================================================================
    # COMMENTS table
    # ========================================================================
    op.create_table(
        "comments",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("content_item_id", sa.UUID(), nullable=False),
        sa.Column("parent_id", sa.UUID(), nullable=True),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("depth", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("like_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("replies_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "is_best_answer", sa.Boolean(), nullable=False, server_default="false"
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(
            ["content_item_id"], ["content_items.id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(["parent_id"], ["comments.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("depth >= 0", name="comment_depth_non_negative"),
        sa.CheckConstraint("like_count >= 0", name="comment_like_count_non_negative"),
        sa.CheckConstraint(
            "replies_count >= 0", name="comment_replies_count_non_negative"
        ),
    )
    op.create_index(
        "idx_comments_content_item_created_at",
        "comments",
        ["content_item_id", "created_at"],
    )
    op.create_index("idx_comments_parent_id", "comments", ["parent_id"])

    # At most one best answer per content item
    op.create_index(
        "idx_comments_unique_best_answer",
        "comments",
        ["content_item_id"],
        unique=True,
        postgresql_where=sa.text("is_best_answer"),
    )

    # ========================================================================
    # LIKES table (ledger)
    # ========================================================================
    op.create_table(
        "likes",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column(
            "target_type",
            postgresql.ENUM(
                "content_item", "comment", name="like_target_type", create_type=False
            ),
            nullable=False,
        ),
        sa.Column("target_id", sa.UUID(), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "user_id", "target_type", "target_id", name="unique_like"
        ),
    )
    op.create_index("idx_likes_target", "likes", ["target_type", "target_id"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("likes")
    op.drop_table("comments")
    op.drop_table("content_items")
    op.execute("DROP TYPE IF EXISTS like_target_type")
    op.execute("DROP TYPE IF EXISTS content_item_kind")
