"""comment_tables

Create the comment moderation schema:
- Comments (threaded, with visibility status and flag count)
- Comment flags (one per user per comment)

Revision ID: 9f4e2a61c5b8
Revises: 3c1f0b9d2e7a
Create Date: 2026-10-12 09:31:47.502196

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "9f4e2a61c5b8"
down_revision: Union[str, Sequence[str], None] = "3c1f0b9d2e7a"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE comment_status AS ENUM ('VISIBLE', 'HIDDEN', 'DELETED');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

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
        sa.Column("exercise_id", sa.UUID(), nullable=False),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("parent_id", sa.UUID(), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("depth", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("session_id", sa.String(255), nullable=True),
        sa.Column(
            "status",
            postgresql.ENUM(
                "VISIBLE", "HIDDEN", "DELETED", name="comment_status", create_type=False
            ),
            nullable=False,
            server_default="VISIBLE",
        ),
        sa.Column("flags_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column("edited_at", sa.TIMESTAMP(), nullable=True),
        sa.Column("deleted_at", sa.TIMESTAMP(), nullable=True),
        sa.Column("deleted_by", sa.UUID(), nullable=True),
        sa.ForeignKeyConstraint(["exercise_id"], ["exercises.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["parent_id"], ["comments.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["deleted_by"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("depth >= 0", name="depth_non_negative"),
        sa.CheckConstraint("flags_count >= 0", name="flags_count_non_negative"),
        sa.CheckConstraint("length(trim(content)) > 0", name="content_not_blank"),
    )

    op.create_index(
        "idx_comments_exercise_parent_created",
        "comments",
        ["exercise_id", "parent_id", "created_at"],
    )
    op.create_index("idx_comments_parent_id", "comments", ["parent_id"])
    op.create_index(
        "idx_comments_author_created", "comments", ["author_id", "created_at"]
    )
    op.create_index("idx_comments_session_id", "comments", ["session_id"])
    op.create_index("idx_comments_status", "comments", ["status"])
    op.create_index("idx_comments_flags_count", "comments", ["flags_count"])

    # ========================================================================
    # COMMENT_FLAGS table
    # ========================================================================
    op.create_table(
        "comment_flags",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("comment_id", sa.UUID(), nullable=False),
        sa.Column("flagger_id", sa.UUID(), nullable=False),
        sa.Column("reason", sa.String(500), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["comment_id"], ["comments.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["flagger_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("comment_id", "flagger_id", name="uq_comment_flag"),
    )
    op.create_index(
        "idx_comment_flags_comment_id", "comment_flags", ["comment_id"]
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("comment_flags")
    op.drop_table("comments")
    op.execute("DROP TYPE IF EXISTS comment_status")
