"""SQLAlchemy table definitions for the comment subsystem.

The comment tables are owned here and created by the Alembic migrations.
The exercise, user and rank tables belong to the wider platform and are
only read.
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
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# PLATFORM TABLES (read-only collaborators)
# ============================================================================
user_ranks_table = Table(
    "user_ranks",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("name", String(100), nullable=False),
    Column("admin_view", Boolean, nullable=False, server_default="false"),
    Column("exercise_add", Boolean, nullable=False, server_default="false"),
    Column("exercise_edit", Boolean, nullable=False, server_default="false"),
    Column("exercise_delete", Boolean, nullable=False, server_default="false"),
    Column("comment_add", Boolean, nullable=False, server_default="true"),
    Column("comment_edit", Boolean, nullable=False, server_default="false"),
    Column("comment_delete", Boolean, nullable=False, server_default="false"),
)

users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("username", String(255), nullable=False, unique=True),
    Column("rank_id", UUID, ForeignKey("user_ranks.id"), nullable=True),
)

exercises_table = Table(
    "exercises",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("title", String(255), nullable=False),
    Column("published", Boolean, nullable=False, server_default="false"),
    Column("commentable", Boolean, nullable=False, server_default="false"),
)

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "exercise_id",
        UUID,
        ForeignKey("exercises.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "author_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "parent_id", UUID, ForeignKey("comments.id", ondelete="CASCADE"), nullable=True
    ),
    Column("content", Text, nullable=False),
    Column("depth", Integer, nullable=False, server_default="0"),
    Column("session_id", String(255), nullable=True),  # Tutoring session
    Column(
        "status",
        Enum(
            "VISIBLE", "HIDDEN", "DELETED", name="comment_status", create_type=False
        ),
        nullable=False,
        server_default="VISIBLE",
    ),
    Column("flags_count", Integer, nullable=False, server_default="0"),
    Column("created_at", TIMESTAMP, nullable=False, server_default="NOW()"),
    Column("edited_at", TIMESTAMP, nullable=True),
    Column("deleted_at", TIMESTAMP, nullable=True),
    Column(
        "deleted_by", UUID, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    ),
    CheckConstraint("depth >= 0", name="depth_non_negative"),
    CheckConstraint("flags_count >= 0", name="flags_count_non_negative"),
)

Index(
    "idx_comments_exercise_parent_created",
    comments_table.c.exercise_id,
    comments_table.c.parent_id,
    comments_table.c.created_at,
)
Index("idx_comments_parent_id", comments_table.c.parent_id)
Index(
    "idx_comments_author_created",
    comments_table.c.author_id,
    comments_table.c.created_at,
)
Index("idx_comments_session_id", comments_table.c.session_id)
Index("idx_comments_status", comments_table.c.status)
Index("idx_comments_flags_count", comments_table.c.flags_count)

# ============================================================================
# COMMENT FLAGS TABLE
# ============================================================================
comment_flags_table = Table(
    "comment_flags",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "comment_id",
        UUID,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "flagger_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("reason", String(500), nullable=True),
    Column("created_at", TIMESTAMP, nullable=False, server_default="NOW()"),
    UniqueConstraint("comment_id", "flagger_id", name="uq_comment_flag"),
)

Index("idx_comment_flags_comment_id", comment_flags_table.c.comment_id)
