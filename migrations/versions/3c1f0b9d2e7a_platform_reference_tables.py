"""platform_reference_tables

Create the platform tables the comment service reads from, for local and
standalone deployments where the wider platform schema is absent:
- User ranks (boolean permission columns)
- Users
- Exercises

On a shared platform database these tables already exist and this
revision is stamped rather than run.

Revision ID: 3c1f0b9d2e7a
Revises:
Create Date: 2026-10-12 09:14:02.118431

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3c1f0b9d2e7a"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

RANK_COLUMNS = (
    "admin_view",
    "exercise_add",
    "exercise_edit",
    "exercise_delete",
    "comment_add",
    "comment_edit",
    "comment_delete",
)


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    op.create_table(
        "user_ranks",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("name", sa.String(100), nullable=False),
        *[
            sa.Column(
                name,
                sa.Boolean(),
                nullable=False,
                server_default="true" if name == "comment_add" else "false",
            )
            for name in RANK_COLUMNS
        ],
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "users",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("username", sa.String(255), nullable=False),
        sa.Column("rank_id", sa.UUID(), nullable=True),
        sa.ForeignKeyConstraint(["rank_id"], ["user_ranks.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username", name="uq_users_username"),
    )

    op.create_table(
        "exercises",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("published", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column(
            "commentable", sa.Boolean(), nullable=False, server_default="false"
        ),
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("exercises")
    op.drop_table("users")
    op.drop_table("user_ranks")
