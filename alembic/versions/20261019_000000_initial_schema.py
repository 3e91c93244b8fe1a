"""
Initial schema: users and notes.

Revision ID: 20261019_000000_initial_schema
Revises:
Create Date: 2026-10-19 00:00:00
"""

import sqlalchemy as sa

from alembic import op  # type: ignore[reportMissingImports]

# revision identifiers, used by Alembic.
revision = "20261019_000000_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # gen_random_uuid() for the short id defaults
    op.execute("CREATE EXTENSION IF NOT EXISTS pgcrypto;")

    # users
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True),
        sa.Column(
            "user_id",
            sa.Text(),
            nullable=False,
            server_default=sa.text("'u-' || substr(gen_random_uuid()::text, 1, 6)"),
        ),
        sa.Column("username", sa.String(length=8), nullable=False),
        sa.Column("emoji", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id", name="users_pkey"),
        sa.UniqueConstraint("user_id", name="users_user_id_key"),
        sa.UniqueConstraint("username", name="users_username_key"),
        # 3-8 word characters
        sa.CheckConstraint("username ~ '^\\w{3,8}$'", name="users_username_check"),
    )

    # notes
    op.create_table(
        "notes",
        sa.Column("id", sa.Integer(), autoincrement=True),
        sa.Column(
            "note_id",
            sa.Text(),
            nullable=False,
            server_default=sa.text("'n-' || substr(gen_random_uuid()::text, 1, 6)"),
        ),
        sa.Column("user_id", sa.Text(), nullable=False),
        sa.Column("data", sa.Text(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.user_id"], name="notes_user_id_fkey"),
        sa.PrimaryKeyConstraint("id", name="notes_pkey"),
        sa.UniqueConstraint("note_id", name="notes_note_id_key"),
    )
    op.create_index("idx_notes_user", "notes", ["user_id"])


def downgrade() -> None:
    op.drop_index("idx_notes_user", table_name="notes")
    op.drop_table("notes")
    op.drop_table("users")
