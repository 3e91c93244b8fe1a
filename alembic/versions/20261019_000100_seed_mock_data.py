"""Seed mock users and notes

Inserts the three demo users and their notes. Users that already exist are
left alone, so the migration can be run against a partially seeded
database.

Revision ID: 20261019_000100_seed_mock_data
Revises: 20261019_000000_initial_schema
Create Date: 2026-10-19 00:01:00

"""
from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20261019_000100_seed_mock_data"
down_revision: str | Sequence[str] | None = "20261019_000000_initial_schema"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

MOCK_USERS = [
    ("nyxerys", "🇵🇹", ["Olá Mundo!", "Olá novamente, mundo!", "Olá, escuridão!"]),
    ("rdnkta", "🇺🇦", ["Привіт Світ!", "Привіт ще раз, світ!", "Привіт, темрява!"]),
    ("zaydek", "🇺🇸", ["Hello, world!", "Hello again, world!", "Hello, darkness!"]),
]


def upgrade() -> None:
    """Insert the mock users and their notes."""
    connection = op.get_bind()

    for username, emoji, notes in MOCK_USERS:
        existing_user = connection.execute(
            sa.text("SELECT user_id FROM users WHERE username = :username"),
            {"username": username},
        ).fetchone()
        if existing_user:
            print(f"User already exists: {username}")
            continue

        user_id = connection.execute(
            sa.text("INSERT INTO users (username, emoji) VALUES (:username, :emoji) RETURNING user_id"),
            {"username": username, "emoji": emoji},
        ).scalar_one()

        for data in notes:
            connection.execute(
                sa.text("INSERT INTO notes (user_id, data) VALUES (:user_id, :data)"),
                {"user_id": user_id, "data": data},
            )
        print(f"Created user {username} ({user_id}) with {len(notes)} notes")


def downgrade() -> None:
    """Remove the mock users and everything they own."""
    connection = op.get_bind()
    usernames = [username for username, _, _ in MOCK_USERS]

    connection.execute(
        sa.text(
            "DELETE FROM notes WHERE user_id IN "
            "(SELECT user_id FROM users WHERE username = ANY(:usernames))"
        ),
        {"usernames": usernames},
    )
    connection.execute(
        sa.text("DELETE FROM users WHERE username = ANY(:usernames)"),
        {"usernames": usernames},
    )
