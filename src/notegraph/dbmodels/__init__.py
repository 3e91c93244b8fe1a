"""
Database models for notegraph (authoritative ORM definitions).

This module defines the SQLAlchemy Base with a naming convention for stable
Alembic autogenerate diffs, and exposes `target_metadata` for Alembic.
"""

from sqlalchemy import (
    ForeignKeyConstraint,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from ..store.base import NOTE_ID_PREFIX, USER_ID_PREFIX, generate_identifier

# Naming convention for deterministic constraint/index names in Alembic diffs
naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


def _new_user_id() -> str:
    return generate_identifier(USER_ID_PREFIX)


def _new_note_id() -> str:
    return generate_identifier(NOTE_ID_PREFIX)


class Base(DeclarativeBase):
    """Base class for all database models with type checking support."""

    metadata = MetaData(naming_convention=naming_convention)


class Users(Base):
    __tablename__ = "users"
    __table_args__ = (
        PrimaryKeyConstraint("id", name="users_pkey"),
        UniqueConstraint("user_id", name="users_user_id_key"),
        UniqueConstraint("username", name="users_username_key"),
    )

    # Surrogate key; also fixes creation order
    id: Mapped[int] = mapped_column(Integer, autoincrement=True)
    user_id: Mapped[str] = mapped_column(Text, nullable=False, default=_new_user_id)
    username: Mapped[str] = mapped_column(String(8), nullable=False)
    emoji: Mapped[str | None] = mapped_column(Text)


class Notes(Base):
    __tablename__ = "notes"
    __table_args__ = (
        ForeignKeyConstraint(
            ["user_id"],
            ["users.user_id"],
            name="notes_user_id_fkey",
        ),
        PrimaryKeyConstraint("id", name="notes_pkey"),
        UniqueConstraint("note_id", name="notes_note_id_key"),
    )

    id: Mapped[int] = mapped_column(Integer, autoincrement=True)
    note_id: Mapped[str] = mapped_column(Text, nullable=False, default=_new_note_id)
    user_id: Mapped[str] = mapped_column(Text, nullable=False)
    data: Mapped[str] = mapped_column(Text, nullable=False)


target_metadata = Base.metadata

__all__ = ["Base", "Users", "Notes", "target_metadata"]
