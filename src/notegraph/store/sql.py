"""SQL-backed note store (Postgres in production, SQLite in tests)."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy import insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from ..database.connection import (
    create_engine_from_settings,
    create_session_factory,
    session_scope,
)
from ..dbmodels import Notes, Users
from ..logging import get_logger
from .base import (
    NOTE_ID_PREFIX,
    Note,
    NoteStore,
    NotFoundError,
    StoreError,
    User,
    generate_identifier,
)

logger = get_logger(__name__)

# Draws of a fresh note id before create_note gives up
MAX_ID_ATTEMPTS = 5


def _to_user(row: Users) -> User:
    return User(user_id=row.user_id, username=row.username, emoji=row.emoji)


def _to_note(row: Notes) -> Note:
    return Note(note_id=row.note_id, user_id=row.user_id, data=row.data)


class SqlNoteStore(NoteStore):
    """Store backed by the ``users`` and ``notes`` tables.

    Every operation runs in its own session; ``create_note`` inserts and
    reads the new row back inside one transaction, so a caller never sees a
    note that was not committed.
    """

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self._session_factory = create_session_factory(engine)

    @classmethod
    def from_url(cls, database_url: str | None = None, settings=None) -> "SqlNoteStore":
        return cls(create_engine_from_settings(database_url, settings))

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Transactional session; backend errors surface as :class:`StoreError`."""
        try:
            async with session_scope(self._session_factory) as session:
                yield session
        except SQLAlchemyError as e:
            logger.error("Database operation failed", error=str(e))
            raise StoreError(str(e)) from e

    async def _require_user(self, session: AsyncSession, user_id: str) -> Users:
        result = await session.execute(select(Users).where(Users.user_id == user_id))
        user = result.scalar_one_or_none()
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    async def _unused_note_id(self, session: AsyncSession) -> str:
        for _ in range(MAX_ID_ATTEMPTS):
            note_id = generate_identifier(NOTE_ID_PREFIX)
            taken = await session.scalar(select(Notes.id).where(Notes.note_id == note_id))
            if taken is None:
                return note_id
            logger.debug("Note id already taken", note_id=note_id)
        raise StoreError(f"No unused note id after {MAX_ID_ATTEMPTS} attempts")

    async def list_users(self) -> list[User]:
        async with self.session() as session:
            result = await session.execute(select(Users).order_by(Users.id))
            return [_to_user(row) for row in result.scalars().all()]

    async def get_user(self, user_id: str) -> User:
        async with self.session() as session:
            return _to_user(await self._require_user(session, user_id))

    async def list_notes(self, user_id: str) -> list[Note]:
        async with self.session() as session:
            await self._require_user(session, user_id)
            result = await session.execute(
                select(Notes).where(Notes.user_id == user_id).order_by(Notes.id)
            )
            return [_to_note(row) for row in result.scalars().all()]

    async def get_note(self, note_id: str) -> Note:
        async with self.session() as session:
            result = await session.execute(select(Notes).where(Notes.note_id == note_id))
            note = result.scalar_one_or_none()
            if note is None:
                raise NotFoundError("Note", note_id)
            return _to_note(note)

    async def create_note(self, user_id: str, data: str) -> Note:
        async with self.session() as session:
            await self._require_user(session, user_id)

            new_id = await self._unused_note_id(session)
            note_id = await session.scalar(
                insert(Notes).values(note_id=new_id, user_id=user_id, data=data).returning(Notes.note_id)
            )
            if note_id is None:
                raise StoreError(f"Insert for user {user_id} returned no note id")

            result = await session.execute(select(Notes).where(Notes.note_id == note_id))
            note = _to_note(result.scalar_one())

        logger.info("Note created", note_id=note.note_id, user_id=user_id)
        return note

    async def close(self) -> None:
        await self.engine.dispose()
