"""In-memory note store for demos and tests."""

import asyncio
from collections.abc import Iterable

from ..logging import get_logger
from .base import NOTE_ID_PREFIX, Note, NoteStore, NotFoundError, User, generate_identifier

logger = get_logger(__name__)


class InMemoryNoteStore(NoteStore):
    """Store that keeps users and their notes in process memory.

    Lookups are linear scans. Writes go through ``_write_lock``; readers copy
    the collections they return so a concurrent ``create_note`` never changes
    a list a caller is iterating.
    """

    def __init__(self, users: Iterable[User] = (), notes: Iterable[Note] = ()):
        self._users: list[User] = []
        self._notes: dict[str, list[Note]] = {}
        self._write_lock = asyncio.Lock()

        for user in users:
            self._add_user(user)
        for note in notes:
            self._add_note(note)

    def _add_user(self, user: User) -> None:
        if any(u.user_id == user.user_id for u in self._users):
            raise ValueError(f"Duplicate user id: {user.user_id}")
        if any(u.username == user.username for u in self._users):
            raise ValueError(f"Duplicate username: {user.username}")
        self._users.append(user)
        self._notes[user.user_id] = []

    def _add_note(self, note: Note) -> None:
        if note.user_id not in self._notes:
            raise ValueError(f"Note {note.note_id} references unknown user {note.user_id}")
        if self._find_note(note.note_id) is not None:
            raise ValueError(f"Duplicate note id: {note.note_id}")
        self._notes[note.user_id].append(note)

    def _find_user(self, user_id: str) -> User | None:
        for user in self._users:
            if user.user_id == user_id:
                return user
        return None

    def _find_note(self, note_id: str) -> Note | None:
        for notes in self._notes.values():
            for note in notes:
                if note.note_id == note_id:
                    return note
        return None

    async def list_users(self) -> list[User]:
        return list(self._users)

    async def get_user(self, user_id: str) -> User:
        user = self._find_user(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    async def list_notes(self, user_id: str) -> list[Note]:
        notes = self._notes.get(user_id)
        if notes is None:
            raise NotFoundError("User", user_id)
        return list(notes)

    async def get_note(self, note_id: str) -> Note:
        note = self._find_note(note_id)
        if note is None:
            raise NotFoundError("Note", note_id)
        return note

    async def create_note(self, user_id: str, data: str) -> Note:
        async with self._write_lock:
            if user_id not in self._notes:
                raise NotFoundError("User", user_id)

            note_id = generate_identifier(NOTE_ID_PREFIX)
            while self._find_note(note_id) is not None:
                note_id = generate_identifier(NOTE_ID_PREFIX)

            note = Note(note_id=note_id, user_id=user_id, data=data)
            self._notes[user_id].append(note)

        logger.info("Note created", note_id=note_id, user_id=user_id)
        return note
