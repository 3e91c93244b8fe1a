from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry

from ...logging import get_logger
from ...store.base import NotFoundError
from ..context import get_store

if TYPE_CHECKING:
    from ..types.note import Note, NoteInput

logger = get_logger(__name__)


# Query resolvers
async def resolve_notes(info: strawberry.Info, user_id: str) -> list[Note]:
    """
    Resolve the notes owned by a user.

    Used by both the root ``notes`` field and ``User.notes``. Unlike the
    single-entity lookups, an unknown user ID raises NotFoundError so the
    executor reports it in ``errors``.
    """
    from ..types.note import Note as NoteType

    store = get_store(info)
    return [NoteType.from_record(note) for note in await store.list_notes(user_id)]


async def resolve_note_by_id(info: strawberry.Info, note_id: str) -> Note | None:
    """Resolve a note by ID; an unknown ID is an empty result."""
    from ..types.note import Note as NoteType

    store = get_store(info)
    try:
        note = await store.get_note(note_id)
    except NotFoundError:
        logger.info("Note not found", note_id=note_id)
        return None

    return NoteType.from_record(note)


# Mutation resolvers
async def create_note(info: strawberry.Info, user_id: str, input: NoteInput) -> Note:
    """Create a note for ``user_id``; raises NotFoundError for an unknown user."""
    from ..types.note import Note as NoteType

    store = get_store(info)
    try:
        note = await store.create_note(user_id, input.data)
    except NotFoundError:
        logger.warning("Cannot create note for unknown user", user_id=user_id)
        raise

    return NoteType.from_record(note)
