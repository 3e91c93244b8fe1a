"""Note stores: the contract plus in-memory and SQL backends."""

from .base import (
    Note,
    NoteStore,
    NotFoundError,
    StoreError,
    StoreException,
    User,
    generate_identifier,
)
from .factory import create_memory_store, create_note_store
from .memory import InMemoryNoteStore

__all__ = [
    "InMemoryNoteStore",
    "Note",
    "NoteStore",
    "NotFoundError",
    "StoreError",
    "StoreException",
    "User",
    "create_memory_store",
    "create_note_store",
    "generate_identifier",
]
