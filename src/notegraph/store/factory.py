"""Factory for creating note stores from configuration."""

from ..config import Settings, settings as default_settings
from ..logging import get_logger
from .base import NoteStore
from .memory import InMemoryNoteStore
from .mock_data import MOCK_NOTES, MOCK_USERS

logger = get_logger(__name__)


def create_memory_store(seed: bool = True) -> InMemoryNoteStore:
    """Create an in-memory store, optionally pre-filled with the mock users and notes."""
    if seed:
        return InMemoryNoteStore(MOCK_USERS, MOCK_NOTES)
    return InMemoryNoteStore()


def create_note_store(backend: str | None = None, settings: Settings | None = None) -> NoteStore:
    """Create a note store instance from configuration.

    Args:
        backend: Store type ('memory', 'sql'); defaults to settings.store_backend
        settings: Settings to read from; defaults to the global settings

    Returns:
        NoteStore instance

    Raises:
        ValueError: If the backend name is unknown
    """
    settings = settings or default_settings
    backend = (backend or settings.store_backend).lower()

    if backend == "memory":
        store: NoteStore = create_memory_store(seed=settings.seed_mock_data)
    elif backend in ("sql", "postgres"):
        from .sql import SqlNoteStore

        store = SqlNoteStore.from_url(settings.database_url, settings)
    else:
        raise ValueError(f"Unknown store backend: {backend}")

    logger.info("Note store created", backend=backend)
    return store
