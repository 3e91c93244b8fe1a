"""Core note store interfaces and shared domain records."""

import secrets
from abc import ABC, abstractmethod
from dataclasses import dataclass

from ..logging import get_logger

logger = get_logger(__name__)

USER_ID_PREFIX = "u-"
NOTE_ID_PREFIX = "n-"


@dataclass(frozen=True)
class User:
    """A user record as held by a store."""

    user_id: str
    username: str
    emoji: str | None = None


@dataclass(frozen=True)
class Note:
    """A note record; ``user_id`` points back at the owning user."""

    note_id: str
    user_id: str
    data: str


class StoreException(Exception):
    """Base exception for store operations."""

    pass


class NotFoundError(StoreException):
    """Lookup did not match any entity."""

    def __init__(self, entity: str, key: str):
        self.entity = entity
        self.key = key
        super().__init__(f"{entity} not found: {key}")


class StoreError(StoreException):
    """Backend failure (connectivity, constraint violation, ...)."""

    pass


def generate_identifier(prefix: str) -> str:
    """Return a short random token such as ``n-1f9a3c``."""
    return prefix + secrets.token_hex(3)


class NoteStore(ABC):
    """Abstract base class for user/note stores.

    Lookups raise :class:`NotFoundError` on a miss; callers decide whether a
    miss is an empty result or an error.
    """

    @abstractmethod
    async def list_users(self) -> list[User]:
        """Return every user in creation order."""
        pass

    @abstractmethod
    async def get_user(self, user_id: str) -> User:
        """Return the user with ``user_id``."""
        pass

    @abstractmethod
    async def list_notes(self, user_id: str) -> list[Note]:
        """Return the user's notes in insertion order.

        Raises:
            NotFoundError: If the user does not exist
        """
        pass

    @abstractmethod
    async def get_note(self, note_id: str) -> Note:
        """Return the note with ``note_id`` regardless of owner."""
        pass

    @abstractmethod
    async def create_note(self, user_id: str, data: str) -> Note:
        """Create a note for ``user_id`` and return it.

        Raises:
            NotFoundError: If the user does not exist; nothing is written
            StoreError: On backend failure; nothing is written
        """
        pass

    async def close(self) -> None:
        """Release backend resources."""
        pass

    async def __aenter__(self) -> "NoteStore":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()
