"""
User GraphQL type definitions
"""

import strawberry

from ...store.base import User as UserRecord
from .note import Note


@strawberry.type
class User:
    """User type for GraphQL API."""

    user_id: strawberry.ID = strawberry.field(name="userID")
    username: str
    emoji: str | None = None

    @strawberry.field
    async def notes(self, info: strawberry.Info) -> list[Note]:
        """Get notes owned by this user, in the order they were written."""
        from ..resolvers.note import resolve_notes

        return await resolve_notes(info, self.user_id)

    @classmethod
    def from_record(cls, user: UserRecord) -> "User":
        return cls(user_id=strawberry.ID(user.user_id), username=user.username, emoji=user.emoji)
