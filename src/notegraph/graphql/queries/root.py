"""
Root GraphQL query definitions
"""

from typing import Annotated

import strawberry

from ..types.note import Note
from ..types.user import User

UserIDArgument = Annotated[strawberry.ID, strawberry.argument(name="userID")]
NoteIDArgument = Annotated[strawberry.ID, strawberry.argument(name="noteID")]


@strawberry.type
class Query:
    """Root GraphQL query type."""

    @strawberry.field
    async def users(self, info: strawberry.Info) -> list[User]:
        """List users."""
        from ..resolvers.user import resolve_users

        return await resolve_users(info)

    @strawberry.field
    async def user(self, info: strawberry.Info, user_id: UserIDArgument) -> User | None:
        """Get a user by ID."""
        from ..resolvers.user import resolve_user_by_id

        return await resolve_user_by_id(info, str(user_id))

    @strawberry.field
    async def notes(self, info: strawberry.Info, user_id: UserIDArgument) -> list[Note]:
        """List a user's notes."""
        from ..resolvers.note import resolve_notes

        return await resolve_notes(info, str(user_id))

    @strawberry.field
    async def note(self, info: strawberry.Info, note_id: NoteIDArgument) -> Note | None:
        """Get a note by ID."""
        from ..resolvers.note import resolve_note_by_id

        return await resolve_note_by_id(info, str(note_id))
