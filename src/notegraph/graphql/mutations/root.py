"""
Root GraphQL mutation definitions
"""

from typing import Annotated

import strawberry

from ..types.note import Note, NoteInput


@strawberry.type
class Mutation:
    """Root GraphQL mutation type."""

    @strawberry.mutation(name="createNote")
    async def create_note(
        self,
        info: strawberry.Info,
        user_id: Annotated[strawberry.ID, strawberry.argument(name="userID")],
        note: NoteInput,
    ) -> Note:
        """Create a note for a user."""
        from ..resolvers.note import create_note

        return await create_note(info, str(user_id), note)
