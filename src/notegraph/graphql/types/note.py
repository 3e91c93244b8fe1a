"""
Note GraphQL type definitions
"""

import strawberry

from ...store.base import Note as NoteRecord


@strawberry.type
class Note:
    """Note type for GraphQL API."""

    note_id: strawberry.ID = strawberry.field(name="noteID")
    data: str

    @classmethod
    def from_record(cls, note: NoteRecord) -> "Note":
        return cls(note_id=strawberry.ID(note.note_id), data=note.data)


@strawberry.input
class NoteInput:
    """Input for creating a new note."""

    data: str
