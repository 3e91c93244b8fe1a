from .note import Note, NoteInput
from .user import User

__all__ = ["Note", "NoteInput", "User"]
