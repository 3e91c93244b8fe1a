"""Mock users and notes shared by the in-memory store and the seeders."""

from .base import Note, User

MOCK_USERS: list[User] = [
    User(user_id="u-001", username="nyxerys", emoji="🇵🇹"),
    User(user_id="u-002", username="rdnkta", emoji="🇺🇦"),
    User(user_id="u-003", username="zaydek", emoji="🇺🇸"),
]

MOCK_NOTES: list[Note] = [
    Note(note_id="n-001", user_id="u-001", data="Olá Mundo!"),
    Note(note_id="n-002", user_id="u-001", data="Olá novamente, mundo!"),
    Note(note_id="n-003", user_id="u-001", data="Olá, escuridão!"),
    Note(note_id="n-004", user_id="u-002", data="Привіт Світ!"),
    Note(note_id="n-005", user_id="u-002", data="Привіт ще раз, світ!"),
    Note(note_id="n-006", user_id="u-002", data="Привіт, темрява!"),
    Note(note_id="n-007", user_id="u-003", data="Hello, world!"),
    Note(note_id="n-008", user_id="u-003", data="Hello again, world!"),
    Note(note_id="n-009", user_id="u-003", data="Hello, darkness!"),
]
