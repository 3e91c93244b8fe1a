"""
Tests for executing documents against the strawberry schema
"""

from unittest.mock import patch

import pytest

from notegraph.graphql.schema import (
    execute,
    get_operation_type,
    print_schema,
    result_envelope,
    validate_schema,
)
from notegraph.store.base import User
from notegraph.store.memory import InMemoryNoteStore

USERS_QUERY = "{ users { userID username } }"

CREATE_NOTE_MUTATION = """
mutation CreateNote($userID: ID!, $note: NoteInput!) {
    createNote(userID: $userID, note: $note) {
        noteID
        data
    }
}
"""


class TestSchema:
    def test_validate_schema(self):
        validate_schema()

    def test_sdl_field_names(self):
        sdl = print_schema()

        assert "userID: ID!" in sdl
        assert "noteID: ID!" in sdl
        assert "user(userID: ID!): User\n" in sdl
        assert "note(noteID: ID!): Note\n" in sdl
        assert "notes(userID: ID!): [Note!]!" in sdl
        assert "createNote(userID: ID!, note: NoteInput!): Note!" in sdl

    def test_get_operation_type(self):
        assert get_operation_type(USERS_QUERY).value == "query"
        assert get_operation_type(CREATE_NOTE_MUTATION).value == "mutation"
        assert get_operation_type("{ users") is None


class TestQueries:
    @pytest.mark.asyncio
    async def test_users_in_insertion_order(self):
        store = InMemoryNoteStore(
            [
                User(user_id="u-001", username="nyxerys"),
                User(user_id="u-002", username="rdnkta"),
            ]
        )

        result = await execute(store, USERS_QUERY)

        assert result.errors is None
        assert result_envelope(result) == {
            "data": {
                "users": [
                    {"userID": "u-001", "username": "nyxerys"},
                    {"userID": "u-002", "username": "rdnkta"},
                ]
            }
        }

    @pytest.mark.asyncio
    async def test_user_returns_requested_id(self, memory_store):
        for user_id in ("u-001", "u-002", "u-003"):
            result = await execute(
                memory_store,
                "query User($userID: ID!) { user(userID: $userID) { userID } }",
                variables={"userID": user_id},
                operation_name="User",
            )

            assert result.errors is None
            assert result.data == {"user": {"userID": user_id}}

    @pytest.mark.asyncio
    async def test_missing_user_is_null_not_error(self, memory_store):
        result = await execute(memory_store, '{ user(userID: "u-999") { userID username } }')

        assert result.errors is None
        assert result.data == {"user": None}

    @pytest.mark.asyncio
    async def test_missing_note_is_null_not_error(self, memory_store):
        result = await execute(memory_store, '{ note(noteID: "n-999") { noteID } }')

        assert result.errors is None
        assert result.data == {"note": None}

    @pytest.mark.asyncio
    async def test_notes_for_unknown_user_is_error(self, memory_store):
        result = await execute(memory_store, '{ notes(userID: "u-999") { noteID } }')

        assert result.data is None
        assert len(result.errors) == 1
        assert result.errors[0].message == "User not found: u-999"
        assert result.errors[0].path == ["notes"]

    @pytest.mark.asyncio
    async def test_nested_notes(self, memory_store):
        result = await execute(
            memory_store, '{ user(userID: "u-002") { username emoji notes { noteID data } } }'
        )

        assert result.errors is None
        assert result.data == {
            "user": {
                "username": "rdnkta",
                "emoji": "🇺🇦",
                "notes": [
                    {"noteID": "n-004", "data": "Привіт Світ!"},
                    {"noteID": "n-005", "data": "Привіт ще раз, світ!"},
                    {"noteID": "n-006", "data": "Привіт, темрява!"},
                ],
            }
        }

    @pytest.mark.asyncio
    async def test_envelope_matches_selection_set(self, memory_store):
        result = await execute(memory_store, '{ note(noteID: "n-001") { data } }')

        assert result_envelope(result) == {"data": {"note": {"data": "Olá Mundo!"}}}

    @pytest.mark.asyncio
    async def test_username_only_does_not_load_notes(self, memory_store):
        with patch.object(memory_store, "list_notes", wraps=memory_store.list_notes) as spy:
            result = await execute(memory_store, "{ users { username } }")
            assert result.errors is None
            spy.assert_not_called()

            result = await execute(memory_store, "{ users { username notes { noteID } } }")
            assert result.errors is None
            assert spy.await_count == 3

    @pytest.mark.asyncio
    async def test_validation_failure_calls_no_resolver(self, memory_store):
        with patch.object(memory_store, "list_users", wraps=memory_store.list_users) as spy:
            result = await execute(memory_store, "{ users { userID bogus } }")

        assert result.data is None
        assert result.errors
        spy.assert_not_called()

    @pytest.mark.asyncio
    async def test_empty_document_is_error(self, memory_store):
        result = await execute(memory_store, "")

        assert result.data is None
        assert result.errors[0].message == "Must provide an operation"


class TestMutations:
    @pytest.mark.asyncio
    async def test_create_note_then_list(self, memory_store):
        before = {n.note_id for n in await memory_store.list_notes("u-001")}

        created = await execute(
            memory_store,
            CREATE_NOTE_MUTATION,
            variables={"userID": "u-001", "note": {"data": "hi"}},
        )

        assert created.errors is None
        new_note = created.data["createNote"]
        assert new_note["data"] == "hi"
        assert new_note["noteID"] not in before

        listed = await execute(memory_store, '{ notes(userID: "u-001") { noteID data } }')

        assert listed.data["notes"][-1] == new_note

    @pytest.mark.asyncio
    async def test_create_note_unknown_user(self, memory_store):
        result = await execute(
            memory_store,
            CREATE_NOTE_MUTATION,
            variables={"userID": "u-999", "note": {"data": "orphan"}},
        )

        assert result.data is None
        assert result.errors[0].message == "User not found: u-999"

        for user in await memory_store.list_users():
            notes = await memory_store.list_notes(user.user_id)
            assert "orphan" not in [n.data for n in notes]

    @pytest.mark.asyncio
    async def test_mutations_can_be_refused(self, memory_store):
        with patch.object(memory_store, "create_note", wraps=memory_store.create_note) as spy:
            result = await execute(
                memory_store,
                CREATE_NOTE_MUTATION,
                variables={"userID": "u-001", "note": {"data": "hi"}},
                allow_mutations=False,
            )

        assert result.data is None
        assert result.errors[0].message == "mutation operations are not allowed"
        spy.assert_not_called()
