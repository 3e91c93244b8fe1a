"""Tests for the SQL note store, run against SQLite."""

from unittest.mock import patch

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from notegraph.database.connection import check_database_connection
from notegraph.database.seed_data import seed_mock_data
from notegraph.dbmodels import Notes
from notegraph.store.base import NotFoundError, StoreError
from notegraph.store.sql import SqlNoteStore


async def seed(store: SqlNoteStore) -> dict[str, str]:
    async with store.session() as db:
        return await seed_mock_data(db)


async def count_notes(store: SqlNoteStore) -> int:
    async with store.session() as db:
        return await db.scalar(select(func.count()).select_from(Notes))


class TestSqlNoteStore:
    """Test the SQL store contract."""

    @pytest.mark.asyncio
    async def test_list_users_in_creation_order(self, sql_store: SqlNoteStore) -> None:
        user_ids = await seed(sql_store)

        users = await sql_store.list_users()

        assert [u.username for u in users] == ["nyxerys", "rdnkta", "zaydek"]
        assert [u.user_id for u in users] == list(user_ids.values())
        assert all(u.user_id.startswith("u-") and len(u.user_id) == 8 for u in users)
        assert users[0].emoji == "🇵🇹"

    @pytest.mark.asyncio
    async def test_get_user(self, sql_store: SqlNoteStore) -> None:
        user_ids = await seed(sql_store)

        user = await sql_store.get_user(user_ids["rdnkta"])

        assert user.user_id == user_ids["rdnkta"]
        assert user.username == "rdnkta"

    @pytest.mark.asyncio
    async def test_get_user_missing(self, sql_store: SqlNoteStore) -> None:
        with pytest.raises(NotFoundError):
            await sql_store.get_user("u-000000")

    @pytest.mark.asyncio
    async def test_list_notes_in_insertion_order(self, sql_store: SqlNoteStore) -> None:
        user_ids = await seed(sql_store)

        notes = await sql_store.list_notes(user_ids["nyxerys"])

        assert [n.data for n in notes] == ["Olá Mundo!", "Olá novamente, mundo!", "Olá, escuridão!"]
        assert all(n.user_id == user_ids["nyxerys"] for n in notes)

    @pytest.mark.asyncio
    async def test_list_notes_unknown_user(self, sql_store: SqlNoteStore) -> None:
        await seed(sql_store)

        with pytest.raises(NotFoundError):
            await sql_store.list_notes("u-000000")

    @pytest.mark.asyncio
    async def test_get_note(self, sql_store: SqlNoteStore) -> None:
        user_ids = await seed(sql_store)
        first = (await sql_store.list_notes(user_ids["zaydek"]))[0]

        note = await sql_store.get_note(first.note_id)

        assert note == first
        assert note.data == "Hello, world!"

    @pytest.mark.asyncio
    async def test_get_note_missing(self, sql_store: SqlNoteStore) -> None:
        with pytest.raises(NotFoundError):
            await sql_store.get_note("n-000000")

    @pytest.mark.asyncio
    async def test_create_note(self, sql_store: SqlNoteStore) -> None:
        user_ids = await seed(sql_store)
        user_id = user_ids["nyxerys"]
        existing_ids = {n.note_id for n in await sql_store.list_notes(user_id)}

        note = await sql_store.create_note(user_id, "hi")

        assert note.data == "hi"
        assert note.user_id == user_id
        assert note.note_id.startswith("n-")
        assert note.note_id not in existing_ids

        notes = await sql_store.list_notes(user_id)
        assert notes[-1] == note

    @pytest.mark.asyncio
    async def test_create_note_unknown_user_writes_nothing(self, sql_store: SqlNoteStore) -> None:
        await seed(sql_store)
        before = await count_notes(sql_store)

        with pytest.raises(NotFoundError):
            await sql_store.create_note("u-000000", "orphan")

        assert await count_notes(sql_store) == before

    @pytest.mark.asyncio
    async def test_database_errors_become_store_errors(self, sql_store: SqlNoteStore) -> None:
        with patch(
            "sqlalchemy.ext.asyncio.AsyncSession.execute",
            side_effect=OperationalError("SELECT 1", {}, Exception("connection lost")),
        ):
            with pytest.raises(StoreError, match="connection lost"):
                await sql_store.list_users()

    @pytest.mark.asyncio
    async def test_seed_is_idempotent(self, sql_store: SqlNoteStore) -> None:
        first = await seed(sql_store)
        second = await seed(sql_store)

        assert first == second
        assert await count_notes(sql_store) == 9

    @pytest.mark.asyncio
    async def test_check_database_connection(self, sql_store: SqlNoteStore) -> None:
        assert await check_database_connection(sql_store.engine) == (True, None)

    @pytest.mark.asyncio
    async def test_create_note_skips_taken_ids(self, sql_store: SqlNoteStore) -> None:
        user_ids = await seed(sql_store)
        taken = (await sql_store.list_notes(user_ids["rdnkta"]))[0].note_id

        with patch(
            "notegraph.store.sql.generate_identifier", side_effect=[taken, taken, "n-abc123"]
        ):
            note = await sql_store.create_note(user_ids["rdnkta"], "fresh")

        assert note.note_id == "n-abc123"
        assert (await sql_store.list_notes(user_ids["rdnkta"]))[-1] == note

    @pytest.mark.asyncio
    async def test_create_note_gives_up_when_ids_keep_colliding(
        self, sql_store: SqlNoteStore
    ) -> None:
        user_ids = await seed(sql_store)
        taken = (await sql_store.list_notes(user_ids["rdnkta"]))[0].note_id
        before = await count_notes(sql_store)

        with patch("notegraph.store.sql.generate_identifier", return_value=taken):
            with pytest.raises(StoreError, match="No unused note id"):
                await sql_store.create_note(user_ids["rdnkta"], "never")

        assert await count_notes(sql_store) == before
