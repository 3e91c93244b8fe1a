"""
Reusable seed data functions for database initialization.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..dbmodels import Notes, Users
from ..logging import get_logger
from ..store.mock_data import MOCK_NOTES, MOCK_USERS

logger = get_logger(__name__)


async def ensure_user(db: AsyncSession, *, username: str, emoji: str | None = None) -> str:
    """
    Ensure a user with ``username`` exists and return its user_id.

    Existing users are left untouched; new users get a generated id.
    """
    result = await db.execute(select(Users).where(Users.username == username))
    existing_user = result.scalar_one_or_none()

    if existing_user:
        logger.debug("User already exists", user_id=existing_user.user_id, username=username)
        return existing_user.user_id

    new_user = Users(username=username, emoji=emoji)
    db.add(new_user)
    await db.flush()

    logger.info("Created user", user_id=new_user.user_id, username=username)
    return new_user.user_id


async def seed_mock_data(db: AsyncSession) -> dict[str, str]:
    """
    Seed the mock users and their notes.

    Notes are only inserted for users that had none, so running the seeder
    twice does not duplicate anything.

    Returns:
        Mapping of username to the user_id stored in the database
    """
    mock_usernames = {user.user_id: user.username for user in MOCK_USERS}
    user_ids: dict[str, str] = {}

    for user in MOCK_USERS:
        user_ids[user.username] = await ensure_user(db, username=user.username, emoji=user.emoji)

    for username, user_id in user_ids.items():
        result = await db.execute(select(Notes.id).where(Notes.user_id == user_id).limit(1))
        if result.first() is not None:
            continue

        for note in MOCK_NOTES:
            if mock_usernames[note.user_id] == username:
                db.add(Notes(user_id=user_id, data=note.data))
        await db.flush()
        logger.info("Seeded notes", user_id=user_id, username=username)

    return user_ids
