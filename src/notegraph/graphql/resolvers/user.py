from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry

from ...logging import get_logger
from ...store.base import NotFoundError
from ..context import get_store

if TYPE_CHECKING:
    from ..types.user import User

logger = get_logger(__name__)


async def resolve_users(info: strawberry.Info) -> list[User]:
    """Resolve every user in creation order."""
    from ..types.user import User as UserType

    store = get_store(info)
    return [UserType.from_record(user) for user in await store.list_users()]


async def resolve_user_by_id(info: strawberry.Info, user_id: str) -> User | None:
    """
    Resolve a user by ID.

    An unknown ID is an empty result, not an error.
    """
    from ..types.user import User as UserType

    store = get_store(info)
    try:
        user = await store.get_user(user_id)
    except NotFoundError:
        logger.info("User not found", user_id=user_id)
        return None

    return UserType.from_record(user)
