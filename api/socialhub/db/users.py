"""Database operations for user profiles."""

import logging
from typing import Any, Dict, Optional
from uuid import UUID

import asyncpg

from ..errors.problem_details import InvalidArgumentError, StorageUnavailableError
from ..models.users import User
from .connection import get_db_pool
from .sources import STORAGE_ERRORS


logger = logging.getLogger(__name__)

USER_COLUMNS = ("id", "name", "email", "image", "created_at", "updated_at")
UPDATABLE_COLUMNS = ("name", "image")


async def get_user(user_id: UUID, timeout: float) -> Optional[User]:
    """Fetch a user profile by id.

    Raises:
        StorageUnavailableError: If the users table cannot be read
    """
    try:
        pool = await get_db_pool()
        async with pool.acquire(timeout=timeout) as conn:
            row = await conn.fetchrow(
                f"SELECT {', '.join(USER_COLUMNS)} FROM users WHERE id = $1",
                user_id,
                timeout=timeout
            )
    except STORAGE_ERRORS as e:
        logger.error(f"Storage error reading user: {type(e).__name__}")
        raise StorageUnavailableError()

    return User.model_validate(dict(row)) if row else None


async def update_user(user_id: UUID, changes: Dict[str, Any], timeout: float) -> Optional[User]:
    """Apply ``changes`` to the profile of ``user_id`` and return the result.

    Only ``name`` and ``image`` are written; an update with neither returns
    the stored profile unchanged.

    Raises:
        InvalidArgumentError: If the store rejects a value
        StorageUnavailableError: If the update cannot be executed
    """
    columns = [column for column in UPDATABLE_COLUMNS if column in changes]
    if not columns:
        return await get_user(user_id, timeout)

    params = [user_id] + [changes[column] for column in columns]
    assignments = [f"{column} = ${i}" for i, column in enumerate(columns, start=2)]
    query = (
        f"UPDATE users SET {', '.join(assignments)}, updated_at = now() "
        f"WHERE id = $1 RETURNING {', '.join(USER_COLUMNS)}"
    )

    try:
        pool = await get_db_pool()
        async with pool.acquire(timeout=timeout) as conn:
            row = await conn.fetchrow(query, *params, timeout=timeout)
    except asyncpg.DataError as e:
        logger.warning(f"Value rejected updating user: {type(e).__name__}")
        raise InvalidArgumentError("Profile value is not valid")
    except STORAGE_ERRORS as e:
        logger.error(f"Storage error updating user: {type(e).__name__}")
        raise StorageUnavailableError()

    if row is None:
        return None

    logger.info(f"Updated {', '.join(columns)} for user {user_id}")
    return User.model_validate(dict(row))
