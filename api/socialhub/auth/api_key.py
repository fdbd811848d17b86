"""API key management with secure hashing and validation."""

import logging
import secrets
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from passlib.context import CryptContext

from ..config import get_settings
from ..db.connection import get_db_pool
from ..db.sources import STORAGE_ERRORS
from ..errors.problem_details import StorageUnavailableError


logger = logging.getLogger(__name__)

# Use bcrypt for secure key hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Leading characters stored in clear to narrow the hash comparisons per lookup
KEY_PREFIX_LENGTH = 8


def generate_api_key() -> str:
    """Generate a new API key.

    Returns:
        A cryptographically secure random API key string.
    """
    return secrets.token_urlsafe(32)


def key_prefix(api_key: str) -> str:
    return api_key[:KEY_PREFIX_LENGTH]


def hash_api_key(api_key: str) -> str:
    """Hash an API key for secure storage."""
    return pwd_context.hash(api_key)


def verify_api_key(api_key: str, hashed: str) -> bool:
    """Verify an API key against its hash.

    Returns:
        True if the API key is valid, False otherwise (including malformed hashes)
    """
    try:
        return pwd_context.verify(api_key, hashed)
    except (ValueError, TypeError):
        return False


async def create_api_key(user_id: UUID, api_key: Optional[str] = None) -> str:
    """Create a new API key for a user.

    Args:
        user_id: The user to associate with the API key
        api_key: Optional specific API key to use (if None, generates new one)

    Returns:
        The plain text API key (only returned here, not stored)

    Raises:
        asyncpg.ForeignKeyViolationError: If user_id doesn't exist
    """
    if api_key is None:
        api_key = generate_api_key()

    pool = await get_db_pool()
    async with pool.acquire() as conn:
        await conn.execute(
            "INSERT INTO api_keys (user_id, key_prefix, token_hash) VALUES ($1, $2, $3)",
            user_id, key_prefix(api_key), hash_api_key(api_key)
        )

    logger.info(f"Created API key {key_prefix(api_key)}... for user {user_id}")
    return api_key


async def validate_api_key(api_key: str) -> Optional[UUID]:
    """Validate an API key and return the associated user id.

    Returns:
        The user id if the API key is valid, None otherwise

    Raises:
        StorageUnavailableError: If the key table cannot be read
    """
    if len(api_key) < KEY_PREFIX_LENGTH:
        return None

    timeout = get_settings().db_command_timeout
    try:
        pool = await get_db_pool()
        async with pool.acquire(timeout=timeout) as conn:
            rows = await conn.fetch(
                "SELECT id, token_hash, user_id FROM api_keys WHERE key_prefix = $1",
                key_prefix(api_key),
                timeout=timeout
            )

            for row in rows:
                if verify_api_key(api_key, row["token_hash"]):
                    await conn.execute(
                        "UPDATE api_keys SET last_used = $1 WHERE id = $2",
                        datetime.now(timezone.utc), row["id"],
                        timeout=timeout
                    )
                    return row["user_id"]
    except STORAGE_ERRORS as e:
        logger.error(f"Storage error validating API key: {type(e).__name__}")
        raise StorageUnavailableError()

    return None
