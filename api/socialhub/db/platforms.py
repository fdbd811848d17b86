"""Database operations for platform connections."""

import logging
from typing import List
from uuid import UUID

from ..errors.problem_details import StorageUnavailableError
from ..models.platforms import PlatformStatus
from ..platforms import Platform, PlatformRegistry
from .connection import get_db_pool
from .sources import STORAGE_ERRORS, updated_count


logger = logging.getLogger(__name__)


async def list_platform_statuses(
    owner_id: UUID,
    registry: PlatformRegistry,
    timeout: float
) -> List[PlatformStatus]:
    """List every enabled platform with the caller's active connection, if any.

    Tokens are never selected.

    Raises:
        StorageUnavailableError: If connections cannot be read
    """
    try:
        pool = await get_db_pool()
        async with pool.acquire(timeout=timeout) as conn:
            rows = await conn.fetch(
                """
                SELECT id, platform, platform_username, connected_at
                FROM platform_connections
                WHERE user_id = $1 AND is_active = true
                """,
                owner_id,
                timeout=timeout
            )
    except STORAGE_ERRORS as e:
        logger.error(f"Storage error listing platform connections: {type(e).__name__}")
        raise StorageUnavailableError()

    connections = {}
    for row in rows:
        try:
            connections[Platform(row["platform"])] = row
        except ValueError:
            logger.warning(f"Ignoring connection to unknown platform '{row['platform']}'")

    statuses = []
    for platform in registry.platforms():
        row = connections.get(platform)
        statuses.append(PlatformStatus(
            platform=platform,
            display_name=registry.display_name(platform),
            connected=row is not None,
            connection_id=row["id"] if row else None,
            platform_username=row["platform_username"] if row else None,
            connected_at=row["connected_at"] if row else None
        ))

    logger.debug(f"Listed {len(statuses)} platforms for user {owner_id}")
    return statuses


async def disconnect_platform(owner_id: UUID, connection_id: UUID, timeout: float) -> bool:
    """Deactivate one of ``owner_id``'s platform connections.

    Disconnecting an already inactive connection succeeds again. A
    connection owned by another user is treated as missing.

    Returns:
        True if the connection belongs to ``owner_id``, False otherwise

    Raises:
        StorageUnavailableError: If the update cannot be executed
    """
    try:
        pool = await get_db_pool()
        async with pool.acquire(timeout=timeout) as conn:
            status = await conn.execute(
                """
                UPDATE platform_connections SET is_active = false
                WHERE id = $1 AND user_id = $2
                """,
                connection_id, owner_id,
                timeout=timeout
            )
    except STORAGE_ERRORS as e:
        logger.error(f"Storage error disconnecting platform: {type(e).__name__}")
        raise StorageUnavailableError()

    disconnected = updated_count(status) > 0
    if disconnected:
        logger.info(f"Disconnected connection {connection_id} for user {owner_id}")
    else:
        logger.debug(f"Connection {connection_id} not found for user {owner_id}")
    return disconnected
