"""Database operations for notifications."""

import logging
from typing import List, Optional
from uuid import UUID

from ..errors.problem_details import InvalidArgumentError, StorageUnavailableError
from ..models.notifications import Notification, NotificationType
from ..pagination import Condition, ListEndpoint, ListingFilter, PageFetcher
from ..platforms import Platform, PlatformRegistry
from .connection import get_db_pool
from .sources import STORAGE_ERRORS, PostgresPageSource, updated_count


logger = logging.getLogger(__name__)

NOTIFICATION_COLUMNS = (
    "id", "user_id", "platform", "type", "title", "body", "is_read",
    "platform_notification_id", "created_at"
)
NOTIFICATION_ORDER_KEY = "created_at"


def create_notification_source(timeout: float) -> PostgresPageSource:
    """Page source over the notifications table ordered by arrival time."""
    return PostgresPageSource(
        table="notifications",
        columns=NOTIFICATION_COLUMNS,
        order_key=NOTIFICATION_ORDER_KEY,
        timeout=timeout
    )


class NotificationFilter(ListingFilter):
    owner_id: UUID
    platform: Optional[Platform] = None
    type: Optional[NotificationType] = None
    unread_only: bool = False

    def conditions(self):
        conditions = [Condition("user_id = {}", self.owner_id)]
        if self.platform is not None:
            conditions.append(Condition("platform = {}", self.platform.value))
        if self.type is not None:
            conditions.append(Condition("type = {}", self.type.value))
        if self.unread_only:
            conditions.append(Condition("is_read = {}", False))
        return conditions


class NotificationListing(ListEndpoint[Notification]):
    """The caller's notification inbox, newest first.

    Marking notifications read while paging an unread-only listing changes
    the set being paged; later pages reflect the new state.
    """

    name = "notifications"
    item_model = Notification

    def __init__(self, fetcher: PageFetcher, registry: PlatformRegistry):
        super().__init__(fetcher)
        self.registry = registry

    def build_filter(
        self,
        owner_id: UUID,
        platform: Optional[str] = None,
        type: Optional[str] = None,
        unread_only: bool = False
    ) -> NotificationFilter:
        resolved_platform = self.registry.resolve(platform) if platform is not None else None

        resolved_type = None
        if type is not None:
            try:
                resolved_type = NotificationType(type.strip().lower())
            except ValueError:
                raise InvalidArgumentError(
                    f"Unknown notification type '{type}'",
                    allowed=[t.value for t in NotificationType]
                )

        return NotificationFilter(
            owner_id=owner_id,
            platform=resolved_platform,
            type=resolved_type,
            unread_only=bool(unread_only)
        )


async def mark_notifications_read(owner_id: UUID, ids: List[UUID], timeout: float) -> int:
    """Mark the given notifications of ``owner_id`` as read.

    Ids that do not exist, belong to someone else or are already read are
    ignored.

    Returns:
        Number of notifications whose state changed

    Raises:
        StorageUnavailableError: If the update cannot be executed
    """
    if not ids:
        return 0

    try:
        pool = await get_db_pool()
        async with pool.acquire(timeout=timeout) as conn:
            status = await conn.execute(
                """
                UPDATE notifications SET is_read = true
                WHERE user_id = $1 AND id = ANY($2::uuid[]) AND is_read = false
                """,
                owner_id, list(ids),
                timeout=timeout
            )
    except STORAGE_ERRORS as e:
        logger.error(f"Storage error marking notifications read: {type(e).__name__}")
        raise StorageUnavailableError()

    updated = updated_count(status)
    logger.info(f"Marked {updated} of {len(ids)} notifications read for user {owner_id}")
    return updated


async def mark_all_notifications_read(owner_id: UUID, timeout: float) -> int:
    """Mark every unread notification of ``owner_id`` as read.

    Raises:
        StorageUnavailableError: If the update cannot be executed
    """
    try:
        pool = await get_db_pool()
        async with pool.acquire(timeout=timeout) as conn:
            status = await conn.execute(
                "UPDATE notifications SET is_read = true WHERE user_id = $1 AND is_read = false",
                owner_id,
                timeout=timeout
            )
    except STORAGE_ERRORS as e:
        logger.error(f"Storage error marking all notifications read: {type(e).__name__}")
        raise StorageUnavailableError()

    updated = updated_count(status)
    logger.info(f"Marked all {updated} unread notifications read for user {owner_id}")
    return updated
