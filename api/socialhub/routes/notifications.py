"""Notifications API endpoints."""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, Request, Response

from ..auth.dependencies import CurrentUserId
from ..config import get_settings
from ..db.notifications import mark_all_notifications_read, mark_notifications_read
from ..listings import Listings, get_listings
from ..models.notifications import MarkReadRequest, MarkReadResponse, NotificationPage
from ..pagination import DEFAULT_PAGE_SIZE, ListQuery
from .common import LIST_RESPONSES, set_next_link


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notifications", tags=["Notifications"], responses=LIST_RESPONSES)


@router.get(
    "",
    response_model=NotificationPage,
    summary="List notifications",
    description="List the caller's notifications, newest first, with cursor pagination."
)
async def list_notifications(
    request: Request,
    response: Response,
    current_user_id: CurrentUserId,
    listings: Annotated[Listings, Depends(get_listings)],
    cursor: Annotated[Optional[str], Query(description="Cursor from a previous page")] = None,
    limit: Annotated[int, Query(description="Number of notifications per page (1-100)")] = DEFAULT_PAGE_SIZE,
    platform: Annotated[Optional[str], Query(description="Only notifications from this platform")] = None,
    notification_type: Annotated[Optional[str], Query(alias="type", description="Only this notification type")] = None,
    unread_only: Annotated[bool, Query(alias="unreadOnly", description="Only unread notifications")] = False
) -> NotificationPage:
    """List the caller's notification inbox.

    A cursor is only valid with the same ``platform``, ``type`` and
    ``unreadOnly`` values it was issued for.
    """
    logger.info(
        f"Listing notifications for user {current_user_id} "
        f"(platform={platform}, type={notification_type}, unreadOnly={unread_only}, limit={limit})"
    )

    page = await listings.notifications.list(
        ListQuery(cursor=cursor, limit=limit),
        current_user_id,
        platform=platform,
        type=notification_type,
        unread_only=unread_only
    )

    set_next_link(
        request,
        response,
        {
            "limit": limit,
            "platform": platform,
            "type": notification_type,
            "unreadOnly": "true" if unread_only else None
        },
        page.next_cursor
    )
    return page


@router.post(
    "/read",
    response_model=MarkReadResponse,
    summary="Mark notifications read",
    description="Mark the given notifications as read. Ids not owned by the caller are ignored."
)
async def mark_read(
    body: MarkReadRequest,
    current_user_id: CurrentUserId
) -> MarkReadResponse:
    updated = await mark_notifications_read(
        current_user_id, body.ids, get_settings().db_command_timeout
    )
    return MarkReadResponse(updated=updated)


@router.post(
    "/read-all",
    response_model=MarkReadResponse,
    summary="Mark all notifications read"
)
async def mark_all_read(current_user_id: CurrentUserId) -> MarkReadResponse:
    updated = await mark_all_notifications_read(
        current_user_id, get_settings().db_command_timeout
    )
    return MarkReadResponse(updated=updated)
