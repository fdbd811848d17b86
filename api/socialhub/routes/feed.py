"""Feed API endpoints."""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, Request, Response

from ..auth.dependencies import CurrentUserId
from ..listings import Listings, get_listings
from ..models.posts import PostPage
from ..pagination import DEFAULT_PAGE_SIZE, ListQuery
from .common import LIST_RESPONSES, set_next_link


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/feed", tags=["Feed"], responses=LIST_RESPONSES)


@router.get(
    "",
    response_model=PostPage,
    summary="List feed",
    description="List the caller's aggregated posts, newest first, with cursor pagination."
)
async def list_feed(
    request: Request,
    response: Response,
    current_user_id: CurrentUserId,
    listings: Annotated[Listings, Depends(get_listings)],
    cursor: Annotated[Optional[str], Query(description="Cursor from a previous page")] = None,
    limit: Annotated[int, Query(description="Number of posts per page (1-100)")] = DEFAULT_PAGE_SIZE,
    platform: Annotated[Optional[str], Query(description="Only posts from this platform")] = None
) -> PostPage:
    """List the caller's feed.

    Posts are ordered by publication time, newest first, with the post id
    as tie-breaker. Pass ``nextCursor`` back as ``cursor`` to continue; a
    cursor is only valid with the same ``platform`` filter.
    """
    logger.info(f"Listing feed for user {current_user_id} (platform={platform}, limit={limit})")

    page = await listings.feed.list(
        ListQuery(cursor=cursor, limit=limit),
        current_user_id,
        platform=platform
    )

    set_next_link(request, response, {"limit": limit, "platform": platform}, page.next_cursor)
    return page
