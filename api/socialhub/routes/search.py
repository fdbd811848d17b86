"""Search API endpoints."""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, Request, Response

from ..auth.dependencies import CurrentUserId
from ..listings import Listings, get_listings
from ..models.posts import PostPage
from ..pagination import DEFAULT_PAGE_SIZE, ListQuery
from .common import LIST_RESPONSES, set_next_link


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/search", tags=["Search"], responses=LIST_RESPONSES)


@router.get(
    "/posts",
    response_model=PostPage,
    summary="Search posts",
    description="Full-text search over the caller's posts, newest first, with cursor pagination."
)
async def search_posts(
    request: Request,
    response: Response,
    current_user_id: CurrentUserId,
    listings: Annotated[Listings, Depends(get_listings)],
    q: Annotated[Optional[str], Query(description="Search text")] = None,
    cursor: Annotated[Optional[str], Query(description="Cursor from a previous page")] = None,
    limit: Annotated[int, Query(description="Number of posts per page (1-100)")] = DEFAULT_PAGE_SIZE
) -> PostPage:
    """Search the caller's posts.

    Matches are ordered by publication time, not relevance, so results
    page exactly like the feed. A cursor is only valid for the query text
    it was issued for.
    """
    logger.info(f"Searching posts for user {current_user_id} (limit={limit})")

    page = await listings.search.list(
        ListQuery(cursor=cursor, limit=limit),
        current_user_id,
        text=q
    )

    set_next_link(request, response, {"q": q, "limit": limit}, page.next_cursor)
    return page
