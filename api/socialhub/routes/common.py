"""Helpers shared by the listing endpoints."""

from typing import Any, Dict, Optional

from fastapi import Request, Response

from ..pagination import create_link_header


LIST_RESPONSES = {
    400: {"description": "Bad Request - Invalid limit, filter value or cursor"},
    401: {"description": "Unauthorized"},
    503: {"description": "Storage temporarily unavailable"}
}


def set_next_link(
    request: Request,
    response: Response,
    params: Dict[str, Any],
    next_cursor: Optional[str]
) -> None:
    """Add an RFC 8288 ``Link: rel="next"`` header when another page exists."""
    base_url = str(request.url).split("?")[0]
    link_header = create_link_header(base_url=base_url, params=params, next_cursor=next_cursor)
    if link_header:
        response.headers["Link"] = link_header
