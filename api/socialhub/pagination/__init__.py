"""Pagination module for cursor-based pagination."""

from .cursor import (
    CursorData,
    encode_cursor,
    decode_cursor,
    filter_scope,
    create_link_header
)
from .fetcher import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    MIN_PAGE_SIZE,
    Condition,
    PageFetcher,
    PageSource,
    SortPosition,
    build_order_clause,
    build_seek_clause,
    paginate_rows,
    validate_limit
)
from .listing import ListEndpoint, ListingFilter
from .models import ListQuery, Page

__all__ = [
    "CursorData",
    "encode_cursor",
    "decode_cursor",
    "filter_scope",
    "create_link_header",
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "MIN_PAGE_SIZE",
    "Condition",
    "PageFetcher",
    "PageSource",
    "SortPosition",
    "build_order_clause",
    "build_seek_clause",
    "paginate_rows",
    "validate_limit",
    "ListEndpoint",
    "ListingFilter",
    "ListQuery",
    "Page"
]
