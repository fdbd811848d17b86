"""Keyset page fetching shared by every listing."""

import logging
from datetime import datetime
from typing import Any, Dict, List, NamedTuple, Optional, Protocol, Sequence, Tuple
from uuid import UUID

from ..errors.problem_details import InvalidArgumentError, InvalidCursorError
from .cursor import decode_cursor, encode_cursor


logger = logging.getLogger(__name__)

MIN_PAGE_SIZE = 1
MAX_PAGE_SIZE = 100
DEFAULT_PAGE_SIZE = 20


class SortPosition(NamedTuple):
    """Decoded ``(order key, id)`` position a page resumes after."""

    sort_key: datetime
    id: UUID


class Condition(NamedTuple):
    """One filter predicate.

    ``template`` is an SQL fragment with a single ``{}`` placeholder for the
    bound parameter, e.g. ``"user_id = {}"``.
    """

    template: str
    value: Any


class PageSource(Protocol):
    """Ordered, filterable collection a page can be read from.

    Implementations return at most ``limit`` rows matching every condition,
    strictly after ``after`` when given, ordered by order key descending then
    id ascending. Failures to read raise ``StorageUnavailableError``.
    """

    async def fetch_rows(
        self,
        conditions: Sequence[Condition],
        after: Optional[SortPosition],
        limit: int
    ) -> List[Dict[str, Any]]:
        ...


def validate_limit(limit: Any) -> int:
    """Check a requested page size.

    Raises:
        InvalidArgumentError: If limit is not an integer in [1, 100]
    """
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise InvalidArgumentError("Limit must be an integer")
    if limit < MIN_PAGE_SIZE or limit > MAX_PAGE_SIZE:
        raise InvalidArgumentError(
            f"Limit must be between {MIN_PAGE_SIZE} and {MAX_PAGE_SIZE}, got {limit}"
        )
    return limit


def build_seek_clause(
    order_key: str,
    after: SortPosition,
    first_param: int
) -> Tuple[str, List[Any]]:
    """Build the predicate selecting rows strictly after a position.

    Rows are ordered ``order_key DESC, id ASC``, so "after" means an older
    order key, or the same order key with a greater id.

    Args:
        order_key: Column holding the order key
        after: Position of the last row already returned
        first_param: Index of the first positional parameter to use

    Returns:
        Tuple of (clause, parameters)
    """
    key_param = f"${first_param}"
    id_param = f"${first_param + 1}"
    clause = (
        f"({order_key} < {key_param}::timestamptz "
        f"OR ({order_key} = {key_param}::timestamptz AND id > {id_param}::uuid))"
    )
    return clause, [after.sort_key, after.id]


def build_order_clause(order_key: str) -> str:
    """Build ORDER BY clause for pagination."""
    return f"ORDER BY {order_key} DESC, id ASC"


def paginate_rows(
    rows: List[Dict[str, Any]],
    limit: int,
    order_key: str,
    scope: str
) -> Tuple[List[Dict[str, Any]], Optional[str]]:
    """Split an over-fetched result into a page and its next cursor.

    Args:
        rows: Up to ``limit + 1`` rows from the source
        limit: Requested page size
        order_key: Row key holding the order key
        scope: Fingerprint embedded in the next cursor

    Returns:
        Tuple of (page_rows, next_cursor)
    """
    if len(rows) <= limit:
        return rows, None

    page_rows = rows[:limit]
    last_row = page_rows[-1]
    next_cursor = encode_cursor(last_row[order_key], last_row["id"], scope)
    return page_rows, next_cursor


class PageFetcher:
    """Reads one bounded page from a source and derives the next cursor."""

    def __init__(self, source: PageSource, order_key: str):
        self.source = source
        self.order_key = order_key

    async def fetch(
        self,
        conditions: Sequence[Condition],
        cursor: Optional[str],
        limit: int,
        scope: str
    ) -> Tuple[List[Dict[str, Any]], Optional[str]]:
        """Fetch a page of rows.

        Args:
            conditions: Filter predicates for the listing
            cursor: Cursor from a previous page, or None for the first page
            limit: Page size, 1-100
            scope: Fingerprint of the listing and filter

        Returns:
            Tuple of (rows, next_cursor)

        Raises:
            InvalidArgumentError: If limit is out of range
            InvalidCursorError: If cursor is malformed or from another scope
            StorageUnavailableError: If the source cannot be read
        """
        limit = validate_limit(limit)

        after = None
        if cursor is not None:
            cursor_data = decode_cursor(cursor)
            if cursor_data.scope != scope:
                raise InvalidCursorError(
                    "Cursor was issued for a different listing or filter"
                )
            after = SortPosition(cursor_data.sort_key, cursor_data.id)

        rows = await self.source.fetch_rows(conditions, after, limit + 1)
        page_rows, next_cursor = paginate_rows(rows, limit, self.order_key, scope)

        logger.debug(
            f"Fetched {len(page_rows)} rows ordered by {self.order_key}, "
            f"has_more={next_cursor is not None}"
        )
        return page_rows, next_cursor
