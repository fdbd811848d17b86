"""PostgreSQL-backed page source."""

import asyncio
import json
import logging
from typing import Any, Dict, List, Optional, Sequence

import asyncpg

from ..errors.problem_details import InvalidArgumentError, StorageUnavailableError
from ..pagination import Condition, SortPosition, build_order_clause, build_seek_clause
from .connection import get_db_pool


logger = logging.getLogger(__name__)

# Failures that mean the store could not answer, as opposed to a bug in the query
STORAGE_ERRORS = (
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    asyncio.TimeoutError,
    OSError,
)


def build_select_query(
    table: str,
    columns: Sequence[str],
    order_key: str,
    conditions: Sequence[Condition],
    after: Optional[SortPosition]
) -> tuple[str, List[Any]]:
    """Build the keyset SELECT for one page.

    The LIMIT parameter is the last placeholder and is not included in the
    returned parameters.

    Returns:
        Tuple of (query, parameters)
    """
    clauses = []
    params: List[Any] = []

    for condition in conditions:
        params.append(condition.value)
        clauses.append(condition.template.format(f"${len(params)}"))

    if after is not None:
        seek_clause, seek_params = build_seek_clause(order_key, after, len(params) + 1)
        clauses.append(seek_clause)
        params.extend(seek_params)

    where_clause = f"WHERE {' AND '.join(clauses)}" if clauses else ""
    query = (
        f"SELECT {', '.join(columns)} FROM {table} "
        f"{where_clause} "
        f"{build_order_clause(order_key)} "
        f"LIMIT ${len(params) + 1}"
    )
    return query, params


def updated_count(status: str) -> int:
    """Parse the row count out of an asyncpg command status like ``UPDATE 3``."""
    try:
        return int(status.split()[-1])
    except (AttributeError, IndexError, ValueError):
        return 0

class PostgresPageSource:
    """Reads ordered, filtered rows of one table through the asyncpg pool."""

    def __init__(
        self,
        table: str,
        columns: Sequence[str],
        order_key: str,
        timeout: float,
        json_columns: Sequence[str] = ()
    ):
        self.table = table
        self.columns = tuple(columns)
        self.order_key = order_key
        self.timeout = timeout
        self.json_columns = tuple(json_columns)

    async def fetch_rows(
        self,
        conditions: Sequence[Condition],
        after: Optional[SortPosition],
        limit: int
    ) -> List[Dict[str, Any]]:
        """Fetch up to ``limit`` rows after ``after``.

        Raises:
            InvalidArgumentError: If the store rejects a filter value
            StorageUnavailableError: If the pool cannot be reached, the query
                fails or the timeout expires
        """
        query, params = build_select_query(
            self.table, self.columns, self.order_key, conditions, after
        )

        try:
            pool = await get_db_pool()
            async with pool.acquire(timeout=self.timeout) as conn:
                rows = await conn.fetch(query, *params, limit, timeout=self.timeout)
        except asyncpg.DataError as e:
            # A filter value the column type cannot hold, e.g. a NUL byte in text
            logger.warning(f"Value rejected reading {self.table}: {type(e).__name__}")
            raise InvalidArgumentError("Filter value is not valid for this listing")
        except STORAGE_ERRORS as e:
            logger.error(
                f"Storage error reading {self.table}: {type(e).__name__}",
                extra={"table": self.table, "error": str(e)}
            )
            raise StorageUnavailableError()

        items = [dict(row) for row in rows]
        for item in items:
            # JSONB arrives as text unless a codec is registered on the pool
            for column in self.json_columns:
                if isinstance(item.get(column), str):
                    item[column] = json.loads(item[column])

        logger.debug(f"Fetched {len(items)} rows from {self.table}")
        return items
