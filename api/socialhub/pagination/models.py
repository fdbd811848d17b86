"""Request and response models shared by paginated listings."""

from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from .fetcher import DEFAULT_PAGE_SIZE


ItemT = TypeVar("ItemT")


class ListQuery(BaseModel):
    """Cursor and page size of one listing request.

    ``limit`` is deliberately unconstrained here: the page fetcher rejects
    out-of-range values with ``InvalidArgumentError`` before any read.
    """

    cursor: Optional[str] = Field(default=None, description="Cursor from a previous page")
    limit: int = Field(default=DEFAULT_PAGE_SIZE, description="Number of items per page (1-100)")


class Page(BaseModel, Generic[ItemT]):
    """One page of a listing.

    ``nextCursor`` is null only when the end of the listing was reached.
    """

    items: List[ItemT] = Field(description="Items, most recent first")
    next_cursor: Optional[str] = Field(
        default=None,
        alias="nextCursor",
        description="Cursor for the next page, null when there is none"
    )

    model_config = ConfigDict(populate_by_name=True)
