"""Binding of the page fetcher to named listings."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Type
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from .cursor import filter_scope
from .fetcher import Condition, PageFetcher
from .models import ItemT, ListQuery, Page


logger = logging.getLogger(__name__)


class ListingFilter(BaseModel):
    """Validated filter of one listing request."""

    model_config = ConfigDict(frozen=True)

    @abstractmethod
    def conditions(self) -> List[Condition]:
        """Predicates selecting the rows this filter admits."""


class ListEndpoint(ABC, Generic[ItemT]):
    """A named listing: fixed order key, caller-specific filter.

    Subclasses set ``name`` and ``item_model`` and implement
    :meth:`build_filter`, which must reject disallowed filter values with
    ``InvalidArgumentError`` before anything is read. Each call to
    :meth:`list` performs exactly one read; there is no caching or retry.
    """

    name: str = ""
    item_model: Type[BaseModel]

    def __init__(self, fetcher: PageFetcher):
        self.fetcher = fetcher

    @abstractmethod
    def build_filter(self, owner_id: UUID, **params: Any) -> ListingFilter:
        """Validate request filter values into this listing's filter."""

    def to_item(self, row: Dict[str, Any]) -> ItemT:
        return self.item_model.model_validate(row)

    async def list(self, query: ListQuery, owner_id: UUID, **params: Any) -> Page[ItemT]:
        """Return one page of this listing for ``owner_id``.

        Raises:
            InvalidArgumentError: If limit or a filter value is not allowed
            InvalidCursorError: If the cursor is malformed or from another filter
            StorageUnavailableError: If the backing store cannot be read
        """
        filters = self.build_filter(owner_id, **params)
        scope = filter_scope(self.name, filters.model_dump(mode="json"))

        rows, next_cursor = await self.fetcher.fetch(
            filters.conditions(), query.cursor, query.limit, scope
        )

        items = [self.to_item(row) for row in rows]
        logger.debug(f"Listing '{self.name}' returned {len(items)} items for user {owner_id}")
        return Page[self.item_model](items=items, next_cursor=next_cursor)
