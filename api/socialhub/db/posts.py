"""Feed and search listings over aggregated posts."""

import logging
from typing import Optional
from uuid import UUID

from ..errors.problem_details import InvalidArgumentError
from ..models.posts import Post
from ..pagination import Condition, ListEndpoint, ListingFilter, PageFetcher
from ..platforms import Platform, PlatformRegistry
from .models import POST_SEARCH_DOCUMENT
from .sources import PostgresPageSource


logger = logging.getLogger(__name__)

POST_COLUMNS = (
    "id", "user_id", "platform", "platform_post_id", "content", "media_urls",
    "author_name", "author_handle", "author_avatar", "likes", "reposts",
    "replies", "published_at", "created_at"
)
POST_ORDER_KEY = "published_at"
MAX_SEARCH_LENGTH = 256


def create_post_source(timeout: float) -> PostgresPageSource:
    """Page source over the posts table ordered by publication time."""
    return PostgresPageSource(
        table="posts",
        columns=POST_COLUMNS,
        order_key=POST_ORDER_KEY,
        timeout=timeout,
        json_columns=("media_urls",)
    )


class FeedFilter(ListingFilter):
    owner_id: UUID
    platform: Optional[Platform] = None

    def conditions(self):
        conditions = [Condition("user_id = {}", self.owner_id)]
        if self.platform is not None:
            conditions.append(Condition("platform = {}", self.platform.value))
        return conditions


class SearchFilter(ListingFilter):
    owner_id: UUID
    text: str

    def conditions(self):
        return [
            Condition("user_id = {}", self.owner_id),
            Condition(f"{POST_SEARCH_DOCUMENT} @@ plainto_tsquery('simple', {{}})", self.text),
        ]


class FeedListing(ListEndpoint[Post]):
    """The caller's aggregated feed, newest post first."""

    name = "feed"
    item_model = Post

    def __init__(self, fetcher: PageFetcher, registry: PlatformRegistry):
        super().__init__(fetcher)
        self.registry = registry

    def build_filter(self, owner_id: UUID, platform: Optional[str] = None) -> FeedFilter:
        resolved = self.registry.resolve(platform) if platform is not None else None
        return FeedFilter(owner_id=owner_id, platform=resolved)


class SearchListing(ListEndpoint[Post]):
    """Full-text search over the caller's posts.

    Results are ordered by publication time rather than relevance so they
    page with the same cursor contract as the feed.
    """

    name = "search"
    item_model = Post

    def build_filter(self, owner_id: UUID, text: Optional[str] = None) -> SearchFilter:
        text = (text or "").strip()
        if not text:
            raise InvalidArgumentError("Search query must not be empty")
        if len(text) > MAX_SEARCH_LENGTH:
            raise InvalidArgumentError(
                f"Search query must be at most {MAX_SEARCH_LENGTH} characters"
            )
        if "\x00" in text:
            raise InvalidArgumentError("Search query must not contain NUL characters")
        return SearchFilter(owner_id=owner_id, text=text)
