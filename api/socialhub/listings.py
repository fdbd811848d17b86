"""Construction of the listings served by the API."""

from dataclasses import dataclass

from fastapi import Request

from .db.notifications import (
    NOTIFICATION_ORDER_KEY, NotificationListing, create_notification_source
)
from .db.posts import POST_ORDER_KEY, FeedListing, SearchListing, create_post_source
from .pagination import PageFetcher
from .platforms import PlatformRegistry


@dataclass(frozen=True)
class Listings:
    """The listings of one application instance."""

    feed: FeedListing
    notifications: NotificationListing
    search: SearchListing


def build_listings(registry: PlatformRegistry, timeout: float) -> Listings:
    """Wire every listing to its PostgreSQL source."""
    post_source = create_post_source(timeout)
    notification_source = create_notification_source(timeout)

    return Listings(
        feed=FeedListing(PageFetcher(post_source, POST_ORDER_KEY), registry),
        notifications=NotificationListing(
            PageFetcher(notification_source, NOTIFICATION_ORDER_KEY), registry
        ),
        search=SearchListing(PageFetcher(post_source, POST_ORDER_KEY))
    )


def get_listings(request: Request) -> Listings:
    """FastAPI dependency returning the listings built at startup."""
    return request.app.state.listings


def get_platform_registry(request: Request) -> PlatformRegistry:
    """FastAPI dependency returning the platform registry built at startup."""
    return request.app.state.platform_registry
