"""API routes for SocialHub."""

from .feed import router as feed_router
from .notifications import router as notifications_router
from .platforms import router as platforms_router
from .search import router as search_router
from .users import router as users_router

__all__ = [
    "feed_router",
    "notifications_router",
    "platforms_router",
    "search_router",
    "users_router"
]
