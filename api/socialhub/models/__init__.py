"""Data models for SocialHub API."""

from .notifications import (
    MarkReadRequest,
    MarkReadResponse,
    Notification,
    NotificationPage,
    NotificationType
)
from .platforms import DisconnectResponse, PlatformStatus
from .posts import Post, PostPage
from .users import User, UserUpdate

__all__ = [
    "DisconnectResponse",
    "MarkReadRequest",
    "MarkReadResponse",
    "Notification",
    "NotificationPage",
    "NotificationType",
    "PlatformStatus",
    "Post",
    "PostPage",
    "User",
    "UserUpdate"
]
