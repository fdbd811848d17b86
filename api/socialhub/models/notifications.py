"""Pydantic models for notifications."""

from datetime import datetime
from enum import Enum
from typing import List
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..pagination import Page
from ..platforms import Platform


class NotificationType(str, Enum):
    """Kinds of notification a platform can deliver."""

    MENTION = "mention"
    LIKE = "like"
    COMMENT = "comment"
    FOLLOW = "follow"
    REPOST = "repost"
    DM = "dm"


class Notification(BaseModel):
    """A notification received on one of the user's platforms."""

    id: UUID
    user_id: UUID
    platform: Platform
    type: NotificationType
    title: str
    body: str
    is_read: bool = False
    platform_notification_id: str
    created_at: datetime

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True
    )


NotificationPage = Page[Notification]


class MarkReadRequest(BaseModel):
    """Ids of notifications to mark as read."""

    ids: List[UUID] = Field(max_length=500, description="Notification ids")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"ids": ["550e8400-e29b-41d4-a716-446655440000"]}
        }
    )


class MarkReadResponse(BaseModel):
    """Number of notifications whose read state changed."""

    updated: int = Field(ge=0)
