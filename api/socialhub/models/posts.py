"""Pydantic models for aggregated posts."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..pagination import Page
from ..platforms import Platform


class Post(BaseModel):
    """A post pulled from one of the user's connected platforms."""

    id: UUID = Field(description="Post UUID")
    user_id: UUID = Field(description="Owner of the aggregated feed")
    platform: Platform = Field(description="Platform the post came from")
    platform_post_id: str = Field(description="Post id on the source platform")
    content: str = Field(description="Post text")
    media_urls: List[str] = Field(default_factory=list, description="Attached media")
    author_name: str
    author_handle: str
    author_avatar: Optional[str] = None
    likes: int = Field(default=0, ge=0)
    reposts: int = Field(default=0, ge=0)
    replies: int = Field(default=0, ge=0)
    published_at: datetime = Field(description="Publication time on the source platform")
    created_at: datetime = Field(description="Time the post was aggregated")

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440000",
                "userId": "9b2d3c4e-1f0a-4c1b-9d55-6a2f0f3e8a11",
                "platform": "bluesky",
                "platformPostId": "at://did:plc:abc/app.bsky.feed.post/3k",
                "content": "Shipping the new feed today",
                "mediaUrls": [],
                "authorName": "Ada",
                "authorHandle": "@ada.bsky.social",
                "authorAvatar": None,
                "likes": 12,
                "reposts": 3,
                "replies": 1,
                "publishedAt": "2024-01-01T12:00:00Z",
                "createdAt": "2024-01-01T12:00:05Z"
            }
        }
    )


PostPage = Page[Post]
