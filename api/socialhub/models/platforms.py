"""Pydantic models for platform connections."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ..platforms import Platform


class PlatformStatus(BaseModel):
    """An enabled platform and whether the caller has connected it."""

    platform: Platform
    display_name: str
    connected: bool
    connection_id: Optional[UUID] = None
    platform_username: Optional[str] = None
    connected_at: Optional[datetime] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DisconnectResponse(BaseModel):
    """Result of disconnecting a platform connection."""

    id: UUID
    disconnected: bool
