"""Platform API endpoints."""

import logging
from typing import Annotated, List
from uuid import UUID

from fastapi import APIRouter, Depends

from ..auth.dependencies import CurrentUserId
from ..config import get_settings
from ..db.platforms import disconnect_platform, list_platform_statuses
from ..errors.problem_details import NotFoundError
from ..listings import get_platform_registry
from ..models.platforms import DisconnectResponse, PlatformStatus
from ..platforms import PlatformRegistry


logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/platforms",
    tags=["Platforms"],
    responses={
        401: {"description": "Unauthorized"},
        503: {"description": "Storage temporarily unavailable"}
    }
)


@router.get(
    "",
    response_model=List[PlatformStatus],
    summary="List platforms",
    description="List enabled platforms and whether the caller has connected each one."
)
async def list_platforms(
    current_user_id: CurrentUserId,
    registry: Annotated[PlatformRegistry, Depends(get_platform_registry)]
) -> List[PlatformStatus]:
    logger.info(f"Listing platforms for user {current_user_id}")
    return await list_platform_statuses(
        current_user_id, registry, get_settings().db_command_timeout
    )


@router.delete(
    "/{connection_id}",
    response_model=DisconnectResponse,
    summary="Disconnect a platform",
    description="Deactivate one of the caller's platform connections.",
    responses={404: {"description": "No such connection for the caller"}}
)
async def disconnect(connection_id: UUID, current_user_id: CurrentUserId) -> DisconnectResponse:
    disconnected = await disconnect_platform(
        current_user_id, connection_id, get_settings().db_command_timeout
    )
    if not disconnected:
        raise NotFoundError(f"Platform connection {connection_id} not found")

    return DisconnectResponse(id=connection_id, disconnected=True)
