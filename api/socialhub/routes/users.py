"""User profile endpoints."""

import logging

from fastapi import APIRouter

from ..auth.dependencies import CurrentUserId
from ..config import get_settings
from ..db.users import get_user, update_user
from ..errors.problem_details import NotFoundError
from ..models.users import User, UserUpdate


logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/users",
    tags=["Users"],
    responses={
        401: {"description": "Unauthorized"},
        404: {"description": "The key's user no longer exists"},
        503: {"description": "Storage temporarily unavailable"}
    }
)


@router.get(
    "/me",
    response_model=User,
    summary="Get own profile"
)
async def get_me(current_user_id: CurrentUserId) -> User:
    user = await get_user(current_user_id, get_settings().db_command_timeout)
    if user is None:
        raise NotFoundError("User not found")
    return user


@router.patch(
    "/me",
    response_model=User,
    summary="Update own profile",
    description="Update the caller's name and image. Omitted fields are left unchanged."
)
async def update_me(body: UserUpdate, current_user_id: CurrentUserId) -> User:
    changes = body.changes()
    logger.info(f"Updating profile fields {sorted(changes)} for user {current_user_id}")

    user = await update_user(current_user_id, changes, get_settings().db_command_timeout)
    if user is None:
        raise NotFoundError("User not found")
    return user
