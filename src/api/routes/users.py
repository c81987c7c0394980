"""
User administration endpoints
=============================

GET    /api/v1/users          -- admin: every user, optional ?role=
DELETE /api/v1/users/{id}     -- admin: remove a user with their vehicles and bookings
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.dependencies import get_db
from src.api.middleware import limiter
from src.api.schemas import ErrorResponse, MessageResponse, UserResponse
from src.api.security import require_roles
from src.config import settings
from src.domain.entities import Actor
from src.domain.enums import UserRole
from src.domain.exceptions import NotFound
from src.infrastructure.repositories import UserRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])

admin = require_roles(UserRole.ADMIN)


@router.get("", response_model=list[UserResponse], summary="List users")
@limiter.limit(settings.rate_limit)
async def list_users(
    request: Request,
    role: Optional[UserRole] = None,
    actor: Actor = Depends(admin),
    db: AsyncSession = Depends(get_db),
):
    return await UserRepository(db).list(role)


@router.delete(
    "/{user_id}",
    response_model=MessageResponse,
    summary="Delete a user",
    responses={404: {"model": ErrorResponse}},
)
@limiter.limit(settings.rate_limit)
async def delete_user(
    request: Request,
    user_id: int,
    actor: Actor = Depends(admin),
    db: AsyncSession = Depends(get_db),
):
    repo = UserRepository(db)
    user = await repo.get_by_id(user_id)
    if not user:
        raise NotFound("User not found")
    await repo.delete(user)
    logger.info("User %d deleted by admin %d", user_id, actor.id)
    return MessageResponse(message="User deleted")
