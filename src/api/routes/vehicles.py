"""
Vehicle endpoints
=================

POST   /api/v1/vehicles               -- driver registers a vehicle (pending)
GET    /api/v1/vehicles/my            -- driver's own vehicles
GET    /api/v1/vehicles/available     -- approved + available, optional ?type=
GET    /api/v1/vehicles/nearby        -- same listing under the mobile app path
GET    /api/v1/vehicles               -- admin: every vehicle
PUT    /api/v1/vehicles/{id}/approve  -- admin
PUT    /api/v1/vehicles/{id}/reject   -- admin
DELETE /api/v1/vehicles/{id}          -- admin
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.dependencies import get_db
from src.api.middleware import limiter
from src.api.schemas import (
    ErrorResponse,
    MessageResponse,
    VehicleCreateRequest,
    VehicleResponse,
)
from src.api.security import require_roles
from src.config import settings
from src.domain.entities import Actor
from src.domain.enums import UserRole, VehicleApproval, VehicleType
from src.domain.exceptions import NotFound
from src.infrastructure.models import VehicleModel
from src.infrastructure.repositories import UserRepository, VehicleRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/vehicles", tags=["vehicles"])

driver = require_roles(UserRole.DRIVER)
admin = require_roles(UserRole.ADMIN)


@router.post(
    "",
    status_code=201,
    response_model=VehicleResponse,
    summary="Register a vehicle",
    description="New vehicles start as pending until an administrator approves them.",
    responses={409: {"model": ErrorResponse, "description": "Number plate taken"}},
)
@limiter.limit(settings.rate_limit)
async def add_vehicle(
    request: Request,
    body: VehicleCreateRequest,
    actor: Actor = Depends(driver),
    db: AsyncSession = Depends(get_db),
):
    if not await UserRepository(db).get_by_id(actor.id):
        raise NotFound("User not found")
    vehicle = await VehicleRepository(db).create(
        driver_id=actor.id,
        status=VehicleApproval.PENDING,
        is_available=True,
        **body.model_dump(),
    )
    logger.info("Vehicle %d registered by driver %d", vehicle.id, actor.id)
    return vehicle


@router.get("/my", response_model=list[VehicleResponse], summary="My vehicles")
@limiter.limit(settings.rate_limit)
async def my_vehicles(
    request: Request,
    actor: Actor = Depends(driver),
    db: AsyncSession = Depends(get_db),
):
    return await VehicleRepository(db).list_for_driver(actor.id)


@router.get(
    "/available",
    response_model=list[VehicleResponse],
    summary="Vehicles that can be booked",
)
@router.get(
    "/nearby",
    response_model=list[VehicleResponse],
    summary="Vehicles that can be booked",
)
@limiter.limit(settings.rate_limit)
async def available_vehicles(
    request: Request,
    type: Optional[VehicleType] = None,
    db: AsyncSession = Depends(get_db),
):
    return await VehicleRepository(db).get_available(type)


@router.get("", response_model=list[VehicleResponse], summary="All vehicles")
@limiter.limit(settings.rate_limit)
async def list_vehicles(
    request: Request,
    actor: Actor = Depends(admin),
    db: AsyncSession = Depends(get_db),
):
    return await VehicleRepository(db).list_all()


@router.put(
    "/{vehicle_id}/approve",
    response_model=VehicleResponse,
    summary="Approve a vehicle",
    responses={404: {"model": ErrorResponse}},
)
@limiter.limit(settings.rate_limit)
async def approve_vehicle(
    request: Request,
    vehicle_id: int,
    actor: Actor = Depends(admin),
    db: AsyncSession = Depends(get_db),
):
    return await _set_approval(db, vehicle_id, VehicleApproval.APPROVED)


@router.put(
    "/{vehicle_id}/reject",
    response_model=VehicleResponse,
    summary="Reject a vehicle",
    responses={404: {"model": ErrorResponse}},
)
@limiter.limit(settings.rate_limit)
async def reject_vehicle(
    request: Request,
    vehicle_id: int,
    actor: Actor = Depends(admin),
    db: AsyncSession = Depends(get_db),
):
    return await _set_approval(db, vehicle_id, VehicleApproval.REJECTED)


@router.delete(
    "/{vehicle_id}",
    response_model=MessageResponse,
    summary="Delete a vehicle",
    responses={404: {"model": ErrorResponse}},
)
@limiter.limit(settings.rate_limit)
async def delete_vehicle(
    request: Request,
    vehicle_id: int,
    actor: Actor = Depends(admin),
    db: AsyncSession = Depends(get_db),
):
    repo = VehicleRepository(db)
    vehicle = await repo.get_by_id(vehicle_id)
    if not vehicle:
        raise NotFound("Vehicle not found")
    await repo.delete(vehicle)
    logger.info("Vehicle %d deleted by admin", vehicle_id)
    return MessageResponse(message="Vehicle deleted")


async def _set_approval(
    db: AsyncSession, vehicle_id: int, status: VehicleApproval
) -> VehicleModel:
    repo = VehicleRepository(db)
    vehicle = await repo.get_by_id(vehicle_id)
    if not vehicle:
        raise NotFound("Vehicle not found")
    vehicle.status = status
    vehicle = await repo.save(vehicle)
    logger.info("Vehicle %d marked %s", vehicle_id, status.value)
    return vehicle
