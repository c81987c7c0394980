"""
Booking endpoints
=================

Rider
  POST /api/v1/bookings                     -- create a booking (201)
  GET  /api/v1/bookings/my                  -- own bookings
  PUT  /api/v1/bookings/{id}/confirm        -- confirm with a vehicle

Driver
  GET  /api/v1/bookings/driver              -- bookings for owned vehicles
  PUT  /api/v1/bookings/{id}/confirm-driver -- accept the trip
  PUT  /api/v1/bookings/{id}/start          -- start the trip
  PUT  /api/v1/bookings/{id}/complete       -- complete the trip

Administrator
  GET    /api/v1/bookings                   -- all bookings
  GET    /api/v1/bookings/{id}              -- one booking
  PUT    /api/v1/bookings/{id}              -- overwrite fields (no state checks)
  DELETE /api/v1/bookings/{id}              -- hard delete
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.dependencies import get_db, get_lifecycle
from src.api.middleware import limiter
from src.api.schemas import (
    BookingAdminUpdateRequest,
    BookingConfirmRequest,
    BookingCreateRequest,
    BookingResponse,
    ErrorResponse,
    MessageResponse,
)
from src.api.security import require_roles
from src.config import settings
from src.domain.entities import Actor
from src.domain.enums import UserRole
from src.domain.exceptions import NotFound
from src.infrastructure.repositories import BookingRepository
from src.services.booking_lifecycle import BookingLifecycle

router = APIRouter(prefix="/bookings", tags=["bookings"])

rider = require_roles(UserRole.USER)
driver = require_roles(UserRole.DRIVER)
admin = require_roles(UserRole.ADMIN)

_TRANSITION_ERRORS = {
    403: {"model": ErrorResponse, "description": "Not your booking"},
    404: {"model": ErrorResponse, "description": "Booking not found"},
    409: {"model": ErrorResponse, "description": "Wrong status for this step"},
}

# Columns an admin may explicitly reset to null.
_CLEARABLE = {
    "vehicle_id",
    "vehicle_type",
    "pickup_lat",
    "pickup_lng",
    "drop_lat",
    "drop_lng",
    "scheduled_date",
}


# ── Rider ─────────────────────────────────────────────────────────────


@router.post(
    "",
    status_code=201,
    response_model=BookingResponse,
    summary="Create a booking",
    responses={400: {"model": ErrorResponse, "description": "Vehicle not available"}},
)
@limiter.limit(settings.rate_limit)
async def create_booking(
    request: Request,
    body: BookingCreateRequest,
    actor: Actor = Depends(rider),
    lifecycle: BookingLifecycle = Depends(get_lifecycle),
):
    return await lifecycle.create(actor, **body.model_dump())


@router.get("/my", response_model=list[BookingResponse], summary="My bookings")
@limiter.limit(settings.rate_limit)
async def my_bookings(
    request: Request,
    actor: Actor = Depends(rider),
    db: AsyncSession = Depends(get_db),
):
    return await BookingRepository(db).list_for_user(actor.id)


@router.put(
    "/{booking_id}/confirm",
    response_model=BookingResponse,
    summary="Confirm a requested booking with a vehicle",
    description=(
        "Binds an approved vehicle, prices the trip as distance x rate and "
        "moves the booking to confirmed."
    ),
    responses={
        **_TRANSITION_ERRORS,
        400: {"model": ErrorResponse, "description": "Vehicle not available"},
    },
)
@limiter.limit(settings.rate_limit)
async def confirm_booking(
    request: Request,
    booking_id: int,
    body: BookingConfirmRequest,
    actor: Actor = Depends(rider),
    lifecycle: BookingLifecycle = Depends(get_lifecycle),
):
    return await lifecycle.confirm(booking_id, actor, body.vehicle_id)


# ── Driver ────────────────────────────────────────────────────────────


@router.get(
    "/driver",
    response_model=list[BookingResponse],
    summary="Bookings for my vehicles",
)
@limiter.limit(settings.rate_limit)
async def driver_bookings(
    request: Request,
    actor: Actor = Depends(driver),
    db: AsyncSession = Depends(get_db),
):
    return await BookingRepository(db).list_for_driver(actor.id)


@router.put(
    "/{booking_id}/confirm-driver",
    response_model=BookingResponse,
    summary="Accept a confirmed booking",
    responses=_TRANSITION_ERRORS,
)
@limiter.limit(settings.rate_limit)
async def driver_accept(
    request: Request,
    booking_id: int,
    actor: Actor = Depends(driver),
    lifecycle: BookingLifecycle = Depends(get_lifecycle),
):
    return await lifecycle.driver_accept(booking_id, actor)


@router.put(
    "/{booking_id}/start",
    response_model=BookingResponse,
    summary="Start the trip",
    description="Moves the booking to trip_started and marks the vehicle unavailable.",
    responses=_TRANSITION_ERRORS,
)
@limiter.limit(settings.rate_limit)
async def start_trip(
    request: Request,
    booking_id: int,
    actor: Actor = Depends(driver),
    lifecycle: BookingLifecycle = Depends(get_lifecycle),
):
    return await lifecycle.start_trip(booking_id, actor)


@router.put(
    "/{booking_id}/complete",
    response_model=BookingResponse,
    summary="Complete the trip",
    description="Moves the booking to completed and marks the vehicle available.",
    responses=_TRANSITION_ERRORS,
)
@limiter.limit(settings.rate_limit)
async def complete_trip(
    request: Request,
    booking_id: int,
    actor: Actor = Depends(driver),
    lifecycle: BookingLifecycle = Depends(get_lifecycle),
):
    return await lifecycle.complete_trip(booking_id, actor)


# ── Administrator ─────────────────────────────────────────────────────


@router.get("", response_model=list[BookingResponse], summary="All bookings")
@limiter.limit(settings.rate_limit)
async def list_bookings(
    request: Request,
    actor: Actor = Depends(admin),
    db: AsyncSession = Depends(get_db),
):
    return await BookingRepository(db).list_all()


@router.get(
    "/{booking_id}",
    response_model=BookingResponse,
    summary="Get one booking",
    responses={404: {"model": ErrorResponse}},
)
@limiter.limit(settings.rate_limit)
async def get_booking(
    request: Request,
    booking_id: int,
    actor: Actor = Depends(admin),
    db: AsyncSession = Depends(get_db),
):
    booking = await BookingRepository(db).get_by_id(booking_id)
    if not booking:
        raise NotFound("Booking not found")
    return booking


@router.put(
    "/{booking_id}",
    response_model=BookingResponse,
    summary="Overwrite booking fields",
    description="Bypasses the lifecycle checks; this is the only way to cancel.",
    responses={404: {"model": ErrorResponse}},
)
@limiter.limit(settings.rate_limit)
async def update_booking(
    request: Request,
    booking_id: int,
    body: BookingAdminUpdateRequest,
    actor: Actor = Depends(admin),
    lifecycle: BookingLifecycle = Depends(get_lifecycle),
):
    changes = {
        field: value
        for field, value in body.model_dump(exclude_unset=True).items()
        if value is not None or field in _CLEARABLE
    }
    return await lifecycle.admin_update(booking_id, changes)


@router.delete(
    "/{booking_id}",
    response_model=MessageResponse,
    summary="Delete a booking",
    responses={404: {"model": ErrorResponse}},
)
@limiter.limit(settings.rate_limit)
async def delete_booking(
    request: Request,
    booking_id: int,
    actor: Actor = Depends(admin),
    lifecycle: BookingLifecycle = Depends(get_lifecycle),
):
    await lifecycle.admin_delete(booking_id)
    return MessageResponse(message="Booking deleted")
