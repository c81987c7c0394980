"""
Booking Lifecycle Service
=========================

Orchestrates the state machine in ``src.domain.lifecycle`` against the
database:

1. Load the booking (and its bound vehicle) with ``SELECT ... FOR UPDATE``.
2. Check the caller's identity against the booking / vehicle.
3. Resolve the transition from the table (role + current status).
4. Apply the status change and any vehicle availability side-effect.

All writes go through the caller's ``AsyncSession``; the request-scoped
unit of work commits the booking and the vehicle together or not at all.

Check order per driver action: not-found -> ownership -> status, so a
foreign driver always receives an authorization error regardless of the
booking's state.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities import Actor
from src.domain.enums import (
    BookingAction,
    BookingStatus,
    UserRole,
    VehicleApproval,
    VehicleType,
)
from src.domain.exceptions import AuthorizationDenied, NotFound, VehicleNotAvailable
from src.domain.lifecycle import check_role, initial_status, resolve_transition
from src.domain.pricing import PricingEngine
from src.infrastructure.models import BookingModel, VehicleModel
from src.infrastructure.repositories import (
    BookingRepository,
    UserRepository,
    VehicleRepository,
)

logger = logging.getLogger(__name__)


class BookingLifecycle:
    def __init__(self, session: AsyncSession, pricing: PricingEngine | None = None):
        self.bookings = BookingRepository(session)
        self.vehicles = VehicleRepository(session)
        self.users = UserRepository(session)
        self.pricing = pricing or PricingEngine()

    # ── Rider operations ─────────────────────────────────────────────

    async def create(
        self,
        actor: Actor,
        *,
        pickup_location: str,
        drop_location: str,
        distance_km: float = 0.0,
        duration_minutes: float = 0.0,
        vehicle_id: Optional[int] = None,
        vehicle_type: Optional[VehicleType] = None,
        total_price: Optional[float] = None,
        pickup_lat: Optional[float] = None,
        pickup_lng: Optional[float] = None,
        drop_lat: Optional[float] = None,
        drop_lng: Optional[float] = None,
        scheduled_date: Optional[datetime] = None,
    ) -> BookingModel:
        """Create a booking: ``requested`` without a vehicle, else ``confirmed``."""
        if actor.role != UserRole.USER:
            raise AuthorizationDenied("Only riders can create bookings")
        if not await self.users.get_by_id(actor.id):
            raise NotFound("User not found")

        rate: Optional[float] = None
        if vehicle_id is not None:
            vehicle = await self._approved_vehicle(vehicle_id)
            rate = vehicle.price_per_km
            vehicle_type = VehicleType(vehicle.type)

        booking = await self.bookings.create(
            user_id=actor.id,
            vehicle_id=vehicle_id,
            vehicle_type=vehicle_type,
            pickup_location=pickup_location,
            drop_location=drop_location,
            pickup_lat=pickup_lat,
            pickup_lng=pickup_lng,
            drop_lat=drop_lat,
            drop_lng=drop_lng,
            distance_km=distance_km or 0.0,
            duration_minutes=duration_minutes or 0.0,
            total_price=self.pricing.quote_at_creation(
                distance_km, rate, explicit_total=total_price
            ),
            scheduled_date=scheduled_date,
            status=initial_status(vehicle_id is not None),
        )
        logger.info(
            "Booking %d created by user %d (status=%s, price=%.2f)",
            booking.id, actor.id, booking.status.value, booking.total_price,
        )
        return booking

    async def confirm(
        self, booking_id: int, actor: Actor, vehicle_id: int
    ) -> BookingModel:
        """Bind an approved vehicle to a ``requested`` booking and price it."""
        check_role(BookingAction.CONFIRM, actor.role)
        booking = await self._booking(booking_id)
        if booking.user_id != actor.id:
            raise AuthorizationDenied("Not your booking")

        transition = resolve_transition(
            booking.status, BookingAction.CONFIRM, actor.role
        )
        vehicle = await self._approved_vehicle(vehicle_id)

        booking.vehicle_id = vehicle.id
        booking.vehicle_type = vehicle.type
        booking.total_price = self.pricing.quote_at_confirmation(
            booking.distance_km, vehicle.price_per_km
        )
        booking.status = transition.target
        booking = await self.bookings.save(booking)
        logger.info(
            "Booking %d confirmed with vehicle %d (price=%.2f)",
            booking.id, vehicle.id, booking.total_price,
        )
        return booking

    # ── Driver operations ────────────────────────────────────────────

    async def driver_accept(self, booking_id: int, actor: Actor) -> BookingModel:
        return await self._driver_transition(
            booking_id, actor, BookingAction.DRIVER_ACCEPT
        )

    async def start_trip(self, booking_id: int, actor: Actor) -> BookingModel:
        return await self._driver_transition(
            booking_id, actor, BookingAction.START_TRIP
        )

    async def complete_trip(self, booking_id: int, actor: Actor) -> BookingModel:
        return await self._driver_transition(
            booking_id, actor, BookingAction.COMPLETE_TRIP
        )

    # ── Administrative override ──────────────────────────────────────

    async def admin_update(
        self, booking_id: int, changes: dict[str, Any]
    ) -> BookingModel:
        """Overwrite any supplied field; the state machine is not consulted."""
        booking = await self._booking(booking_id)
        vehicle_id = changes.get("vehicle_id")
        if vehicle_id is not None and not await self.vehicles.get_by_id(vehicle_id):
            raise NotFound("Vehicle not found")

        previous = booking.status
        for field, value in changes.items():
            setattr(booking, field, value)
        booking = await self.bookings.save(booking)
        if booking.status != previous:
            logger.info(
                "Booking %d status overridden by admin: %s -> %s",
                booking.id, BookingStatus(previous).value, booking.status.value,
            )
        return booking

    async def admin_delete(self, booking_id: int) -> None:
        booking = await self._booking(booking_id)
        await self.bookings.delete(booking)
        logger.info("Booking %d deleted by admin", booking_id)

    # ── Internals ────────────────────────────────────────────────────

    async def _driver_transition(
        self, booking_id: int, actor: Actor, action: BookingAction
    ) -> BookingModel:
        check_role(action, actor.role)
        booking = await self._booking(booking_id)

        vehicle: Optional[VehicleModel] = None
        if booking.vehicle_id is not None:
            vehicle = await self.vehicles.get_by_id_for_update(booking.vehicle_id)
        if vehicle is None or vehicle.driver_id != actor.id:
            raise AuthorizationDenied("Not your booking")

        transition = resolve_transition(booking.status, action, actor.role)
        booking.status = transition.target
        if transition.vehicle_available is not None:
            vehicle.is_available = transition.vehicle_available
            await self.vehicles.save(vehicle)
        booking = await self.bookings.save(booking)

        logger.info(
            "Booking %d %s by driver %d -> %s",
            booking.id, action.value, actor.id, booking.status.value,
        )
        return booking

    async def _booking(self, booking_id: int) -> BookingModel:
        booking = await self.bookings.get_by_id_for_update(booking_id)
        if not booking:
            raise NotFound("Booking not found")
        return booking

    async def _approved_vehicle(self, vehicle_id: int) -> VehicleModel:
        vehicle = await self.vehicles.get_by_id(vehicle_id)
        if not vehicle or vehicle.status != VehicleApproval.APPROVED:
            raise VehicleNotAvailable()
        return vehicle
