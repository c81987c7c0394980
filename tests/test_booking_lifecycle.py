"""
Service-level tests for ``BookingLifecycle`` against SQLite.

Covers the end-to-end chain, vehicle availability side-effects, pricing at
creation / confirmation, and the identity checks on every transition.
"""

from __future__ import annotations

import pytest

from src.domain.entities import Actor
from src.domain.enums import BookingStatus, UserRole, VehicleType
from src.domain.exceptions import (
    AuthorizationDenied,
    InvalidStateTransition,
    NotFound,
    VehicleNotAvailable,
)
from src.infrastructure.models import BookingModel, VehicleModel
from src.services.booking_lifecycle import BookingLifecycle


async def _requested(lifecycle: BookingLifecycle, seeded, **extra) -> BookingModel:
    fields = dict(pickup_location="A", drop_location="B", distance_km=10)
    fields.update(extra)
    return await lifecycle.create(seeded.rider, **fields)


async def _assigned(lifecycle: BookingLifecycle, seeded) -> BookingModel:
    booking = await _requested(lifecycle, seeded)
    await lifecycle.confirm(booking.id, seeded.rider, seeded.car_id)
    return await lifecycle.driver_accept(booking.id, seeded.driver)


# ── Creation ──────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_create_without_vehicle_is_requested_and_free(db_session, seeded):
    booking = await _requested(BookingLifecycle(db_session), seeded)

    assert booking.status == BookingStatus.REQUESTED
    assert booking.total_price == 0
    assert booking.vehicle_id is None
    assert booking.user_id == seeded.rider.id
    assert booking.vehicle is None


@pytest.mark.asyncio
async def test_create_keeps_requested_type(db_session, seeded):
    booking = await _requested(
        BookingLifecycle(db_session), seeded, vehicle_type=VehicleType.VAN
    )
    assert booking.vehicle_type == VehicleType.VAN


@pytest.mark.asyncio
async def test_create_with_vehicle_is_confirmed_and_priced(db_session, seeded):
    booking = await _requested(
        BookingLifecycle(db_session), seeded, vehicle_id=seeded.car_id
    )

    assert booking.status == BookingStatus.CONFIRMED
    assert booking.vehicle_id == seeded.car_id
    assert booking.vehicle_type == VehicleType.CAR
    assert booking.total_price == 50.0


@pytest.mark.asyncio
async def test_create_with_explicit_price_is_trusted(db_session, seeded):
    booking = await _requested(
        BookingLifecycle(db_session), seeded,
        vehicle_id=seeded.car_id, total_price=42.0,
    )
    assert booking.total_price == 42.0


@pytest.mark.asyncio
async def test_create_with_unapproved_vehicle_fails(db_session, seeded):
    with pytest.raises(VehicleNotAvailable):
        await _requested(
            BookingLifecycle(db_session), seeded, vehicle_id=seeded.van_id
        )


@pytest.mark.asyncio
async def test_create_for_unknown_user_fails(db_session, seeded):
    ghost = Actor(id=999, role=UserRole.USER)
    with pytest.raises(NotFound):
        await BookingLifecycle(db_session).create(
            ghost, pickup_location="A", drop_location="B"
        )


# ── Rider confirmation ────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_confirm_binds_vehicle_and_prices(db_session, seeded):
    lifecycle = BookingLifecycle(db_session)
    booking = await _requested(lifecycle, seeded)

    booking = await lifecycle.confirm(booking.id, seeded.rider, seeded.car_id)

    assert booking.status == BookingStatus.CONFIRMED
    assert booking.vehicle_id == seeded.car_id
    assert booking.total_price == 50.0
    assert booking.vehicle.number_plate == "CAR-001"
    assert booking.user.name == "Rita"


@pytest.mark.asyncio
async def test_confirm_recomputes_explicit_price(db_session, seeded):
    lifecycle = BookingLifecycle(db_session)
    booking = await _requested(lifecycle, seeded, total_price=999.0)

    booking = await lifecycle.confirm(booking.id, seeded.rider, seeded.bike_id)

    assert booking.total_price == 30.0  # 10 km x 3


@pytest.mark.asyncio
@pytest.mark.parametrize("vehicle_attr", ["van_id", None])
async def test_confirm_with_unavailable_vehicle_keeps_requested(
    db_session, seeded, vehicle_attr
):
    lifecycle = BookingLifecycle(db_session)
    booking = await _requested(lifecycle, seeded)
    vehicle_id = getattr(seeded, vehicle_attr) if vehicle_attr else 12345

    with pytest.raises(VehicleNotAvailable, match="Vehicle not available"):
        await lifecycle.confirm(booking.id, seeded.rider, vehicle_id)

    refreshed = await db_session.get(BookingModel, booking.id)
    assert refreshed.status == BookingStatus.REQUESTED
    assert refreshed.vehicle_id is None


@pytest.mark.asyncio
async def test_confirm_someone_elses_booking_denied(db_session, seeded):
    lifecycle = BookingLifecycle(db_session)
    booking = await _requested(lifecycle, seeded)

    with pytest.raises(AuthorizationDenied):
        await lifecycle.confirm(booking.id, seeded.other_rider, seeded.car_id)


@pytest.mark.asyncio
async def test_confirm_twice_is_a_state_conflict(db_session, seeded):
    lifecycle = BookingLifecycle(db_session)
    booking = await _requested(lifecycle, seeded)
    await lifecycle.confirm(booking.id, seeded.rider, seeded.car_id)

    with pytest.raises(InvalidStateTransition):
        await lifecycle.confirm(booking.id, seeded.rider, seeded.bike_id)


@pytest.mark.asyncio
async def test_confirm_missing_booking(db_session, seeded):
    with pytest.raises(NotFound):
        await BookingLifecycle(db_session).confirm(404, seeded.rider, seeded.car_id)


# ── Driver transitions ────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_full_chain_toggles_availability(db_session, seeded):
    lifecycle = BookingLifecycle(db_session)
    booking = await _assigned(lifecycle, seeded)
    assert booking.status == BookingStatus.DRIVER_ASSIGNED

    booking = await lifecycle.start_trip(booking.id, seeded.driver)
    car = await db_session.get(VehicleModel, seeded.car_id)
    assert booking.status == BookingStatus.TRIP_STARTED
    assert car.is_available is False

    booking = await lifecycle.complete_trip(booking.id, seeded.driver)
    await db_session.refresh(car)
    assert booking.status == BookingStatus.COMPLETED
    assert car.is_available is True


@pytest.mark.asyncio
async def test_foreign_driver_cannot_accept(db_session, seeded):
    lifecycle = BookingLifecycle(db_session)
    booking = await _requested(lifecycle, seeded)
    await lifecycle.confirm(booking.id, seeded.rider, seeded.car_id)

    with pytest.raises(AuthorizationDenied, match="Not your booking"):
        await lifecycle.driver_accept(booking.id, seeded.other_driver)

    refreshed = await db_session.get(BookingModel, booking.id)
    assert refreshed.status == BookingStatus.CONFIRMED


@pytest.mark.asyncio
async def test_foreign_driver_cannot_start_or_complete(db_session, seeded):
    lifecycle = BookingLifecycle(db_session)
    booking = await _assigned(lifecycle, seeded)

    with pytest.raises(AuthorizationDenied):
        await lifecycle.start_trip(booking.id, seeded.other_driver)

    await lifecycle.start_trip(booking.id, seeded.driver)
    with pytest.raises(AuthorizationDenied):
        await lifecycle.complete_trip(booking.id, seeded.other_driver)


@pytest.mark.asyncio
async def test_driver_cannot_act_on_unbound_booking(db_session, seeded):
    lifecycle = BookingLifecycle(db_session)
    booking = await _requested(lifecycle, seeded)

    with pytest.raises(AuthorizationDenied):
        await lifecycle.driver_accept(booking.id, seeded.driver)


@pytest.mark.asyncio
async def test_start_before_accept_is_a_state_conflict(db_session, seeded):
    lifecycle = BookingLifecycle(db_session)
    booking = await _requested(lifecycle, seeded, vehicle_id=seeded.car_id)

    with pytest.raises(InvalidStateTransition, match="Confirm trip first"):
        await lifecycle.start_trip(booking.id, seeded.driver)

    car = await db_session.get(VehicleModel, seeded.car_id)
    assert car.is_available is True


@pytest.mark.asyncio
async def test_complete_before_start_is_a_state_conflict(db_session, seeded):
    lifecycle = BookingLifecycle(db_session)
    booking = await _assigned(lifecycle, seeded)

    with pytest.raises(InvalidStateTransition, match="Trip not started"):
        await lifecycle.complete_trip(booking.id, seeded.driver)


@pytest.mark.asyncio
async def test_rider_cannot_start_trip(db_session, seeded):
    lifecycle = BookingLifecycle(db_session)
    booking = await _assigned(lifecycle, seeded)

    with pytest.raises(AuthorizationDenied):
        await lifecycle.start_trip(booking.id, seeded.rider)


# ── Administrative override ───────────────────────────────────────────


@pytest.mark.asyncio
async def test_admin_can_cancel_from_any_state(db_session, seeded):
    lifecycle = BookingLifecycle(db_session)
    booking = await _assigned(lifecycle, seeded)

    booking = await lifecycle.admin_update(
        booking.id, {"status": BookingStatus.CANCELLED, "total_price": 0.0}
    )

    assert booking.status == BookingStatus.CANCELLED
    assert booking.total_price == 0.0


@pytest.mark.asyncio
async def test_admin_update_rejects_unknown_vehicle(db_session, seeded):
    lifecycle = BookingLifecycle(db_session)
    booking = await _requested(lifecycle, seeded)

    with pytest.raises(NotFound):
        await lifecycle.admin_update(booking.id, {"vehicle_id": 777})


@pytest.mark.asyncio
async def test_admin_delete(db_session, seeded):
    lifecycle = BookingLifecycle(db_session)
    booking = await _requested(lifecycle, seeded)

    await lifecycle.admin_delete(booking.id)

    assert await db_session.get(BookingModel, booking.id) is None
    with pytest.raises(NotFound):
        await lifecycle.admin_delete(booking.id)
