"""
Repository Pattern -- abstracts DB access so domain logic stays DB-agnostic.

Each repository receives an ``AsyncSession`` (unit-of-work) and exposes
domain-relevant queries only.
"""

from __future__ import annotations

from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import BookingModel, UserModel, VehicleModel
from src.domain.enums import UserRole, VehicleApproval, VehicleType


class BookingRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, **fields: Any) -> BookingModel:
        booking = BookingModel(**fields)
        self.session.add(booking)
        await self.session.flush()
        return await self._reload(booking)

    async def get_by_id(self, booking_id: int) -> Optional[BookingModel]:
        return await self.session.get(BookingModel, booking_id)

    async def get_by_id_for_update(
        self, booking_id: int
    ) -> Optional[BookingModel]:
        """SELECT ... FOR UPDATE so concurrent transitions serialize."""
        result = await self.session.execute(
            select(BookingModel)
            .where(BookingModel.id == booking_id)
            .with_for_update()
        )
        return result.scalar_one_or_none()

    async def list_all(self) -> list[BookingModel]:
        result = await self.session.execute(
            select(BookingModel).order_by(
                BookingModel.created_at.desc(), BookingModel.id.desc()
            )
        )
        return list(result.scalars().all())

    async def list_for_user(self, user_id: int) -> list[BookingModel]:
        result = await self.session.execute(
            select(BookingModel)
            .where(BookingModel.user_id == user_id)
            .order_by(BookingModel.created_at.desc(), BookingModel.id.desc())
        )
        return list(result.scalars().all())

    async def list_for_driver(self, driver_id: int) -> list[BookingModel]:
        """Bookings bound to any vehicle the driver owns."""
        owned = select(VehicleModel.id).where(VehicleModel.driver_id == driver_id)
        result = await self.session.execute(
            select(BookingModel)
            .where(BookingModel.vehicle_id.in_(owned))
            .order_by(BookingModel.created_at.desc(), BookingModel.id.desc())
        )
        return list(result.scalars().all())

    async def save(self, booking: BookingModel) -> BookingModel:
        await self.session.flush()
        return await self._reload(booking)

    async def delete(self, booking: BookingModel) -> None:
        await self.session.delete(booking)
        await self.session.flush()

    async def _reload(self, booking: BookingModel) -> BookingModel:
        """Re-read columns, then the rider / vehicle summaries for the new FKs."""
        await self.session.refresh(booking)
        await self.session.refresh(booking, attribute_names=["user", "vehicle"])
        return booking


class VehicleRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, **fields: Any) -> VehicleModel:
        vehicle = VehicleModel(**fields)
        self.session.add(vehicle)
        await self.session.flush()
        await self.session.refresh(vehicle)
        return vehicle

    async def get_by_id(self, vehicle_id: int) -> Optional[VehicleModel]:
        return await self.session.get(VehicleModel, vehicle_id)

    async def get_by_id_for_update(
        self, vehicle_id: int
    ) -> Optional[VehicleModel]:
        """Locked and re-read, even when a booking summary already loaded it."""
        result = await self.session.execute(
            select(VehicleModel)
            .where(VehicleModel.id == vehicle_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_all(self) -> list[VehicleModel]:
        result = await self.session.execute(
            select(VehicleModel).order_by(VehicleModel.id)
        )
        return list(result.scalars().all())

    async def list_for_driver(self, driver_id: int) -> list[VehicleModel]:
        result = await self.session.execute(
            select(VehicleModel)
            .where(VehicleModel.driver_id == driver_id)
            .order_by(VehicleModel.id)
        )
        return list(result.scalars().all())

    async def get_available(
        self, vehicle_type: VehicleType | None = None
    ) -> list[VehicleModel]:
        query = select(VehicleModel).where(
            VehicleModel.status == VehicleApproval.APPROVED,
            VehicleModel.is_available.is_(True),
        )
        if vehicle_type:
            query = query.where(VehicleModel.type == vehicle_type)
        result = await self.session.execute(query.order_by(VehicleModel.id))
        return list(result.scalars().all())

    async def save(self, vehicle: VehicleModel) -> VehicleModel:
        await self.session.flush()
        await self.session.refresh(vehicle)
        return vehicle

    async def delete(self, vehicle: VehicleModel) -> None:
        await self.session.delete(vehicle)
        await self.session.flush()


class UserRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, **fields: Any) -> UserModel:
        user = UserModel(**fields)
        self.session.add(user)
        await self.session.flush()
        return user

    async def get_by_id(self, user_id: int) -> Optional[UserModel]:
        return await self.session.get(UserModel, user_id)

    async def list(self, role: UserRole | None = None) -> list[UserModel]:
        query = select(UserModel)
        if role:
            query = query.where(UserModel.role == role)
        result = await self.session.execute(query.order_by(UserModel.id))
        return list(result.scalars().all())

    async def delete(self, user: UserModel) -> None:
        await self.session.delete(user)
        await self.session.flush()
