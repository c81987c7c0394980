"""
Seed script -- populates the database with sample data for reviewers.

Run after migrations:
    python seed.py

Creates:
  - 1 administrator, 3 drivers, 4 riders
  - 6 vehicles (mix of approved / pending / rejected)
  - 5 bookings covering every reachable lifecycle status

Prints a bearer token for every seeded user.
"""

import asyncio
import os

from sqlalchemy import func, select

from src.api.security import create_access_token
from src.domain.enums import BookingStatus, UserRole, VehicleApproval, VehicleType
from src.infrastructure.database import async_session_factory, engine
from src.infrastructure.models import BookingModel, UserModel, VehicleModel


USERS = [
    {
        "name": os.environ.get("ADMIN_NAME", "Admin User"),
        "email": os.environ.get("ADMIN_EMAIL", "admin@example.com"),
        "phone": os.environ.get("ADMIN_PHONE", ""),
        "role": UserRole.ADMIN,
    },
    {"name": "Ravi Driver", "email": "ravi@example.com", "phone": "+911111111111", "role": UserRole.DRIVER},
    {"name": "Sana Driver", "email": "sana@example.com", "phone": "+912222222222", "role": UserRole.DRIVER},
    {"name": "Tom Driver", "email": "tom@example.com", "phone": "+913333333333", "role": UserRole.DRIVER},
    {"name": "Asha Rider", "email": "asha@example.com", "phone": "+914444444444", "role": UserRole.USER},
    {"name": "Ben Rider", "email": "ben@example.com", "phone": "+915555555555", "role": UserRole.USER},
    {"name": "Chen Rider", "email": "chen@example.com", "phone": "+916666666666", "role": UserRole.USER},
    {"name": "Dana Rider", "email": "dana@example.com", "phone": "+917777777777", "role": UserRole.USER},
]

# driver index refers to USERS
VEHICLES = [
    {"driver": 1, "type": VehicleType.CAR, "name": "Swift Dzire", "number_plate": "MH01AB1234", "seats": 4, "price_per_km": 12.0, "status": VehicleApproval.APPROVED},
    {"driver": 1, "type": VehicleType.BIKE, "name": "Pulsar 150", "number_plate": "MH01CD5678", "seats": 1, "price_per_km": 5.0, "status": VehicleApproval.APPROVED},
    {"driver": 2, "type": VehicleType.VAN, "name": "Eeco", "number_plate": "MH02EF9012", "seats": 7, "price_per_km": 18.0, "status": VehicleApproval.APPROVED},
    {"driver": 2, "type": VehicleType.MINIBUS, "name": "Traveller", "number_plate": "MH02GH3456", "seats": 15, "price_per_km": 30.0, "status": VehicleApproval.PENDING},
    {"driver": 3, "type": VehicleType.BUS_30, "name": "Starbus 30", "number_plate": "MH03IJ7890", "seats": 30, "price_per_km": 45.0, "status": VehicleApproval.REJECTED},
    {"driver": 3, "type": VehicleType.BUS_50, "name": "Starbus 50", "number_plate": "MH03KL1122", "seats": 50, "price_per_km": 60.0, "status": VehicleApproval.PENDING},
]


async def seed():
    async with async_session_factory() as session:
        # Check if already seeded
        count = await session.scalar(select(func.count()).select_from(UserModel))
        if count:
            print("Database already seeded. Skipping.")
            return

        # ── Users ─────────────────────────────────────────────────────
        users = [UserModel(**u) for u in USERS]
        session.add_all(users)
        await session.flush()
        print(f"  Created {len(users)} users")

        # ── Vehicles ──────────────────────────────────────────────────
        vehicles = []
        for v in VEHICLES:
            fields = dict(v)
            owner = users[fields.pop("driver")]
            vehicles.append(VehicleModel(driver_id=owner.id, is_available=True, **fields))
        session.add_all(vehicles)
        await session.flush()
        print(f"  Created {len(vehicles)} vehicles")

        # ── Bookings ──────────────────────────────────────────────────
        car, bike, van = vehicles[0], vehicles[1], vehicles[2]
        bookings_data = [
            # requested: no vehicle yet, only a type
            {"user": 4, "vehicle": None, "vehicle_type": VehicleType.CAR, "pickup": "Airport T2", "drop": "Andheri East", "km": 6.5, "status": BookingStatus.REQUESTED},
            # confirmed with a vehicle
            {"user": 5, "vehicle": car, "vehicle_type": None, "pickup": "Bandra", "drop": "Powai", "km": 14.0, "status": BookingStatus.CONFIRMED},
            # driver accepted
            {"user": 6, "vehicle": bike, "vehicle_type": None, "pickup": "Dadar", "drop": "Worli", "km": 4.0, "status": BookingStatus.DRIVER_ASSIGNED},
            # on the road -- the van is busy
            {"user": 7, "vehicle": van, "vehicle_type": None, "pickup": "Thane", "drop": "Vashi", "km": 20.0, "status": BookingStatus.TRIP_STARTED},
            # finished
            {"user": 4, "vehicle": car, "vehicle_type": None, "pickup": "Colaba", "drop": "Churchgate", "km": 3.0, "status": BookingStatus.COMPLETED},
        ]
        for b in bookings_data:
            vehicle = b["vehicle"]
            session.add(
                BookingModel(
                    user_id=users[b["user"]].id,
                    vehicle_id=vehicle.id if vehicle else None,
                    vehicle_type=vehicle.type if vehicle else b["vehicle_type"],
                    pickup_location=b["pickup"],
                    drop_location=b["drop"],
                    distance_km=b["km"],
                    duration_minutes=b["km"] * 3,
                    total_price=round(b["km"] * vehicle.price_per_km, 2) if vehicle else 0.0,
                    status=b["status"],
                )
            )
        van.is_available = False
        await session.flush()
        print(f"  Created {len(bookings_data)} bookings")

        await session.commit()
        print("\nSeed complete! Tokens:")
        for u in users:
            token = create_access_token(u.id, u.role, u.name)
            print(f"  {u.role.value:<6} {u.email:<22} {token}")


async def main():
    print("Seeding database...")
    await seed()
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
