"""
Shared test fixtures.

Uses an in-memory SQLite database (via aiosqlite) so tests run without
Docker / PostgreSQL.  A single connection is shared through ``StaticPool``
so every session in a test sees the same in-memory database.
"""

from types import SimpleNamespace
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from src.api.middleware import limiter
from src.api.security import create_access_token
from src.domain.entities import Actor
from src.domain.enums import UserRole, VehicleApproval, VehicleType
from src.infrastructure.database import Base
from src.infrastructure.models import UserModel, VehicleModel


TEST_DB_URL = "sqlite+aiosqlite:///:memory:"


# ── Database ──────────────────────────────────────────────────────────


@pytest_asyncio.fixture
async def session_factory():
    """Fresh schema per test; dropped with the engine afterwards."""
    engine = create_async_engine(TEST_DB_URL, echo=False, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(session_factory, seeded) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def seeded(session_factory) -> SimpleNamespace:
    """
    Users: admin, two riders, two drivers.
    Vehicles: an approved car (5/km) and a pending van owned by ``driver``,
    an approved bike (3/km) owned by ``other_driver``.
    """
    async with session_factory() as session:
        admin = UserModel(name="Admin", email="admin@test.io", role=UserRole.ADMIN)
        rider = UserModel(name="Rita", email="rita@test.io", role=UserRole.USER)
        other_rider = UserModel(name="Omar", email="omar@test.io", role=UserRole.USER)
        driver = UserModel(name="Dev", email="dev@test.io", role=UserRole.DRIVER)
        other_driver = UserModel(name="Dina", email="dina@test.io", role=UserRole.DRIVER)
        session.add_all([admin, rider, other_rider, driver, other_driver])
        await session.flush()

        car = VehicleModel(
            driver_id=driver.id, type=VehicleType.CAR, name="Swift",
            number_plate="CAR-001", seats=4, price_per_km=5.0,
            status=VehicleApproval.APPROVED, is_available=True,
        )
        van = VehicleModel(
            driver_id=driver.id, type=VehicleType.VAN, name="Eeco",
            number_plate="VAN-001", seats=7, price_per_km=9.0,
            status=VehicleApproval.PENDING, is_available=True,
        )
        bike = VehicleModel(
            driver_id=other_driver.id, type=VehicleType.BIKE, name="Pulsar",
            number_plate="BIKE-001", seats=1, price_per_km=3.0,
            status=VehicleApproval.APPROVED, is_available=True,
        )
        session.add_all([car, van, bike])
        await session.flush()
        await session.commit()

        def actor(user: UserModel) -> Actor:
            return Actor(id=user.id, role=UserRole(user.role), name=user.name)

        return SimpleNamespace(
            admin=actor(admin),
            rider=actor(rider),
            other_rider=actor(other_rider),
            driver=actor(driver),
            other_driver=actor(other_driver),
            car_id=car.id,
            van_id=van.id,
            bike_id=bike.id,
        )


# ── HTTP ──────────────────────────────────────────────────────────────


def auth_header(actor: Actor) -> dict[str, str]:
    token = create_access_token(actor.id, actor.role, actor.name)
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def client(session_factory, seeded) -> AsyncGenerator[AsyncClient, None]:
    """AsyncClient backed by the per-test SQLite database."""

    async def _test_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    from src.api.app import create_app
    from src.api.dependencies import get_db

    app = create_app()
    app.dependency_overrides[get_db] = _test_db
    limiter.enabled = False

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    limiter.enabled = True


@pytest.fixture
def auth():
    """``auth(actor)`` -> Authorization header for that actor."""
    return auth_header
