"""
Engine, session factory and declarative base for the booking store.

Pool size and overflow come from ``DATABASE_POOL_SIZE`` /
``DATABASE_MAX_OVERFLOW``; every request borrows one connection for its
whole transaction, so the pool bounds concurrent requests rather than
queries.  Sessions keep loaded rows after commit so responses can be
serialized once ``get_db`` has committed.
"""

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from src.config import settings

engine = create_async_engine(
    settings.database_url,
    echo=False,
    pool_size=settings.database_pool_size,
    max_overflow=settings.database_max_overflow,
)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Shared declarative base for all ORM models."""
