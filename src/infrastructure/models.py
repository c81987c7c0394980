"""
SQLAlchemy ORM models  (maps to PostgreSQL).

Tables
------
* ``users``     -- riders, drivers and administrators
* ``vehicles``  -- driver-submitted vehicles awaiting / holding approval
* ``bookings``  -- trip bookings and their lifecycle status

Indexes
-------
* **B-Tree** on ``bookings.status``, ``bookings.user_id``,
  ``bookings.vehicle_id`` and ``vehicles.driver_id`` for the per-role
  listing queries; composite ``(status, is_available)`` on vehicles for the
  availability search.
* **Unique** on ``users.email`` and ``vehicles.number_plate``.

Deleting a user removes their vehicles and bookings (``ON DELETE CASCADE``);
deleting a vehicle unbinds it from its bookings (``ON DELETE SET NULL``).
"""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    func,
)
from sqlalchemy.orm import relationship

from .database import Base
from src.domain.enums import (
    BookingStatus,
    UserRole,
    VehicleApproval,
    VehicleType,
    enum_values,
)


class UserModel(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(120), nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    phone = Column(String(32), default="", nullable=False)
    role = Column(
        Enum(UserRole, name="userrole", values_callable=enum_values),
        default=UserRole.USER,
        nullable=False,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class VehicleModel(Base):
    __tablename__ = "vehicles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    driver_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    type = Column(
        Enum(VehicleType, name="vehicletype", values_callable=enum_values),
        nullable=False,
    )
    name = Column(String(120), nullable=False)
    number_plate = Column(String(32), unique=True, nullable=False)
    seats = Column(Integer, default=1, nullable=False)
    price_per_km = Column(Float, nullable=False)
    image_url = Column(String(512), default="", nullable=False)
    licence_url = Column(String(512), default="", nullable=False)
    status = Column(
        Enum(VehicleApproval, name="vehicleapproval", values_callable=enum_values),
        default=VehicleApproval.PENDING,
        nullable=False,
    )
    current_lat = Column(Float, nullable=True)
    current_lng = Column(Float, nullable=True)
    is_available = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    __table_args__ = (
        Index("idx_vehicles_driver", "driver_id"),
        Index("idx_vehicles_status_available", "status", "is_available"),
    )


class BookingModel(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    vehicle_id = Column(
        Integer, ForeignKey("vehicles.id", ondelete="SET NULL"), nullable=True
    )
    # Requested type, meaningful until a concrete vehicle is bound
    vehicle_type = Column(
        Enum(VehicleType, name="vehicletype", values_callable=enum_values),
        nullable=True,
    )

    pickup_location = Column(String(255), nullable=False)
    drop_location = Column(String(255), nullable=False)
    pickup_lat = Column(Float, nullable=True)
    pickup_lng = Column(Float, nullable=True)
    drop_lat = Column(Float, nullable=True)
    drop_lng = Column(Float, nullable=True)

    distance_km = Column(Float, default=0.0, nullable=False)
    duration_minutes = Column(Float, default=0.0, nullable=False)
    total_price = Column(Float, default=0.0, nullable=False)

    booked_at = Column(DateTime(timezone=True), server_default=func.now())
    scheduled_date = Column(DateTime(timezone=True), nullable=True)
    status = Column(
        Enum(BookingStatus, name="bookingstatus", values_callable=enum_values),
        default=BookingStatus.REQUESTED,
        nullable=False,
    )

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    __table_args__ = (
        Index("idx_bookings_status", "status"),
        Index("idx_bookings_user", "user_id"),
        Index("idx_bookings_vehicle", "vehicle_id"),
    )

    # Rider and vehicle summaries travel with every booking response
    user = relationship("UserModel", lazy="selectin")
    vehicle = relationship("VehicleModel", lazy="selectin")
