"""Domain enumerations."""

import enum


class UserRole(str, enum.Enum):
    USER = "user"  # rider
    DRIVER = "driver"
    ADMIN = "admin"


class BookingStatus(str, enum.Enum):
    REQUESTED = "requested"
    CONFIRMED = "confirmed"
    DRIVER_ASSIGNED = "driver_assigned"
    TRIP_STARTED = "trip_started"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class BookingAction(str, enum.Enum):
    CONFIRM = "confirm"
    DRIVER_ACCEPT = "driver_accept"
    START_TRIP = "start_trip"
    COMPLETE_TRIP = "complete_trip"


class VehicleType(str, enum.Enum):
    BIKE = "bike"
    CAR = "car"
    VAN = "van"
    MINIBUS = "minibus"
    BUS_30 = "bus_30"
    BUS_50 = "bus_50"


class VehicleApproval(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


def enum_values(enum_cls: type[enum.Enum]) -> list[str]:
    """Persist enum *values* (lower-case) rather than member names."""
    return [member.value for member in enum_cls]
