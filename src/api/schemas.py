"""Pydantic request / response schemas for the REST API."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from src.domain.enums import BookingStatus, UserRole, VehicleApproval, VehicleType


# ── Requests ──────────────────────────────────────────────────────────


class BookingCreateRequest(BaseModel):
    pickup_location: str = Field(..., min_length=1, max_length=255)
    drop_location: str = Field(..., min_length=1, max_length=255)
    pickup_lat: Optional[float] = Field(None, ge=-90, le=90)
    pickup_lng: Optional[float] = Field(None, ge=-180, le=180)
    drop_lat: Optional[float] = Field(None, ge=-90, le=90)
    drop_lng: Optional[float] = Field(None, ge=-180, le=180)
    distance_km: float = Field(0.0, ge=0)
    duration_minutes: float = Field(0.0, ge=0)
    vehicle_type: Optional[VehicleType] = None
    vehicle_id: Optional[int] = Field(
        None, description="Pre-selected vehicle; the booking starts confirmed."
    )
    total_price: Optional[float] = Field(
        None,
        ge=0,
        description="Explicit total. Non-zero values are kept verbatim.",
    )
    scheduled_date: Optional[datetime] = None


class BookingConfirmRequest(BaseModel):
    vehicle_id: int


class BookingAdminUpdateRequest(BaseModel):
    """Every field optional; only the ones sent are overwritten."""

    vehicle_id: Optional[int] = None
    vehicle_type: Optional[VehicleType] = None
    pickup_location: Optional[str] = Field(None, min_length=1, max_length=255)
    drop_location: Optional[str] = Field(None, min_length=1, max_length=255)
    pickup_lat: Optional[float] = Field(None, ge=-90, le=90)
    pickup_lng: Optional[float] = Field(None, ge=-180, le=180)
    drop_lat: Optional[float] = Field(None, ge=-90, le=90)
    drop_lng: Optional[float] = Field(None, ge=-180, le=180)
    distance_km: Optional[float] = Field(None, ge=0)
    duration_minutes: Optional[float] = Field(None, ge=0)
    total_price: Optional[float] = Field(None, ge=0)
    scheduled_date: Optional[datetime] = None
    status: Optional[BookingStatus] = None


class VehicleCreateRequest(BaseModel):
    type: VehicleType
    name: str = Field(..., min_length=1, max_length=120)
    number_plate: str = Field(..., min_length=1, max_length=32)
    seats: int = Field(1, ge=1, le=60)
    price_per_km: float = Field(..., gt=0)
    image_url: str = Field("", max_length=512)
    licence_url: str = Field("", max_length=512)
    current_lat: Optional[float] = Field(None, ge=-90, le=90)
    current_lng: Optional[float] = Field(None, ge=-180, le=180)


# ── Responses ─────────────────────────────────────────────────────────


class BookingUserSummary(BaseModel):
    """Rider contact details shown to the driver."""

    id: int
    name: str
    email: str
    phone: str

    model_config = {"from_attributes": True}


class BookingVehicleSummary(BaseModel):
    id: int
    driver_id: int
    name: str
    type: VehicleType
    number_plate: str
    price_per_km: float

    model_config = {"from_attributes": True}


class BookingResponse(BaseModel):
    id: int
    user_id: int
    vehicle_id: Optional[int] = None
    vehicle_type: Optional[VehicleType] = None
    pickup_location: str
    drop_location: str
    pickup_lat: Optional[float] = None
    pickup_lng: Optional[float] = None
    drop_lat: Optional[float] = None
    drop_lng: Optional[float] = None
    distance_km: float
    duration_minutes: float
    total_price: float
    scheduled_date: Optional[datetime] = None
    status: BookingStatus
    created_at: Optional[datetime] = None
    user: Optional[BookingUserSummary] = None
    vehicle: Optional[BookingVehicleSummary] = None

    model_config = {"from_attributes": True}


class VehicleResponse(BaseModel):
    id: int
    driver_id: int
    type: VehicleType
    name: str
    number_plate: str
    seats: int
    price_per_km: float
    image_url: str
    licence_url: str
    status: VehicleApproval
    is_available: bool
    current_lat: Optional[float] = None
    current_lng: Optional[float] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    phone: str
    role: UserRole
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class MessageResponse(BaseModel):
    message: str


class HealthResponse(BaseModel):
    status: str = "ok"


class ErrorResponse(BaseModel):
    detail: str
