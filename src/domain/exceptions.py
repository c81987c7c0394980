"""
Domain error taxonomy.

Every operation fails fast with one of these.  Each class carries the HTTP
status it maps to; the API layer registers a single handler for
``BookingError`` that turns it into ``{"detail": ...}``.
"""

from __future__ import annotations


class BookingError(Exception):
    status_code = 500
    default_detail = "Internal server error"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class NotFound(BookingError):
    status_code = 404
    default_detail = "Not found"


class InvalidStateTransition(BookingError):
    """Raised when a booking status change violates the state machine."""

    status_code = 409
    default_detail = "Invalid status"


class AuthorizationDenied(BookingError):
    status_code = 403
    default_detail = "Not allowed"


class ValidationFailure(BookingError):
    status_code = 400
    default_detail = "Invalid request"


class VehicleNotAvailable(ValidationFailure):
    default_detail = "Vehicle not available"
