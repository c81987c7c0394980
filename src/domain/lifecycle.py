"""
Booking lifecycle state machine.

The chain modelled here is a single-vehicle, single-driver trip::

    requested -> confirmed -> driver_assigned -> trip_started -> completed

``cancelled`` is a valid terminal value but no action leads to it; only an
administrative field overwrite can set it.

Each action is looked up in ``BOOKING_TRANSITIONS`` by
``(current status, action)``.  The entry names the role allowed to perform
it, the next status, and the availability flag to write on the bound
vehicle (``None`` = leave untouched).  Any combination missing from the
table is rejected.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .enums import BookingAction, BookingStatus, UserRole
from .exceptions import AuthorizationDenied, InvalidStateTransition


@dataclass(frozen=True)
class Transition:
    source: BookingStatus
    action: BookingAction
    role: UserRole
    target: BookingStatus
    vehicle_available: Optional[bool] = None


_TABLE = [
    Transition(
        BookingStatus.REQUESTED, BookingAction.CONFIRM,
        UserRole.USER, BookingStatus.CONFIRMED,
    ),
    Transition(
        BookingStatus.CONFIRMED, BookingAction.DRIVER_ACCEPT,
        UserRole.DRIVER, BookingStatus.DRIVER_ASSIGNED,
    ),
    Transition(
        BookingStatus.DRIVER_ASSIGNED, BookingAction.START_TRIP,
        UserRole.DRIVER, BookingStatus.TRIP_STARTED,
        vehicle_available=False,
    ),
    Transition(
        BookingStatus.TRIP_STARTED, BookingAction.COMPLETE_TRIP,
        UserRole.DRIVER, BookingStatus.COMPLETED,
        vehicle_available=True,
    ),
]

BOOKING_TRANSITIONS: dict[tuple[BookingStatus, BookingAction], Transition] = {
    (t.source, t.action): t for t in _TABLE
}

ACTION_ROLES: dict[BookingAction, UserRole] = {t.action: t.role for t in _TABLE}

# Message returned when an action is attempted from the wrong status.
_STATE_ERRORS = {
    BookingAction.CONFIRM: "Booking already confirmed or invalid",
    BookingAction.DRIVER_ACCEPT: "Booking is not awaiting driver confirmation",
    BookingAction.START_TRIP: "Confirm trip first",
    BookingAction.COMPLETE_TRIP: "Trip not started",
}


def initial_status(has_vehicle: bool) -> BookingStatus:
    """A booking created with a pre-selected vehicle skips ``requested``."""
    return BookingStatus.CONFIRMED if has_vehicle else BookingStatus.REQUESTED


def check_role(action: BookingAction, role: UserRole) -> None:
    if ACTION_ROLES[action] != role:
        raise AuthorizationDenied(
            f"Role '{role.value}' cannot perform '{action.value}'"
        )


def resolve_transition(
    status: BookingStatus, action: BookingAction, role: UserRole
) -> Transition:
    """Return the transition for *action* from *status*, else raise."""
    check_role(action, role)
    transition = BOOKING_TRANSITIONS.get((BookingStatus(status), action))
    if transition is None:
        raise InvalidStateTransition(_STATE_ERRORS[action])
    return transition
