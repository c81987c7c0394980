"""Value objects shared between the API and the lifecycle service."""

from __future__ import annotations

from dataclasses import dataclass

from .enums import UserRole


@dataclass(frozen=True)
class Actor:
    """The authenticated caller, as asserted by a verified token."""

    id: int
    role: UserRole
    name: str = ""
