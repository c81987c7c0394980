"""
Signed-token verification.

Tokens are HS256 JWTs carrying ``sub`` (user id), ``role`` and ``name``.
Issuing tokens belongs to the identity provider; ``create_access_token``
exists for the seed script and tests.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import jwt
from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.config import settings
from src.domain.entities import Actor
from src.domain.enums import UserRole
from src.domain.exceptions import AuthorizationDenied

_bearer = HTTPBearer(auto_error=False)


def create_access_token(
    user_id: int,
    role: UserRole,
    name: str = "",
    expires_minutes: Optional[int] = None,
) -> str:
    claims = {"sub": str(user_id), "role": UserRole(role).value, "name": name}
    minutes = expires_minutes or settings.jwt_expire_minutes
    if minutes:
        claims["exp"] = datetime.now(timezone.utc) + timedelta(minutes=minutes)
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> Actor:
    """Verify *token* and return the caller it asserts; 401 on any failure."""
    try:
        claims = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
        return Actor(
            id=int(claims["sub"]),
            role=UserRole(claims["role"]),
            name=claims.get("name", ""),
        )
    except (jwt.PyJWTError, KeyError, ValueError):
        raise HTTPException(
            status_code=401,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )


async def get_current_actor(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
) -> Actor:
    if credentials is None:
        raise HTTPException(
            status_code=401,
            detail="No token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return decode_access_token(credentials.credentials)


def require_roles(*roles: UserRole) -> Callable:
    """Dependency factory: authenticated caller whose role is in *roles*."""

    async def _checker(actor: Actor = Depends(get_current_actor)) -> Actor:
        if actor.role not in roles:
            raise AuthorizationDenied("Access denied for this role")
        return actor

    return _checker
