"""Unit tests for bearer-token verification."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest
from fastapi import HTTPException

from src.api.security import create_access_token, decode_access_token
from src.config import settings
from src.domain.enums import UserRole


class TestAccessTokens:
    def test_round_trip_identity(self):
        token = create_access_token(7, UserRole.DRIVER, "Dev")
        actor = decode_access_token(token)
        assert actor.id == 7
        assert actor.role == UserRole.DRIVER
        assert actor.name == "Dev"

    def test_wrong_secret_rejected(self):
        token = jwt.encode(
            {"sub": "1", "role": "admin"}, "another-secret-of-sufficient-length!", algorithm="HS256"
        )
        with pytest.raises(HTTPException) as exc:
            decode_access_token(token)
        assert exc.value.status_code == 401

    def test_expired_token_rejected(self):
        token = jwt.encode(
            {
                "sub": "1",
                "role": "user",
                "exp": datetime.now(timezone.utc) - timedelta(minutes=1),
            },
            settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
        )
        with pytest.raises(HTTPException):
            decode_access_token(token)

    def test_unknown_role_rejected(self):
        token = jwt.encode(
            {"sub": "1", "role": "superuser"},
            settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
        )
        with pytest.raises(HTTPException):
            decode_access_token(token)

    def test_missing_subject_rejected(self):
        token = jwt.encode(
            {"role": "user"}, settings.jwt_secret, algorithm=settings.jwt_algorithm
        )
        with pytest.raises(HTTPException):
            decode_access_token(token)

    def test_expiry_claim_added_when_requested(self):
        token = create_access_token(1, UserRole.USER, expires_minutes=5)
        claims = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
        assert "exp" in claims
