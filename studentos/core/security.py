"""
Password hashing and token helpers.

Passwords are hashed with bcrypt through passlib. Access tokens are short-lived
HS256 JWTs carrying ``userId``, ``email`` and ``role``. Refresh tokens are
HS256 JWTs signed with a distinct secret; they are also persisted so they can
be revoked.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import jwt as py_jwt
from passlib.context import CryptContext

from studentos.core.logging_config import get_logger
from studentos.server.core.config import settings

logger = get_logger(__name__)

password_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)


class TokenError(Exception):
    """Raised when a token cannot be decoded or verified."""


@dataclass(frozen=True)
class AccessTokenClaims:
    user_id: str
    email: str
    role: str


def hash_password(password: str) -> str:
    return password_context.hash(password)


def verify_password(password: str, password_hash: Optional[str]) -> bool:
    """Check a password against a stored hash. Password-less accounts never match."""
    if not password_hash:
        return False
    try:
        return password_context.verify(password, password_hash)
    except ValueError:
        logger.warning("Stored password hash could not be parsed")
        return False


def create_access_token(user_id: str, email: str, role: str) -> str:
    """Sign an access token for the given account."""
    jwt_config = settings.jwt
    now = datetime.now(timezone.utc)
    payload: dict[str, Any] = {
        "userId": user_id,
        "email": email,
        "role": role,
        "iat": now,
        "exp": now + timedelta(minutes=jwt_config.expires_in_minutes),
    }
    return py_jwt.encode(payload, jwt_config.secret, algorithm=jwt_config.algorithm)


def decode_access_token(token: str) -> AccessTokenClaims:
    """Verify an access token and return its claims.

    Raises:
        TokenError: if the signature is invalid, the token expired or claims are missing
    """
    jwt_config = settings.jwt
    try:
        data: dict[str, Any] = py_jwt.decode(token, jwt_config.secret, algorithms=[jwt_config.algorithm])
    except py_jwt.ExpiredSignatureError as exc:
        raise TokenError("Token expired") from exc
    except py_jwt.InvalidTokenError as exc:
        raise TokenError("Invalid token") from exc

    try:
        return AccessTokenClaims(user_id=data["userId"], email=data["email"], role=data["role"])
    except KeyError as exc:
        raise TokenError("Invalid token") from exc


def create_refresh_token(user_id: str) -> tuple[str, datetime]:
    """Sign a refresh token.

    Returns:
        The encoded token and its aware UTC expiry, used when persisting it.
    """
    jwt_config = settings.jwt
    now = datetime.now(timezone.utc)
    expires_at = now + timedelta(days=jwt_config.refresh_ttl_days)
    payload = {
        "userId": user_id,
        # Two tokens issued in the same second must still differ.
        "jti": uuid.uuid4().hex,
        "iat": now,
        "exp": expires_at,
    }
    token = py_jwt.encode(payload, jwt_config.refresh_secret, algorithm=jwt_config.algorithm)
    return token, expires_at


def decode_refresh_token(token: str) -> str:
    """Verify a refresh token signature and expiry and return its user id.

    Raises:
        TokenError: if the token is invalid or expired
    """
    jwt_config = settings.jwt
    try:
        data = py_jwt.decode(token, jwt_config.refresh_secret, algorithms=[jwt_config.algorithm])
    except py_jwt.InvalidTokenError as exc:
        raise TokenError("Invalid refresh token") from exc
    user_id = data.get("userId")
    if not user_id:
        raise TokenError("Invalid refresh token")
    return user_id
