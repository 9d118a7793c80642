"""
Authentication I/O models.

Request payloads for registration, login, token refresh and account changes,
and the response shapes returned with issued tokens.
"""

from __future__ import annotations

import re
from typing import Optional

from pydantic import EmailStr, Field, field_validator

from .base import CamelModel
from .profiles import ProfileRead

PASSWORD_RULES = (
    (re.compile(r"[A-Z]"), "Password must contain at least one uppercase letter"),
    (re.compile(r"[0-9]"), "Password must contain at least one number"),
    (re.compile(r"[^A-Za-z0-9]"), "Password must contain at least one special character"),
)


def check_password_policy(password: str) -> str:
    """Validate a new password: at least 10 characters with an uppercase letter, a digit and a symbol."""
    if len(password) < 10:
        raise ValueError("Password must be at least 10 characters")
    for pattern, message in PASSWORD_RULES:
        if not pattern.search(password):
            raise ValueError(message)
    return password


class RegisterRequest(CamelModel):
    email: EmailStr
    password: str
    full_name: str = Field(min_length=2)

    password_policy = field_validator("password")(check_password_policy)


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1)


class RefreshRequest(CamelModel):
    refresh_token: Optional[str] = None


class LogoutRequest(CamelModel):
    refresh_token: Optional[str] = None


class ChangePasswordRequest(CamelModel):
    current_password: str = Field(min_length=1)
    new_password: str

    password_policy = field_validator("new_password")(check_password_policy)


class UpdateEmailRequest(CamelModel):
    new_email: EmailStr
    password: str = Field(min_length=1)


class GoogleCallbackRequest(CamelModel):
    """Supabase session handed over by the frontend after Google sign-in."""

    supabase_access_token: str = Field(min_length=1)
    email: EmailStr
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    provider_id: Optional[str] = None


class UserSummary(CamelModel):
    id: str
    email: str
    role: str
    profile: Optional[ProfileRead] = None


class TokenPair(CamelModel):
    access_token: str
    refresh_token: str


class AuthResponse(TokenPair):
    user: UserSummary


class GoogleAuthResponse(AuthResponse):
    is_new_user: bool
