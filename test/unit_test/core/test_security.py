"""Unit tests for password hashing and JWT helpers."""

from datetime import datetime, timedelta, timezone

import jwt as py_jwt
import pytest

from studentos.core.security import (
    TokenError,
    create_access_token,
    create_refresh_token,
    decode_access_token,
    decode_refresh_token,
    hash_password,
    verify_password,
)
from studentos.server.core.config import settings


class TestPasswords:
    def test_hash_and_verify(self):
        password_hash = hash_password("Str0ng!Password")
        assert password_hash != "Str0ng!Password"
        assert password_hash.startswith("$2b$")
        assert verify_password("Str0ng!Password", password_hash) is True
        assert verify_password("wrong", password_hash) is False

    @pytest.mark.parametrize("stored", [None, ""])
    def test_passwordless_account_never_matches(self, stored):
        assert verify_password("anything", stored) is False

    def test_unparseable_hash(self):
        assert verify_password("anything", "not-a-bcrypt-hash") is False


class TestAccessTokens:
    def test_round_trip_claims(self):
        token = create_access_token("user-1", "a@studentos.com", "STUDENT")
        claims = decode_access_token(token)
        assert (claims.user_id, claims.email, claims.role) == ("user-1", "a@studentos.com", "STUDENT")

    def test_lifetime(self):
        token = create_access_token("user-1", "a@studentos.com", "STUDENT")
        payload = py_jwt.decode(token, options={"verify_signature": False})
        assert payload["exp"] - payload["iat"] == settings.jwt.expires_in_minutes * 60

    def test_expired(self):
        past = datetime.now(timezone.utc) - timedelta(hours=1)
        token = py_jwt.encode(
            {"userId": "u", "email": "e", "role": "STUDENT", "iat": past, "exp": past + timedelta(minutes=1)},
            settings.jwt.secret,
            algorithm="HS256",
        )
        with pytest.raises(TokenError, match="Token expired"):
            decode_access_token(token)

    def test_wrong_secret(self):
        token = py_jwt.encode({"userId": "u", "email": "e", "role": "STUDENT"}, "other-secret", algorithm="HS256")
        with pytest.raises(TokenError, match="Invalid token"):
            decode_access_token(token)

    def test_missing_claims(self):
        token = py_jwt.encode({"userId": "u"}, settings.jwt.secret, algorithm="HS256")
        with pytest.raises(TokenError):
            decode_access_token(token)

    def test_refresh_token_is_not_an_access_token(self):
        token, _ = create_refresh_token("user-1")
        with pytest.raises(TokenError):
            decode_access_token(token)


class TestRefreshTokens:
    def test_round_trip(self):
        token, expires_at = create_refresh_token("user-1")
        assert decode_refresh_token(token) == "user-1"
        assert expires_at.tzinfo is not None
        remaining = expires_at - datetime.now(timezone.utc)
        assert timedelta(days=settings.jwt.refresh_ttl_days - 1) < remaining <= timedelta(
            days=settings.jwt.refresh_ttl_days
        )

    def test_tokens_are_unique(self):
        assert create_refresh_token("user-1")[0] != create_refresh_token("user-1")[0]

    def test_access_token_rejected(self):
        with pytest.raises(TokenError, match="Invalid refresh token"):
            decode_refresh_token(create_access_token("user-1", "a@studentos.com", "STUDENT"))
