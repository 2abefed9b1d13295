"""Tests for password hashing, token helpers and settings."""

import pytest
from fastapi import HTTPException
from jose import jwt

from app.auth.dependencies import decode_jwt
from app.auth.models import User
from app.auth.security import (
    MAX_PASSWORD_BYTES,
    PasswordTooLongError,
    create_access_token,
    hash_password,
    verify_password,
)
from app.config import DEV_JWT_SECRET, Settings, get_settings


class TestPasswords:
    """Tests for bcrypt helpers."""

    def test_hash_roundtrip(self):
        hashed = hash_password("s3cret")

        assert hashed.startswith("$2")
        assert verify_password("s3cret", hashed)
        assert not verify_password("S3cret", hashed)

    def test_salted(self):
        assert hash_password("same") != hash_password("same")

    def test_uses_configured_rounds(self):
        assert hash_password("x").split("$")[2] == "04"

    def test_malformed_hash(self):
        assert verify_password("anything", "not-a-bcrypt-hash") is False

    def test_longest_password_accepted(self):
        password = "x" * MAX_PASSWORD_BYTES

        assert verify_password(password, hash_password(password))

    def test_overlong_password_cannot_be_hashed(self):
        with pytest.raises(PasswordTooLongError):
            hash_password("x" * (MAX_PASSWORD_BYTES + 1))

    def test_limit_counts_bytes(self):
        with pytest.raises(PasswordTooLongError):
            hash_password("é" * 37)

    def test_overlong_password_never_verifies(self, caplog):
        stored = hash_password("x" * MAX_PASSWORD_BYTES)

        assert verify_password("x" * 80, stored) is False
        assert "could not be parsed" not in caplog.text


class TestTokens:
    """Tests for access token creation and decoding."""

    def test_claims(self):
        token = create_access_token("u-1", "dana", "viewer")

        claims = jwt.decode(token, "test-secret", algorithms=["HS256"])

        assert claims["sub"] == "u-1"
        assert claims["id"] == "u-1"
        assert claims["username"] == "dana"
        assert claims["role"] == "viewer"
        assert claims["exp"] - claims["iat"] == 24 * 3600

    def test_expiry_follows_settings(self, monkeypatch):
        monkeypatch.setenv("JWT_EXPIRE_HOURS", "1")
        get_settings.cache_clear()

        payload = decode_jwt(create_access_token("u-1", "dana", "admin"))

        assert payload.exp - payload.iat == 3600

    def test_decode_rejects_tampering(self):
        token = create_access_token("u-1", "dana", "viewer")
        header, body, signature = token.split(".")
        forged = ".".join([header, body, signature[::-1]])

        with pytest.raises(HTTPException) as exc_info:
            decode_jwt(forged)

        assert exc_info.value.status_code == 401


class TestUserRoles:
    """Tests for User.can_edit."""

    @pytest.mark.parametrize("role, allowed", [
        ("admin", True),
        ("user", True),
        ("viewer", False),
        ("warehouse", True),
    ])
    def test_can_edit(self, role, allowed):
        assert User(id="1", username="x", role=role).can_edit is allowed


class TestSettings:
    """Tests for Settings."""

    def test_postgres_detection(self):
        assert Settings(database_url="postgresql://db/inventory").use_postgres
        assert Settings(database_url="postgres://db/inventory").use_postgres
        assert not Settings(database_url="").use_postgres
        assert not Settings(database_url="mysql://db/inventory").use_postgres

    def test_cors_origin_list(self):
        settings = Settings(cors_origins="https://a.example, https://b.example,")

        assert settings.cors_origin_list == ["https://a.example", "https://b.example"]

    def test_development_secret_fallback(self):
        settings = Settings(jwt_secret="", app_env="development")

        assert settings.signing_secret == DEV_JWT_SECRET

    def test_production_requires_secret(self):
        settings = Settings(jwt_secret="", app_env="production")

        with pytest.raises(ValueError):
            settings.signing_secret
