"""Password hashing and access token helpers."""

import logging
from datetime import datetime, timedelta, timezone

import bcrypt
from jose import jwt

from app.config import get_settings

logger = logging.getLogger(__name__)

# bcrypt only hashes the first 72 bytes and rejects longer input
MAX_PASSWORD_BYTES = 72


class PasswordTooLongError(ValueError):
    """Raised for a password bcrypt cannot hash."""


def _password_bytes(password: str) -> bytes:
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        raise PasswordTooLongError(f"Password cannot be longer than {MAX_PASSWORD_BYTES} bytes")
    return encoded


def hash_password(password: str) -> str:
    """Hash a password with bcrypt using the configured cost factor.

    Raises:
        PasswordTooLongError: If the password exceeds MAX_PASSWORD_BYTES
    """
    settings = get_settings()
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plaintext password against a stored bcrypt hash."""
    try:
        candidate = _password_bytes(password)
    except PasswordTooLongError:
        # No stored hash can match; accounts are created through hash_password
        logger.debug("Rejected password longer than bcrypt accepts")
        return False

    try:
        return bcrypt.checkpw(candidate, password_hash.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash could not be parsed")
        return False


def create_access_token(user_id: str, username: str, role: str) -> str:
    """Sign an access token for an account.

    Args:
        user_id: Account identifier
        username: Login name
        role: Account role

    Returns:
        Encoded JWT
    """
    settings = get_settings()
    now = datetime.now(timezone.utc)
    claims = {
        "sub": user_id,
        "id": user_id,
        "username": username,
        "role": role,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(hours=settings.jwt_expire_hours)).timestamp()),
    }
    return jwt.encode(claims, settings.signing_secret, algorithm=settings.jwt_algorithm)
