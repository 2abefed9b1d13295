"""Authentication dependencies for FastAPI.

Provides dependency injection for route protection:
- get_current_user: Requires valid JWT, returns User
- get_editor_user: Requires a role allowed to change inventory
"""

import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError, ExpiredSignatureError
from pydantic import ValidationError

from app.config import get_settings
from app.auth.models import User, TokenPayload

logger = logging.getLogger(__name__)

# HTTP Bearer token scheme for Swagger UI
security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def decode_jwt(token: str) -> TokenPayload:
    """Decode and validate an access token.

    Args:
        token: JWT access token from Authorization header

    Returns:
        TokenPayload with account claims

    Raises:
        HTTPException: If token is invalid or expired
    """
    settings = get_settings()

    try:
        payload = jwt.decode(
            token,
            settings.signing_secret,
            algorithms=[settings.jwt_algorithm],
        )
        return TokenPayload(**payload)

    except ExpiredSignatureError:
        logger.debug("JWT token expired")
        raise _unauthorized("Token has expired")
    except (JWTError, ValidationError) as e:
        logger.debug(f"JWT validation failed: {e}")
        raise _unauthorized("Invalid or expired token")


async def get_token_payload(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> TokenPayload:
    """Decoded claims of the bearer token.

    Raises:
        HTTPException 401: If no token provided or token is invalid
    """
    if not credentials:
        raise _unauthorized("Access token required")
    return decode_jwt(credentials.credentials)


async def get_current_user(
    payload: TokenPayload = Depends(get_token_payload),
) -> User:
    """Get the current authenticated user from JWT token.

    Use this for endpoints any signed-in role may call.
    """
    return User(id=payload.id, username=payload.username, role=payload.role)


async def get_editor_user(user: User = Depends(get_current_user)) -> User:
    """Require a role that may create, change or delete products.

    Raises:
        HTTPException 403: If the user is a viewer
    """
    if not user.can_edit:
        logger.info(f"Denied write access to {user.username} ({user.role})")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Insufficient permissions",
        )
    return user
