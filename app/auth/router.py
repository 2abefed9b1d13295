"""Authentication router.

Provides endpoints for user authentication:
- POST /api/auth/login - Exchange username/password for a bearer token
- GET /api/auth/verify - Check a token and echo its claims
- GET /api/auth/me - Get the stored account behind a token
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Request, status, Depends

from app.auth.models import (
    LoginRequest,
    AuthResponse,
    VerifyResponse,
    AccountResponse,
    UserResponse,
    TokenPayload,
    User,
)
from app.auth.dependencies import get_current_user, get_token_payload
from app.auth.security import create_access_token, verify_password
from app.middleware.rate_limit import rate_limit_login
from app.storage.user_store import get_user_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Login with username and password",
    description="Authenticate an account and return a bearer token.",
)
@rate_limit_login
async def login(request: Request, credentials: Optional[LoginRequest] = None):
    """Login user against the stored bcrypt hash."""
    if not credentials or not credentials.username or not credentials.password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username and password are required",
        )

    try:
        account = await get_user_store().get_by_username(credentials.username)
    except Exception as e:
        logger.error(f"Login error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error during login",
        )

    # Same answer for unknown user and wrong password
    if not account or not verify_password(credentials.password, account.password_hash):
        logger.warning(f"Failed login for username: {credentials.username}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
        )

    token = create_access_token(account.id, account.username, account.role)
    logger.info(f"User logged in: {account.username} ({account.role})")

    return AuthResponse(
        token=token,
        user=UserResponse(
            id=account.id,
            username=account.username,
            name=account.name,
            role=account.role,
        ),
    )


@router.get(
    "/verify",
    response_model=VerifyResponse,
    summary="Verify token",
    description="Check that the bearer token is valid and return its claims.",
)
async def verify(payload: TokenPayload = Depends(get_token_payload)):
    """Verify the current token."""
    return VerifyResponse(valid=True, user=payload)


@router.get(
    "/me",
    response_model=AccountResponse,
    summary="Get current account",
    description="Get the stored account of the authenticated user.",
)
async def get_me(user: User = Depends(get_current_user)):
    """Get current authenticated account info."""
    try:
        account = await get_user_store().get_by_id(user.id)
    except Exception as e:
        logger.error(f"Error fetching account {user.id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error fetching account",
        )

    if not account:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Account no longer exists",
        )

    return AccountResponse(
        id=account.id,
        username=account.username,
        name=account.name,
        role=account.role,
        created_at=account.created_at,
        updated_at=account.updated_at,
    )
