"""Authentication models."""

from enum import Enum
from pydantic import BaseModel, Field
from typing import Optional


class Role(str, Enum):
    """Account roles.

    ``viewer`` is read-only; every other role may change inventory.
    """

    ADMIN = "admin"
    USER = "user"
    VIEWER = "viewer"


READ_ONLY_ROLES = {Role.VIEWER.value}


class User(BaseModel):
    """Authenticated principal, built from token claims."""

    id: str = Field(..., description="Account identifier")
    username: str = Field(..., description="Login name")
    role: str = Field(default=Role.USER.value, description="Account role")

    @property
    def can_edit(self) -> bool:
        return self.role not in READ_ONLY_ROLES


class TokenPayload(BaseModel):
    """Claims carried by an access token."""

    sub: str = Field(..., description="Subject (account id)")
    id: str = Field(..., description="Account id")
    username: str
    role: str
    exp: int = Field(..., description="Expiration timestamp")
    iat: Optional[int] = None


class LoginRequest(BaseModel):
    """Request model for login.

    Both fields are optional at the schema level so that a missing value
    gets the same 400 answer as an empty one.
    """

    username: Optional[str] = Field(None, description="Login name")
    password: Optional[str] = Field(None, description="Account password")


class UserResponse(BaseModel):
    """Public view of an account."""

    id: str
    username: str
    name: str
    role: str


class AccountResponse(UserResponse):
    """Account details including timestamps."""

    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class AuthResponse(BaseModel):
    """Response model for login."""

    token: str = Field(..., description="Bearer access token")
    user: UserResponse = Field(..., description="Authenticated account")


class VerifyResponse(BaseModel):
    """Response model for token verification."""

    valid: bool = True
    user: TokenPayload
