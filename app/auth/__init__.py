"""Authentication module.

Provides bcrypt password checks and JWT bearer tokens with a read-only
``viewer`` role. The HTTP endpoints live in ``app.auth.router``.
"""

from app.auth.dependencies import (
    get_current_user,
    get_editor_user,
    get_token_payload,
)
from app.auth.models import User, Role, TokenPayload, AuthResponse

__all__ = [
    "get_current_user",
    "get_editor_user",
    "get_token_payload",
    "User",
    "Role",
    "TokenPayload",
    "AuthResponse",
]
