"""Rate limiting middleware.

Uses slowapi to throttle credential guessing on the login endpoint.
"""

import logging
from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from app.config import get_settings

logger = logging.getLogger(__name__)


# Login is unauthenticated, so clients are keyed by address
limiter = Limiter(key_func=get_remote_address)


def login_rate_limit() -> str:
    """Rate limit string for the login endpoint, read at request time."""
    return f"{get_settings().rate_limit_login_per_minute}/minute"


rate_limit_login = limiter.limit(login_rate_limit)


__all__ = ["limiter", "RateLimitExceeded", "rate_limit_login", "login_rate_limit"]
