"""Middleware module."""

from app.middleware.rate_limit import limiter, RateLimitExceeded, rate_limit_login
from app.middleware.security_headers import SecurityHeadersMiddleware

__all__ = ["limiter", "RateLimitExceeded", "rate_limit_login", "SecurityHeadersMiddleware"]
