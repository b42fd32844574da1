"""
Rate limiting utilities for route handlers.

Provides standardized rate limit key functions.
"""

from quart import request

from common.utils.jwt_utils import (
    TokenExpiredError,
    TokenValidationError,
    get_user_id_from_header,
)


async def default_rate_limit_key() -> str:
    """
    Generate rate limit key based on client IP address.

    Returns:
        str: Client IP address or "unknown" if not available

    Example:
        >>> @rate_limit(100, timedelta(minutes=1), key_function=default_rate_limit_key)
        >>> async def my_endpoint():
        >>>     pass
    """
    return request.remote_addr or "unknown"


async def user_rate_limit_key() -> str:
    """
    Generate rate limit key based on the token subject.

    Falls back to IP-based limiting when the request carries no valid token,
    so unauthenticated callers still share a bucket per address.

    Returns:
        str: "user:<id>" or the client IP address
    """
    try:
        return f"user:{get_user_id_from_header(request.headers.get('Authorization', ''))}"
    except (TokenExpiredError, TokenValidationError):
        return await default_rate_limit_key()
