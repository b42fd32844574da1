"""
Authentication utilities for route handlers.

Centralizes JWT token validation and user ID extraction. The owner of a
chat history is always the token subject, never a client-supplied value.
"""

import logging

from quart import request

from common.utils.jwt_utils import (
    TokenExpiredError,
    TokenValidationError,
    get_user_id_from_header,
)

logger = logging.getLogger(__name__)


async def get_authenticated_user() -> str:
    """
    Extract the user ID from the JWT in the Authorization header.

    Returns:
        str: The ``sub`` claim of the validated token

    Raises:
        TokenExpiredError: If token has expired
        TokenValidationError: If the header is missing or the token is invalid

    Example:
        >>> user_id = await get_authenticated_user()
    """
    auth_header = request.headers.get("Authorization", "")

    try:
        return get_user_id_from_header(auth_header)

    except TokenExpiredError:
        logger.warning("Token has expired")
        raise

    except TokenValidationError as e:
        logger.warning(f"Invalid token: {e}")
        raise
