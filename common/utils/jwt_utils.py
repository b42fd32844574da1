"""
JWT Token Utilities for the chat history API.

Session issuance lives in the identity provider; this module only validates
the bearer tokens it issues and extracts the owner ID from them. Tokens are
signed with a shared secret (AUTH_SECRET_KEY).
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError

from common.config import config

logger = logging.getLogger(__name__)


class JWTConfig:
    """JWT configuration from environment variables."""

    def __init__(self):
        self.secret_key = config.AUTH_SECRET_KEY
        self.algorithm = config.AUTH_ALGORITHM
        self.user_token_expiry_hours = 24  # 24 hours for user tokens

        if self.secret_key == "dev-secret-key-change-in-production":
            logger.warning(
                "Using default AUTH_SECRET_KEY! "
                "Set AUTH_SECRET_KEY environment variable in production!"
            )


_config = JWTConfig()


class TokenValidationError(Exception):
    """Raised when token validation fails."""

    pass


class TokenExpiredError(Exception):
    """Raised when token has expired."""

    pass


def generate_user_token(user_id: str, expiry_hours: Optional[int] = None) -> str:
    """
    Generate a JWT token for a user.

    Used by local tooling and tests; production tokens come from the
    identity provider.

    Args:
        user_id: The user's unique identifier
        expiry_hours: Token expiry in hours (default: 24)

    Returns:
        str: JWT token string
    """
    now = datetime.now(timezone.utc)
    expiry = now + timedelta(hours=expiry_hours or _config.user_token_expiry_hours)

    payload = {
        "sub": user_id,
        "iat": now,
        "exp": expiry,
    }

    token = jwt.encode(payload, _config.secret_key, algorithm=_config.algorithm)

    logger.info(f"Generated user token for {user_id}")

    return token


def validate_token(token: str) -> dict:
    """
    Validate a JWT token and return its payload.

    Args:
        token: JWT token string

    Returns:
        dict: Decoded token payload

    Raises:
        TokenExpiredError: If token has expired
        TokenValidationError: If token is invalid
    """
    try:
        return jwt.decode(token, _config.secret_key, algorithms=[_config.algorithm])

    except ExpiredSignatureError:
        logger.warning("Token has expired")
        raise TokenExpiredError("Token has expired")

    except InvalidTokenError as e:
        logger.warning(f"Invalid token: {e}")
        raise TokenValidationError(f"Invalid token: {e}")


def extract_bearer_token(auth_header: str) -> str:
    """
    Extract the token from an Authorization header.

    Args:
        auth_header: Authorization header value (e.g., "Bearer <token>")

    Returns:
        str: The extracted token

    Raises:
        TokenValidationError: If header format is invalid
    """
    if not auth_header:
        raise TokenValidationError("Missing Authorization header")

    parts = auth_header.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise TokenValidationError("Invalid Authorization header format")

    return parts[1]


def get_user_id_from_token(token: str) -> str:
    """
    Extract the user ID from a validated JWT token.

    Raises:
        TokenValidationError: If token is invalid or has no subject
        TokenExpiredError: If token has expired
    """
    payload = validate_token(token)
    user_id = payload.get("sub")

    if not user_id:
        raise TokenValidationError("Token missing user_id")

    return user_id


def get_user_id_from_header(auth_header: str) -> str:
    """
    Extract the user ID from an Authorization header.

    Raises:
        TokenValidationError: If header or token is invalid
        TokenExpiredError: If token has expired
    """
    token = extract_bearer_token(auth_header)
    return get_user_id_from_token(token)
