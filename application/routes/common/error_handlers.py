"""
Centralized error handling middleware.

Provides consistent error handling across all routes with automatic
error logging and standardized response format.
"""

import logging
from typing import Any, Dict, List

from pydantic import ValidationError
from quart import Quart
from werkzeug.exceptions import HTTPException

from application.routes.common.response import APIResponse
from common.exception import ChatHistoryError
from common.utils.jwt_utils import TokenExpiredError, TokenValidationError

logger = logging.getLogger(__name__)


def validation_errors(error: ValidationError) -> List[Dict[str, Any]]:
    """Flatten pydantic validation errors to field/message pairs."""
    errors = []
    for err in error.errors():
        field = " -> ".join(str(loc) for loc in err["loc"])
        errors.append({"field": field, "message": err["msg"], "type": err["type"]})
    return errors


def register_error_handlers(app: Quart) -> None:
    """
    Register centralized error handlers for the application.

    Handles:
    - ChatHistoryError → its own status code and error code
    - ValidationError (Pydantic) → 400 Bad Request
    - TokenExpiredError → 401 Unauthorized
    - TokenValidationError → 401 Unauthorized
    - HTTPException (Werkzeug) → Appropriate status
    - Exception (Generic) → 500 Internal Server Error

    Args:
        app: Quart application instance

    Example:
        >>> from quart import Quart
        >>> app = Quart(__name__)
        >>> register_error_handlers(app)
    """

    @app.errorhandler(ChatHistoryError)
    async def handle_chat_history_error(error: ChatHistoryError):
        if error.status_code >= 500:
            logger.error(f"{error.error_code}: {error}")
        else:
            logger.warning(f"{error.error_code}: {error}")
        return APIResponse.from_exception(error)

    @app.errorhandler(ValidationError)
    async def handle_validation_error(error: ValidationError):
        """
        Handle Pydantic validation errors.

        Returns 400 Bad Request with detailed validation errors.
        """
        errors = validation_errors(error)
        logger.warning(f"Validation error: {errors}")
        return APIResponse.error(
            "Validation failed", 400, details={"errors": errors}, error_code="bad_request:api"
        )

    @app.errorhandler(TokenExpiredError)
    async def handle_token_expired(error: TokenExpiredError):
        logger.warning(f"Token expired: {error}")
        return APIResponse.unauthorized("Token has expired")

    @app.errorhandler(TokenValidationError)
    async def handle_token_invalid(error: TokenValidationError):
        logger.warning(f"Invalid token: {error}")
        return APIResponse.unauthorized("Invalid or malformed token")

    @app.errorhandler(HTTPException)
    async def handle_http_exception(error: HTTPException):
        """
        Handle Werkzeug HTTP exceptions.

        Preserves the original HTTP status code.
        """
        logger.info(f"HTTP exception: {error.code} - {error.description}")
        return APIResponse.error(error.name, error.code, details=error.description)

    @app.errorhandler(404)
    async def handle_not_found(error):
        return APIResponse.not_found("Endpoint")

    @app.errorhandler(405)
    async def handle_method_not_allowed(error):
        return APIResponse.error("Method not allowed", 405)

    @app.errorhandler(Exception)
    async def handle_generic_exception(error: Exception):
        """
        Handle all uncaught exceptions.

        Returns 500 Internal Server Error.
        Logs full stack trace for debugging.
        """
        logger.exception(f"Unhandled exception: {error}")

        # In production, hide implementation details
        return APIResponse.internal_error("An unexpected error occurred")
