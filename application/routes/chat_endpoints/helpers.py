"""Shared helper functions for chat endpoints."""

import logging

from application.routes.common.response import APIResponse
from application.services.chat import ChatService
from application.services.service_factory import get_service_factory
from common.exception import ChatHistoryError
from common.utils.jwt_utils import TokenExpiredError, TokenValidationError

logger = logging.getLogger(__name__)


def get_chat_service() -> ChatService:
    """Get ChatService instance."""
    return get_service_factory().chat_service


def handle_route_error(error: Exception, operation: str):
    """Convert an exception raised by a chat endpoint into an API response."""
    if isinstance(error, ChatHistoryError):
        logger.warning(f"{operation} failed with {error.error_code}: {error}")
        return APIResponse.from_exception(error)
    if isinstance(error, TokenExpiredError):
        logger.warning(f"Token expired in {operation}")
        return APIResponse.unauthorized("Token has expired")
    if isinstance(error, TokenValidationError):
        logger.warning(f"Token validation failed in {operation}: {error}")
        return APIResponse.unauthorized("Invalid token")

    logger.exception(f"Error in {operation}: {error}")
    return APIResponse.internal_error()
