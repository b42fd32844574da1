"""
Validation utilities for route handlers.

Provides a decorator for automatic request body validation using Pydantic models.
"""

import logging
from functools import wraps
from typing import Type, TypeVar

from pydantic import BaseModel, ValidationError
from quart import request

from application.routes.common.error_handlers import validation_errors
from application.routes.common.response import APIResponse

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


def validate_json(model: Type[T]):
    """
    Decorator to validate JSON request body against Pydantic model.

    Automatically parses and validates the request body, making validated
    data available via request.validated_data attribute.

    Args:
        model: Pydantic model class for validation

    Returns:
        Decorated function with automatic validation

    Example:
        >>> @validate_json(UpdateVisibilityRequest)
        >>> async def update_visibility(chat_id):
        >>>     data = request.validated_data
        >>>     # data is now a validated UpdateVisibilityRequest instance

    Validation errors are returned as 400 Bad Request with detailed error
    messages.
    """

    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            json_data = await request.get_json(silent=True)

            if not isinstance(json_data, dict):
                return APIResponse.error(
                    "Request body required",
                    400,
                    details={"expected": "application/json object"},
                    error_code="bad_request:api",
                )

            try:
                request.validated_data = model(**json_data)
            except ValidationError as e:
                errors = validation_errors(e)
                logger.warning(f"Validation error in {func.__name__}: {errors}")
                return APIResponse.error(
                    "Validation failed",
                    400,
                    details={"errors": errors},
                    error_code="bad_request:api",
                )

            return await func(*args, **kwargs)

        return wrapper

    return decorator
