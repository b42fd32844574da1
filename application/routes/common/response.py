"""
Response utilities for standardized API responses.

Provides consistent response formatting across all routes.
"""

from typing import Any, Dict, Tuple

from quart import Response, jsonify

from common.exception import ChatHistoryError


class APIResponse:
    """
    Standardized API response helper.

    Error bodies always have the shape
    ``{"error": message, "error_code": code, "details": ...}``.
    """

    @staticmethod
    def success(data: Any, status: int = 200) -> Tuple[Response, int]:
        """
        Create a successful response.

        Args:
            data: Response data (dict, list, or serializable object)
            status: HTTP status code (default: 200)

        Returns:
            tuple: (Response object, status code)

        Example:
            >>> return APIResponse.success({"chats": [], "hasMore": False})
            >>> return APIResponse.success({"chat": chat.to_api_dict()}, 201)
        """
        return jsonify(data), status

    @staticmethod
    def error(
        message: str,
        status: int = 400,
        details: Any = None,
        error_code: str = None,
    ) -> Tuple[Response, int]:
        """
        Create an error response.

        Args:
            message: Error message
            status: HTTP status code (default: 400)
            details: Additional error details (optional)
            error_code: ``<type>:<surface>`` code for client-side handling (optional)

        Returns:
            tuple: (Response object, status code)

        Example:
            >>> return APIResponse.error("Invalid request", 400)
            >>> return APIResponse.error("Validation failed", 400, details=validation_errors)
        """
        error_data: Dict[str, Any] = {"error": message}
        if error_code is not None:
            error_data["error_code"] = error_code
        if details is not None:
            error_data["details"] = details
        return jsonify(error_data), status

    @staticmethod
    def from_exception(error: ChatHistoryError) -> Tuple[Response, int]:
        """
        Create an error response from a ChatHistoryError.

        Example:
            >>> except ChatHistoryError as e:
            >>>     return APIResponse.from_exception(e)
        """
        return APIResponse.error(
            error.message,
            error.status_code,
            details=error.cause,
            error_code=error.error_code,
        )

    @staticmethod
    def not_found(resource: str = "Resource") -> Tuple[Response, int]:
        """
        Create a 404 Not Found response.

        Example:
            >>> return APIResponse.not_found("Endpoint")
        """
        return APIResponse.error(f"{resource} not found", 404)

    @staticmethod
    def unauthorized(message: str = "Unauthorized") -> Tuple[Response, int]:
        """
        Create a 401 Unauthorized response.

        Example:
            >>> return APIResponse.unauthorized("Token has expired")
        """
        return APIResponse.error(message, 401, error_code="unauthorized:auth")

    @staticmethod
    def internal_error(message: str = "Internal server error") -> Tuple[Response, int]:
        """
        Create a 500 Internal Server Error response.

        Example:
            >>> return APIResponse.internal_error()
        """
        return APIResponse.error(message, 500)
