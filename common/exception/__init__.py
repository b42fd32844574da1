"""
Exception hierarchy for chat history operations.

Every error carries an ``error_code`` of the form ``<type>:<surface>`` and the
HTTP status it maps to. Errors are scoped to the operation that raised them.
"""

from typing import Optional

STATUS_BY_TYPE = {
    "bad_request": 400,
    "unauthorized": 401,
    "forbidden": 403,
    "not_found": 404,
    "rate_limit": 429,
    "offline": 503,
}

DEFAULT_MESSAGES = {
    "bad_request:api": "The request couldn't be processed. Please check your input and try again.",
    "unauthorized:auth": "You need to sign in before continuing.",
    "unauthorized:chat": "You need to sign in to view this chat.",
    "unauthorized:history": "You need to sign in to view your chat history.",
    "forbidden:chat": "This chat belongs to another user.",
    "not_found:chat": "The requested chat was not found.",
    "not_found:history": "The chat referenced by the cursor was not found.",
    "offline:chat": "The change could not be saved. Please try again.",
}


class ChatHistoryError(Exception):
    """Base class for chat history errors."""

    error_type = "internal"

    def __init__(self, surface: str = "api", cause: Optional[str] = None):
        self.surface = surface
        self.cause = cause
        self.error_code = f"{self.error_type}:{surface}"
        self.status_code = STATUS_BY_TYPE.get(self.error_type, 500)
        self.message = DEFAULT_MESSAGES.get(
            self.error_code, "Something went wrong. Please try again later."
        )
        super().__init__(cause or self.message)

    def to_dict(self) -> dict:
        """Serialize to the JSON error body shape."""
        body = {"error": self.message, "error_code": self.error_code}
        if self.cause:
            body["details"] = self.cause
        return body


class BadRequestError(ChatHistoryError):
    error_type = "bad_request"


class UnauthorizedError(ChatHistoryError):
    error_type = "unauthorized"


class ForbiddenError(ChatHistoryError):
    error_type = "forbidden"


class NotFoundError(ChatHistoryError):
    error_type = "not_found"


class WriteFailureError(ChatHistoryError):
    """Raised when a visibility write could not be persisted."""

    error_type = "offline"


ERRORS_BY_TYPE = {
    cls.error_type: cls
    for cls in (
        BadRequestError,
        UnauthorizedError,
        ForbiddenError,
        NotFoundError,
        WriteFailureError,
    )
}


def error_from_code(error_code: str, cause: Optional[str] = None) -> ChatHistoryError:
    """Rebuild an exception from its ``<type>:<surface>`` code."""
    error_type, _, surface = (error_code or "").partition(":")
    cls = ERRORS_BY_TYPE.get(error_type, ChatHistoryError)
    return cls(surface or "api", cause)


def is_not_found(error: Exception) -> bool:
    """Check whether an exception means the entity does not exist."""
    if isinstance(error, NotFoundError):
        return True
    if isinstance(error, KeyError):
        return True
    return "not found" in str(error).lower()


__all__ = [
    "ChatHistoryError",
    "BadRequestError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "WriteFailureError",
    "error_from_code",
    "is_not_found",
]
