"""
Application models package.

Contains all request and response DTOs for the chat history API.
"""

from application.models.request_models import (
    CreateChatRequest,
    ListChatsParams,
    UpdateVisibilityRequest,
)
from application.models.response_models import (
    ChatHistoryResponse,
    ChatResponse,
    ErrorResponse,
)

__all__ = [
    # Request models
    "CreateChatRequest",
    "ListChatsParams",
    "UpdateVisibilityRequest",
    # Response models
    "ChatHistoryResponse",
    "ChatResponse",
    "ErrorResponse",
]
