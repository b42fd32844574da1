"""
Response models for the chat history API.

Defines the JSON shapes returned by the endpoints.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str = Field(..., description="Error message")
    error_code: Optional[str] = Field(
        default=None, description="Error code in <type>:<surface> form"
    )
    details: Optional[Any] = Field(default=None, description="Additional error details")


class ChatHistoryResponse(BaseModel):
    """Response model for one page of chat history."""

    model_config = ConfigDict(populate_by_name=True)

    chats: List[Dict[str, Any]] = Field(
        ..., description="Chats in recency-descending order"
    )
    has_more: bool = Field(
        ...,
        alias="hasMore",
        description="Whether more chats exist beyond this page in the requested direction",
    )


class ChatResponse(BaseModel):
    """Response model for a single chat."""

    chat: Dict[str, Any] = Field(..., description="Chat data")
