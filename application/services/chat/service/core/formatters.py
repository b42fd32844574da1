"""Formatters for chat service responses."""

from typing import Any, Dict

from application.models.response_models import ChatHistoryResponse

from .models import Page


def format_page(page: Page) -> Dict[str, Any]:
    """Format a page as the history endpoint's JSON body.

    Args:
        page: Page returned by the pagination engine

    Returns:
        ``{"chats": [...], "hasMore": bool}``
    """
    response = ChatHistoryResponse(
        chats=[chat.to_api_dict() for chat in page.chats],
        has_more=page.has_more,
    )
    return response.model_dump(by_alias=True)
