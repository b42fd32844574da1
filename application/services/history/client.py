"""
HTTP client for the chat history API.

Fetches history pages and persists visibility changes on behalf of a
signed-in user. Error responses are turned back into the exception
classes the server raised.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from application.entity.chat import Chat, Visibility
from application.services.chat import Page
from common.config.config import CHAT_HISTORY_API_URL
from common.constants import DEFAULT_HTTP_TIMEOUT_SECONDS
from common.exception import (
    BadRequestError,
    ChatHistoryError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
    WriteFailureError,
    error_from_code,
)

from .list_cache import PaginationKey

logger = logging.getLogger(__name__)

_ERRORS_BY_STATUS = {
    400: BadRequestError,
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
    503: WriteFailureError,
}


def raise_for_api_error(response: httpx.Response, surface: str = "api") -> None:
    """
    Raise the matching ChatHistoryError for a non-2xx response.

    Args:
        response: Response to check
        surface: Surface used when the body carries no error code

    Raises:
        ChatHistoryError: If the response is not successful
    """
    if response.is_success:
        return

    try:
        body = response.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}

    cause = body.get("details") or body.get("error") or response.reason_phrase
    if not isinstance(cause, str):
        cause = str(cause)

    error_code = body.get("error_code")
    if error_code:
        raise error_from_code(error_code, cause)

    error_cls = _ERRORS_BY_STATUS.get(response.status_code, ChatHistoryError)
    raise error_cls(surface, cause)


def parse_page(data: Dict[str, Any]) -> Page:
    """Build a Page from a GET /history response body."""
    chats = tuple(Chat.model_validate(item) for item in data.get("chats", []))
    return Page(chats=chats, has_more=bool(data.get("hasMore", False)))


class ChatHistoryClient:
    """Async client for the chat history endpoints."""

    def __init__(
        self,
        token: str,
        base_url: Optional[str] = None,
        timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the client.

        Args:
            token: Bearer token of the signed-in user
            base_url: API root (defaults to CHAT_HISTORY_API_URL)
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used in tests)
        """
        self.base_url = (base_url or CHAT_HISTORY_API_URL).rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/json",
            },
            timeout=httpx.Timeout(timeout),
            transport=transport,
            trust_env=False,
        )

    async def fetch_page(self, key: PaginationKey) -> Page:
        """
        Fetch one page of history.

        Raises:
            BadRequestError: Invalid pagination parameters
            UnauthorizedError: Token missing, invalid or expired
            NotFoundError: Cursor references a missing or foreign chat
        """
        response = await self._client.get("/history", params=key.to_query())
        raise_for_api_error(response, surface="history")
        page = parse_page(response.json())
        logger.debug(f"Fetched {len(page)} chats for {key} (hasMore={page.has_more})")
        return page

    async def update_visibility(self, chat_id: str, visibility: Visibility) -> Chat:
        """
        Persist a visibility change.

        Raises:
            WriteFailureError: The request never reached the server
            ChatHistoryError: The server rejected the change
        """
        try:
            response = await self._client.patch(
                f"/chats/{chat_id}/visibility",
                json={"visibility": Visibility(visibility).value},
            )
        except httpx.RequestError as e:
            logger.warning(f"Visibility request for chat {chat_id} failed: {e}")
            raise WriteFailureError("chat", f"Request error: {e}") from e

        raise_for_api_error(response, surface="chat")
        return Chat.model_validate(response.json()["chat"])

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "ChatHistoryClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
