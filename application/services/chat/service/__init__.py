"""Chat service - server-side chat history operations."""

from typing import Optional

from application.entity.chat import Chat, Visibility
from application.models.request_models import ListChatsParams
from application.repositories.chat_repository import ChatRepository

from .core import (
    CursorCodec,
    Page,
    create_chat,
    delete_chat,
    format_page,
    get_chat,
    list_chats,
    update_visibility,
    validate_ownership,
)


class ChatService:
    """Service for chat history business operations.

    Answers paginated history queries and persists visibility changes.
    Holds no cache: every call reads the store.
    """

    def __init__(self, chat_repository: ChatRepository):
        """Initialize chat service.

        Args:
            chat_repository: Repository for chat data access
        """
        self.chat_repo = chat_repository

    async def list_chats(
        self, owner_id: Optional[str], params: Optional[ListChatsParams] = None
    ) -> Page:
        """List one page of the owner's chat history."""
        return await list_chats(self.chat_repo, owner_id, params or ListChatsParams())

    async def get_chat(self, chat_id: str, user_id: str) -> Chat:
        """Get one of the user's chats."""
        return await get_chat(self.chat_repo, chat_id, user_id)

    async def create_chat(
        self, user_id: str, title: str, visibility: Visibility = Visibility.PRIVATE
    ) -> Chat:
        """Create a new chat."""
        return await create_chat(self.chat_repo, user_id, title, visibility)

    async def update_visibility(
        self, chat_id: str, user_id: str, visibility: Visibility
    ) -> Chat:
        """Persist a visibility change."""
        return await update_visibility(self.chat_repo, chat_id, user_id, visibility)

    async def delete_chat(self, chat_id: str, user_id: str) -> None:
        """Delete one of the user's chats."""
        await delete_chat(self.chat_repo, chat_id, user_id)

    def validate_ownership(self, chat: Optional[Chat], chat_id: str, user_id: str) -> Chat:
        """Validate that the chat exists and belongs to the user."""
        return validate_ownership(chat, chat_id, user_id)


__all__ = [
    "ChatService",
    "CursorCodec",
    "Page",
    "format_page",
]
