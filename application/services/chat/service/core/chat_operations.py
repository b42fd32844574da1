"""Chat CRUD operations."""

import logging
from typing import Optional

from application.entity.chat import Chat, Visibility
from application.repositories.chat_repository import ChatRepository
from common.exception import NotFoundError, WriteFailureError, is_not_found

from .constants import SURFACE_CHAT

logger = logging.getLogger(__name__)


def validate_ownership(chat: Optional[Chat], chat_id: str, user_id: str) -> Chat:
    """Validate that the chat exists and belongs to the user.

    Missing and foreign chats raise the same error so that callers cannot
    probe for other users' chat IDs.

    Raises:
        NotFoundError: If the chat is missing or not owned by the user
    """
    if chat is None or chat.user_id != user_id:
        raise NotFoundError(SURFACE_CHAT, f"Chat {chat_id} not found")
    return chat


async def create_chat(
    chat_repo: ChatRepository,
    user_id: str,
    title: str,
    visibility: Visibility = Visibility.PRIVATE,
) -> Chat:
    """Create a new chat.

    Example:
        >>> chat = await create_chat(repo, user_id="alice", title="My Chat")
    """
    chat = Chat(user_id=user_id, title=title, visibility=visibility)
    created = await chat_repo.create(chat)
    logger.info(f"Created chat {created.id} for user {user_id}")
    return created


async def get_chat(chat_repo: ChatRepository, chat_id: str, user_id: str) -> Chat:
    """Get one of the user's chats.

    Raises:
        NotFoundError: If the chat is missing or not owned by the user
    """
    chat = await chat_repo.get_by_id(chat_id)
    return validate_ownership(chat, chat_id, user_id)


async def update_visibility(
    chat_repo: ChatRepository,
    chat_id: str,
    user_id: str,
    visibility: Visibility,
) -> Chat:
    """Persist a visibility change for one of the user's chats.

    Raises:
        NotFoundError: If the chat is missing or not owned by the user
        WriteFailureError: If the store rejected the write
    """
    await get_chat(chat_repo, chat_id, user_id)

    try:
        updated = await chat_repo.update_visibility(chat_id, visibility)
    except Exception as e:
        if is_not_found(e):
            raise NotFoundError(SURFACE_CHAT, f"Chat {chat_id} not found")
        logger.error(f"Failed to update visibility of chat {chat_id}: {e}")
        raise WriteFailureError(SURFACE_CHAT, "Failed to update chat visibility")

    logger.info(f"Chat {chat_id} visibility set to {visibility.value}")
    return updated


async def delete_chat(chat_repo: ChatRepository, chat_id: str, user_id: str) -> None:
    """Delete one of the user's chats; its cursor stops resolving."""
    await get_chat(chat_repo, chat_id, user_id)
    await chat_repo.delete(chat_id)
    logger.info(f"Deleted chat {chat_id}")
