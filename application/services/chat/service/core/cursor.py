"""Cursor codec for chat history pagination.

A cursor names a chat, not a position: the engine resolves it back to the
chat's row and pages relative to that row's (created_at, id). The same chat
always yields the same cursor, and a cursor stops resolving only when its
chat is deleted.
"""

from application.entity.chat import Chat
from common.constants import CURSOR_MAX_LENGTH
from common.exception import BadRequestError

from .constants import SURFACE_API


class CursorCodec:
    """Encodes chats to cursors and decodes cursors to chat IDs."""

    @staticmethod
    def encode(chat: Chat) -> str:
        return chat.id

    @staticmethod
    def decode(cursor: str) -> str:
        """Decode a cursor to the chat ID it references.

        Raises:
            BadRequestError: If the cursor is malformed
        """
        if not isinstance(cursor, str):
            raise BadRequestError(SURFACE_API, "Cursor must be a string")

        chat_id = cursor.strip()
        if not chat_id:
            raise BadRequestError(SURFACE_API, "Cursor must not be empty")
        if len(chat_id) > CURSOR_MAX_LENGTH or any(ch.isspace() for ch in chat_id):
            raise BadRequestError(SURFACE_API, f"Malformed cursor: {cursor[:32]}")
        return chat_id
