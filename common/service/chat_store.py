"""
Chat Store Interface

Persistence boundary for chat rows. The pagination engine and the
visibility write path only talk to this interface.

METHOD SELECTION GUIDE:

FOR RETRIEVAL:
- Use get_by_id() when you have the chat ID (direct lookup)
- Use search() for filtered, ordered, limited queries

FOR MUTATIONS:
- Use save() for new chats
- Use update() to change attributes of an existing chat
- Use delete_by_id() to remove a chat (its cursor stops resolving)
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from application.entity.chat import Chat
from common.exception import NotFoundError
from common.search import SearchConditionEvaluator, SearchConditionRequest

logger = logging.getLogger(__name__)


class ChatStore(ABC):
    """Abstract persistent chat store."""

    @abstractmethod
    async def get_by_id(self, chat_id: str) -> Optional[Chat]:
        """
        Get chat by ID.

        Returns:
            The chat, or None if it does not exist
        """
        pass

    @abstractmethod
    async def search(self, condition: SearchConditionRequest) -> List[Chat]:
        """
        Search chats.

        Args:
            condition: Filter, ordering and limit to apply

        Returns:
            Matching chats in the requested order
        """
        pass

    @abstractmethod
    async def save(self, chat: Chat) -> Chat:
        """Persist a new chat and return the stored copy."""
        pass

    @abstractmethod
    async def update(self, chat_id: str, changes: Dict[str, Any]) -> Chat:
        """
        Update attributes of an existing chat.

        Raises:
            NotFoundError: If the chat does not exist
        """
        pass

    @abstractmethod
    async def delete_by_id(self, chat_id: str) -> None:
        """
        Delete a chat.

        Raises:
            NotFoundError: If the chat does not exist
        """
        pass


class InMemoryChatStore(ChatStore):
    """
    Process-local chat store.

    Rows are kept as plain dictionaries and queried with
    SearchConditionEvaluator. Mutations happen between await points on a
    single event loop, so no locking is needed.
    """

    def __init__(self, latency_seconds: float = 0.0):
        self._rows: Dict[str, Dict[str, Any]] = {}
        self._latency_seconds = latency_seconds

    async def _io(self) -> None:
        # Yield to the loop like a real network round trip would
        await asyncio.sleep(self._latency_seconds)

    async def get_by_id(self, chat_id: str) -> Optional[Chat]:
        await self._io()
        row = self._rows.get(chat_id)
        return Chat(**row) if row is not None else None

    async def search(self, condition: SearchConditionRequest) -> List[Chat]:
        await self._io()
        rows = SearchConditionEvaluator.apply(condition, self._rows.values())
        logger.debug(f"Chat store search returned {len(rows)} rows")
        return [Chat(**row) for row in rows]

    async def save(self, chat: Chat) -> Chat:
        await self._io()
        if chat.id in self._rows:
            raise ValueError(f"Chat {chat.id} already exists")
        self._rows[chat.id] = chat.to_row()
        return Chat(**self._rows[chat.id])

    async def update(self, chat_id: str, changes: Dict[str, Any]) -> Chat:
        await self._io()
        row = self._rows.get(chat_id)
        if row is None:
            raise NotFoundError("chat", f"Chat {chat_id} not found")

        # Validate the merged row before committing it
        updated = Chat(**{**row, **changes})
        self._rows[chat_id] = updated.to_row()
        return updated

    async def delete_by_id(self, chat_id: str) -> None:
        await self._io()
        if self._rows.pop(chat_id, None) is None:
            raise NotFoundError("chat", f"Chat {chat_id} not found")

    def __len__(self) -> int:
        return len(self._rows)
