"""
Chat Repository for data access operations.

Provides clean abstraction over the chat store with history-specific
queries: keyset pages in either direction of the recency ordering.
"""

import logging
from typing import List, Optional

from application.entity.chat import Chat, Visibility
from common.exception import is_not_found
from common.search import LogicalOperator, SearchConditionRequest, SortDirection
from common.service.chat_store import ChatStore

logger = logging.getLogger(__name__)

FIELD_USER_ID = "user_id"
FIELD_CREATED_AT = "created_at"
FIELD_ID = "id"


def _beyond_anchor(anchor: Chat, older: bool) -> SearchConditionRequest:
    """
    Keyset condition for rows strictly past the anchor.

    (created_at, id) < anchor for older rows, > anchor for newer rows.
    """
    builder = SearchConditionRequest.builder
    if older:
        strictly = builder().less_than(FIELD_CREATED_AT, anchor.created_at).build()
        tie_break = (
            builder()
            .equals(FIELD_CREATED_AT, anchor.created_at)
            .less_than(FIELD_ID, anchor.id)
            .build()
        )
    else:
        strictly = builder().greater_than(FIELD_CREATED_AT, anchor.created_at).build()
        tie_break = (
            builder()
            .equals(FIELD_CREATED_AT, anchor.created_at)
            .greater_than(FIELD_ID, anchor.id)
            .build()
        )

    return (
        builder()
        .group(strictly)
        .group(tie_break)
        .operator(LogicalOperator.OR)
        .build()
    )


class ChatRepository:
    """
    Repository for chat entity operations.

    Encapsulates data access logic and provides domain-specific methods.
    """

    def __init__(self, chat_store: ChatStore):
        """
        Initialize chat repository.

        Args:
            chat_store: Store for chat persistence
        """
        self.chat_store = chat_store

    async def get_by_id(self, chat_id: str) -> Optional[Chat]:
        """
        Get chat by ID.

        Returns:
            Chat object or None if not found

        Example:
            >>> repo = ChatRepository(store)
            >>> chat = await repo.get_by_id("123-456")
        """
        try:
            return await self.chat_store.get_by_id(chat_id)
        except Exception as e:
            if is_not_found(e):
                return None
            raise

    async def _find(
        self, user_id: str, limit: int, anchor: Optional[Chat], older: bool
    ) -> List[Chat]:
        direction = SortDirection.DESC if older else SortDirection.ASC
        builder = SearchConditionRequest.builder().equals(FIELD_USER_ID, user_id)
        if anchor is not None:
            builder = builder.group(_beyond_anchor(anchor, older))

        condition = (
            builder.order_by(FIELD_CREATED_AT, direction)
            .order_by(FIELD_ID, direction)
            .limit(limit)
            .build()
        )
        return await self.chat_store.search(condition)

    async def find_older(
        self, user_id: str, limit: int, anchor: Optional[Chat] = None
    ) -> List[Chat]:
        """
        Find up to ``limit`` chats older than the anchor, newest first.

        Without an anchor this returns the most recent chats.

        Example:
            >>> first_page = await repo.find_older("alice", 11)
        """
        return await self._find(user_id, limit, anchor, older=True)

    async def find_newer(self, user_id: str, limit: int, anchor: Chat) -> List[Chat]:
        """
        Find up to ``limit`` chats newer than the anchor, oldest first.

        Rows come back in ascending order so that the ones closest to the
        anchor are kept when the limit cuts the result.
        """
        return await self._find(user_id, limit, anchor, older=False)

    async def create(self, chat: Chat) -> Chat:
        """
        Create a new chat.

        Example:
            >>> created = await repo.create(Chat(user_id="alice", title="Hi"))
        """
        return await self.chat_store.save(chat)

    async def update_visibility(self, chat_id: str, visibility: Visibility) -> Chat:
        """
        Persist a new visibility for a chat.

        Raises:
            NotFoundError: If the chat does not exist
        """
        updated = await self.chat_store.update(chat_id, {"visibility": visibility})
        logger.debug(f"Stored visibility {visibility.value} for chat {chat_id}")
        return updated

    async def delete(self, chat_id: str) -> None:
        """Delete chat by ID."""
        await self.chat_store.delete_by_id(chat_id)
