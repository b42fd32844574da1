"""
Visibility reconciliation.

Decides which visibility the UI shows for a chat and drives the
optimistic update cycle:

1. record the currently displayed value for rollback
2. write a pending override (visible immediately)
3. invalidate cached pages containing the chat
4. await the server write
5. confirm, or revert, notify once and raise WriteFailureError

Only the response for the newest write of a chat may change state; older
responses are discarded whatever their outcome.
"""

import logging
from typing import Any, Awaitable, Callable, Dict, Iterable, Optional

from application.entity.chat import Visibility
from common.constants import DEFAULT_VISIBILITY
from common.exception import WriteFailureError

from .list_cache import ListCache
from .notifications import NotificationCenter
from .override_store import OverrideEntry, OverrideStatus, VisibilityOverrideStore

logger = logging.getLogger(__name__)

VisibilityWriter = Callable[[str, Visibility], Awaitable[Any]]

WRITE_FAILED_MESSAGE = "Failed to update chat visibility. The previous setting was restored."


class VisibilityReconciliationService:
    """Resolves displayed visibility from cached pages and pending overrides."""

    def __init__(
        self,
        owner_id: str,
        list_cache: ListCache,
        override_store: VisibilityOverrideStore,
        writer: VisibilityWriter,
        notifications: Optional[NotificationCenter] = None,
    ):
        """Initialize the reconciliation service.

        Args:
            owner_id: Owner whose history is displayed
            list_cache: Cache of loaded history pages
            override_store: Store of pending optimistic edits
            writer: Coroutine persisting a visibility change on the server
            notifications: Where write failures are reported
        """
        self.owner_id = owner_id
        self.list_cache = list_cache
        self.override_store = override_store
        self.notifications = notifications if notifications is not None else NotificationCenter()
        self._writer = writer
        # Last value settled by this service for chats whose pages were dropped
        self._settled: Dict[str, Visibility] = {}

    def get_displayed_visibility(self, chat_id: str) -> Visibility:
        entry = self.override_store.get(chat_id)
        if entry is not None and entry.is_pending:
            return entry.visibility

        chat = self.list_cache.find_chat(self.owner_id, chat_id)
        if chat is not None:
            return chat.visibility

        return self._settled.get(chat_id, Visibility(DEFAULT_VISIBILITY))

    async def set_visibility(
        self, chat_id: str, visibility: Visibility
    ) -> Optional[OverrideStatus]:
        """
        Change a chat's visibility optimistically.

        Returns:
            CONFIRMED when this write was acknowledged, None when a newer
            write for the same chat superseded it before its response arrived

        Raises:
            WriteFailureError: If the server rejected this write and it was
                still the newest one for the chat
        """
        previous, entry = self.apply_optimistic(chat_id, visibility)
        return await self._commit(entry, previous)

    def apply_optimistic(self, chat_id: str, visibility: Visibility):
        """Record the rollback value, write the override and drop stale pages."""
        previous = self.get_displayed_visibility(chat_id)
        entry = self.override_store.set(chat_id, visibility)
        self.list_cache.invalidate_chat(chat_id)
        return previous, entry

    async def _commit(self, entry: OverrideEntry, previous: Visibility) -> Optional[OverrideStatus]:
        chat_id = entry.chat_id
        try:
            await self._writer(chat_id, entry.visibility)
        except Exception as e:
            if not self.override_store.is_current(chat_id, entry.sequence):
                logger.info(
                    f"Discarding stale failure for chat {chat_id} (seq {entry.sequence}): {e}"
                )
                return None

            logger.warning(f"Visibility write failed for chat {chat_id}: {e}")
            self._settled[chat_id] = previous
            self.override_store.resolve(chat_id, OverrideStatus.FAILED, entry.sequence)
            self.notifications.notify(WRITE_FAILED_MESSAGE, chat_id=chat_id)
            raise WriteFailureError("chat", str(e)) from e

        resolved = self.override_store.resolve(
            chat_id, OverrideStatus.CONFIRMED, entry.sequence
        )
        if resolved is None:
            logger.info(f"Discarding stale confirmation for chat {chat_id} (seq {entry.sequence})")
            return None

        self._settled[chat_id] = entry.visibility
        logger.info(f"Visibility of chat {chat_id} confirmed as {entry.visibility.value}")
        return OverrideStatus.CONFIRMED

    def forget_settled(self, chat_ids: Iterable[str]) -> None:
        """Drop settled values for chats that a fresh page now covers."""
        for chat_id in chat_ids:
            self._settled.pop(chat_id, None)

    def reset(self) -> None:
        self._settled.clear()
        self.override_store.clear()
