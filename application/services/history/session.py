"""
Chat history session.

Owns the client-side state of one signed-in user: the page cache, the
pending visibility overrides, and the notifications raised while
reconciling them. Created at sign-in and closed at logout.
"""

import logging
from typing import Awaitable, Callable, Optional

from application.entity.chat import Visibility
from application.services.chat import Page
from common.config.config import LIST_CACHE_TTL_SECONDS
from common.exception import ChatHistoryError

from .list_cache import ListCache, PaginationKey
from .notifications import NotificationCenter
from .override_store import OverrideStatus, VisibilityOverrideStore
from .reconciliation import VisibilityReconciliationService, VisibilityWriter

logger = logging.getLogger(__name__)

PageFetcher = Callable[[PaginationKey], Awaitable[Page]]


class ChatHistorySession:
    """Client-side history state for one owner."""

    def __init__(
        self,
        owner_id: str,
        fetcher: PageFetcher,
        writer: VisibilityWriter,
        list_cache: Optional[ListCache] = None,
        override_store: Optional[VisibilityOverrideStore] = None,
        notifications: Optional[NotificationCenter] = None,
        on_close: Optional[Callable[[], Awaitable[None]]] = None,
    ):
        self.owner_id = owner_id
        if list_cache is None:
            list_cache = ListCache(ttl_seconds=LIST_CACHE_TTL_SECONDS)
        if override_store is None:
            override_store = VisibilityOverrideStore()
        if notifications is None:
            notifications = NotificationCenter()

        self.list_cache = list_cache
        self.override_store = override_store
        self.notifications = notifications
        self.reconciliation = VisibilityReconciliationService(
            owner_id=owner_id,
            list_cache=self.list_cache,
            override_store=self.override_store,
            writer=writer,
            notifications=self.notifications,
        )
        self._fetcher = fetcher
        self._on_close = on_close
        self._closed = False

    @classmethod
    def from_client(cls, owner_id: str, client, **kwargs) -> "ChatHistorySession":
        """Build a session backed by a ChatHistoryClient; closing it closes the client."""
        return cls(
            owner_id=owner_id,
            fetcher=client.fetch_page,
            writer=client.update_visibility,
            on_close=client.close,
            **kwargs,
        )

    def key(
        self,
        limit: int,
        starting_after: Optional[str] = None,
        ending_before: Optional[str] = None,
    ) -> PaginationKey:
        return PaginationKey(
            owner_id=self.owner_id,
            limit=limit,
            starting_after=starting_after,
            ending_before=ending_before,
        )

    async def load_page(self, key: PaginationKey) -> Page:
        """
        Return the page for the key, fetching it on a cache miss.

        Raises:
            ChatHistoryError: If the session is closed or the fetch fails
        """
        self._ensure_open()
        if key.owner_id != self.owner_id:
            raise ValueError(f"Key belongs to owner {key.owner_id}, not {self.owner_id}")

        entry = self.list_cache.get(key)
        if entry is not None:
            return entry.page

        generation = self.list_cache.generation
        page = await self._fetcher(key)
        self._ensure_open()

        # An edit made while the fetch was in flight makes this page stale
        if self.list_cache.invalidated_since(page.chat_ids(), generation):
            logger.info(f"Not caching page for {key}: a chat on it changed during the fetch")
            return page

        self.list_cache.put(key, page)
        self.reconciliation.forget_settled(page.chat_ids())
        return page

    def get_displayed_visibility(self, chat_id: str) -> Visibility:
        return self.reconciliation.get_displayed_visibility(chat_id)

    async def set_visibility(
        self, chat_id: str, visibility: Visibility
    ) -> Optional[OverrideStatus]:
        self._ensure_open()
        return await self.reconciliation.set_visibility(chat_id, visibility)

    @property
    def closed(self) -> bool:
        return self._closed

    async def close(self) -> None:
        """Tear down all cached state (logout)."""
        if self._closed:
            return
        self._closed = True
        self.list_cache.clear()
        self.reconciliation.reset()
        self.notifications.clear()
        if self._on_close is not None:
            await self._on_close()
        logger.info(f"History session closed for owner {self.owner_id}")

    async def __aenter__(self) -> "ChatHistorySession":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def _ensure_open(self) -> None:
        if self._closed:
            raise ChatHistoryError("history", "History session is closed")
