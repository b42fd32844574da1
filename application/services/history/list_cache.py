"""
List cache for chat history pages.

Pages are keyed by the exact parameters used to fetch them. Entries live
until an event invalidates them (a visibility edit drops every page that
contains the edited chat); an optional TTL can be configured on top.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional

from application.entity.chat import Chat
from application.models.request_models import ListChatsParams
from application.services.chat import Page
from common.constants import CHAT_LIST_DEFAULT_LIMIT
from common.exception import BadRequestError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaginationKey:
    """Identifies one cached page. Two keys are equal iff all fields match."""

    owner_id: str
    limit: int = CHAT_LIST_DEFAULT_LIMIT
    starting_after: Optional[str] = None
    ending_before: Optional[str] = None

    def __post_init__(self):
        if self.starting_after and self.ending_before:
            raise BadRequestError(
                "api", "Only one of starting_after or ending_before can be provided"
            )

    @classmethod
    def from_params(cls, owner_id: str, params: ListChatsParams) -> "PaginationKey":
        return cls(
            owner_id=owner_id,
            limit=params.limit,
            starting_after=params.starting_after,
            ending_before=params.ending_before,
        )

    def to_query(self) -> Dict[str, str]:
        """Query string parameters for GET /history."""
        query = {"limit": str(self.limit)}
        if self.starting_after:
            query["starting_after"] = self.starting_after
        if self.ending_before:
            query["ending_before"] = self.ending_before
        return query


@dataclass(frozen=True)
class CacheEntry:
    page: Page
    fetched_at: float


class ListCache:
    """
    Maps PaginationKey to the page fetched with it.

    Process-local and single-writer; owned by one history session.
    """

    def __init__(
        self,
        ttl_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize the cache.

        Args:
            ttl_seconds: Entry lifetime; None keeps entries until invalidated
            clock: Monotonic time source
        """
        self._entries: Dict[PaginationKey, CacheEntry] = {}
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        # Bumped on every chat invalidation; lets fetches started earlier detect it
        self._generation = 0
        self._invalidated_at: Dict[str, int] = {}

    def get(self, key: PaginationKey) -> Optional[CacheEntry]:
        """Return the cached entry for the key, or None on a miss."""
        entry = self._entries.get(key)
        if entry is None:
            logger.debug(f"Cache miss for {key}")
            return None

        if self._is_expired(entry):
            logger.debug(f"Cache entry expired for {key}")
            del self._entries[key]
            return None

        logger.debug(f"💾 Cache hit for {key}")
        return entry

    def put(self, key: PaginationKey, page: Page) -> CacheEntry:
        """Store or overwrite the page for the key."""
        entry = CacheEntry(page=page, fetched_at=self._clock())
        self._entries[key] = entry
        logger.debug(f"Cached {len(page)} chats for {key}")
        return entry

    def invalidate(self, predicate: Callable[[PaginationKey, CacheEntry], bool]) -> int:
        """Drop all entries matching the predicate.

        Returns:
            Number of entries dropped
        """
        doomed = [key for key, entry in self._entries.items() if predicate(key, entry)]
        for key in doomed:
            del self._entries[key]
        if doomed:
            logger.info(f"Invalidated {len(doomed)} cached page(s)")
        return len(doomed)

    def invalidate_chat(self, chat_id: str) -> int:
        """Drop every page that contains the chat.

        The invalidation is also recorded for pages still being fetched,
        see ``invalidated_since``.
        """
        self._generation += 1
        self._invalidated_at[chat_id] = self._generation
        return self.invalidate(lambda _key, entry: entry.page.find(chat_id) is not None)

    @property
    def generation(self) -> int:
        """Current invalidation generation; read it before starting a fetch."""
        return self._generation

    def invalidated_since(self, chat_ids: Iterable[str], generation: int) -> bool:
        """Check whether any of the chats was invalidated after ``generation``."""
        return any(self._invalidated_at.get(chat_id, 0) > generation for chat_id in chat_ids)

    def find_chat(self, owner_id: str, chat_id: str) -> Optional[Chat]:
        """Find a chat in the owner's loaded pages.

        When several pages hold the chat, the most recently fetched wins.
        """
        found: Optional[Chat] = None
        newest = None
        for key, entry in list(self._entries.items()):
            if key.owner_id != owner_id or self._is_expired(entry):
                continue
            chat = entry.page.find(chat_id)
            if chat is not None and (newest is None or entry.fetched_at >= newest):
                found, newest = chat, entry.fetched_at
        return found

    def keys(self) -> List[PaginationKey]:
        return list(self._entries)

    def clear(self) -> None:
        self._entries.clear()
        self._invalidated_at.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def _is_expired(self, entry: CacheEntry) -> bool:
        if self._ttl_seconds is None:
            return False
        return self._clock() - entry.fetched_at > self._ttl_seconds
