"""Client-side chat history: page cache, optimistic visibility and its reconciliation."""

from .client import ChatHistoryClient, parse_page, raise_for_api_error
from .list_cache import CacheEntry, ListCache, PaginationKey
from .notifications import Notification, NotificationCenter
from .override_store import OverrideEntry, OverrideStatus, VisibilityOverrideStore
from .reconciliation import VisibilityReconciliationService
from .session import ChatHistorySession

__all__ = [
    "CacheEntry",
    "ChatHistoryClient",
    "ChatHistorySession",
    "ListCache",
    "Notification",
    "NotificationCenter",
    "OverrideEntry",
    "OverrideStatus",
    "PaginationKey",
    "VisibilityOverrideStore",
    "VisibilityReconciliationService",
    "parse_page",
    "raise_for_api_error",
]
