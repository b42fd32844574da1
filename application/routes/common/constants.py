"""
Constants used across route handlers.

Centralizes magic numbers and configuration values to improve maintainability.
"""

from datetime import timedelta

# Re-export common constants used by the route layer
from common.constants import CHAT_LIST_DEFAULT_LIMIT, CHAT_LIST_MAX_LIMIT

# ============================================================================
# Rate Limiting
# ============================================================================

# Requests allowed per client for read endpoints
READ_RATE_LIMIT = 100

# Requests allowed per client for write endpoints
WRITE_RATE_LIMIT = 30

# Window the limits above apply to
RATE_LIMIT_PERIOD = timedelta(minutes=1)

# ============================================================================
# URL Prefixes
# ============================================================================

API_PREFIX = "/api/v1"

HISTORY_URL_PREFIX = f"{API_PREFIX}/history"

CHATS_URL_PREFIX = f"{API_PREFIX}/chats"

__all__ = [
    "CHAT_LIST_DEFAULT_LIMIT",
    "CHAT_LIST_MAX_LIMIT",
    "READ_RATE_LIMIT",
    "WRITE_RATE_LIMIT",
    "RATE_LIMIT_PERIOD",
    "API_PREFIX",
    "HISTORY_URL_PREFIX",
    "CHATS_URL_PREFIX",
]
