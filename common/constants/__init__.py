"""Service and business logic constants."""

# ============================================================================
# Chat History Configuration
# ============================================================================

# Default page size for chat history requests
CHAT_LIST_DEFAULT_LIMIT = 10

# Maximum page size for chat history requests
CHAT_LIST_MAX_LIMIT = 100

# Upper bound on the length of a pagination cursor
CURSOR_MAX_LENGTH = 128

# Visibility assumed for chats that are not in any loaded page
DEFAULT_VISIBILITY = "private"

# ============================================================================
# External Validation Configuration
# ============================================================================

# Quiet period before a debounced validation fires (seconds)
PROBE_QUIET_PERIOD_SECONDS = 0.5

# Time budget for a single existence probe (seconds)
PROBE_TIMEOUT_SECONDS = 5.0

# ============================================================================
# HTTP Client Configuration
# ============================================================================

# Default timeout for chat history API requests (seconds)
DEFAULT_HTTP_TIMEOUT_SECONDS = 30.0

__all__ = [
    'CHAT_LIST_DEFAULT_LIMIT',
    'CHAT_LIST_MAX_LIMIT',
    'CURSOR_MAX_LENGTH',
    'DEFAULT_VISIBILITY',
    'PROBE_QUIET_PERIOD_SECONDS',
    'PROBE_TIMEOUT_SECONDS',
    'DEFAULT_HTTP_TIMEOUT_SECONDS',
]
