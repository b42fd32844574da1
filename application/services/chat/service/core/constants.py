"""Constants for chat service."""

# Response structure constants
RESPONSE_KEY_CHATS = "chats"
RESPONSE_KEY_HAS_MORE = "hasMore"

# Error surfaces
SURFACE_HISTORY = "history"
SURFACE_CHAT = "chat"
SURFACE_API = "api"
