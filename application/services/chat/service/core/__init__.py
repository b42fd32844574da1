"""Chat service core - building blocks of ChatService."""

from .chat_operations import (
    create_chat,
    delete_chat,
    get_chat,
    update_visibility,
    validate_ownership,
)
from .constants import RESPONSE_KEY_CHATS, RESPONSE_KEY_HAS_MORE
from .cursor import CursorCodec
from .formatters import format_page
from .list_operations import list_chats, resolve_anchor
from .models import Page

__all__ = [
    "CursorCodec",
    "Page",
    "RESPONSE_KEY_CHATS",
    "RESPONSE_KEY_HAS_MORE",
    "create_chat",
    "delete_chat",
    "format_page",
    "get_chat",
    "list_chats",
    "resolve_anchor",
    "update_visibility",
    "validate_ownership",
]
