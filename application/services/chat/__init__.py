"""Server-side chat history services."""

from application.services.chat.service import ChatService, CursorCodec, Page, format_page

__all__ = ["ChatService", "CursorCodec", "Page", "format_page"]
