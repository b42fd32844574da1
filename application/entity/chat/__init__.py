"""Chat entity package."""

from application.entity.chat.version_1.chat import Chat, Visibility

__all__ = ["Chat", "Visibility"]
