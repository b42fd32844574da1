"""
Application entities package.

Contains all domain entities for the chat history portal.
"""

from application.entity.chat import Chat, Visibility

__all__ = ["Chat", "Visibility"]
