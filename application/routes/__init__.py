"""
Application routes package.

Contains all API endpoint blueprints for the chat history portal.
"""

from application.routes.chat import chat_bp
from application.routes.history import history_bp

__all__ = ["chat_bp", "history_bp"]
