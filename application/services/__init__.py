"""
Application services package.

Contains the business logic services for the chat history portal.
"""

from application.services.chat import ChatService
from application.services.service_factory import ServiceFactory, get_service_factory

__all__ = [
    "ChatService",
    "ServiceFactory",
    "get_service_factory",
]
