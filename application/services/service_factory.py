"""
Service Factory for centralized service initialization.

Implements the Factory pattern for creating and managing service instances.
Provides singleton access to the server-side services across the application.
"""

import logging
from typing import Optional

from application.repositories.chat_repository import ChatRepository
from application.services.chat import ChatService
from common.service.chat_store import ChatStore, InMemoryChatStore

logger = logging.getLogger(__name__)


class ServiceFactory:
    """
    Factory for creating and managing service instances.

    Implements singleton pattern for services to ensure single instance
    across the application. Manages dependencies between services.
    """

    _instance: Optional["ServiceFactory"] = None

    # Service instances (lazy-loaded)
    _chat_store: Optional[ChatStore] = None
    _chat_repository: Optional[ChatRepository] = None
    _chat_service: Optional[ChatService] = None

    def __new__(cls):
        """Ensure only one instance exists (Singleton pattern)."""
        if cls._instance is None:
            cls._instance = super(ServiceFactory, cls).__new__(cls)
            logger.debug("ServiceFactory instance created")
        return cls._instance

    @property
    def chat_store(self) -> ChatStore:
        """
        Get the persistent chat store.

        Returns:
            ChatStore: Store backing the chat repository

        Example:
            >>> factory = ServiceFactory()
            >>> store = factory.chat_store
        """
        if self._chat_store is None:
            self._chat_store = InMemoryChatStore()
            logger.debug("InMemoryChatStore initialized")
        return self._chat_store

    @chat_store.setter
    def chat_store(self, store: ChatStore) -> None:
        # Swapping the store drops everything built on top of it
        self._chat_store = store
        self._chat_repository = None
        self._chat_service = None

    @property
    def chat_repository(self) -> ChatRepository:
        """
        Get ChatRepository instance.

        Returns:
            ChatRepository: Chat data access repository
        """
        if self._chat_repository is None:
            self._chat_repository = ChatRepository(self.chat_store)
            logger.debug("ChatRepository initialized")
        return self._chat_repository

    @property
    def chat_service(self) -> ChatService:
        """
        Get ChatService instance.

        Automatically initializes dependencies (store, repository).

        Returns:
            ChatService: Chat business logic service

        Example:
            >>> factory = ServiceFactory()
            >>> chat = factory.chat_service
        """
        if self._chat_service is None:
            self._chat_service = ChatService(chat_repository=self.chat_repository)
            logger.debug("ChatService initialized")
        return self._chat_service

    def reset(self):
        """
        Clear all cached service instances.

        Useful for testing or when services need to be re-initialized.
        """
        self._chat_store = None
        self._chat_repository = None
        self._chat_service = None
        logger.debug("ServiceFactory cache cleared")


# Global factory instance
_factory_instance: Optional[ServiceFactory] = None


def get_service_factory() -> ServiceFactory:
    """
    Get global ServiceFactory instance.

    Returns:
        ServiceFactory: Singleton factory instance

    Example:
        >>> from application.services.service_factory import get_service_factory
        >>> factory = get_service_factory()
        >>> chat_service = factory.chat_service
    """
    global _factory_instance
    if _factory_instance is None:
        _factory_instance = ServiceFactory()
    return _factory_instance
