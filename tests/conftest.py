"""Pytest configuration for tests.

Sets up Python path and fixtures for all tests.
"""

import sys
from pathlib import Path

import pytest

# Add project root to Python path so imports work correctly
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from application.repositories.chat_repository import ChatRepository  # noqa: E402
from application.services.chat import ChatService  # noqa: E402
from application.services.service_factory import get_service_factory  # noqa: E402
from common.service.chat_store import InMemoryChatStore  # noqa: E402


@pytest.fixture
def chat_store():
    """Empty in-memory chat store."""
    return InMemoryChatStore()


@pytest.fixture
def chat_repository(chat_store):
    return ChatRepository(chat_store)


@pytest.fixture
def chat_service(chat_repository):
    return ChatService(chat_repository)


@pytest.fixture
def service_factory():
    """Global service factory, reset before and after the test."""
    factory = get_service_factory()
    factory.reset()
    yield factory
    factory.reset()
