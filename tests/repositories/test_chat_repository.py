"""
Unit tests for ChatRepository.

Tests keyset queries against the in-memory store and error mapping with a
mocked store.
"""

from datetime import timedelta
from unittest.mock import AsyncMock, Mock

import pytest

from application.entity.chat import Visibility
from application.repositories.chat_repository import ChatRepository
from common.exception import NotFoundError
from tests.fixtures.chat_fixtures import (
    BASE_TIME,
    chat_ids,
    create_chat_history,
    create_test_chat,
    seed_store,
)


class TestChatRepositoryGet:
    """Test getting chats."""

    @pytest.mark.asyncio
    async def test_get_by_id_success(self, chat_store, chat_repository):
        # Arrange
        await seed_store(chat_store, [create_test_chat(chat_id="c1")])

        # Act
        result = await chat_repository.get_by_id("c1")

        # Assert
        assert result is not None
        assert result.id == "c1"

    @pytest.mark.asyncio
    async def test_get_by_id_not_found_error_returns_none(self):
        """Test a store raising not-found yields None."""
        mock_store = Mock()
        mock_store.get_by_id = AsyncMock(side_effect=NotFoundError("chat"))

        repo = ChatRepository(mock_store)

        assert await repo.get_by_id("missing") is None

    @pytest.mark.asyncio
    async def test_get_by_id_other_errors_propagate(self):
        mock_store = Mock()
        mock_store.get_by_id = AsyncMock(side_effect=RuntimeError("connection reset"))

        repo = ChatRepository(mock_store)

        with pytest.raises(RuntimeError):
            await repo.get_by_id("c1")


class TestChatRepositoryKeysetQueries:
    """Test find_older and find_newer."""

    @pytest.mark.asyncio
    async def test_find_older_without_anchor_returns_most_recent(
        self, chat_store, chat_repository
    ):
        await seed_store(chat_store, create_chat_history("alice", 5))

        result = await chat_repository.find_older("alice", 3)

        assert chat_ids(result) == ["chat-004", "chat-003", "chat-002"]

    @pytest.mark.asyncio
    async def test_find_older_is_strictly_past_anchor(self, chat_store, chat_repository):
        # Arrange
        chats = create_chat_history("alice", 5)
        await seed_store(chat_store, chats)

        # Act
        result = await chat_repository.find_older("alice", 10, anchor=chats[3])

        # Assert
        assert chat_ids(result) == ["chat-002", "chat-001", "chat-000"]

    @pytest.mark.asyncio
    async def test_find_newer_returns_ascending(self, chat_store, chat_repository):
        chats = create_chat_history("alice", 5)
        await seed_store(chat_store, chats)

        result = await chat_repository.find_newer("alice", 2, anchor=chats[1])

        assert chat_ids(result) == ["chat-002", "chat-003"]

    @pytest.mark.asyncio
    async def test_ties_on_created_at_are_broken_by_id(self, chat_store, chat_repository):
        """Test chats sharing a timestamp are ordered by id."""
        # Arrange
        same_time = [
            create_test_chat(chat_id=chat_id, user_id="alice", created_at=BASE_TIME)
            for chat_id in ("b", "a", "c")
        ]
        await seed_store(chat_store, same_time)
        anchor = same_time[0]

        # Act
        older = await chat_repository.find_older("alice", 10, anchor=anchor)
        newer = await chat_repository.find_newer("alice", 10, anchor=anchor)

        # Assert
        assert chat_ids(older) == ["a"]
        assert chat_ids(newer) == ["c"]

    @pytest.mark.asyncio
    async def test_other_owners_are_excluded(self, chat_store, chat_repository):
        await seed_store(chat_store, create_chat_history("alice", 2))
        await seed_store(
            chat_store,
            [create_test_chat(chat_id="bob-1", user_id="bob", created_at=BASE_TIME + timedelta(hours=1))],
        )

        result = await chat_repository.find_older("alice", 10)

        assert "bob-1" not in chat_ids(result)
        assert len(result) == 2


class TestChatRepositoryMutations:
    """Test create, update and delete."""

    @pytest.mark.asyncio
    async def test_create(self, chat_store, chat_repository):
        chat = create_test_chat()

        result = await chat_repository.create(chat)

        assert result.id == chat.id
        assert len(chat_store) == 1

    @pytest.mark.asyncio
    async def test_update_visibility(self, chat_store, chat_repository):
        await seed_store(chat_store, [create_test_chat(chat_id="c1")])

        result = await chat_repository.update_visibility("c1", Visibility.PUBLIC)

        assert result.visibility == Visibility.PUBLIC

    @pytest.mark.asyncio
    async def test_delete(self, chat_store, chat_repository):
        await seed_store(chat_store, [create_test_chat(chat_id="c1")])

        await chat_repository.delete("c1")

        assert await chat_repository.get_by_id("c1") is None
