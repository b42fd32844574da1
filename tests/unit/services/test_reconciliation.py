"""
Unit tests for VisibilityReconciliationService.

Writes are driven by ControlledWriter so each test decides when, and in
which order, server responses arrive.
"""

import asyncio
from unittest.mock import AsyncMock

import pytest

from application.entity.chat import Visibility
from application.services.history import (
    ListCache,
    NotificationCenter,
    OverrideStatus,
    PaginationKey,
    VisibilityOverrideStore,
    VisibilityReconciliationService,
)
from common.exception import WriteFailureError
from tests.fixtures.chat_fixtures import create_page, create_test_chat


class ControlledWriter:
    """Visibility writer whose responses are released by the test."""

    def __init__(self):
        self.calls = []

    async def __call__(self, chat_id, visibility):
        future = asyncio.get_running_loop().create_future()
        self.calls.append((chat_id, visibility, future))
        return await future

    def succeed(self, index):
        self.calls[index][2].set_result(None)

    def fail(self, index, error=None):
        self.calls[index][2].set_exception(error or RuntimeError("network down"))


def _service(writer, visibility=Visibility.PRIVATE):
    cache = ListCache()
    cache.put(
        PaginationKey("alice", 10),
        create_page(
            create_test_chat(chat_id="c1", user_id="alice", visibility=visibility),
            create_test_chat(chat_id="c2", user_id="alice"),
        ),
    )
    return VisibilityReconciliationService(
        owner_id="alice",
        list_cache=cache,
        override_store=VisibilityOverrideStore(),
        writer=writer,
        notifications=NotificationCenter(),
    )


class TestDisplayedVisibility:
    """Test read-time precedence."""

    def test_cached_value(self):
        service = _service(AsyncMock(), visibility=Visibility.PUBLIC)

        assert service.get_displayed_visibility("c1") == Visibility.PUBLIC

    def test_unknown_chat_defaults_to_private(self):
        service = _service(AsyncMock())

        assert service.get_displayed_visibility("unknown") == Visibility.PRIVATE

    def test_pending_override_wins_over_cache(self):
        service = _service(AsyncMock())
        service.override_store.set("c1", Visibility.PUBLIC)

        assert service.get_displayed_visibility("c1") == Visibility.PUBLIC


class TestSetVisibilitySuccess:
    """Test the optimistic update with a successful write."""

    @pytest.mark.asyncio
    async def test_change_is_visible_before_the_response(self):
        """Test the displayed value changes before the server answers."""
        # Arrange
        writer = ControlledWriter()
        service = _service(writer)

        # Act
        task = asyncio.create_task(service.set_visibility("c1", Visibility.PUBLIC))
        await asyncio.sleep(0)

        # Assert
        assert service.get_displayed_visibility("c1") == Visibility.PUBLIC
        assert writer.calls[0][:2] == ("c1", Visibility.PUBLIC)

        writer.succeed(0)
        assert await task == OverrideStatus.CONFIRMED

    @pytest.mark.asyncio
    async def test_only_pages_with_the_chat_are_invalidated(self):
        # Arrange
        writer = ControlledWriter()
        service = _service(writer)
        other = PaginationKey("alice", 10, starting_after="c2")
        service.list_cache.put(other, create_page(create_test_chat(chat_id="c3", user_id="alice")))

        # Act
        task = asyncio.create_task(service.set_visibility("c1", Visibility.PUBLIC))
        await asyncio.sleep(0)

        # Assert
        assert service.list_cache.get(PaginationKey("alice", 10)) is None
        assert service.list_cache.get(other) is not None

        writer.succeed(0)
        await task

    @pytest.mark.asyncio
    async def test_confirmed_value_stays_displayed(self):
        """Test the confirmed value shows until the next page load."""
        writer = AsyncMock(return_value=None)
        service = _service(writer)

        result = await service.set_visibility("c1", Visibility.PUBLIC)

        assert result == OverrideStatus.CONFIRMED
        assert service.override_store.get("c1") is None
        assert service.get_displayed_visibility("c1") == Visibility.PUBLIC
        assert service.notifications.active() == []

    @pytest.mark.asyncio
    async def test_fresh_page_supersedes_confirmed_value(self):
        service = _service(AsyncMock(return_value=None))
        await service.set_visibility("c1", Visibility.PUBLIC)

        service.list_cache.put(
            PaginationKey("alice", 10),
            create_page(create_test_chat(chat_id="c1", user_id="alice")),
        )

        assert service.get_displayed_visibility("c1") == Visibility.PRIVATE


class TestSetVisibilityFailure:
    """Test revert on a failed write."""

    @pytest.mark.asyncio
    async def test_failure_reverts_and_notifies_once(self):
        # Arrange
        writer = ControlledWriter()
        service = _service(writer)

        # Act
        task = asyncio.create_task(service.set_visibility("c1", Visibility.PUBLIC))
        await asyncio.sleep(0)
        writer.fail(0)

        # Assert
        with pytest.raises(WriteFailureError) as exc_info:
            await task

        assert exc_info.value.error_code == "offline:chat"
        assert service.get_displayed_visibility("c1") == Visibility.PRIVATE
        assert service.override_store.get("c1") is None
        assert len(service.notifications.active()) == 1
        assert service.notifications.active()[0].chat_id == "c1"

    @pytest.mark.asyncio
    async def test_failure_restores_public_pre_edit_value(self):
        """Test the rollback target is the pre-edit value, not the default."""
        service = _service(AsyncMock(side_effect=RuntimeError("boom")), Visibility.PUBLIC)

        with pytest.raises(WriteFailureError):
            await service.set_visibility("c1", Visibility.PRIVATE)

        assert service.get_displayed_visibility("c1") == Visibility.PUBLIC

    @pytest.mark.asyncio
    async def test_retry_after_failure(self):
        writer = AsyncMock(side_effect=[RuntimeError("boom"), None])
        service = _service(writer)

        with pytest.raises(WriteFailureError):
            await service.set_visibility("c1", Visibility.PUBLIC)
        result = await service.set_visibility("c1", Visibility.PUBLIC)

        assert result == OverrideStatus.CONFIRMED
        assert service.get_displayed_visibility("c1") == Visibility.PUBLIC
        assert len(service.notifications.active()) == 1


class TestOutOfOrderResponses:
    """Test the sequence rule for overlapping writes to one chat."""

    @pytest.mark.asyncio
    async def test_late_first_success_does_not_override_second(self):
        """Test public-then-private with the first response arriving last."""
        # Arrange
        writer = ControlledWriter()
        service = _service(writer)

        # Act
        first = asyncio.create_task(service.set_visibility("c1", Visibility.PUBLIC))
        await asyncio.sleep(0)
        second = asyncio.create_task(service.set_visibility("c1", Visibility.PRIVATE))
        await asyncio.sleep(0)

        writer.succeed(1)
        second_result = await second
        writer.succeed(0)
        first_result = await first

        # Assert
        assert second_result == OverrideStatus.CONFIRMED
        assert first_result is None
        assert service.get_displayed_visibility("c1") == Visibility.PRIVATE

    @pytest.mark.asyncio
    async def test_stale_failure_is_discarded(self):
        """Test a failure for a superseded write neither reverts nor notifies."""
        # Arrange
        writer = ControlledWriter()
        service = _service(writer)

        first = asyncio.create_task(service.set_visibility("c1", Visibility.PUBLIC))
        await asyncio.sleep(0)
        second = asyncio.create_task(service.set_visibility("c1", Visibility.PRIVATE))
        await asyncio.sleep(0)

        # Act
        writer.fail(0)
        first_result = await first

        # Assert
        assert first_result is None
        assert service.override_store.get("c1").visibility == Visibility.PRIVATE
        assert service.notifications.active() == []

        writer.succeed(1)
        assert await second == OverrideStatus.CONFIRMED
        assert service.get_displayed_visibility("c1") == Visibility.PRIVATE

    @pytest.mark.asyncio
    async def test_stale_success_while_newer_write_pending(self):
        # Arrange
        writer = ControlledWriter()
        service = _service(writer)

        first = asyncio.create_task(service.set_visibility("c1", Visibility.PUBLIC))
        await asyncio.sleep(0)
        second = asyncio.create_task(service.set_visibility("c1", Visibility.PRIVATE))
        await asyncio.sleep(0)

        # Act
        writer.succeed(0)
        await first

        # Assert
        entry = service.override_store.get("c1")
        assert entry is not None and entry.is_pending
        assert service.get_displayed_visibility("c1") == Visibility.PRIVATE

        writer.succeed(1)
        await second

    @pytest.mark.asyncio
    async def test_writes_to_different_chats_are_independent(self):
        writer = ControlledWriter()
        service = _service(writer)

        first = asyncio.create_task(service.set_visibility("c1", Visibility.PUBLIC))
        second = asyncio.create_task(service.set_visibility("c2", Visibility.PUBLIC))
        await asyncio.sleep(0)

        writer.succeed(1)
        writer.succeed(0)

        assert await first == OverrideStatus.CONFIRMED
        assert await second == OverrideStatus.CONFIRMED
