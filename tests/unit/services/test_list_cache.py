"""
Unit tests for ListCache and PaginationKey.
"""

import pytest

from application.entity.chat import Visibility
from application.models import ListChatsParams
from application.services.history import ListCache, PaginationKey
from common.exception import BadRequestError
from tests.fixtures.chat_fixtures import create_page, create_test_chat


class FakeClock:
    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestPaginationKey:
    """Test key identity and validation."""

    def test_equal_iff_all_fields_match(self):
        assert PaginationKey("alice", 10) == PaginationKey("alice", 10)
        assert PaginationKey("alice", 10) != PaginationKey("alice", 20)
        assert PaginationKey("alice", 10, starting_after="c1") != PaginationKey(
            "alice", 10, ending_before="c1"
        )

    def test_cursors_are_mutually_exclusive(self):
        with pytest.raises(BadRequestError):
            PaginationKey("alice", 10, starting_after="a", ending_before="b")

    def test_from_params_and_query(self):
        key = PaginationKey.from_params("alice", ListChatsParams(limit=5, starting_after="c9"))

        assert key == PaginationKey("alice", 5, starting_after="c9")
        assert key.to_query() == {"limit": "5", "starting_after": "c9"}


class TestListCache:
    """Test get/put/invalidate."""

    def test_miss_then_hit(self):
        # Arrange
        cache = ListCache(clock=FakeClock(12.0))
        key = PaginationKey("alice", 10)
        page = create_page(create_test_chat(chat_id="c1"))

        # Act
        miss = cache.get(key)
        cache.put(key, page)
        hit = cache.get(key)

        # Assert
        assert miss is None
        assert hit.page is page
        assert hit.fetched_at == 12.0

    def test_put_overwrites(self):
        cache = ListCache()
        key = PaginationKey("alice", 10)
        cache.put(key, create_page(create_test_chat(chat_id="old")))

        cache.put(key, create_page(create_test_chat(chat_id="new")))

        assert cache.get(key).page.chat_ids() == ("new",)
        assert len(cache) == 1

    def test_invalidate_chat_drops_only_pages_containing_it(self):
        """Test a visibility change invalidates only pages holding that chat."""
        # Arrange
        cache = ListCache()
        first = PaginationKey("alice", 2)
        second = PaginationKey("alice", 2, starting_after="c2")
        cache.put(first, create_page(create_test_chat(chat_id="c1"), create_test_chat(chat_id="c2")))
        cache.put(second, create_page(create_test_chat(chat_id="c3")))

        # Act
        dropped = cache.invalidate_chat("c1")

        # Assert
        assert dropped == 1
        assert cache.get(first) is None
        assert cache.get(second) is not None

    def test_invalidate_by_predicate(self):
        cache = ListCache()
        cache.put(PaginationKey("alice", 10), create_page())
        cache.put(PaginationKey("alice", 20), create_page())

        dropped = cache.invalidate(lambda key, _entry: key.limit == 20)

        assert dropped == 1
        assert cache.keys() == [PaginationKey("alice", 10)]

    def test_no_ttl_by_default(self):
        clock = FakeClock()
        cache = ListCache(clock=clock)
        key = PaginationKey("alice", 10)
        cache.put(key, create_page())

        clock.now = 10_000_000.0

        assert cache.get(key) is not None

    def test_optional_ttl_expires_entries(self):
        clock = FakeClock()
        cache = ListCache(ttl_seconds=30, clock=clock)
        key = PaginationKey("alice", 10)
        cache.put(key, create_page(create_test_chat(chat_id="c1")))

        clock.now = 31.0

        assert cache.get(key) is None
        assert cache.find_chat("alice", "c1") is None
        assert len(cache) == 0

    def test_find_chat_prefers_most_recent_fetch(self):
        # Arrange
        clock = FakeClock(1.0)
        cache = ListCache(clock=clock)
        cache.put(PaginationKey("alice", 10), create_page(create_test_chat(chat_id="c1")))
        clock.now = 2.0
        cache.put(
            PaginationKey("alice", 5),
            create_page(create_test_chat(chat_id="c1", visibility=Visibility.PUBLIC)),
        )

        # Act
        chat = cache.find_chat("alice", "c1")

        # Assert
        assert chat.visibility == Visibility.PUBLIC

    def test_find_chat_is_scoped_to_owner(self):
        cache = ListCache()
        cache.put(PaginationKey("bob", 10), create_page(create_test_chat(chat_id="c1")))

        assert cache.find_chat("alice", "c1") is None

    def test_clear(self):
        cache = ListCache()
        cache.put(PaginationKey("alice", 10), create_page())

        cache.clear()

        assert len(cache) == 0

    def test_invalidation_is_visible_to_fetches_started_earlier(self):
        # Arrange
        cache = ListCache()
        started_at = cache.generation

        # Act
        dropped = cache.invalidate_chat("c1")

        # Assert
        assert dropped == 0
        assert cache.generation > started_at
        assert cache.invalidated_since(["c0", "c1"], started_at)
        assert not cache.invalidated_since(["c2"], started_at)
        assert not cache.invalidated_since(["c1"], cache.generation)
