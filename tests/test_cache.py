"""
Tests for the expiring cache slots.

These tests verify that:
- A written value is served until its TTL passes and dropped afterwards
- Expiration is detected lazily at read time
- Explicit invalidation always empties the slot
- The search slot never expires and remembers its query
"""

import pytest

from recipe_client.utils.cache import NO_EXPIRY, SearchCache, TTLCache


class FakeClock:
    """Manually advanced time source."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


class TestTTLCache:
    """Test cases for TTLCache."""

    def test_new_slot_is_empty(self, clock):
        """Test that a fresh slot reads as empty and is not valid."""
        cache = TTLCache(ttl_seconds=60, clock=clock)
        assert cache.read() is None
        assert cache.is_valid() is False
        assert cache.created_at is None

    @pytest.mark.parametrize("elapsed", [0, 1, 59.9, 60])
    def test_read_within_ttl_returns_value(self, clock, elapsed):
        """Test that the value is served for any age up to the TTL."""
        cache = TTLCache(ttl_seconds=60, clock=clock)
        cache.write({"page": 1})
        clock.advance(elapsed)
        assert cache.read() == {"page": 1}
        assert cache.is_valid() is True

    @pytest.mark.parametrize("elapsed", [60.1, 61, 3600])
    def test_read_after_ttl_returns_empty_and_invalidates(self, clock, elapsed):
        """Test that an expired value is dropped on read."""
        cache = TTLCache(ttl_seconds=60, clock=clock)
        cache.write("value")
        clock.advance(elapsed)
        assert cache.read() is None
        assert cache.is_valid() is False
        assert cache.created_at is None

    def test_is_valid_does_not_clear_expired_value(self, clock):
        """Test that is_valid reports expiry without emptying the slot."""
        cache = TTLCache(ttl_seconds=10, clock=clock)
        cache.write("value")
        clock.advance(11)
        assert cache.is_valid() is False
        # created_at still set: only read() clears
        assert cache.created_at is not None
        assert cache.read() is None
        assert cache.created_at is None

    def test_invalidate_empties_fresh_slot(self, clock):
        """Test that invalidate wins over freshness."""
        cache = TTLCache(ttl_seconds=60, clock=clock)
        cache.write("value")
        cache.invalidate()
        assert cache.read() is None
        assert cache.is_valid() is False

    def test_write_overwrites_and_restamps(self, clock):
        """Test that a second write replaces the value and resets its age."""
        cache = TTLCache(ttl_seconds=60, clock=clock)
        cache.write("old")
        clock.advance(50)
        cache.write("new")
        clock.advance(50)
        assert cache.read() == "new"

    def test_landing_page_scenario_five_minutes(self, clock):
        """Test a five minute landing page slot read at 4 and 6 minutes."""
        cache = TTLCache(ttl_seconds=5 * 60, clock=clock)
        main_page_data = {"random_recipes": ["1", "2", "3"]}
        cache.write(main_page_data)

        clock.advance(4 * 60)
        assert cache.read() == main_page_data

        clock.advance(2 * 60)
        assert cache.read() is None

    def test_no_expiry_slot_valid_whenever_written(self, clock):
        """Test that a slot without TTL never expires on its own."""
        cache = TTLCache(ttl_seconds=NO_EXPIRY, clock=clock)
        cache.write("value")
        clock.advance(10 ** 9)
        assert cache.read() == "value"


class TestSearchCache:
    """Test cases for SearchCache."""

    def test_write_records_query(self, clock):
        """Test that the query is stored alongside the results."""
        cache = SearchCache(clock=clock)
        cache.write(["r1"], query_params={"query": "pasta", "number": 5})
        assert cache.read() == ["r1"]
        assert cache.query_params == {"query": "pasta", "number": 5}

    def test_new_search_overwrites_previous(self, clock):
        """Test that results are replaced, never merged."""
        cache = SearchCache(clock=clock)
        cache.write(["r1", "r2"], query_params={"query": "pasta"})
        cache.write(["r3"], query_params={"query": "soup"})
        assert cache.read() == ["r3"]
        assert cache.query_params == {"query": "soup"}

    def test_never_expires(self, clock):
        """Test that the search slot has no TTL."""
        cache = SearchCache(clock=clock)
        cache.write(["r1"], query_params={"query": "pasta"})
        clock.advance(24 * 3600)
        assert cache.read() == ["r1"]

    def test_invalidate_clears_query(self, clock):
        """Test that invalidation also forgets the recorded query."""
        cache = SearchCache(clock=clock)
        cache.write(["r1"], query_params={"query": "pasta"})
        cache.invalidate()
        assert cache.read() is None
        assert cache.query_params is None

    def test_matches_compares_query(self, clock):
        """Test informational comparison of the cached query."""
        cache = SearchCache(clock=clock)
        assert cache.matches({"query": "pasta"}) is False
        cache.write(["r1"], query_params={"query": "pasta"})
        assert cache.matches({"query": "pasta"}) is True
        assert cache.matches({"query": "soup"}) is False

    def test_query_is_copied(self, clock):
        """Test that later mutation of the caller's dict does not leak into the cache."""
        cache = SearchCache(clock=clock)
        params = {"query": "pasta"}
        cache.write(["r1"], query_params=params)
        params["query"] = "soup"
        assert cache.query_params == {"query": "pasta"}
