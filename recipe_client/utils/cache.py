"""
In-process expiring cache slots for session data.

This module provides a single-value cache slot with lazy expiration. The
session owns two of them:
- the landing page slot, which expires after a few minutes
- the search slot, which never expires and is only cleared explicitly

Expiration is only observed at read time; there is no background sweep.
The slot never raises: absence of a fresh value is reported as None.
"""

import logging
import math
import time
from typing import Any, Callable, Dict, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Slots with this TTL never expire on their own
NO_EXPIRY = math.inf


class TTLCache(Generic[T]):
    """
    A single expiring cache slot.

    Invariant: value is None iff created_at is None.

    Args:
        ttl_seconds: Lifetime of a written value (NO_EXPIRY for none)
        name: Slot name used in log messages
        clock: Returns the current time in seconds (default: time.time)
    """

    def __init__(
        self,
        ttl_seconds: float = NO_EXPIRY,
        name: str = "cache",
        clock: Callable[[], float] = time.time,
    ):
        self.ttl_seconds = ttl_seconds
        self.name = name
        self._clock = clock
        self._value: Optional[T] = None
        self._created_at: Optional[float] = None

    @property
    def created_at(self) -> Optional[float]:
        return self._created_at

    def _is_fresh(self) -> bool:
        if self._created_at is None:
            return False
        if math.isinf(self.ttl_seconds):
            return True
        return self._clock() - self._created_at <= self.ttl_seconds

    def is_valid(self) -> bool:
        """Check freshness without clearing an expired value."""
        return self._is_fresh()

    def read(self) -> Optional[T]:
        """
        Return the cached value if it is still fresh.

        An expired value is dropped from the slot before returning None.

        Returns:
            Cached value, or None if the slot is empty or expired
        """
        if self._created_at is None:
            logger.debug("Cache %s miss (empty)", self.name)
            return None

        if not self._is_fresh():
            logger.debug("Cache %s expired after %.1fs", self.name, self._clock() - self._created_at)
            self.invalidate()
            return None

        logger.debug("Cache %s hit", self.name)
        return self._value

    def write(self, value: T) -> None:
        """Store a value, replacing anything already cached, and stamp it with the current time."""
        self._value = value
        self._created_at = self._clock()

    def invalidate(self) -> None:
        """Empty the slot regardless of age."""
        self._value = None
        self._created_at = None


class SearchCache(TTLCache[T]):
    """
    Cache slot for the most recent search, remembering the query that produced it.

    A new search always overwrites the slot; results are never merged.
    """

    def __init__(
        self,
        ttl_seconds: float = NO_EXPIRY,
        name: str = "search",
        clock: Callable[[], float] = time.time,
    ):
        super().__init__(ttl_seconds=ttl_seconds, name=name, clock=clock)
        self._query_params: Optional[Dict[str, Any]] = None

    @property
    def query_params(self) -> Optional[Dict[str, Any]]:
        """Query recorded with the cached value, or None when the slot is empty."""
        if self._created_at is None:
            return None
        return self._query_params

    def write(self, value: T, query_params: Optional[Dict[str, Any]] = None) -> None:
        super().write(value)
        self._query_params = dict(query_params) if query_params else {}

    def invalidate(self) -> None:
        super().invalidate()
        self._query_params = None

    def matches(self, query_params: Dict[str, Any]) -> bool:
        """True if the slot is fresh and was written for the same query."""
        return self.is_valid() and self._query_params == dict(query_params)
