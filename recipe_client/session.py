"""
The Session object: all mutable client state for one logical user session.

A Session is created once per client and passed explicitly to the aggregator,
lifecycle and actions. Nothing in the package keeps module-level session
state, so tests can build a fresh Session for each case.
"""

import time
from typing import Callable, Optional

from recipe_client.config import CacheConfig
from recipe_client.identity import IdentityState
from recipe_client.interactions import InteractionSets
from recipe_client.models import LandingPage, SearchResults
from recipe_client.utils.cache import NO_EXPIRY, SearchCache, TTLCache


class Session:
    """
    Identity, interaction sets and the two cache slots of one session.

    Args:
        landing_ttl_seconds: Landing page cache lifetime
            (default: RECIPES_LANDING_CACHE_TTL_SECONDS)
        clock: Time source shared by both cache slots
    """

    def __init__(
        self,
        landing_ttl_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.time,
    ):
        if landing_ttl_seconds is None:
            landing_ttl_seconds = CacheConfig.get_landing_ttl_seconds()
        self.identity = IdentityState()
        self.interactions = InteractionSets()
        self.landing_cache: TTLCache[LandingPage] = TTLCache(
            ttl_seconds=landing_ttl_seconds, name="landing", clock=clock
        )
        self.search_cache: SearchCache[SearchResults] = SearchCache(
            ttl_seconds=NO_EXPIRY, name="search", clock=clock
        )

    @property
    def username(self) -> Optional[str]:
        return self.identity.principal

    @property
    def is_authenticated(self) -> bool:
        return self.identity.is_authenticated

    def reset(self) -> None:
        """Drop everything the session knows about the user."""
        self.identity.clear()
        self.interactions.clear()
        self.landing_cache.invalidate()
        self.search_cache.invalidate()
