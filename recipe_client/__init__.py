"""
Session-scoped client cache and data aggregator for the recipe web service.

This package contains:
- session: the Session object owning all client state
- utils.cache: expiring cache slots for the landing page and search results
- interactions: favorites, liked and watched recipe sets
- aggregate: concurrent, failure-tolerant refresh of the interaction sets
- lifecycle: login/logout state machine
- actions: optimistic toggles and cached page loaders
- backend: REST interface and its requests based implementation
"""

from recipe_client.aggregate import Aggregator
from recipe_client.lifecycle import SessionLifecycle, SessionState
from recipe_client.session import Session

__all__ = [
    "Aggregator",
    "Session",
    "SessionLifecycle",
    "SessionState",
]
