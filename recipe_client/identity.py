"""
Identity state for the current session.

Holds the authenticated username (or None for anonymous usage) and the short
"recently viewed" list shown on the landing page. Recently viewed recipes are
kept most-recent-first, deduplicated by canonical recipe id, and capped at
RECENTLY_VIEWED_LIMIT entries.
"""

import logging
from typing import List, Optional

from recipe_client.models import Recipe

logger = logging.getLogger(__name__)

RECENTLY_VIEWED_LIMIT = 3


class IdentityState:
    """Current principal and recently viewed recipes."""

    def __init__(self, recently_viewed_limit: int = RECENTLY_VIEWED_LIMIT):
        self.principal: Optional[str] = None
        self._recently_viewed: List[Recipe] = []
        self._limit = recently_viewed_limit

    @property
    def is_authenticated(self) -> bool:
        return self.principal is not None

    @property
    def recently_viewed(self) -> List[Recipe]:
        """Recently viewed recipes, most recent first (a copy)."""
        return list(self._recently_viewed)

    def add_recently_viewed(self, recipe: Recipe) -> None:
        """
        Record a recipe view.

        A recipe that was already in the list moves to the front instead of
        appearing twice. The oldest entry drops off once the limit is reached.
        """
        remaining = [r for r in self._recently_viewed if r.id != recipe.id]
        self._recently_viewed = [recipe] + remaining[: self._limit - 1]

    def clear_recently_viewed(self) -> None:
        self._recently_viewed = []

    def clear(self) -> None:
        """Forget the principal and the viewing history."""
        self.principal = None
        self.clear_recently_viewed()
