"""
Interaction State Module.

Tracks which recipes the current user has favorited, liked and watched. Each
kind is an InteractionSet of canonical recipe ids (see canonical_recipe_id).

Every id passed in from outside is canonicalized before it is stored or
compared. Mixing raw ids (7 vs "7" vs " 7") would make membership checks fail
silently, so nothing in this module compares uncanonicalized ids.

The sets are owned by the Session. UI code may read them; only the session
components (aggregator, actions, lifecycle) mutate them.
"""

import logging
from typing import Any, Dict, Iterable, Iterator, List, Set

from recipe_client.models import InteractionStatus, canonical_recipe_id

logger = logging.getLogger(__name__)

FAVORITES = "favorites"
LIKED = "liked"
WATCHED = "watched"

INTERACTION_KINDS = (WATCHED, FAVORITES, LIKED)


class InteractionSet:
    """
    A set of canonical recipe ids for one interaction kind.
    """

    def __init__(self, kind: str):
        self.kind = kind
        self._ids: Set[str] = set()

    def __contains__(self, raw_id: Any) -> bool:
        return self.contains(raw_id)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._ids))

    def __len__(self) -> int:
        return len(self._ids)

    def __repr__(self) -> str:
        return f"InteractionSet({self.kind!r}, {sorted(self._ids)!r})"

    def replace_all(self, raw_ids: Iterable[Any]) -> None:
        """
        Replace the whole set with the given ids.

        Used right after fetching the set from the backend, which is the source
        of truth. The new content is built first and swapped in with a single
        assignment.
        """
        self._ids = {canonical_recipe_id(raw_id) for raw_id in raw_ids}

    def contains(self, raw_id: Any) -> bool:
        return canonical_recipe_id(raw_id) in self._ids

    def add(self, raw_id: Any) -> None:
        self._ids.add(canonical_recipe_id(raw_id))

    def remove(self, raw_id: Any) -> None:
        self._ids.discard(canonical_recipe_id(raw_id))

    def toggle(self, raw_id: Any) -> bool:
        """
        Flip membership of a recipe.

        Returns:
            True if the recipe is now in the set, False if it was removed
        """
        recipe_id = canonical_recipe_id(raw_id)
        if recipe_id in self._ids:
            self._ids.remove(recipe_id)
            return False
        self._ids.add(recipe_id)
        return True

    def clear(self) -> None:
        self._ids = set()

    def ids(self) -> List[str]:
        """Sorted snapshot of the canonical ids."""
        return sorted(self._ids)


class InteractionSets:
    """The favorites, liked and watched sets of one session."""

    def __init__(self):
        self.favorites = InteractionSet(FAVORITES)
        self.liked = InteractionSet(LIKED)
        self.watched = InteractionSet(WATCHED)

    def get(self, kind: str) -> InteractionSet:
        """
        Look up a set by kind name.

        Raises:
            KeyError: If kind is not one of favorites, liked, watched
        """
        sets = {FAVORITES: self.favorites, LIKED: self.liked, WATCHED: self.watched}
        if kind not in sets:
            raise KeyError(f"Unknown interaction kind: {kind!r}")
        return sets[kind]

    def status(self, raw_id: Any) -> InteractionStatus:
        recipe_id = canonical_recipe_id(raw_id)
        return InteractionStatus(
            recipe_id=recipe_id,
            is_favorite=self.favorites.contains(recipe_id),
            is_liked=self.liked.contains(recipe_id),
            is_watched=self.watched.contains(recipe_id),
        )

    def statuses(self, raw_ids: Iterable[Any]) -> Dict[str, InteractionStatus]:
        """
        Badge flags for a list of recipes in one pass.

        Returns:
            Mapping of canonical recipe id to its InteractionStatus
        """
        result: Dict[str, InteractionStatus] = {}
        for raw_id in raw_ids:
            status = self.status(raw_id)
            result[status.recipe_id] = status
        return result

    def clear(self) -> None:
        for kind in INTERACTION_KINDS:
            self.get(kind).clear()
