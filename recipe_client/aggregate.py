"""
Aggregated fetch of the user's interaction sets.

This module provides the Aggregator, which refreshes the favorites, liked and
watched sets of a Session from the backend:
- Issues every source fetch concurrently (none waits for another to start)
- Waits for all of them to settle; a failing source never cancels the others
- Canonicalizes the ids of each successful source and installs them with replace_all
- Empties the set of each failed source and records why it failed

The caller always gets an AggregateResult back. Only errors in the
orchestration itself propagate; per-source failures are reported in
AggregateResult.failures and AggregateResult.sources_status so that badges
degrade one at a time instead of blanking the page.

Fetch flow: page -> Aggregator.fetch_all() -> backend.get_watched/get_favorites/get_likes
-> canonical ids -> InteractionSet.replace_all()
"""

import asyncio
import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from recipe_client.backend.base import RecipeBackend
from recipe_client.errors import (
    BackendUnavailableError,
    InvalidRecipeIdError,
    NotAuthenticatedError,
    QuotaExceededError,
)
from recipe_client.interactions import FAVORITES, INTERACTION_KINDS, LIKED, WATCHED
from recipe_client.models import AggregateResult, canonical_recipe_id
from recipe_client.session import Session
from recipe_client.utils.tasks import call

logger = logging.getLogger(__name__)

PREFERENCE_KINDS = (FAVORITES, LIKED)

# Keys checked, in order, when the backend returns objects instead of bare ids
_ID_KEYS = ("recipeId", "recipe_id", "id")


def classify_failure(error: BaseException) -> str:
    """
    Map a source failure to its status string.

    Returns:
        "quota_exceeded", "unavailable", "unauthenticated" or "error"
    """
    if isinstance(error, QuotaExceededError):
        return "quota_exceeded"
    if isinstance(error, BackendUnavailableError):
        return "unavailable"
    if isinstance(error, NotAuthenticatedError):
        return "unauthenticated"
    return "error"


def normalize_ids(kind: str, payload: Any) -> List[str]:
    """
    Canonicalize the ids returned by one source.

    Accepts a list of bare ids or of objects carrying the id under recipeId,
    recipe_id or id. Blank or missing ids are skipped with a warning.

    Raises:
        TypeError: If the payload is not a list
    """
    if payload is None:
        return []
    if not isinstance(payload, (list, tuple)):
        raise TypeError(f"{kind} source returned {type(payload).__name__}, expected a list")

    ids: List[str] = []
    skipped = 0
    for item in payload:
        raw_id = item
        if isinstance(item, dict):
            raw_id = next((item[key] for key in _ID_KEYS if item.get(key) is not None), None)
        try:
            ids.append(canonical_recipe_id(raw_id))
        except InvalidRecipeIdError:
            skipped += 1
    if skipped:
        logger.warning("Skipped %d entries without a recipe id from %s", skipped, kind)
    return ids


class Aggregator:
    """
    Concurrent, failure-tolerant refresh of a session's interaction sets.

    Args:
        session: Session whose interaction sets are refreshed
        backend: Backend providing get_watched, get_favorites and get_likes
        sources: Optional override mapping kind -> fetch callable. Callables may be
            blocking or coroutine functions.
    """

    def __init__(
        self,
        session: Session,
        backend: Optional[RecipeBackend] = None,
        sources: Optional[Mapping[str, Callable[[], Any]]] = None,
    ):
        if sources is None:
            if backend is None:
                raise ValueError("Aggregator needs a backend or explicit sources")
            sources = {
                WATCHED: backend.get_watched,
                FAVORITES: backend.get_favorites,
                LIKED: backend.get_likes,
            }
        self.session = session
        self.sources: Dict[str, Callable[[], Any]] = dict(sources)

    async def fetch_all(self, include_watched: bool = True) -> AggregateResult:
        """
        Refresh the interaction sets from the backend.

        Args:
            include_watched: Also refresh the watched set (default: True). When
                False, the watched set is left untouched and reported as "skipped".

        Returns:
            AggregateResult with canonical ids per successful source, a failure
            reason per failed source and a status per source
        """
        kinds = INTERACTION_KINDS if include_watched else PREFERENCE_KINDS
        return await self._fetch(kinds)

    async def fetch_preferences(self) -> AggregateResult:
        """Refresh only favorites and likes, without viewing history."""
        return await self.fetch_all(include_watched=False)

    async def _fetch(self, kinds: Sequence[str]) -> AggregateResult:
        result = AggregateResult()
        interactions = self.session.interactions

        for kind in INTERACTION_KINDS:
            if kind not in kinds:
                result.sources_status[kind] = "skipped"

        if not self.session.is_authenticated:
            # Anonymous usage: nothing to fetch, no badges to show
            for kind in kinds:
                interactions.get(kind).clear()
                result.sources_status[kind] = "skipped"
            logger.debug("Aggregate fetch skipped for anonymous session")
            return result

        logger.debug("Aggregate fetch started for sources: %s", list(kinds))
        fetchers = [self.sources[kind] for kind in kinds]
        outcomes = await asyncio.gather(*(call(fetch) for fetch in fetchers), return_exceptions=True)

        for kind, outcome in zip(kinds, outcomes):
            target = interactions.get(kind)
            if isinstance(outcome, BaseException):
                self._record_failure(result, kind, outcome)
                target.clear()
                continue
            try:
                ids = normalize_ids(kind, outcome)
            except TypeError as e:
                self._record_failure(result, kind, e)
                target.clear()
                continue
            target.replace_all(ids)
            # Keep backend order (watched is most-recent-first)
            result.results[kind] = list(dict.fromkeys(ids))
            result.sources_status[kind] = "ok"

        logger.info(
            "Aggregate fetch finished: counts=%s status=%s",
            {kind: len(ids) for kind, ids in result.results.items()},
            result.sources_status,
        )
        return result

    @staticmethod
    def _record_failure(result: AggregateResult, kind: str, error: BaseException) -> None:
        status = classify_failure(error)
        reason = str(error) or type(error).__name__
        result.failures[kind] = reason
        result.sources_status[kind] = status
        if status == "error":
            logger.error("Unexpected error fetching %s: %s", kind, reason, exc_info=error)
        else:
            logger.warning("Failed to fetch %s (%s): %s", kind, status, reason)
