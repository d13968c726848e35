"""
User actions and page loaders built on the session caches.

Optimistic interactions (toggle_favorite, toggle_like, mark_watched):
1. Validate the recipe id (InvalidRecipeIdError before any network call)
2. Apply the change to the local InteractionSet immediately
3. Invalidate the landing page cache, which embeds per-recipe flags
4. Call the backend; on failure undo the local change and re-raise so the
   initiating component can revert its UI

Page loaders (load_landing_page, search_recipes, open_recipe) decide whether a
cache slot can be served or fresh fetches are needed, and write results back
into the session.

# NOTE: There is no cancellation. A load that is superseded (the user navigated
    away) still completes and may write its now stale result into the cache.
"""

import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional

from pydantic import ValidationError

from recipe_client.aggregate import Aggregator, normalize_ids
from recipe_client.backend.base import RecipeBackend
from recipe_client.config import CacheConfig
from recipe_client.errors import RecipeClientError
from recipe_client.interactions import WATCHED, InteractionSet
from recipe_client.models import LandingPage, Recipe, SearchResults, canonical_recipe_id
from recipe_client.session import Session
from recipe_client.utils.tasks import call

logger = logging.getLogger(__name__)


async def _toggle(
    session: Session,
    target: InteractionSet,
    raw_id: Any,
    add: Callable[[str], Any],
    remove: Callable[[str], Any],
) -> bool:
    recipe_id = canonical_recipe_id(raw_id)
    now_present = target.toggle(recipe_id)
    session.landing_cache.invalidate()

    remote = add if now_present else remove
    try:
        await call(remote, recipe_id)
    except Exception as e:
        # Compensating action: restore the membership we had before
        target.toggle(recipe_id)
        logger.warning("Rolled back %s toggle for recipe %s: %s", target.kind, recipe_id, e)
        raise

    logger.debug("Recipe %s %s %s", recipe_id, "added to" if now_present else "removed from", target.kind)
    return now_present


async def toggle_favorite(session: Session, backend: RecipeBackend, recipe_id: Any) -> bool:
    """
    Optimistically toggle a recipe's favorite flag.

    Returns:
        True if the recipe is now a favorite, False if it was removed

    Raises:
        InvalidRecipeIdError: If recipe_id is missing or blank
        RecipeClientError: If the backend call failed (local state rolled back)
    """
    return await _toggle(
        session, session.interactions.favorites, recipe_id, backend.add_favorite, backend.remove_favorite
    )


async def toggle_like(session: Session, backend: RecipeBackend, recipe_id: Any) -> bool:
    """Optimistically toggle a recipe's like flag. Same contract as toggle_favorite."""
    return await _toggle(
        session, session.interactions.liked, recipe_id, backend.add_like, backend.remove_like
    )


async def mark_watched(session: Session, backend: RecipeBackend, recipe_id: Any) -> None:
    """
    Optimistically record a recipe as watched.

    Raises:
        InvalidRecipeIdError: If recipe_id is missing or blank
        RecipeClientError: If the backend call failed (local state rolled back)
    """
    clean_id = canonical_recipe_id(recipe_id)
    watched = session.interactions.watched
    was_watched = watched.contains(clean_id)
    watched.add(clean_id)
    session.landing_cache.invalidate()
    try:
        await call(backend.add_watched, clean_id)
    except Exception as e:
        if not was_watched:
            watched.remove(clean_id)
        logger.warning("Rolled back watched mark for recipe %s: %s", clean_id, e)
        raise


async def recent_watched(backend: RecipeBackend, count: Optional[int] = None) -> List[str]:
    """
    Most recently watched recipe ids.

    The backend returns watched ids most-recent-first, so this takes the
    first `count` entries, dropping duplicates.
    """
    if count is None:
        count = CacheConfig.get_recent_watched_count()
    if count <= 0:
        return []
    raw_ids = await call(backend.get_watched)
    return most_recent(normalize_ids(WATCHED, raw_ids), count)


def most_recent(watched_ids: List[str], count: int) -> List[str]:
    """First `count` distinct ids of a most-recent-first watched list."""
    if count <= 0:
        return []
    return list(dict.fromkeys(watched_ids))[:count]


async def _load_recipes(backend: RecipeBackend, recipe_ids: List[str]) -> List[Recipe]:
    outcomes = await asyncio.gather(
        *(call(backend.get_recipe_info, recipe_id) for recipe_id in recipe_ids),
        return_exceptions=True,
    )
    recipes: List[Recipe] = []
    for recipe_id, outcome in zip(recipe_ids, outcomes):
        if isinstance(outcome, BaseException):
            logger.warning("Failed to load recipe %s: %s", recipe_id, outcome)
            continue
        try:
            recipes.append(Recipe.model_validate(outcome))
        except ValidationError as e:
            logger.warning("Skipping malformed recipe %s: %s", recipe_id, e)
    return recipes


async def load_landing_page(
    session: Session,
    backend: RecipeBackend,
    aggregator: Optional[Aggregator] = None,
    number: Optional[int] = None,
    force_refresh: bool = False,
) -> LandingPage:
    """
    Load the landing page, serving the cached snapshot while it is fresh.

    On a miss this fetches random recipes, refreshes the interaction sets for
    an authenticated user, resolves the recently watched recipes and caches the
    assembled page.

    Args:
        session: Current session
        backend: Recipe backend
        aggregator: Aggregator for the session (built from backend if omitted)
        number: Number of random recipes (default: RECIPES_RANDOM_COUNT)
        force_refresh: Ignore the cached snapshot

    Returns:
        LandingPage snapshot

    Raises:
        QuotaExceededError: If the recipe provider quota is exhausted; nothing is cached
        BackendUnavailableError: If random recipes could not be fetched
    """
    if not force_refresh:
        cached = session.landing_cache.read()
        if cached is not None:
            return cached

    if number is None:
        number = CacheConfig.get_random_count()
    raw_recipes = await call(backend.get_random_recipes, number)
    random_recipes = [Recipe.model_validate(raw) for raw in raw_recipes or []]

    last_watched: List[Recipe] = []
    if session.is_authenticated:
        aggregator = aggregator or Aggregator(session, backend)
        outcome = await aggregator.fetch_all()
        if outcome.failures:
            logger.warning("Landing page badges degraded; failed sources: %s", outcome.failed_sources)
        # Reuse the watched ids the aggregate fetch already returned
        watched_ids = outcome.results.get(WATCHED, [])
        recent_ids = most_recent(watched_ids, CacheConfig.get_recent_watched_count())
        last_watched = await _load_recipes(backend, recent_ids)

    shown_ids = [r.id for r in random_recipes] + [r.id for r in last_watched]
    page = LandingPage(
        random_recipes=random_recipes,
        last_watched=last_watched,
        statuses=session.interactions.statuses(shown_ids),
    )
    session.landing_cache.write(page)
    return page


async def search_recipes(
    session: Session, backend: RecipeBackend, search_params: Dict[str, Any]
) -> SearchResults:
    """
    Run a recipe search and cache it as the latest search.

    A new search always overwrites the cached one.

    Raises:
        BackendUnavailableError: If the search failed; the previous cached search is kept
    """
    data = await call(backend.search_recipes, dict(search_params))
    if isinstance(data, dict):
        data = data.get("results", [])
    results = SearchResults(
        query=dict(search_params),
        recipes=[Recipe.model_validate(raw) for raw in data or []],
    )
    session.search_cache.write(results, query_params=search_params)
    logger.debug("Search %r returned %d recipes", search_params, len(results.recipes))
    return results


def last_search(session: Session) -> Optional[SearchResults]:
    """The cached results of the latest search, or None."""
    return session.search_cache.read()


async def open_recipe(session: Session, backend: RecipeBackend, recipe_id: Any) -> Recipe:
    """
    Load a recipe for its detail page.

    Records it in recently viewed and, for an authenticated user, as watched.
    Failing to record the watch is logged and does not fail the page.

    Raises:
        InvalidRecipeIdError: If recipe_id is missing or blank
        RecipeClientError: If the recipe itself could not be loaded
    """
    clean_id = canonical_recipe_id(recipe_id)
    recipe = Recipe.model_validate(await call(backend.get_recipe_info, clean_id))
    session.identity.add_recently_viewed(recipe)

    if session.is_authenticated:
        try:
            await mark_watched(session, backend, clean_id)
        except RecipeClientError as e:
            logger.warning("Could not record recipe %s as watched: %s", clean_id, e)
    return recipe
