"""
Data models for the recipe client.

Recipes arrive from two upstream providers with different identifier spaces:
plain numeric ids and alphanumeric provider-prefixed ids. Every model here
stores identifiers in canonical string form (see canonical_recipe_id) so that
comparisons across providers and caches agree.

# NOTE: Recipe allows extra fields. The backend passes provider payloads through
    mostly untouched and the UI reads fields we do not model explicitly.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from recipe_client.errors import InvalidRecipeIdError


def canonical_recipe_id(raw_id: Any) -> str:
    """
    Convert a raw recipe identifier into its canonical string form.

    Numeric ids are stringified and prefixed ids pass through unchanged; both
    are stripped of surrounding whitespace. Never treat ids as numbers: that
    would corrupt provider-prefixed ids.

    Args:
        raw_id: Identifier as received from the backend or the UI (int or str)

    Returns:
        Canonical string identifier

    Raises:
        InvalidRecipeIdError: If the id is None or blank after stripping

    Examples:
        >>> canonical_recipe_id(7)
        '7'
        >>> canonical_recipe_id(" S123 ")
        'S123'
    """
    if raw_id is None or isinstance(raw_id, bool):
        raise InvalidRecipeIdError("Recipe ID is required")
    canonical = str(raw_id).strip()
    if not canonical:
        raise InvalidRecipeIdError("Recipe ID is required")
    return canonical


class Recipe(BaseModel):
    """
    Recipe preview as returned by /recipes/random, /recipes/info and /recipes/Search.
    """
    id: str = Field(..., description="Canonical recipe identifier")
    title: Optional[str] = Field(None, description="Recipe title")
    image: Optional[str] = Field(None, description="URL to recipe image")
    ready_in_minutes: Optional[int] = Field(None, alias="readyInMinutes", description="Total preparation time")
    popularity: Optional[int] = Field(None, description="Number of likes reported by the provider")
    vegan: Optional[bool] = None
    vegetarian: Optional[bool] = None
    gluten_free: Optional[bool] = Field(None, alias="glutenFree")

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    @field_validator("id", mode="before")
    @classmethod
    def _canonicalize_id(cls, value: Any) -> str:
        return canonical_recipe_id(value)


class InteractionStatus(BaseModel):
    """Per-recipe badge flags for the current user."""
    recipe_id: str
    is_favorite: bool = False
    is_liked: bool = False
    is_watched: bool = False


class AggregateResult(BaseModel):
    """
    Outcome of one aggregate fetch of the user's interaction sets.

    - results: canonical ids per source, for sources that succeeded
    - failures: failure reason per source, for sources that failed
    - sources_status: one of "ok", "unavailable", "quota_exceeded",
      "unauthenticated", "error", "skipped" per source
    """
    results: Dict[str, List[str]] = Field(default_factory=dict)
    failures: Dict[str, str] = Field(default_factory=dict)
    sources_status: Dict[str, str] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """True when no source failed."""
        return not self.failures

    @property
    def failed_sources(self) -> List[str]:
        return sorted(self.failures)


class LandingPage(BaseModel):
    """Snapshot rendered by the landing page, including per-recipe flags."""
    random_recipes: List[Recipe] = Field(default_factory=list)
    last_watched: List[Recipe] = Field(default_factory=list)
    statuses: Dict[str, InteractionStatus] = Field(default_factory=dict)


class SearchResults(BaseModel):
    """Result of a recipe search along with the query that produced it."""
    query: Dict[str, Any] = Field(default_factory=dict)
    recipes: List[Recipe] = Field(default_factory=list)
