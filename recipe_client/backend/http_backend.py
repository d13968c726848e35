"""
HTTP backend for the recipe web service.

This module is the single place where HTTP calls to the recipe backend are
made. It uses one requests.Session per client so that the session cookie set
by POST /Login is sent with every following request.

Key principles:
- Every requests exception is translated into the recipe_client.errors taxonomy
- HTTP 402 from the recipe provider becomes QuotaExceededError
- HTTP 401 becomes NotAuthenticatedError
- Recipe ids are always sent as canonical strings (prefixed ids must survive)
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from recipe_client.backend.base import RecipeBackend
from recipe_client.config import ServerConfig
from recipe_client.errors import BackendUnavailableError, NotAuthenticatedError, QuotaExceededError
from recipe_client.models import canonical_recipe_id

logger = logging.getLogger(__name__)


class HttpRecipeBackend(RecipeBackend):
    """
    requests based implementation of RecipeBackend.

    Args:
        server_domain: Backend origin (default: RECIPES_SERVER_DOMAIN)
        timeout: Per-request timeout in seconds (default: RECIPES_REQUEST_TIMEOUT)
        session: Optional pre-configured requests.Session
    """

    def __init__(
        self,
        server_domain: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.server_domain = (server_domain or ServerConfig.get_server_domain()).rstrip("/")
        self.timeout = timeout if timeout is not None else ServerConfig.get_request_timeout()
        self.http = session or requests.Session()

    def _url(self, path: str) -> str:
        return f"{self.server_domain}{path}"

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        """
        Issue a request and return the decoded JSON body (None for empty bodies).

        Raises:
            QuotaExceededError: On HTTP 402
            NotAuthenticatedError: On HTTP 401
            BackendUnavailableError: On any other transport or HTTP failure
        """
        url = self._url(path)
        logger.debug("%s %s", method, url)
        try:
            response = self.http.request(method, url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            if status_code == 402:
                raise QuotaExceededError(
                    "Recipe provider quota exceeded. Please try again later.",
                    status_code=status_code,
                ) from e
            if status_code == 401:
                raise NotAuthenticatedError(f"{method} {path}: not authenticated") from e
            raise BackendUnavailableError(
                f"{method} {path} failed with status {status_code}", status_code=status_code
            ) from e
        except requests.exceptions.Timeout as e:
            raise BackendUnavailableError(f"{method} {path} timed out") from e
        except requests.exceptions.ConnectionError as e:
            raise BackendUnavailableError(f"Could not connect to backend for {method} {path}") from e
        except requests.exceptions.RequestException as e:
            raise BackendUnavailableError(f"{method} {path} failed: {e}") from e

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise BackendUnavailableError(
                f"{method} {path} returned invalid JSON", status_code=response.status_code
            ) from e

    def _get_list(self, path: str) -> List[Any]:
        data = self._request("GET", path)
        if data is None:
            return []
        if not isinstance(data, list):
            raise BackendUnavailableError(f"GET {path} returned {type(data).__name__}, expected a list")
        return data

    def _mutate(self, method: str, path: str, recipe_id: Any) -> bool:
        clean_id = canonical_recipe_id(recipe_id)
        self._request(method, path, json={"recipeId": clean_id})
        return True

    # Authentication

    def get_me(self) -> str:
        data = self._request("GET", "/me")
        username = data.get("username") if isinstance(data, dict) else None
        if not username:
            raise NotAuthenticatedError("GET /me returned no username")
        return username

    def register(self, user_data: Dict[str, Any]) -> Any:
        return self._request("POST", "/Register", json=user_data)

    def login(self, username: str, password: str) -> Any:
        return self._request("POST", "/Login", json={"username": username, "password": password})

    def logout(self) -> Any:
        return self._request("POST", "/Logout", json={})

    def check_alive(self) -> bool:
        """Health check; never raises."""
        try:
            self._request("GET", "/alive")
            return True
        except BackendUnavailableError:
            logger.error("Server not responding at %s", self.server_domain)
            return False

    # User interaction sets

    def get_favorites(self) -> List[Any]:
        return self._get_list("/users/favorites")

    def add_favorite(self, recipe_id: str) -> bool:
        return self._mutate("POST", "/users/favorites", recipe_id)

    def remove_favorite(self, recipe_id: str) -> bool:
        return self._mutate("DELETE", "/users/favorites", recipe_id)

    def get_likes(self) -> List[Any]:
        return self._get_list("/users/likes")

    def add_like(self, recipe_id: str) -> bool:
        return self._mutate("POST", "/users/likes", recipe_id)

    def remove_like(self, recipe_id: str) -> bool:
        return self._mutate("DELETE", "/users/likes", recipe_id)

    def get_watched(self) -> List[Any]:
        return self._get_list("/users/watched")

    def add_watched(self, recipe_id: str) -> bool:
        return self._mutate("POST", "/users/watched", recipe_id)

    def remove_watched(self, recipe_id: str) -> bool:
        return self._mutate("DELETE", "/users/watched", recipe_id)

    # User-created recipes

    def get_my_recipes(self) -> List[Any]:
        return self._get_list("/users/myRecipes")

    def get_my_family_recipes(self) -> List[Any]:
        return self._get_list("/users/myFamilyRecipes")

    def add_my_recipe(self, recipe_data: Dict[str, Any]) -> Optional[str]:
        """
        Create a personal or family recipe.

        Returns:
            Canonical id of the new recipe, or None if the backend did not return one
        """
        data = self._request("POST", "/users/myRecipes", json={"recipe": recipe_data})
        if isinstance(data, dict) and data.get("recipeId") is not None:
            return canonical_recipe_id(data["recipeId"])
        return None

    # Recipes (no session needed)

    def get_random_recipes(self, number: int = 3) -> List[Dict[str, Any]]:
        data = self._request("GET", "/recipes/random", params={"number": number})
        return data or []

    def get_recipe_info(self, recipe_id: str) -> Dict[str, Any]:
        clean_id = canonical_recipe_id(recipe_id)
        return self._request("GET", "/recipes/info", params={"recipeId": clean_id})

    def search_recipes(self, search_params: Dict[str, Any]) -> List[Dict[str, Any]]:
        return self._request("POST", "/recipes/Search", json=search_params) or []
