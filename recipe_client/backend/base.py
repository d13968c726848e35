"""
Abstract backend interface for the recipe web service.

The session components never talk HTTP directly. They depend on this
interface, which keeps them testable with plain mocks and lets the transport
be swapped out.

All implementations must:
- Return recipe id lists for the user set endpoints (favorites, likes, watched)
- Raise BackendUnavailableError (or QuotaExceededError) on transport failures
- Raise NotAuthenticatedError when the backend has no session for the caller
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List


class RecipeBackend(ABC):
    """
    Interface to the recipe REST service.

    Methods may be plain blocking functions or coroutine functions; callers
    await them through recipe_client.utils.tasks.call.
    """

    @abstractmethod
    def get_me(self) -> str:
        """
        Identify the current session.

        Returns:
            Username of the authenticated user

        Raises:
            NotAuthenticatedError: If there is no session
        """
        pass

    @abstractmethod
    def login(self, username: str, password: str) -> Any:
        pass

    @abstractmethod
    def logout(self) -> Any:
        pass

    @abstractmethod
    def get_favorites(self) -> List[Any]:
        """Raw recipe ids the user has favorited."""
        pass

    @abstractmethod
    def add_favorite(self, recipe_id: str) -> bool:
        pass

    @abstractmethod
    def remove_favorite(self, recipe_id: str) -> bool:
        pass

    @abstractmethod
    def get_likes(self) -> List[Any]:
        """Raw recipe ids the user has liked."""
        pass

    @abstractmethod
    def add_like(self, recipe_id: str) -> bool:
        pass

    @abstractmethod
    def remove_like(self, recipe_id: str) -> bool:
        pass

    @abstractmethod
    def get_watched(self) -> List[Any]:
        """Raw recipe ids the user has viewed, most recent first."""
        pass

    @abstractmethod
    def add_watched(self, recipe_id: str) -> bool:
        pass

    @abstractmethod
    def remove_watched(self, recipe_id: str) -> bool:
        pass

    @abstractmethod
    def get_random_recipes(self, number: int = 3) -> List[Dict[str, Any]]:
        """
        Raises:
            QuotaExceededError: If the recipe provider is out of quota
        """
        pass

    @abstractmethod
    def get_recipe_info(self, recipe_id: str) -> Dict[str, Any]:
        pass

    @abstractmethod
    def search_recipes(self, search_params: Dict[str, Any]) -> List[Dict[str, Any]]:
        pass
