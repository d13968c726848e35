"""
Backend access for the recipe client.

This package contains:
- base: the abstract RecipeBackend interface
- http_backend: HttpRecipeBackend, the requests based implementation
"""

from recipe_client.backend.base import RecipeBackend
from recipe_client.backend.http_backend import HttpRecipeBackend

__all__ = ["RecipeBackend", "HttpRecipeBackend"]
