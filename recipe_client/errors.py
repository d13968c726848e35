"""
Exception types raised by the recipe client.

- BackendUnavailableError: network failure, timeout or unexpected backend response.
  Always recoverable; the aggregator records it as "source unavailable".
- QuotaExceededError: the upstream recipe provider is out of quota (HTTP 402).
  A subclass of BackendUnavailableError so callers can show a dedicated message.
- NotAuthenticatedError: the backend has no session for us (HTTP 401).
- InvalidRecipeIdError: a recipe identifier was missing or blank. Raised before
  any network call is made.
- SessionStateError: a lifecycle transition was requested from the wrong state.
"""

from typing import Optional


class RecipeClientError(Exception):
    """Base class for all recipe client errors."""
    pass


class BackendUnavailableError(RecipeClientError):
    """The backend could not be reached or returned an unusable response."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class QuotaExceededError(BackendUnavailableError):
    """The recipe provider quota is exhausted (HTTP 402 Payment Required)."""

    def __init__(self, message: str = "Recipe provider quota exceeded", status_code: Optional[int] = 402):
        super().__init__(message, status_code=status_code)


class NotAuthenticatedError(RecipeClientError):
    """The backend rejected the request because there is no valid session."""
    pass


class InvalidRecipeIdError(RecipeClientError, ValueError):
    """A recipe identifier was missing or empty."""
    pass


class SessionStateError(RecipeClientError, RuntimeError):
    """A lifecycle transition is not allowed from the current state."""
    pass
