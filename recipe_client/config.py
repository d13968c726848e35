"""
Configuration management for the recipe client.

This module centralizes environment variable loading from the .env file at the
project root. It is imported by the backend and cache layers so that .env is
loaded before anything reads the environment.

In production there is usually no .env file; load_dotenv() is a no-op then and
the real environment variables are used.

Environment Variables:
- RECIPES_SERVER_DOMAIN: Backend origin (default: https://lenis.cs.bgu.ac.il)
- RECIPES_REQUEST_TIMEOUT: Per-request timeout in seconds (default: 10)
- RECIPES_LANDING_CACHE_TTL_SECONDS: Landing page cache lifetime (default: 300)
- RECIPES_RANDOM_COUNT: Random recipes shown on the landing page (default: 3)
- RECIPES_RECENT_WATCHED_COUNT: "Last watched" recipes shown (default: 3)
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_SERVER_DOMAIN = "https://lenis.cs.bgu.ac.il"
DEFAULT_REQUEST_TIMEOUT = 10.0
DEFAULT_LANDING_CACHE_TTL_SECONDS = 300.0
DEFAULT_RANDOM_COUNT = 3
DEFAULT_RECENT_WATCHED_COUNT = 3


def load_env_file() -> None:
    """
    Load environment variables from .env file at project root.

    Safe to call multiple times. Existing environment variables take precedence
    over values from the file (override=False).
    """
    # recipe_client/config.py -> recipe_client/ -> project root
    project_root = Path(__file__).resolve().parent.parent
    load_dotenv(project_root / ".env", override=False)


load_env_file()


def _get_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Invalid value for %s=%r, using default %s", name, raw, default)
        return default


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Invalid value for %s=%r, using default %s", name, raw, default)
        return default


class ServerConfig:
    """Configuration for talking to the recipe backend."""

    @staticmethod
    def get_server_domain() -> str:
        """
        Get the backend origin.

        Returns:
            Origin URL with trailing slash removed
        """
        return os.getenv("RECIPES_SERVER_DOMAIN", DEFAULT_SERVER_DOMAIN).rstrip("/")

    @staticmethod
    def get_request_timeout() -> float:
        """Per-request timeout in seconds."""
        return _get_float("RECIPES_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT)


class CacheConfig:
    """Configuration for the session caches and landing page."""

    @staticmethod
    def get_landing_ttl_seconds() -> float:
        """
        Get the landing page cache lifetime.

        Returns:
            TTL in seconds (default: 300, i.e. five minutes)
        """
        return _get_float("RECIPES_LANDING_CACHE_TTL_SECONDS", DEFAULT_LANDING_CACHE_TTL_SECONDS)

    @staticmethod
    def get_random_count() -> int:
        """Number of random recipes requested for the landing page."""
        return _get_int("RECIPES_RANDOM_COUNT", DEFAULT_RANDOM_COUNT)

    @staticmethod
    def get_recent_watched_count() -> int:
        """Number of recently watched recipes shown on the landing page."""
        return _get_int("RECIPES_RECENT_WATCHED_COUNT", DEFAULT_RECENT_WATCHED_COUNT)
