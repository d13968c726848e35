"""
Session lifecycle: login and logout boundaries.

States:
- ANONYMOUS: no principal; anonymous browsing is a normal way to use the app
- AUTHENTICATING: a login request is in flight
- AUTHENTICATED: principal set; interaction sets may be fetched

Transitions:
- ANONYMOUS -> AUTHENTICATING: begin_login()
- AUTHENTICATING -> AUTHENTICATED: on_login_success(); sets the principal and
  invalidates the landing page cache. Interaction sets stay empty until the
  next aggregate fetch.
- AUTHENTICATING -> ANONYMOUS: on_login_failure(); only the principal is touched
- AUTHENTICATED -> ANONYMOUS: on_logout(), also used when a session check fails;
  clears principal, interaction sets, both caches and recently viewed
- startup: on_startup_probe() checks /me once and goes straight to
  AUTHENTICATED on success. A failed probe is not an error.
"""

import enum
import logging
from typing import Any, Optional

from recipe_client.backend.base import RecipeBackend
from recipe_client.errors import NotAuthenticatedError, RecipeClientError, SessionStateError
from recipe_client.session import Session
from recipe_client.utils.tasks import call

logger = logging.getLogger(__name__)


class SessionState(str, enum.Enum):
    ANONYMOUS = "anonymous"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"


class SessionLifecycle:
    """
    State machine that keeps a Session consistent across login and logout.

    Args:
        session: The Session this lifecycle owns
    """

    def __init__(self, session: Session):
        self.session = session
        self.state = SessionState.AUTHENTICATED if session.is_authenticated else SessionState.ANONYMOUS

    def _require(self, *allowed: SessionState) -> None:
        if self.state not in allowed:
            raise SessionStateError(
                f"Invalid transition from {self.state.value}; expected one of "
                f"{', '.join(s.value for s in allowed)}"
            )

    # Transition entry points

    def begin_login(self) -> None:
        self._require(SessionState.ANONYMOUS)
        self.state = SessionState.AUTHENTICATING
        logger.debug("Login attempt started")

    def on_login_success(self, username: str) -> None:
        self._require(SessionState.AUTHENTICATING)
        self._authenticate(username)

    def on_login_failure(self) -> None:
        self._require(SessionState.AUTHENTICATING)
        self.session.identity.principal = None
        self.state = SessionState.ANONYMOUS
        logger.info("Login failed; session stays anonymous")

    def on_logout(self) -> None:
        """Clear everything the session knows about the user. Safe to call when anonymous."""
        previous = self.session.username
        self.session.reset()
        self.state = SessionState.ANONYMOUS
        if previous is not None:
            logger.info("Session for %s ended", previous)

    async def on_startup_probe(self, backend: RecipeBackend) -> bool:
        """
        Check once at startup whether the backend already knows us.

        Never raises: an unknown session or an unreachable backend leaves the
        session anonymous.

        Returns:
            True if the session is authenticated
        """
        username = await self._probe(backend)
        if username is None:
            if self.state is not SessionState.ANONYMOUS:
                self.on_logout()
            logger.info("No existing session found")
            return False
        self._authenticate(username)
        return True

    # Backend-driven helpers

    async def login(self, backend: RecipeBackend, username: str, password: str) -> Any:
        """
        Log in against the backend and update the session.

        Raises:
            RecipeClientError: If the backend rejects the login or is unreachable
        """
        self.begin_login()
        try:
            response = await call(backend.login, username, password)
        except Exception:
            self.on_login_failure()
            raise
        self.on_login_success(username)
        return response

    async def logout(self, backend: RecipeBackend) -> Any:
        """
        Log out against the backend.

        Local state is cleared even if the backend call fails; the failure is
        then re-raised so the caller can report it.
        """
        try:
            return await call(backend.logout)
        finally:
            self.on_logout()

    async def check_session(self, backend: RecipeBackend) -> bool:
        """
        Re-validate the session. A failed check while authenticated logs the user out.

        Returns:
            True if the backend still recognises the session
        """
        username = await self._probe(backend)
        if username is None:
            if self.state is SessionState.AUTHENTICATED:
                logger.info("Session for %s is no longer valid", self.session.username)
                self.on_logout()
            else:
                # Already anonymous: keep recently viewed and cached searches
                self.session.identity.principal = None
            return False
        if self.state is not SessionState.AUTHENTICATED or self.session.username != username:
            self._authenticate(username)
        return True

    # Internals

    def _authenticate(self, username: str) -> None:
        self.session.identity.principal = username
        self.session.landing_cache.invalidate()
        self.state = SessionState.AUTHENTICATED
        logger.info("Authenticated as %s", username)

    @staticmethod
    async def _probe(backend: RecipeBackend) -> Optional[str]:
        try:
            return await call(backend.get_me)
        except NotAuthenticatedError:
            return None
        except RecipeClientError as e:
            logger.warning("Identity check failed: %s", e)
            return None
        except Exception as e:
            logger.error("Unexpected error during identity check: %s", e, exc_info=True)
            return None
