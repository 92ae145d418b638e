"""
Session Context

Owns everything whose lifetime is one signed-in session: the session token,
the session cache and the stored profile. Constructed at sign-in and torn
down by logout(), which is the single event that clears the key-value store
and invalidates the cache.
"""

import logging
from typing import Callable, List, Optional

from scorebook.auth.profile import UserProfile, UserProfileService
from scorebook.auth.session_store import KeyValueStore
from scorebook.delivery.cache import SessionCache

logger = logging.getLogger(__name__)


class SessionContext:
    """One signed-in session and the cache scoped to it."""

    def __init__(
        self,
        session_token: str,
        store: KeyValueStore,
        cache: Optional[SessionCache] = None,
    ):
        if not session_token:
            raise ValueError("session_token must be a non-empty string")
        self.session_token = session_token
        self.profiles = UserProfileService(store)
        self.cache = cache if cache is not None else SessionCache()
        self._logout_callbacks: List[Callable[[], None]] = []
        self._ended = False

    @classmethod
    def start(
        cls,
        session_token: str,
        store: KeyValueStore,
        profile: Optional[UserProfile] = None,
        cache_ttl_seconds: Optional[float] = None,
    ) -> "SessionContext":
        """Begin a session: persist the token and profile, create a fresh cache."""
        session = cls(session_token, store, SessionCache(ttl_seconds=cache_ttl_seconds))
        session.profiles.save_session_token(session_token)
        if profile is not None:
            session.profiles.save(profile)
        logger.info("Session started")
        return session

    @property
    def active(self) -> bool:
        return not self._ended

    def on_logout(self, callback: Callable[[], None]) -> None:
        """Register a callback run once at logout (e.g. detaching requester handles)."""
        self._logout_callbacks.append(callback)

    def logout(self) -> bool:
        """
        End the session.

        Clears the stored profile, invalidates every cache entry of this
        session, then runs logout callbacks. Later calls do nothing.

        Returns:
            True if this call ended the session
        """
        if self._ended:
            return False
        self._ended = True

        self.profiles.clear()
        removed = self.cache.invalidate_session(self.session_token)
        logger.info(f"Session ended, {removed} cached collections dropped")

        callbacks, self._logout_callbacks = self._logout_callbacks, []
        for callback in callbacks:
            callback()
        return True
