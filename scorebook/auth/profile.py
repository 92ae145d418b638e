"""
User Profile Service

Persists the signed-in user's profile as JSON in the session key-value
store. A profile that fails validation is logged and treated as absent.
"""

import json
import logging
from typing import Optional

from pydantic import BaseModel, Field, ValidationError

from scorebook.auth.session_store import KeyValueStore

logger = logging.getLogger(__name__)

PROFILE_KEY = "user_profile"
SESSION_TOKEN_KEY = "session_token"


# ── Pydantic Models ──────────────────────────────────────────────────────────


class UserProfile(BaseModel):
    """Profile data for the signed-in user."""

    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+$")
    display_name: Optional[str] = None
    favourite_team: Optional[str] = None


# ── Profile Service ─────────────────────────────────────────────────────────


class UserProfileService:
    """Load, save and clear the profile held in a KeyValueStore."""

    def __init__(self, store: KeyValueStore):
        self._store = store

    def load(self) -> Optional[UserProfile]:
        raw = self._store.get(PROFILE_KEY)
        if raw is None:
            return None
        try:
            return UserProfile(**json.loads(raw))
        except (json.JSONDecodeError, TypeError, ValidationError) as e:
            logger.warning(f"Failed to parse stored profile: {e}")
            return None

    def save(self, profile: UserProfile) -> None:
        self._store.set(PROFILE_KEY, profile.model_dump_json())

    def load_session_token(self) -> Optional[str]:
        return self._store.get(SESSION_TOKEN_KEY)

    def save_session_token(self, session_token: str) -> None:
        self._store.set(SESSION_TOKEN_KEY, session_token)

    def clear(self) -> None:
        """Remove every key this service writes."""
        self._store.remove(PROFILE_KEY)
        self._store.remove(SESSION_TOKEN_KEY)
