"""
Session lifecycle for the scorebook client.

Exports:
  - KeyValueStore, InMemoryKeyValueStore, SqliteKeyValueStore
  - UserProfile, UserProfileService
  - SessionContext
"""

from .session_store import InMemoryKeyValueStore, KeyValueStore, SqliteKeyValueStore
from .profile import UserProfile, UserProfileService
from .session import SessionContext

__all__ = [
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "SqliteKeyValueStore",
    "UserProfile",
    "UserProfileService",
    "SessionContext",
]
