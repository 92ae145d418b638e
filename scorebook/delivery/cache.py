"""
Session Cache - per-session collections keyed by model kind.

One cache object lives for the lifetime of a signed-in session and is passed
by reference to whoever fetches on that session's behalf.

Concurrency:
- Entries are immutable and replaced whole, so readers never observe a
  half-written entry
- lock_for() hands out one asyncio.Lock per (kind, session) key so that
  concurrent loads of the same key can be coalesced
- Every session carries a generation number; invalidation bumps it and
  writes tagged with an older generation are dropped
"""
import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Tuple

from scorebook.schemas.canonical import ModelKind

logger = logging.getLogger(__name__)

CacheKey = Tuple[ModelKind, str]


@dataclass(frozen=True)
class CacheEntry:
    """Records fetched for one (kind, session) pair."""
    records: Tuple[Any, ...]
    created_at: datetime = field(default_factory=datetime.now)

    def age(self, now: Optional[datetime] = None) -> timedelta:
        return (now or datetime.now()) - self.created_at


class SessionCache:
    """
    In-memory cache of fetched collections.

    Args:
        ttl_seconds: Maximum entry age; None keeps entries until the
            session is invalidated
    """

    def __init__(self, ttl_seconds: Optional[float] = None):
        self.ttl_seconds = ttl_seconds
        self._entries: Dict[CacheKey, CacheEntry] = {}
        self._locks: Dict[CacheKey, asyncio.Lock] = {}
        self._generations: Dict[str, int] = {}

    def _is_fresh(self, entry: CacheEntry) -> bool:
        if self.ttl_seconds is None:
            return True
        return entry.age() < timedelta(seconds=self.ttl_seconds)

    def get_entry(self, kind: ModelKind, session_token: str) -> Optional[CacheEntry]:
        """Return the live entry for a key, evicting it if it has expired."""
        key = (kind, session_token)
        entry = self._entries.get(key)
        if entry is None:
            return None
        if not self._is_fresh(entry):
            logger.debug(f"Cache entry expired for {kind.value}")
            del self._entries[key]
            self._drop_idle_lock(key)
            return None
        return entry

    def get(self, kind: ModelKind, session_token: str) -> Optional[List[Any]]:
        """Return a fresh list of the cached records, or None on a miss."""
        entry = self.get_entry(kind, session_token)
        if entry is None:
            return None
        return list(entry.records)

    def generation(self, session_token: str) -> int:
        return self._generations.get(session_token, 0)

    def put(
        self,
        kind: ModelKind,
        session_token: str,
        records: List[Any],
        generation: Optional[int] = None,
    ) -> Optional[CacheEntry]:
        """
        Store a collection for a key.

        Args:
            generation: Session generation observed before the fetch began;
                when the session has been invalidated since, nothing is stored

        Returns:
            The stored entry, or None if the write was dropped
        """
        if generation is not None and generation != self.generation(session_token):
            logger.debug(f"Dropping {kind.value} cache write for invalidated session")
            return None
        entry = CacheEntry(records=tuple(records))
        self._entries[(kind, session_token)] = entry
        return entry

    def lock_for(self, kind: ModelKind, session_token: str) -> asyncio.Lock:
        key = (kind, session_token)
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    def _drop_idle_lock(self, key: CacheKey) -> None:
        lock = self._locks.get(key)
        if lock is not None and not lock.locked():
            del self._locks[key]

    def invalidate_session(self, session_token: str) -> int:
        """
        Remove every entry belonging to a session.

        Returns:
            Number of entries removed
        """
        self._generations[session_token] = self.generation(session_token) + 1
        stale = [key for key in self._entries if key[1] == session_token]
        for key in stale:
            del self._entries[key]
        for key in [key for key in self._locks if key[1] == session_token]:
            self._drop_idle_lock(key)
        logger.info(f"Invalidated {len(stale)} cache entries for session")
        return len(stale)

    def clear(self) -> None:
        """Drop all entries for all sessions."""
        for session_token in {key[1] for key in self._entries}:
            self._generations[session_token] = self.generation(session_token) + 1
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: CacheKey) -> bool:
        return self.get_entry(*key) is not None
