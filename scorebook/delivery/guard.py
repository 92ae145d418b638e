"""
Result Delivery Guard - hand async results only to requesters still alive.

A requester (a screen, a widget, a background refresher) holds a
RequesterHandle while it wants results. When it goes away it detaches the
handle. Results that complete after that point are dropped on the floor:
no state mutation, no error, no retry. Discards are logged at DEBUG only
because they are expected, not failures.

Usage:
    guard = ResultDeliveryGuard(fetcher, session.cache)
    handle = RequesterHandle("scorers-screen")
    await guard.fetch_and_deliver(handle, ModelKind.OVERALL_SCORER, token, view.render)
    ...
    handle.detach()  # navigating away; any in-flight fetch is cancelled
"""
import asyncio
import logging
from typing import Any, Callable, List, Optional, TypeVar

from scorebook.adapters.fetcher import PaginatedFetcher
from scorebook.config import Credentials
from scorebook.delivery.cache import SessionCache
from scorebook.errors import FetchCancelledError, ScorebookError
from scorebook.schemas.canonical import ModelKind, ScoreboardSnapshot

logger = logging.getLogger(__name__)

R = TypeVar('R')


class RequesterHandle:
    """
    Observable liveness flag owned by whoever asked for a result.

    The flag is read at delivery time, never cached at request time.
    Detaching is permanent.
    """

    def __init__(self, name: str = "requester"):
        self.name = name
        self._live = True
        self._detached = asyncio.Event()

    @property
    def is_live(self) -> bool:
        return self._live

    def detach(self) -> None:
        if self._live:
            logger.debug(f"Requester {self.name} detached")
        self._live = False
        self._detached.set()

    async def wait_detached(self) -> None:
        await self._detached.wait()

    def __repr__(self) -> str:
        return f"<RequesterHandle name={self.name} live={self._live}>"


class ResultDeliveryGuard:
    """
    Cache-aware fetching plus liveness-checked delivery.

    The guard does not own the cache's lifetime; the session that created
    the cache tears it down.
    """

    def __init__(self, fetcher: PaginatedFetcher, cache: SessionCache):
        self.fetcher = fetcher
        self.cache = cache

    async def fetch_cached(
        self,
        kind: ModelKind,
        session_token: str,
        credentials: Optional[Credentials] = None,
        cancel_token: Optional[RequesterHandle] = None,
    ) -> List[Any]:
        """
        Return the session's collection for a kind, fetching it at most once.

        Concurrent calls for the same (kind, session) wait on one fetch.
        Nothing is cached when the fetch fails.
        """
        cached = self.cache.get(kind, session_token)
        if cached is not None:
            logger.debug(f"Returning cached {kind.value} collection")
            return cached

        async with self.cache.lock_for(kind, session_token):
            # Another caller may have filled the entry while we waited
            cached = self.cache.get(kind, session_token)
            if cached is not None:
                logger.debug(f"Returning coalesced {kind.value} collection")
                return cached

            generation = self.cache.generation(session_token)
            records = await self.fetcher.fetch_all(kind, credentials, cancel_token)
            self.cache.put(kind, session_token, records, generation=generation)
            return records

    def deliver_if_live(
        self,
        handle: RequesterHandle,
        outcome: R,
        apply: Callable[[R], Any],
    ) -> bool:
        """
        Apply an outcome only if its requester is still live.

        Returns:
            True if apply was called, False if the outcome was discarded
        """
        if not handle.is_live:
            logger.debug(f"Discarding result for detached requester {handle.name}")
            return False
        apply(outcome)
        return True

    def invalidate_session(self, session_token: str) -> int:
        """Remove every cache entry of a session (called on logout)."""
        return self.cache.invalidate_session(session_token)

    async def fetch_and_deliver(
        self,
        handle: RequesterHandle,
        kind: ModelKind,
        session_token: str,
        apply: Callable[[List[Any]], Any],
        credentials: Optional[Credentials] = None,
    ) -> bool:
        """
        Fetch a kind for a requester and deliver it if the requester survives.

        Detaching the handle while the fetch is in flight cancels the network
        I/O. Errors reach the caller only while the handle is live.

        Returns:
            True if apply was called
        """
        if not handle.is_live:
            logger.debug(f"Skipping {kind.value} fetch for detached requester {handle.name}")
            return False

        fetch_task = asyncio.ensure_future(
            self.fetch_cached(kind, session_token, credentials, cancel_token=handle)
        )
        detach_task = asyncio.ensure_future(handle.wait_detached())
        try:
            done, _ = await asyncio.wait(
                {fetch_task, detach_task},
                return_when=asyncio.FIRST_COMPLETED,
            )
        finally:
            detach_task.cancel()
            if not fetch_task.done():
                fetch_task.cancel()

        if fetch_task not in done:
            try:
                await fetch_task
            except (asyncio.CancelledError, ScorebookError) as e:
                logger.debug(f"In-flight {kind.value} fetch stopped for {handle.name}: {type(e).__name__}")
            return False

        try:
            outcome = fetch_task.result()
        except FetchCancelledError:
            logger.debug(f"{kind.value} fetch abandoned by {handle.name}")
            return False
        except ScorebookError:
            if handle.is_live:
                raise
            logger.debug(f"Dropping {kind.value} fetch error for detached requester {handle.name}")
            return False

        return self.deliver_if_live(handle, outcome, apply)

    async def fetch_snapshot(
        self,
        session_token: str,
        credentials: Optional[Credentials] = None,
    ) -> ScoreboardSnapshot:
        """
        Fetch both scorer collections concurrently.

        If either fetch fails, the other is cancelled and awaited before the
        error propagates.
        """
        tasks = [
            asyncio.ensure_future(self.fetch_cached(ModelKind.OVERALL_SCORER, session_token, credentials)),
            asyncio.ensure_future(self.fetch_cached(ModelKind.TEAM_WEEK_SCORER, session_token, credentials)),
        ]
        try:
            overall, weekly = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        return ScoreboardSnapshot(overall_scorers=overall, team_week_scorers=weekly)
