"""
HTTP Transport - the only seam between the client and the network.

The fetcher depends on the HttpTransport protocol, not on aiohttp, so tests
and alternative stacks can supply their own transport.
"""
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Protocol, Tuple, runtime_checkable

import aiohttp

from scorebook.errors import MalformedPageError, TransportError

logger = logging.getLogger(__name__)

QueryParams = List[Tuple[str, str]]


@dataclass
class TransportResponse:
    """Status and undecoded body of one HTTP response."""
    status: int
    body: str
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


@runtime_checkable
class HttpTransport(Protocol):
    """
    Protocol defining the transport interface.

    Any object with a matching async get() is a valid transport.
    """

    async def get(
        self, url: str, params: QueryParams, headers: Dict[str, str]
    ) -> TransportResponse:
        """Issue a GET and return the response without raising on status."""
        ...


class AiohttpTransport:
    """
    Default transport backed by a shared aiohttp.ClientSession.

    Use as an async context manager, or call close() when done. A session
    passed in by the caller is never closed here.
    """

    def __init__(
        self,
        timeout_seconds: float = 30,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.timeout_seconds = timeout_seconds
        self._session = session
        self._owns_session = session is None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout_seconds)
            )
            self._owns_session = True
        return self._session

    async def get(
        self, url: str, params: QueryParams, headers: Dict[str, str]
    ) -> TransportResponse:
        session = self._get_session()
        try:
            async with session.get(url, params=params, headers=headers) as resp:
                body = await resp.text()
                return TransportResponse(
                    status=resp.status,
                    body=body,
                    headers=dict(resp.headers),
                )
        except UnicodeDecodeError as e:
            raise MalformedPageError(f"Response from {url} is not valid text: {e}") from e
        except asyncio.TimeoutError as e:
            raise TransportError(None, f"GET {url} timed out after {self.timeout_seconds}s") from e
        except aiohttp.ClientError as e:
            raise TransportError(None, f"GET {url} failed: {e}") from e

    async def close(self) -> None:
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None

    async def __aenter__(self) -> "AiohttpTransport":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
