"""
Shared pytest fixtures for scorebook tests.

Provides fixtures for:
- Logging capture
- Backend configuration
- A scripted in-memory HTTP transport
- Fetcher, cache and guard wiring
"""

import json
import sys
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from scorebook.adapters.fetcher import PaginatedFetcher
from scorebook.adapters.transport import TransportResponse
from scorebook.config import BackendConfig
from scorebook.delivery.cache import SessionCache
from scorebook.delivery.guard import ResultDeliveryGuard


# ============================================================================
# Logging Fixtures
# ============================================================================

@pytest.fixture(autouse=True)
def configure_test_logging(caplog):
    """Configure logging for all tests."""
    caplog.set_level(logging.DEBUG)
    return caplog


# ============================================================================
# Transport Fixtures
# ============================================================================

class ScriptedTransport:
    """
    HttpTransport double that replays queued responses in order.

    Every request is recorded in `calls`. When `gate` is set, each request
    waits on it before answering, which lets tests detach a requester while
    a page is in flight.
    """

    def __init__(self, responses: Optional[List[TransportResponse]] = None):
        self.responses = list(responses or [])
        self.routes: Dict[str, List[TransportResponse]] = {}
        self.calls: List[Dict[str, Any]] = []
        self.gate = None

    def queue(self, *responses: TransportResponse) -> None:
        self.responses.extend(responses)

    def route(self, table_id: str, *responses: TransportResponse) -> None:
        """Queue responses served only to requests for one table."""
        self.routes.setdefault(table_id, []).extend(responses)

    async def get(self, url, params, headers):
        self.calls.append({"url": url, "params": dict(params), "headers": dict(headers)})
        if self.gate is not None:
            await self.gate.wait()
        for table_id, queued in self.routes.items():
            if url.endswith(f"/{table_id}") and queued:
                return queued.pop(0)
        if not self.responses:
            raise AssertionError(f"Unexpected request to {url}")
        return self.responses.pop(0)


def build_page(rows: List[Dict[str, Any]], offset: Optional[str] = None) -> TransportResponse:
    body: Dict[str, Any] = {"records": [{"id": f"rec{i}", "fields": row} for i, row in enumerate(rows)]}
    if offset is not None:
        body["offset"] = offset
    return TransportResponse(status=200, body=json.dumps(body))


@pytest.fixture
def page():
    """
    Build a 200 response carrying one page of rows.

    Usage:
        transport.queue(page([{"ID": 1}], offset="itr1"))
    """
    return build_page


@pytest.fixture
def transport() -> ScriptedTransport:
    """Empty scripted transport; queue responses per test."""
    return ScriptedTransport()


# ============================================================================
# Client Fixtures
# ============================================================================

@pytest.fixture
def backend_config() -> BackendConfig:
    """Backend configuration pointing at a fake base."""
    return BackendConfig(
        base_id="appTEST123",
        api_key="key-test",
        base_url="https://api.example.com/v0",
        max_pages=10,
    )


@pytest.fixture
def fetcher(backend_config, transport) -> PaginatedFetcher:
    return PaginatedFetcher(backend_config, transport)


@pytest.fixture
def cache() -> SessionCache:
    return SessionCache()


@pytest.fixture
def guard(fetcher, cache) -> ResultDeliveryGuard:
    return ResultDeliveryGuard(fetcher, cache)
