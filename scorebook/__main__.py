"""
Command line entry point.

    python -m scorebook overall_scorer
    python -m scorebook team --console --log-level DEBUG
    python -m scorebook --list

Reads backend settings from SCOREBOOK_* environment variables and prints
the fetched collection as JSON on stdout.
"""
import argparse
import asyncio
import json
import logging
import sys
from typing import List, Optional

from scorebook.adapters import AiohttpTransport, PaginatedFetcher, build_default_registry
from scorebook.config import BackendConfig, BackendConfigLoader
from scorebook.delivery import ResultDeliveryGuard, SessionCache
from scorebook.errors import ScorebookError
from scorebook.observability import LogContext, configure_logging
from scorebook.schemas.canonical import ModelKind

logger = logging.getLogger(__name__)


async def _fetch(config: BackendConfig, kind: ModelKind, session_token: str) -> List[dict]:
    async with AiohttpTransport(timeout_seconds=config.timeout_seconds) as transport:
        fetcher = PaginatedFetcher(config, transport)
        guard = ResultDeliveryGuard(fetcher, SessionCache(config.cache_ttl_seconds))
        with LogContext(kind=kind.value):
            records = await guard.fetch_cached(kind, session_token)
    return [record.to_dict() for record in records]


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="scorebook",
        description="Fetch every record of a model kind from the scorebook backend",
    )
    parser.add_argument(
        "kind",
        nargs="?",
        choices=[kind.value for kind in ModelKind],
        help="Model kind to fetch",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List registered model kinds and exit",
    )
    parser.add_argument(
        "--session",
        default="cli",
        help="Session token used to partition the cache",
    )
    parser.add_argument(
        "--log-level",
        help="Override SCOREBOOK_LOG_LEVEL",
    )
    parser.add_argument(
        "--console",
        action="store_true",
        help="Human-readable logs instead of JSON",
    )

    args = parser.parse_args(argv)

    if args.list:
        print(json.dumps(build_default_registry().to_dict(), indent=2))
        return 0
    if not args.kind:
        parser.error("kind is required unless --list is given")

    config = BackendConfigLoader.from_env()
    configure_logging(
        "scorebook",
        log_level=args.log_level or config.log_level,
        json_output=not args.console,
    )

    try:
        rows = asyncio.run(_fetch(config, ModelKind(args.kind), args.session))
    except ScorebookError as e:
        logger.error(f"Fetch failed: {e}")
        print(json.dumps(e.to_dict()), file=sys.stderr)
        return 1

    print(json.dumps(rows, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
