"""Backend configuration loading from environment variables."""

import os
import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

from scorebook.schemas.canonical import ModelKind

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.airtable.com/v0"
DEFAULT_TIMEOUT_SECONDS = 30
DEFAULT_MAX_PAGES = 100

DEFAULT_TABLE_IDS: Dict[ModelKind, str] = {
    ModelKind.OVERALL_SCORER: "Overall Scorers",
    ModelKind.TEAM_WEEK_SCORER: "Team Week Scorers",
    ModelKind.TEAM: "Teams",
}


@dataclass
class Credentials:
    """Bearer credentials sent with every page request."""
    api_key: str

    def __repr__(self) -> str:
        return "Credentials(api_key=***)"


@dataclass
class BackendConfig:
    """
    Where and how to reach the tabular backend.

    Values are read at fetch time, so a config mutated between fetches
    takes effect on the next request.
    """
    base_id: str
    api_key: str = ""
    base_url: str = DEFAULT_BASE_URL
    table_ids: Dict[ModelKind, str] = field(default_factory=lambda: dict(DEFAULT_TABLE_IDS))
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    max_pages: int = DEFAULT_MAX_PAGES
    cache_ttl_seconds: Optional[float] = None
    log_level: str = "INFO"

    def table_id(self, kind: ModelKind) -> Optional[str]:
        return self.table_ids.get(kind)

    def table_url(self, table_id: str) -> str:
        return f"{self.base_url.rstrip('/')}/{self.base_id}/{table_id}"

    def credentials(self) -> Credentials:
        return Credentials(api_key=self.api_key)


class BackendConfigLoader:
    """Load backend configuration from environment variables."""

    @staticmethod
    def _optional_float(name: str) -> Optional[float]:
        raw = os.getenv(name, "").strip()
        if not raw:
            return None
        return float(raw)

    @staticmethod
    def from_env() -> BackendConfig:
        """
        Load configuration for the scorebook backend.

        Expects SCOREBOOK_BASE_ID and SCOREBOOK_API_KEY environment variables.

        Returns:
            BackendConfig populated from the environment
        """
        base_id = os.getenv("SCOREBOOK_BASE_ID", "")
        if not base_id:
            logger.warning("SCOREBOOK_BASE_ID not set")

        api_key = os.getenv("SCOREBOOK_API_KEY", "")
        if not api_key:
            logger.warning("SCOREBOOK_API_KEY not set")

        table_ids = {
            kind: os.getenv(f"SCOREBOOK_TABLE_{kind.name}", default)
            for kind, default in DEFAULT_TABLE_IDS.items()
        }

        return BackendConfig(
            base_id=base_id,
            api_key=api_key,
            base_url=os.getenv("SCOREBOOK_BASE_URL", DEFAULT_BASE_URL),
            table_ids=table_ids,
            timeout_seconds=float(os.getenv("SCOREBOOK_TIMEOUT", str(DEFAULT_TIMEOUT_SECONDS))),
            max_pages=int(os.getenv("SCOREBOOK_MAX_PAGES", str(DEFAULT_MAX_PAGES))),
            cache_ttl_seconds=BackendConfigLoader._optional_float("SCOREBOOK_CACHE_TTL"),
            log_level=os.getenv("SCOREBOOK_LOG_LEVEL", "INFO"),
        )
