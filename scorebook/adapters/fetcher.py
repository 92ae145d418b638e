"""
Paginated Collection Fetcher - all pages of one model kind, in server order.

Pipeline per page:
1. Build the GET for the kind's table (sort by ID ascending, bearer auth)
2. Fail on a non-success status, never retry
3. Decode each row's fields through the kind's codec
4. Follow the offset cursor until a page arrives without one

Pages are fetched strictly one after another: the next cursor is only known
once the previous page has been decoded.
"""
import json
import logging
from typing import Any, Dict, List, Optional, Protocol, Tuple

from scorebook.adapters.registry import ModelRegistry, build_default_registry
from scorebook.adapters.transport import HttpTransport, QueryParams
from scorebook.config import BackendConfig, Credentials
from scorebook.errors import (
    FetchCancelledError,
    MalformedPageError,
    PaginationLimitError,
    TransportError,
    UnknownModelKindError,
)
from scorebook.schemas.canonical import ModelKind, Page

logger = logging.getLogger(__name__)

SORT_FIELD = "ID"
SORT_DIRECTION = "asc"


class CancelToken(Protocol):
    """Anything that can report whether its owner still wants the result."""

    @property
    def is_live(self) -> bool:
        ...


class PaginatedFetcher:
    """
    Fetches every page of a model kind and concatenates the decoded records.

    The config is read on every request, so credentials and table ids can
    change between fetches without rebuilding the fetcher.
    """

    def __init__(
        self,
        config: BackendConfig,
        transport: HttpTransport,
        registry: Optional[ModelRegistry] = None,
    ):
        self.config = config
        self.transport = transport
        self.registry = registry or build_default_registry()

    def build_request(
        self,
        kind: ModelKind,
        credentials: Credentials,
        offset: Optional[str] = None,
    ) -> Tuple[str, QueryParams, Dict[str, str]]:
        """
        Build url, query params and headers for one page.

        Raises:
            UnknownModelKindError: If no table id is configured for the kind
        """
        table_id = self.config.table_id(kind)
        if not table_id:
            raise UnknownModelKindError(kind)

        params: QueryParams = [
            ("sort[0][field]", SORT_FIELD),
            ("sort[0][direction]", SORT_DIRECTION),
        ]
        if offset:
            params.append(("offset", offset))

        headers = {
            "Authorization": f"Bearer {credentials.api_key}",
            "Accept": "application/json",
        }
        return self.config.table_url(table_id), params, headers

    def parse_page(self, kind: ModelKind, body: str) -> Page:
        """
        Decode one response body into a page.

        A body without a records container is an empty terminal page.
        Rows without a fields object are skipped.

        Raises:
            MalformedPageError: If the body is not a JSON object or records is not a list
            MalformedRecordError: If a row holds a type-incompatible field
        """
        codec = self.registry.get(kind)

        if not body.strip():
            return Page()

        try:
            data = json.loads(body)
        except json.JSONDecodeError as e:
            raise MalformedPageError(f"{kind.value} response is not JSON: {e}") from e

        if not isinstance(data, dict):
            raise MalformedPageError(
                f"{kind.value} response is a {type(data).__name__}, expected an object"
            )

        rows = data.get("records")
        if rows is None:
            rows = []
        if not isinstance(rows, list):
            raise MalformedPageError(f"{kind.value} response 'records' is not a list")

        records: List[Any] = []
        skipped = 0
        for row in rows:
            row_fields = row.get("fields") if isinstance(row, dict) else None
            if not isinstance(row_fields, dict):
                skipped += 1
                continue
            records.append(codec.decode(row_fields))

        if skipped:
            logger.debug(f"Skipped {skipped} {kind.value} rows without fields")

        offset = data.get("offset")
        return Page(
            records=records,
            offset=str(offset) if offset else None,
            skipped_rows=skipped,
        )

    async def fetch_page(
        self,
        kind: ModelKind,
        credentials: Optional[Credentials] = None,
        offset: Optional[str] = None,
    ) -> Page:
        """
        Fetch and decode a single page.

        Raises:
            TransportError: On a non-success HTTP status
        """
        creds = credentials or self.config.credentials()
        url, params, headers = self.build_request(kind, creds, offset)

        response = await self.transport.get(url, params, headers)
        if not response.ok:
            raise TransportError(response.status, response.body)

        return self.parse_page(kind, response.body)

    async def fetch_all(
        self,
        kind: ModelKind,
        credentials: Optional[Credentials] = None,
        cancel_token: Optional[CancelToken] = None,
    ) -> List[Any]:
        """
        Fetch every page of a model kind.

        Args:
            kind: Model kind to fetch
            credentials: Bearer credentials (defaults to the configured api key)
            cancel_token: Checked before each request and after each response

        Returns:
            All decoded records in page-arrival order (empty list, never None)

        Raises:
            PaginationLimitError: If max_pages is exceeded or a cursor repeats
            FetchCancelledError: If cancel_token stops being live
        """
        # Fail fast on an unmapped kind before any I/O
        self.registry.get(kind)

        max_pages = self.config.max_pages
        collection: List[Any] = []
        seen_offsets = set()
        offset: Optional[str] = None
        pages = 0

        logger.info(f"Fetching all {kind.value} records")

        while True:
            self._ensure_live(cancel_token, kind)
            page = await self.fetch_page(kind, credentials, offset)
            self._ensure_live(cancel_token, kind)

            pages += 1
            collection.extend(page.records)
            logger.debug(
                f"{kind.value} page {pages}: {len(page.records)} records, "
                f"more={not page.is_terminal}"
            )

            if page.is_terminal:
                break
            if page.offset in seen_offsets:
                raise PaginationLimitError(kind.value, pages, f"cursor {page.offset!r} repeated")
            if pages >= max_pages:
                raise PaginationLimitError(kind.value, pages)

            seen_offsets.add(page.offset)
            offset = page.offset

        logger.info(f"Fetched {len(collection)} {kind.value} records in {pages} pages")
        return collection

    @staticmethod
    def _ensure_live(cancel_token: Optional[CancelToken], kind: ModelKind) -> None:
        if cancel_token is not None and not cancel_token.is_live:
            raise FetchCancelledError(f"{kind.value} fetch abandoned by its requester")
