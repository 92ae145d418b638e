"""
Scorebook Errors - failure taxonomy for the paginated client.

Every error surfaces to the immediate caller of a fetch. Nothing here is
retried inside the client; retry policy belongs to the caller.

Not errors: missing optional fields, empty response bodies, and results
discarded because their requester went away.
"""
from typing import Any, Dict, Optional


class ScorebookError(Exception):
    """Base class for every error raised by the scorebook client."""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for API responses and CLI output."""
        return {"error": type(self).__name__, "message": str(self)}


class TransportError(ScorebookError):
    """
    Raised on a non-success HTTP status or a network-level failure.

    Attributes:
        status_code: HTTP status, or None when no response was received
        body: Response body retained for diagnostics
    """

    def __init__(self, status_code: Optional[int], body: str = ""):
        self.status_code = status_code
        self.body = body
        if status_code is None:
            msg = f"Transport failure: {body}"
        else:
            msg = f"Backend returned HTTP {status_code}: {body[:200]}"
        super().__init__(msg)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": "transport_error",
            "status_code": self.status_code,
            "body": self.body,
        }


class MalformedRecordError(ScorebookError):
    """Raised when a present field holds a value incompatible with its declared type."""

    def __init__(self, kind: str, field: str, value: Any):
        self.kind = kind
        self.field = field
        self.value = value
        super().__init__(
            f"Malformed {kind} record: field {field!r} has incompatible value {value!r}"
        )


class MalformedPageError(ScorebookError):
    """Raised when a response body cannot be read as a page at all."""


class UnknownModelKindError(ScorebookError):
    """Raised when a model kind has no codec or table configured."""

    def __init__(self, kind: Any):
        self.kind = kind
        super().__init__(f"Unknown model kind: {kind!r}")


class PaginationLimitError(ScorebookError):
    """Raised when a fetch exceeds its page bound or revisits a cursor."""

    def __init__(self, kind: str, pages: int, reason: str = "max pages exceeded"):
        self.kind = kind
        self.pages = pages
        self.reason = reason
        super().__init__(f"Pagination stopped for {kind} after {pages} pages: {reason}")


class FetchCancelledError(ScorebookError):
    """Raised inside a fetch once its requester is no longer live."""
