# Backend adapters - transport, kind registry and paginated fetching
from .transport import AiohttpTransport, HttpTransport, TransportResponse
from .registry import ModelInfo, ModelRegistry, build_default_registry
from .fetcher import PaginatedFetcher

__all__ = [
    "AiohttpTransport",
    "HttpTransport",
    "TransportResponse",
    "ModelInfo",
    "ModelRegistry",
    "build_default_registry",
    "PaginatedFetcher",
]
