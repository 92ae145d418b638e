# Result delivery - session cache and liveness-checked delivery
from .cache import CacheEntry, SessionCache
from .guard import RequesterHandle, ResultDeliveryGuard

__all__ = [
    "CacheEntry",
    "SessionCache",
    "RequesterHandle",
    "ResultDeliveryGuard",
]
