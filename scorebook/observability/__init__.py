# Observability - structured logging setup
from .logging_config import LogContext, configure_logging

__all__ = [
    "LogContext",
    "configure_logging",
]
