"""
Log setup for the scorebook CLI and embedding applications.

Library modules log through logging.getLogger(__name__) and never configure
handlers. An entry point calls configure_logging() once; stdlib records are
then rendered by structlog as JSON lines or console text on stderr, carrying
any fields bound with LogContext (model kind, requester name).
"""
import logging
import sys

import structlog
from structlog.contextvars import bind_contextvars, unbind_contextvars

# aiohttp logs every connection at DEBUG; keep those out of fetch traces
_NOISY_LOGGERS = ("aiohttp", "asyncio")


def configure_logging(
    service_name: str,
    log_level: str = "INFO",
    json_output: bool = True,
) -> None:
    """
    Route all stdlib logging through structlog on stderr.

    Args:
        service_name: Stamped on every entry as `service`
        log_level: Root level name; unknown names fall back to INFO
        json_output: JSON lines when True, console rendering otherwise
    """
    def stamp_service(logger, method_name, event_dict):
        event_dict.setdefault("service", service_name)
        return event_dict

    pre_chain = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        stamp_service,
        structlog.processors.format_exc_info,
    ]
    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    )

    structlog.configure(
        processors=pre_chain + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=pre_chain,
    ))

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


class LogContext:
    """
    Bind fields to every log entry emitted inside the block.

    Usage:
        with LogContext(kind="overall_scorer", requester="scorers-screen"):
            await guard.fetch_cached(...)
    """

    def __init__(self, **fields):
        self.fields = fields

    def __enter__(self) -> "LogContext":
        bind_contextvars(**self.fields)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        unbind_contextvars(*self.fields)
        return False
