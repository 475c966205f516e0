"""
Store Event Logger

Every change to the debt list, and every failure the store recovers from,
is written to the structured log. The logger:
- Logs each StoreEvent at the event's own severity
- Never raises: a failing log call must not undo or block a store operation
"""

import logging
import sys

import structlog

from debt_tracker.models.events import EventSeverity, StoreEvent


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(log_level: str = "INFO", log_format: str = "json") -> None:
    """
    Route structlog through the stdlib root logger at the given level.

    log_format "console" swaps the JSON renderer for structlog's
    human-readable console renderer.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, log_level.upper(), logging.INFO),
        force=True,
    )
    renderer = (
        structlog.dev.ConsoleRenderer()
        if log_format == "console"
        else structlog.processors.JSONRenderer()
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


class StoreEventLogger:
    """Writes store events to the structured log."""

    def __init__(self, logger_name: str = "debt_tracker.store"):
        self._logger = structlog.get_logger(logger_name)

    def log(self, event: StoreEvent) -> bool:
        """
        Log a store event.

        Returns False if the log call itself failed, True otherwise.
        """
        log_dict = event.to_log_dict()
        try:
            if event.severity is EventSeverity.ERROR:
                self._logger.error("store_event", **log_dict)
            elif event.severity is EventSeverity.WARNING:
                self._logger.warning("store_event", **log_dict)
            elif event.severity is EventSeverity.DEBUG:
                self._logger.debug("store_event", **log_dict)
            else:
                self._logger.info("store_event", **log_dict)
        except Exception:
            return False
        return True
