"""
structlog setup for steam-mac-check.

Log events go to stderr, rendered as JSON lines or as coloured
console output. Stdout is left to the per-game ✅ / ❌ report and
the CLI's JSON output.
"""

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from structlog.types import Processor

from steam_mac_check.config import LoggingConfig


def _renderer(config: LoggingConfig) -> "Processor":
    """Pick the final processor for the configured format."""
    if config.format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=sys.stderr.isatty(),
        exception_formatter=structlog.dev.plain_traceback,
    )


def setup_logging(config: LoggingConfig | None = None) -> None:
    """
    Route structlog and stdlib logging to stderr at the configured level.

    Args:
        config: Logging section of the settings (read from LOG_* if None)
    """
    config = config or LoggingConfig()

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]
    if config.include_timestamp:
        processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))
    processors.append(_renderer(config))

    level = logging.getLevelName(config.level)
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    # httpx reports through the stdlib logger
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)
    # one INFO line per store lookup otherwise
    if config.level != "DEBUG":
        logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(name: str | None = None, **initial_context: Any) -> structlog.BoundLogger:
    """
    Return a structlog logger, optionally bound to ``initial_context``.

    Components bind ``component=...`` so every event names its origin:

        >>> log = get_logger(__name__, component="collector")
        >>> log.info("Starting probes", total=42)
    """
    logger = structlog.get_logger(name)
    if initial_context:
        logger = logger.bind(**initial_context)
    return logger
