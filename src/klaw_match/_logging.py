"""Structured logging for klaw-match.

Match traces go through structlog into the stdlib `klaw_match` logger. Its
handler uses structlog's ProcessorFormatter, so trace events render as JSON
or console lines without touching the application's root handlers.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

__all__ = [
    'LOGGER_NAME',
    'configure_logging',
    'get_logger',
    'trace_logger',
]

LOGGER_NAME = 'klaw_match'


def _get_shared_processors() -> list[Any]:
    """Get processors shared between structlog and stdlib foreign logs."""
    import structlog

    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt='iso'),
    ]


def _get_structlog_processors() -> list[Any]:
    """Get the full processor chain for structlog loggers."""
    import structlog

    return [
        *_get_shared_processors(),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ]


def _get_renderer(json_output: bool = True) -> Any:
    """Get the appropriate renderer based on output format."""
    import structlog

    if json_output:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(
    level: str = 'INFO',
    *,
    json_output: bool = True,
) -> logging.Logger:
    """Configure structlog and the `klaw_match` stdlib logger.

    Calling it again replaces the handler installed by the previous call.
    Records stop at the `klaw_match` logger instead of propagating to root.

    Args:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL").
        json_output: If True, emit JSON logs. If False, use colored console output.

    Returns:
        The configured `klaw_match` logger.
    """
    import structlog

    structlog.configure(
        processors=_get_structlog_processors(),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_get_shared_processors(),
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _get_renderer(json_output),
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.propagate = False
    return logger


def get_logger(name: str | None = None, **context: Any) -> Any:
    """Get a structlog logger, optionally bound to context.

    Args:
        name: Logger name. Defaults to the `klaw_match` logger.
        **context: Key-value pairs added to every event of the logger.

    Returns:
        A structlog BoundLogger.
    """
    import structlog

    logger = structlog.get_logger(name or LOGGER_NAME)
    if context:
        return logger.bind(**context)
    return logger


def trace_logger(kind: str, **context: Any) -> Any:
    """Logger for match trace events, bound to the pattern kind."""
    return get_logger(f'{LOGGER_NAME}.trace', kind=kind, **context)
