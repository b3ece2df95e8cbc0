"""Structured logging configuration.

Warehouse modules log snake_case events with keyword fields. Output is
JSON through structlog, or a standard logging adapter when absent.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any

_DEFAULT_LEVEL = logging.INFO
_configured_level: int | None = None


def configure_logging(level: int = _DEFAULT_LEVEL) -> None:
    """Configure structured output once per process.

    Args:
        level: Minimum stdlib level to emit.
    """
    global _configured_level
    if _configured_level == level:
        return
    _configured_level = level
    try:
        import structlog
    except ImportError:
        logging.getLogger("warehouse").setLevel(level)
        return
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(sort_keys=True),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=_stderr_print_logger,
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> Any:
    """Return a module logger instance.

    Args:
        name: Logger name, usually __name__.

    Returns:
        A structlog or stdlib logger accepting keyword event fields.
    """
    if _configured_level is None:
        configure_logging()
    try:
        import structlog
    except ImportError:
        return _StructuredStandardLogger(_standard_logger(name))
    return structlog.get_logger(name)


def _stderr_print_logger(*_args: Any) -> Any:
    """Bind structlog output to the current stderr stream."""
    import structlog

    return structlog.PrintLogger(sys.stderr)


def _standard_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(f"warehouse.{name}")
    root = logging.getLogger("warehouse")
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
        root.addHandler(handler)
        root.setLevel(_configured_level or _DEFAULT_LEVEL)
    return logger


class _StructuredStandardLogger:
    """Stdlib logger adapter that accepts structured keyword fields."""

    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger

    def debug(self, event: str, **fields: object) -> None:
        self._logger.debug(_format_event(event, fields))

    def info(self, event: str, **fields: object) -> None:
        self._logger.info(_format_event(event, fields))

    def warning(self, event: str, **fields: object) -> None:
        self._logger.warning(_format_event(event, fields))

    def error(self, event: str, **fields: object) -> None:
        self._logger.error(_format_event(event, fields))


def _format_event(event: str, fields: dict[str, object]) -> str:
    """Render a structured event line for standard logging.

    Args:
        event: Event name.
        fields: Event fields.

    Returns:
        JSON-encoded event string.
    """
    if not fields:
        return event
    payload = {"event": event, **fields}
    return json.dumps(payload, sort_keys=True, default=str)
