"""Structured logging configuration for the InSpec exporter.

Uses structlog for JSON-formatted, structured logging suitable for
log aggregation systems.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone
from typing import Any

import structlog


def get_utc_timestamp() -> str:
    """Get current UTC timestamp in ISO format."""
    return datetime.now(timezone.utc).isoformat()


def add_timestamp(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Add UTC timestamp to log events."""
    event_dict["timestamp"] = get_utc_timestamp()
    return event_dict


def add_context(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Add default context fields to log events."""
    event_dict.setdefault("service", "inspec-exporter")
    return event_dict


# Root handlers added by configure_logging, replaced on every call
_installed_handlers: list[logging.Handler] = []


def reset_logging() -> None:
    """Remove the root handlers installed by ``configure_logging``."""
    root_logger = logging.getLogger()
    while _installed_handlers:
        handler = _installed_handlers.pop()
        root_logger.removeHandler(handler)
        handler.close()


def configure_logging(
    level: str = "INFO",
    json_format: bool = False,
    log_file: str | None = None,
) -> Any:
    """Configure structured logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_format: If True, output JSON logs for machine parsing
        log_file: Optional file path for logging

    Returns:
        Configured logger instance
    """
    processors = [
        structlog.stdlib.filter_by_level,
        add_timestamp,
        add_context,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    reset_logging()

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    for handler in handlers:
        handler.setLevel(getattr(logging, level.upper()))
        root_logger.addHandler(handler)
        _installed_handlers.append(handler)

    return structlog.get_logger("inspec_exporter")


def get_logger(name: str = "inspec_exporter") -> Any:
    """Get a structlog logger bound to ``name``."""
    return structlog.get_logger(name)


def log_scrape_event(
    event: str,
    target: str,
    module: str,
    level: str = "info",
    **kwargs: Any,
) -> None:
    """Log a scrape-related event with standard fields.

    Args:
        event: Event name (e.g., "scrape_started", "scrape_failed")
        target: Scraped host, empty for local runs
        module: Module name
        level: Log method to use
        **kwargs: Additional event data
    """
    logger = get_logger("inspec_exporter.scrape")

    event_data = {
        "target": target or "local",
        "module": module,
        **kwargs,
    }

    getattr(logger, level)(event, **event_data)
