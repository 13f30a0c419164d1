"""Structured logging for the job catalog.

This module provides:
- configure_logging / configure_from_settings: Install the stdout handler
- get_logger: Logger factory that tags records with a component
- log_context and friends: Scoped fields (run_id, record_id) added to every record
"""

import logging
from typing import Optional

from .config import (
    DEFAULT_SERVICE,
    ContextualFilter,
    JSONFormatter,
    KeyValueFormatter,
    configure_from_settings,
    configure_logging,
)
from .context import clear_log_context, get_log_context, log_context, pop_log_context, push_log_context


class ComponentLoggerAdapter(logging.LoggerAdapter):
    """LoggerAdapter that merges its component with per-call extra fields."""

    def process(self, msg, kwargs):
        """Process log call, merging adapter extra with call extra."""
        extra = kwargs.get("extra") or {}

        # Call's extra takes precedence over the adapter's component
        kwargs["extra"] = {**self.extra, **extra}

        return msg, kwargs


def get_logger(name: str, component: Optional[str] = None):
    """Get a logger with optional default component field.

    Args:
        name: Logger name (typically __name__)
        component: Optional component identifier to inject into all logs

    Returns:
        Logger or ComponentLoggerAdapter instance

    Example:
        >>> logger = get_logger(__name__, component="dedup")
        >>> logger.info("Dedup finished", extra={"event": "dedup.run.completed"})
    """
    logger = logging.getLogger(name)

    if component:
        return ComponentLoggerAdapter(logger, {"component": component})

    return logger


__all__ = [
    "get_logger",
    "ComponentLoggerAdapter",
    "configure_logging",
    "configure_from_settings",
    "ContextualFilter",
    "JSONFormatter",
    "KeyValueFormatter",
    "DEFAULT_SERVICE",
    "log_context",
    "push_log_context",
    "pop_log_context",
    "get_log_context",
    "clear_log_context",
]
