"""Context propagation for structured logging.

Fields pushed here (a pipeline run_id, the record_id being enriched) are added
to every log record emitted inside the scope by ContextualFilter. Storage is a
ContextVar, so nested scopes restore cleanly and threads do not leak fields
into one another.
"""

from contextvars import ContextVar, Token
from typing import Any, Dict, Optional

LogContextVar: ContextVar[Dict[str, Any]] = ContextVar("log_context", default={})


def get_log_context() -> Dict[str, Any]:
    """Get a copy of the current logging context."""
    return dict(LogContextVar.get())


def push_log_context(**kwargs) -> Token:
    """Merge fields into the logging context.

    Args:
        **kwargs: Fields to add; existing keys are overridden

    Returns:
        Token for pop_log_context()

    Example:
        >>> token = push_log_context(run_id="3f2a9c")
        >>> # ... every record now carries run_id ...
        >>> pop_log_context(token)
    """
    return LogContextVar.set({**LogContextVar.get(), **kwargs})


def pop_log_context(token: Token) -> None:
    """Restore the logging context captured by push_log_context()."""
    LogContextVar.reset(token)


def clear_log_context() -> None:
    """Clear all logging context fields (mainly for tests)."""
    LogContextVar.set({})


class log_context:
    """Context manager for scoped logging context.

    Example:
        >>> with log_context(run_id="3f2a9c"):
        ...     with log_context(record_id="hn:123"):
        ...         logger.info("Enriching")  # carries run_id and record_id
        ...     logger.info("Dedup")  # carries run_id only
    """

    def __init__(self, **kwargs):
        self.fields = kwargs
        self.token: Optional[Token] = None

    def __enter__(self):
        self.token = push_log_context(**self.fields)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.token is not None:
            pop_log_context(self.token)
            self.token = None
        return False
