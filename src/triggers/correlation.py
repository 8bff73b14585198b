"""Event Correlation for trigger logging.

Every log line written while handling a Firestore event carries the
CloudEvent id, so the lines of one invocation can be grouped even when the
platform runs many invocations side by side.

Usage:
    from triggers.correlation import event_context, configure_event_logging

    configure_event_logging()

    with event_context(event.id):
        ...  # log records here get record.event_id
"""

from __future__ import annotations

import json
import logging
import uuid
from contextvars import ContextVar, Token
from typing import Optional, Union

logger = logging.getLogger(__name__)


# Context variable for the current event id (safe across asyncio tasks)
_event_id_ctx: ContextVar[Optional[str]] = ContextVar(
    "event_id",
    default=None,
)

DEFAULT_LOG_FORMAT = "%(asctime)s [%(event_id)s] %(levelname)s %(name)s: %(message)s"


def get_event_id() -> Optional[str]:
    """Get the id of the event being handled.

    Returns:
        The event id for the current context, or None.
    """
    return _event_id_ctx.get()


def set_event_id(event_id: str) -> Token[Optional[str]]:
    """Set the event id for the current context.

    Args:
        event_id: The CloudEvent id.

    Returns:
        Token that can be used to reset the context.
    """
    return _event_id_ctx.set(event_id)


def reset_event_id(token: Token[Optional[str]]) -> None:
    """Reset the event id to its previous value.

    Args:
        token: Token from set_event_id.
    """
    _event_id_ctx.reset(token)


class event_context:
    """Context manager binding an event id to the current context.

    Usage:
        with event_context(event.id):
            ...

        # Or generate one (local runs without a CloudEvent):
        with event_context() as event_id:
            ...
    """

    def __init__(self, event_id: Optional[str] = None):
        """Initialize context.

        Args:
            event_id: ID to use, or None to generate one.
        """
        self.event_id = event_id or str(uuid.uuid4())
        self._token: Optional[Token[Optional[str]]] = None

    def __enter__(self) -> str:
        """Enter context and set event id."""
        self._token = set_event_id(self.event_id)
        return self.event_id

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit context and reset event id."""
        if self._token is not None:
            reset_event_id(self._token)


class EventIdFilter(logging.Filter):
    """Logging filter that adds the event id to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Add event_id to log record.

        Args:
            record: Log record to process.

        Returns:
            True to include the record.
        """
        record.event_id = get_event_id() or "-"
        return True


class JsonFormatter(logging.Formatter):
    """
    JSON log formatter for Cloud Logging.

    One object per line; Cloud Logging reads the level from "severity"
    and the text from "message".
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            "severity": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "event_id": getattr(record, "event_id", None) or get_event_id() or "-",
        }

        if record.exc_info:
            log_data["message"] += "\n" + self.formatException(record.exc_info)

        return json.dumps(log_data, default=str, ensure_ascii=False)


def configure_event_logging(
    log_format: Optional[str] = None,
    level: Union[int, str] = logging.INFO,
    json_output: bool = False,
) -> logging.Handler:
    """Configure root logging with event id support.

    Args:
        log_format: Custom text format (must include %(event_id)s).
            Ignored for JSON output.
        level: Logging level.
        json_output: If True, output JSON formatted logs with severity.

    Returns:
        The installed handler.
    """
    if json_output:
        formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(log_format or DEFAULT_LOG_FORMAT)

    root_logger = logging.getLogger()
    for existing in root_logger.handlers:
        if any(isinstance(f, EventIdFilter) for f in existing.filters):
            existing.setFormatter(formatter)
            existing.setLevel(level)
            root_logger.setLevel(level)
            return existing

    handler = logging.StreamHandler()
    handler.addFilter(EventIdFilter())
    handler.setFormatter(formatter)
    handler.setLevel(level)

    root_logger.addHandler(handler)
    root_logger.setLevel(level)
    return handler
