"""Correlation ID logging context for tracing scheduling commands.

Provides a command_id-aware logger that attaches a correlation ID to every
log message, so the parse and execute steps of one spoken or typed
command can be traced together.

Usage:
    from src.logging_context import get_command_logger, set_command_id

    set_command_id("CMD-abc123")
    logger = get_command_logger(__name__)
    logger.info("Parsing command")  # record.command_id == "CMD-abc123"
"""

import logging
import uuid
from contextvars import ContextVar

_command_id: ContextVar[str] = ContextVar("command_id", default="NO_COMMAND_ID")


def set_command_id(command_id: str) -> None:
    """Set the correlation ID for the current context."""
    _command_id.set(command_id)


def get_command_id() -> str:
    """Retrieve the current correlation ID."""
    return _command_id.get()


def new_command_id() -> str:
    """Generate and install a fresh correlation ID."""
    command_id = f"CMD-{uuid.uuid4().hex[:8]}"
    set_command_id(command_id)
    return command_id


class CommandIdFilter(logging.Filter):
    """Injects command_id into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.command_id = _command_id.get()  # type: ignore[attr-defined]
        return True


def get_command_logger(name: str) -> logging.Logger:
    """Return a logger with the CommandIdFilter attached.

    The filter adds ``command_id`` to each record so formatters can
    include ``%(command_id)s`` in their format string.
    """
    logger = logging.getLogger(name)
    if not any(isinstance(f, CommandIdFilter) for f in logger.filters):
        logger.addFilter(CommandIdFilter())
    return logger
