"""Logging for sqlbuilder.

Library code logs at DEBUG under the ``sqlbuilder`` namespace and never
installs handlers itself. Structured fields passed to :func:`log_with_context`
travel on the record as ``sql_context`` and are written out by both
formatters below. Applications opt into output with :func:`configure_logging`.
"""

from __future__ import annotations

import logging
import sys
from typing import IO, TYPE_CHECKING, Any

import msgspec

if TYPE_CHECKING:
    from collections.abc import Iterable

__all__ = (
    "CONTEXT_ATTR",
    "LOGGER_NAMESPACE",
    "StructuredFormatter",
    "TextFormatter",
    "configure_logging",
    "get_logger",
    "log_with_context",
)

LOGGER_NAMESPACE = "sqlbuilder"
CONTEXT_ATTR = "sql_context"

_TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def _context(record: logging.LogRecord) -> dict[str, Any]:
    return getattr(record, CONTEXT_ATTR, None) or {}


class StructuredFormatter(logging.Formatter):
    """Write each record as one JSON object per line.

    The record's context fields are merged into the top level object.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "time": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_context(record),
        }
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)
        return msgspec.json.encode(entry).decode("utf-8")


class TextFormatter(logging.Formatter):
    """Plain text lines with context fields appended as ``key=value``."""

    def __init__(self, fmt: str = _TEXT_FORMAT) -> None:
        super().__init__(fmt)

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = _context(record)
        if not context:
            return line
        pairs = " ".join(f"{key}={value!r}" for key, value in context.items())
        return f"{line} [{pairs}]"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger inside the sqlbuilder namespace.

    Args:
        name: Dotted suffix such as ``"builder"``. Names that already start
            with the namespace are used as given.

    Returns:
        The logger.
    """
    if not name:
        return logging.getLogger(LOGGER_NAMESPACE)
    if name != LOGGER_NAMESPACE and not name.startswith(f"{LOGGER_NAMESPACE}."):
        name = f"{LOGGER_NAMESPACE}.{name}"
    return logging.getLogger(name)


def log_with_context(logger: logging.Logger, level: int, message: str, **context: Any) -> None:
    """Log ``message`` with structured context fields attached.

    Nothing is built when ``level`` is disabled for ``logger``.

    Args:
        logger: Logger to emit on.
        level: Log level.
        message: Fixed message text.
        **context: Fields written by :class:`StructuredFormatter` and
            :class:`TextFormatter`.
    """
    if logger.isEnabledFor(level):
        logger.log(level, message, extra={CONTEXT_ATTR: context}, stacklevel=2)


def configure_logging(
    level: int | str = logging.INFO,
    *,
    structured: bool = False,
    stream: IO[str] | None = None,
    filename: str | None = None,
    handlers: Iterable[logging.Handler] = (),
) -> logging.Logger:
    """Send sqlbuilder log records somewhere.

    Replaces any handlers previously installed on the namespace logger and
    stops propagation to the root logger.

    Args:
        level: Level name or number, e.g. ``"DEBUG"`` to see rendered SQL.
        structured: Write JSON lines instead of text to ``stream``.
        stream: Console stream, ``sys.stdout`` by default.
        filename: Optional file that always receives JSON lines.
        handlers: Extra handlers, added as given.

    Returns:
        The namespace logger.
    """
    logger = logging.getLogger(LOGGER_NAMESPACE)
    for old in logger.handlers[:]:
        logger.removeHandler(old)
        old.close()
    logger.setLevel(level.upper() if isinstance(level, str) else level)

    console = logging.StreamHandler(stream if stream is not None else sys.stdout)
    console.setFormatter(StructuredFormatter() if structured else TextFormatter())
    logger.addHandler(console)
    if filename:
        to_file = logging.FileHandler(filename)
        to_file.setFormatter(StructuredFormatter())
        logger.addHandler(to_file)
    for handler in handlers:
        logger.addHandler(handler)
    logger.propagate = False

    log_with_context(logger, logging.DEBUG, "Logging configured", handlers=len(logger.handlers))
    return logger
