"""
Formguard Logger
================

Structured logging for the validation library.

Library modules log at DEBUG level through ``get_logger``; nothing is
shown until an application lowers the level with ``configure_logging``.
"""

from __future__ import annotations

import json
import logging
import sys
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import IntEnum
from typing import Any, Dict, List, Optional, TextIO


class LogLevel(IntEnum):
    """Log levels, numerically aligned with :mod:`logging`."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR

    @classmethod
    def parse(cls, name: str) -> "LogLevel":
        """Parse a level name such as ``"debug"``."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown log level: {name!r}") from None


@dataclass
class LogRecord:
    """
    One structured log event.

    Attributes:
        level: Severity
        message: Fixed event text ("Image decode failed")
        logger_name: Dotted name of the emitting module
        context: Event details (rule alias, failure code, error text)
        timestamp: Creation time (UTC)
    """

    level: LogLevel
    message: str
    logger_name: str = "formguard"
    context: Dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "timestamp": self.timestamp.isoformat(),
            "level": self.level.name,
            "logger": self.logger_name,
            "message": self.message,
        }
        if self.context:
            data["context"] = self.context
        return data


class LogFormatter:
    """Base log formatter."""

    def format(self, record: LogRecord) -> str:
        raise NotImplementedError


class TextFormatter(LogFormatter):
    """
    Single-line text output.

    Example output:
        2026-10-17 10:30:45 [DEBUG] formguard.validation: Image decode failed rule=image_dimensions
    """

    COLORS = {
        LogLevel.DEBUG: "\033[36m",
        LogLevel.INFO: "\033[32m",
        LogLevel.WARNING: "\033[33m",
        LogLevel.ERROR: "\033[31m",
    }
    RESET = "\033[0m"

    def __init__(self, date_format: str = "%Y-%m-%d %H:%M:%S", colors: bool = True):
        self.date_format = date_format
        self.colors = colors

    def format(self, record: LogRecord) -> str:
        level = record.level.name
        if self.colors:
            level = f"{self.COLORS[record.level]}{level}{self.RESET}"

        line = (
            f"{record.timestamp.strftime(self.date_format)} [{level}] "
            f"{record.logger_name}: {record.message}"
        )
        if record.context:
            line += " " + " ".join(f"{key}={value}" for key, value in record.context.items())
        return line


class JsonFormatter(LogFormatter):
    """One JSON object per line."""

    def format(self, record: LogRecord) -> str:
        return json.dumps(record.to_dict(), default=str)


class StreamHandler:
    """Writes formatted records at or above ``level`` to a text stream."""

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        formatter: Optional[LogFormatter] = None,
        level: LogLevel = LogLevel.DEBUG,
    ):
        self.stream = stream
        self.formatter = formatter or TextFormatter(colors=False)
        self.level = level

    def handle(self, record: LogRecord) -> None:
        if record.level < self.level:
            return
        # Resolve stderr late so redirected streams are honored
        stream = self.stream or sys.stderr
        stream.write(self.formatter.format(record) + "\n")
        stream.flush()


class Logger:
    """
    Structured logger.

    Example:
        logger = get_logger("formguard.validation")
        logger.debug("Parsed rule", rule="password_strength", params=["8"])

        form_logger = logger.with_context(form="signup")
        form_logger.info("Validated", fields=3)
    """

    def __init__(
        self,
        name: str = "formguard",
        level: LogLevel = LogLevel.WARNING,
        handlers: Optional[List[StreamHandler]] = None,
    ):
        self.name = name
        self.level = level
        self._handlers = handlers if handlers is not None else []
        self._context: Dict[str, Any] = {}

    def with_context(self, **context: Any) -> "Logger":
        """Child logger sharing handlers and level, with extra context."""
        child = Logger(self.name, self.level, self._handlers)
        child._context = {**self._context, **context}
        return child

    def is_enabled_for(self, level: LogLevel) -> bool:
        return level >= self.level

    def _log(self, level: LogLevel, message: str, context: Dict[str, Any]) -> None:
        if not self.is_enabled_for(level):
            return

        record = LogRecord(
            level=level,
            message=message,
            logger_name=self.name,
            context={**self._context, **context},
        )
        for handler in self._handlers:
            handler.handle(record)

    def debug(self, message: str, **context: Any) -> None:
        self._log(LogLevel.DEBUG, message, context)

    def info(self, message: str, **context: Any) -> None:
        self._log(LogLevel.INFO, message, context)

    def warning(self, message: str, **context: Any) -> None:
        self._log(LogLevel.WARNING, message, context)

    def error(self, message: str, **context: Any) -> None:
        self._log(LogLevel.ERROR, message, context)


# Registry shared by every formguard module
_loggers: Dict[str, Logger] = {}
_default_level: LogLevel = LogLevel.WARNING
_default_handlers: List[StreamHandler] = [StreamHandler()]


def get_logger(name: str = "formguard") -> Logger:
    """
    Get or create a named logger.

    All loggers share the handler list installed by ``configure_logging``.
    """
    if name not in _loggers:
        _loggers[name] = Logger(name, _default_level, _default_handlers)
    return _loggers[name]


def configure_logging(
    level: Optional[LogLevel] = None,
    format: Optional[str] = None,
    stream: Optional[TextIO] = None,
    colors: bool = False,
) -> Logger:
    """
    Configure every formguard logger.

    Args:
        level: Minimum level (default: ``FORMGUARD_LOG_LEVEL``)
        format: "text" or "json" (default: ``FORMGUARD_LOG_FORMAT``)
        stream: Output stream (default: stderr)
        colors: ANSI colors in text output

    Returns:
        The root "formguard" logger
    """
    global _default_level

    if level is None or format is None:
        from formguard.core.config import get_settings

        settings = get_settings()
        if level is None:
            level = LogLevel.parse(settings.log_level)
        format = format or settings.log_format

    formatter: LogFormatter
    if format == "json":
        formatter = JsonFormatter()
    else:
        formatter = TextFormatter(colors=colors)

    # Swap in place; existing loggers hold a reference to this list
    _default_handlers[:] = [StreamHandler(stream, formatter, level)]
    _default_level = level

    for logger in _loggers.values():
        logger.level = level

    return get_logger("formguard")
