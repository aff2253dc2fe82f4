"""Structured logging and timing utilities.

Log records are emitted through the standard ``logging`` module under the
``fieldstore`` logger hierarchy. Each record may carry a ``context`` dict
and a ``duration_ms``; ``StructuredFormatter`` renders them as one JSON
document per line.
"""

import json
import logging
import sys
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

ROOT_LOGGER = "fieldstore"


class LogLevel(str, Enum):
    """Log levels matching Python's logging module."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@dataclass
class LogEntry:
    """One rendered log line."""

    level: LogLevel
    message: str
    timestamp: str
    logger: str
    context: dict[str, Any] = field(default_factory=dict)
    error: dict[str, str] | None = None
    duration_ms: float | None = None

    def to_json(self) -> str:
        """Serialize to JSON, leaving out empty optional parts."""
        data: dict[str, Any] = {
            "level": self.level.value,
            "message": self.message,
            "timestamp": self.timestamp,
            "logger": self.logger,
        }
        optional = {
            "context": self.context or None,
            "error": self.error,
            "duration_ms": self.duration_ms,
        }
        data.update({k: v for k, v in optional.items() if v is not None})
        return json.dumps(data)


class StructuredFormatter(logging.Formatter):
    """Renders ``logging`` records as ``LogEntry`` JSON."""

    def format(self, record: logging.LogRecord) -> str:
        context = getattr(record, "context", None)
        error = None
        if record.exc_info and record.exc_info[0] is not None:
            exc_type, exc_value, _ = record.exc_info
            error = {"type": exc_type.__name__, "message": str(exc_value)}

        entry = LogEntry(
            level=LogLevel(record.levelname),
            message=record.getMessage(),
            timestamp=datetime.now(timezone.utc).isoformat(),
            logger=record.name,
            context=dict(context) if isinstance(context, dict) else {},
            error=error,
            duration_ms=getattr(record, "duration_ms", None),
        )
        return entry.to_json()


class StructuredLogger:
    """Logger that attaches key/value context to every record.

    Context bound with ``bind`` is merged under the fields given per call,
    so an owner can bind its identity once and log only what varies.

    Example:
        log = get_logger("fieldstore.database").bind(db="sessions")
        log.info("Backup taken", timestamp=120, records=3)
    """

    def __init__(self, name: str, context: dict[str, Any] | None = None) -> None:
        self.logger = logging.getLogger(name)
        self.context: dict[str, Any] = dict(context or {})

    def bind(self, **context: Any) -> "StructuredLogger":
        """Return a logger for the same name with extra bound context."""
        return StructuredLogger(self.logger.name, {**self.context, **context})

    def _log(
        self,
        level: int,
        message: str,
        fields: dict[str, Any],
        error: BaseException | None = None,
        duration_ms: float | None = None,
    ) -> None:
        if not self.logger.isEnabledFor(level):
            return

        extra: dict[str, Any] = {"context": {**self.context, **fields}}
        if duration_ms is not None:
            extra["duration_ms"] = duration_ms
        exc_info = (type(error), error, error.__traceback__) if error else None
        self.logger.log(level, message, exc_info=exc_info, extra=extra)

    def debug(self, message: str, duration_ms: float | None = None, **fields: Any) -> None:
        self._log(logging.DEBUG, message, fields, duration_ms=duration_ms)

    def info(self, message: str, duration_ms: float | None = None, **fields: Any) -> None:
        self._log(logging.INFO, message, fields, duration_ms=duration_ms)

    def warning(
        self,
        message: str,
        error: BaseException | None = None,
        duration_ms: float | None = None,
        **fields: Any,
    ) -> None:
        """Log at WARNING level, attaching ``error`` as exception info."""
        self._log(logging.WARNING, message, fields, error, duration_ms)


class Timer:
    """Context manager measuring wall time of a block in milliseconds.

    Example:
        with Timer() as t:
            count = archive.backup(store, now)
        log.info("Backup taken", duration_ms=t.duration_ms, records=count)
    """

    def __init__(self) -> None:
        self.start_time: float = 0
        self.end_time: float | None = None

    @property
    def duration_ms(self) -> float:
        """Elapsed time so far, or the final duration once the block exits."""
        end = self.end_time if self.end_time is not None else time.perf_counter()
        return (end - self.start_time) * 1000

    def __enter__(self) -> "Timer":
        self.start_time = time.perf_counter()
        self.end_time = None
        return self

    def __exit__(self, *args: Any) -> None:
        self.end_time = time.perf_counter()


def configure_logging(
    level: LogLevel = LogLevel.INFO,
    format: str = "json",
) -> None:
    """Install a single stdout handler on the ``fieldstore`` logger.

    Args:
        level: Minimum log level
        format: Output format ("json" or "text")
    """
    root_logger = logging.getLogger(ROOT_LOGGER)
    root_logger.setLevel(level.value)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    if format == "json":
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        ))
    root_logger.addHandler(handler)


def get_logger(name: str, **context: Any) -> StructuredLogger:
    """Get a structured logger, optionally with bound context.

    Args:
        name: Logger name (typically __name__)
        **context: Fields attached to every record from this logger
    """
    return StructuredLogger(name, context)
