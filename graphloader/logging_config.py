"""
Structured Logging Configuration.

Provides JSON-structured logging for load observability.
Logs include context like the chosen route, model URL and load timings.

Usage:
    from graphloader.logging_config import get_logger

    logger = get_logger(__name__)
    logger.info("Fetching weights", extra={"url": "https://host/model.json"})
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from graphloader.config import settings

# Attributes every LogRecord carries; anything else came in through `extra`
_RECORD_ATTRIBUTES = frozenset({
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs",
    "pathname", "process", "processName", "relativeCreated",
    "stack_info", "exc_info", "exc_text", "thread", "threadName",
    "message", "taskName",
})


def _extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        k: v for k, v in record.__dict__.items()
        if k not in _RECORD_ATTRIBUTES
    }


class JSONFormatter(logging.Formatter):
    """
    Formats log records as JSON for structured logging.

    One object per line, so output can be shipped to any
    log aggregation service as-is.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as JSON."""
        log_entry: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        log_entry["app"] = {
            "name": settings.APP_NAME,
            "version": settings.APP_VERSION,
        }

        extra_fields = _extra_fields(record)
        if extra_fields:
            log_entry["context"] = extra_fields

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


class TextFormatter(logging.Formatter):
    """
    Human-readable text formatter for development.

    Provides colorized output when running in a terminal.
    """

    COLORS = {
        "DEBUG": "\033[36m",     # Cyan
        "INFO": "\033[32m",      # Green
        "WARNING": "\033[33m",   # Yellow
        "ERROR": "\033[31m",     # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as colored text."""
        color = self.COLORS.get(record.levelname, "")
        reset = self.RESET if color else ""

        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        message = f"{timestamp} | {color}{record.levelname:8}{reset} | {record.name} | {record.getMessage()}"

        extra_fields = _extra_fields(record)
        if extra_fields:
            context_str = " | ".join(f"{k}={v}" for k, v in extra_fields.items())
            message += f" | {context_str}"

        if record.exc_info:
            message += f"\n{self.formatException(record.exc_info)}"

        return message


def setup_logging(
    level: Optional[str] = None,
    format_type: Optional[str] = None,
) -> None:
    """
    Configure the root logger with appropriate handlers.

    Args:
        level: Log level (DEBUG, INFO, etc.). Defaults to config.
        format_type: Output format (json, text). Defaults to config.
    """
    level = level or settings.LOG_LEVEL
    format_type = format_type or settings.LOG_FORMAT

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(getattr(logging, level.upper()))

    if format_type.lower() == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(TextFormatter())

    root_logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with the given name.

    Ensures logging is configured on first call.

    Args:
        name: Logger name (typically __name__).

    Returns:
        Configured logger instance.

    Example:
        logger = get_logger(__name__)
        logger.info("Weights decoded", extra={"n_weights": 12})
    """
    if not logging.getLogger().handlers:
        setup_logging()

    return logging.getLogger(name)


class LoggerAdapter(logging.LoggerAdapter):
    """
    Logger adapter that adds consistent context to all log messages.

    Handlers use it to stamp every record with the artifact URL
    they are loading.

    Example:
        base_logger = get_logger(__name__)
        logger = LoggerAdapter(base_logger, {"model_url": "https://host/model.json"})
        logger.info("Fetching shard")  # Will include model_url in output
    """

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        """Add extra context to the log record."""
        extra = kwargs.get("extra", {})
        extra.update(self.extra)
        kwargs["extra"] = extra
        return msg, kwargs


class EventLogger:
    """
    Convenience class for logging key loader events.

    Provides type-safe methods for common events with
    consistent field names for querying.
    """

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        """Initialize with an optional logger."""
        self._logger = logger or get_logger("events")

    def load_routed(
        self,
        route: str,
        locator: str,
    ) -> None:
        """Log which backend a load request was routed to."""
        self._logger.info(
            "Load routed",
            extra={
                "event": "load_routed",
                "route": route,
                "locator": locator,
            }
        )

    def model_loaded(
        self,
        model_format: str,
        url: str,
        load_time_ms: Optional[float] = None,
    ) -> None:
        """Log model loading event."""
        self._logger.info(
            "Model loaded",
            extra={
                "event": "model_loaded",
                "model_format": model_format,
                "url": url,
                "load_time_ms": load_time_ms,
            }
        )

    def deprecated_call(
        self,
        name: str,
        replacement: str,
    ) -> None:
        """Log a call to a deprecated entry point."""
        self._logger.warning(
            f"{name} is deprecated, use {replacement}",
            extra={
                "event": "deprecated_call",
                "deprecated": name,
                "replacement": replacement,
            }
        )


# Singleton event logger
event_logger = EventLogger()
