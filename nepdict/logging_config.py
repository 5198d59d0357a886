"""Structured logging configuration for nepdict."""

import logging
import json
import sys
import time
from datetime import datetime, timezone
from typing import Optional


# Attributes every LogRecord carries; anything else came in through ``extra``
_RESERVED_ATTRS = {
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs", "message",
    "pathname", "process", "processName", "relativeCreated",
    "thread", "threadName", "exc_info", "exc_text", "stack_info",
    "taskName",
}


class StructuredFormatter(logging.Formatter):
    """Formatter that outputs one JSON object per log record."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        Args:
            record: The log record to format

        Returns:
            JSON-formatted log string
        """
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_data[key] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Devanagari stays readable in the output
        return json.dumps(log_data, default=str, ensure_ascii=False)


def setup_logging(
    format: str = "text",
    level: str = "INFO",
    log_file: Optional[str] = None
) -> None:
    """Configure logging for the application.

    Args:
        format: Log format ("json" or "text")
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path to write logs to
    """
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    log_level = getattr(logging, level.upper(), logging.INFO)
    root_logger.setLevel(log_level)

    if format == "json":
        formatter = StructuredFormatter()
    else:
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    logging.getLogger("asyncio").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)


def log_event(logger_name: str, event: str, **kwargs) -> None:
    """Log a structured event at INFO level."""
    get_logger(logger_name).info(event, extra=kwargs)


def log_error(
    logger_name: str,
    event: str,
    error: Exception,
    level: int = logging.ERROR,
    **kwargs
) -> None:
    """Log a structured error.

    Args:
        logger_name: Name of the logger to use
        event: Event name/type
        error: The exception that occurred
        level: Log level, recoverable problems use WARNING
        **kwargs: Additional fields to include in the log
    """
    kwargs["error_type"] = type(error).__name__
    get_logger(logger_name).log(level, f"{event}: {error}", extra=kwargs)


def log_performance(
    logger_name: str,
    operation: str,
    duration_ms: float,
    **kwargs
) -> None:
    """Log how long an operation took."""
    kwargs["duration_ms"] = duration_ms
    get_logger(logger_name).info(
        f"{operation} completed in {duration_ms:.1f}ms", extra=kwargs
    )


class Timer:
    """Context manager for timing operations.

    Example:
        with Timer() as timer:
            index = IndexBuilder().build(entries)
        log_performance(__name__, "index_build", timer.duration_ms)
    """

    def __init__(self):
        self.start_time = None
        self.end_time = None
        self.duration_ms = None

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.end_time = time.perf_counter()
        self.duration_ms = (self.end_time - self.start_time) * 1000
