"""
Logging configuration for wp-context.

Provides:
- Console output (colored unless WPCONTEXT_NO_COLOR is set)
- Daily rotating application log
- Separate audit log for forced contexts
- Request ID on every record
"""

from __future__ import annotations

import json
import logging
import logging.handlers
import os
import sys
import threading
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any

LOG_DIR = Path(os.getenv("WPCONTEXT_LOG_DIR", "logs"))
AUDIT_LOGGER = "wpcontext.audit"

_request_context = threading.local()


class RequestContextFilter(logging.Filter):
    """Add the current request ID to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = getattr(_request_context, "request_id", "N/A")
        return True


class FlushingTimedRotatingFileHandler(logging.handlers.TimedRotatingFileHandler):
    def emit(self, record: logging.LogRecord) -> None:
        super().emit(record)
        self.flush()


class ColoredFormatter(logging.Formatter):
    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
        "RESET": "\033[0m",
    }

    def format(self, record: logging.LogRecord) -> str:
        levelname = record.levelname
        if levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.COLORS['RESET']}"
        try:
            return super().format(record)
        finally:
            record.levelname = levelname


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "line": record.lineno,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", None),
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data)


def _file_handler(filename: str, level: int, backup_count: int) -> logging.Handler:
    handler = FlushingTimedRotatingFileHandler(
        LOG_DIR / filename,
        when="midnight",
        interval=1,
        backupCount=backup_count,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.suffix = "%Y-%m-%d"
    handler.addFilter(RequestContextFilter())
    return handler


def setup_logging(
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    *,
    json_format: bool = False,
) -> None:
    """
    Configure application-wide logging.

    Args:
        console_level: Console output level (DEBUG, INFO, WARNING, ERROR)
        file_level: File output level (DEBUG, INFO, WARNING, ERROR)
        json_format: Use JSON format for the application log file
    """
    LOG_DIR.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers.clear()

    line_format = "%(asctime)s | %(levelname)-8s | %(request_id)s | %(name)s:%(lineno)d | %(message)s"

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(getattr(logging, console_level.upper(), logging.INFO))
    if os.getenv("WPCONTEXT_NO_COLOR"):
        console_formatter = logging.Formatter(line_format, datefmt="%Y-%m-%d %H:%M:%S")
    else:
        console_formatter = ColoredFormatter(line_format, datefmt="%Y-%m-%d %H:%M:%S")
    console_handler.setFormatter(console_formatter)
    console_handler.addFilter(RequestContextFilter())
    root_logger.addHandler(console_handler)

    app_handler = _file_handler(
        "wpcontext.log", getattr(logging, file_level.upper(), logging.DEBUG), backup_count=30
    )
    if json_format:
        app_handler.setFormatter(JSONFormatter())
    else:
        app_handler.setFormatter(logging.Formatter(line_format, datefmt="%Y-%m-%d %H:%M:%S"))
    root_logger.addHandler(app_handler)

    audit_handler = _file_handler("wpcontext-audit.log", logging.INFO, backup_count=365)
    audit_handler.setFormatter(
        logging.Formatter("%(asctime)s | %(request_id)s | %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
    )

    audit_logger = logging.getLogger(AUDIT_LOGGER)
    audit_logger.handlers.clear()
    audit_logger.addHandler(audit_handler)
    audit_logger.setLevel(logging.INFO)
    audit_logger.propagate = False

    root_logger.debug(
        "Logging configured",
        extra={"console_level": console_level, "file_level": file_level},
    )


def set_request_id(request_id: str) -> None:
    """Set request ID for current thread."""
    _request_context.request_id = request_id


def get_request_id() -> str | None:
    return getattr(_request_context, "request_id", None)


def generate_request_id() -> str:
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"req_{timestamp}_{str(uuid.uuid4())[:8]}"


def audit_log(message: str, **context: Any) -> None:
    """
    Write to audit log.

    Example:
        audit_log("Context forced", context="rest")
    """
    logger = logging.getLogger(AUDIT_LOGGER)
    context_str = " | ".join(f"{k}={v}" for k, v in context.items())
    full_message = f"{message} | {context_str}" if context else message
    logger.info(full_message)
