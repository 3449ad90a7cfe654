# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Structured logging for flowengine.

Operator-facing logs (run started, node dispatch misses, failures) go through
these loggers. The per-run audit trail lives in ExecutionContext.logs and is
persisted with the execution record instead.
"""

import logging
import json
import sys
from datetime import datetime, timezone
from typing import Any

_RESERVED_ATTRS = {
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs",
    "message", "pathname", "process", "processName",
    "relativeCreated", "thread", "threadName", "exc_info",
    "exc_text", "stack_info", "taskName"
}


class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Outputs log records as JSON for easy parsing by log aggregation systems.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Fields passed through `extra=`
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_data[key] = value

        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Simple text formatter for human-readable logs."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )


def get_logger(
    name: str,
    log_level: str = "INFO",
    log_format: str = "json"
) -> logging.Logger:
    """
    Get configured logger instance.

    Args:
        name: Logger name (usually __name__)
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Format type (json or text)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, log_level.upper()))

    # Remove existing handlers to avoid duplicates
    logger.handlers = []

    if log_format == "json":
        formatter = JSONFormatter()
    else:
        formatter = TextFormatter()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    level: str = "INFO",
    **kwargs: Any
) -> None:
    """
    Log structured event with additional fields.

    Args:
        logger: Logger instance
        event: Event name
        level: Log level
        **kwargs: Additional fields to include in log
    """
    log_func = getattr(logger, level.lower())
    log_func(event, extra=kwargs)


def get_service_logger(service_name: str) -> logging.Logger:
    """Get logger for an engine component."""
    from flowengine.core.config import get_config
    config = get_config()
    return get_logger(
        f"flowengine.{service_name}",
        log_level=config.log_level,
        log_format=config.log_format
    )


def get_api_logger() -> logging.Logger:
    """Get logger for API routes."""
    return get_service_logger("api")
