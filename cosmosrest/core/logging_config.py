"""
Logging infrastructure for the document client.

Provides structured logging with JSON formatting, activity-id propagation and
redaction of authorization tokens and keys.

The activity id is the service-assigned id of the request currently being
handled. It is bound with ``activity_scope`` for the duration of one exchange
and never outlives it.
"""

import logging
import logging.handlers
import json
import sys
import re
from contextlib import contextmanager
from contextvars import ContextVar, Token
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

from .config_manager import LoggingConfig

# Context variable for the activity id of the current exchange
activity_id: ContextVar[Optional[str]] = ContextVar('activity_id', default=None)

REDACTED = "***REDACTED***"


class SensitiveDataFilter(logging.Filter):
    """Filter to redact master-key tokens and account keys from log messages.

    Arguments are merged into the message first so secrets passed as
    ``%s`` arguments are redacted too.
    """

    PATTERNS = [
        (re.compile(r'(authorization["\']?\s*[:=]\s*["\']?)[^\s"\',}]+', re.IGNORECASE), rf'\1{REDACTED}'),
        (re.compile(r'(type(?:=|%3D)master(?:&|%26)ver(?:=|%3D)[\d.]+(?:&|%26)sig(?:=|%3D))[^\s"\',}&]+', re.IGNORECASE), rf'\1{REDACTED}'),
        (re.compile(r'(master_key["\']?\s*[:=]\s*["\']?)[^\s"\',}]+', re.IGNORECASE), rf'\1{REDACTED}'),
        (re.compile(r'(AccountKey=)[^;]+', re.IGNORECASE), rf'\1{REDACTED}'),
        (re.compile(r'(sig=)[^;&\s]+', re.IGNORECASE), rf'\1{REDACTED}'),
    ]

    def filter(self, record: logging.LogRecord) -> bool:
        if record.args:
            record.msg = record.getMessage()
            record.args = ()
        if isinstance(record.msg, str):
            for pattern, replacement in self.PATTERNS:
                record.msg = pattern.sub(replacement, record.msg)
        return True


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "module": record.name,
            "message": record.getMessage(),
        }

        if current := activity_id.get():
            log_data["activity_id"] = current

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "context"):
            log_data["context"] = record.context

        return json.dumps(log_data)


class TextFormatter(logging.Formatter):
    """Human-readable text formatter.

    Records logged inside an activity scope carry the activity id in
    brackets after the logger name.
    """

    def __init__(self):
        fmt = "%(asctime)s [%(levelname)s] %(name)s%(activity)s: %(message)s"
        super().__init__(fmt=fmt, datefmt="%Y-%m-%d %H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        current = activity_id.get()
        record.activity = f" [{current}]" if current else ""
        return super().format(record)


def setup_logging(
    level: str = "INFO",
    format_type: str = "text",
    log_file: Optional[str] = None,
    rotation_size: str = "10MB",
    rotation_count: int = 5,
    module_levels: Optional[Dict[str, str]] = None
) -> None:
    """
    Configure client logging.

    Args:
        level: Default log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_type: Log format ("json" or "text")
        log_file: Optional file path for log output
        rotation_size: Size limit for log rotation (e.g., "10MB")
        rotation_count: Number of rotated log files to keep
        module_levels: Optional dict of module-specific log levels
                      e.g., {"cosmosrest.documents.transport": "DEBUG"}
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))

    root_logger.handlers.clear()

    formatter = JSONFormatter() if format_type == "json" else TextFormatter()

    # Diagnostics go to stderr so command output on stdout stays parseable
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(SensitiveDataFilter())
    root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            filename=log_file,
            maxBytes=_parse_size(rotation_size),
            backupCount=rotation_count,
            encoding='utf-8'
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        file_handler.addFilter(SensitiveDataFilter())
        root_logger.addHandler(file_handler)

        root_logger.debug(f"Logging to file: {log_file} (rotation: {rotation_size}, count: {rotation_count})")

    for module_name, module_level in (module_levels or {}).items():
        logging.getLogger(module_name).setLevel(getattr(logging, module_level.upper()))

    root_logger.debug(f"Logging configured: level={level}, format={format_type}")


def configure_logging(config: LoggingConfig) -> None:
    """Configure client logging from the ``logging`` section of a ClientConfig."""
    setup_logging(
        level=config.level,
        format_type=config.format,
        log_file=config.file,
        rotation_size=config.rotation_size,
        rotation_count=config.rotation_count,
        module_levels=config.module_levels,
    )


def _parse_size(size_str: str) -> int:
    """
    Parse size string to bytes.

    Args:
        size_str: Size string (e.g., "10MB", "1GB")

    Returns:
        Size in bytes
    """
    size_str = size_str.upper().strip()

    # Longer suffixes first so 'B' does not match 'MB'
    multipliers = [
        ('GB', 1024 ** 3),
        ('MB', 1024 ** 2),
        ('KB', 1024),
        ('B', 1),
    ]

    for suffix, multiplier in multipliers:
        if size_str.endswith(suffix):
            number = size_str[:-len(suffix)].strip()
            return int(float(number) * multiplier)

    return int(size_str)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a module."""
    return logging.getLogger(name)


def set_activity_id(value: Optional[str]) -> Token:
    """Bind an activity id; pass the returned token to ``reset_activity_id``."""
    return activity_id.set(value)


def reset_activity_id(token: Token) -> None:
    """Restore the activity id bound before ``set_activity_id`` returned token."""
    activity_id.reset(token)


@contextmanager
def activity_scope(value: Optional[str]) -> Iterator[None]:
    """Bind an activity id for the duration of a block.

    A falsy value leaves the current binding untouched.
    """
    if not value:
        yield
        return
    token = set_activity_id(value)
    try:
        yield
    finally:
        reset_activity_id(token)


def log_with_context(logger: logging.Logger, level: int, message: str, **context: Any) -> None:
    """
    Log a message with additional context.

    Args:
        logger: Logger instance
        level: Log level
        message: Log message
        **context: Additional context to include in log
    """
    extra = {"context": context} if context else {}
    logger.log(level, message, extra=extra)
