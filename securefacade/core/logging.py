"""
Secure Logging Module
=====================

Security-aware logging for the facade.

Features:
- Automatic secret/sensitive data filtering
- Structured (JSON) output support
- Console handler only; the facade never writes log files

The library itself only installs a ``NullHandler`` on the
``securefacade`` logger. Applications opt in to output with
:func:`configure_logging` or :func:`get_secure_logger`.
"""

from __future__ import annotations

import json
import logging
import re
import sys
from datetime import datetime, timezone
from typing import Final, Optional, Pattern

from securefacade.core.config import FacadeConfig, LoggingConfig

ROOT_LOGGER_NAME: Final[str] = "securefacade"

# Patterns for sensitive data detection
_SENSITIVE_PATTERNS: Final[list[tuple[str, Pattern[str]]]] = [
    ("password", re.compile(r'(?i)(password|passwd|pwd)\s*[=:]\s*["\']?[^\s"\']+["\']?')),
    ("secret", re.compile(r'(?i)(secret|private[_-]?key)\s*[=:]\s*["\']?[^\s"\']+["\']?')),
    ("key", re.compile(r'(?i)\bkey\s*[=:]\s*["\']?[^\s"\']+["\']?')),
    # Base64 encoded secrets (longer than 40 chars)
    ("base64_secret", re.compile(r'[A-Za-z0-9+/]{40,}={0,2}')),
    # Hex encoded secrets (32 chars or more)
    ("hex_secret", re.compile(r'(?i)(?:0x)?[a-f0-9]{32,}')),
]

_REDACTED_TEXT: Final[str] = "[REDACTED]"


class SecureLogFilter(logging.Filter):
    """
    Log filter that removes sensitive information from log messages.

    Scans messages and string arguments for patterns that might carry key
    material (hex or base64 blobs, ``key=...`` pairs) and replaces them
    with [REDACTED].
    """

    def __init__(self, name: str = "", additional_patterns: Optional[list[Pattern[str]]] = None) -> None:
        super().__init__(name)
        self._additional_patterns = additional_patterns or []

    def filter(self, record: logging.LogRecord) -> bool:
        """Redact the record in place; records are always kept."""
        if record.msg and isinstance(record.msg, str):
            record.msg = self._sanitize(record.msg)

        if record.args:
            if isinstance(record.args, dict):
                record.args = {k: self._sanitize(v) if isinstance(v, str) else v
                               for k, v in record.args.items()}
            elif isinstance(record.args, tuple):
                record.args = tuple(
                    self._sanitize(arg) if isinstance(arg, str) else arg
                    for arg in record.args
                )

        return True

    def _sanitize(self, text: str) -> str:
        """Remove sensitive data from text."""
        result = text

        for name, pattern in _SENSITIVE_PATTERNS:
            result = pattern.sub(f"{name}={_REDACTED_TEXT}", result)

        for pattern in self._additional_patterns:
            result = pattern.sub(_REDACTED_TEXT, result)

        return result


class StructuredLogFormatter(logging.Formatter):
    """Formatter that outputs logs in JSON format for easy parsing."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def _console_handler(config: LoggingConfig) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(logging.DEBUG)
    if config.enable_json:
        handler.setFormatter(StructuredLogFormatter())
    else:
        handler.setFormatter(logging.Formatter(config.format, datefmt=config.date_format))
    handler.addFilter(SecureLogFilter())
    return handler


def get_secure_logger(
    name: str,
    level: str = "INFO",
    enable_console: bool = True,
    enable_json: bool = False,
) -> logging.Logger:
    """
    Create a logger with automatic secret filtering.

    Args:
        name: Logger name (typically __name__)
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        enable_console: Whether to output to stderr
        enable_json: Whether to use JSON format

    Returns:
        Configured secure logger instance
    """
    logger = logging.getLogger(name)

    # Avoid adding handlers multiple times
    if any(not isinstance(h, logging.NullHandler) for h in logger.handlers):
        return logger

    logger.setLevel(getattr(logging, level.upper()))

    if enable_console:
        logger.addHandler(_console_handler(LoggingConfig(level=level, enable_json=enable_json)))

    logger.propagate = False

    return logger


def configure_logging(config: Optional[FacadeConfig] = None) -> logging.Logger:
    """
    Configure the ``securefacade`` logger hierarchy from configuration.

    Replaces previously attached stream handlers, so calling it again
    with a new configuration takes effect.

    Args:
        config: Configuration to apply (defaults to FacadeConfig.get_instance())

    Returns:
        The package root logger
    """
    settings = (config or FacadeConfig.get_instance()).logging
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(getattr(logging, settings.level.upper()))

    for handler in list(logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)

    if settings.enable_console:
        logger.addHandler(_console_handler(settings))

    return logger
