"""Centralized logging configuration for the transport billing system.

Every record passes through a filter that copies the active
:class:`~transport_billing.utils.logging_utils.LogContext` fields (memo
number, invoice number, table name) onto it. The text format appends them
as ``[key=value ...]``; the JSON format emits them as top-level keys.
"""

import json
import logging
import logging.handlers
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from transport_billing.utils.logging_utils import _ContextFilter

VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
VALID_FORMATS = ("standard", "json")

LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5

# LogRecord attributes that are not context fields
_RESERVED_FIELDS = set(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__.keys()
) | {"message", "asctime"}


def _context_fields(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _RESERVED_FIELDS and not key.startswith("_")
    }


class ContextFormatter(logging.Formatter):
    """Plain text formatter that appends the record's context fields."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = _context_fields(record)
        if not context:
            return line
        pairs = " ".join(f"{key}={value}" for key, value in sorted(context.items()))
        first, newline, rest = line.partition("\n")
        return f"{first} [{pairs}]{newline}{rest}"


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging, one object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        log_data.update(_context_fields(record))
        return json.dumps(log_data, default=str)


@dataclass
class LoggingConfig:
    """
    Logging settings of one process.

    Attributes:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        log_format: 'standard' text or 'json' lines
        log_file: Also write to this rotating file when set
    """

    log_level: str = "INFO"
    log_format: str = "standard"
    log_file: Optional[str] = None

    def __post_init__(self):
        self.log_level = self.log_level.upper()
        if self.log_level not in VALID_LEVELS:
            raise ValueError(
                f"Invalid log level: {self.log_level}. "
                f"Must be one of {', '.join(VALID_LEVELS)}"
            )
        if self.log_format not in VALID_FORMATS:
            raise ValueError(
                f"Invalid log format: {self.log_format}. "
                f"Must be one of {', '.join(VALID_FORMATS)}"
            )

    @classmethod
    def from_env(cls, default_level: str = "INFO") -> "LoggingConfig":
        """
        Read LOG_LEVEL, LOG_FORMAT and LOG_FILE from the environment.

        Args:
            default_level: Level used when LOG_LEVEL is unset
        """
        return cls(
            log_level=os.getenv("LOG_LEVEL", default_level),
            log_format=os.getenv("LOG_FORMAT", "standard"),
            log_file=os.getenv("LOG_FILE") or None,
        )

    def build_formatter(self) -> logging.Formatter:
        if self.log_format == "json":
            return JSONFormatter()
        return ContextFormatter()

    def build_handlers(self) -> List[logging.Handler]:
        """Console handler on stderr, plus the rotating file when configured."""
        handlers: List[logging.Handler] = [logging.StreamHandler()]
        if self.log_file:
            Path(self.log_file).parent.mkdir(parents=True, exist_ok=True)
            handlers.append(
                logging.handlers.RotatingFileHandler(
                    filename=self.log_file,
                    maxBytes=LOG_FILE_MAX_BYTES,
                    backupCount=LOG_FILE_BACKUPS,
                    encoding="utf-8",
                )
            )
        return handlers


def configure_logging(config: LoggingConfig) -> None:
    """Replace the root logger's handlers with the configured ones."""
    reset_logging()

    root_logger = logging.getLogger()
    root_logger.setLevel(config.log_level)

    formatter = config.build_formatter()
    context_filter = _ContextFilter()
    for handler in config.build_handlers():
        handler.setFormatter(formatter)
        handler.addFilter(context_filter)
        root_logger.addHandler(handler)


def reset_logging() -> None:
    """Close and remove all root handlers; used by tests and CLI teardown."""
    root_logger = logging.getLogger()

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    root_logger.setLevel(logging.WARNING)
