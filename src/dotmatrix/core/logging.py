"""Logging setup driven by :class:`~dotmatrix.core.config.LoggingConfig`.

Console output is either a short colored line per record or one JSON object
per record. An optional rotating log file always receives JSON.
"""

import json
import logging
import logging.handlers
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from .config import LoggingConfig
from .errors import ConfigurationError

# LogRecord attributes that are not user supplied "extra" fields
_RESERVED_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {
    "message",
    "asctime",
    "taskName",
}

# Third-party loggers that are noisy below WARNING
_QUIET_LOGGERS = ("PIL", "asyncio")


class JSONFormatter(logging.Formatter):
    """One JSON object per record, extra fields included."""

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: dict[str, Any] = {
            "timestamp": created.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": {
                "file": record.pathname,
                "line": record.lineno,
                "function": record.funcName,
            },
        }
        # Extra fields passed via logger.debug(..., extra={...})
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                entry[key] = value
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class SimpleFormatter(logging.Formatter):
    """Compact console line: time, level, last logger component, message."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(self, use_colors: bool = True) -> None:
        super().__init__(datefmt="%H:%M:%S")
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        level = f"{record.levelname:8}"
        if self.use_colors and record.levelname in self.COLORS:
            level = f"{self.COLORS[record.levelname]}{level}{self.RESET}"
        component = record.name.rsplit(".", 1)[-1]
        line = f"{self.formatTime(record, self.datefmt)} {level} [{component}] {record.getMessage()}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def _console_handler(config: LoggingConfig) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    if config.format == "structured":
        handler.setFormatter(JSONFormatter())
    else:
        use_colors = hasattr(sys.stdout, "isatty") and sys.stdout.isatty()
        handler.setFormatter(SimpleFormatter(use_colors=use_colors))
    return handler


def _file_handler(config: LoggingConfig) -> logging.Handler:
    log_path = Path(config.file)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=config.max_size_mb * 1024 * 1024,
        backupCount=config.backup_count,
        encoding="utf-8",
    )
    handler.setFormatter(JSONFormatter())
    return handler


def setup_logging(config: LoggingConfig | None = None, **overrides: Any) -> None:
    """Configure the root logger.

    Replaces any handlers already on the root logger, so calling it again
    with a changed config takes effect immediately.

    Args:
        config: Logging settings; defaults to ``LoggingConfig()``
        **overrides: Individual LoggingConfig fields to override

    Raises:
        ConfigurationError: If the overrides fail validation
    """
    config = config or LoggingConfig()
    if overrides:
        try:
            config = LoggingConfig.model_validate({**config.model_dump(), **overrides})
        except PydanticValidationError as e:
            raise ConfigurationError(
                "Invalid logging settings",
                details={"errors": e.error_count()},
                cause=e,
            ) from e

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(config.level)

    root.addHandler(_console_handler(config))
    if config.file:
        root.addHandler(_file_handler(config))

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
