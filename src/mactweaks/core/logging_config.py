"""Centralized logging configuration for macOS Tweaks.

Both front ends call configure_logging() once at startup. The CLI logs to
stderr; the interactive navigator owns the terminal, so it passes
console=False and only logs when a file is configured.

Usage:
    from mactweaks.core.logging_config import configure_logging, get_logger

    configure_logging(level="DEBUG")
    logger = get_logger(__name__)

Environment Variables:
    MACTWEAKS_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    MACTWEAKS_LOG_FORMAT: Output format ("text" or "json")
    MACTWEAKS_LOG_FILE: Optional log file path
"""

from __future__ import annotations

import json
import logging
import os
import sys
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Literal

TEXT_FORMAT_WITH_MS = "%(asctime)s.%(msecs)03d - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Attributes every LogRecord carries; anything else came in through extra=.
_STANDARD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime"}

_configured = False


@dataclass
class LogConfig:
    """Resolved logging settings.

    Attributes:
        level: Log level name.
        format: "text" or "json".
        file_path: Optional log file.
        console: Attach a stderr handler.
    """

    level: str = "WARNING"
    format: Literal["text", "json"] = "text"
    file_path: str | None = None
    console: bool = True

    @classmethod
    def from_env(
        cls,
        level: str | None = None,
        format: Literal["text", "json"] | None = None,
        file_path: str | None = None,
        console: bool = True,
    ) -> LogConfig:
        """Explicit arguments win over MACTWEAKS_LOG_* variables."""
        level = level or os.environ.get("MACTWEAKS_LOG_LEVEL", "WARNING")
        if not isinstance(logging.getLevelName(level.upper()), int):
            level = "WARNING"
        fmt = format or os.environ.get("MACTWEAKS_LOG_FORMAT", "text")
        if fmt not in ("text", "json"):
            fmt = "text"
        return cls(
            level=level.upper(),
            format=fmt,  # type: ignore[arg-type]
            file_path=file_path or os.environ.get("MACTWEAKS_LOG_FILE") or None,
            console=console,
        )


class JsonFormatter(logging.Formatter):
    """One JSON object per line:

    {"timestamp": "...", "level": "INFO", "logger": "mactweaks.core.controller",
     "message": "action_start: action=apply, tweak=Auto-hide Dock"}
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        extra = {k: v for k, v in record.__dict__.items() if k not in _STANDARD_ATTRS}
        if extra:
            log_data["extra"] = extra

        return json.dumps(log_data, default=str)


def _formatter(format: str) -> logging.Formatter:
    if format == "json":
        return JsonFormatter()
    return logging.Formatter(TEXT_FORMAT_WITH_MS, datefmt=DATE_FORMAT)


def configure_logging(
    level: str | None = None,
    format: Literal["text", "json"] | None = None,
    file_path: str | None = None,
    console: bool = True,
    force: bool = False,
) -> LogConfig | None:
    """Configure the root logger.

    Subsequent calls are ignored unless force=True.

    Args:
        level: Log level. Defaults to MACTWEAKS_LOG_LEVEL or "WARNING".
        format: Output format. Defaults to MACTWEAKS_LOG_FORMAT or "text".
        file_path: Log file. Defaults to MACTWEAKS_LOG_FILE.
        console: Log to stderr. The navigator turns this off.
        force: Reconfigure even if already configured.

    Returns:
        The applied LogConfig, or None if logging was already configured.
    """
    global _configured
    if _configured and not force:
        return None

    config = LogConfig.from_env(level, format, file_path, console)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, config.level))
    root_logger.handlers.clear()

    formatter = _formatter(config.format)

    if config.console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    if config.file_path:
        file_handler = logging.FileHandler(config.file_path)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    if not root_logger.handlers:
        root_logger.addHandler(logging.NullHandler())

    _configured = True
    return config


def get_logger(name: str) -> logging.Logger:
    """Thin wrapper over logging.getLogger for consistent naming."""
    return logging.getLogger(name)


def set_level(level: str, logger_name: str | None = None) -> None:
    """Set the level of one logger (root when logger_name is None)."""
    logging.getLogger(logger_name).setLevel(getattr(logging, level.upper()))
