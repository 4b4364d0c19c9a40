"""Opt-in logging for vclock.

The library is silent by default: ``vclock/__init__.py`` attaches a
``NullHandler`` to the ``vclock`` logger and nothing else. Applications that
want to see what the version vectors are doing (for example, which
comparisons came out CONCURRENT) turn logging on with one of the helpers
below.

Example usage::

    import vclock

    vclock.enable_console_logging(level="DEBUG")
    vclock.enable_file_logging("logs/vclock.log", max_bytes=5_000_000)
    vclock.enable_json_logging()
    vclock.configure_from_env()

Environment variables (read only by ``configure_from_env``):
    VCLOCK_LOGGING: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    VCLOCK_LOG_FILE: Path to a log file (enables rotating file logging)
    VCLOCK_LOG_JSON: Set to "1" for JSON output
"""

from __future__ import annotations

import json
import logging
import os
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler, TimedRotatingFileHandler
from pathlib import Path
from typing import Literal

__all__ = [
    "configure_from_env",
    "disable_logging",
    "enable_console_logging",
    "enable_file_logging",
    "enable_json_file_logging",
    "enable_json_logging",
    "enable_timed_file_logging",
    "set_level",
    "set_module_level",
]

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

DEFAULT_MAX_BYTES = 10 * 1024 * 1024  # 10 MB
DEFAULT_BACKUP_COUNT = 5

LOGGER_NAME = "vclock"

ENV_LEVEL = "VCLOCK_LOGGING"
ENV_FILE = "VCLOCK_LOG_FILE"
ENV_JSON = "VCLOCK_LOG_JSON"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class JsonFormatter(logging.Formatter):
    """Render each record as a single JSON object.

    Example output:
        {"timestamp": "2026-01-15T10:30:00.123456+00:00", "level": "DEBUG",
         "logger": "vclock.core.version_vector", "message": "..."}
    """

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def _get_level(level: str | int) -> int:
    """Map a level name or number to a ``logging`` constant (INFO if unknown)."""
    if isinstance(level, int):
        return level
    return getattr(logging, level.upper(), logging.INFO)


def _get_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)


def _clear_handlers() -> None:
    """Detach and close every handler on the vclock logger except NullHandler."""
    logger = _get_logger()
    for handler in logger.handlers[:]:
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)
            handler.close()


def _install[H: logging.Handler](
    handler: H, level: LogLevel | int, formatter: logging.Formatter
) -> H:
    logger = _get_logger()
    logger.setLevel(_get_level(level))
    handler.setLevel(_get_level(level))
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    return handler


def _prepare_path(path: str | Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def enable_console_logging(
    level: LogLevel | int = "INFO",
    format: str = DEFAULT_FORMAT,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> logging.StreamHandler:
    """Log vclock records to stderr.

    Args:
        level: Log level name or number.
        format: Log message format string.
        date_format: Date format for ``%(asctime)s``.

    Returns:
        The attached StreamHandler.
    """
    return _install(logging.StreamHandler(), level, logging.Formatter(format, date_format))


def enable_file_logging(
    path: str | Path,
    level: LogLevel | int = "INFO",
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
    format: str = DEFAULT_FORMAT,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> RotatingFileHandler:
    """Log vclock records to a size-rotated file.

    Args:
        path: Log file path. Missing parent directories are created.
        level: Log level name or number.
        max_bytes: Size at which the file is rolled over. Default 10 MB.
        backup_count: Number of rolled-over files to keep. Default 5.
        format: Log message format string.
        date_format: Date format for ``%(asctime)s``.

    Returns:
        The attached RotatingFileHandler.
    """
    handler = RotatingFileHandler(
        _prepare_path(path), maxBytes=max_bytes, backupCount=backup_count
    )
    return _install(handler, level, logging.Formatter(format, date_format))


def enable_timed_file_logging(
    path: str | Path,
    level: LogLevel | int = "INFO",
    when: str = "midnight",
    interval: int = 1,
    backup_count: int = DEFAULT_BACKUP_COUNT,
    format: str = DEFAULT_FORMAT,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> TimedRotatingFileHandler:
    """Log vclock records to a file rotated on a schedule.

    Args:
        path: Log file path. Missing parent directories are created.
        level: Log level name or number.
        when: Rotation unit ('S', 'M', 'H', 'D', 'midnight', 'W0'-'W6').
        interval: Number of ``when`` units between rollovers.
        backup_count: Number of rolled-over files to keep.
        format: Log message format string.
        date_format: Date format for ``%(asctime)s``.

    Returns:
        The attached TimedRotatingFileHandler.
    """
    handler = TimedRotatingFileHandler(
        _prepare_path(path), when=when, interval=interval, backupCount=backup_count
    )
    return _install(handler, level, logging.Formatter(format, date_format))


def enable_json_logging(level: LogLevel | int = "INFO") -> logging.StreamHandler:
    """Log vclock records to stderr as one JSON object per line."""
    return _install(logging.StreamHandler(), level, JsonFormatter())


def enable_json_file_logging(
    path: str | Path,
    level: LogLevel | int = "INFO",
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
) -> RotatingFileHandler:
    """Log vclock records as JSON lines to a size-rotated file."""
    handler = RotatingFileHandler(
        _prepare_path(path), maxBytes=max_bytes, backupCount=backup_count
    )
    return _install(handler, level, JsonFormatter())


def configure_from_env() -> None:
    """Configure logging from ``VCLOCK_*`` environment variables.

    Does nothing when neither ``VCLOCK_LOGGING`` nor ``VCLOCK_LOG_FILE`` is
    set. A file path without a level logs at INFO.
    """
    level = os.environ.get(ENV_LEVEL, "").upper()
    log_file = os.environ.get(ENV_FILE, "")
    use_json = os.environ.get(ENV_JSON, "") == "1"

    if not level and not log_file:
        return

    level = level or "INFO"

    if use_json:
        if log_file:
            enable_json_file_logging(log_file, level=level)
        else:
            enable_json_logging(level=level)
    elif log_file:
        enable_file_logging(log_file, level=level)
    else:
        enable_console_logging(level=level)


def set_level(level: LogLevel | int) -> None:
    """Set the level of the ``vclock`` root logger."""
    _get_logger().setLevel(_get_level(level))


def set_module_level(module: str, level: LogLevel | int) -> None:
    """Set the level of one vclock submodule's logger.

    Args:
        module: Module path relative to ``vclock`` (e.g. "core.version_vector").
        level: Log level name or number.
    """
    logging.getLogger(f"{LOGGER_NAME}.{module}").setLevel(_get_level(level))


def disable_logging() -> None:
    """Remove every real handler and raise the level above CRITICAL."""
    logger = _get_logger()
    _clear_handlers()
    logger.addHandler(logging.NullHandler())
    logger.setLevel(logging.CRITICAL + 1)
