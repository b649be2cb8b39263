"""System logger for operational events.

Singleton logger for everything that isn't part of the auth audit trail
(discovery fetch failures, surface lifecycle, sign-out fallbacks).

Logging strategy:
- Console (stderr): INFO and above, human-readable
- File (system.jsonl): WARNING and above only, JSONL

The file handler is attached separately via configure_system_logger_file()
once the user's log_dir is known from config.
"""

from __future__ import annotations

__all__ = [
    "ConsoleFormatter",
    "configure_system_logger_file",
    "get_system_logger",
]

import logging
import sys
from pathlib import Path

from implicit_auth.constants import APP_NAME
from implicit_auth.utils.logging.iso_formatter import ISO8601Formatter
from implicit_auth.utils.logging.logger_setup import ensure_secure_log_directory


class ConsoleFormatter(logging.Formatter):
    """Human-readable formatter for console output.

    Pulls the 'message' (or 'event') field out of dict messages.
    """

    def format(self, record: logging.LogRecord) -> str:
        if isinstance(record.msg, dict):
            msg = record.msg.get("message") or record.msg.get("event", "")
            return f"{record.levelname}: {msg}"
        return f"{record.levelname}: {record.getMessage()}"


_system_logger: logging.Logger | None = None
_file_handler_configured: bool = False


def get_system_logger() -> logging.Logger:
    """Get the singleton system logger instance.

    Created on first call with a stderr handler only.

    Returns:
        logging.Logger: Configured system logger instance.

    Example:
        >>> logger = get_system_logger()
        >>> logger.warning({"event": "discovery_fetch_failed", "message": "..."})
    """
    global _system_logger

    if _system_logger is not None:
        return _system_logger

    _system_logger = logging.getLogger(f"{APP_NAME}.system")
    _system_logger.setLevel(logging.INFO)
    _system_logger.propagate = False

    for handler in _system_logger.handlers:
        handler.close()
    _system_logger.handlers.clear()

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.INFO)
    stderr_handler.setFormatter(ConsoleFormatter())
    _system_logger.addHandler(stderr_handler)

    return _system_logger


def configure_system_logger_file(log_path: Path) -> None:
    """Attach the system.jsonl file handler (WARNING and above).

    Only the first call has any effect. If the directory can't be created,
    logging continues on stderr alone.

    Args:
        log_path: Path to the system log file.
    """
    global _file_handler_configured

    if _file_handler_configured:
        return

    logger = get_system_logger()

    try:
        ensure_secure_log_directory(log_path)
    except OSError as e:
        logger.warning(
            {
                "event": "system_log_dir_unavailable",
                "message": f"Cannot create log directory, logging to stderr only: {e}",
                "path": str(log_path.parent),
            }
        )
        return

    file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
    file_handler.setLevel(logging.WARNING)
    file_handler.setFormatter(ISO8601Formatter())
    logger.addHandler(file_handler)

    _file_handler_configured = True
