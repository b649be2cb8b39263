"""Logging utilities: JSONL formatting and logger setup."""

from implicit_auth.utils.logging.iso_formatter import ISO8601Formatter
from implicit_auth.utils.logging.logger_setup import setup_jsonl_logger

__all__ = [
    "ISO8601Formatter",
    "setup_jsonl_logger",
]
