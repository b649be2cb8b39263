"""Tests for the system logger."""

from __future__ import annotations

import logging

from implicit_auth.telemetry.system import system_logger
from implicit_auth.telemetry.system.system_logger import ConsoleFormatter, get_system_logger


class TestConsoleFormatter:
    """Tests for ConsoleFormatter."""

    def test_uses_message_field(self) -> None:
        record = logging.LogRecord("x", logging.WARNING, __file__, 1, {"event": "e", "message": "hi"}, None, None)
        assert ConsoleFormatter().format(record) == "WARNING: hi"

    def test_falls_back_to_event(self) -> None:
        record = logging.LogRecord("x", logging.INFO, __file__, 1, {"event": "cached"}, None, None)
        assert ConsoleFormatter().format(record) == "INFO: cached"


class TestGetSystemLogger:
    """Tests for the system logger singleton."""

    def test_singleton(self) -> None:
        assert get_system_logger() is get_system_logger()
        assert get_system_logger().name == "implicit-auth.system"

    def test_file_handler_writes_warnings(self, tmp_path, monkeypatch) -> None:
        """Given a log file, warnings are written as JSONL and info is not."""
        # Arrange
        monkeypatch.setattr(system_logger, "_file_handler_configured", False)
        logger = get_system_logger()
        before = list(logger.handlers)
        log_path = tmp_path / "system" / "system.jsonl"

        try:
            # Act
            system_logger.configure_system_logger_file(log_path)
            logger.info({"event": "quiet", "message": "not persisted"})
            logger.warning({"event": "loud", "message": "persisted"})
            for handler in logger.handlers:
                handler.flush()

            # Assert
            content = log_path.read_text()
            assert '"event": "loud"' in content
            assert "quiet" not in content
        finally:
            for handler in logger.handlers:
                if handler not in before:
                    handler.close()
                    logger.removeHandler(handler)
