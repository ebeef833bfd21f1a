"""
Tests for logging configuration.

Tests the centralized logging setup including:
- Standard library logging interception
- Third-party logger configuration
- yt-dlp logger adapter
- JSON serialization
"""

import importlib
import json
import logging
from datetime import datetime, timezone
from types import SimpleNamespace

import pytest


class TestInterceptHandler:
    """Tests for InterceptHandler class."""

    def test_intercept_handler_routes_to_loguru(self):
        """Test that InterceptHandler routes stdlib logs to Loguru."""
        from core.logger import InterceptHandler

        handler = InterceptHandler()
        assert isinstance(handler, logging.Handler)

    def test_intercept_handler_emit(self):
        """Test that emit method forwards the record message."""
        from core.logger import InterceptHandler, logger

        messages = []
        sink_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
        try:
            record = logging.LogRecord(
                name="uvicorn.error",
                level=logging.INFO,
                pathname="test.py",
                lineno=1,
                msg="Started server process [%d]",
                args=(42,),
                exc_info=None,
            )
            InterceptHandler().emit(record)
        finally:
            logger.remove(sink_id)

        assert "Started server process [42]" in messages


class TestConfigureThirdPartyLoggers:
    """Tests for configure_third_party_loggers function."""

    @pytest.mark.parametrize("name", ["httpx", "httpcore", "openai"])
    def test_noisy_loggers_set_to_warning(self, name):
        from core.logger import configure_third_party_loggers

        configure_third_party_loggers()

        assert logging.getLogger(name).level == logging.WARNING

    @pytest.mark.parametrize("name", ["uvicorn", "uvicorn.access", "fastapi"])
    def test_server_loggers_set_to_info(self, name):
        from core.logger import configure_third_party_loggers

        configure_third_party_loggers()

        assert logging.getLogger(name).level == logging.INFO


class TestInterceptStandardLogging:
    """Tests for intercept_standard_logging function."""

    def test_intercept_standard_logging(self):
        """Test that standard logging is intercepted."""
        from core.logger import intercept_standard_logging

        intercept_standard_logging()

        # Root logger should have InterceptHandler
        root_logger = logging.getLogger()
        handler_types = [type(h).__name__ for h in root_logger.handlers]
        assert "InterceptHandler" in handler_types


class TestYtDlpLogger:
    """Tests for the yt-dlp logger adapter."""

    def capture(self):
        from core.logger import logger

        records = []
        sink_id = logger.add(
            lambda m: records.append((m.record["level"].name, m.record["message"])),
            level="DEBUG",
        )
        return records, sink_id

    def test_debug_prefix_stays_debug(self):
        from core.logger import YtDlpLogger, logger

        records, sink_id = self.capture()
        try:
            YtDlpLogger().debug("[debug] Invoking http downloader")
        finally:
            logger.remove(sink_id)

        assert records == [("DEBUG", "[debug] Invoking http downloader")]

    def test_plain_debug_becomes_info(self):
        from core.logger import YtDlpLogger, logger

        records, sink_id = self.capture()
        try:
            YtDlpLogger().debug("[youtube] dQw4w9WgXcQ: Downloading webpage")
        finally:
            logger.remove(sink_id)

        assert records == [("INFO", "[youtube] dQw4w9WgXcQ: Downloading webpage")]

    def test_warning_and_error(self):
        from core.logger import YtDlpLogger, logger

        records, sink_id = self.capture()
        try:
            YtDlpLogger().warning("slow")
            YtDlpLogger().error("ERROR: failed")
        finally:
            logger.remove(sink_id)

        assert records == [("WARNING", "slow"), ("ERROR", "ERROR: failed")]


class TestSetupLogger:
    """Tests for setup_logger function."""

    def test_setup_logger_idempotent(self):
        """Test that setup_logger is idempotent (doesn't add duplicate handlers)."""
        from core.logger import logger, setup_logger

        setup_logger()
        handlers_count_1 = len(logger._core.handlers)

        setup_logger()
        handlers_count_2 = len(logger._core.handlers)

        assert handlers_count_2 == handlers_count_1

    @pytest.mark.parametrize(
        "level,debug,expected",
        [
            ("warning", False, "WARNING"),
            ("INVALID", True, "INFO"),
            ("", True, "DEBUG"),
            (None, False, "INFO"),
        ],
    )
    def test_resolve_level(self, level, debug, expected):
        from core.logger import _resolve_level

        assert _resolve_level(level, debug) == expected


class TestSerializeLogRecord:
    """Tests for JSON log serialization."""

    def make_record(self, **overrides):
        record = {
            "time": datetime(2026, 1, 1, tzinfo=timezone.utc),
            "level": SimpleNamespace(name="INFO"),
            "message": "Transcription complete",
            "module": "transcription",
            "function": "transcribe",
            "line": 10,
            "exception": None,
            "extra": {},
        }
        record.update(overrides)
        return record

    def test_serializes_fields(self):
        from core.logger import serialize_log_record

        output = serialize_log_record(self.make_record(extra={"provider": "openai"}))
        data = json.loads(output.replace("{{", "{").replace("}}", "}"))

        assert data["level"] == "INFO"
        assert data["message"] == "Transcription complete"
        assert data["provider"] == "openai"
        assert output.endswith("\n")

    def test_non_serializable_extra_is_stringified(self):
        from core.logger import serialize_log_record

        output = serialize_log_record(self.make_record(extra={"ids": {1, 2}}))
        data = json.loads(output.replace("{{", "{").replace("}}", "}"))

        assert data["ids"] == "{1, 2}"


class TestFormatExceptionShort:
    """Tests for format_exception_short function."""

    def test_format_exception_with_context(self):
        """Test formatting exception with context."""
        from core.logger import format_exception_short

        try:
            raise ValueError("Test error")
        except ValueError as e:
            result = format_exception_short(e, "Downloading audio")

            assert "Downloading audio" in result
            assert "ValueError" in result
            assert "Test error" in result
            assert "test_logging_config.py" in result

    def test_format_exception_without_context(self):
        """Test formatting exception without context."""
        from core.logger import format_exception_short

        result = format_exception_short(RuntimeError("Another error"))

        assert result == "RuntimeError: Another error | (unknown)"


class TestLoggerExports:
    """Tests for module exports."""

    def test_all_exports_available(self):
        """Test that all expected exports are available."""
        logger_module = importlib.import_module("core.logger")

        expected_exports = [
            "logger",
            "format_exception_short",
            "configure_third_party_loggers",
            "intercept_standard_logging",
            "serialize_log_record",
            "setup_logger",
            "InterceptHandler",
            "YtDlpLogger",
        ]

        for export in expected_exports:
            assert hasattr(logger_module, export), f"Missing export: {export}"
