"""Tests for logging utilities."""

import json
import logging
import sys

import pytest

from src.utils.logging import (
    TRACE_LEVEL,
    ContextFilter,
    JSONFormatter,
    get_logger,
    operation_context,
    setup_logging,
)


@pytest.fixture
def restore_root_logger():
    """Restore root logger handlers and level after a test."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield root_logger
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(level)


def make_record(message: str = "Test message", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="test.logger",
        level=logging.INFO,
        pathname="test.py",
        lineno=10,
        msg=message,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def filtered_correlation_id():
    """Correlation ID that ContextFilter would stamp on a record right now."""
    record = make_record()
    ContextFilter().filter(record)
    return record.correlation_id


class TestTraceLevel:
    """Test TRACE level functionality."""

    def test_trace_level_constant(self):
        """Test TRACE level constant value."""
        assert TRACE_LEVEL == 5

    def test_trace_level_name(self):
        """Test TRACE level name is registered."""
        assert logging.getLevelName(TRACE_LEVEL) == "TRACE"

    def test_trace_method_logging(self, caplog):
        """Test trace method logs correctly."""
        logger = logging.getLogger("test.trace")

        with caplog.at_level(TRACE_LEVEL, logger="test.trace"):
            logger.trace("Test trace message")  # type: ignore[attr-defined]

        assert len(caplog.records) == 1
        assert caplog.records[0].levelno == TRACE_LEVEL

    def test_trace_method_disabled_by_level(self, caplog):
        """Test trace method respects log level."""
        logger = logging.getLogger("test.trace")

        with caplog.at_level(logging.DEBUG, logger="test.trace"):
            logger.trace("Test trace message")  # type: ignore[attr-defined]

        assert len(caplog.records) == 0


class TestContext:
    """Test ContextFilter and operation_context."""

    def test_filter_without_context(self):
        """Test filter with no operation active."""
        record = make_record()
        assert ContextFilter().filter(record) is True
        assert record.correlation_id is None
        assert record.operation is None

    def test_filter_inside_operation(self):
        """Test filter picks up the active operation."""
        record = make_record()
        with operation_context("format_duration", correlation_id="abc") as cid:
            assert cid == "abc"
            assert filtered_correlation_id() == "abc"
            ContextFilter().filter(record)

        assert record.correlation_id == "abc"
        assert record.operation == "format_duration"
        assert filtered_correlation_id() is None

    def test_operation_context_generates_id(self):
        """Test a correlation ID is generated when none is given."""
        with operation_context("op") as cid:
            assert cid
            assert filtered_correlation_id() == cid

    def test_nested_context_restored(self):
        """Test nested operations restore the outer context."""
        with operation_context("outer", correlation_id="outer-id"):
            with operation_context("inner", correlation_id="inner-id"):
                assert filtered_correlation_id() == "inner-id"
            assert filtered_correlation_id() == "outer-id"


class TestJSONFormatter:
    """Test JSONFormatter class."""

    def test_basic_format(self):
        """Test basic JSON output."""
        output = JSONFormatter().format(make_record("Formatted 1.1µs"))
        log_data = json.loads(output)

        assert log_data["level"] == "INFO"
        assert log_data["logger"] == "test.logger"
        assert log_data["message"] == "Formatted 1.1µs"
        assert log_data["line"] == 10
        assert "µs" in output

    def test_format_with_context(self):
        """Test correlation ID, operation and extra fields."""
        record = make_record(
            correlation_id="cid", operation="format_duration", seconds=90
        )
        log_data = json.loads(JSONFormatter().format(record))

        assert log_data["correlation_id"] == "cid"
        assert log_data["operation"] == "format_duration"
        assert log_data["context"] == {"seconds": 90}

    def test_format_with_exception(self):
        """Test exception details are included."""
        try:
            raise ValueError("boom")
        except ValueError:
            record = make_record()
            record.exc_info = sys.exc_info()

        log_data = json.loads(JSONFormatter().format(record))
        assert log_data["exception"]["type"] == "ValueError"
        assert log_data["exception"]["message"] == "boom"
        assert "Traceback" in log_data["exception"]["traceback"]

    def test_exception_traceback_disabled(self):
        """Test exception details can be excluded."""
        try:
            raise ValueError("boom")
        except ValueError:
            record = make_record()
            record.exc_info = sys.exc_info()

        log_data = json.loads(JSONFormatter(include_traceback=False).format(record))
        assert "exception" not in log_data


class TestSetupLogging:
    """Test setup_logging function."""

    def test_console_only(self, restore_root_logger):
        """Test console handler without a log file."""
        setup_logging(log_level="DEBUG")

        assert restore_root_logger.level == logging.DEBUG
        assert len(restore_root_logger.handlers) == 1
        assert isinstance(restore_root_logger.handlers[0], logging.StreamHandler)

    def test_trace_level(self, restore_root_logger):
        """Test TRACE level string is accepted."""
        setup_logging(log_level="TRACE", console_output=False)
        assert restore_root_logger.level == TRACE_LEVEL

    def test_json_file_output(self, restore_root_logger, tmp_path):
        """Test JSON records are written to the log file."""
        log_file = tmp_path / "logs" / "durationfmt.log"
        setup_logging(log_level="INFO", log_file=log_file, console_output=False)

        get_logger("test.file").info("Formatted 4m5s")
        for handler in restore_root_logger.handlers:
            handler.flush()

        lines = log_file.read_text(encoding="utf-8").splitlines()
        assert json.loads(lines[-1])["message"] == "Formatted 4m5s"

    def test_plain_file_output(self, restore_root_logger, tmp_path):
        """Test plain-text file output."""
        log_file = tmp_path / "durationfmt.log"
        setup_logging(
            log_level="INFO",
            log_file=log_file,
            console_output=False,
            json_format=False,
        )

        get_logger("test.file").warning("plain message")
        for handler in restore_root_logger.handlers:
            handler.flush()

        content = log_file.read_text(encoding="utf-8")
        assert "WARNING - plain message" in content

    def test_get_logger(self):
        """Test get_logger returns the named logger."""
        assert get_logger("src.utils") is logging.getLogger("src.utils")
