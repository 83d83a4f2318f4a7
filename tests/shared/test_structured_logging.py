"""Tests for structured logging helpers."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
from rich.logging import RichHandler

from fsinspect.shared.errors import ErrorCode, ErrorContext, InfrastructureError
from fsinspect.shared.logging import (
    StructuredFormatter,
    log_operation_error,
    log_operation_start,
    log_operation_success,
    setup_structured_logger,
)


@pytest.fixture
def logger_name(request: pytest.FixtureRequest) -> Iterator[str]:
    name = f"fsinspect_tests.{request.node.name}"
    yield name
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


class TestStructuredFormatter:
    """Test cases for the JSON formatter."""

    def test_formats_record_with_extras(self) -> None:
        record = logging.LogRecord("fsinspect.x", logging.INFO, __file__, 1, "done %s", ("ok",), None)
        record.operation = "scan"
        record.duration_ms = 12.5

        payload = json.loads(StructuredFormatter().format(record))

        assert payload["message"] == "done ok"
        assert payload["level"] == "INFO"
        assert payload["operation"] == "scan"
        assert payload["duration_ms"] == 12.5
        assert "timestamp" in payload


class TestSetupStructuredLogger:
    """Test cases for setup_structured_logger."""

    def test_rich_console_handler(self, logger_name: str) -> None:
        logger = setup_structured_logger(logger_name, "WARNING")

        assert logger.level == logging.WARNING
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], RichHandler)
        assert logger.propagate is False

    def test_reconfiguring_replaces_handlers(self, logger_name: str) -> None:
        setup_structured_logger(logger_name)
        logger = setup_structured_logger(logger_name, use_rich_console=False)

        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, StructuredFormatter)

    def test_json_file_handler(self, logger_name: str, tmp_path: Path) -> None:
        # Given
        log_file = tmp_path / "fsinspect.log"
        logger = setup_structured_logger(logger_name, "DEBUG", str(log_file))

        # When
        log_operation_success(logger, "exact_size", 3.0, {"total_size": 10})
        for handler in logger.handlers:
            handler.flush()

        # Then
        entry = json.loads(log_file.read_text(encoding="utf-8").splitlines()[-1])
        assert entry["operation"] == "exact_size"
        assert entry["result_info"] == {"total_size": 10}


class TestOperationHelpers:
    """Test cases for log_operation_* helpers."""

    def test_log_operation_error_attaches_code_and_context(self, caplog) -> None:
        logger = logging.getLogger("fsinspect_tests.helpers")
        error = InfrastructureError(
            ErrorCode.SCANNER_ERROR,
            "worker failed",
            ErrorContext(file_path="/r", operation="scan_root"),
        )

        with caplog.at_level(logging.ERROR, logger="fsinspect_tests.helpers"):
            log_operation_error(logger, error)

        record = caplog.records[-1]
        assert record.getMessage() == "worker failed"
        assert record.error_code == "SCANNER_ERROR"
        assert record.operation == "scan_root"
        assert record.context["file_path"] == "/r"

    def test_log_operation_start_and_success(self, caplog) -> None:
        logger = logging.getLogger("fsinspect_tests.helpers")

        with caplog.at_level(logging.DEBUG, logger="fsinspect_tests.helpers"):
            log_operation_start(logger, "directory_scan", {"roots_count": 2})
            log_operation_success(logger, "directory_scan", 1.5, context=ErrorContext(operation="x"))

        start, success = caplog.records[-2:]
        assert start.operation == "directory_scan"
        assert start.context == {"roots_count": 2}
        assert success.duration_ms == 1.5
        assert success.context == {"operation": "x", "additional_data": {}}
