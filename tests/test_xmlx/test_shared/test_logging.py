"""Tests for correlation-aware logging."""

import logging

import pytest

from xmlx.shared import GlobalConfig, configure_logging, get_logger
from xmlx.shared.result import DiagnosticEntry, DiagnosticSeverity, PerformanceMetrics


class TestCorrelationLogger:
    """Test extra fields attached to log records."""

    def test_records_carry_correlation_fields(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = get_logger("xmlx.test", correlation_id="req-9", component="unit")

        with caplog.at_level(logging.INFO, logger="xmlx.test"):
            logger.info("hello", extra={"size": 3})

        record = caplog.records[0]
        assert record.getMessage() == "hello"
        assert record.correlation_id == "req-9"
        assert record.component == "unit"
        assert record.size == 3

    def test_component_defaults_to_last_name_part(self) -> None:
        assert get_logger("xmlx.tree.builder").component == "builder"

    def test_configure_logging_sets_package_level(self) -> None:
        package_logger = configure_logging(GlobalConfig(logging_level="WARNING"))
        try:
            assert package_logger.name == "xmlx"
            assert package_logger.level == logging.WARNING
        finally:
            package_logger.setLevel(logging.NOTSET)


class TestResultTypes:
    """Test diagnostic entries and metrics."""

    def test_diagnostic_validation(self) -> None:
        with pytest.raises(ValueError, match="message cannot be empty"):
            DiagnosticEntry(DiagnosticSeverity.INFO, "", "x")
        with pytest.raises(ValueError, match="component cannot be empty"):
            DiagnosticEntry(DiagnosticSeverity.INFO, "m", "")

    def test_metric_rates(self) -> None:
        metrics = PerformanceMetrics(processing_time_ms=500.0, characters_processed=100, nodes_created=10)

        assert metrics.characters_per_second == 200.0
        assert metrics.nodes_per_second == 20.0
        assert PerformanceMetrics().characters_per_second == 0.0
