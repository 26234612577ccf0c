"""Unit tests for debt_analyzer.analyzer_logging module."""

import json
import logging

from debt_analyzer.analyzer_logging import JSONFormatter, get_logger, setup_logging


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_file_logging(self, tmp_path):
        log_file = tmp_path / "debt.log"
        logger = setup_logging(log_file=log_file)
        logger.info("Test message")

        assert log_file.exists()
        assert "Test message" in log_file.read_text()

    def test_json_file_logging(self, tmp_path):
        log_file = tmp_path / "debt.json.log"
        logger = setup_logging(log_file=log_file, log_format="json")
        logger.warning("Structured")

        entry = json.loads(log_file.read_text().strip().splitlines()[-1])
        assert entry["message"] == "Structured"
        assert entry["level"] == "WARNING"

    def test_quiet_console_level(self):
        logger = setup_logging(quiet=True)
        console = logger.handlers[0]
        assert console.level == logging.ERROR

    def test_verbose_console_level(self):
        logger = setup_logging(verbose=True)
        assert logger.handlers[0].level == logging.DEBUG

    def test_package_logger_does_not_propagate(self):
        logger = setup_logging()
        assert logger.name == "debt_analyzer"
        assert logger.propagate is False


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def make_record(self, **extra):
        record = logging.LogRecord(
            name="debt_analyzer.rules.engine",
            level=logging.WARNING,
            pathname=__file__,
            lineno=10,
            msg="Rule %s failed",
            args=("X",),
            exc_info=None,
        )
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_basic_fields(self):
        entry = json.loads(JSONFormatter().format(self.make_record()))
        assert entry["message"] == "Rule X failed"
        assert entry["logger"] == "debt_analyzer.rules.engine"
        assert "timestamp" in entry

    def test_extra_fields(self):
        record = self.make_record(rule_id="X", duration_ms=1.5, unrelated="no")
        entry = json.loads(JSONFormatter().format(record))
        assert entry["rule_id"] == "X"
        assert entry["duration_ms"] == 1.5
        assert "unrelated" not in entry


class TestLoggers:
    """Tests for logger helpers."""

    def test_get_logger(self):
        assert get_logger().name == "debt_analyzer"
