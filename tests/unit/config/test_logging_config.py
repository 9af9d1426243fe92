"""Tests for centralized logging configuration."""

import json
import logging
import os
import sys
from unittest.mock import patch

import pytest

from transport_billing.config.logging_config import (
    ContextFormatter,
    JSONFormatter,
    LoggingConfig,
    configure_logging,
    reset_logging,
)
from transport_billing.utils.logging_utils import LogContext


@pytest.fixture(autouse=True)
def clean_logging():
    yield
    reset_logging()


class TestLoggingConfig:
    """Test LoggingConfig class."""

    def test_default_configuration(self):
        """Test default logging configuration."""
        config = LoggingConfig()

        assert config.log_level == "INFO"
        assert config.log_format == "standard"
        assert config.log_file is None

    def test_environment_variable_override(self):
        """Test configuration from environment variables."""
        with patch.dict(
            os.environ,
            {
                "LOG_LEVEL": "debug",
                "LOG_FORMAT": "json",
                "LOG_FILE": "/tmp/billing.log",
            },
        ):
            config = LoggingConfig.from_env()

        assert config.log_level == "DEBUG"
        assert config.log_format == "json"
        assert config.log_file == "/tmp/billing.log"

    def test_from_env_default_level(self):
        """Test the caller's default level applies when LOG_LEVEL is unset."""
        with patch.dict(os.environ, {}, clear=True):
            config = LoggingConfig.from_env(default_level="WARNING")
        assert config.log_level == "WARNING"

    def test_invalid_log_level(self):
        with pytest.raises(ValueError, match="Invalid log level"):
            LoggingConfig(log_level="INVALID")

    def test_invalid_log_format(self):
        with pytest.raises(ValueError, match="Invalid log format"):
            LoggingConfig(log_format="xml")

    def test_empty_log_file_means_console_only(self):
        with patch.dict(os.environ, {"LOG_FILE": ""}, clear=True):
            assert LoggingConfig.from_env().log_file is None


class TestConfigureLogging:
    """Test configure_logging function."""

    def test_console_handler_configuration(self):
        configure_logging(LoggingConfig(log_level="DEBUG"))
        root = logging.getLogger()

        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], logging.StreamHandler)

    def test_reconfiguration_replaces_handlers(self):
        configure_logging(LoggingConfig())
        configure_logging(LoggingConfig(log_level="ERROR"))
        root = logging.getLogger()

        assert len(root.handlers) == 1
        assert root.level == logging.ERROR

    def test_file_handler_with_json_and_context(self, tmp_path):
        """Test JSON lines carry LogContext fields."""
        log_file = tmp_path / "logs" / "billing.log"
        configure_logging(LoggingConfig(log_format="json", log_file=str(log_file)))

        with LogContext(memo_no="SVS-004"):
            logging.getLogger("transport_billing.test").info("Saving memo")
        for handler in logging.getLogger().handlers:
            handler.flush()

        entry = json.loads(log_file.read_text().strip().splitlines()[-1])
        assert entry["message"] == "Saving memo"
        assert entry["level"] == "INFO"
        assert entry["memo_no"] == "SVS-004"
        assert len(logging.getLogger().handlers) == 2

    def test_reset_removes_handlers(self):
        configure_logging(LoggingConfig())
        reset_logging()
        root = logging.getLogger()

        assert root.handlers == []
        assert root.level == logging.WARNING


class TestContextFormatter:
    """Test ContextFormatter."""

    def _record(self, **context):
        record = logging.LogRecord(
            "transport_billing.stores",
            logging.INFO,
            __file__,
            1,
            "Row added",
            None,
            None,
        )
        for key, value in context.items():
            setattr(record, key, value)
        return record

    def test_context_appended(self):
        record = self._record(table="areas", memo_no="SVS-004")
        line = ContextFormatter().format(record)

        assert line.endswith(
            "INFO - transport_billing.stores - Row added "
            "[memo_no=SVS-004 table=areas]"
        )

    def test_no_context(self):
        line = ContextFormatter().format(self._record())
        assert line.endswith("Row added")


class TestJSONFormatter:
    """Test JSONFormatter."""

    def test_format_with_exception(self):
        try:
            raise ValueError("bad row")
        except ValueError:
            record = logging.LogRecord(
                "t", logging.ERROR, __file__, 1, "failed", None, sys.exc_info()
            )

        data = json.loads(JSONFormatter().format(record))
        assert data["message"] == "failed"
        assert "ValueError: bad row" in data["exception"]
