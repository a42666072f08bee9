"""Unit tests for core.logging."""

import logging
import sys
from unittest.mock import patch

import pytest
import structlog

from core.logging import _is_test_environment, configure_logging, get_module_logger


@pytest.mark.unit
class TestLoggingConfiguration:
    """Tests for logging configuration."""

    def test_is_test_environment_detects_pytest(self):
        assert _is_test_environment() is True

    def test_is_test_environment_without_pytest(self):
        with patch.dict(sys.modules):
            del sys.modules["pytest"]
            assert _is_test_environment() is False

    def test_configure_logging_in_test_environment(self):
        """Logs are suppressed while tests run."""
        logger = configure_logging()
        assert hasattr(logger, "bind")
        assert logging.root.level == logging.CRITICAL + 1

    @pytest.mark.parametrize("is_production", [True, False])
    def test_configure_logging_outside_tests(self, is_production):
        with patch("core.logging._is_test_environment", return_value=False), patch(
            "core.logging.structlog.configure"
        ) as mock_configure, patch("core.logging.logging.basicConfig") as basic_config:
            configure_logging(log_level="debug", is_production=is_production)

        processors = mock_configure.call_args.kwargs["processors"]
        renderer = processors[-1]
        if is_production:
            assert renderer.__class__.__name__ == "JSONRenderer"
        else:
            assert renderer.__class__.__name__ == "ConsoleRenderer"
        assert basic_config.call_args.kwargs["level"] == logging.DEBUG


@pytest.mark.unit
def test_get_module_logger_binds_module_context():
    """The calling module is bound as component and module_path."""
    context = structlog.get_context(get_module_logger())

    assert context["module_path"] == __name__
    assert context["component"] == __name__.rsplit(".", 1)[-1]
