"""Unit tests for CLI logging configuration."""

import logging
from io import StringIO

import pytest

from sway_workspaces.cli.logging_config import (
    ColoredFormatter,
    log_timing,
    setup_logging,
)


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logger = logging.getLogger("sway_workspaces")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


class TestLoggingSetup:
    """Test logging configuration and setup."""

    def test_default_logging_level(self):
        """Test default logging is WARNING level."""
        logger = setup_logging(verbose=False, debug=False, stream=StringIO())
        assert logger.level == logging.WARNING

    def test_verbose_logging_level(self):
        """Test --verbose enables INFO level."""
        logger = setup_logging(verbose=True, debug=False, stream=StringIO())
        assert logger.level == logging.INFO

    def test_debug_overrides_verbose(self):
        """Test --debug takes precedence over --verbose."""
        logger = setup_logging(verbose=True, debug=True, stream=StringIO())
        assert logger.level == logging.DEBUG

    def test_logger_name(self):
        """Test logger uses the package namespace."""
        assert setup_logging(stream=StringIO()).name == "sway_workspaces"

    def test_repeated_setup_single_handler(self):
        """Calling setup twice does not duplicate output."""
        setup_logging(stream=StringIO())
        logger = setup_logging(stream=StringIO())
        assert len(logger.handlers) == 1

    def test_module_loggers_propagate(self):
        """Module loggers write through the package handler."""
        stream = StringIO()
        setup_logging(verbose=True, stream=stream)

        logging.getLogger("sway_workspaces.services.placement").info("Relocating workspace 4")

        assert "Relocating workspace 4" in stream.getvalue()

    def test_default_format(self):
        stream = StringIO()
        setup_logging(stream=stream)

        logging.getLogger("sway_workspaces").warning("Output 'DP-9' is not connected")

        assert stream.getvalue() == "WARNING: Output 'DP-9' is not connected\n"


class TestColoredFormatter:
    """Test ColoredFormatter."""

    def test_colors_level_name(self):
        record = logging.LogRecord("x", logging.ERROR, __file__, 1, "boom", None, None)

        text = ColoredFormatter("%(levelname)s: %(message)s").format(record)

        assert text == "\033[31mERROR\033[0m: boom"
        assert record.levelname == "ERROR"


class TestLogTiming:
    """Test log_timing()."""

    def test_logs_duration(self):
        stream = StringIO()
        logger = setup_logging(debug=True, stream=stream)

        with log_timing("focus 3", logger):
            pass

        output = stream.getvalue()
        assert "Starting: focus 3" in output
        assert "focus 3 completed in" in output

    def test_logs_on_failure(self):
        stream = StringIO()
        logger = setup_logging(debug=True, stream=stream)

        with pytest.raises(RuntimeError):
            with log_timing("move", logger):
                raise RuntimeError("boom")

        assert "move completed in" in stream.getvalue()
