"""Logging configuration for the sway-ws CLI.

Provides:
- Configurable log levels (WARNING, INFO, DEBUG)
- Colored level names on a terminal
- Operation timing logs
"""

import logging
import sys
import time
from contextlib import contextmanager


LOGGER_NAME = "sway_workspaces"

# Default log format
DEFAULT_FORMAT = "%(levelname)s: %(message)s"
VERBOSE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DEBUG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d: %(message)s"


class ColoredFormatter(logging.Formatter):
    """Colored log formatter for terminal output."""

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
    }
    RESET = '\033[0m'

    def format(self, record):
        """Format log record with colors."""
        levelname = record.levelname
        if levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = levelname


def setup_logging(verbose: bool = False, debug: bool = False, stream=None) -> logging.Logger:
    """Configure the package logger.

    Args:
        verbose: Enable verbose logging (INFO level)
        debug: Enable debug logging (DEBUG level)
        stream: Destination (default: stderr)

    Returns:
        Configured logger instance

    Examples:
        >>> logger = setup_logging(verbose=True)
        >>> logger.info("Relocating workspace 3")
        2026-01-12 10:30:45 [INFO] sway_workspaces: Relocating workspace 3
    """
    logger = logging.getLogger(LOGGER_NAME)
    stream = stream if stream is not None else sys.stderr

    # Remove existing handlers
    logger.handlers.clear()

    if debug:
        logger.setLevel(logging.DEBUG)
        log_format = DEBUG_FORMAT
    elif verbose:
        logger.setLevel(logging.INFO)
        log_format = VERBOSE_FORMAT
    else:
        logger.setLevel(logging.WARNING)
        log_format = DEFAULT_FORMAT

    handler = logging.StreamHandler(stream)
    handler.setLevel(logger.level)

    # Use colored formatter if terminal supports it
    if hasattr(stream, "isatty") and stream.isatty():
        formatter = ColoredFormatter(log_format)
    else:
        formatter = logging.Formatter(log_format)

    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger


@contextmanager
def log_timing(operation: str, logger: logging.Logger):
    """Context manager for logging operation timing.

    Examples:
        >>> with log_timing("focus", logger):
        ...     reconciler.focus(target)
        DEBUG: focus completed in 4.12ms
    """
    start = time.perf_counter()
    logger.debug(f"Starting: {operation}")

    try:
        yield
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.debug(f"{operation} completed in {elapsed_ms:.2f}ms")
