"""Tests for logging utilities."""

import logging
from io import StringIO

import numpy as np
import pytest

from gradopt.logging import (
    configure_logging,
    get_logger,
    set_log_level,
)
from gradopt.optimize import Optimizer


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    configure_logging(level=logging.WARNING)


def test_get_logger_returns_logger():
    """Test that get_logger returns a logger instance."""
    logger = get_logger("test_module")
    assert isinstance(logger, logging.Logger)
    assert logger.name == "gradopt.test_module"


def test_get_logger_keeps_package_names():
    assert get_logger("gradopt.optimize.line_search").name == "gradopt.optimize.line_search"
    assert get_logger().name == "gradopt"


def test_get_logger_caching():
    """Test that get_logger caches loggers."""
    logger1 = get_logger("test_module")
    logger2 = get_logger("test_module")
    assert logger1 is logger2


def test_get_logger_different_modules():
    """Test that different modules get different loggers."""
    logger1 = get_logger("module1")
    logger2 = get_logger("module2")
    assert logger1 is not logger2
    assert logger1.name != logger2.name


def test_set_log_level():
    """Test that set_log_level updates logger levels."""
    logger = get_logger("test_module")

    set_log_level(logging.INFO)
    assert logger.level == logging.INFO
    assert all(handler.level == logging.INFO for handler in logger.handlers)

    set_log_level(logging.WARNING)
    assert logger.level == logging.WARNING


def test_set_log_level_string():
    """Test that set_log_level accepts string levels."""
    logger = get_logger("test_module")

    set_log_level("DEBUG")
    assert logger.level == logging.DEBUG

    set_log_level("ERROR")
    assert logger.level == logging.ERROR


def test_configure_logging_redirects_stream():
    """Test configure_logging function."""
    logger = get_logger("test_module")
    stream = StringIO()
    configure_logging(level=logging.DEBUG, stream=stream, format_string="%(levelname)s|%(message)s")

    logger.debug("Debug message")

    assert "DEBUG|Debug message" in stream.getvalue()


def test_optimizer_reports_through_package_logger():
    get_logger("gradopt.optimize.optimizer")
    stream = StringIO()
    configure_logging(level=logging.DEBUG, stream=stream)

    Optimizer().minimize(lambda x: float(x @ x), lambda x: 2 * x, np.array([1.0, 1.0]))

    output = stream.getvalue()
    assert "gradopt.optimize.optimizer" in output
    assert "iterate 1" in output
    assert "converged" in output


def test_line_search_failure_logged_at_debug():
    get_logger("gradopt.optimize.line_search")
    stream = StringIO()
    configure_logging(level=logging.DEBUG, stream=stream)

    Optimizer().minimize_scalar(lambda x: -x, lambda x: -1.0, 0.0)

    assert "Failed to bracket" in stream.getvalue()


def test_logger_does_not_propagate():
    """Test that loggers don't propagate to root logger."""
    logger = get_logger("test_module")
    assert logger.propagate is False
