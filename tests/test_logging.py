"""Tests for logging utilities."""

import logging
from io import StringIO

import numpy as np

from optlib import lbfgs
from optlib.logging import configure_logging, get_logger, set_log_level


def test_get_logger_returns_logger():
    """Test that get_logger returns a namespaced logger."""
    logger = get_logger("test_module")
    assert isinstance(logger, logging.Logger)
    assert logger.name == "optlib.test_module"
    assert not logger.propagate


def test_get_logger_keeps_package_prefix():
    assert get_logger("optlib.line_search").name == "optlib.line_search"
    assert get_logger().name == "optlib"


def test_get_logger_caching():
    """Test that get_logger caches loggers."""
    logger1 = get_logger("test_module")
    logger2 = get_logger("test_module")
    assert logger1 is logger2
    assert len(logger1.handlers) == 1


def test_logger_output():
    """Test that configured loggers write to the given stream."""
    captured = StringIO()
    try:
        configure_logging(level=logging.INFO, stream=captured)
        logger = get_logger("test_module")
        logger.info("Test message")
        logger.debug("Hidden message")

        output = captured.getvalue()
        assert "Test message" in output
        assert "optlib.test_module" in output
        assert "Hidden message" not in output
    finally:
        configure_logging(level=logging.WARNING)


def test_custom_format():
    captured = StringIO()
    try:
        configure_logging(level=logging.WARNING, format_string="%(message)s!", stream=captured)
        get_logger("test_module").warning("careful")
        assert captured.getvalue() == "careful!\n"
    finally:
        configure_logging(level=logging.WARNING)


def test_set_log_level():
    """Test that set_log_level updates logger and handler levels."""
    logger = get_logger("test_module")
    try:
        set_log_level(logging.DEBUG)
        assert logger.level == logging.DEBUG
        assert all(h.level == logging.DEBUG for h in logger.handlers)
        set_log_level("info")
        assert logger.level == logging.INFO
    finally:
        set_log_level(logging.WARNING)
    assert logger.level == logging.WARNING


def test_solver_reports_termination(make_quadratic):
    captured = StringIO()
    try:
        configure_logging(level=logging.INFO, stream=captured)
        problem = make_quadratic(3)
        lbfgs(problem, np.zeros(3), max_iters=2)
        assert "L-BFGS stopped after" in captured.getvalue()
    finally:
        configure_logging(level=logging.WARNING)
