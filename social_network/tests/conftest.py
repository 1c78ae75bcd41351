"""Shared fixtures."""

import logging
import sys

import pytest
import structlog


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo any logging setup done by the CLI during a test."""
    structlog_config = structlog.get_config()
    root_logger = logging.getLogger()
    root_handlers = list(root_logger.handlers)
    root_level = root_logger.level
    package_level = logging.getLogger("social_network").level

    yield

    structlog.configure(**structlog_config)
    root_logger.handlers[:] = root_handlers
    root_logger.setLevel(root_level)
    logging.getLogger("social_network").setLevel(package_level)


@pytest.fixture
def no_matplotlib(monkeypatch):
    """Make ``import matplotlib`` fail, as in an install without the plot extra."""
    monkeypatch.setitem(sys.modules, "matplotlib", None)
