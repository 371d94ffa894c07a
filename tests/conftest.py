"""Pytest configuration and fixtures."""

import logging

import pytest

from minitest import registry


@pytest.fixture(autouse=True)
def cleanup_loggers():
    """Clean up minitest loggers after each test to prevent handler leaks."""
    yield

    loggers_to_remove = [
        name
        for name in logging.Logger.manager.loggerDict.keys()
        if name.startswith("minitest")
    ]

    for name in loggers_to_remove:
        logger = logging.getLogger(name)
        logger.handlers.clear()
        del logging.Logger.manager.loggerDict[name]


@pytest.fixture
def isolated_registry():
    """Empty default registry for the duration of a test."""
    registry.clear()
    yield registry
    registry.clear()
