"""Pytest configuration and fixtures."""

import logging

import pytest

from ensure.config import reset_settings
from ensure.sink import RecordingSink

_ENV_VARS = (
    "ENSURE_CONFIG",
    "ENSURE_LOG",
    "ENSURE_LOG_FILE",
    "ENSURE_TEST_PREFIX",
    "ENSURE_LOCATION",
)


class CaptureSink(RecordingSink):
    """Recording sink that takes care of failure locations itself."""

    def __init__(self):
        super().__init__()
        self.helper_marks = 0

    def mark_helper_frame(self):
        self.helper_marks += 1


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Resolve settings from a clean environment in every test."""
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture(autouse=True)
def cleanup_loggers():
    """Clean up ensure loggers after each test to prevent handler leaks."""
    yield

    loggers_to_remove = [
        name
        for name in logging.Logger.manager.loggerDict.keys()
        if name.startswith("ensure")
    ]

    for name in loggers_to_remove:
        logger = logging.getLogger(name)
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
        del logging.Logger.manager.loggerDict[name]


@pytest.fixture
def capture():
    """Sink collecting failure messages without a location prefix."""
    return CaptureSink()
