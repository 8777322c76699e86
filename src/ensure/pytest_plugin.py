"""pytest plugin providing a sink for the running test."""

from __future__ import annotations

import pytest

from ensure.sink import PytestSink


@pytest.fixture
def ensure_sink() -> PytestSink:
    """Sink that fails the current test."""
    return PytestSink()
