"""Reporting sinks: where failed assertions send their message."""

from __future__ import annotations

import unittest
from typing import Protocol, runtime_checkable

# unittest leaves frames of modules defining this out of failure tracebacks
__unittest = True


class Sink(Protocol):
    """Anything that can fail the enclosing test with a message.

    Control is not expected to come back after a real test runner aborts,
    but nothing in ensure relies on that.
    """

    def abort(self, message: str) -> None: ...


@runtime_checkable
class HelperMarker(Protocol):
    """Sinks whose host attributes failures to the right caller frame.

    When a sink offers this, ensure calls ``mark_helper_frame`` before
    dispatching and leaves the location out of the message.
    """

    def mark_helper_frame(self) -> None: ...


class PytestSink:
    """Fail the running pytest test.

    pytest hides every frame whose locals set ``__tracebackhide__``, which all
    ensure predicates do, so the reported traceback ends at the line of test
    code that called the assertion.
    """

    def abort(self, message: str) -> None:
        __tracebackhide__ = True
        import pytest

        pytest.fail(message)

    def mark_helper_frame(self) -> None:
        pass


class TestCaseSink:
    """Fail a running :class:`unittest.TestCase`."""

    __test__ = False

    def __init__(self, testcase: unittest.TestCase) -> None:
        self.testcase = testcase

    def abort(self, message: str) -> None:
        self.testcase.fail(message)

    def mark_helper_frame(self) -> None:
        pass


class RecordingSink:
    """Collect messages instead of failing anything."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    def abort(self, message: str) -> None:
        self.messages.append(message)

    @property
    def message(self) -> str:
        return "".join(self.messages)

    @property
    def failed(self) -> bool:
        return bool(self.messages)
