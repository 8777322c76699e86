"""Assertions for tests that fail with precise, readable messages."""

from ensure.assertions import (
    deep_equal,
    err,
    false,
    nil,
    not_deep_equal,
    not_nil,
    panic_deep_equal,
    same_elements,
    string_contains,
    string_does_not_contain,
    subset,
    true,
)
from ensure.errors import ConfigError, EnsureError, UsageError
from ensure.sink import HelperMarker, PytestSink, RecordingSink, Sink, TestCaseSink

__all__ = [
    "ConfigError",
    "EnsureError",
    "HelperMarker",
    "PytestSink",
    "RecordingSink",
    "Sink",
    "TestCaseSink",
    "UsageError",
    "deep_equal",
    "err",
    "false",
    "nil",
    "not_deep_equal",
    "not_nil",
    "panic_deep_equal",
    "same_elements",
    "string_contains",
    "string_does_not_contain",
    "subset",
    "true",
]
