"""Assertion predicates.

Each predicate takes the sink first and may be given any number of extra
values, which are dumped below the message when the predicate fails. A
failing predicate dispatches exactly one message to the sink; a passing one
does nothing. None of them raise on failure.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from types import TracebackType
from typing import Any

from ensure import equality
from ensure.condition import Condition, describe_error, fatal
from ensure.dump import dump, tdump
from ensure.errors import UsageError
from ensure.sink import Sink

__unittest = True


def _pattern_text(pattern: str | re.Pattern[str]) -> str:
    return pattern.pattern if isinstance(pattern, re.Pattern) else pattern


def err(
    sink: Sink,
    error: BaseException | None,
    pattern: str | re.Pattern[str] | None,
    *extra: Any,
) -> None:
    """Ensure *error* matches *pattern*, or that both are None."""
    __tracebackhide__ = True
    if error is None and pattern is None:
        return

    if error is None:
        fatal(Condition(
            sink,
            'expected error: "%s" but got a nil error',
            (_pattern_text(pattern),),
            extra,
        ))
        return

    if pattern is None:
        fatal(Condition(sink, "unexpected error: %s", (describe_error(error),), extra))
        return

    if re.search(pattern, str(error)) is None:
        fatal(Condition(
            sink,
            'expected error: "%s" but got "%s"',
            (_pattern_text(pattern), error),
            extra,
        ))


def _not_equal_condition(sink: Sink, actual: Any, expected: Any, extra: tuple) -> Condition:
    return Condition(
        sink,
        "expected these to be equal:\nACTUAL:\n%s\nEXPECTED:\n%s",
        (dump(actual), tdump(expected)),
        extra,
    )


def deep_equal(sink: Sink, actual: Any, expected: Any, *extra: Any) -> None:
    """Ensure *actual* and *expected* are structurally equal."""
    __tracebackhide__ = True
    if not equality.deep_equal(actual, expected):
        fatal(_not_equal_condition(sink, actual, expected, extra))


def not_deep_equal(sink: Sink, actual: Any, expected: Any, *extra: Any) -> None:
    """Ensure *actual* and *expected* are not structurally equal."""
    __tracebackhide__ = True
    if equality.deep_equal(actual, expected):
        fatal(Condition(
            sink,
            "expected two different values, but got the same:\n%s",
            (tdump(actual),),
            extra,
        ))


def subset(sink: Sink, actual: Any, subset: Any, *extra: Any) -> None:
    """Ensure the populated parts of *subset* are all found in *actual*."""
    __tracebackhide__ = True
    if not equality.is_subset(subset, actual):
        fatal(Condition(
            sink,
            "expected subset not found:\nACTUAL:\n%s\nEXPECTED SUBSET\n%s",
            (dump(actual), tdump(subset)),
            extra,
        ))


def nil(sink: Sink, value: Any, *extra: Any) -> None:
    """Ensure *value* is None."""
    __tracebackhide__ = True
    if value is None:
        return

    # errors read better as errors than as dumped objects
    if isinstance(value, BaseException):
        fatal(Condition(sink, "unexpected error: %s", (describe_error(value),), extra))
        return

    vs = tdump(value)
    sp = "\n" if "\n" in vs else " "
    fatal(Condition(sink, "expected nil value but got:%s%s", (sp, vs), extra))


def not_nil(sink: Sink, value: Any, *extra: Any) -> None:
    """Ensure *value* is not None."""
    __tracebackhide__ = True
    if value is None:
        fatal(Condition(sink, "expected a value but got nil", extra=extra))


def true(sink: Sink, value: bool, *extra: Any) -> None:
    __tracebackhide__ = True
    if not value:
        fatal(Condition(sink, "expected true but got false", extra=extra))


def false(sink: Sink, value: bool, *extra: Any) -> None:
    __tracebackhide__ = True
    if value:
        fatal(Condition(sink, "expected false but got true", extra=extra))


def string_contains(sink: Sink, s: str, substr: str, *extra: Any) -> None:
    """Ensure *s* contains *substr*.

    Multi-line strings are shown as blocks rather than quoted inline.
    """
    __tracebackhide__ = True
    if substr in s:
        return

    if "\n" in s or "\n" in substr:
        fatal(Condition(
            sink,
            "expected substring was not found:\nEXPECTED SUBSTRING:\n%s\nACTUAL:\n%s",
            (substr, s),
            extra,
        ))
        return

    fatal(Condition(
        sink,
        'expected substring "%s" was not found in "%s"',
        (substr, s),
        extra,
    ))


def string_does_not_contain(sink: Sink, s: str, substr: str, *extra: Any) -> None:
    """Ensure *s* does not contain *substr*."""
    __tracebackhide__ = True
    if substr in s:
        fatal(Condition(
            sink,
            'substring "%s" was not supposed to be found in "%s"',
            (substr, s),
            extra,
        ))


def same_elements(sink: Sink, actual: Any, expected: Any, *extra: Any) -> None:
    """Ensure *actual* and *expected* hold the same elements in any order.

    Elements are compared structurally and repeated elements must be
    repeated the same number of times on both sides.
    """
    __tracebackhide__ = True
    if isinstance(actual, Iterator):
        actual = list(actual)
    if isinstance(expected, Iterator):
        expected = list(expected)

    result = equality.match_elements(actual, expected)
    if result.ok:
        return

    if result.lengths_differ:
        fatal(Condition(
            sink,
            "expected same elements but found sequences of different lengths:"
            "\nACTUAL:\n%s\nEXPECTED\n%s",
            (tdump(actual), tdump(expected)),
            extra,
        ))
        return

    fatal(Condition(
        sink,
        "missing expected element:\nACTUAL:\n%s\nEXPECTED:\n%s\nMISSING ELEMENT\n%s",
        (tdump(actual), tdump(expected), tdump(result.missing)),
        extra,
    ))


class _PanicDeepEqual:
    def __init__(self, sink: Sink, expected: Any, extra: tuple) -> None:
        self.sink = sink
        self.expected = expected
        self.extra = extra

    def __enter__(self) -> _PanicDeepEqual:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        __tracebackhide__ = True
        if exc_type is None:
            fatal(Condition(
                self.sink,
                "expected an exception but none was raised:\nEXPECTED:\n%s",
                (tdump(self.expected),),
                self.extra,
            ))
            return False

        if not issubclass(exc_type, Exception):
            return False

        if not equality.deep_equal(exc, self.expected):
            fatal(_not_equal_condition(self.sink, exc, self.expected, self.extra))
        return True


def panic_deep_equal(sink: Sink, expected: Any, *extra: Any) -> _PanicDeepEqual:
    """Ensure the ``with`` block raises an exception equal to *expected*.

    The raised exception is swallowed once it has been checked::

        with ensure.panic_deep_equal(sink, ValueError("boom")):
            explode()

    Exceptions compare equal when they have the same type and ``args``.
    """
    if expected is None:
        raise UsageError("can't pass None to ensure.panic_deep_equal")
    return _PanicDeepEqual(sink, expected, extra)
