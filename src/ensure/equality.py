"""Structural comparison primitives: equality, subsets and multisets."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from ensure.dump import record_fields


def deep_equal(a: Any, b: Any) -> bool:
    """Compare two values structurally.

    This is ``==`` except for exceptions, which compare by identity in
    Python. Two exceptions are equal here when they have the same type and
    equal ``args``. Lists, tuples and dicts holding exceptions are compared
    element-wise under the same rule, and like ``==`` they treat an item as
    equal to itself.
    """
    if a is b:
        return True
    if isinstance(a, BaseException) or isinstance(b, BaseException):
        return type(a) is type(b) and deep_equal(a.args, b.args)
    if type(a) in (list, tuple) and type(b) is type(a):
        return len(a) == len(b) and all(x is y or deep_equal(x, y) for x, y in zip(a, b))
    if type(a) is dict and type(b) is dict:
        return a.keys() == b.keys() and all(a[k] is b[k] or deep_equal(a[k], b[k]) for k in a)
    return bool(a == b)


def is_subset(pattern: Any, whole: Any) -> bool:
    """Check that every populated part of *pattern* is found in *whole*.

    ``None`` in the pattern matches anything. Mapping keys, sequence
    positions and object fields missing from the pattern are ignored.
    """
    if pattern is None:
        return True
    if isinstance(pattern, Mapping):
        if not isinstance(whole, Mapping):
            return False
        return all(k in whole and is_subset(v, whole[k]) for k, v in pattern.items())
    if isinstance(pattern, (list, tuple)):
        if not isinstance(whole, (list, tuple)) or len(pattern) > len(whole):
            return False
        return all(is_subset(p, w) for p, w in zip(pattern, whole))
    if not isinstance(pattern, (str, bytes, BaseException)):
        fields = record_fields(pattern)
        if fields is not None:
            if type(pattern) is not type(whole):
                return False
            return all(is_subset(v, getattr(whole, k, None)) for k, v in fields)
    return deep_equal(pattern, whole)


_ALL_MATCHED = object()


@dataclass(frozen=True)
class MatchResult:
    """Outcome of :func:`match_elements`."""

    lengths_differ: bool = False
    missing: Any = _ALL_MATCHED

    @property
    def ok(self) -> bool:
        return not self.lengths_differ and self.missing is _ALL_MATCHED


def match_elements(actual: Iterable[Any], expected: Iterable[Any]) -> MatchResult:
    """Pair every expected element with a distinct, equal actual element.

    Each expected element consumes the leftmost actual element that is equal
    to it and not already consumed, so repeated values must appear with the
    same multiplicity on both sides. Stops at the first expected element
    left without a partner.
    """
    actual_items = list(actual)
    expected_items = list(expected)
    if len(actual_items) != len(expected_items):
        return MatchResult(lengths_differ=True)

    used: set[int] = set()
    for e in expected_items:
        for i, a in enumerate(actual_items):
            if i not in used and deep_equal(a, e):
                used.add(i)
                break
        else:
            return MatchResult(missing=e)
    return MatchResult()


__all__ = ["MatchResult", "deep_equal", "is_subset", "match_elements"]
