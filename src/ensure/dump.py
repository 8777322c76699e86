"""Typed, deterministic multi-line rendering of arbitrary values."""

from __future__ import annotations

import dataclasses
import enum
from collections.abc import Mapping, Set
from types import ModuleType
from typing import Any

_INDENT = " "

_SCALARS = (int, float, complex, bool, type(None), enum.Enum)


def _type_name(value: Any) -> str:
    cls = type(value)
    module = cls.__module__
    if module == "builtins":
        return cls.__qualname__
    return f"{module.rsplit('.', 1)[-1]}.{cls.__qualname__}"


def record_fields(value: Any) -> list[tuple[str, Any]] | None:
    """Return the named fields of a record-like value, or None."""
    if isinstance(value, enum.Enum):
        return None
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return [(f.name, getattr(value, f.name)) for f in dataclasses.fields(value)]
    if isinstance(value, tuple) and hasattr(value, "_fields"):
        return list(zip(value._fields, value))
    model_fields = getattr(type(value), "model_fields", None)
    if isinstance(model_fields, Mapping):
        return [(name, getattr(value, name)) for name in model_fields]
    attrs = getattr(value, "__dict__", None)
    if isinstance(attrs, dict) and not callable(value):
        return [(k, v) for k, v in attrs.items() if not k.startswith("_")]
    return None


class _Dumper:
    def __init__(self) -> None:
        self._path: set[int] = set()

    def render(self, value: Any, depth: int) -> str:
        name = _type_name(value)

        if isinstance(value, BaseException):
            return f"({name}) {value!r}"
        if isinstance(value, _SCALARS) or callable(value) or isinstance(value, ModuleType):
            return f"({name}) {value!r}"
        if isinstance(value, (str, bytes, bytearray)):
            return f"({name}) (len={len(value)}) {value!r}"

        if id(value) in self._path:
            return f"({name}) <already shown>"
        self._path.add(id(value))
        try:
            return self._render_composite(value, name, depth)
        finally:
            self._path.discard(id(value))

    def _render_composite(self, value: Any, name: str, depth: int) -> str:
        if isinstance(value, Mapping):
            items = [
                f"{self.render(k, depth + 1)}: {self.render(v, depth + 1)}"
                for k, v in value.items()
            ]
            return self._block(f"({name}) (len={len(value)}) ", "{", "}", items, depth)

        fields = record_fields(value)
        if fields is not None:
            items = [f"{k}: {self.render(v, depth + 1)}" for k, v in fields]
            return self._block(f"({name}) ", "{", "}", items, depth)

        if isinstance(value, Set):
            items = sorted(self.render(v, depth + 1) for v in value)
            return self._block(f"({name}) (len={len(value)}) ", "{", "}", items, depth)
        if isinstance(value, tuple):
            items = [self.render(v, depth + 1) for v in value]
            return self._block(f"({name}) (len={len(value)}) ", "(", ")", items, depth)
        if hasattr(value, "__len__") and hasattr(value, "__iter__"):
            items = [self.render(v, depth + 1) for v in value]
            return self._block(f"({name}) (len={len(items)}) ", "[", "]", items, depth)

        return f"({name}) {value!r}"

    @staticmethod
    def _block(head: str, open_: str, close: str, items: list[str], depth: int) -> str:
        if not items:
            return f"{head}{open_}{close}"
        pad = _INDENT * (depth + 1)
        body = ",\n".join(pad + item for item in items)
        return f"{head}{open_}\n{body}\n{_INDENT * depth}{close}"


def dump(value: Any) -> str:
    """Render *value* with its type and size metadata.

    Composite values span several lines, nested one space per level:

        >>> print(dump({"answer": 42}))
        (dict) (len=1) {
         (str) (len=6) 'answer': (int) 42
        }

    The output always ends with a newline.
    """
    return _Dumper().render(value, 0) + "\n"


def tdump(*values: Any) -> str:
    """Dump each value on its own line, without surrounding whitespace."""
    return "".join(dump(v) for v in values).strip()
