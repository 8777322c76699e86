"""Failure conditions and their rendering into a single message."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ensure.config import get_settings
from ensure.dump import tdump
from ensure.location import resolve_location
from ensure.sink import HelperMarker, Sink
from ensure.verbose import echo_logger

__unittest = True


@dataclass
class Condition:
    """A condition that wasn't satisfied.

    Attributes:
        sink: Where the rendered message is dispatched.
        format: printf-style template for the main message.
        format_args: Values substituted into ``format``.
        extra: Caller-supplied values dumped after the main message.
        skip: Frames between the predicate and the code being blamed.
        with_location: Prefix the message with where the assertion was
            called from. Set by :func:`fatal` from the ``location`` setting.
    """

    sink: Sink
    format: str = ""
    format_args: tuple[Any, ...] = ()
    extra: tuple[Any, ...] = ()
    skip: int = 0
    with_location: bool = field(default=True, repr=False)

    def render(self) -> str:
        parts = []
        if self.with_location:
            settings = get_settings()
            parts.append(resolve_location(self.skip + 1, settings.test_prefix))
        if self.format:
            parts.append(self.format % self.format_args if self.format_args else self.format)
        if self.extra:
            parts.append("\n")
            parts.append(tdump(*self.extra))
        return "".join(parts)


def _wants_location(sink: Sink, location: str) -> bool:
    if location == "stack":
        return True
    if location == "auto":
        return not isinstance(sink, HelperMarker)
    return False


def fatal(cond: Condition) -> None:
    """Render *cond* and dispatch it to its sink.

    Adds 2 to ``skip`` to step over itself and the predicate that called it.
    """
    __tracebackhide__ = True
    settings = get_settings()

    cond.skip += 2
    cond.with_location = _wants_location(cond.sink, settings.location)
    if isinstance(cond.sink, HelperMarker):
        cond.sink.mark_helper_frame()

    message = cond.render()

    logger = echo_logger(settings)
    if logger is not None:
        logger.info(message)

    cond.sink.abort(message)


def describe_error(err: BaseException) -> str:
    """Full text of an error, including what it was raised from."""
    lines = [str(err) or type(err).__name__]
    seen = {id(err)}
    cause = err.__cause__ or (None if err.__suppress_context__ else err.__context__)
    while cause is not None and id(cause) not in seen:
        seen.add(id(cause))
        lines.append(f"caused by: {type(cause).__name__}: {cause}")
        cause = cause.__cause__ or (None if cause.__suppress_context__ else cause.__context__)
    return "\n".join(lines)
