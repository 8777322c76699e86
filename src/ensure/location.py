"""Find where in the test code a failing assertion was called from."""

from __future__ import annotations

import inspect
import os
from dataclasses import dataclass

TRACE_INDENT = " " * 8


@dataclass(frozen=True)
class StackFrame:
    file: str
    line: int
    function: str

    def __str__(self) -> str:
        return f"{self.file}:{self.line} {self.function}"


def capture_stack(skip: int = 0) -> list[StackFrame]:
    """Return the call stack, innermost first, starting at our caller.

    *skip* drops that many additional frames from the inner end.
    """
    frame = inspect.currentframe()
    try:
        frame = frame.f_back if frame is not None else None
        for _ in range(skip):
            if frame is None:
                break
            frame = frame.f_back

        stack: list[StackFrame] = []
        while frame is not None:
            code = frame.f_code
            stack.append(StackFrame(code.co_filename, frame.f_lineno, code.co_name))
            frame = frame.f_back
        return stack
    finally:
        del frame


def is_test_frame(frame: StackFrame, prefix: str = "test") -> bool:
    return frame.function.startswith(prefix)


def format_trace(frames: list[StackFrame]) -> str:
    """Render frames one per line, indented, with a trailing newline."""
    return "".join(f"{TRACE_INDENT}{f}\n" for f in frames)


def format_location(stack: list[StackFrame], prefix: str = "test") -> str:
    """Turn a captured stack into a message prefix.

    When the innermost frame is the test itself this is a short
    ``file.py:LINE: `` prefix. When the assertion went through helpers, the
    frames from the failure up to and including the test are listed, and
    when no test frame exists at all, the whole stack is.
    """
    if not stack:
        return f"{TRACE_INDENT}<unknown location>\n"

    first = stack[0]
    if is_test_frame(first, prefix):
        return f"{os.path.basename(first.file)}:{first.line}: "

    for i, frame in enumerate(stack):
        if is_test_frame(frame, prefix):
            return format_trace(stack[: i + 1])
    return format_trace(stack)


def resolve_location(skip: int = 0, prefix: str = "test") -> str:
    """Location prefix for the frame *skip* levels above our caller."""
    return format_location(capture_stack(skip + 1), prefix)
