"""Turn exceptions raised by submitted code into line-mapped diagnostics.

Locations come from the exception objects themselves (``SyntaxError``
attributes and traceback frame positions), never from parsing traceback text.
"""

from __future__ import annotations

import traceback
from typing import List, Optional

from .report import SourceLocation

SANDBOX_FILENAME = "<sandbox>"
CONTEXT_RADIUS = 1


def _char_column(source_line: Optional[str], byte_offset: int) -> int:
    """Frame positions are UTF-8 byte offsets; convert to a character index."""

    if not source_line:
        return byte_offset
    encoded = source_line.encode("utf-8")[:byte_offset]
    return len(encoded.decode("utf-8", errors="ignore"))


def _caret_padding(line: str, column: int) -> str:
    """Blank out the text before ``column``, keeping tabs so the caret lines up."""

    prefix = line[: column - 1].ljust(column - 1)
    return "".join(char if char == "\t" else " " for char in prefix)


def locate_error(
    exc: BaseException,
    *,
    source: Optional[str] = None,
    filename: str = SANDBOX_FILENAME,
    wrapper_lines: int = 0,
) -> Optional[SourceLocation]:
    """Return the 1-based location of ``exc`` inside the synthetic frame.

    The innermost traceback frame executing ``filename`` wins. ``wrapper_lines``
    is subtracted for hosts that prepend code before compiling.
    """

    line: Optional[int] = None
    column: Optional[int] = None
    if isinstance(exc, SyntaxError) and exc.filename == filename:
        line = exc.lineno
        column = exc.offset
    else:
        source_lines = source.split("\n") if source is not None else []
        for frame in traceback.extract_tb(exc.__traceback__):
            if frame.filename != filename or not frame.lineno:
                continue
            line = frame.lineno
            colno = getattr(frame, "colno", None)
            column = None
            if colno is not None:
                text = None
                index = frame.lineno - 1
                if 0 <= index < len(source_lines):
                    text = source_lines[index]
                column = _char_column(text, colno) + 1

    if line is None:
        return None
    line -= wrapper_lines
    if line < 1:
        return None
    if column is not None and column < 1:
        column = None
    return SourceLocation(line=line, column=column)


def describe_exception(exc: BaseException) -> str:
    name = type(exc).__name__
    if isinstance(exc, SyntaxError) and exc.msg:
        message = exc.msg
    else:
        message = str(exc)
    return f"{name}: {message}" if message else name


def build_diagnostic(
    exc: BaseException, source: str, location: Optional[SourceLocation]
) -> str:
    """Kind and message, the location, then a numbered context window."""

    lines: List[str] = [describe_exception(exc)]
    if location is None:
        return lines[0]

    where = f"Line {location.line}"
    if location.column is not None:
        where += f", column {location.column}"
    lines.append(where)

    source_lines = source.split("\n")
    if not 1 <= location.line <= len(source_lines):
        return "\n".join(lines)

    first = max(1, location.line - CONTEXT_RADIUS)
    last = min(len(source_lines), location.line + CONTEXT_RADIUS)
    width = len(str(last))
    lines.append("")
    for number in range(first, last + 1):
        marker = ">" if number == location.line else " "
        text = source_lines[number - 1]
        lines.append(f"{marker} {number:>{width}} | {text}".rstrip())
        if number == location.line and location.column is not None:
            lines.append(f"  {' ' * width} | {_caret_padding(text, location.column)}^")
    return "\n".join(lines)


__all__ = [
    "SANDBOX_FILENAME",
    "locate_error",
    "describe_exception",
    "build_diagnostic",
]
