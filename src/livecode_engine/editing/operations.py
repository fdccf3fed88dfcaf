"""Pure text transformations behind every editor keystroke.

Each operation takes a :class:`BufferView` and returns the next one. None of
them raise: offsets are clamped first, and inputs with nothing to do (empty
buffer, caret at a boundary) come back unchanged.
"""

from __future__ import annotations

from typing import Iterable, List

from livecode_engine.buffer import BufferView, clamp_view

from .pairs import BRACKET_CLOSERS, BRACKET_OPENERS, PAIRS, QUOTES, is_empty_pair

INDENT_UNIT = "  "
DEFAULT_WORD_EXTRAS = "_$"


def line_start(text: str, offset: int) -> int:
    return text.rfind("\n", 0, offset) + 1


def line_end(text: str, offset: int) -> int:
    index = text.find("\n", offset)
    return len(text) if index == -1 else index


def leading_whitespace(line: str) -> str:
    return line[: len(line) - len(line.lstrip())]


def _replace_selection(
    view: BufferView, replacement: str, *, caret: int | None = None
) -> BufferView:
    start, end = view.selection
    text = view.text[:start] + replacement + view.text[end:]
    offset = start + len(replacement) if caret is None else caret
    return BufferView.caret_at(text, offset)


def _spans_lines(view: BufferView) -> bool:
    return view.has_selection and "\n" in view.selected_text


def _rewrite_lines(view: BufferView, new_lines: List[str]) -> BufferView:
    text = view.text
    start = line_start(text, view.selection_start)
    end = line_end(text, view.selection_end)
    block = "\n".join(new_lines)
    return BufferView(text[:start] + block + text[end:], start, start + len(block))


def _covered_lines(view: BufferView) -> List[str]:
    text = view.text
    start = line_start(text, view.selection_start)
    end = line_end(text, view.selection_end)
    return text[start:end].split("\n")


def insert_text(view: BufferView, text: str) -> BufferView:
    """Replace the selection with ``text`` (paste, IME commit)."""

    return _replace_selection(clamp_view(view), text)


def indent(view: BufferView, unit: str = INDENT_UNIT) -> BufferView:
    view = clamp_view(view)
    if _spans_lines(view):
        lines = [unit + line if line.strip() else line for line in _covered_lines(view)]
        return _rewrite_lines(view, lines)
    return _replace_selection(view, unit)


def outdent(view: BufferView, unit: str = INDENT_UNIT) -> BufferView:
    view = clamp_view(view)
    if _spans_lines(view):
        lines = [
            line[len(unit) :] if line.startswith(unit) else line
            for line in _covered_lines(view)
        ]
        return _rewrite_lines(view, lines)

    text = view.text
    start = line_start(text, view.selection_start)
    if not text.startswith(unit, start):
        return view
    new_text = text[:start] + text[start + len(unit) :]
    return BufferView(
        new_text,
        max(start, view.selection_start - len(unit)),
        max(start, view.selection_end - len(unit)),
    )


def smart_newline(
    view: BufferView,
    *,
    openers: Iterable[str] = tuple(BRACKET_OPENERS),
    unit: str = INDENT_UNIT,
) -> BufferView:
    view = clamp_view(view)
    text = view.text
    start, end = view.selection
    head = text[line_start(text, start) : start]
    current_indent = leading_whitespace(head)
    before = text[start - 1 : start]
    after = text[end : end + 1]

    if before in BRACKET_OPENERS and is_empty_pair(before, after):
        inner = "\n" + current_indent + unit
        return _replace_selection(
            view, inner + "\n" + current_indent, caret=start + len(inner)
        )

    stripped = head.rstrip()
    if stripped and stripped[-1] in set(openers):
        return _replace_selection(view, "\n" + current_indent + unit)

    return _replace_selection(view, "\n" + current_indent)


def _follows_word(text: str, caret: int, word_extras: str) -> bool:
    previous = text[caret - 1 : caret] if caret > 0 else ""
    return bool(previous) and (previous.isalnum() or previous in word_extras)


def _closes_string(text: str, caret: int, quote: str, word_extras: str) -> bool:
    """A quote closes a string after a word character or right after its twin."""

    return _follows_word(text, caret, word_extras) or text[caret - 1 : caret] == quote


def type_character(
    view: BufferView, char: str, *, word_extras: str = DEFAULT_WORD_EXTRAS
) -> BufferView:
    """Insert one typed character with auto-pairing and closer skipping."""

    view = clamp_view(view)
    if len(char) != 1:
        return _replace_selection(view, char)

    text = view.text
    start, end = view.selection

    if not view.has_selection and text[end : end + 1] == char:
        if char in BRACKET_CLOSERS or (
            char in QUOTES and _closes_string(text, start, char, word_extras)
        ):
            return BufferView.caret_at(text, start + 1)

    closer = PAIRS.get(char)
    if closer is None:
        return _replace_selection(view, char)

    if view.has_selection:
        wrapped = text[:start] + char + view.selected_text + closer + text[end:]
        return BufferView(wrapped, start + 1, end + 1)

    if char in QUOTES and _follows_word(text, start, word_extras):
        return _replace_selection(view, char)
    return _replace_selection(view, char + closer, caret=start + 1)


def backspace(view: BufferView) -> BufferView:
    view = clamp_view(view)
    if view.has_selection:
        return _replace_selection(view, "")

    text = view.text
    caret = view.selection_start
    if caret == 0:
        return view
    if is_empty_pair(text[caret - 1], text[caret : caret + 1]):
        return BufferView.caret_at(text[: caret - 1] + text[caret + 1 :], caret - 1)
    return BufferView.caret_at(text[: caret - 1] + text[caret:], caret - 1)


def toggle_comment(view: BufferView, marker: str = "#") -> BufferView:
    """Comment or uncomment every non-blank line touched by the selection."""

    view = clamp_view(view)
    lines = _covered_lines(view)
    content = [line for line in lines if line.strip()]
    if not content:
        return view

    uncomment = all(line.lstrip().startswith(marker) for line in content)
    new_lines: List[str] = []
    for line in lines:
        if not line.strip():
            new_lines.append(line)
            continue
        prefix = leading_whitespace(line)
        body = line[len(prefix) :]
        if uncomment:
            body = body[len(marker) :]
            if body.startswith(" "):
                body = body[1:]
        else:
            body = f"{marker} {body}"
        new_lines.append(prefix + body)

    rewritten = _rewrite_lines(view, new_lines)
    if view.has_selection:
        return rewritten

    # Keep the caret on the same character of the (single) line.
    start = line_start(view.text, view.selection_start)
    column = view.selection_start - start
    margin = len(leading_whitespace(lines[0]))
    if column >= margin:
        delta = len(new_lines[0]) - len(lines[0])
        column = max(margin, column + delta)
    return BufferView.caret_at(rewritten.text, start + column)


def select_all(view: BufferView) -> BufferView:
    return BufferView(view.text, 0, len(view.text))


__all__ = [
    "INDENT_UNIT",
    "DEFAULT_WORD_EXTRAS",
    "line_start",
    "line_end",
    "leading_whitespace",
    "insert_text",
    "indent",
    "outdent",
    "smart_newline",
    "type_character",
    "backspace",
    "toggle_comment",
    "select_all",
]
