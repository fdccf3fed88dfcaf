"""Editing actions bound by the default keymaps."""

from __future__ import annotations

from typing import TYPE_CHECKING

from livecode_engine.editing import EditResult
from livecode_engine.editing import operations as ops

if TYPE_CHECKING:
    from livecode_engine.keymaps import ResolutionMatch
    from livecode_engine.session import EditorSession


def indent_action(session: EditorSession, match: ResolutionMatch) -> EditResult:
    del match
    return session.edit(ops.indent(session.view), label="indent")


def outdent_action(session: EditorSession, match: ResolutionMatch) -> EditResult:
    del match
    return session.edit(ops.outdent(session.view), label="outdent")


def newline_action(session: EditorSession, match: ResolutionMatch) -> EditResult:
    del match
    view = ops.smart_newline(session.view, openers=session.profile.block_openers)
    return session.edit(view, label="newline")


def backspace_action(session: EditorSession, match: ResolutionMatch) -> EditResult:
    del match
    return session.edit(ops.backspace(session.view), label="backspace")


def toggle_comment_action(
    session: EditorSession, match: ResolutionMatch
) -> EditResult:
    del match
    view = ops.toggle_comment(session.view, marker=session.profile.line_comment)
    return session.edit(view, label="toggle_comment")


def select_all_action(session: EditorSession, match: ResolutionMatch) -> EditResult:
    del match
    return session.select_all()


def undo_action(session: EditorSession, match: ResolutionMatch) -> EditResult:
    del match
    return session.undo()


def redo_action(session: EditorSession, match: ResolutionMatch) -> EditResult:
    del match
    return session.redo()


__all__ = [
    "indent_action",
    "outdent_action",
    "newline_action",
    "backspace_action",
    "toggle_comment_action",
    "select_all_action",
    "undo_action",
    "redo_action",
]
