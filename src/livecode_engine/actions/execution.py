"""Run action: hands the buffer to the sandbox."""

from __future__ import annotations

from typing import TYPE_CHECKING

from livecode_engine.editing import EditResult

if TYPE_CHECKING:
    from livecode_engine.keymaps import ResolutionMatch
    from livecode_engine.session import EditorSession


def run_action(session: EditorSession, match: ResolutionMatch) -> EditResult:
    del match
    report = session.run()
    if report is None:
        return EditResult(consumed=True, status="rejected", message="run in progress")
    return EditResult(consumed=True, status=report.status.value, message="run")


__all__ = ["run_action"]
