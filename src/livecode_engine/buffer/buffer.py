"""Editor buffer owning the current text, selection and undo history."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import ContextManager, Optional

from livecode_engine.runtime import telemetry

from .state import BufferView
from .sync import BufferMirror
from .undo import UndoEntry, UndoTimeline
from .validation import clamp_view, ensure_selection


@dataclass(slots=True)
class BufferDelta:
    version: int
    view: BufferView
    label: str
    changed: bool


class EditorBuffer:
    """Single-owner buffer mutated only through :meth:`apply` and friends."""

    def __init__(
        self,
        text: str = "",
        *,
        name: str = "default",
        undo: Optional[UndoTimeline] = None,
    ) -> None:
        self.name = name
        self.undo_timeline = undo or UndoTimeline()
        self.version = 0
        self._view = BufferView.caret_at(text, len(text))

    @property
    def view(self) -> BufferView:
        return self._view

    @property
    def text(self) -> str:
        return self._view.text

    def snapshot(self) -> BufferView:
        return self._view

    def mirror(self, *, attributes: Optional[dict[str, str]] = None) -> BufferMirror:
        view = self._view
        return BufferMirror(
            text=view.text,
            selection_start=view.selection_start,
            selection_end=view.selection_end,
            line_count=view.line_count,
            attributes=dict(attributes or {}),
        )

    def apply(self, view: BufferView, *, label: str) -> BufferDelta:
        """Adopt ``view`` as the new state, recording text changes for undo."""

        view = clamp_view(view)
        before = self._view
        if view.text == before.text:
            # Selection-only moves are not undo steps.
            self._view = view
            return BufferDelta(self.version, view, label, changed=False)

        with Transaction(self, label) as tx:
            self._view = view
            self.version += 1
            tx.commit(before, view)
        return BufferDelta(self.version, view, label, changed=True)

    def set_selection(self, start: int, end: Optional[int] = None) -> BufferDelta:
        end = start if end is None else end
        return self.apply(
            BufferView(self._view.text, start, end), label="set_selection"
        )

    def set_text(self, text: str, *, label: str = "set_text") -> BufferDelta:
        return self.apply(BufferView.caret_at(text, len(text)), label=label)

    def push_host_edit(self, mirror: BufferMirror) -> BufferDelta:
        view = ensure_selection(
            mirror.text, mirror.selection_start, mirror.selection_end
        )
        return self.apply(view, label="host_edit")

    def undo(self) -> Optional[BufferDelta]:
        entry = self.undo_timeline.undo()
        if entry is None:
            return None
        self._view = entry.before
        self.version += 1
        return BufferDelta(self.version, entry.before, f"undo:{entry.label}", True)

    def redo(self) -> Optional[BufferDelta]:
        entry = self.undo_timeline.redo()
        if entry is None:
            return None
        self._view = entry.after
        self.version += 1
        return BufferDelta(self.version, entry.after, f"redo:{entry.label}", True)


class Transaction(AbstractContextManager["Transaction"]):
    def __init__(self, buffer: EditorBuffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={"buffer": self.buffer.name},
        )
        self._span_cm.__enter__()
        return self

    def commit(self, before: BufferView, after: BufferView) -> None:
        self.buffer.undo_timeline.push(
            UndoEntry(label=self.label, before=before, after=after)
        )

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False
