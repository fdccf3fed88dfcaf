"""Immutable snapshot of buffer text plus selection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

Selection = Tuple[int, int]  # (start, end) character offsets


@dataclass(frozen=True, slots=True)
class BufferView:
    """Text and selection at one point in time.

    ``selection_start == selection_end`` is a caret. Offsets index into
    ``text`` and are always ordered once a view has gone through
    :func:`~livecode_engine.buffer.validation.clamp_view`.
    """

    text: str = ""
    selection_start: int = 0
    selection_end: int = 0

    @classmethod
    def caret_at(cls, text: str, offset: int) -> "BufferView":
        return cls(text=text, selection_start=offset, selection_end=offset)

    @property
    def selection(self) -> Selection:
        return (self.selection_start, self.selection_end)

    @property
    def has_selection(self) -> bool:
        return self.selection_start != self.selection_end

    @property
    def line_count(self) -> int:
        return self.text.count("\n") + 1

    @property
    def char_count(self) -> int:
        return len(self.text)

    @property
    def selected_text(self) -> str:
        return self.text[self.selection_start : self.selection_end]
