"""Validation helpers shared across buffer services."""

from __future__ import annotations

from .state import BufferView
from .sync import BufferValidationError


def clamp_offset(text: str, offset: int) -> int:
    return max(0, min(offset, len(text)))


def clamp_view(view: BufferView) -> BufferView:
    """Clamp both offsets into ``text`` and order them."""

    start = clamp_offset(view.text, view.selection_start)
    end = clamp_offset(view.text, view.selection_end)
    if start > end:
        start, end = end, start
    if (start, end) == view.selection:
        return view
    return BufferView(view.text, start, end)


def ensure_selection(text: str, start: int, end: int) -> BufferView:
    """Strict counterpart of :func:`clamp_view` for host-supplied state."""

    for offset in (start, end):
        if offset < 0 or offset > len(text):
            raise BufferValidationError(
                "Selection offset out of range", selection=(start, end)
            )
    if start > end:
        start, end = end, start
    return BufferView(text, start, end)
