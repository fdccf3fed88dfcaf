"""Buffer snapshot, ownership and undo/redo data structures."""

from .buffer import BufferDelta, EditorBuffer, Transaction
from .state import BufferView, Selection
from .sync import BufferMirror, BufferValidationError
from .undo import UndoEntry, UndoTimeline
from .validation import clamp_offset, clamp_view, ensure_selection

__all__ = [
    "BufferView",
    "Selection",
    "EditorBuffer",
    "BufferDelta",
    "Transaction",
    "UndoEntry",
    "UndoTimeline",
    "BufferMirror",
    "BufferValidationError",
    "clamp_offset",
    "clamp_view",
    "ensure_selection",
]
