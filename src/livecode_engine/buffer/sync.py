"""Adapter boundary types for syncing buffers with host widgets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .state import Selection


@dataclass(slots=True)
class BufferMirror:
    """Host-friendly snapshot describing the current buffer state."""

    text: str
    selection_start: int
    selection_end: int
    line_count: int = 1
    attributes: dict[str, str] = field(default_factory=dict)



class BufferValidationError(RuntimeError):
    """Raised when adapters provide out-of-bounds selection info."""

    def __init__(self, message: str, *, selection: Optional[Selection] = None) -> None:
        super().__init__(message)
        self.selection = selection
