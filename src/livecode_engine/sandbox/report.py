"""Output entries and execution reports produced by a sandbox run."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple


class EntryType(str, Enum):
    LOG = "log"
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    RESULT = "result"
    SUCCESS = "success"


class RunStatus(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    TIMEOUT = "timeout"


@dataclass(frozen=True, slots=True)
class OutputEntry:
    type: EntryType
    content: str
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """1-based position inside the submitted source."""

    line: int
    column: Optional[int] = None


@dataclass(frozen=True, slots=True)
class ExecutionReport:
    entries: Tuple[OutputEntry, ...]
    duration_ms: float
    status: RunStatus
    location: Optional[SourceLocation] = None

    @property
    def succeeded(self) -> bool:
        return self.status is RunStatus.SUCCESS

    @property
    def contents(self) -> Tuple[str, ...]:
        return tuple(entry.content for entry in self.entries)

    def entries_of(self, entry_type: EntryType) -> Tuple[OutputEntry, ...]:
        return tuple(entry for entry in self.entries if entry.type is entry_type)


__all__ = [
    "EntryType",
    "RunStatus",
    "OutputEntry",
    "SourceLocation",
    "ExecutionReport",
]
