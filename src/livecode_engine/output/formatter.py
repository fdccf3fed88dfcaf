"""Presentation descriptors for output entries and plain-text report export."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Union

from livecode_engine.sandbox.report import EntryType, ExecutionReport, OutputEntry, RunStatus


@dataclass(frozen=True, slots=True)
class EntryStyle:
    glyph: str
    label: str
    color_role: str


DEFAULT_STYLE = EntryStyle(glyph="•", label="Output", color_role="muted")

ENTRY_STYLES: Mapping[EntryType, EntryStyle] = MappingProxyType(
    {
        EntryType.LOG: EntryStyle(glyph="💬", label="Log", color_role="text"),
        EntryType.ERROR: EntryStyle(glyph="❌", label="Error", color_role="error"),
        EntryType.WARN: EntryStyle(glyph="⚠️", label="Warning", color_role="warning"),
        EntryType.INFO: EntryStyle(glyph="ℹ️", label="Info", color_role="info"),
        EntryType.RESULT: EntryStyle(glyph="✅", label="Result", color_role="success"),
        EntryType.SUCCESS: EntryStyle(glyph="✅", label="Success", color_role="success"),
    }
)

STATUS_LABELS: Mapping[RunStatus, str] = MappingProxyType(
    {
        RunStatus.SUCCESS: "Success",
        RunStatus.ERROR: "Error",
        RunStatus.TIMEOUT: "Timed out",
    }
)


def describe(entry_type: Union[EntryType, str, None]) -> EntryStyle:
    """Map an entry type (or its string value) to a descriptor; never fails."""

    try:
        key = EntryType(entry_type)
    except ValueError:
        return DEFAULT_STYLE
    return ENTRY_STYLES.get(key, DEFAULT_STYLE)


def format_entry(entry: OutputEntry) -> str:
    style = describe(entry.type)
    return f"{style.glyph} {entry.content}"


def export_report_text(report: ExecutionReport) -> str:
    """Entries' contents joined by newlines, as copied to the clipboard."""

    return "\n".join(report.contents)


def summarize(report: ExecutionReport) -> str:
    label = STATUS_LABELS.get(report.status, str(report.status))
    count = len(report.entries)
    noun = "entry" if count == 1 else "entries"
    return f"{label} in {report.duration_ms:.1f} ms ({count} {noun})"


__all__ = [
    "EntryStyle",
    "DEFAULT_STYLE",
    "ENTRY_STYLES",
    "describe",
    "format_entry",
    "export_report_text",
    "summarize",
]
