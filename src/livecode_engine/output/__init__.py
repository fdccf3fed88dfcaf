"""Output formatting for execution reports."""

from .formatter import (
    DEFAULT_STYLE,
    EntryStyle,
    describe,
    export_report_text,
    format_entry,
    summarize,
)

__all__ = [
    "EntryStyle",
    "DEFAULT_STYLE",
    "describe",
    "format_entry",
    "export_report_text",
    "summarize",
]
