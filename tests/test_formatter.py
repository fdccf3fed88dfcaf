from livecode_engine.output import (
    DEFAULT_STYLE,
    describe,
    export_report_text,
    format_entry,
    summarize,
)
from livecode_engine.sandbox import EntryType, ExecutionReport, OutputEntry, RunStatus


def make_report(*entries: tuple[EntryType, str], status: RunStatus = RunStatus.SUCCESS) -> ExecutionReport:
    return ExecutionReport(
        entries=tuple(OutputEntry(kind, content) for kind, content in entries),
        duration_ms=12.34,
        status=status,
    )


def test_describe_covers_every_entry_type() -> None:
    for entry_type in EntryType:
        style = describe(entry_type)
        assert style is not DEFAULT_STYLE
        assert style.glyph and style.label and style.color_role


def test_describe_error_and_string_values() -> None:
    assert describe(EntryType.ERROR).glyph == "❌"
    assert describe("warn").color_role == "warning"


def test_describe_unknown_value_uses_default() -> None:
    assert describe("trace") is DEFAULT_STYLE
    assert describe(None) is DEFAULT_STYLE


def test_format_entry_prefixes_glyph() -> None:
    entry = OutputEntry(EntryType.RESULT, "42")

    assert format_entry(entry) == "✅ 42"


def test_export_report_text_joins_contents() -> None:
    report = make_report((EntryType.LOG, "a"), (EntryType.ERROR, "b\nc"))

    assert export_report_text(report) == "a\nb\nc"


def test_summarize_reports_status_duration_and_count() -> None:
    assert summarize(make_report((EntryType.LOG, "a"))) == "Success in 12.3 ms (1 entry)"
    assert (
        summarize(make_report(status=RunStatus.TIMEOUT))
        == "Timed out in 12.3 ms (0 entries)"
    )
