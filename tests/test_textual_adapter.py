from __future__ import annotations

from typing import List

from livecode_engine.adapters.textual import (
    TextualEditorAdapter,
    TextualUIHooks,
    normalize_textual_key,
)
from livecode_engine.buffer import BufferMirror
from livecode_engine.runtime import EngineSettings
from livecode_engine.sandbox import ExecutionReport, RunStatus
from livecode_engine.session import EditorSession


def make_session(text: str = "") -> EditorSession:
    return EditorSession(text, settings=EngineSettings(timeout_ms=2000))


def test_normalize_textual_key_names() -> None:
    assert normalize_textual_key("tab").token == "TAB"
    assert normalize_textual_key("shift+tab").token == "shift+TAB"
    assert normalize_textual_key("backtab").token == "shift+TAB"
    assert normalize_textual_key("enter").text is None
    assert normalize_textual_key("ctrl+z").token == "ctrl+z"
    assert normalize_textual_key("ctrl+underscore").token == "ctrl+/"


def test_normalize_textual_key_uses_character_for_symbols() -> None:
    key = normalize_textual_key("left_parenthesis", "(")

    assert key.key == "("
    assert key.text == "("
    assert normalize_textual_key("A", "A", modifiers=("shift",)).modifiers == ()


def test_adapter_updates_buffer_on_typing() -> None:
    session = make_session()
    updates: List[BufferMirror] = []
    hooks = TextualUIHooks(update_buffer=updates.append)
    adapter = TextualEditorAdapter(session, hooks)

    adapter.handle_textual_key("left_square_bracket", text="[")
    adapter.handle_textual_key("x", text="x")

    assert updates[0].text == ""
    assert updates[-1].text == "[x]"
    assert updates[-1].selection_start == 2
    assert updates[-1].attributes["language"] == "python"


def test_adapter_runs_and_surfaces_report() -> None:
    session = make_session('print("hi")')
    outputs: List[ExecutionReport] = []
    statuses: List[str] = []
    events: List[str] = []
    hooks = TextualUIHooks(
        update_buffer=lambda mirror: None,
        update_status=statuses.append,
        update_output=outputs.append,
        handle_event=lambda name, payload: events.append(name),
    )
    adapter = TextualEditorAdapter(session, hooks)

    report = adapter.run()

    assert report is not None
    assert outputs == [report]
    assert report.status is RunStatus.SUCCESS
    assert statuses[0] == "Running..."
    assert events == ["run.started", "run.finished"]


def test_adapter_reports_unbound_keys_and_templates() -> None:
    session = make_session()
    statuses: List[str] = []
    hooks = TextualUIHooks(update_buffer=lambda mirror: None, update_status=statuses.append)
    adapter = TextualEditorAdapter(session, hooks)

    result = adapter.handle_textual_key("f5")
    adapter.load_template("functions")

    assert result.consumed is False
    assert "unbound" in statuses
    assert statuses[-1] == "Loaded template 'functions'"
    assert session.text.startswith("def greet")


def test_adapter_log_hook_receives_key_lines() -> None:
    session = make_session()
    lines: List[str] = []
    hooks = TextualUIHooks(update_buffer=lambda mirror: None, log=lines.append)
    adapter = TextualEditorAdapter(session, hooks)

    adapter.handle_textual_key("a", text="a")

    assert lines[0].startswith("key -> ")
    assert "key='a'" in lines[0]
    assert lines[-1].startswith("result <- ")


def test_adapter_paste_inserts_text() -> None:
    session = make_session("ab")
    updates: List[BufferMirror] = []
    adapter = TextualEditorAdapter(session, TextualUIHooks(update_buffer=updates.append))

    adapter.paste("xyz")

    assert session.text == "abxyz"
    assert updates[-1].text == "abxyz"
