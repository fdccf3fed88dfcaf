import threading
import time
from typing import List, Tuple

import pytest

from livecode_engine.editing import KeyInput
from livecode_engine.lexer import TokenType
from livecode_engine.runtime import EngineSettings
from livecode_engine.sandbox import EntryType, RunStatus, Sandbox
from livecode_engine.session import EditorSession


def make_session(text: str = "", **settings: object) -> EditorSession:
    return EditorSession(text, settings=EngineSettings(**settings))


def press(session: EditorSession, key: str, *modifiers: str, text: str | None = None):
    return session.handle_key(KeyInput(key=key, modifiers=modifiers, text=text))


def type_text(session: EditorSession, chars: str) -> None:
    for char in chars:
        press(session, char, text=char)


def record_events(session: EditorSession) -> List[Tuple[str, object]]:
    events: List[Tuple[str, object]] = []
    for name in ("buffer.changed", "run.started", "run.finished", "run.rejected", "template.loaded"):
        session.bus.subscribe(name, lambda payload, name=name: events.append((name, payload)))
    return events


def test_typing_auto_pairs_and_skips_closers() -> None:
    session = make_session()

    type_text(session, "print(")
    assert session.text == "print()"
    type_text(session, '"hi"')
    type_text(session, ")")

    assert session.text == 'print("hi")'
    assert session.view.selection == (11, 11)


def test_default_keys_drive_editing_operations() -> None:
    session = make_session()

    type_text(session, "def f():")
    press(session, "ENTER")
    type_text(session, "return 1")

    assert session.text == "def f():\n  return 1"

    press(session, "a", "ctrl")
    press(session, "/", "ctrl")
    assert session.text == "# def f():\n  # return 1"

    press(session, "/", "meta")
    assert session.text == "def f():\n  return 1"


def test_tab_and_shift_tab() -> None:
    session = make_session("x")
    session.set_selection(0)

    press(session, "TAB")
    assert session.text == "  x"
    press(session, "TAB", "shift")
    assert session.text == "x"


def test_backspace_removes_empty_pair() -> None:
    session = make_session("f")
    type_text(session, "[")
    assert session.text == "f[]"

    press(session, "BACKSPACE")

    assert session.text == "f"


def test_undo_redo_bindings() -> None:
    session = make_session()
    type_text(session, "ab")

    press(session, "z", "ctrl")
    assert session.text == "a"
    press(session, "z", "ctrl", "shift")
    assert session.text == "ab"
    press(session, "z", "ctrl")
    press(session, "y", "ctrl")
    assert session.text == "ab"


def test_undo_with_empty_history_is_noop() -> None:
    session = make_session()

    result = session.undo()

    assert result.status == "noop"


def test_unbound_modified_keys_do_not_type() -> None:
    session = make_session()

    result = press(session, "k", "ctrl", text="k")

    assert result.consumed is False
    assert session.text == ""


def test_tokens_are_cached_per_version() -> None:
    session = make_session("x = 1")

    first = session.tokens()
    assert session.tokens() == first
    session.insert_text(" # c")

    assert session.tokens()[-1].type is TokenType.COMMENT
    assert "".join(span.text for span in session.styled_spans()) == session.text


def test_language_switch_retokenizes() -> None:
    session = make_session("// note")
    assert session.tokens()[0].type is TokenType.OPERATOR

    session.set_language("javascript")

    assert session.tokens()[0].type is TokenType.COMMENT


def test_styled_lines_cover_each_line() -> None:
    session = make_session("a\nb\n")

    lines = session.styled_lines()

    assert len(lines) == 3
    assert lines[2] == []


def test_run_emits_events_and_stores_report() -> None:
    session = make_session('print("Hello, World!")')
    events = record_events(session)

    report = session.run()

    assert report is not None
    assert report.status is RunStatus.SUCCESS
    assert session.last_report is report
    names = [name for name, _ in events]
    assert names == ["run.started", "run.finished"]
    assert session.running is False


def test_run_is_rejected_while_in_flight() -> None:
    session = make_session("while True:\n  pass", timeout_ms=10_000)
    events = record_events(session)
    worker = threading.Thread(target=session.run)
    worker.start()
    deadline = time.monotonic() + 5
    while not session.running and time.monotonic() < deadline:
        time.sleep(0.01)

    assert session.run() is None
    while not session.cancel_run() and time.monotonic() < deadline:
        time.sleep(0.01)
    worker.join(5)

    assert ("run.rejected", {"reason": "running"}) in events
    assert [name for name, _ in events].count("run.started") == 1
    assert session.running is False


class CountingSandbox:
    def __init__(self) -> None:
        self.inner = Sandbox()
        self.lock = threading.Lock()
        self.active = 0
        self.peak = 0

    def run(self, source: str):
        with self.lock:
            self.active += 1
            self.peak = max(self.peak, self.active)
        time.sleep(0.05)
        with self.lock:
            self.active -= 1
        return self.inner.run(source)

    def cancel(self) -> bool:
        return self.inner.cancel()


def test_overlapping_run_requests_never_execute_concurrently() -> None:
    sandbox = CountingSandbox()
    session = EditorSession("total = sum(range(10))", sandbox=sandbox)  # type: ignore[arg-type]
    gate = threading.Barrier(4)
    reports: List[object] = []

    def request() -> None:
        gate.wait()
        reports.append(session.run())

    threads = [threading.Thread(target=request) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(10)

    assert len(reports) == 4
    assert all(report is None or report.succeeded for report in reports)
    assert any(report is not None for report in reports)
    assert any(report is None for report in reports)
    assert sandbox.peak == 1


def test_ctrl_enter_runs_buffer() -> None:
    session = make_session("1 + 1")

    result = press(session, "ENTER", "ctrl")

    assert result.status == "success"
    assert session.last_report is not None
    assert session.last_report.entries[-1].type is EntryType.RESULT
    assert session.last_report.entries[-1].content == "2"


def test_load_template_replaces_buffer() -> None:
    session = make_session("old")
    events = record_events(session)

    session.load_template("hello")

    assert session.text == session.templates.source("hello")
    assert ("template.loaded", {"name": "hello"}) in events
    with pytest.raises(KeyError):
        session.load_template("missing")


def test_export_text_returns_buffer() -> None:
    session = make_session("a\nb")

    assert session.export_text() == "a\nb"


def test_unknown_language_setting_raises() -> None:
    with pytest.raises(KeyError):
        make_session(language="cobol")


def test_push_host_edit_adopts_mirror() -> None:
    session = make_session("abc")
    mirror = session.buffer.mirror()
    mirror.text = "abcd"
    mirror.selection_start = mirror.selection_end = 2

    result = session.push_host_edit(mirror)

    assert result.changed is True
    assert session.view.selection == (2, 2)


def test_theme_switch_restyles_spans() -> None:
    session = make_session("def")
    dark = session.styled_spans()[0].color

    session.set_theme("light")

    assert session.styled_spans()[0].color != dark


def test_cancel_run_without_run_in_flight() -> None:
    assert make_session().cancel_run() is False
