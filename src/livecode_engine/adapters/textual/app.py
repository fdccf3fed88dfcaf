"""Executable Textual app that hosts the live code engine."""

from __future__ import annotations

import argparse
import os
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from rich.style import Style
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Horizontal
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use livecode_engine.adapters.textual.app"
    ) from exc

from livecode_engine.buffer import BufferMirror
from livecode_engine.lexer import StyledSpan
from livecode_engine.output import describe, summarize
from livecode_engine.runtime import EngineSettings, telemetry
from livecode_engine.sandbox import ExecutionReport
from livecode_engine.session import EditorSession
from livecode_engine.templates import DEFAULT_TEMPLATE

from .controller import TextualEditorAdapter, TextualUIHooks

APP_KEYS = frozenset({"ctrl+q", "ctrl+r", "ctrl+t", "ctrl+d", "ctrl+x"})

COLOR_ROLES: Dict[str, str] = {
    "text": "#e5e7eb",
    "error": "#f87171",
    "warning": "#fbbf24",
    "info": "#60a5fa",
    "success": "#4ade80",
    "muted": "#9ca3af",
}


def create_default_session(settings: Optional[EngineSettings] = None) -> EditorSession:
    """Build a session with default keymaps and the starter template loaded."""

    session = EditorSession(settings=settings or EngineSettings.from_env())
    session.load_template(DEFAULT_TEMPLATE)
    return session


@dataclass
class UIState:
    status_text: str = ""
    output: Optional[ExecutionReport] = None


def render_buffer(session: EditorSession, mirror: BufferMirror) -> Text:
    """Highlighted buffer with the selection (or caret cell) reversed."""

    lines = session.styled_lines()
    start, end = mirror.selection_start, mirror.selection_end
    rendered = Text()
    offset = 0
    for index, spans in enumerate(lines):
        line = _render_line(spans)
        length = len(line.plain)
        if start == end and offset <= start <= offset + length:
            column = start - offset
            if column == length:
                line.append(" ")
            line.stylize("reverse", column, column + 1)
        elif start < end:
            low = max(start, offset) - offset
            high = min(end, offset + length) - offset
            if low < high:
                line.stylize("reverse", low, high)
        rendered.append_text(line)
        if index < len(lines) - 1:
            rendered.append("\n")
        offset += length + 1
    return rendered


def _render_line(spans: List[StyledSpan]) -> Text:
    line = Text()
    for span in spans:
        line.append(
            span.text, style=Style(color=span.color, bold=span.bold, italic=span.italic)
        )
    return line


def render_report(report: ExecutionReport) -> Text:
    rendered = Text()
    for entry in report.entries:
        style = describe(entry.type)
        color = COLOR_ROLES.get(style.color_role, COLOR_ROLES["muted"])
        rendered.append(f"{style.glyph} ", style=Style(color=color))
        rendered.append(entry.content, style=Style(color=color))
        rendered.append("\n")
    rendered.append(summarize(report), style=Style(color=COLOR_ROLES["muted"]))
    return rendered


class LiveCodeApp(App[None]):
    """Minimal Textual UI embedding the editor session and sandbox."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#panes {
		height: 1fr;
	}

	#buffer-view {
		width: 3fr;
		border: round $accent;
		padding: 0 1;
		overflow: auto;
	}

	#output-view {
		width: 2fr;
		border: round $secondary;
		padding: 0 1;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
        ("ctrl+r", "run", "Run"),
        ("ctrl+t", "next_template", "Template"),
        ("ctrl+d", "toggle_theme", "Theme"),
        ("ctrl+x", "cancel_run", "Stop"),
    ]

    def __init__(self, *, settings: Optional[EngineSettings] = None) -> None:
        super().__init__()
        self._settings = settings
        self._state = UIState()
        self.session: EditorSession | None = None
        self.adapter: TextualEditorAdapter | None = None
        self._buffer_widget: Static | None = None
        self._output_widget: Static | None = None
        self._status_widget: Static | None = None
        self._ui_thread: Optional[int] = None
        self._template_index = 0
        self._logger = telemetry.get_logger(telemetry.APP_LOGGER)

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Horizontal(id="panes"):
            self._buffer_widget = Static("", id="buffer-view")
            self._output_widget = Static(
                "Run your code to see output here...", id="output-view"
            )
            yield self._buffer_widget
            yield self._output_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    async def on_mount(self) -> None:
        self._ui_thread = threading.get_ident()
        self.session = create_default_session(self._settings)
        hooks = TextualUIHooks(
            update_buffer=self._ui(self._update_buffer),
            update_status=self._ui(self._update_status),
            update_output=self._ui(self._update_output),
            log=self._log_line,
        )
        self.adapter = TextualEditorAdapter(self.session, hooks)

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter or event.key in APP_KEYS:
            return
        result = self.adapter.handle_textual_key(event.key, text=event.character)
        if result.consumed:
            event.stop()

    def action_run(self) -> None:
        if self.adapter is None:
            return
        self.run_worker(self.adapter.run, thread=True, exclusive=True, group="sandbox")

    async def on_paste(self, event: events.Paste) -> None:
        if self.adapter is not None:
            self.adapter.paste(event.text)
            event.stop()

    def action_cancel_run(self) -> None:
        if self.session is not None and self.session.cancel_run():
            self._update_status("Cancelling...")

    def action_toggle_theme(self) -> None:
        if self.session is None:
            return
        self.session.set_theme("light" if self.session.theme.name == "dark" else "dark")
        mirror = self.session.buffer.mirror(
            attributes={"language": self.session.profile.name}
        )
        self._update_buffer(mirror)

    def action_next_template(self) -> None:
        if self.adapter is None or self.session is None:
            return
        names = self.session.templates.names()
        self._template_index = (self._template_index + 1) % len(names)
        self.adapter.load_template(names[self._template_index])

    def _ui(self, callback: Callable[..., None]) -> Callable[..., None]:
        """Run ``callback`` on the UI thread, hopping over from sandbox workers."""

        def dispatch(*args: Any) -> None:
            if threading.get_ident() == self._ui_thread:
                callback(*args)
            else:
                self.call_from_thread(callback, *args)

        return dispatch

    def _update_buffer(self, mirror: BufferMirror) -> None:
        if self._buffer_widget and self.session:
            self._buffer_widget.update(render_buffer(self.session, mirror))
        self._update_status(
            f"{mirror.line_count} lines | {len(mirror.text)} chars"
            f" | {mirror.attributes.get('language', '')}"
        )

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _update_output(self, report: ExecutionReport) -> None:
        self._state.output = report
        if self._output_widget:
            self._output_widget.update(render_report(report))
        self._update_status(summarize(report))

    def _log_line(self, line: str) -> None:
        self._logger.debug(line)


def _env_int(key: str, fallback: int) -> int:
    value = os.environ.get(key)
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the live code editor demo.")
    parser.add_argument(
        "--timeout-ms",
        type=int,
        default=_env_int("LIVECODE_TIMEOUT_MS", 5000),
        help="Wall-clock budget for each run in milliseconds (default: 5000)",
    )
    parser.add_argument(
        "--language",
        default=os.environ.get("LIVECODE_LANGUAGE", "python"),
        help="Highlighting profile: python or javascript (default: python)",
    )
    parser.add_argument(
        "--theme",
        default=os.environ.get("LIVECODE_THEME", "dark"),
        help="Color theme: dark or light (default: dark)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log to the console (the default keeps the terminal clean)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    telemetry.configure(preset="development" if args.verbose else "quiet")
    settings = EngineSettings.from_env(
        timeout_ms=args.timeout_ms, language=args.language, theme=args.theme
    )
    app = LiveCodeApp(settings=settings)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
