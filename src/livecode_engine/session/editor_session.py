"""Editor session coordinating buffer, keymaps, highlighting and runs."""

from __future__ import annotations

import threading
from typing import Dict, List, Optional, TextIO, Tuple

from livecode_engine.buffer import BufferDelta, BufferMirror, BufferView, EditorBuffer
from livecode_engine.editing import EditResult, EventBus, KeyInput
from livecode_engine.editing import operations as ops
from livecode_engine.keymaps import KeymapRegistry, load_default_keymaps
from livecode_engine.lexer import (
    LanguageProfile,
    StyledSpan,
    Theme,
    Token,
    get_profile,
    get_theme,
    highlight,
    tokenize,
    tokenize_lines,
)
from livecode_engine.runtime import telemetry
from livecode_engine.runtime.settings import EngineSettings
from livecode_engine.sandbox import ExecutionReport, Sandbox
from livecode_engine.templates import TemplateLibrary

TEXT_BLOCKING_MODIFIERS = frozenset({"ctrl", "meta", "alt"})


class EditorSession:
    """Owns one buffer and dispatches key events to keymap actions.

    Keys without a binding that carry a single printable character fall through
    to :func:`~livecode_engine.editing.operations.type_character`, which handles
    auto-pairing and closer skipping.
    """

    def __init__(
        self,
        text: str = "",
        *,
        settings: Optional[EngineSettings] = None,
        buffer: Optional[EditorBuffer] = None,
        bus: Optional[EventBus] = None,
        keymap_registry: Optional[KeymapRegistry] = None,
        load_defaults: bool = True,
        templates: Optional[TemplateLibrary] = None,
        sandbox: Optional[Sandbox] = None,
        passthrough: Optional[TextIO] = None,
    ) -> None:
        self.settings = settings or EngineSettings()
        self.profile: LanguageProfile = get_profile(self.settings.language)
        self.theme: Theme = get_theme(self.settings.theme)
        self.buffer = buffer or EditorBuffer(text)
        self.bus = bus or EventBus()
        self.templates = templates or TemplateLibrary()
        self.sandbox = sandbox or Sandbox(
            settings=self.settings, passthrough=passthrough
        )
        self.keymap_registry = keymap_registry or KeymapRegistry(
            logger_name=telemetry.KEYMAPS_LOGGER
        )
        if load_defaults and keymap_registry is None:
            load_default_keymaps(self.keymap_registry)
        self.flags: Dict[str, bool] = {"running": False}
        self._run_gate = threading.Lock()
        self._token_cache: Optional[Tuple[int, str, List[Token]]] = None
        self._last_report: Optional[ExecutionReport] = None

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------
    @property
    def view(self) -> BufferView:
        return self.buffer.view

    @property
    def text(self) -> str:
        return self.buffer.text

    @property
    def running(self) -> bool:
        return self.flags["running"]

    @property
    def last_report(self) -> Optional[ExecutionReport]:
        return self._last_report

    def tokens(self) -> List[Token]:
        """Tokens for the current text, recomputed once per buffer version."""

        key = (self.buffer.version, self.profile.name)
        cache = self._token_cache
        if cache is None or (cache[0], cache[1]) != key:
            cache = (key[0], key[1], tokenize(self.text, self.profile))
            self._token_cache = cache
        return list(cache[2])

    def styled_spans(self) -> List[StyledSpan]:
        return highlight(self.tokens(), self.theme)

    def styled_lines(self) -> List[List[StyledSpan]]:
        return [
            highlight(line, self.theme)
            for line in tokenize_lines(self.text, self.profile)
        ]

    def export_text(self) -> str:
        return self.text

    def set_language(self, name: str) -> None:
        self.profile = get_profile(name)
        self._token_cache = None

    def set_theme(self, name: str) -> None:
        self.theme = get_theme(name)

    # ------------------------------------------------------------------
    # Key dispatch
    # ------------------------------------------------------------------
    def handle_key(self, key: KeyInput) -> EditResult:
        with telemetry.span(
            name="session::key",
            component=True,
            metadata={"key": key.token},
        ) as handle:
            match = self.keymap_registry.resolve(key.token, self.flags)
            if match is not None:
                handle.add_metadata("action", match.action.id)
                result = match.action(self, match)
                if isinstance(result, EditResult):
                    return result
                return EditResult(consumed=True, message=match.action.id)

            if self._is_text_input(key):
                return self.type_character(key.text or "")
            return EditResult(consumed=False, status="unbound")

    @staticmethod
    def _is_text_input(key: KeyInput) -> bool:
        if not key.text or len(key.text) != 1 or not key.text.isprintable():
            return False
        modifiers = {modifier.lower() for modifier in key.modifiers}
        return not modifiers & TEXT_BLOCKING_MODIFIERS

    # ------------------------------------------------------------------
    # Edits
    # ------------------------------------------------------------------
    def edit(self, view: BufferView, *, label: str) -> EditResult:
        """Adopt ``view`` and notify subscribers."""

        delta = self.buffer.apply(view, label=label)
        return self._publish(delta)

    def type_character(self, char: str) -> EditResult:
        view = ops.type_character(
            self.view, char, word_extras=self.profile.identifier_extras
        )
        return self.edit(view, label="type")

    def insert_text(self, text: str) -> EditResult:
        return self.edit(ops.insert_text(self.view, text), label="insert")

    def set_text(self, text: str, *, label: str = "set_text") -> EditResult:
        return self._publish(self.buffer.set_text(text, label=label))

    def set_selection(self, start: int, end: Optional[int] = None) -> EditResult:
        return self._publish(self.buffer.set_selection(start, end))

    def push_host_edit(self, mirror: BufferMirror) -> EditResult:
        """Adopt text and selection edited by the host widget; offsets are strict."""

        return self._publish(self.buffer.push_host_edit(mirror))

    def select_all(self) -> EditResult:
        return self.edit(ops.select_all(self.view), label="select_all")

    def undo(self) -> EditResult:
        delta = self.buffer.undo()
        if delta is None:
            return EditResult(consumed=True, status="noop", message="nothing to undo")
        return self._publish(delta)

    def redo(self) -> EditResult:
        delta = self.buffer.redo()
        if delta is None:
            return EditResult(consumed=True, status="noop", message="nothing to redo")
        return self._publish(delta)

    def load_template(self, name: str) -> EditResult:
        source = self.templates.source(name)
        result = self.set_text(source, label=f"template:{name}")
        self.bus.emit("template.loaded", {"name": name})
        telemetry.record_event(
            "template.loaded", logger_name=telemetry.SESSION_LOGGER, template=name
        )
        return result

    def _publish(self, delta: BufferDelta) -> EditResult:
        self.bus.emit("buffer.changed", delta)
        return EditResult(consumed=True, message=delta.label, changed=delta.changed)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------
    def run(self) -> Optional[ExecutionReport]:
        """Run the buffer; ``None`` when a run is already in flight."""

        if not self._run_gate.acquire(blocking=False):
            self.bus.emit("run.rejected", {"reason": "running"})
            telemetry.record_event(
                "run.rejected",
                level="warning",
                logger_name=telemetry.SESSION_LOGGER,
                reason="running",
            )
            return None

        try:
            self.flags["running"] = True
            source = self.text
            self.bus.emit("run.started", {"chars": len(source)})
            report = self.sandbox.run(source)
        finally:
            self.flags["running"] = False
            self._run_gate.release()
        self._last_report = report
        self.bus.emit("run.finished", report)
        return report

    def cancel_run(self) -> bool:
        return self.sandbox.cancel()


__all__ = ["EditorSession"]
