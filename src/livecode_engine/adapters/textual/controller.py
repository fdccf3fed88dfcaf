"""Minimal Textual adapter that wires EditorSession events into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional, Tuple

from livecode_engine.buffer import BufferMirror
from livecode_engine.editing import EditResult, KeyInput
from livecode_engine.sandbox import ExecutionReport
from livecode_engine.session import EditorSession

TEXTUAL_KEY_NAMES: Dict[str, str] = {
    "tab": "TAB",
    "enter": "ENTER",
    "return": "ENTER",
    "backspace": "BACKSPACE",
    "escape": "ESC",
    "slash": "/",
    "space": " ",
}

SESSION_EVENTS = (
    "buffer.changed",
    "run.started",
    "run.finished",
    "run.rejected",
    "template.loaded",
)


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[BufferMirror], None]
    update_status: Callable[[str], None] = _noop
    update_output: Callable[[ExecutionReport], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


def normalize_textual_key(
    key: str,
    character: Optional[str] = None,
    modifiers: Iterable[str] = (),
) -> KeyInput:
    """Translate a Textual key name (``shift+tab``, ``ctrl+z``) into a KeyInput."""

    if key == "backtab":
        key = "shift+tab"
    parts = key.split("+")
    name = parts[-1] or "+"
    mods = {part.lower() for part in parts[:-1] if part}
    mods.update(str(mod).lower() for mod in modifiers)

    text = character if character and len(character) == 1 and character.isprintable() else None
    if "ctrl" in mods and name == "underscore":
        # Terminals deliver ctrl+/ as ctrl+_.
        name = "slash"
    if name in TEXTUAL_KEY_NAMES:
        normalized = TEXTUAL_KEY_NAMES[name]
    elif len(name) == 1:
        normalized = name
    elif text is not None:
        normalized = text
    else:
        normalized = name.upper()

    if text is not None and "shift" in mods and len(normalized) == 1:
        # Shift is already folded into the character.
        mods.discard("shift")
    if normalized in {"TAB", "ENTER", "BACKSPACE", "ESC"}:
        text = None
    return KeyInput(key=normalized, modifiers=tuple(sorted(mods)), text=text)


class TextualEditorAdapter:
    """Bridges EditorSession + bus events to a Textual-friendly surface."""

    def __init__(self, session: EditorSession, hooks: TextualUIHooks) -> None:
        self.session = session
        self.hooks = hooks
        self._subscribe_events()
        self._refresh_buffer()

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> EditResult:
        """Translate a Textual key event into a KeyInput and dispatch it."""

        key_input = normalize_textual_key(key, text, modifiers)
        self._log_state("key ->", key=key_input.token, text=key_input.text)
        result = self.session.handle_key(key_input)
        self._after_result(result)
        self._log_state(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            message=result.message,
        )
        return result

    def run(self) -> Optional[ExecutionReport]:
        """Run the buffer; safe to call from a worker thread."""

        return self.session.run()

    def paste(self, text: str) -> EditResult:
        result = self.session.insert_text(text)
        self._after_result(result)
        return result

    def load_template(self, name: str) -> EditResult:
        result = self.session.load_template(name)
        self._after_result(result)
        return result

    def _after_result(self, result: EditResult) -> None:
        if result.status != "ok":
            self.hooks.update_status(result.message or result.status)

    def _subscribe_events(self) -> None:
        bus = self.session.bus
        for event in SESSION_EVENTS:
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        if name != "buffer.changed":
            self._log_state("event ->", event=name)
        self.hooks.handle_event(name, payload)
        if name == "buffer.changed":
            self._refresh_buffer()
        elif name == "run.started":
            self.hooks.update_status("Running...")
        elif name == "run.rejected":
            self.hooks.update_status("A run is already in progress")
        elif name == "run.finished" and isinstance(payload, ExecutionReport):
            self.hooks.update_output(payload)
        elif name == "template.loaded" and isinstance(payload, dict):
            self.hooks.update_status(f"Loaded template '{payload.get('name')}'")

    def _refresh_buffer(self) -> None:
        mirror = self.session.buffer.mirror(
            attributes={"language": self.session.profile.name}
        )
        self.hooks.update_buffer(mirror)

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        view = self.session.view
        selection: Tuple[int, int] = view.selection
        return {
            "selection": selection,
            "running": self.session.running,
            "buffer": self.session.buffer.name,
            "buffer_version": self.session.buffer.version,
        }


__all__ = [
    "TextualEditorAdapter",
    "TextualUIHooks",
    "normalize_textual_key",
]
