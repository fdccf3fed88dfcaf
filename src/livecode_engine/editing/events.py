"""Key events, action results and the session event bus."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple


@dataclass(slots=True)
class KeyInput:
    """Normalized key event handed to the session."""

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None

    @property
    def token(self) -> str:
        if self.modifiers:
            modifier = "+".join(sorted({m.lower() for m in self.modifiers}))
            return f"{modifier}+{self.key}"
        return self.key


@dataclass(slots=True)
class EditResult:
    """Outcome of dispatching a key or invoking an action."""

    consumed: bool
    status: str = "ok"
    message: Optional[str] = None
    changed: bool = False


class EventBus:
    """Minimal event bus letting the session notify host adapters."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


__all__ = ["KeyInput", "EditResult", "EventBus"]
