"""Editor session tying the engine components together."""

from .editor_session import EditorSession

__all__ = ["EditorSession"]
