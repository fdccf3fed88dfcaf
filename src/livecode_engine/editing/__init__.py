"""Editing state machine: pair table, pure operations and key events."""

from .events import EditResult, EventBus, KeyInput
from .operations import (
    INDENT_UNIT,
    backspace,
    indent,
    insert_text,
    outdent,
    select_all,
    smart_newline,
    toggle_comment,
    type_character,
)
from .pairs import PAIRS, QUOTES, is_empty_pair

__all__ = [
    "KeyInput",
    "EditResult",
    "EventBus",
    "INDENT_UNIT",
    "indent",
    "outdent",
    "smart_newline",
    "type_character",
    "backspace",
    "toggle_comment",
    "insert_text",
    "select_all",
    "PAIRS",
    "QUOTES",
    "is_empty_pair",
]
