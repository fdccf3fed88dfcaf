"""Action handlers invoked through keymap bindings."""

from .editing import (
    backspace_action,
    indent_action,
    newline_action,
    outdent_action,
    redo_action,
    select_all_action,
    toggle_comment_action,
    undo_action,
)
from .execution import run_action

__all__ = [
    "indent_action",
    "outdent_action",
    "newline_action",
    "backspace_action",
    "toggle_comment_action",
    "select_all_action",
    "undo_action",
    "redo_action",
    "run_action",
]
