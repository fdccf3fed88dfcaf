"""Built-in keymaps for the live editor."""

from __future__ import annotations

from typing import Iterable, Sequence

from livecode_engine.actions import editing as editing_actions
from livecode_engine.actions import execution as execution_actions

from .models import ActionRef, Binding, KeyStroke
from .registry import KeymapRegistry

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef(
        id="edit.indent",
        handler=editing_actions.indent_action,
        description="Indent the caret or covered lines",
    ),
    ActionRef(
        id="edit.outdent",
        handler=editing_actions.outdent_action,
        description="Outdent the current or covered lines",
    ),
    ActionRef(
        id="edit.newline",
        handler=editing_actions.newline_action,
        description="Insert a newline keeping indentation",
    ),
    ActionRef(
        id="edit.backspace",
        handler=editing_actions.backspace_action,
        description="Delete backwards, removing empty pairs together",
    ),
    ActionRef(
        id="edit.toggle_comment",
        handler=editing_actions.toggle_comment_action,
        description="Comment or uncomment covered lines",
    ),
    ActionRef(
        id="edit.select_all",
        handler=editing_actions.select_all_action,
        description="Select the whole buffer",
    ),
    ActionRef(
        id="history.undo",
        handler=editing_actions.undo_action,
        description="Undo the last edit",
    ),
    ActionRef(
        id="history.redo",
        handler=editing_actions.redo_action,
        description="Redo the last undone edit",
    ),
    ActionRef(
        id="run.execute",
        handler=execution_actions.run_action,
        description="Run the buffer in the sandbox",
    ),
)

DEFAULT_BINDINGS: tuple[Binding, ...] = (
    Binding(
        id="edit.tab",
        stroke=KeyStroke("TAB"),
        action_id="edit.indent",
        description="Indent",
    ),
    Binding(
        id="edit.shift_tab",
        stroke=KeyStroke("TAB", ("shift",)),
        action_id="edit.outdent",
        description="Outdent",
    ),
    Binding(
        id="edit.enter",
        stroke=KeyStroke("ENTER"),
        action_id="edit.newline",
        description="Smart newline",
    ),
    Binding(
        id="edit.backspace",
        stroke=KeyStroke("BACKSPACE"),
        action_id="edit.backspace",
        description="Paired backspace",
    ),
    Binding(
        id="edit.comment_ctrl",
        stroke=KeyStroke("/", ("ctrl",)),
        action_id="edit.toggle_comment",
        description="Toggle comment",
    ),
    Binding(
        id="edit.comment_meta",
        stroke=KeyStroke("/", ("meta",)),
        action_id="edit.toggle_comment",
        description="Toggle comment",
    ),
    Binding(
        id="edit.select_all",
        stroke=KeyStroke("a", ("ctrl",)),
        action_id="edit.select_all",
        description="Select all",
    ),
    Binding(
        id="history.undo",
        stroke=KeyStroke("z", ("ctrl",)),
        action_id="history.undo",
        description="Undo",
    ),
    Binding(
        id="history.redo",
        stroke=KeyStroke("y", ("ctrl",)),
        action_id="history.redo",
        description="Redo",
    ),
    Binding(
        id="history.redo_shift",
        stroke=KeyStroke("z", ("ctrl", "shift")),
        action_id="history.redo",
        description="Redo",
    ),
    Binding(
        id="run.ctrl_enter",
        stroke=KeyStroke("ENTER", ("ctrl",)),
        action_id="run.execute",
        description="Run code",
        when=("!running",),
    ),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    include_bindings: Sequence[str] | None = None,
    exclude_bindings: Sequence[str] | None = None,
) -> None:
    """Register built-in actions and bindings."""

    allowed_bindings = _build_filters(include_bindings, exclude_bindings)

    for action in DEFAULT_ACTIONS:
        registry.register_action(action, replace=replace)

    for binding in DEFAULT_BINDINGS:
        if not _selected(binding.id, allowed_bindings):
            continue
        registry.register_binding(binding, replace=replace)

    if extra_bindings:
        for binding in extra_bindings:
            registry.register_binding(binding, replace=replace)


def _build_filters(
    include: Sequence[str] | None, exclude: Sequence[str] | None
) -> tuple[set[str] | None, set[str]]:
    include_set = set(include) if include else None
    exclude_set = set(exclude or ())
    return include_set, exclude_set


def _selected(item_id: str, filters: tuple[set[str] | None, set[str]]) -> bool:
    include, exclude = filters
    if include is not None and item_id not in include:
        return False
    if item_id in exclude:
        return False
    return True


__all__ = ["load_default_keymaps", "DEFAULT_ACTIONS", "DEFAULT_BINDINGS"]
