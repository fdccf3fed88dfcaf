"""Best-effort conversion of program values into display text."""

from __future__ import annotations

import json
from typing import Any, List, Mapping, Sequence, Tuple

STRUCTURED_TYPES = (dict, list, tuple, set, frozenset)


def _json_default(value: Any) -> Any:
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=repr)
    raise TypeError(f"{type(value).__name__} is not JSON serializable")


def _plain(value: Any) -> str:
    try:
        return str(value)
    except Exception:  # broken __str__ in user code must not abort the run
        return f"<unprintable {type(value).__name__}>"


def serialize_value(value: Any) -> str:
    """Primitives via ``str``; containers as indented JSON, else ``str`` fallback."""

    if isinstance(value, str):
        return value
    if isinstance(value, STRUCTURED_TYPES):
        try:
            return json.dumps(value, indent=2, default=_json_default, ensure_ascii=False)
        except (TypeError, ValueError, RecursionError):
            return _plain(value)
    return _plain(value)


def serialize_args(args: Sequence[Any], sep: str = " ") -> str:
    return sep.join(serialize_value(arg) for arg in args)


def render_table(data: Any) -> str:
    """Render rows the way ``console.table`` lays them out, one text grid."""

    if isinstance(data, Mapping):
        items: List[Tuple[Any, Any]] = list(data.items())
    elif isinstance(data, (list, tuple)):
        items = list(enumerate(data))
    else:
        return serialize_value(data)

    columns: List[str] = []
    rows: List[Tuple[str, dict]] = []
    for key, row in items:
        if isinstance(row, Mapping):
            cells = {str(name): serialize_value(cell) for name, cell in row.items()}
        elif isinstance(row, (list, tuple)):
            cells = {str(index): serialize_value(cell) for index, cell in enumerate(row)}
        else:
            cells = {"Values": serialize_value(row)}
        for name in cells:
            if name not in columns:
                columns.append(name)
        rows.append((str(key), cells))

    headers = ["(index)"] + columns
    matrix = [[key] + [cells.get(name, "") for name in columns] for key, cells in rows]
    widths = [
        max([len(header)] + [len(row[index]) for row in matrix])
        for index, header in enumerate(headers)
    ]

    def _format(row: Sequence[str]) -> str:
        return " | ".join(cell.ljust(width) for cell, width in zip(row, widths)).rstrip()

    lines = [_format(headers), "-+-".join("-" * width for width in widths)]
    lines.extend(_format(row) for row in matrix)
    return "\n".join(lines)


__all__ = ["serialize_value", "serialize_args", "render_table"]
