"""RestrictedPython policy, guards and builtins for submitted programs.

Programs are compiled by :func:`compile_program` through RestrictedPython's
``RestrictingNodeTransformer``: names and attributes starting with ``_`` are
rejected, attribute reads and writes go through the ``_getattr_``/``_write_``
guards, and ``print`` is routed to the run's console via ``_print_``.
Host modules, types and functions are read-only from inside the sandbox, and only a
small list of pure standard-library modules can be imported.
"""

from __future__ import annotations

import ast
import builtins
import operator
from dataclasses import dataclass
from types import BuiltinFunctionType, CodeType, FunctionType, ModuleType
from typing import Any, Callable, Dict, Optional, Tuple

from RestrictedPython import compile_restricted_exec, safe_builtins
from RestrictedPython.Eval import default_guarded_getitem, default_guarded_getiter
from RestrictedPython.Guards import (
    guarded_iter_unpack_sequence,
    guarded_unpack_sequence,
    safer_getattr,
)
from RestrictedPython.transformer import RestrictingNodeTransformer

SANDBOX_MODULE = "sandbox"
RESULT_NAME = "_"

ALLOWED_IMPORTS = frozenset(
    {
        "bisect",
        "cmath",
        "collections",
        "datetime",
        "decimal",
        "fractions",
        "functools",
        "heapq",
        "itertools",
        "json",
        "math",
        "operator",
        "random",
        "re",
        "statistics",
        "string",
        "textwrap",
        "typing",
    }
)

_EXTRA_BUILTINS: Dict[str, Any] = {
    name: getattr(builtins, name)
    for name in (
        "all",
        "any",
        "dict",
        "enumerate",
        "filter",
        "format",
        "frozenset",
        "hasattr",
        "iter",
        "list",
        "map",
        "max",
        "min",
        "next",
        "object",
        "reversed",
        "set",
        "sum",
        "super",
        "type",
        "classmethod",
        "staticmethod",
        "property",
    )
}

_INPLACE_OPERATORS: Dict[str, Callable[[Any, Any], Any]] = {
    "+=": operator.iadd,
    "-=": operator.isub,
    "*=": operator.imul,
    "/=": operator.itruediv,
    "//=": operator.ifloordiv,
    "%=": operator.imod,
    "**=": operator.ipow,
    "@=": operator.imatmul,
    "<<=": operator.ilshift,
    ">>=": operator.irshift,
    "&=": operator.iand,
    "|=": operator.ior,
    "^=": operator.ixor,
}


class RestrictedCodeError(SyntaxError):
    """Source parses but uses a construct the sandbox does not allow."""


@dataclass(frozen=True, slots=True)
class PolicyViolation:
    line: Optional[int]
    column: Optional[int]
    message: str


class SandboxPolicy(RestrictingNodeTransformer):
    """Records each violation with its node position instead of a text line."""

    def error(self, node: ast.AST, info: str) -> None:
        line = getattr(node, "lineno", None)
        offset = getattr(node, "col_offset", None)
        column = offset + 1 if offset is not None else None
        self.errors.append(PolicyViolation(line, column, info))


def compile_program(source: str, *, filename: str) -> Tuple[CodeType, bool]:
    """Compile ``source`` under the sandbox policy.

    A trailing expression statement is rebound to ``RESULT_NAME`` so the run
    can report its value. Returns the code object and whether it has a result.
    Plain syntax errors raise ``SyntaxError``; policy violations raise
    :class:`RestrictedCodeError` positioned at the first offending node.
    """

    tree = ast.parse(source, filename=filename, mode="exec")
    has_result = bool(tree.body) and isinstance(tree.body[-1], ast.Expr)
    if has_result:
        tail = tree.body[-1]
        target = ast.Name(id=RESULT_NAME, ctx=ast.Store())
        tree.body[-1] = ast.copy_location(
            ast.Assign(targets=[ast.copy_location(target, tail)], value=tail.value),
            tail,
        )
        ast.fix_missing_locations(tree)

    result = compile_restricted_exec(tree, filename=filename, policy=SandboxPolicy)
    if result.errors:
        raise _violation_error(result.errors[0], source, filename)
    return result.code, has_result


def _violation_error(error: Any, source: str, filename: str) -> RestrictedCodeError:
    if not isinstance(error, PolicyViolation):
        return RestrictedCodeError(str(error))
    text = None
    lines = source.split("\n")
    if error.line is not None and 1 <= error.line <= len(lines):
        text = lines[error.line - 1]
    return RestrictedCodeError(error.message, (filename, error.line, error.column, text))


def guarded_import(
    name: str,
    globals: Optional[Dict[str, Any]] = None,
    locals: Optional[Dict[str, Any]] = None,
    fromlist: Tuple[str, ...] = (),
    level: int = 0,
) -> ModuleType:
    root = name.partition(".")[0]
    if level != 0 or root not in ALLOWED_IMPORTS:
        raise ImportError(f"Import of '{name}' is not allowed in the sandbox")
    return builtins.__import__(name, globals, locals, fromlist, level)


def guarded_write(obj: Any) -> Any:
    """``_write_`` guard: programs may mutate their own objects, never host modules or types."""

    if isinstance(obj, ModuleType):
        raise TypeError(f"Module '{obj.__name__}' is read-only in the sandbox")
    if isinstance(obj, (type, FunctionType, BuiltinFunctionType)) and (
        getattr(obj, "__module__", None) != SANDBOX_MODULE
    ):
        raise TypeError(f"'{obj.__name__}' is read-only in the sandbox")
    return obj


def inplace_var(op: str, target: Any, value: Any) -> Any:
    try:
        return _INPLACE_OPERATORS[op](target, value)
    except KeyError:
        raise SyntaxError(f"Unsupported in-place operator '{op}'") from None


def apply_call(func: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    return func(*args, **kwargs)


class PrintCollector:
    """``_print_`` target: every ``print`` call inside the program lands here."""

    def __init__(self, emit: Callable[..., None]) -> None:
        self._emit = emit

    def _call_print(self, *args: Any, **kwargs: Any) -> None:
        self._emit(*args, **kwargs)


def build_builtins() -> Dict[str, Any]:
    table = dict(safe_builtins)
    table.update(_EXTRA_BUILTINS)
    table["__import__"] = guarded_import
    table["getattr"] = safer_getattr
    return table


def restricted_globals(print_target: Callable[..., None]) -> Dict[str, Any]:
    """Globals every restricted program needs: builtins, guards and the print hook."""

    collector = PrintCollector(print_target)
    return {
        "__name__": SANDBOX_MODULE,
        "__metaclass__": type,
        "__builtins__": build_builtins(),
        "_print_": lambda _getattr=None: collector,
        "_getattr_": safer_getattr,
        "_getitem_": default_guarded_getitem,
        "_getiter_": default_guarded_getiter,
        "_iter_unpack_sequence_": guarded_iter_unpack_sequence,
        "_unpack_sequence_": guarded_unpack_sequence,
        "_write_": guarded_write,
        "_inplacevar_": inplace_var,
        "_apply_": apply_call,
    }


__all__ = [
    "ALLOWED_IMPORTS",
    "RESULT_NAME",
    "SANDBOX_MODULE",
    "PolicyViolation",
    "RestrictedCodeError",
    "SandboxPolicy",
    "build_builtins",
    "compile_program",
    "guarded_import",
    "guarded_write",
    "restricted_globals",
]
