import math

import pytest

from livecode_engine.sandbox import RestrictedCodeError, compile_program
from livecode_engine.sandbox.policy import (
    SANDBOX_MODULE,
    build_builtins,
    guarded_import,
    guarded_write,
)


def test_compile_program_reports_trailing_expression() -> None:
    _, has_result = compile_program("x = 1\nx + 1", filename="<sandbox>")
    _, no_result = compile_program("x = 1", filename="<sandbox>")

    assert has_result is True
    assert no_result is False


def test_policy_violation_carries_node_position() -> None:
    with pytest.raises(RestrictedCodeError) as info:
        compile_program("ok = 1\nvalue = ok.__class__", filename="<sandbox>")

    error = info.value
    assert error.filename == "<sandbox>"
    assert error.lineno == 2
    assert error.text == "value = ok.__class__"
    assert "__class__" in error.msg


def test_plain_syntax_errors_are_not_policy_errors() -> None:
    with pytest.raises(SyntaxError) as info:
        compile_program("x = (", filename="<sandbox>")

    assert not isinstance(info.value, RestrictedCodeError)


def test_guarded_import_allows_only_listed_modules() -> None:
    assert guarded_import("math") is math
    for name in ("builtins", "sys", "os.path", "importlib"):
        with pytest.raises(ImportError):
            guarded_import(name)


def test_guarded_write_protects_host_objects_only() -> None:
    sandbox_type = type("Box", (), {"__module__": SANDBOX_MODULE})
    box = sandbox_type()

    assert guarded_write(box) is box
    assert guarded_write(sandbox_type) is sandbox_type
    assert guarded_write([]) == []
    for host_object in (math, int, len, guarded_write):
        with pytest.raises(TypeError):
            guarded_write(host_object)


def test_builtins_table_is_fresh_and_restricted() -> None:
    first = build_builtins()
    second = build_builtins()

    assert first is not second
    assert first["__import__"] is guarded_import
    for name in ("open", "exec", "eval", "compile", "input", "breakpoint"):
        assert name not in first
