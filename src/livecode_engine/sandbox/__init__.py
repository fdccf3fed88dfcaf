"""Isolated execution with captured output and line-mapped diagnostics."""

from .console import Console, ConsoleSink
from .diagnostics import (
    SANDBOX_FILENAME,
    build_diagnostic,
    describe_exception,
    locate_error,
)
from .executor import (
    CANCELLED_MESSAGE,
    NO_OUTPUT_MESSAGE,
    ExecutionCancelled,
    Sandbox,
    build_namespace,
    run_source,
)
from .policy import ALLOWED_IMPORTS, RestrictedCodeError, compile_program
from .report import EntryType, ExecutionReport, OutputEntry, RunStatus, SourceLocation
from .serialize import render_table, serialize_args, serialize_value

__all__ = [
    "Sandbox",
    "ExecutionCancelled",
    "NO_OUTPUT_MESSAGE",
    "CANCELLED_MESSAGE",
    "build_namespace",
    "run_source",
    "ALLOWED_IMPORTS",
    "RestrictedCodeError",
    "compile_program",
    "Console",
    "ConsoleSink",
    "EntryType",
    "RunStatus",
    "OutputEntry",
    "SourceLocation",
    "ExecutionReport",
    "SANDBOX_FILENAME",
    "locate_error",
    "describe_exception",
    "build_diagnostic",
    "serialize_value",
    "serialize_args",
    "render_table",
]
