"""Run submitted Python source in isolation and report what happened."""

from __future__ import annotations

import sys
import threading
import time
from dataclasses import dataclass, field
from types import FrameType
from typing import Any, Dict, List, Mapping, Optional, TextIO

from livecode_engine.runtime import telemetry
from livecode_engine.runtime.settings import EngineSettings

from .console import Console, ConsoleSink
from .diagnostics import SANDBOX_FILENAME, build_diagnostic, locate_error
from .policy import RESULT_NAME, compile_program, restricted_globals
from .report import EntryType, ExecutionReport, OutputEntry, RunStatus
from .serialize import serialize_value

NO_OUTPUT_MESSAGE = "Code executed successfully (no output)"
CANCEL_GRACE_SECONDS = 0.25
CANCELLED_MESSAGE = "ExecutionCancelled: Execution cancelled"

_NO_RESULT = object()


class ExecutionCancelled(BaseException):
    """Unwinds a program that overran its budget or was cancelled.

    Derives from ``BaseException`` so a submitted ``except Exception`` block
    cannot swallow it.
    """


@dataclass(slots=True)
class _Outcome:
    done: threading.Event = field(default_factory=threading.Event)
    value: Any = _NO_RESULT
    error: Optional[BaseException] = None
    cancelled: bool = False


class _DeadlineTracer:
    """Per-thread trace hook checking the deadline on every sandbox line."""

    def __init__(self, cancel: threading.Event, deadline: float, filename: str) -> None:
        self.cancel = cancel
        self.deadline = deadline
        self.filename = filename

    def __call__(self, frame: FrameType, event: str, arg: Any) -> Any:
        self.check()
        if frame.f_code.co_filename == self.filename:
            return self.trace_line
        return None

    def trace_line(self, frame: FrameType, event: str, arg: Any) -> Any:
        if event == "line":
            self.check()
        return self.trace_line

    def check(self) -> None:
        if self.cancel.is_set() or time.monotonic() >= self.deadline:
            self.cancel.set()
            raise ExecutionCancelled()


def build_namespace(
    console: Console, extra_globals: Optional[Mapping[str, object]] = None
) -> Dict[str, object]:
    """Fresh restricted globals for one run, with ``console`` and ``print`` bound to it."""

    namespace: Dict[str, object] = restricted_globals(console.print)
    namespace["console"] = console
    if extra_globals:
        namespace.update(extra_globals)
    return namespace


def run_source(
    source: str, namespace: Dict[str, object], *, filename: str = SANDBOX_FILENAME
) -> Any:
    """Execute ``source``; a trailing expression statement becomes the result."""

    code, has_result = compile_program(source, filename=filename)
    exec(code, namespace)
    if not has_result:
        return _NO_RESULT
    return namespace.pop(RESULT_NAME, None)


class Sandbox:
    """Executes one source string per :meth:`run` on a bounded worker thread."""

    def __init__(
        self,
        *,
        settings: Optional[EngineSettings] = None,
        passthrough: Optional[TextIO] = None,
        extra_globals: Optional[Mapping[str, object]] = None,
        filename: str = SANDBOX_FILENAME,
    ) -> None:
        self.settings = settings or EngineSettings()
        self.passthrough = passthrough
        self.extra_globals = dict(extra_globals or {})
        self.filename = filename
        self.logger = telemetry.get_logger(telemetry.SANDBOX_LOGGER)
        self._cancel: Optional[threading.Event] = None
        self._cancel_requested = False

    def cancel(self) -> bool:
        """Ask the in-flight program to stop at its next traced line."""

        if self._cancel is None or self._cancel.is_set():
            return False
        self._cancel_requested = True
        self._cancel.set()
        return True

    def run(self, source: str, *, timeout_ms: Optional[int] = None) -> ExecutionReport:
        budget_ms = self.settings.timeout_ms if timeout_ms is None else timeout_ms
        if budget_ms <= 0:
            raise ValueError(f"timeout_ms must be positive, got {budget_ms}")
        sink = ConsoleSink(
            max_entries=self.settings.max_output_entries, passthrough=self.passthrough
        )
        cancel = threading.Event()
        self._cancel_requested = False
        self._cancel = cancel
        outcome = _Outcome()

        with telemetry.span(
            "sandbox::run",
            logger_name=telemetry.SANDBOX_LOGGER,
            component="sandbox",
            metadata={"chars": len(source), "timeout_ms": budget_ms},
        ) as handle:
            started = time.perf_counter()
            deadline = time.monotonic() + budget_ms / 1000.0
            worker = threading.Thread(
                target=self._execute,
                args=(source, sink, cancel, deadline, outcome),
                name="livecode-sandbox",
                daemon=True,
            )
            worker.start()
            finished = outcome.done.wait(budget_ms / 1000.0)
            if not finished:
                cancel.set()
                outcome.done.wait(CANCEL_GRACE_SECONDS)
            entries = list(sink.close())
            duration_ms = (time.perf_counter() - started) * 1000.0

            if not finished or outcome.cancelled:
                report = self._timeout_report(entries, duration_ms, budget_ms, worker)
            elif outcome.error is not None:
                report = self._error_report(source, entries, duration_ms, outcome.error)
            else:
                report = self._success_report(entries, duration_ms, outcome.value)
            handle.add_metadata("status", report.status.value)

        self._cancel = None
        telemetry.record_event(
            "sandbox.run",
            logger_name=telemetry.SANDBOX_LOGGER,
            status=report.status.value,
            entries=len(report.entries),
            truncated=sink.truncated,
            max_entries=sink.max_entries,
            duration_ms=report.duration_ms,
        )
        return report

    def _execute(
        self,
        source: str,
        sink: ConsoleSink,
        cancel: threading.Event,
        deadline: float,
        outcome: _Outcome,
    ) -> None:
        namespace = build_namespace(Console(sink), self.extra_globals)
        sys.settrace(_DeadlineTracer(cancel, deadline, self.filename))
        try:
            outcome.value = run_source(source, namespace, filename=self.filename)
        except ExecutionCancelled:
            outcome.cancelled = True
        except BaseException as exc:  # SystemExit from the program is a failure too
            outcome.error = exc
        finally:
            sys.settrace(None)
            outcome.done.set()

    def _success_report(
        self, entries: List[OutputEntry], duration_ms: float, value: Any
    ) -> ExecutionReport:
        if value is not _NO_RESULT and value is not None:
            entries.append(OutputEntry(EntryType.RESULT, serialize_value(value)))
        if not entries:
            entries.append(OutputEntry(EntryType.SUCCESS, NO_OUTPUT_MESSAGE))
        return ExecutionReport(tuple(entries), duration_ms, RunStatus.SUCCESS)

    def _error_report(
        self,
        source: str,
        entries: List[OutputEntry],
        duration_ms: float,
        error: BaseException,
    ) -> ExecutionReport:
        location = locate_error(
            error,
            source=source,
            filename=self.filename,
            wrapper_lines=self.settings.wrapper_lines,
        )
        entries.append(
            OutputEntry(EntryType.ERROR, build_diagnostic(error, source, location))
        )
        return ExecutionReport(
            tuple(entries), duration_ms, RunStatus.ERROR, location=location
        )

    def _timeout_report(
        self,
        entries: List[OutputEntry],
        duration_ms: float,
        budget_ms: int,
        worker: threading.Thread,
    ) -> ExecutionReport:
        if worker.is_alive():
            self.logger.warning(
                f"sandbox worker still running after cancel ({worker.name})"
            )
        if self._cancel_requested:
            message = CANCELLED_MESSAGE
        else:
            message = f"TimeoutError: Execution timed out after {budget_ms} ms"
        entries.append(OutputEntry(EntryType.ERROR, message))
        return ExecutionReport(tuple(entries), duration_ms, RunStatus.TIMEOUT)


__all__ = [
    "Sandbox",
    "ExecutionCancelled",
    "NO_OUTPUT_MESSAGE",
    "CANCELLED_MESSAGE",
    "build_namespace",
    "run_source",
]
