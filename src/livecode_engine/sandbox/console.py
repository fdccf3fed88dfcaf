"""Per-run output sink and the ``console`` object injected into programs.

Nothing here patches interpreter globals: each run owns its own sink and the
program reaches it only through the ``console``/``print`` names placed in its
namespace, so concurrent sandboxes cannot clobber one another.
"""

from __future__ import annotations

import sys
import threading
import time
from typing import Any, Callable, Dict, List, Optional, TextIO, Tuple

from .report import EntryType, OutputEntry
from .serialize import render_table, serialize_args

Clock = Callable[[], float]


class ConsoleSink:
    """Append-only, emission-ordered entry store for one run."""

    def __init__(
        self,
        *,
        max_entries: int = 1000,
        passthrough: Optional[TextIO] = None,
    ) -> None:
        self.max_entries = max_entries
        self.passthrough = passthrough
        self._entries: List[OutputEntry] = []
        self._lock = threading.Lock()
        self._closed = False
        self._truncated = False

    @property
    def entries(self) -> Tuple[OutputEntry, ...]:
        with self._lock:
            return tuple(self._entries)

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def truncated(self) -> bool:
        return self._truncated

    def append(self, entry_type: EntryType, content: str) -> None:
        with self._lock:
            if self._closed:
                return
            if len(self._entries) >= self.max_entries:
                if not self._truncated:
                    self._truncated = True
                    self._entries.append(
                        OutputEntry(
                            EntryType.WARN,
                            f"Output truncated after {self.max_entries} entries",
                        )
                    )
                return
            self._entries.append(OutputEntry(entry_type, content))
        if self.passthrough is not None:
            self.passthrough.write(content + "\n")

    def close(self) -> Tuple[OutputEntry, ...]:
        """Stop accepting writes and return everything captured."""

        with self._lock:
            self._closed = True
            return tuple(self._entries)


class Console:
    """The capability handed to submitted programs as ``console``."""

    __slots__ = ("_sink", "_timers", "_clock")

    def __init__(self, sink: ConsoleSink, *, clock: Clock = time.perf_counter) -> None:
        self._sink = sink
        self._timers: Dict[str, float] = {}
        self._clock = clock

    def log(self, *args: Any) -> None:
        self._sink.append(EntryType.LOG, serialize_args(args))

    def debug(self, *args: Any) -> None:
        self._sink.append(EntryType.LOG, serialize_args(args))

    def info(self, *args: Any) -> None:
        self._sink.append(EntryType.INFO, serialize_args(args))

    def warn(self, *args: Any) -> None:
        self._sink.append(EntryType.WARN, serialize_args(args))

    warning = warn

    def error(self, *args: Any) -> None:
        self._sink.append(EntryType.ERROR, serialize_args(args))

    def table(self, data: Any) -> None:
        self._sink.append(EntryType.LOG, render_table(data))

    def time(self, label: str = "default") -> None:
        self._timers[str(label)] = self._clock()

    def time_end(self, label: str = "default") -> None:
        started = self._timers.pop(str(label), None)
        if started is None:
            self._sink.append(EntryType.WARN, f"Timer '{label}' does not exist")
            return
        elapsed_ms = (self._clock() - started) * 1000
        self._sink.append(EntryType.INFO, f"{label}: {elapsed_ms:.3f} ms")

    timeEnd = time_end

    def print(
        self,
        *args: Any,
        sep: Optional[str] = " ",
        end: Optional[str] = "\n",
        file: Optional[TextIO] = None,
        flush: bool = False,
    ) -> None:
        """Drop-in ``print``: one entry per call, stderr routed as an error."""

        if file is not None and file not in (sys.stdout, sys.stderr):
            print(*args, sep=sep, end=end, file=file, flush=flush)
            return
        sep = " " if sep is None else sep
        end = "\n" if end is None else end
        content = sep.join(str(arg) for arg in args) + end
        if content.endswith("\n"):
            content = content[:-1]
        entry_type = EntryType.ERROR if file is sys.stderr else EntryType.LOG
        self._sink.append(entry_type, content)

    def __repr__(self) -> str:
        return "<console>"


__all__ = ["ConsoleSink", "Console"]
