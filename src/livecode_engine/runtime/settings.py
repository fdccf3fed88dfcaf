"""Engine-wide settings resolved from keyword overrides and ``LIVECODE_*`` env vars."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from .telemetry import ENV_PREFIX

DEFAULT_TIMEOUT_MS = 5000
DEFAULT_MAX_OUTPUT_ENTRIES = 1000


def _env_int(
    name: str, fallback: int, environ: Mapping[str, str], *, allow_zero: bool = False
) -> int:
    raw = environ.get(f"{ENV_PREFIX}{name}")
    if raw is None or not raw.strip():
        return fallback
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from exc
    if value < 0 or (value == 0 and not allow_zero):
        raise ValueError(f"{ENV_PREFIX}{name} must be positive, got {value}")
    return value


@dataclass(frozen=True, slots=True)
class EngineSettings:
    """Knobs shared by the session, sandbox and demo host."""

    timeout_ms: int = DEFAULT_TIMEOUT_MS
    max_output_entries: int = DEFAULT_MAX_OUTPUT_ENTRIES
    language: str = "python"
    theme: str = "dark"
    wrapper_lines: int = 0

    def __post_init__(self) -> None:
        if self.timeout_ms <= 0:
            raise ValueError("timeout_ms must be positive")
        if self.max_output_entries <= 0:
            raise ValueError("max_output_entries must be positive")
        if self.wrapper_lines < 0:
            raise ValueError("wrapper_lines cannot be negative")

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None, **overrides: object
    ) -> "EngineSettings":
        env = os.environ if environ is None else environ
        settings = cls(
            timeout_ms=_env_int("TIMEOUT_MS", DEFAULT_TIMEOUT_MS, env),
            max_output_entries=_env_int(
                "MAX_OUTPUT", DEFAULT_MAX_OUTPUT_ENTRIES, env
            ),
            language=(env.get(f"{ENV_PREFIX}LANGUAGE") or "python").lower(),
            theme=(env.get(f"{ENV_PREFIX}THEME") or "dark").lower(),
            wrapper_lines=_env_int("WRAPPER_LINES", 0, env, allow_zero=True),
        )
        if overrides:
            settings = replace(settings, **overrides)  # type: ignore[arg-type]
        return settings


__all__ = ["EngineSettings", "DEFAULT_TIMEOUT_MS", "DEFAULT_MAX_OUTPUT_ENTRIES"]
