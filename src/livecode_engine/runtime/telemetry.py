"""Logging and profiling for the editor engine, on top of telelog.

Everything logs through named loggers under ``livecode_engine``. A preset
decides where the lines go:

``default``      INFO to a coloured console
``development``  DEBUG to a coloured console (the demo's ``--verbose``)
``quiet``        WARNING and up, console off; full-screen hosts own the terminal

``LIVECODE_LOG_LEVEL``, ``LIVECODE_LOG_CONSOLE`` and ``LIVECODE_LOG_FILE``
override whichever preset is active.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, MutableMapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "LIVECODE_"
ROOT_LOGGER = "livecode_engine"
SANDBOX_LOGGER = f"{ROOT_LOGGER}.sandbox"
SESSION_LOGGER = f"{ROOT_LOGGER}.session"
KEYMAPS_LOGGER = f"{ROOT_LOGGER}.keymaps"
APP_LOGGER = f"{ROOT_LOGGER}.app"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True, slots=True)
class Preset:
    level: str
    console: bool


PRESETS: Dict[str, Preset] = {
    "default": Preset(level="INFO", console=True),
    "development": Preset(level="DEBUG", console=True),
    "quiet": Preset(level="WARNING", console=False),
}

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


def _env(name: str) -> Optional[str]:
    raw = os.getenv(f"{ENV_PREFIX}{name}")
    return raw.strip() if raw and raw.strip() else None


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, float):
        return f"{value:.3f}"
    return str(value)


def _pairs(payload: Dict[str, Any]) -> List[Tuple[str, str]]:
    return [(str(key), _stringify(value)) for key, value in payload.items()]


def build_config(preset: str = "default") -> Any:
    """Translate a preset plus ``LIVECODE_LOG_*`` overrides into a ``tl.Config``."""

    try:
        chosen = PRESETS[preset.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown preset '{preset}', expected one of {sorted(PRESETS)}"
        ) from None

    console = chosen.console
    console_flag = _env("LOG_CONSOLE")
    if console_flag is not None:
        console = console_flag.lower() in _TRUTHY

    config = tl.Config()
    config.with_min_level((_env("LOG_LEVEL") or chosen.level).upper())
    config.with_console_output(console)
    if console:
        config.with_colored_output(True)
    log_file = _env("LOG_FILE")
    if log_file:
        config.with_file_output(log_file)
    # spans rely on logger.profile
    config.with_profiling(True)
    return config


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Swap the active configuration; cached loggers are rebuilt on next use.

    ``config`` (an explicit ``tl.Config``) and ``preset`` are mutually exclusive.
    """

    global _ACTIVE_CONFIG
    if config is not None and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")
    _ACTIVE_CONFIG = config if config is not None else build_config(preset or "default")
    _LOGGER_CACHE.clear()


def get_logger(name: Optional[str] = None) -> Any:
    global _ACTIVE_CONFIG
    logger_name = name or ROOT_LOGGER
    if logger_name not in _LOGGER_CACHE:
        if _ACTIVE_CONFIG is None:
            _ACTIVE_CONFIG = build_config()
        _LOGGER_CACHE[logger_name] = tl.Logger.with_config(logger_name, _ACTIVE_CONFIG)
    return _LOGGER_CACHE[logger_name]


def _log(logger: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    """Prefer telelog's ``<level>_with`` structured form, else inline the pairs."""

    name = level.lower()
    structured = getattr(logger, f"{name}_with", None)
    if structured is not None:
        structured(message, _pairs(payload))
        return
    plain = getattr(logger, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    rendered = " ".join(f"{key}={value}" for key, value in _pairs(payload))
    plain(f"{message} {rendered}" if rendered else message)


def record_event(
    event: str,
    *,
    level: str = "info",
    logger_name: Optional[str] = None,
    **fields: Any,
) -> None:
    """Emit ``event::<event>`` with ``fields`` as key/value pairs."""

    _log(get_logger(logger_name), level, f"event::{event}", {"event": event, **fields})


@dataclass
class SpanHandle:
    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def fail(self, reason: str) -> None:
        payload: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        payload["reason"] = reason
        _log(self.logger, "error", "span::fail", payload)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block under ``name``, optionally tracked as a component.

    ``component=True`` reuses ``name`` as the component id. ``metadata`` is
    attached as logger context for the duration of the block. An exception
    escaping the block is logged through :meth:`SpanHandle.fail` and re-raised.
    """

    log = get_logger(logger_name)
    component_name = name if component is True else component or None
    handle = SpanHandle(logger=log, span_name=name, component_name=component_name)
    for key, value in (metadata or {}).items():
        handle.add_metadata(key, value)

    with ExitStack() as stack:
        for key, value in handle.metadata.items():
            log.add_context(key, value)
            stack.callback(log.remove_context, key)
        if component_name:
            stack.enter_context(log.track_component(component_name))
        stack.enter_context(log.profile(name))
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise


__all__ = [
    "ENV_PREFIX",
    "ROOT_LOGGER",
    "SANDBOX_LOGGER",
    "SESSION_LOGGER",
    "KEYMAPS_LOGGER",
    "APP_LOGGER",
    "PRESETS",
    "Preset",
    "SpanHandle",
    "build_config",
    "configure",
    "get_logger",
    "record_event",
    "span",
]
