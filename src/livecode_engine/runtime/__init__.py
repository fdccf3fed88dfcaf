"""Cross-cutting runtime services: telemetry and settings."""

from .settings import EngineSettings

__all__ = ["EngineSettings"]
