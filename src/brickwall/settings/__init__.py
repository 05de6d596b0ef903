"""User settings: YAML defaults, pydantic schema and JSON store."""

from .schema import Settings
from .store import SettingsStore

__all__ = ["Settings", "SettingsStore"]
