"""User settings: schema, persistence and packaged value tables."""

from .schema import Settings
from .store import SettingsStore

__all__ = ["Settings", "SettingsStore"]
