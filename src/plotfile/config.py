"""Runtime configuration helpers.

Small aggregator that merges the persisted :class:`Settings` with
environment overrides and caches the result for the process. Backends read
their tunables through :func:`get_runtime` so that a single settings load
serves every plot opened by the process.

Environment variables:

- ``PLOTFILE_HOME``: directory holding ``settings.json`` (default
  ``~/.plotfile``).
- ``PLOTFILE_FONT_DIRS``: extra font search roots, separated by
  ``os.pathsep``, searched before the configured ones.
"""

from __future__ import annotations

import os
import threading
from dataclasses import dataclass

from .settings.schema import Settings
from .settings.store import SettingsStore


@dataclass(slots=True, frozen=True)
class RuntimeConfig:
    settings: Settings
    font_dirs: tuple[str, ...]


def make_runtime_config(settings: Settings | None = None) -> RuntimeConfig:
    """Build a RuntimeConfig from *settings* (or the persisted ones).

    Rules:
    - Persisted settings (``SettingsStore.load()``) provide the defaults.
    - Directories named in ``PLOTFILE_FONT_DIRS`` are searched first; a
      directory listed twice is searched once.
    """
    if settings is None:
        settings = SettingsStore.load()
    extra = os.environ.get("PLOTFILE_FONT_DIRS", "")
    dirs: list[str] = []
    for d in [*extra.split(os.pathsep), *settings.font_dirs]:
        if d and d not in dirs:
            dirs.append(d)
    return RuntimeConfig(settings=settings, font_dirs=tuple(dirs))


# Runtime singleton ------------------------------------------------------
_RUNTIME: RuntimeConfig | None = None
_LOCK = threading.Lock()


def get_runtime() -> RuntimeConfig:
    """Return the current runtime config, creating a default if needed."""
    global _RUNTIME
    with _LOCK:
        if _RUNTIME is None:
            _RUNTIME = make_runtime_config()
        return _RUNTIME


def set_runtime(settings: Settings) -> RuntimeConfig:
    """Replace the process runtime config, e.g. from an embedding app."""
    global _RUNTIME
    rc = make_runtime_config(settings)
    with _LOCK:
        _RUNTIME = rc
    return rc


def reset_runtime() -> None:
    """Drop the cached config; the next :func:`get_runtime` reloads it."""
    global _RUNTIME
    with _LOCK:
        _RUNTIME = None
