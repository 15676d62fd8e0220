from __future__ import annotations

import os

import pytest

from plotfile.config import get_runtime, make_runtime_config, reset_runtime, set_runtime
from plotfile.settings.schema import Settings
from plotfile.settings.store import SettingsStore


def test_env_font_dirs_come_first(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PLOTFILE_FONT_DIRS", os.pathsep.join(["/a", "", "/b", "/a"]))
    rc = make_runtime_config(Settings(font_dirs=["/c", "/b"]))
    assert rc.font_dirs == ("/a", "/b", "/c")


def test_without_env_uses_settings() -> None:
    rc = make_runtime_config(Settings(font_dirs=["/c"]))
    assert rc.font_dirs == ("/c",)


def test_runtime_loads_persisted_settings_once() -> None:
    SettingsStore.save(Settings(svg_font="Arial"))
    rc = get_runtime()
    assert rc.settings.svg_font == "Arial"
    SettingsStore.save(Settings(svg_font="Courier"))
    assert get_runtime() is rc
    reset_runtime()
    assert get_runtime().settings.svg_font == "Courier"


def test_set_runtime_replaces_cached_config() -> None:
    rc = set_runtime(Settings(eps_font="Times-Roman"))
    assert get_runtime() is rc
    assert get_runtime().settings.eps_font == "Times-Roman"
