from __future__ import annotations

import json
from pathlib import Path

import pytest

from plotfile.settings.schema import Settings
from plotfile.settings.store import SettingsStore


def test_load_defaults(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PLOTFILE_HOME", str(tmp_path))
    s = SettingsStore.load()
    assert isinstance(s, Settings)
    assert s.raster_supersample == 2
    assert s.eps_font == "Helvetica"


def test_roundtrip(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PLOTFILE_HOME", str(tmp_path / "nested"))
    s = Settings(svg_font="DejaVu Sans", raster_supersample=4, font_dirs=["/opt/f"])
    SettingsStore.save(s)
    assert SettingsStore.settings_path() == tmp_path / "nested" / "settings.json"
    s2 = SettingsStore.load()
    assert s2.svg_font == "DejaVu Sans"
    assert s2.raster_supersample == 4
    assert s2.font_dirs == ["/opt/f"]
    assert not (tmp_path / "nested" / "settings.tmp").exists()


def test_corrupt_returns_default(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("PLOTFILE_HOME", str(tmp_path))
    p = SettingsStore.settings_path()
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text("{broken")
    s = SettingsStore.load()
    assert s.raster_supersample == 2


def test_invalid_values_return_default(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("PLOTFILE_HOME", str(tmp_path))
    p = SettingsStore.settings_path()
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps({"raster_supersample": 99}))
    assert SettingsStore.load().raster_supersample == 2


def test_partial_file_keeps_other_defaults(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("PLOTFILE_HOME", str(tmp_path))
    p = SettingsStore.settings_path()
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps({"bezier_tolerance": 0.25}))
    s = SettingsStore.load()
    assert s.bezier_tolerance == 0.25
    assert s.bezier_max_depth == 16
