from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterator

import pytest

from plotfile.config import reset_runtime, set_runtime
from plotfile.render.fonts import find_font_candidates, reset_font_cache
from plotfile.settings.schema import Settings
from plotfile.settings.values import FONT_SEARCH_DIRS


@pytest.fixture(autouse=True)
def _isolated_runtime(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep user settings and cached fonts from leaking between tests."""
    monkeypatch.setenv("PLOTFILE_HOME", str(tmp_path / "home"))
    monkeypatch.delenv("PLOTFILE_FONT_DIRS", raising=False)
    reset_runtime()
    reset_font_cache()
    yield
    reset_runtime()
    reset_font_cache()


@pytest.fixture
def use_settings() -> Callable[..., Settings]:
    """Install a runtime built from the given ``Settings`` fields."""

    def _use(**fields: object) -> Settings:
        s = Settings(**fields)
        set_runtime(s)
        reset_font_cache()
        return s

    return _use


@pytest.fixture
def system_font() -> str:
    """Path of an installed TrueType font; skips when the host has none."""
    cands = find_font_candidates(FONT_SEARCH_DIRS)
    if not cands:
        pytest.skip("no TrueType font installed")
    return cands[0].path


@pytest.fixture
def font_tree(tmp_path: Path) -> Path:
    """A fake font directory; files are empty, only names matter."""
    root = tmp_path / "fonts"
    files = [
        "msttcorefonts/Verdana.ttf",
        "dejavu/DejaVuSans.ttf",
        "liberation/LiberationSans-Regular.ttf",
        "dejavu/DejaVuSansCondensed.ttf",
        "msttcorefonts/cour.ttf",
        "misc/Symbol.ttf",
        "msttcorefonts/verdana.otf",
        "README",
    ]
    for rel in files:
        p = root / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(b"")
    return root
