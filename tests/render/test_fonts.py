from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable

import pytest

from plotfile.render import fonts
from plotfile.render.fonts import find_font_candidates, font_priority, resolve_font
from plotfile.settings.schema import Settings


def test_priority_by_case_insensitive_substring() -> None:
    assert font_priority("/x/VERDANA.TTF") == 1
    assert font_priority("/x/DejaVuSans.ttf") == 2
    assert font_priority("/x/LiberationSans-Regular.ttf") == 3
    assert font_priority("/x/DejaVuSansCondensed.ttf") == 4
    assert font_priority("/x/courier.ttf") == 9
    assert font_priority("/x/Symbol.ttf") is None


def test_candidates_sorted_by_priority_then_name(font_tree: Path) -> None:
    cands = find_font_candidates([str(font_tree)])
    assert [(c.priority, c.name) for c in cands] == [
        (1, os.path.join("msttcorefonts", "Verdana")),
        (2, os.path.join("dejavu", "DejaVuSans")),
        (3, os.path.join("liberation", "LiberationSans-Regular")),
        (4, os.path.join("dejavu", "DejaVuSansCondensed")),
        (9, os.path.join("msttcorefonts", "cour")),
    ]
    assert cands[0].path == str(font_tree / "msttcorefonts" / "Verdana.ttf")


def test_missing_roots_are_skipped(font_tree: Path, tmp_path: Path) -> None:
    cands = find_font_candidates([str(tmp_path / "nope"), "", str(font_tree)])
    assert len(cands) == 5


def test_candidate_cap(font_tree: Path) -> None:
    assert len(find_font_candidates([str(font_tree)], max_candidates=2)) == 2


def test_depth_limit(tmp_path: Path) -> None:
    deep = tmp_path / "a" / "b" / "c"
    deep.mkdir(parents=True)
    (deep / "Verdana.ttf").write_bytes(b"")
    assert find_font_candidates([str(tmp_path)], fd_limit=3) == []
    assert len(find_font_candidates([str(tmp_path)], fd_limit=4)) == 1


def test_symlinked_directories_are_not_followed(tmp_path: Path) -> None:
    real = tmp_path / "real"
    real.mkdir()
    (real / "Verdana.ttf").write_bytes(b"")
    root = tmp_path / "root"
    root.mkdir()
    try:
        os.symlink(real, root / "link", target_is_directory=True)
    except (OSError, NotImplementedError):
        pytest.skip("symlinks not supported")
    assert find_font_candidates([str(root)]) == []


def test_resolve_font_searches_once(
    font_tree: Path,
    use_settings: Callable[..., Settings],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    use_settings(font_dirs=[str(font_tree)])
    calls: list[int] = []
    orig = fonts.find_font_candidates

    def counting(*args, **kwargs):
        calls.append(1)
        return orig(*args, **kwargs)

    monkeypatch.setattr(fonts, "find_font_candidates", counting)
    first = resolve_font()
    second = resolve_font()
    assert first == second == str(font_tree / "msttcorefonts" / "Verdana.ttf")
    assert len(calls) == 1


def test_font_dirs_from_environment(
    font_tree: Path,
    use_settings: Callable[..., Settings],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("PLOTFILE_FONT_DIRS", str(font_tree))
    use_settings(font_dirs=[])
    assert resolve_font() == str(font_tree / "msttcorefonts" / "Verdana.ttf")


def test_no_font_logs_one_error(
    tmp_path: Path,
    use_settings: Callable[..., Settings],
    caplog: pytest.LogCaptureFixture,
) -> None:
    use_settings(font_dirs=[str(tmp_path / "empty")])
    with caplog.at_level(logging.ERROR, logger="plotfile.render.fonts"):
        assert resolve_font() is None
        assert resolve_font() is None
    errors = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert len(errors) == 1
    assert "text drawing not available" in errors[0].getMessage()
