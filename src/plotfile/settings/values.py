"""Centralized value sets loaded from YAML.

This module provides a single place to access the lookup tables the
backends share: font search roots and name priorities, dash patterns per
output format and the SVG text alignment tables. The master source is
``values.yml`` in this package.

On import we attempt to load and parse the YAML. Failures fall back to
hard-coded defaults so plots can still be produced. The fallbacks mirror
the shipped YAML exactly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Sequence, Tuple

import yaml

logger = logging.getLogger(__name__)

_PKG_DIR = Path(__file__).parent
_YAML_PATH = _PKG_DIR / "values.yml"

# --- Fallback literals -----------------------------------------------------
_FALLBACK_FONT_DIRS = ["/usr/share/fonts/truetype", "/usr/local/share/fonts/truetype"]
_FALLBACK_FONT_SUFFIX = "ttf"
_FALLBACK_FONT_PRIORITIES = [
    ("verdana.ttf", 1),
    ("sans.ttf", 2),
    ("sans-regular.ttf", 3),
    ("sanscondensed.ttf", 4),
    ("cour.ttf", 9),  # fallback only
    ("courier.ttf", 9),  # fallback only
]
_FALLBACK_FONT_FD_LIMIT = 15
_FALLBACK_FONT_MAX_CANDIDATES = 16
_FALLBACK_EPS_DASH = ["[]", "[4 2]", "[1 2]", "[4 2 1 2]", "[4 2 1 2 1 2]"]
_FALLBACK_SVG_DASH = ["none", "4 2", "1 2", "4 2 1 2", "4 2 1 2 1 2"]
_FALLBACK_RASTER_CELLS = [
    [1],
    [1, 1, 1, 1, 0, 0],
    [1, 0, 0],
    [1, 1, 1, 1, 0, 0, 1, 0, 0],
    [1, 1, 1, 1, 0, 0, 1, 0, 0, 1, 0, 0],
]
_FALLBACK_SVG_TEXT_ANCHOR = ["start", "middle", "end"] * 3
_FALLBACK_SVG_BASELINE = (
    ["text-after-edge"] * 3 + ["middle"] * 3 + ["text-before-edge"] * 3
)

_N_STYLES = 5
_N_ANCHORS = 9


@dataclass(slots=True, frozen=True)
class FontPriority:
    pattern: str
    priority: int


def _str_list(v: Any, n: int | None = None) -> List[str] | None:
    if not isinstance(v, list) or not all(isinstance(x, str) for x in v):
        return None
    if n is not None and len(v) != n:
        return None
    return list(v)


# --- Load YAML -------------------------------------------------------------
_font_dirs: List[str] = list(_FALLBACK_FONT_DIRS)
_font_suffix: str = _FALLBACK_FONT_SUFFIX
_font_priorities: List[FontPriority] = [
    FontPriority(p, n) for p, n in _FALLBACK_FONT_PRIORITIES
]
_font_fd_limit: int = _FALLBACK_FONT_FD_LIMIT
_font_max_candidates: int = _FALLBACK_FONT_MAX_CANDIDATES
_eps_dash: List[str] = list(_FALLBACK_EPS_DASH)
_svg_dash: List[str] = list(_FALLBACK_SVG_DASH)
_raster_cells: List[List[int]] = [list(c) for c in _FALLBACK_RASTER_CELLS]
_svg_text_anchor: List[str] = list(_FALLBACK_SVG_TEXT_ANCHOR)
_svg_baseline: List[str] = list(_FALLBACK_SVG_BASELINE)

if _YAML_PATH.exists():  # pragma: no branch - simple path
    try:
        with _YAML_PATH.open("r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
        # Fonts
        fonts = raw.get("fonts", {})
        dirs = _str_list(fonts.get("search_dirs"))
        if dirs:
            _font_dirs = dirs
        sfx = fonts.get("suffix")
        if isinstance(sfx, str) and sfx:
            _font_suffix = sfx.lower().lstrip(".")
        prios = fonts.get("priorities")
        if isinstance(prios, list):
            temp: List[FontPriority] = []
            for p in prios:
                if not isinstance(p, dict):
                    continue
                pat = p.get("pattern")
                num = p.get("priority")
                if isinstance(pat, str) and isinstance(num, int):
                    temp.append(FontPriority(pat.lower(), num))
            if temp:
                _font_priorities = temp
        if isinstance(fonts.get("fd_limit"), int) and fonts["fd_limit"] > 0:
            _font_fd_limit = fonts["fd_limit"]
        if isinstance(fonts.get("max_candidates"), int) and fonts["max_candidates"] > 0:
            _font_max_candidates = fonts["max_candidates"]
        # Line styles
        ls = raw.get("line_styles", {})
        _eps_dash = _str_list(ls.get("eps_dash"), _N_STYLES) or _eps_dash
        _svg_dash = _str_list(ls.get("svg_dash"), _N_STYLES) or _svg_dash
        cells = ls.get("raster_cells")
        if (
            isinstance(cells, list)
            and len(cells) == _N_STYLES
            and all(isinstance(c, list) and c for c in cells)
        ):
            _raster_cells = [[1 if x else 0 for x in c] for c in cells]
        # Text
        txt = raw.get("text", {})
        _svg_text_anchor = (
            _str_list(txt.get("svg_text_anchor"), _N_ANCHORS) or _svg_text_anchor
        )
        _svg_baseline = _str_list(txt.get("svg_baseline"), _N_ANCHORS) or _svg_baseline
    except (OSError, yaml.YAMLError, AttributeError) as e:  # pragma: no cover
        logger.warning("failed to load %s, using built-in values: %s", _YAML_PATH, e)

# --- Public accessors ------------------------------------------------------
FONT_SEARCH_DIRS: Sequence[str] = tuple(_font_dirs)
FONT_SUFFIX: str = _font_suffix
FONT_PRIORITIES: Sequence[FontPriority] = tuple(_font_priorities)
FONT_FD_LIMIT: int = _font_fd_limit
FONT_MAX_CANDIDATES: int = _font_max_candidates
EPS_DASH_ARRAYS: Sequence[str] = tuple(_eps_dash)
SVG_DASH_ARRAYS: Sequence[str] = tuple(_svg_dash)
RASTER_DASH_CELLS: Sequence[Tuple[int, ...]] = tuple(tuple(c) for c in _raster_cells)
# Prepend an empty slot so that index == anchor number
SVG_TEXT_ANCHOR: Sequence[str] = ("",) + tuple(_svg_text_anchor)
SVG_BASELINE: Sequence[str] = ("",) + tuple(_svg_baseline)

__all__ = [
    "FontPriority",
    "FONT_SEARCH_DIRS",
    "FONT_SUFFIX",
    "FONT_PRIORITIES",
    "FONT_FD_LIMIT",
    "FONT_MAX_CANDIDATES",
    "EPS_DASH_ARRAYS",
    "SVG_DASH_ARRAYS",
    "RASTER_DASH_CELLS",
    "SVG_TEXT_ANCHOR",
    "SVG_BASELINE",
]
