"""TrueType font discovery for the raster backend.

The raster backend needs a scalable font file to draw text. Rather than
shipping one, the configured font roots are searched recursively for
``*.ttf`` files whose names match a short preference list (Verdana first,
generic sans faces next, Courier as a last resort). The best match is
remembered for the rest of the process because walking font trees is slow.

Example::

    from plotfile.render.fonts import find_font_candidates

    for cand in find_font_candidates(["/usr/share/fonts/truetype"]):
        print(cand.priority, cand.name)  # e.g. "2 dejavu/DejaVuSans"
"""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass
from typing import Iterable, List, Sequence

from plotfile.config import get_runtime
from plotfile.settings.values import (
    FONT_FD_LIMIT,
    FONT_MAX_CANDIDATES,
    FONT_PRIORITIES,
    FONT_SUFFIX,
    FontPriority,
)

__all__ = [
    "FontCandidate",
    "find_font_candidates",
    "font_priority",
    "reset_font_cache",
    "resolve_font",
]

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class FontCandidate:
    """A usable font file.

    ``name`` is the path below the search root without the file suffix; it
    is the secondary sort key after ``priority`` (lower is better).
    """

    path: str
    name: str
    priority: int


def font_priority(
    path: str, priorities: Sequence[FontPriority] = FONT_PRIORITIES
) -> int | None:
    """Return the priority of *path*, or ``None`` if no pattern matches.

    Patterns are matched case-insensitively as substrings of the full path;
    the first matching pattern wins.
    """
    low = path.lower()
    for fp in priorities:
        if fp.pattern in low:
            return fp.priority
    return None


def find_font_candidates(
    dirs: Iterable[str],
    *,
    fd_limit: int = FONT_FD_LIMIT,
    max_candidates: int = FONT_MAX_CANDIDATES,
    suffix: str = FONT_SUFFIX,
    priorities: Sequence[FontPriority] = FONT_PRIORITIES,
) -> List[FontCandidate]:
    """Search *dirs* for usable font files and return them best first.

    Each root is walked with :func:`os.scandir` down to *fd_limit* levels
    (one open directory handle per level); symlinked directories are not
    followed. Collection stops once *max_candidates* fonts matched.
    Unreadable or missing directories are skipped with a debug message.
    """
    found: List[FontCandidate] = []
    dot_sfx = "." + suffix.lower()
    for root in dirs:
        if not root:
            continue
        before = len(found)
        _walk(root, root, 1, fd_limit, max_candidates, dot_sfx, priorities, found)
        logger.debug("%d usable fonts found under %s", len(found) - before, root)
        if len(found) >= max_candidates:
            break
    found.sort(key=lambda c: (c.priority, c.name))
    return found


def _walk(
    root: str,
    path: str,
    depth: int,
    fd_limit: int,
    max_candidates: int,
    dot_sfx: str,
    priorities: Sequence[FontPriority],
    found: List[FontCandidate],
) -> None:
    if depth > fd_limit:
        logger.debug("font search depth limit reached at %s", path)
        return
    try:
        with os.scandir(path) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as e:
        logger.debug("cannot scan font directory %s: %s", path, e)
        return
    for entry in entries:
        if len(found) >= max_candidates:
            return
        try:
            if entry.is_dir(follow_symlinks=False):
                _walk(
                    root,
                    entry.path,
                    depth + 1,
                    fd_limit,
                    max_candidates,
                    dot_sfx,
                    priorities,
                    found,
                )
                continue
            if not entry.is_file():
                continue
        except OSError:
            continue
        if not entry.name.lower().endswith(dot_sfx) or len(entry.name) <= len(dot_sfx):
            continue
        prio = font_priority(entry.path, priorities)
        if prio is None:
            continue
        rel = os.path.relpath(entry.path, root)
        found.append(
            FontCandidate(path=entry.path, name=rel[: -len(dot_sfx)], priority=prio)
        )


# Process-wide cache ------------------------------------------------------
_LOCK = threading.Lock()
_RESOLVED = False
_FONT_PATH: str | None = None


def resolve_font() -> str | None:
    """Return the path of the preferred font, searching on first use.

    The result (including "nothing found") is cached for the process. When
    no font exists an error is logged once and raster text stays disabled.
    """
    global _RESOLVED, _FONT_PATH
    with _LOCK:
        if _RESOLVED:
            return _FONT_PATH
        rc = get_runtime()
        cands = find_font_candidates(
            rc.font_dirs,
            fd_limit=rc.settings.font_fd_limit,
            max_candidates=rc.settings.font_max_candidates,
        )
        if cands:
            _FONT_PATH = cands[0].path
            logger.debug("using font %s", _FONT_PATH)
        else:
            _FONT_PATH = None
            logger.error(
                "no usable TrueType font found under %s, text drawing not available",
                ", ".join(rc.font_dirs) or "(no directories)",
            )
        _RESOLVED = True
        return _FONT_PATH


def reset_font_cache() -> None:
    """Forget the resolved font so the next lookup searches again."""
    global _RESOLVED, _FONT_PATH
    with _LOCK:
        _RESOLVED = False
        _FONT_PATH = None
