"""Small pure helpers shared by all plot backends.

Nothing in here keeps state; the functions are safe to call from any
context. Anchor numbers follow the keypad-like layout used throughout the
package::

    7 nw -------- 8 n -------- 9 ne
    |                            |
    4 w  -------- 5 c -------- 6 e
    |                            |
    1 sw -------- 2 s -------- 3 se
"""

from __future__ import annotations

import logging
from typing import Sequence, Tuple

from plotfile.render.canvas import Color, Point

__all__ = [
    "ANCHORS",
    "anchor_num_of",
    "clamp01",
    "clamp_color",
    "lowered_suffix",
    "midpoint",
    "rgb255",
    "rnd",
]

logger = logging.getLogger(__name__)

# Index 0 is unused so that the tuple position equals the anchor number.
ANCHORS: Tuple[str, ...] = ("", "sw", "s", "se", "w", "c", "e", "nw", "n", "ne")

_MAX_SUFFIX_LEN = 31


def lowered_suffix(filename: str | None) -> str | None:
    """Return the lowercased characters after the last ``.`` of *filename*.

    Returns ``None`` for an empty name, a name without a dot, or a suffix
    whose length is outside ``1..31``.
    """
    if not filename:
        return None
    dot = filename.rfind(".")
    if dot < 0:
        return None
    sfx = filename[dot + 1 :]
    if not 1 <= len(sfx) <= _MAX_SUFFIX_LEN:
        return None
    return sfx.lower()


def midpoint(p1: Sequence[float], p2: Sequence[float]) -> Point:
    """Return the point halfway between *p1* and *p2*."""
    return Point(0.5 * (p1[0] + p2[0]), 0.5 * (p1[1] + p2[1]))


def rnd(x: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(x + 0.5) if x > 0 else int(x - 0.5)


def clamp01(v: float) -> float:
    return 0.0 if v < 0.0 else 1.0 if v > 1.0 else float(v)


def clamp_color(r: float, g: float, b: float) -> Color:
    return (clamp01(r), clamp01(g), clamp01(b))


def rgb255(color: Color) -> Tuple[int, int, int]:
    """Convert a normalized color to 8-bit channels (truncating)."""
    r, g, b = color
    return int(255 * r), int(255 * g), int(255 * b)


def anchor_num_of(anchor: str | None) -> int:
    """Map a text anchor token to its number 1..9.

    Only the first two characters take part in the match. Unknown tokens are
    reported once through the module logger and fall back to 1 (southwest).
    """
    token = (anchor or "")[:2]
    for num in range(1, len(ANCHORS)):
        if ANCHORS[num] == token:
            return num
    logger.warning("text anchor %r not recognized, using 'sw'", token)
    return 1
