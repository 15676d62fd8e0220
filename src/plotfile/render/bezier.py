"""Flattening of cubic Bezier segments into straight chords.

Used by backends whose drawing library has no native cubic curve primitive.
A segment is given by four control points ``p0..p3`` (``p0``/``p3`` are the
end points). It is split recursively at t=1/2 (de Casteljau) until each
piece is flat enough to be drawn as the straight line ``p0 -> p3``.

Flatness uses a Manhattan-distance estimate of how far the inner control
points deviate from the chord (sum of the absolute second differences), so
no square roots are needed.
"""

from __future__ import annotations

import logging
import math
from typing import Iterator, Sequence, Tuple

from plotfile.render.canvas import Point, PointLike
from plotfile.render.helpers import midpoint

__all__ = ["DEFAULT_MAX_DEPTH", "DEFAULT_TOLERANCE", "flatten", "is_flat", "subdivide"]

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE: float = 1.0  # native units
DEFAULT_MAX_DEPTH: int = 16

Segment = Tuple[Point, Point, Point, Point]


def is_flat(points: Sequence[PointLike], tolerance: float = DEFAULT_TOLERANCE) -> bool:
    """Return True if the control polygon is within *tolerance* of the chord."""
    p0, p1, p2, p3 = points
    dev = (
        abs(p0[0] + p2[0] - p1[0] - p1[0])
        + abs(p0[1] + p2[1] - p1[1] - p1[1])
        + abs(p1[0] + p3[0] - p2[0] - p2[0])
        + abs(p1[1] + p3[1] - p2[1] - p2[1])
    )
    return dev <= tolerance


def subdivide(points: Sequence[PointLike]) -> Tuple[Segment, Segment]:
    """Split a cubic segment at t=1/2 into a left and a right half.

    Three rounds of pairwise midpoints; the shared point ``left[3]`` equals
    ``right[0]`` and lies on the curve.
    """
    p0, p1, p2, p3 = (Point(float(p[0]), float(p[1])) for p in points)
    m = midpoint(p1, p2)
    l1 = midpoint(p0, p1)
    r2 = midpoint(p2, p3)
    l2 = midpoint(l1, m)
    r1 = midpoint(m, r2)
    mid = midpoint(l2, r1)
    return (p0, l1, l2, mid), (mid, r1, r2, p3)


def flatten(
    points: Sequence[PointLike],
    tolerance: float = DEFAULT_TOLERANCE,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Iterator[Tuple[Point, Point]]:
    """Yield the chords approximating the cubic segment, in curve order.

    Pieces still not flat at *max_depth* are yielded as their chord, which
    bounds the output to ``2 ** max_depth`` chords for any finite input.
    Segments with non-finite coordinates yield nothing.
    """
    if len(points) != 4:
        raise ValueError(f"a cubic segment needs 4 control points, got {len(points)}")
    seg = tuple(Point(float(p[0]), float(p[1])) for p in points)
    if not all(math.isfinite(c) for p in seg for c in p):
        logger.warning("skipping Bezier segment with non-finite coordinates")
        return
    yield from _flatten(seg, tolerance, max_depth)


def _flatten(
    seg: Sequence[Point], tolerance: float, depth_left: int
) -> Iterator[Tuple[Point, Point]]:
    if depth_left <= 0 or is_flat(seg, tolerance):
        yield seg[0], seg[3]
        return
    left, right = subdivide(seg)
    yield from _flatten(left, tolerance, depth_left - 1)
    yield from _flatten(right, tolerance, depth_left - 1)
