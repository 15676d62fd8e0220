"""Marker symbol layouts shared by all backends.

Each symbol is described once, in the unified coordinate system, as a short
list of :class:`Outline` parts. Backends translate the parts into their own
primitives (PostScript paths, SVG elements, Pillow calls) so that all output
formats draw the same figure.

Closed symbols (circle, squares, triangles) carry a vertical tick from the
bottom edge to the center.
"""

from __future__ import annotations

from typing import List, NamedTuple, Tuple

from plotfile.render.canvas import MarkerSymbol, Point

__all__ = ["Outline", "marker_outlines"]


class Outline(NamedTuple):
    """One drawable part of a marker.

    ``kind`` is one of:

    - ``"lines"``: ``points`` holds segment end points pairwise
      (``p0-p1``, ``p2-p3``, ...), all stroked as one path;
    - ``"polygon"``: closed outline through ``points``;
    - ``"circle"``: full circle around ``points[0]`` with ``radius``.
    """

    kind: str
    points: Tuple[Point, ...]
    radius: float = 0.0


def marker_outlines(cx: float, cy: float, w: float, symbol: int) -> List[Outline]:
    """Return the parts of *symbol* centered at ``(cx, cy)``, half-width *w*."""
    sym = MarkerSymbol.coerce(symbol)
    tick = Outline("lines", (Point(cx, cy - w), Point(cx, cy)))
    if sym is MarkerSymbol.PLUS:
        return [
            Outline(
                "lines",
                (
                    Point(cx - w, cy), Point(cx + w, cy),
                    Point(cx, cy - w), Point(cx, cy + w),
                ),
            )
        ]
    if sym is MarkerSymbol.STAR:
        return [
            Outline(
                "lines",
                (
                    Point(cx - w, cy), Point(cx + w, cy),
                    Point(cx, cy - w), Point(cx, cy + w),
                    Point(cx - w, cy - w), Point(cx + w, cy + w),
                    Point(cx - w, cy + w), Point(cx + w, cy - w),
                ),
            )
        ]
    if sym is MarkerSymbol.CIRCLE:
        return [Outline("circle", (Point(cx, cy),), w), tick]
    if sym is MarkerSymbol.SQUARE:
        pts = (
            Point(cx - w, cy - w), Point(cx + w, cy - w),
            Point(cx + w, cy + w), Point(cx - w, cy + w),
        )
        return [Outline("polygon", pts), tick]
    if sym is MarkerSymbol.DIAMOND:
        pts = (
            Point(cx, cy - w), Point(cx + w, cy),
            Point(cx, cy + w), Point(cx - w, cy),
        )
        return [Outline("polygon", pts), tick]
    if sym is MarkerSymbol.TRIANGLE_UP:
        pts = (Point(cx - w, cy - w), Point(cx + w, cy - w), Point(cx, cy + w))
        return [Outline("polygon", pts), tick]
    if sym is MarkerSymbol.TRIANGLE_DOWN:
        pts = (Point(cx, cy - w), Point(cx + w, cy + w), Point(cx - w, cy + w))
        return [Outline("polygon", pts), tick]
    # X
    return [
        Outline(
            "lines",
            (
                Point(cx - w, cy - w), Point(cx + w, cy + w),
                Point(cx - w, cy + w), Point(cx + w, cy - w),
            ),
        )
    ]
