"""Demonstration sheet exercising every drawing primitive.

Renders markers, polylines with all dash styles, polygons, anchored and
rotated text, arcs, pie slices and Bezier curves onto a 500x750 page using
only the public :mod:`plotfile` API, so the same sheet can be produced in
each output format for visual comparison::

    python -m plotfile testgraphics.svg
"""

from __future__ import annotations

import math
from typing import List, Tuple

from plotfile import __version__
from plotfile.plotter import (
    draw_arc,
    draw_curve,
    draw_filled_arc,
    draw_filled_polygon,
    draw_marker,
    draw_polygon,
    draw_polyline,
    draw_text,
    set_color,
    set_font_size,
    set_line_style,
    set_line_width,
)
from plotfile.render.canvas import LineStyle, MarkerSymbol, Plotter
from plotfile.render.helpers import ANCHORS

SHEET_WIDTH = 500
SHEET_HEIGHT = 750

_BEZIER_SEGMENTS: Tuple[Tuple[Tuple[float, float], ...], ...] = (
    ((0, 0), (30, 50), (70, 60), (60, 0)),
    ((60, 0), (53, -40), (120, 30), (180, 0)),
    ((180, 0), (270, -45), (140, -40), (260, 10)),
)


def draw_demo_sheet(plot: Plotter | None) -> None:
    """Draw the complete demonstration sheet onto *plot*."""
    w, h = SHEET_WIDTH, SHEET_HEIGHT

    # Title and blue border
    set_font_size(plot, 16)
    draw_text(plot, 0.5 * w, h - 30.0, "s", 0.0, f"plotfile v{__version__} Demo")
    set_font_size(plot, 12)
    set_color(plot, 0.0, 0.0, 1.0)
    set_line_width(plot, 2)
    draw_polygon(plot, [(1.0, 1.0), (w - 1.0, 1.0), (w - 1.0, h - 1.0), (1.0, h - 1.0)])
    set_color(plot, 0.0, 0.0, 0.0)

    yp = h - 80.0
    _markers(plot, yp)
    yp -= 70.0
    _polylines(plot, yp)
    yp -= 90.0
    _polygons(plot, yp)
    yp -= 90.0
    _anchored_texts(plot, yp)
    yp -= 110.0
    _rotated_texts(plot, yp)
    yp -= 100.0
    _arcs(plot, yp)
    yp -= 150.0
    _curves(plot, yp)


def _markers(plot: Plotter | None, yp: float) -> None:
    set_line_width(plot, 1)
    draw_text(plot, 20.0, yp, "w", 0.0, "Markers:")
    for sym in MarkerSymbol:
        draw_marker(plot, 120 + sym * 20, yp, 8.0, sym)
    set_color(plot, 1.0, 0.0, 0.0)
    set_line_width(plot, 2)
    for sym in MarkerSymbol:
        draw_marker(plot, 310 + sym * 20, yp, 12.0, sym)
    set_color(plot, 0.0, 0.0, 0.0)


def _polylines(plot: Plotter | None, yp: float) -> None:
    x, dx, dy = 120.0, 40.0, 50.0
    y = yp - dy / 2
    set_line_width(plot, 0.5)
    draw_text(plot, 20.0, yp, "w", 0.0, "Polylines:")

    # Zigzag with square markers on the vertices
    pts = [(x + i * dx, y + (dy if i % 2 else 0.0)) for i in range(4)]
    set_color(plot, 0.0, 0.0, 1.0)
    draw_polyline(plot, pts)
    for px, py in pts:
        draw_marker(plot, px, py, 4.0, MarkerSymbol.SQUARE)

    # One line per dash style
    x += 150.0
    set_line_width(plot, 1.0)
    set_color(plot, 0.0, 0.6, 0.0)
    for i, style in enumerate(list(LineStyle)[1:]):
        set_line_style(plot, style)
        draw_polyline(plot, [(x, y + i * 16.0), (x + 100.0, y + i * 16.0)])
    set_line_style(plot, LineStyle.SOLID)

    # Thick spiral
    x += 125.0
    spiral = [
        (x, y), (x, y + 50), (x + 50, y + 50), (x + 50, y),
        (x + 20, y), (x + 20, y + 30), (x + 30, y + 30), (x + 30, y + 10),
    ]
    set_color(plot, 0.8, 0.8, 0.0)
    set_line_width(plot, 5)
    draw_polyline(plot, spiral)
    set_color(plot, 0.0, 0.0, 0.0)
    set_line_width(plot, 1)


def _polygons(plot: Plotter | None, y: float) -> None:
    draw_text(plot, 20.0, y, "w", 0.0, "Polygons:")

    x = 120.0
    set_line_width(plot, 3)
    draw_polygon(plot, [(x, y - 20), (x + 60, y - 20), (x + 30, y + 30)])

    x += 100.0
    set_color(plot, 0.9, 0.2, 0.2)
    set_line_width(plot, 0.5)
    draw_polygon(
        plot,
        [(x, y), (x + 20, y + 20), (x + 100, y + 30), (x + 80, y - 10), (x + 40, y - 30)],
    )

    x += 170.0
    set_color(plot, 0.5, 0.5, 1.0)
    draw_filled_polygon(
        plot,
        [(x, y), (x - 30, y + 20), (x + 40, y + 30), (x + 70, y - 10), (x - 20, y - 30)],
    )
    set_color(plot, 0.0, 0.0, 0.0)


def _anchored_texts(plot: Plotter | None, yp: float) -> None:
    draw_text(plot, 20.0, yp, "w", 0.0, "Anchored texts:")
    x, y = 50.0, yp - 60.0
    set_font_size(plot, 10)
    for num in range(1, 10):
        if (num - 1) % 3 == 0:
            x, y = 50.0, y + 30.0
        x += 120.0
        set_color(plot, 0.0, 0.0, 0.0)
        draw_text(plot, x, y, ANCHORS[num], 0.0, "Textstring")
        set_color(plot, 1.0, 0.0, 0.0)
        draw_marker(plot, x, y, 10.0, MarkerSymbol.PLUS)
    set_font_size(plot, 12)
    set_color(plot, 0.0, 0.0, 0.0)


def _rotated_texts(plot: Plotter | None, yp: float) -> None:
    draw_text(plot, 20.0, yp, "w", 0.0, "Rotated,")
    draw_text(plot, 20.0, yp - 14, "w", 0.0, "colored texts:")
    set_font_size(plot, 11)
    c = 1.0
    for angle in range(15, 360, 30):
        set_color(plot, 1.0 - c, c, 0.0)
        draw_text(plot, 260.0, yp, "w", float(angle), "Textstring")
        c -= 1.0 / 11.0
    set_font_size(plot, 12)
    set_color(plot, 0.0, 0.0, 0.0)


def _arcs(plot: Plotter | None, yp: float) -> None:
    draw_text(plot, 20.0, yp, "w", 0.0, "Circular")
    draw_text(plot, 20.0, yp - 14, "w", 0.0, "arcs:")

    # Nested arcs, widening sectors
    x, y, r, s, e, c = 160.0, yp - 30.0, 70.0, 60.0, 210.0, 1.0
    for _ in range(8):
        set_color(plot, 0.0, c, 1.0)
        draw_arc(plot, x, y, r, s, e)
        x, y, r = x + 2.0, y - 2.0, r * 0.75
        s, e, c = s - 15.0, e + 15.0, c - 1.0 / 8.0

    # Two pie slices, the second pushed out a little
    x, y, r, s, e = 270.0, yp - 30.0, 50.0, 210.0, 310.0
    set_color(plot, 0.7, 0.3, 0.8)
    draw_filled_arc(plot, x, y, r, s, e)
    mid = math.radians(0.5 * (s + e))
    x -= 5.0 * math.cos(mid)
    y -= 5.0 * math.sin(mid)
    set_color(plot, 0.8, 0.4, 0.2)
    draw_filled_arc(plot, x, y, r, e - 360.0, s)

    # Stacked filled circles
    x, y, r, c = 410.0, yp - 20.0, 70.0, 1.0
    for _ in range(8):
        set_color(plot, 0.0, c, 0.0)
        draw_filled_arc(plot, x, y, r, 0.0, 360.0)
        x, y, r, c = x + 2.0, y - 2.0, r * 0.75, c * 0.8
    set_color(plot, 0.0, 0.0, 0.0)


def _curves(plot: Plotter | None, yp: float) -> None:
    grey = 0.6
    draw_text(plot, 20.0, yp, "w", 0.0, "Cubic")
    draw_text(plot, 20.0, yp - 14, "w", 0.0, "Bézier curves:")

    for seg in _BEZIER_SEGMENTS:
        pts: List[Tuple[float, float]] = [(160.0 + dx, yp + dy) for dx, dy in seg]
        # Control polygon
        set_line_width(plot, 0.5)
        set_color(plot, grey, grey, grey)
        set_line_style(plot, LineStyle.DASH)
        draw_polyline(plot, pts)
        set_line_style(plot, LineStyle.SOLID)
        for i, (px, py) in enumerate(pts):
            sym = MarkerSymbol.CIRCLE if i % 3 else MarkerSymbol.SQUARE
            draw_marker(plot, px, py, 3.0, sym)
        # Curve
        set_line_width(plot, 2)
        set_color(plot, 1.0, 0.0, 0.0)
        draw_curve(plot, pts)
