"""Scalable Vector Graphics 1.1 backend.

One SVG element is written per drawing call. Attribute setters only change
the in-memory state; each element re-reads it and leaves out
``stroke-width``/``stroke-dasharray`` when they have their default values
(1 and ``none``).

SVG has its origin at the top left, so every y coordinate is written as
``height - y``. Text rotation is negated for the same reason.
"""

from __future__ import annotations

import logging
import math
from typing import List, TextIO
from xml.sax.saxutils import escape

from plotfile.backends.base import BasePlotter
from plotfile.config import get_runtime
from plotfile.render.canvas import MarkerSymbol, Point
from plotfile.render.helpers import rgb255, rnd
from plotfile.render.markers import marker_outlines
from plotfile.settings.values import SVG_BASELINE, SVG_DASH_ARRAYS, SVG_TEXT_ANCHOR

__all__ = ["SVGPlotter"]

logger = logging.getLogger(__name__)

_SVG_NS = "http://www.w3.org/2000/svg"
_EPS = 1.0e-5
_QUOTE = {'"': "&quot;"}


def _fmt(value: float) -> str:
    return f"{value:.2f}"


class SVGPlotter(BasePlotter):
    """Plotter writing an SVG document."""

    format_name = "Scalable Vector Graphics (SVG 1.1)"

    def __init__(
        self,
        fp: TextIO,
        width: int,
        height: int,
        filename: str,
        font: str = "Verdana",
        font_size: float = 12.0,
    ) -> None:
        super().__init__(width, height, filename, font_size=float(int(font_size)))
        self._fp = fp
        self._font = font

    @classmethod
    def open(cls, width: int, height: int, filename: str) -> "SVGPlotter | None":
        settings = get_runtime().settings
        try:
            fp = open(filename, "w", encoding="utf-8", newline="\n")
        except OSError as e:
            logger.error("can't open output plot file '%s': %s", filename, e)
            return None
        plot = cls(
            fp,
            width,
            height,
            filename,
            font=settings.svg_font,
            font_size=settings.default_font_size,
        )
        try:
            plot._write_preamble()
        except OSError as e:
            logger.error("can't write SVG header to '%s': %s", filename, e)
            fp.close()
            return None
        return plot

    # --- Output helpers ----------------------------------------------------
    def _emit(self, s: str) -> None:
        self._fp.write(s + "\n")

    def _write_preamble(self) -> None:
        w, h = self._state.width, self._state.height
        self._emit('<?xml version="1.0" encoding="UTF-8"?>')
        self._emit(
            '<!DOCTYPE svg PUBLIC "-//W3C//DTD SVG 1.1//EN" '
            '"http://www.w3.org/Graphics/SVG/1.1/DTD/svg11.dtd">'
        )
        self._emit(
            f'<svg xmlns="{_SVG_NS}" version="1.1" '
            f'width="{w}" height="{h}" viewBox="0 0 {w} {h}">'
        )
        self._emit(f"<title>{escape(self._filename)}</title>")
        # White background
        self._emit(
            f'<path d="M 0.00 0.00 L 0.00 {_fmt(h)} L {_fmt(w)} {_fmt(h)} '
            f'L {_fmt(w)} 0.00 z" fill="#FFFFFF" stroke="#FFFFFF"/>'
        )

    def _y(self, y: float) -> float:
        return self._state.height - y

    def _xy(self, p: Point) -> str:
        return f"{_fmt(p.x)} {_fmt(self._y(p.y))}"

    def _color(self) -> str:
        r, g, b = rgb255(self._state.color)
        return f"#{r:02X}{g:02X}{b:02X}"

    def _stroke(self, dashed: bool = True) -> str:
        out = f'stroke="{self._color()}"'
        lw = int(self._state.line_width)
        if lw != 1:
            out += f' stroke-width="{lw}"'
        dash = SVG_DASH_ARRAYS[self._state.line_style]
        if dashed and dash != "none":
            out += f' stroke-dasharray="{dash}"'
        return out

    def _arc_path(
        self, cx: float, cy: float, r: float, start: float, end: float
    ) -> tuple[str, Point]:
        # Drawn clockwise in SVG space, i.e. from the end angle back to start
        a0 = math.radians(end)
        a1 = math.radians(start)
        p0 = Point(cx + r * math.cos(a0), cy + r * math.sin(a0))
        p1 = Point(cx + r * math.cos(a1), cy + r * math.sin(a1))
        da = end - start
        if da < 0:
            da += 360
        large = 1 if da > 180 else 0
        d = f"M {self._xy(p0)} A {_fmt(r)} {_fmt(r)} 0 {large} 1 {self._xy(p1)}"
        return d, p0

    def _circle(self, cx: float, cy: float, r: float) -> str:
        return f'<circle cx="{int(cx)}" cy="{int(self._y(cy))}" r="{int(r)}"'

    # --- Hooks -------------------------------------------------------------
    def _emit_polyline(self, pts: List[Point]) -> None:
        if len(pts) == 2:
            a, b = pts
            self._emit(
                f'<line x1="{_fmt(a.x)}" y1="{_fmt(self._y(a.y))}" '
                f'x2="{_fmt(b.x)}" y2="{_fmt(self._y(b.y))}" {self._stroke()}/>'
            )
            return
        points = " ".join(self._xy(p) for p in pts)
        self._emit(f'<polyline points="{points}" fill="none" {self._stroke()}/>')

    def _emit_polygon(self, pts: List[Point]) -> None:
        points = " ".join(self._xy(p) for p in pts)
        self._emit(f'<polygon points="{points}" fill="none" {self._stroke()}/>')

    def _emit_filled_polygon(self, pts: List[Point]) -> None:
        points = " ".join(self._xy(p) for p in pts)
        self._emit(
            f'<polygon points="{points}" fill="{self._color()}" {self._stroke()}/>'
        )

    def _emit_arc(
        self, cx: float, cy: float, r: float, start: float, end: float
    ) -> None:
        if start == 0 and end == 360:
            self._emit(f'{self._circle(cx, cy, r)} fill="none" {self._stroke()}/>')
            return
        d, _ = self._arc_path(cx, cy, r, start, end)
        self._emit(f'<path d="{d}" fill="none" {self._stroke()}/>')

    def _emit_filled_arc(
        self, cx: float, cy: float, r: float, start: float, end: float
    ) -> None:
        fill = f'fill="{self._color()}"'
        if start == 0 and end == 360:
            self._emit(f"{self._circle(cx, cy, r)} {fill} {self._stroke()}/>")
            return
        d, first = self._arc_path(cx, cy, r, start, end)
        d += f" L {self._xy(Point(cx, cy))} L {self._xy(first)} z"
        self._emit(f'<path d="{d}" {fill} {self._stroke()}/>')

    def _emit_curve(self, pts: List[Point]) -> None:
        d = f"M {self._xy(pts[0])} C " + " ".join(self._xy(p) for p in pts[1:])
        self._emit(f'<path d="{d}" fill="none" {self._stroke()}/>')

    def _emit_marker(
        self, cx: float, cy: float, wd: float, symbol: MarkerSymbol
    ) -> None:
        stroke = self._stroke(dashed=False)
        for part in marker_outlines(cx, cy, 0.5 * wd, symbol):
            if part.kind == "circle":
                c = part.points[0]
                self._emit(f'{self._circle(c.x, c.y, part.radius)} fill="none" {stroke}/>')
                continue
            if part.kind == "polygon":
                d = f"M {self._xy(part.points[0])} "
                d += " ".join(f"L {self._xy(p)}" for p in part.points[1:]) + " z"
            else:
                d = " ".join(
                    f"{'L' if i % 2 else 'M'} {self._xy(p)}"
                    for i, p in enumerate(part.points)
                )
            self._emit(f'<path d="{d}" fill="none" {stroke}/>')

    def _emit_text(
        self, x: float, y: float, anchor_num: int, angle: float, text: str
    ) -> None:
        transform = f"translate({_fmt(x)},{_fmt(self._y(y))})"
        if abs(angle) > _EPS:
            transform += f" rotate({_fmt(-angle)})"
        self._emit(
            f'<text transform="{transform}" font-family="{escape(self._font, _QUOTE)}" '
            f'font-size="{int(self._state.font_size)}" fill="{self._color()}" '
            f'text-anchor="{SVG_TEXT_ANCHOR[anchor_num]}" '
            f'dominant-baseline="{SVG_BASELINE[anchor_num]}">'
            f"{escape(text)}</text>"
        )

    def _font_size_value(self, size: float) -> float:
        return float(int(size))

    def _line_width_value(self, width: float) -> float:
        return float(max(1, rnd(width)))

    def _emit_finish(self) -> None:
        try:
            self._fp.write("</svg>\n")
        finally:
            self._fp.close()
