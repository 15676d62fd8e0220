"""PNG raster backend built on Pillow.

Drawing happens on an in-memory RGB image that is encoded to PNG by
:meth:`PNGPlotter.finish`. For antialiasing the image is allocated
``supersample`` times larger than requested and downsampled with a Lanczos
filter when the plot is finished; a factor of 1 gives aliased output.

Pillow's image origin is the top left corner, so y is flipped. Its arcs run
clockwise from 3 o'clock, hence both angle bounds become ``360 - angle``.
Pillow has no cubic curve primitive: curves are flattened into chords (see
:mod:`plotfile.render.bezier`). Dashed strokes are produced by walking each
path with an on/off cell pattern, one native pixel per cell.
"""

from __future__ import annotations

import logging
import math
from typing import Any, BinaryIO, List, Sequence, Tuple

from PIL import Image, ImageDraw, ImageFont

from plotfile.backends.base import BasePlotter
from plotfile.config import get_runtime
from plotfile.render.bezier import flatten
from plotfile.render.canvas import LineStyle, MarkerSymbol, Point
from plotfile.render.fonts import resolve_font
from plotfile.render.helpers import rgb255, rnd
from plotfile.render.markers import marker_outlines
from plotfile.settings.values import RASTER_DASH_CELLS

__all__ = ["PNGPlotter"]

logger = logging.getLogger(__name__)

PixelPoint = Tuple[float, float]

_WHITE = (255, 255, 255)


class _FontCache:
    """Per-plot cache of loaded TrueType faces keyed by pixel size."""

    fonts: dict[int, Any]

    def __init__(self, path: str | None) -> None:
        self.path = path
        self.fonts = {}

    def get(self, size_px: int) -> Any:
        """Return the face at *size_px*; raises ``OSError`` if unreadable."""
        f = self.fonts.get(size_px)
        if f is None:
            f = ImageFont.truetype(self.path, size_px)
            self.fonts[size_px] = f
        return f


class PNGPlotter(BasePlotter):
    """Plotter rendering into a PNG image."""

    format_name = "Portable Network Graphics, true-color raster image (PNG 1.2)"

    def __init__(
        self,
        fp: BinaryIO,
        img: Image.Image,
        width: int,
        height: int,
        filename: str,
        supersample: int = 1,
        font_path: str | None = None,
        font_size: float = 12.0,
        tolerance: float = 1.0,
        max_depth: int = 16,
    ) -> None:
        super().__init__(width, height, filename, font_size=font_size)
        self._fp = fp
        self._img: Image.Image | None = img
        self._draw = ImageDraw.Draw(img)
        self._s = supersample
        self._fonts = _FontCache(font_path)
        self._tol = tolerance
        self._max_depth = max_depth

    @classmethod
    def open(cls, width: int, height: int, filename: str) -> "PNGPlotter | None":
        settings = get_runtime().settings
        s = settings.raster_supersample
        try:
            img = Image.new("RGB", (width * s, height * s), _WHITE)
        except (MemoryError, ValueError) as e:
            logger.error("can't create in-memory image %dx%d: %s", width, height, e)
            return None
        try:
            fp = open(filename, "wb")
        except OSError as e:
            logger.error("can't open output image '%s': %s", filename, e)
            img.close()
            return None
        return cls(
            fp,
            img,
            width,
            height,
            filename,
            supersample=s,
            font_path=resolve_font(),
            font_size=settings.default_font_size,
            tolerance=settings.bezier_tolerance,
            max_depth=settings.bezier_max_depth,
        )

    # --- Coordinate and style helpers -------------------------------------
    def _px(self, p: Point) -> Tuple[int, int]:
        s = self._s
        return rnd(p.x * s), rnd((self._state.height - p.y) * s)

    def _rgb(self) -> Tuple[int, int, int]:
        return rgb255(self._state.color)

    def _width_px(self) -> int:
        return int(self._state.line_width) * self._s

    def _stroke(
        self, pts: Sequence[PixelPoint], closed: bool = False, solid: bool = False
    ) -> None:
        """Stroke the pixel path *pts* with the current width and style."""
        path = list(pts)
        if closed:
            path.append(path[0])
        style = LineStyle.SOLID if solid else self._state.line_style
        if style is LineStyle.SOLID:
            self._draw.line(path, fill=self._rgb(), width=self._width_px())
        else:
            self._dashed(path, RASTER_DASH_CELLS[style])

    def _dashed(self, path: List[PixelPoint], cells: Sequence[int]) -> None:
        # Pattern phase starts fresh for every stroked path
        unit = float(self._s)
        n = len(cells)
        col = self._rgb()
        width = self._width_px()
        pos = 0.0
        run: List[PixelPoint] = []
        for (x0, y0), (x1, y1) in zip(path, path[1:]):
            seg = math.hypot(x1 - x0, y1 - y0)
            done = 0.0
            while done < seg:
                step = min(unit - pos % unit, seg - done)
                on = cells[int(pos // unit) % n]
                t0, t1 = done / seg, (done + step) / seg
                a = (x0 + (x1 - x0) * t0, y0 + (y1 - y0) * t0)
                b = (x0 + (x1 - x0) * t1, y0 + (y1 - y0) * t1)
                if on:
                    if not run:
                        run.append(a)
                    run.append(b)
                elif run:
                    self._draw.line(run, fill=col, width=width)
                    run = []
                done += step
                pos += step
        if run:
            self._draw.line(run, fill=col, width=width)

    def _bbox(self, cx: float, cy: float, r: float) -> List[int]:
        x, y = self._px(Point(cx, cy))
        rr = max(0, rnd(r * self._s))
        return [x - rr, y - rr, x + rr, y + rr]

    def _arc_points(
        self, cx: float, cy: float, r: float, start: float, end: float
    ) -> List[Tuple[int, int]]:
        while end < start:
            end += 360.0
        steps = max(1, math.ceil(end - start))
        pts = []
        for i in range(steps + 1):
            a = math.radians(start + (end - start) * i / steps)
            pts.append(self._px(Point(cx + r * math.cos(a), cy + r * math.sin(a))))
        return pts

    # --- Hooks -------------------------------------------------------------
    def _emit_polyline(self, pts: List[Point]) -> None:
        self._stroke([self._px(p) for p in pts])

    def _emit_polygon(self, pts: List[Point]) -> None:
        self._stroke([self._px(p) for p in pts], closed=True)

    def _emit_filled_polygon(self, pts: List[Point]) -> None:
        px = [self._px(p) for p in pts]
        self._draw.polygon(px, fill=self._rgb())
        self._stroke(px, closed=True, solid=True)

    def _emit_arc(
        self, cx: float, cy: float, r: float, start: float, end: float
    ) -> None:
        if self._state.line_style is not LineStyle.SOLID:
            self._stroke(self._arc_points(cx, cy, r, start, end))
            return
        self._draw.arc(
            self._bbox(cx, cy, r),
            360.0 - end,
            360.0 - start,
            fill=self._rgb(),
            width=self._width_px(),
        )

    def _emit_filled_arc(
        self, cx: float, cy: float, r: float, start: float, end: float
    ) -> None:
        bbox = self._bbox(cx, cy, r)
        self._draw.pieslice(bbox, 360.0 - end, 360.0 - start, fill=self._rgb())
        self._draw.arc(
            bbox, 360.0 - end, 360.0 - start, fill=self._rgb(), width=self._width_px()
        )

    def _emit_curve(self, pts: List[Point]) -> None:
        chords = list(flatten(pts, self._tol, self._max_depth))
        if not chords:
            return
        path = [self._px(chords[0][0])] + [self._px(b) for _, b in chords]
        self._stroke(path)

    def _emit_marker(
        self, cx: float, cy: float, wd: float, symbol: MarkerSymbol
    ) -> None:
        w = rnd(0.5 * wd)
        if w < 1:
            return
        for part in marker_outlines(cx, cy, w, symbol):
            if part.kind == "circle":
                self._draw.ellipse(
                    self._bbox(part.points[0].x, part.points[0].y, part.radius),
                    outline=self._rgb(),
                    width=self._width_px(),
                )
            elif part.kind == "polygon":
                self._stroke([self._px(p) for p in part.points], closed=True, solid=True)
            else:
                for a, b in zip(part.points[::2], part.points[1::2]):
                    self._stroke([self._px(a), self._px(b)], solid=True)

    def _emit_text(
        self, x: float, y: float, anchor_num: int, angle: float, text: str
    ) -> None:
        if self._fonts.path is None:
            logger.debug("no font available, text %r skipped", text)
            return
        if not text:
            return
        try:
            font = self._fonts.get(max(1, rnd(self._state.font_size * self._s)))
            # Dry run: ink box relative to the baseline origin, y down
            left, top, right, bottom = font.getbbox(text, anchor="ls")
        except (OSError, ValueError) as e:
            logger.error("font error while measuring %r: %s", text, e)
            return

        col = (anchor_num - 1) % 3
        row = (anchor_num - 1) // 3
        ax = (left, 0.5 * (left + right), right)[col]
        ay = (bottom, 0.5 * (top + bottom), top)[row]
        # Rotate the anchor offset counterclockwise (as seen on screen)
        c = math.cos(math.radians(angle))
        s = math.sin(math.radians(angle))
        rx = ax * c + ay * s
        ry = -ax * s + ay * c
        px, py = self._px(Point(x, y))
        ox, oy = px - rx, py - ry

        reach = max(math.hypot(u, v) for u in (left, right) for v in (top, bottom))
        half = int(math.ceil(reach)) + 2
        try:
            mask = Image.new("L", (2 * half, 2 * half), 0)
            ImageDraw.Draw(mask).text((half, half), text, fill=255, font=font, anchor="ls")
            if abs(angle) > 1e-5:
                mask = mask.rotate(
                    angle, resample=Image.Resampling.BICUBIC, center=(half, half)
                )
            self._img.paste(self._rgb(), (rnd(ox) - half, rnd(oy) - half), mask)
        except (OSError, ValueError) as e:
            logger.error("font error while rendering %r: %s", text, e)

    def _line_width_value(self, width: float) -> float:
        return float(max(1, rnd(width)))

    def _emit_finish(self) -> None:
        img = self._img
        out: Image.Image | None = None
        try:
            if img is None:
                return
            if self._s > 1:
                out = img.resize(
                    (self._state.width, self._state.height), Image.Resampling.LANCZOS
                )
            else:
                out = img
            out.save(self._fp, format="PNG")
        finally:
            self._fp.close()
            if out is not None and out is not img:
                out.close()
            if img is not None:
                img.close()
            self._img = None
