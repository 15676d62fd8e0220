"""Encapsulated PostScript backend (PS-Adobe-3.0 EPSF-3.0).

Every drawing call is written straight to the output file as a short
sequence of PostScript operators. The prolog defines one- and two-letter
aliases for the operators used (``m`` moveto, ``l`` lineto, ``s`` stroke,
...) and nine text procedures ``T1``..``T9``, one per anchor position, that
measure the string with ``stringwidth`` and the cap height ``FH`` of the
current font before showing it.

PostScript already has its origin at the lower left, so coordinates are
written unchanged. Text is written as Latin-1; characters outside that
range become ``?``.
"""

from __future__ import annotations

import logging
import time
from typing import List, TextIO

from plotfile.backends.base import BasePlotter
from plotfile.config import get_runtime
from plotfile.render.canvas import MarkerSymbol, Point
from plotfile.render.markers import marker_outlines
from plotfile.settings.values import EPS_DASH_ARRAYS

__all__ = ["EPSPlotter", "escape_ps_string"]

logger = logging.getLogger(__name__)

# Offset (relative moveto) applied by the anchor procedures T2..T9; B is the
# string width, FH the cap height of the current font.
_ANCHOR_OFFSETS = {
    2: "B 2 div neg 0",
    3: "B neg 0",
    4: "0 FH 2 div neg",
    5: "B 2 div neg FH 2 div neg",
    6: "B neg FH 2 div neg",
    7: "0 FH neg",
    8: "B 2 div neg FH neg",
    9: "B neg FH neg",
}

_PROLOG_ALIASES = (
    ("g", "gsave"),
    ("G", "grestore"),
    ("P", "currentpoint"),
    ("a", "arc"),
    ("C", "curveto"),
    ("c", "setrgbcolor"),
    ("d", "0 setdash"),
    ("f", "fill"),
    ("l", "lineto"),
    ("m", "moveto"),
    ("rm", "rmoveto"),
    ("n", "newpath"),
    ("p", "closepath"),
    ("r", "rotate"),
    ("s", "stroke"),
    ("t", "translate"),
    ("T", "m show"),
)

_CALC_FH = """\
%
% calculate character height FH of current font
/calc_FH {g n 0 0 m
   (M) true charpath flattenpath pathbbox
   ceiling /FH exch def pop pop pop
   G} def
%
% change encoding to ISO8859-1
/ISOfindfont {
   dup 100 string cvs (ISO-) exch concatstrings cvn exch
   findfont dup maxlength dict begin
     { 1 index /FID ne {def}{pop pop} ifelse } forall
     /Encoding ISOLatin1Encoding def
     currentdict
   end definefont} def
%
"""


def escape_ps_string(text: str) -> str:
    """Escape backslash and parentheses for a PostScript string literal."""
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def _xy(p: Point) -> str:
    return f"{p.x:.2f} {p.y:.2f}"


class EPSPlotter(BasePlotter):
    """Plotter writing an EPS document."""

    format_name = "Encapsulated Postscript vector graphics (PS-Adobe-3.0 EPSF-3.0)"

    def __init__(
        self,
        fp: TextIO,
        width: int,
        height: int,
        filename: str,
        font: str = "Helvetica",
        font_size: float = 12.0,
    ) -> None:
        super().__init__(width, height, filename, font_size=float(int(font_size)))
        self._fp = fp
        self._font = font
        # Setup block selects 0.5 units, not the nominal default of 1
        self._state.line_width = 0.5

    @classmethod
    def open(cls, width: int, height: int, filename: str) -> "EPSPlotter | None":
        settings = get_runtime().settings
        try:
            fp = open(filename, "w", encoding="latin-1", errors="replace", newline="\n")
        except OSError as e:
            logger.error("can't open output plot file '%s': %s", filename, e)
            return None
        plot = cls(
            fp,
            width,
            height,
            filename,
            font=settings.eps_font,
            font_size=settings.default_font_size,
        )
        try:
            plot._write_preamble()
        except OSError as e:
            logger.error("can't write EPS preamble to '%s': %s", filename, e)
            fp.close()
            return None
        return plot

    # --- Output helpers ----------------------------------------------------
    def _emit(self, s: str) -> None:
        self._fp.write(s + "\n")

    def _write_preamble(self) -> None:
        st = self._state
        self._emit("%!PS-Adobe-3.0 EPSF-3.0")
        self._emit(f"%%Title: {self._filename}")
        self._emit("%%Creator: plotfile")
        self._emit(f"%%CreationDate: {time.ctime()}")
        self._emit(f"%%BoundingBox: 0 0 {st.width} {st.height}")
        self._emit("%%Pages: 1")
        self._emit("%%EndComments")
        self._emit("%%BeginProlog")
        for name, op in _PROLOG_ALIASES:
            self._emit(f"/{name} {{{op}}} bind def")
        self._emit("/T1 {/A exch def m g P t A r show G} bind def")
        for num in range(2, 10):
            self._emit(f"/T{num} {{/A exch def /Y exch def /X exch def /S exch def")
            self._emit("     S stringwidth pop /B exch def")
            self._emit("     X Y m g P t A r")
            self._emit(f"     {_ANCHOR_OFFSETS[num]} rm S show G}} bind def")
        self._emit("/w {setlinewidth} bind def")
        self._fp.write(_CALC_FH)
        self._emit("%%EndProlog")
        self._emit("%%BeginSetup")
        self._emit("0.5 w")
        self._emit("3 setmiterlimit")
        self._emit("0 0 0 c")
        self._emit(self._font_command())
        self._emit("%%EndSetup")
        self._emit("")
        self._emit("%%Page: 1 1")

    def _font_command(self) -> str:
        size = int(self._state.font_size)
        return f"/{self._font} ISOfindfont {size} scalefont setfont calc_FH"

    def _path(self, pts: List[Point]) -> None:
        self._emit(f"{_xy(pts[0])} m")
        for p in pts[1:]:
            self._emit(f"{_xy(p)} l")

    # --- Hooks -------------------------------------------------------------
    def _emit_polyline(self, pts: List[Point]) -> None:
        self._emit("n")
        self._path(pts)
        self._emit("s")

    def _emit_polygon(self, pts: List[Point]) -> None:
        self._emit("n")
        self._path(pts)
        self._emit("p s")

    def _emit_filled_polygon(self, pts: List[Point]) -> None:
        self._emit("n")
        self._path(pts)
        self._emit("p g f G s")

    def _emit_arc(
        self, cx: float, cy: float, r: float, start: float, end: float
    ) -> None:
        self._emit(f"n {cx:.2f} {cy:.2f} {r:.2f} {start:.2f} {end:.2f} a s")

    def _emit_filled_arc(
        self, cx: float, cy: float, r: float, start: float, end: float
    ) -> None:
        self._emit(f"n {cx:.2f} {cy:.2f} m")
        self._emit(f"{cx:.2f} {cy:.2f} {r:.2f} {start:.2f} {end:.2f} a")
        self._emit(f"{cx:.2f} {cy:.2f} l")
        self._emit("p g f G s")

    def _emit_curve(self, pts: List[Point]) -> None:
        self._emit(f"{_xy(pts[0])} m")
        self._emit(" ".join(_xy(p) for p in pts[1:]) + " C s")

    def _emit_marker(
        self, cx: float, cy: float, wd: float, symbol: MarkerSymbol
    ) -> None:
        for part in marker_outlines(cx, cy, 0.5 * wd, symbol):
            if part.kind == "circle":
                c = part.points[0]
                self._emit(f"n {_xy(c)} {part.radius:.2f} 0.00 360.00 a s")
                continue
            if part.kind == "polygon":
                ops = ["m"] + ["l"] * (len(part.points) - 1)
            else:
                ops = ["m", "l"] * (len(part.points) // 2)
            lines = [f"{_xy(p)} {op}" for p, op in zip(part.points, ops)]
            lines[0] = "n " + lines[0]
            lines[-1] += " p s" if part.kind == "polygon" else " s"
            for line in lines:
                self._emit(line)

    def _emit_text(
        self, x: float, y: float, anchor_num: int, angle: float, text: str
    ) -> None:
        self._emit(f"({escape_ps_string(text)}) {x:.2f} {y:.2f} {angle:.2f} T{anchor_num}")

    def _font_size_value(self, size: float) -> float:
        return float(int(size))

    def _emit_font_size(self) -> None:
        self._emit(self._font_command())

    def _emit_color(self) -> None:
        r, g, b = self._state.color
        self._emit(f"{r:.3f} {g:.3f} {b:.3f} c")

    def _emit_line_width(self) -> None:
        self._emit(f"{self._state.line_width:.2f} w")

    def _emit_line_style(self) -> None:
        self._emit(f"{EPS_DASH_ARRAYS[self._state.line_style]} d")

    def _emit_finish(self) -> None:
        try:
            self._fp.write("\nshowpage\n%%EOF\n")
        finally:
            self._fp.close()
