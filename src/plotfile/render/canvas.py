"""Framework-agnostic drawing types and the Plotter protocol.

Defines the value types shared by every backend and the operation set each
concrete backend (EPS, SVG, PNG) implements, so the dispatch layer in
:mod:`plotfile.plotter` can forward calls without knowing the active output
format.

Coordinates are always given in the unified system: origin at the lower
left, x to the right, y upwards, in native units of the target format
(points for EPS, pixels for SVG/PNG).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import NamedTuple, Protocol, Sequence, Tuple

Color = Tuple[float, float, float]

PointLike = Sequence[float]


class Point(NamedTuple):
    x: float
    y: float


class LineStyle(IntEnum):
    SOLID = 0
    DASH = 1
    DOT = 2
    DASH_DOT = 3
    DASH_DOT_DOT = 4

    @classmethod
    def coerce(cls, value: int) -> "LineStyle":
        """Return the matching style, treating unknown values as solid."""
        try:
            return cls(int(value))
        except ValueError:
            return cls.SOLID


class MarkerSymbol(IntEnum):
    X = 0
    PLUS = 1
    STAR = 2
    CIRCLE = 3
    SQUARE = 4
    DIAMOND = 5
    TRIANGLE_UP = 6
    TRIANGLE_DOWN = 7

    @classmethod
    def coerce(cls, value: int) -> "MarkerSymbol":
        """Return the matching symbol; out-of-range values draw an X."""
        try:
            return cls(int(value))
        except ValueError:
            return cls.X


@dataclass(slots=True)
class PlotState:
    """Persistent drawing attributes of one open plot.

    Attributes keep their values until reset by the respective setter.
    ``line_width`` holds the value as the backend interprets it (EPS keeps
    the literal value, SVG/PNG the rounded and floored pixel width).
    """

    width: int
    height: int
    color: Color = (0.0, 0.0, 0.0)
    line_width: float = 1.0
    line_style: LineStyle = LineStyle.SOLID
    font_size: float = 12.0


class Plotter(Protocol):
    """The operation set every output backend provides.

    ``open`` is the backend initializer used by the format registry; it
    returns ``None`` when the output cannot be created. All other operations
    act on the open plot. ``finish`` flushes/encodes the output, closes the
    file and must be called exactly once.
    """

    @classmethod
    def open(cls, width: int, height: int, filename: str) -> "Plotter | None":
        ...

    @property
    def state(self) -> PlotState:
        ...

    @property
    def filename(self) -> str:
        ...

    @property
    def closed(self) -> bool:
        ...

    def draw_polyline(self, points: Sequence[PointLike]) -> None:
        ...

    def draw_polygon(self, points: Sequence[PointLike]) -> None:
        ...

    def draw_filled_polygon(self, points: Sequence[PointLike]) -> None:
        ...

    def draw_arc(
        self, cx: float, cy: float, radius: float, start: float, end: float
    ) -> None:
        ...

    def draw_filled_arc(
        self, cx: float, cy: float, radius: float, start: float, end: float
    ) -> None:
        ...

    def draw_curve(self, points: Sequence[PointLike]) -> None:
        ...

    def draw_marker(self, cx: float, cy: float, wd: float, symbol: int) -> None:
        ...

    def draw_text(
        self, x: float, y: float, anchor: str, angle: float, text: str
    ) -> None:
        ...

    def set_font_size(self, size: float) -> None:
        ...

    def set_color(self, r: float, g: float, b: float) -> None:
        ...

    def set_line_width(self, width: float) -> None:
        ...

    def set_line_style(self, style: int) -> None:
        ...

    def finish(self) -> None:
        ...
