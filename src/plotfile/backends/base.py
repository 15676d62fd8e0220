"""Shared bookkeeping for the concrete plot backends.

:class:`BasePlotter` implements the public :class:`~plotfile.render.canvas.Plotter`
operations once: it validates input, keeps the persistent
:class:`~plotfile.render.canvas.PlotState`, guards against use after
:meth:`finish` and converts filesystem errors into log messages. Subclasses
only provide ``open`` and the ``_emit_*`` hooks that write the
format-specific output.
"""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Callable, ClassVar, List, Sequence

from plotfile.render.canvas import LineStyle, MarkerSymbol, PlotState, Point, PointLike
from plotfile.render.helpers import anchor_num_of, clamp_color

__all__ = ["BasePlotter"]

logger = logging.getLogger(__name__)


def _as_points(points: Sequence[PointLike]) -> List[Point]:
    return [Point(float(p[0]), float(p[1])) for p in points]


class BasePlotter:
    """Common state handling; see the module docstring."""

    #: Human readable format name, used in log messages.
    format_name: ClassVar[str] = ""

    def __init__(
        self, width: int, height: int, filename: str, font_size: float = 12.0
    ) -> None:
        self._state = PlotState(width=width, height=height, font_size=font_size)
        self._filename = filename
        self._closed = False

    # --- Protocol properties -----------------------------------------------
    @property
    def state(self) -> PlotState:
        return self._state

    @property
    def filename(self) -> str:
        return self._filename

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self) -> "BasePlotter":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.finish()

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        st = self._state
        return (
            f"{type(self).__name__}({self._filename!r}, {st.width}x{st.height}, "
            f"closed={self._closed})"
        )

    # --- Drawing -----------------------------------------------------------
    def draw_polyline(self, points: Sequence[PointLike]) -> None:
        pts = _as_points(points)
        if len(pts) >= 2:
            self._run("polyline", self._emit_polyline, pts)

    def draw_polygon(self, points: Sequence[PointLike]) -> None:
        pts = _as_points(points)
        if len(pts) >= 2:
            self._run("polygon", self._emit_polygon, pts)

    def draw_filled_polygon(self, points: Sequence[PointLike]) -> None:
        pts = _as_points(points)
        if len(pts) >= 2:
            self._run("filled polygon", self._emit_filled_polygon, pts)

    def draw_arc(
        self, cx: float, cy: float, radius: float, start: float, end: float
    ) -> None:
        self._run(
            "arc", self._emit_arc, float(cx), float(cy), float(radius),
            float(start), float(end),
        )

    def draw_filled_arc(
        self, cx: float, cy: float, radius: float, start: float, end: float
    ) -> None:
        self._run(
            "filled arc", self._emit_filled_arc, float(cx), float(cy),
            float(radius), float(start), float(end),
        )

    def draw_curve(self, points: Sequence[PointLike]) -> None:
        if len(points) != 4:
            logger.warning(
                "curve needs exactly 4 control points, got %d; ignored", len(points)
            )
            return
        self._run("curve", self._emit_curve, _as_points(points))

    def draw_marker(self, cx: float, cy: float, wd: float, symbol: int) -> None:
        self._run(
            "marker", self._emit_marker, float(cx), float(cy), float(wd),
            MarkerSymbol.coerce(symbol),
        )

    def draw_text(
        self, x: float, y: float, anchor: str, angle: float, text: str
    ) -> None:
        if self._closed:
            self._warn_closed("text")
            return
        self._run(
            "text", self._emit_text, float(x), float(y), anchor_num_of(anchor),
            float(angle), str(text),
        )

    # --- Attributes --------------------------------------------------------
    def set_font_size(self, size: float) -> None:
        if self._closed:
            self._warn_closed("font size")
            return
        self._state.font_size = self._font_size_value(float(size))
        self._run("font size", self._emit_font_size)

    def set_color(self, r: float, g: float, b: float) -> None:
        if self._closed:
            self._warn_closed("color")
            return
        self._state.color = clamp_color(r, g, b)
        self._run("color", self._emit_color)

    def set_line_width(self, width: float) -> None:
        if self._closed:
            self._warn_closed("line width")
            return
        self._state.line_width = self._line_width_value(float(width))
        self._run("line width", self._emit_line_width)

    def set_line_style(self, style: int) -> None:
        if self._closed:
            self._warn_closed("line style")
            return
        self._state.line_style = LineStyle.coerce(style)
        self._run("line style", self._emit_line_style)

    def finish(self) -> None:
        """Complete the output and close the file. Later calls do nothing."""
        if self._closed:
            logger.debug("%s already finished", self._filename)
            return
        self._closed = True
        try:
            self._emit_finish()
        except OSError as e:
            logger.error("failed to finish plot file '%s': %s", self._filename, e)

    # --- Internals ---------------------------------------------------------
    def _run(self, what: str, fn: Callable[..., None], *args: object) -> None:
        if self._closed:
            self._warn_closed(what)
            return
        try:
            fn(*args)
        except OSError as e:
            logger.error("%s: cannot draw %s: %s", self._filename, what, e)

    def _warn_closed(self, what: str) -> None:
        logger.warning("%s: %s ignored, plot already finished", self._filename, what)

    def _font_size_value(self, size: float) -> float:
        return size

    def _line_width_value(self, width: float) -> float:
        return width

    # --- Hooks for subclasses ---------------------------------------------
    def _emit_polyline(self, pts: List[Point]) -> None:
        raise NotImplementedError

    def _emit_polygon(self, pts: List[Point]) -> None:
        raise NotImplementedError

    def _emit_filled_polygon(self, pts: List[Point]) -> None:
        raise NotImplementedError

    def _emit_arc(
        self, cx: float, cy: float, r: float, start: float, end: float
    ) -> None:
        raise NotImplementedError

    def _emit_filled_arc(
        self, cx: float, cy: float, r: float, start: float, end: float
    ) -> None:
        raise NotImplementedError

    def _emit_curve(self, pts: List[Point]) -> None:
        raise NotImplementedError

    def _emit_marker(
        self, cx: float, cy: float, wd: float, symbol: MarkerSymbol
    ) -> None:
        raise NotImplementedError

    def _emit_text(
        self, x: float, y: float, anchor_num: int, angle: float, text: str
    ) -> None:
        raise NotImplementedError

    def _emit_font_size(self) -> None:
        pass

    def _emit_color(self) -> None:
        pass

    def _emit_line_width(self) -> None:
        pass

    def _emit_line_style(self) -> None:
        pass

    def _emit_finish(self) -> None:
        raise NotImplementedError
