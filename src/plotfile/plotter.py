"""Format-independent plotting API.

The output format is chosen once, from the lowercased suffix of the file
name given to :func:`init_graphics`; every later call is forwarded to the
backend bound at that time. The module-level functions accept ``None`` as
the plot and then do nothing, so a failed initialization does not need to
be checked before each call.

Example::

    from plotfile import finish_graphics, init_graphics, draw_polyline

    plot = init_graphics(200, 100, "figure.svg")
    draw_polyline(plot, [(10, 10), (190, 90)])
    finish_graphics(plot)

or, raising :class:`PlotterInitError` when the file cannot be created::

    with open_graphics(200, 100, "figure.png") as plot:
        plot.draw_polyline([(10, 10), (190, 90)])
"""

from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterator, List, Mapping, Sequence, Type

from plotfile.backends.base import BasePlotter
from plotfile.backends.eps_backend import EPSPlotter
from plotfile.backends.png_backend import PNGPlotter
from plotfile.backends.svg_backend import SVGPlotter
from plotfile.render.canvas import Plotter, PointLike
from plotfile.render.helpers import lowered_suffix

logger = logging.getLogger(__name__)


class PlotterInitError(RuntimeError):
    """Raised by :func:`open_graphics` when no plot could be created."""


@dataclass(slots=True, frozen=True)
class GraphicsFormat:
    name: str
    suffix: str
    backend: Type[BasePlotter]


FORMATS: Mapping[str, GraphicsFormat] = MappingProxyType(
    {
        f.suffix: f
        for f in (
            GraphicsFormat(EPSPlotter.format_name, "eps", EPSPlotter),
            GraphicsFormat(PNGPlotter.format_name, "png", PNGPlotter),
            GraphicsFormat(SVGPlotter.format_name, "svg", SVGPlotter),
        )
    }
)


def known_formats() -> List[GraphicsFormat]:
    """Return the supported formats in suffix order."""
    return [FORMATS[k] for k in sorted(FORMATS)]


def init_graphics(
    width: int, height: int, filename: str | os.PathLike[str]
) -> Plotter | None:
    """Create a *width* x *height* plot written to *filename*.

    The format follows from the file suffix (``.eps``, ``.svg``, ``.png``,
    any case). Returns ``None`` and logs an error when the suffix is not
    supported, the size is not positive or the file cannot be created.
    """
    name = os.fspath(filename)
    sfx = lowered_suffix(name)
    fmt = FORMATS.get(sfx) if sfx and len(name) > 3 else None
    if fmt is None:
        known = "; ".join(f"{f.suffix}: {f.name}" for f in known_formats())
        logger.error(
            "graphics format requested by suffix '%s' (from plot file name '%s') "
            "is not implemented; known suffixes are %s",
            sfx or "",
            name,
            known,
        )
        return None
    if int(width) <= 0 or int(height) <= 0:
        logger.error("invalid plot size %sx%s for '%s'", width, height, name)
        return None
    plot = fmt.backend.open(int(width), int(height), name)
    if plot is not None:
        logger.debug("opened %s plot '%s' (%dx%d)", fmt.suffix, name, width, height)
    return plot


@contextmanager
def open_graphics(
    width: int, height: int, filename: str | os.PathLike[str]
) -> Iterator[Plotter]:
    """Context manager around :func:`init_graphics` / :func:`finish_graphics`."""
    plot = init_graphics(width, height, filename)
    if plot is None:
        raise PlotterInitError(f"cannot create plot file '{os.fspath(filename)}'")
    try:
        yield plot
    finally:
        plot.finish()


# Generic forwarders ------------------------------------------------------
def draw_polyline(plot: Plotter | None, points: Sequence[PointLike]) -> None:
    """Draw a line through *points* (at least two)."""
    if plot is not None:
        plot.draw_polyline(points)


def draw_polygon(plot: Plotter | None, points: Sequence[PointLike]) -> None:
    """Draw the outline of the closed polygon through *points*."""
    if plot is not None:
        plot.draw_polygon(points)


def draw_filled_polygon(plot: Plotter | None, points: Sequence[PointLike]) -> None:
    """Fill and outline the closed polygon through *points*."""
    if plot is not None:
        plot.draw_filled_polygon(points)


def draw_arc(
    plot: Plotter | None,
    cx: float,
    cy: float,
    radius: float,
    start: float,
    end: float,
) -> None:
    """Draw a circular arc; angles in degrees, counterclockwise.

    ``start=0, end=360`` draws a full circle.
    """
    if plot is not None:
        plot.draw_arc(cx, cy, radius, start, end)


def draw_filled_arc(
    plot: Plotter | None,
    cx: float,
    cy: float,
    radius: float,
    start: float,
    end: float,
) -> None:
    """Fill and outline a pie slice; angles as for :func:`draw_arc`."""
    if plot is not None:
        plot.draw_filled_arc(cx, cy, radius, start, end)


def draw_curve(plot: Plotter | None, points: Sequence[PointLike]) -> None:
    """Draw a cubic Bezier segment from 4 control points."""
    if plot is not None:
        plot.draw_curve(points)


def draw_marker(
    plot: Plotter | None, cx: float, cy: float, wd: float, symbol: int
) -> None:
    """Draw marker *symbol* (0-7, see :class:`MarkerSymbol`) of size *wd*."""
    if plot is not None:
        plot.draw_marker(cx, cy, wd, symbol)


def draw_text(
    plot: Plotter | None,
    x: float,
    y: float,
    anchor: str,
    angle: float,
    text: str,
) -> None:
    """Draw *text* so that its *anchor* point (``nw`` .. ``se``) is at (x, y)."""
    if plot is not None:
        plot.draw_text(x, y, anchor, angle, text)


def set_font_size(plot: Plotter | None, size: float) -> None:
    if plot is not None:
        plot.set_font_size(size)


def set_color(plot: Plotter | None, r: float, g: float, b: float) -> None:
    if plot is not None:
        plot.set_color(r, g, b)


def set_line_width(plot: Plotter | None, width: float) -> None:
    if plot is not None:
        plot.set_line_width(width)


def set_line_style(plot: Plotter | None, style: int) -> None:
    if plot is not None:
        plot.set_line_style(style)


def finish_graphics(plot: Plotter | None) -> None:
    """Write out and close the plot. Call exactly once per plot."""
    if plot is not None:
        plot.finish()


__all__ = [
    "FORMATS",
    "GraphicsFormat",
    "PlotterInitError",
    "draw_arc",
    "draw_curve",
    "draw_filled_arc",
    "draw_filled_polygon",
    "draw_marker",
    "draw_polygon",
    "draw_polyline",
    "draw_text",
    "finish_graphics",
    "init_graphics",
    "known_formats",
    "open_graphics",
    "set_color",
    "set_font_size",
    "set_line_style",
    "set_line_width",
]
