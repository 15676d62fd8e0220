"""plotfile package root.

The project version is defined here as the single source of truth and
exposed via ``__version__``. The packaging configuration (pyproject.toml)
reads this attribute using ``version = { attr = "plotfile.__version__" }``.

The public drawing API is re-exported from :mod:`plotfile.plotter`::

    from plotfile import init_graphics, draw_polygon, finish_graphics

    plot = init_graphics(200, 100, "box.svg")
    draw_polygon(plot, [(10, 10), (190, 10), (190, 90), (10, 90)])
    finish_graphics(plot)
"""

# Keep in sync with release tags until setuptools-scm or similar is adopted.
__version__ = "1.5.0"

from plotfile.plotter import (
    FORMATS,
    GraphicsFormat,
    PlotterInitError,
    draw_arc,
    draw_curve,
    draw_filled_arc,
    draw_filled_polygon,
    draw_marker,
    draw_polygon,
    draw_polyline,
    draw_text,
    finish_graphics,
    init_graphics,
    known_formats,
    open_graphics,
    set_color,
    set_font_size,
    set_line_style,
    set_line_width,
)
from plotfile.render.canvas import LineStyle, MarkerSymbol, Plotter, Point

__all__ = [
    "__version__",
    "FORMATS",
    "GraphicsFormat",
    "LineStyle",
    "MarkerSymbol",
    "Plotter",
    "PlotterInitError",
    "Point",
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
