from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

import pytest

from plotfile.backends.eps_backend import EPSPlotter, escape_ps_string
from plotfile.render.canvas import LineStyle, MarkerSymbol
from plotfile.settings.schema import Settings


def _body(path: Path) -> list[str]:
    """Lines after the page header, without the trailer."""
    lines = path.read_text(encoding="latin-1").splitlines()
    start = lines.index("%%Page: 1 1") + 1
    end = lines.index("showpage") - 1
    return lines[start:end]


@pytest.fixture
def eps(tmp_path: Path):
    path = tmp_path / "out.eps"
    plot = EPSPlotter.open(300, 200, str(path))
    assert plot is not None
    return plot, path


def test_preamble(eps) -> None:
    plot, path = eps
    plot.finish()
    text = path.read_text(encoding="latin-1")
    lines = text.splitlines()
    assert lines[0] == "%!PS-Adobe-3.0 EPSF-3.0"
    assert f"%%Title: {path}" in lines
    assert "%%Creator: plotfile" in lines
    assert "%%BoundingBox: 0 0 300 200" in lines
    assert "/T1 {/A exch def m g P t A r show G} bind def" in lines
    assert "     B 2 div neg FH 2 div neg rm S show G} bind def" in lines
    assert "/Helvetica ISOfindfont 12 scalefont setfont calc_FH" in lines
    for setup in ("0.5 w", "3 setmiterlimit", "0 0 0 c"):
        assert setup in lines
    assert text.endswith("\nshowpage\n%%EOF\n")


def test_polylines_and_polygons(eps) -> None:
    plot, path = eps
    plot.draw_polyline([(0, 0), (10.5, 20.25)])
    plot.draw_polygon([(1, 1), (2, 1), (2, 2)])
    plot.draw_filled_polygon([(1, 1), (2, 1), (2, 2)])
    plot.draw_polyline([(5, 5)])
    plot.finish()
    assert _body(path) == [
        "n",
        "0.00 0.00 m",
        "10.50 20.25 l",
        "s",
        "n",
        "1.00 1.00 m",
        "2.00 1.00 l",
        "2.00 2.00 l",
        "p s",
        "n",
        "1.00 1.00 m",
        "2.00 1.00 l",
        "2.00 2.00 l",
        "p g f G s",
    ]


def test_arcs_and_curve(eps) -> None:
    plot, path = eps
    plot.draw_arc(50, 60, 10, 30, 120)
    plot.draw_filled_arc(50, 60, 10, 210, 310)
    plot.draw_curve([(0, 0), (1, 2), (3, 4), (5, 6)])
    plot.finish()
    assert _body(path) == [
        "n 50.00 60.00 10.00 30.00 120.00 a s",
        "n 50.00 60.00 m",
        "50.00 60.00 10.00 210.00 310.00 a",
        "50.00 60.00 l",
        "p g f G s",
        "0.00 0.00 m",
        "1.00 2.00 3.00 4.00 5.00 6.00 C s",
    ]


def test_markers(eps) -> None:
    plot, path = eps
    plot.draw_marker(10, 20, 4, MarkerSymbol.PLUS)
    plot.draw_marker(10, 20, 4, MarkerSymbol.CIRCLE)
    plot.draw_marker(10, 20, 4, MarkerSymbol.TRIANGLE_UP)
    plot.finish()
    assert _body(path) == [
        "n 8.00 20.00 m",
        "12.00 20.00 l",
        "10.00 18.00 m",
        "10.00 22.00 l s",
        "n 10.00 20.00 2.00 0.00 360.00 a s",
        "n 10.00 18.00 m",
        "10.00 20.00 l s",
        "n 8.00 18.00 m",
        "12.00 18.00 l",
        "10.00 22.00 l p s",
        "n 10.00 18.00 m",
        "10.00 20.00 l s",
    ]


def test_text_is_escaped_and_anchored(eps) -> None:
    plot, path = eps
    plot.draw_text(10, 20, "ne", 30, "a (b) c\\")
    plot.draw_text(10, 20, "c", 0, "Bézier €")
    plot.finish()
    assert _body(path) == [
        "(a \\(b\\) c\\\\) 10.00 20.00 30.00 T9",
        "(Bézier ?) 10.00 20.00 0.00 T5",
    ]


def test_escape_ps_string() -> None:
    assert escape_ps_string("(x)\\") == "\\(x\\)\\\\"


def test_setters(eps) -> None:
    plot, path = eps
    plot.set_font_size(16.7)
    plot.set_color(1.5, 0.25, -1)
    plot.set_line_width(0.2)
    plot.set_line_style(LineStyle.DASH_DOT)
    plot.set_line_style(99)
    plot.finish()
    assert _body(path) == [
        "/Helvetica ISOfindfont 16 scalefont setfont calc_FH",
        "1.000 0.250 0.000 c",
        "0.20 w",
        "[4 2 1 2] d",
        "[] d",
    ]
    assert plot.state.line_width == pytest.approx(0.2)
    assert plot.state.line_style is LineStyle.SOLID


def test_drawing_after_finish_is_ignored(
    eps, caplog: pytest.LogCaptureFixture
) -> None:
    plot, path = eps
    plot.finish()
    size = path.stat().st_size
    with caplog.at_level(logging.WARNING):
        plot.draw_polyline([(0, 0), (1, 1)])
        plot.set_color(1, 0, 0)
    plot.finish()
    assert plot.closed
    assert path.stat().st_size == size
    assert "already finished" in caplog.text


def test_curve_with_wrong_point_count_is_ignored(
    eps, caplog: pytest.LogCaptureFixture
) -> None:
    plot, path = eps
    with caplog.at_level(logging.WARNING):
        plot.draw_curve([(0, 0), (1, 1), (2, 2)])
    plot.finish()
    assert _body(path) == []
    assert "4 control points" in caplog.text


def test_unwritable_target_returns_none(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.ERROR):
        assert EPSPlotter.open(10, 10, str(tmp_path / "missing" / "x.eps")) is None
    assert "can't open" in caplog.text


def test_default_font_size_is_truncated(
    tmp_path: Path, use_settings: Callable[..., Settings]
) -> None:
    use_settings(default_font_size=12.5)
    path = tmp_path / "font.eps"
    plot = EPSPlotter.open(10, 10, str(path))
    assert plot is not None
    assert plot.state.font_size == 12.0
    plot.finish()
    lines = path.read_text(encoding="latin-1").splitlines()
    assert "/Helvetica ISOfindfont 12 scalefont setfont calc_FH" in lines
