from __future__ import annotations

import logging
import math

import hypothesis.strategies as st
import pytest
from hypothesis import given, settings

from plotfile.render.bezier import flatten, is_flat, subdivide


def _bezier(points, t: float) -> tuple[float, float]:
    (x0, y0), (x1, y1), (x2, y2), (x3, y3) = points
    u = 1.0 - t
    x = u**3 * x0 + 3 * u * u * t * x1 + 3 * u * t * t * x2 + t**3 * x3
    y = u**3 * y0 + 3 * u * u * t * y1 + 3 * u * t * t * y2 + t**3 * y3
    return x, y


def test_collinear_segment_is_one_chord() -> None:
    pts = [(0, 0), (1, 0), (2, 0), (3, 0)]
    assert is_flat(pts)
    assert list(flatten(pts)) == [((0.0, 0.0), (3.0, 0.0))]


def test_is_flat_uses_manhattan_second_differences() -> None:
    # |0+2-2*1| + |0+0-2*0.3| + |1+3-2*2| + |0.3+0-0| = 0.6 + 0.3
    assert is_flat([(0, 0), (1, 0.3), (2, 0), (3, 0)])
    assert not is_flat([(0, 0), (1, 1), (2, 1), (3, 0)])
    assert is_flat([(0, 0), (1, 1), (2, 1), (3, 0)], tolerance=4.0)


def test_subdivide_splits_at_curve_midpoint() -> None:
    pts = [(0.0, 0.0), (30.0, 50.0), (70.0, 60.0), (60.0, 0.0)]
    left, right = subdivide(pts)
    assert left[0] == pts[0]
    assert right[3] == pts[3]
    assert left[3] == right[0]
    mx, my = _bezier(pts, 0.5)
    assert left[3] == pytest.approx((mx, my))


def test_flatten_chords_form_a_chain_close_to_the_curve() -> None:
    pts = [(0.0, 0.0), (30.0, 50.0), (70.0, 60.0), (60.0, 0.0)]
    chords = list(flatten(pts))
    assert len(chords) > 1
    assert chords[0][0] == pts[0]
    assert chords[-1][1] == pts[3]
    for (_, b), (a, _) in zip(chords, chords[1:]):
        assert a == b
    # every chord end point lies on the curve
    for _, b in chords:
        assert min(math.dist(b, _bezier(pts, i / 2000)) for i in range(2001)) < 0.1


def test_flatten_requires_four_points() -> None:
    with pytest.raises(ValueError):
        list(flatten([(0, 0), (1, 1), (2, 2)]))


def test_non_finite_segment_yields_nothing(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="plotfile.render.bezier"):
        assert list(flatten([(0, 0), (math.inf, 1), (2, 2), (3, 3)])) == []
    assert "non-finite" in caplog.text


coord = st.floats(min_value=-1e9, max_value=1e9, allow_nan=False, allow_infinity=False)


@settings(deadline=None, max_examples=60)
@given(st.lists(st.tuples(coord, coord), min_size=4, max_size=4))
def test_flatten_terminates_with_bounded_output(pts: list[tuple[float, float]]) -> None:
    chords = list(flatten(pts, max_depth=8))
    assert 1 <= len(chords) <= 2**8
    assert chords[0][0] == (float(pts[0][0]), float(pts[0][1]))
    assert chords[-1][1] == (float(pts[3][0]), float(pts[3][1]))
