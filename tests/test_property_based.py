"""Property-based checks for the screen mapping and the weighted mean."""

from __future__ import annotations

import math

import pytest

from wavesketch import Bounds, Datapoints, Scale

try:
    from hypothesis import assume, given
    from hypothesis import strategies as st
except ModuleNotFoundError:  # pragma: no cover - environment-specific fallback
    pytest.skip("hypothesis is required for property-based tests", allow_module_level=True)


COORD = st.floats(min_value=-1e6, max_value=1e6, allow_nan=False, allow_infinity=False)
SIZE = st.floats(min_value=1.0, max_value=4096.0, allow_nan=False, allow_infinity=False)
POINTS = st.lists(st.tuples(COORD, COORD), max_size=30)
WEIGHT = st.one_of(st.just(0.0), st.floats(min_value=1e-3, max_value=1e3))


@given(points=POINTS, width=SIZE, height=SIZE, left=COORD, span=st.floats(1e-3, 1e6))
def test_path_has_one_pair_per_sample(points, width, height, left, span) -> None:
    """Every sample contributes exactly one coordinate pair."""
    pts = Datapoints(points)

    path = pts.get_path(width, height, Bounds(left, left + span), Scale(1.0, 0.0))

    assert path.startswith("M ")
    assert len(path[2:].split()) == 2 * len(points)


@given(points=POINTS, width=SIZE, height=SIZE)
def test_mapping_is_monotone_in_x_and_flips_y(points, width, height) -> None:
    """Screen x grows with data x and screen y shrinks with data y."""
    pts = Datapoints(points)
    sx, sy = pts.to_screen(width, height, Bounds(-1e6, 1e6), Scale(1e6, -1e6))

    order_x = sorted(range(len(points)), key=lambda i: points[i][0])
    assert all(sx[a] <= sx[b] for a, b in zip(order_x, order_x[1:]))
    order_y = sorted(range(len(points)), key=lambda i: points[i][1])
    assert all(sy[a] >= sy[b] for a, b in zip(order_y, order_y[1:]))


@given(xs=st.lists(COORD, min_size=1, max_size=20), weight=st.floats(1e-3, 1e3))
def test_uniform_positive_weights_give_arithmetic_mean(xs, weight) -> None:
    """Equal positive weights give the arithmetic mean of x."""
    pts = Datapoints([(x, weight) for x in xs])

    mean = pts.get_mean()

    assert mean is not None
    assert mean == pytest.approx(math.fsum(xs) / len(xs), rel=1e-9, abs=1e-6)


@given(points=st.lists(st.tuples(COORD, WEIGHT), min_size=1, max_size=20))
def test_non_negative_weights_keep_mean_within_sample_range(points) -> None:
    """Non-negative weights keep the mean inside the sampled x range."""
    assume(sum(y for _, y in points) > 0)

    mean = Datapoints(points).get_mean()

    xs = [x for x, _ in points]
    assert min(xs) - 1e-6 <= mean <= max(xs) + 1e-6
