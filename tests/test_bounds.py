from __future__ import annotations

import math

import pytest

from wavesketch import Bounds, Interval, Scale, Viewport


def test_viewport_round_trip_between_schemas() -> None:
    """Flat and nested windows convert into each other without loss."""
    bounds, scale = Bounds(-2.0, 5.0), Scale(top=3.0, bottom=-1.0)

    viewport = Viewport.from_flat(bounds, scale)

    assert viewport.position == Interval(min=-2.0, max=5.0)
    assert viewport.amplitude == Interval(min=-1.0, max=3.0)
    assert viewport.to_flat() == (bounds, scale)


def test_degenerate_flags() -> None:
    """Zero-extent windows are flagged as degenerate."""
    assert Bounds(1.0, 1.0).is_degenerate
    assert not Bounds(0.0, 1.0).is_degenerate
    assert Scale(2.0, 2.0).is_degenerate
    assert Scale(2.0, 1.0).height == 1.0
    assert Bounds(-1.0, 3.0).width == 4.0


def test_coerce_accepts_symbolic_strings() -> None:
    """Window edges may be given as SymPy-evaluable strings."""
    bounds = Bounds.coerce("-pi", "pi")

    assert bounds.left == pytest.approx(-math.pi)
    assert bounds.right == pytest.approx(math.pi)


def test_coerce_names_bad_edge() -> None:
    """Bad edge input raises an error that names the edge."""
    with pytest.raises(ValueError, match="top"):
        Scale.coerce("not a number +", 0)
