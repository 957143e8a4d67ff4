"""Plottable function records and their sample collections.

Purpose
-------
Defines the data model shared by the drawing surface, the formula sampler, and
the experiment:

- ``FunctionMode``: where a function's samples come from,
- ``Datapoint``/``Datapoints``: ordered ``(x, y)`` samples,
- ``Function``: one named plottable entity with display flags.

Architecture notes
------------------
``Datapoints`` is immutable and owned by exactly one ``Function``. A change to
the formula or drawing produces a new ``Datapoints`` which replaces the old one
wholesale through :meth:`Function.replace_datapoints`.

Important gotchas
-----------------
- ``Datapoints.get_path`` does not guard against zero-width windows; use
  ``get_checked_path`` when the window comes from user input.
- ``Datapoints.get_mean`` returns ``None`` when the y-values sum to zero,
  which includes the empty collection.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field, replace
from typing import Any, Optional, Union

import numpy as np

from .bounds import Bounds, Scale
from .curve_path import format_path, to_screen, validate_window
from .defaults import DEFAULT_BOTTOM, DEFAULT_TOP


class FunctionMode(enum.Enum):
    """Origin of a function's samples."""

    Drawing = 0
    Formula = 1


@dataclass(frozen=True)
class Datapoint:
    x: float
    y: float


PointLike = Union[Datapoint, Sequence[float]]


@dataclass(frozen=True)
class Datapoints:
    """Ordered sample collection of one :class:`Function`.

    Parameters
    ----------
    values : tuple[Datapoint, ...]
        Samples in drawing order. Any iterable of ``Datapoint`` or ``(x, y)``
        pairs is accepted and stored as a tuple.
    """

    values: tuple[Datapoint, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", tuple(_as_datapoint(p) for p in self.values))

    @classmethod
    def from_arrays(cls, xs: Any, ys: Any) -> "Datapoints":
        """Build a collection from parallel x and y arrays."""
        x = np.asarray(xs, dtype=float).ravel()
        y = np.asarray(ys, dtype=float).ravel()
        if x.shape != y.shape:
            raise ValueError(f"x and y must have the same length, got {x.size} and {y.size}")
        return cls(tuple(Datapoint(float(a), float(b)) for a, b in zip(x, y)))

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[Datapoint]:
        return iter(self.values)

    @property
    def xs(self) -> np.ndarray:
        return np.fromiter((p.x for p in self.values), dtype=float, count=len(self.values))

    @property
    def ys(self) -> np.ndarray:
        return np.fromiter((p.y for p in self.values), dtype=float, count=len(self.values))

    def to_screen(
        self, width: float, height: float, bounds: Bounds, scale: Scale
    ) -> tuple[np.ndarray, np.ndarray]:
        """Return screen coordinates of every sample as two arrays."""
        return to_screen(self.xs, self.ys, width, height, bounds, scale)

    def get_path(self, width: float, height: float, bounds: Bounds, scale: Scale) -> str:
        """Return SVG path data for a polyline through every sample.

        Parameters
        ----------
        width, height : float
            Drawing surface size in pixels.
        bounds : Bounds
            Horizontal window; ``left`` maps to 0 and ``right`` to ``width``.
        scale : Scale
            Vertical window; ``top`` maps to 0 and ``bottom`` to ``height``.

        Returns
        -------
        str
            ``"M x0 y0 x1 y1 ..."``; just ``"M "`` when there are no samples.

        Examples
        --------
        >>> pts = Datapoints([(0, 0), (50, 5)])
        >>> pts.get_path(200, 50, Bounds(0, 100), Scale(10, 0))
        'M 0 50 100 25'
        """
        return format_path(*self.to_screen(width, height, bounds, scale))

    def get_checked_path(self, width: Any, height: Any, bounds: Bounds, scale: Scale) -> str:
        """Like :meth:`get_path` but raise ``ValueError`` for an unusable window."""
        w, h = validate_window(width, height, bounds, scale)
        return self.get_path(w, h, bounds, scale)

    def get_mean(self) -> Optional[float]:
        """Return the y-weighted centroid of the sample x-coordinates.

        Each x contributes ``x * y / sum(y)``, accumulated in sample order.
        Negative y-values act as negative weights and may place the result
        outside the sampled x-range.

        Returns
        -------
        float or None
            ``None`` when the y-values sum to zero (including no samples).
        """
        total = 0.0
        for p in self.values:
            total += p.y
        if total == 0:
            return None
        mean = 0.0
        for p in self.values:
            mean += p.x * p.y / total
        return mean


def _as_datapoint(value: PointLike) -> Datapoint:
    if isinstance(value, Datapoint):
        return value
    try:
        x, y = value
    except (TypeError, ValueError) as exc:
        raise TypeError(f"Expected a Datapoint or an (x, y) pair, got {value!r}") from exc
    return Datapoint(float(x), float(y))


@dataclass
class Function:
    """A named plottable entity, hand-drawn or formula-derived.

    Parameters
    ----------
    name : str
        Display label.
    mode : FunctionMode
        Whether samples come from drawing or from a formula.
    formula : str
        Formula source text; unused in ``Drawing`` mode.
    sketching : bool
        True while the user is drawing.
    formula_error : str
        Last evaluation error reported by the formula evaluator, ``""`` if none.
    datapoints : Datapoints or None
        Current samples, ``None`` before any exist.
    show_mean : bool
        Whether the mean marker is rendered.
    scale : Scale
        Per-function vertical window.
    visible : bool
        Display flag.
    readonly : bool
        Edit-permission flag.
    complex_phase : float or None
        Phase parameter (momentum) for complex-valued formulas.
    n : int or None
        Integer parameter, e.g. the eigenvector index.
    """

    name: str
    mode: FunctionMode = FunctionMode.Drawing
    formula: str = ""
    sketching: bool = False
    formula_error: str = ""
    datapoints: Optional[Datapoints] = None
    show_mean: bool = False
    scale: Scale = field(default_factory=lambda: Scale(DEFAULT_TOP, DEFAULT_BOTTOM))
    visible: bool = True
    readonly: bool = False
    complex_phase: Optional[float] = None
    n: Optional[int] = None

    def replace_datapoints(self, datapoints: Union[Datapoints, Iterable[PointLike]]) -> None:
        """Swap in a freshly computed sample collection."""
        if not isinstance(datapoints, Datapoints):
            datapoints = Datapoints(tuple(datapoints))
        self.datapoints = datapoints

    def clear_datapoints(self) -> None:
        self.datapoints = None

    def mean(self) -> Optional[float]:
        """Return the weighted mean of the samples, or ``None`` if undefined."""
        if self.datapoints is None:
            return None
        return self.datapoints.get_mean()

    def path(self, width: float, height: float, bounds: Bounds) -> Optional[str]:
        """Return the SVG path of the samples using this function's own scale."""
        if self.datapoints is None:
            return None
        return self.datapoints.get_path(width, height, bounds, self.scale)

    def copy(self, **changes: Any) -> "Function":
        return replace(self, **changes)


__all__ = ["FunctionMode", "Datapoint", "Datapoints", "Function"]
