"""Turn symbolic expressions or numeric callables into ``Datapoints``.

The sampling grid is left-closed and right-open: ``resolution`` points starting
at ``start`` with spacing ``(end - start) / resolution``. This is the grid the
experiment module uses as well, so sampled potentials and wavefunctions line
up index by index.

Logging
-------
Debug records are emitted under ``wavesketch.sampling`` when an expression is
compiled and when a vector is normalized.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from numbers import Number
from typing import Any, Callable, Optional, Union

import numpy as np
import sympy as sp
from sympy.core.expr import Expr
from sympy.core.symbol import Symbol

from .convert import to_count, to_real
from .defaults import DEFAULT_RESOLUTION
from .model import Datapoints

logger = logging.getLogger(__name__)

Sampleable = Union[Expr, Callable[[np.ndarray], Any], Number]


def grid(start: Any, end: Any, resolution: Any = DEFAULT_RESOLUTION) -> np.ndarray:
    """Return ``resolution`` evenly spaced x-values from ``start`` (``end`` excluded)."""
    a = to_real(start, role="start")
    b = to_real(end, role="end")
    n = to_count(resolution, role="resolution")
    step = (b - a) / n
    return a + np.arange(n, dtype=float) * step


@lru_cache(maxsize=128)
def _compile(expr: Expr, var: Symbol) -> Callable[[np.ndarray], Any]:
    logger.debug("lambdify %s in %s", expr, var)
    return sp.lambdify(var, expr, modules="numpy")


def _resolve_var(expr: Expr, var: Optional[Symbol]) -> Symbol:
    if var is not None:
        if not isinstance(var, Symbol):
            raise TypeError(f"var must be a sympy.Symbol, got {type(var).__name__}")
        extra = expr.free_symbols - {var}
        if extra:
            names = ", ".join(sorted(s.name for s in extra))
            raise ValueError(f"Expression has unbound symbols besides {var}: {names}")
        return var
    free = sorted(expr.free_symbols, key=lambda s: s.name)
    if len(free) > 1:
        names = ", ".join(s.name for s in free)
        raise ValueError(f"Expression has several free symbols ({names}); pass var= explicitly")
    return free[0] if free else sp.Symbol("x")


def evaluate(func: Sampleable, xs: np.ndarray, *, var: Optional[Symbol] = None) -> np.ndarray:
    """Evaluate ``func`` on ``xs`` and return a complex array of the same length.

    Parameters
    ----------
    func : sympy.Expr, callable, or number
        Symbolic expressions are compiled with :func:`sympy.lambdify`.
        Callables receive the whole array. Numbers are broadcast.
    xs : numpy.ndarray
        Sample locations.
    var : sympy.Symbol, optional
        Independent variable of a symbolic expression.

    Raises
    ------
    TypeError
        If ``func`` is none of the accepted kinds.
    ValueError
        If the result cannot be broadcast to ``xs``.
    """
    if isinstance(func, sp.Basic):
        expr = sp.sympify(func)
        values = _compile(expr, _resolve_var(expr, var))(xs)
    elif callable(func):
        values = func(xs)
    elif isinstance(func, Number):
        values = func
    else:
        raise TypeError(f"Cannot sample object of type {type(func).__name__}")

    try:
        return np.broadcast_to(np.asarray(values, dtype=complex), xs.shape).copy()
    except ValueError as exc:
        raise ValueError(
            f"Sampled values have shape {np.shape(values)}, expected {xs.shape}"
        ) from exc


def normalize(values: np.ndarray) -> np.ndarray:
    """Return ``values`` divided by their Euclidean norm; zero vectors pass through."""
    norm = float(np.linalg.norm(values))
    if norm == 0:
        logger.debug("normalize skipped for zero vector of length %d", values.size)
        return values
    return values / norm


def sample(
    func: Sampleable,
    start: Any,
    end: Any,
    resolution: Any = DEFAULT_RESOLUTION,
    *,
    var: Optional[Symbol] = None,
    normalize_values: bool = False,
) -> Datapoints:
    """Sample ``func`` on the standard grid and keep the real part.

    Examples
    --------
    >>> x = sp.Symbol("x")
    >>> [p.y for p in sample(2 * x, 0, 2, 4)]
    [0.0, 1.0, 2.0, 3.0]
    """
    xs = grid(start, end, resolution)
    values = evaluate(func, xs, var=var)
    if normalize_values:
        values = normalize(values)
    return Datapoints.from_arrays(xs, values.real)


__all__ = ["Sampleable", "grid", "evaluate", "normalize", "sample"]
