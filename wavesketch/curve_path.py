"""Data-space to screen-space mapping and SVG path-data formatting.

The mapping is affine per axis:

- horizontal: ``left -> 0`` and ``right -> width``,
  ``screen_x = (x - left) * width / (right - left)``
- vertical: ``top -> 0`` and ``bottom -> height`` (screen y grows downward),
  ``screen_y = -(y - top) * height / (top - bottom)``

Nothing here guards against a zero-width window: coordinates then come out as
``inf``/``nan`` and are written as ``Infinity``/``NaN`` in the path text.
:func:`validate_window` is available for callers that want an explicit error.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from decimal import Decimal
from typing import Any

import numpy as np

from .bounds import Bounds, Scale
from .convert import to_positive
from .defaults import PATH_MOVE_TO


def to_screen(
    xs: Any,
    ys: Any,
    width: float,
    height: float,
    bounds: Bounds,
    scale: Scale,
) -> tuple[np.ndarray, np.ndarray]:
    """Map sample coordinates to screen coordinates.

    Parameters
    ----------
    xs, ys : array_like
        Data-space coordinates of equal length.
    width, height : float
        Drawing surface size in pixels.
    bounds : Bounds
        Horizontal window.
    scale : Scale
        Vertical window.

    Returns
    -------
    tuple[numpy.ndarray, numpy.ndarray]
        Screen x and screen y as float arrays, in input order.
    """
    x = np.asarray(xs, dtype=float)
    y = np.asarray(ys, dtype=float)
    with np.errstate(divide="ignore", invalid="ignore"):
        screen_x = (x - bounds.left) * width / np.float64(bounds.right - bounds.left)
        screen_y = -(y - scale.top) * height / np.float64(scale.top - scale.bottom)
    return screen_x, screen_y


def format_number(value: float) -> str:
    """Format one coordinate the way a browser stringifies a number.

    Digits are the shortest round-tripping ones. Positional notation is used
    for magnitudes in ``[1e-6, 1e21)`` and exponent notation outside it;
    non-finite values are spelled ``Infinity``, ``-Infinity`` and ``NaN``.

    >>> format_number(100.0), format_number(-25.0), format_number(1e-5)
    ('100', '-25', '0.00001')
    """
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign, digit_tuple, exponent = Decimal(repr(value)).as_tuple()
    digits = "".join(map(str, digit_tuple)).rstrip("0")
    exponent += len(digit_tuple) - len(digits)
    # position of the decimal point relative to the first digit
    point = len(digits) + exponent
    if len(digits) <= point <= 21:
        text = digits + "0" * (point - len(digits))
    elif 0 < point <= 21:
        text = f"{digits[:point]}.{digits[point:]}"
    elif -6 < point <= 0:
        text = "0." + "0" * -point + digits
    else:
        mantissa = digits[0] + (f".{digits[1:]}" if len(digits) > 1 else "")
        power = point - 1
        text = f"{mantissa}e{'+' if power >= 0 else '-'}{abs(power)}"
    return f"-{text}" if sign else text


def format_path(screen_x: Iterable[float], screen_y: Iterable[float]) -> str:
    """Return ``"M x0 y0 x1 y1 ..."``: one straight-segment polyline."""
    pairs = " ".join(
        f"{format_number(sx)} {format_number(sy)}" for sx, sy in zip(screen_x, screen_y)
    )
    return f"{PATH_MOVE_TO} {pairs}"


def validate_window(width: Any, height: Any, bounds: Bounds, scale: Scale) -> tuple[float, float]:
    """Return ``(width, height)`` as floats or raise ``ValueError``.

    Raises
    ------
    ValueError
        If a dimension is not positive, or either window has zero extent.
    """
    w = to_positive(width, role="width")
    h = to_positive(height, role="height")
    if bounds.is_degenerate:
        raise ValueError(f"Degenerate bounds: left == right == {bounds.left!r}")
    if scale.is_degenerate:
        raise ValueError(f"Degenerate scale: top == bottom == {scale.top!r}")
    return w, h


__all__ = ["to_screen", "format_number", "format_path", "validate_window"]
