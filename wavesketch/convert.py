"""Numeric input coercion for window edges, dimensions, and sample counts.

Accepted inputs are plain numbers, numeric strings (``"2.5"``), and strings
SymPy can evaluate to a real constant (``"pi/2"``, ``"sqrt(2)"``). Booleans are
rejected so that a stray flag never silently becomes ``0.0``/``1.0``.
"""

from __future__ import annotations

import math
from typing import Any

import numpy as np
import sympy as sp


def _real_from_complex(value: complex, *, role: str) -> float:
    if value.imag != 0:
        raise ValueError(f"{role} must be real, got {value!r}")
    return float(value.real)


def to_real(obj: Any, *, role: str = "value") -> float:
    """Return ``obj`` as a Python float.

    Parameters
    ----------
    obj : Any
        Number, NumPy scalar, numeric string, or SymPy-evaluable string.
    role : str, optional
        Name used in error messages.

    Raises
    ------
    TypeError
        If ``obj`` is a bool.
    ValueError
        If ``obj`` cannot be converted or has a non-zero imaginary part.

    Examples
    --------
    >>> round(to_real("pi/2"), 6)
    1.570796
    """
    if isinstance(obj, (bool, np.bool_)):
        raise TypeError(f"{role} must be a number, got {type(obj).__name__}")

    if isinstance(obj, (int, float, np.integer, np.floating)):
        return float(obj)
    if isinstance(obj, (complex, np.complexfloating)):
        return _real_from_complex(complex(obj), role=role)

    if isinstance(obj, str):
        s = obj.strip()
        if s == "":
            raise ValueError(f"{role} must not be an empty string")
        try:
            return float(s)
        except ValueError:
            pass
        try:
            value = complex(sp.sympify(s).evalf())
        except (sp.SympifyError, TypeError, ValueError) as exc:
            raise ValueError(f"Could not convert {obj!r} to a real {role}") from exc
        return _real_from_complex(value, role=role)

    if isinstance(obj, sp.Basic):
        try:
            value = complex(obj.evalf())
        except TypeError as exc:
            raise ValueError(f"{role} must be a numeric constant, got {obj!r}") from exc
        return _real_from_complex(value, role=role)

    try:
        return float(obj)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Could not convert {obj!r} to a real {role}") from exc


def to_positive(obj: Any, *, role: str = "value") -> float:
    """Return ``obj`` as a strictly positive finite float."""
    value = to_real(obj, role=role)
    if not math.isfinite(value) or value <= 0:
        raise ValueError(f"{role} must be positive and finite, got {value!r}")
    return value


def to_count(obj: Any, *, role: str = "count") -> int:
    """Return ``obj`` as a positive integer; fractional values are rejected."""
    if isinstance(obj, (bool, np.bool_)):
        raise TypeError(f"{role} must be an integer, got {type(obj).__name__}")
    if isinstance(obj, (int, np.integer)):
        value = int(obj)
    else:
        real = to_real(obj, role=role)
        if not real.is_integer():
            raise ValueError(f"{role} must be an integer, got {real!r}")
        value = int(real)
    if value <= 0:
        raise ValueError(f"{role} must be positive, got {value}")
    return value


__all__ = ["to_real", "to_positive", "to_count"]
