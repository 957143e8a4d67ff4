"""Data-space windows mapped onto the drawing surface.

Two schemas describe the same window:

- flat (canonical): ``Bounds(left, right)`` for the horizontal window and
  ``Scale(top, bottom)`` for the vertical one,
- nested: ``Viewport(position=Interval(min, max), amplitude=Interval(min, max))``.

``left`` is ``position.min``, ``right`` is ``position.max``, ``top`` is
``amplitude.max`` and ``bottom`` is ``amplitude.min``. Use
:meth:`Viewport.from_flat` and :meth:`Viewport.to_flat` to move between them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .convert import to_real
from .defaults import DEFAULT_BOTTOM, DEFAULT_LEFT, DEFAULT_RIGHT, DEFAULT_TOP


@dataclass(frozen=True)
class Bounds:
    """Horizontal data-space window; ``left`` maps to 0 and ``right`` to the width."""

    left: float = DEFAULT_LEFT
    right: float = DEFAULT_RIGHT

    @classmethod
    def coerce(cls, left: Any, right: Any) -> "Bounds":
        """Build bounds from loosely typed inputs such as ``"-pi"``."""
        return cls(to_real(left, role="left"), to_real(right, role="right"))

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def is_degenerate(self) -> bool:
        """Return True when the window has zero width."""
        return self.right == self.left


@dataclass(frozen=True)
class Scale:
    """Vertical data-space window; ``top`` maps to 0 and ``bottom`` to the height."""

    top: float = DEFAULT_TOP
    bottom: float = DEFAULT_BOTTOM

    @classmethod
    def coerce(cls, top: Any, bottom: Any) -> "Scale":
        return cls(to_real(top, role="top"), to_real(bottom, role="bottom"))

    @property
    def height(self) -> float:
        return self.top - self.bottom

    @property
    def is_degenerate(self) -> bool:
        return self.top == self.bottom


@dataclass(frozen=True)
class Interval:
    min: float
    max: float


@dataclass(frozen=True)
class Viewport:
    """Nested-schema window.

    Parameters
    ----------
    position : Interval
        Horizontal extent (``min`` is the left edge).
    amplitude : Interval
        Vertical extent (``max`` is the top edge).
    """

    position: Interval
    amplitude: Interval

    @classmethod
    def from_flat(cls, bounds: Bounds, scale: Scale) -> "Viewport":
        return cls(
            position=Interval(min=bounds.left, max=bounds.right),
            amplitude=Interval(min=scale.bottom, max=scale.top),
        )

    def to_flat(self) -> tuple[Bounds, Scale]:
        """Return the canonical ``(Bounds, Scale)`` pair for this viewport."""
        return (
            Bounds(left=self.position.min, right=self.position.max),
            Scale(top=self.amplitude.max, bottom=self.amplitude.min),
        )


__all__ = ["Bounds", "Scale", "Interval", "Viewport"]
