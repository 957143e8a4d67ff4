"""Package-wide default values.

Callers override these per call through keyword arguments; nothing here is
read from files or the environment.
"""

from __future__ import annotations

DEFAULT_LEFT: float = -4.0
DEFAULT_RIGHT: float = 4.0
DEFAULT_TOP: float = 3.0
DEFAULT_BOTTOM: float = -3.0

# Sample count used by ``sampling.sample`` and the experiment grid.
DEFAULT_RESOLUTION: int = 200

PATH_MOVE_TO = "M"

__all__ = [
    "DEFAULT_LEFT",
    "DEFAULT_RIGHT",
    "DEFAULT_TOP",
    "DEFAULT_BOTTOM",
    "DEFAULT_RESOLUTION",
    "PATH_MOVE_TO",
]
