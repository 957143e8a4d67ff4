"""Plain-dict form of functions, samples and windows.

The dict shape follows the records exchanged with the front end: keys matching
the dataclass fields, ``mode`` spelled ``"Drawing"`` or
``"Formula"``, and ``datapoints`` wrapped as ``{"values": [{"x": .., "y": ..}]}``.

Older payloads are migrated on load:

- ``mode`` given as the integer index (``0``/``1``),
- fields missing from later payloads (``scale``, ``visible``, ``readonly``,
  ``complex_phase``, ``n``) are filled with defaults,
- windows in the nested ``{"position": .., "amplitude": ..}`` schema are
  converted to the flat ``Bounds``/``Scale`` pair.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from .bounds import Bounds, Interval, Scale, Viewport
from .convert import to_real
from .model import Datapoint, Datapoints, Function, FunctionMode

_FUNCTION_KEYS = frozenset(
    {
        "name",
        "mode",
        "formula",
        "sketching",
        "formula_error",
        "datapoints",
        "show_mean",
        "scale",
        "visible",
        "readonly",
        "complex_phase",
        "n",
    }
)


def datapoints_to_dict(datapoints: Datapoints) -> dict[str, Any]:
    return {"values": [{"x": p.x, "y": p.y} for p in datapoints]}


def datapoints_from_dict(data: Mapping[str, Any]) -> Datapoints:
    """Load ``{"values": [{"x": .., "y": ..}, ...]}``."""
    try:
        values = data["values"]
    except (KeyError, TypeError) as exc:
        raise ValueError("datapoints payload must be a mapping with a 'values' list") from exc
    points = []
    for i, item in enumerate(values):
        try:
            points.append(Datapoint(to_real(item["x"], role="x"), to_real(item["y"], role="y")))
        except (KeyError, TypeError) as exc:
            raise ValueError(f"datapoint {i} must have 'x' and 'y', got {item!r}") from exc
    return Datapoints(tuple(points))


def _mode_from_value(value: Any) -> FunctionMode:
    if isinstance(value, FunctionMode):
        return value
    if isinstance(value, str):
        try:
            return FunctionMode[value]
        except KeyError as exc:
            raise ValueError(f"Unknown function mode {value!r}") from exc
    if isinstance(value, int) and not isinstance(value, bool):
        try:
            return FunctionMode(value)
        except ValueError as exc:
            raise ValueError(f"Unknown function mode index {value!r}") from exc
    raise ValueError(f"Unknown function mode {value!r}")


def _optional(value: Any, kind: type) -> Optional[Any]:
    if value is None:
        return None
    if kind is int:
        if isinstance(value, bool) or not float(value).is_integer():
            raise ValueError(f"Expected an integer, got {value!r}")
        return int(value)
    return to_real(value)


def _flag(value: Any, key: str) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"{key} must be a bool, got {value!r}")
    return value


def scale_to_dict(scale: Scale) -> dict[str, float]:
    return {"top": scale.top, "bottom": scale.bottom}


def scale_from_dict(data: Mapping[str, Any]) -> Scale:
    """Load a scale from ``{top, bottom}`` or the nested ``{amplitude: {min, max}}``."""
    try:
        if "amplitude" in data:
            amplitude = data["amplitude"]
            return Scale.coerce(amplitude["max"], amplitude["min"])
        return Scale.coerce(data["top"], data["bottom"])
    except KeyError as exc:
        raise ValueError(f"scale payload is missing {exc.args[0]!r}") from exc


def function_to_dict(function: Function) -> dict[str, Any]:
    """Return the dict form of ``function``."""
    return {
        "name": function.name,
        "mode": function.mode.name,
        "formula": function.formula,
        "sketching": function.sketching,
        "formula_error": function.formula_error,
        "datapoints": (
            None if function.datapoints is None else datapoints_to_dict(function.datapoints)
        ),
        "show_mean": function.show_mean,
        "scale": scale_to_dict(function.scale),
        "visible": function.visible,
        "readonly": function.readonly,
        "complex_phase": function.complex_phase,
        "n": function.n,
    }


def function_from_dict(data: Mapping[str, Any]) -> Function:
    """Load a function, migrating older payloads.

    Raises
    ------
    ValueError
        On unknown keys, a missing ``name``, or malformed values.
    """
    unknown = set(data) - _FUNCTION_KEYS
    if unknown:
        raise ValueError(f"Unknown function fields: {', '.join(sorted(unknown))}")
    if "name" not in data:
        raise ValueError("function payload requires 'name'")

    fields: dict[str, Any] = {"name": str(data["name"])}
    if "mode" in data:
        fields["mode"] = _mode_from_value(data["mode"])
    for key in ("formula", "formula_error"):
        if key in data:
            fields[key] = str(data[key])
    for key in ("sketching", "show_mean", "visible", "readonly"):
        if key in data:
            fields[key] = _flag(data[key], key)
    if data.get("datapoints") is not None:
        fields["datapoints"] = datapoints_from_dict(data["datapoints"])
    if data.get("scale") is not None:
        fields["scale"] = scale_from_dict(data["scale"])
    if "complex_phase" in data:
        fields["complex_phase"] = _optional(data["complex_phase"], float)
    if "n" in data:
        fields["n"] = _optional(data["n"], int)
    return Function(**fields)


def viewport_to_dict(bounds: Bounds, scale: Scale, *, nested: bool = False) -> dict[str, Any]:
    """Return the window in the flat schema, or the nested one with ``nested=True``."""
    if nested:
        viewport = Viewport.from_flat(bounds, scale)
        return {
            "position": {"min": viewport.position.min, "max": viewport.position.max},
            "amplitude": {"min": viewport.amplitude.min, "max": viewport.amplitude.max},
        }
    return {"left": bounds.left, "right": bounds.right, **scale_to_dict(scale)}


def viewport_from_dict(data: Mapping[str, Any]) -> tuple[Bounds, Scale]:
    """Load a window from either schema into the canonical ``(Bounds, Scale)``."""
    try:
        if "position" in data or "amplitude" in data:
            position, amplitude = data["position"], data["amplitude"]
            viewport = Viewport(
                position=Interval(
                    to_real(position["min"], role="position.min"),
                    to_real(position["max"], role="position.max"),
                ),
                amplitude=Interval(
                    to_real(amplitude["min"], role="amplitude.min"),
                    to_real(amplitude["max"], role="amplitude.max"),
                ),
            )
            return viewport.to_flat()
        return (
            Bounds.coerce(data["left"], data["right"]),
            Scale.coerce(data["top"], data["bottom"]),
        )
    except KeyError as exc:
        raise ValueError(f"window payload is missing {exc.args[0]!r}") from exc


__all__ = [
    "datapoints_to_dict",
    "datapoints_from_dict",
    "function_to_dict",
    "function_from_dict",
    "scale_to_dict",
    "scale_from_dict",
    "viewport_to_dict",
    "viewport_from_dict",
]
