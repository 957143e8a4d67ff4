"""Plotly rendering of functions and their mean markers.

Each function with samples becomes one ``go.Scatter`` line trace. Functions
with ``show_mean`` set get a dashed vertical line at their weighted mean when
the mean is defined. Axis ranges come from the flat ``Bounds``/``Scale`` pair.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Optional

import plotly.graph_objects as go

from .bounds import Bounds, Scale
from .model import Function


def function_trace(function: Function) -> Optional[go.Scatter]:
    """Return a line trace for ``function``, or ``None`` when it has no samples."""
    if function.datapoints is None:
        return None
    datapoints = function.datapoints
    return go.Scatter(
        x=datapoints.xs,
        y=datapoints.ys,
        mode="lines",
        name=function.name,
        visible=True if function.visible else "legendonly",
    )


def build_figure(
    functions: Iterable[Function],
    bounds: Optional[Bounds] = None,
    scale: Optional[Scale] = None,
) -> go.Figure:
    """Return a figure with one trace per sampled function.

    Parameters
    ----------
    functions : iterable of Function
        Functions in drawing order.
    bounds : Bounds, optional
        Horizontal window; defaults to ``Bounds()``.
    scale : Scale, optional
        Vertical window; defaults to ``Scale()``.
    """
    bounds = bounds if bounds is not None else Bounds()
    scale = scale if scale is not None else Scale()

    fig = go.Figure()
    for function in functions:
        trace = function_trace(function)
        if trace is None:
            continue
        fig.add_trace(trace)
        if not (function.show_mean and function.visible):
            continue
        mean = function.mean()
        if mean is not None:
            fig.add_vline(x=mean, line_dash="dash", annotation_text=f"⟨x⟩ {function.name}")

    fig.update_xaxes(range=[bounds.left, bounds.right])
    fig.update_yaxes(range=[scale.bottom, scale.top])
    return fig


__all__ = ["function_trace", "build_figure"]
