"""Top-level public API for the ``wavesketch`` package.

Re-exports the data model, the curve path and weighted-mean helpers, the
sampler, and the experiment so callers can import from a single namespace:

>>> from wavesketch import Bounds, Datapoints, Scale  # doctest: +SKIP

The package is silent by default; attach a handler to the ``wavesketch``
logger to see debug records.
"""

import logging

from .bounds import Bounds, Interval, Scale, Viewport
from .curve_path import format_number, format_path, to_screen, validate_window
from .experiment import Experiment, ExperimentState, hamiltonian, simulate
from .model import Datapoint, Datapoints, Function, FunctionMode
from .plotly_view import build_figure, function_trace
from .sampling import evaluate, grid, normalize, sample
from .serialization import (
    datapoints_from_dict,
    datapoints_to_dict,
    function_from_dict,
    function_to_dict,
    viewport_from_dict,
    viewport_to_dict,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
