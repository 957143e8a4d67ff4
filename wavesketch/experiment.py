"""One-dimensional Schrödinger experiment on a sampled potential.

Purpose
-------
Given a potential and an initial wavefunction on the sampling grid, build the
finite-difference Hamiltonian, decompose it into eigenpairs, expand the
wavefunction in the eigenbasis, and evolve it in time.

Concepts and structure
----------------------
- :func:`hamiltonian` builds the tridiagonal operator ``2 + V`` on the diagonal
  and ``-1`` off the diagonal (unit grid spacing, units with ``hbar = 2m = 1``).
- :func:`simulate` returns an immutable :class:`Experiment`.
- :class:`ExperimentState` holds the current experiment for a UI session.

Important gotchas
-----------------
- ``Experiment.evolve`` keeps only the modes with index ``<= resolution // 2``;
  the high-energy half of the spectrum is dropped.
- ``Function.n`` selects the eigenvector shown by ``eigenvector(n)`` and
  ``Function.complex_phase`` carries the ``momentum`` argument.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Optional, Union

import numpy as np
from scipy.linalg import eigh_tridiagonal

from .convert import to_real
from .defaults import DEFAULT_RESOLUTION
from .model import Datapoints
from .sampling import Sampleable, evaluate, grid, normalize

logger = logging.getLogger(__name__)

Source = Union[Datapoints, Sampleable]


def hamiltonian(potential: Any) -> tuple[np.ndarray, np.ndarray]:
    """Return ``(diagonal, off_diagonal)`` of the discretized Hamiltonian.

    Only the real part of ``potential`` enters the operator.
    """
    v = np.real(np.asarray(potential, dtype=complex))
    diagonal = 2.0 + v
    off_diagonal = -np.ones(max(v.size - 1, 0))
    return diagonal, off_diagonal


def hamiltonian_matrix(potential: Any) -> np.ndarray:
    """Dense form of :func:`hamiltonian`, mainly for inspection and tests."""
    diagonal, off_diagonal = hamiltonian(potential)
    return np.diag(diagonal) + np.diag(off_diagonal, 1) + np.diag(off_diagonal, -1)


def momentum_phase(momentum: float, xs: np.ndarray) -> np.ndarray:
    """Return ``exp(i * momentum * x)`` on ``xs``."""
    return np.exp(1j * momentum * np.asarray(xs, dtype=float))


@dataclass(frozen=True, eq=False)
class Experiment:
    """Result of :func:`simulate`.

    Parameters
    ----------
    xs : numpy.ndarray
        Grid the experiment lives on.
    potential : numpy.ndarray
        Real potential samples.
    wavefunction : numpy.ndarray
        Normalized complex initial state.
    eigenvalues : numpy.ndarray
        Ascending energies.
    eigenvectors : numpy.ndarray
        Normalized eigenvectors as columns, in eigenvalue order.
    coefficients : numpy.ndarray
        ``<v_k|psi>`` for every eigenvector ``v_k``.
    """

    xs: np.ndarray
    potential: np.ndarray
    wavefunction: np.ndarray
    eigenvalues: np.ndarray
    eigenvectors: np.ndarray
    coefficients: np.ndarray

    @property
    def resolution(self) -> int:
        return int(self.xs.size)

    def evolve(self, time: Any) -> Datapoints:
        """Return the probability density ``|psi(t)|^2`` at ``time``."""
        t = to_real(time, role="time")
        keep = np.arange(self.resolution) <= self.resolution // 2
        c = np.where(keep, self.coefficients, 0.0)
        phases = np.exp(-1j * self.eigenvalues * t)
        psi = self.eigenvectors @ (c * phases)
        return Datapoints.from_arrays(self.xs, np.abs(psi) ** 2)

    def eigenvector(self, n: int) -> Datapoints:
        """Return the real part of the ``n``-th eigenvector on the grid."""
        if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
            raise TypeError(f"n must be an integer, got {type(n).__name__}")
        if not 0 <= n < self.resolution:
            raise IndexError(f"Eigenvector index {n} out of range 0..{self.resolution - 1}")
        return Datapoints.from_arrays(self.xs, np.real(self.eigenvectors[:, n]))


def _sample_source(source: Source, xs: np.ndarray, *, role: str) -> np.ndarray:
    if isinstance(source, Datapoints):
        if len(source) != xs.size:
            raise ValueError(f"{role} has {len(source)} samples, expected {xs.size}")
        return source.ys.astype(complex)
    return evaluate(source, xs)


def simulate(
    potential: Source,
    wavefunction: Source,
    *,
    start: Any,
    end: Any,
    resolution: Any = DEFAULT_RESOLUTION,
    momentum: Any = 0.0,
) -> Experiment:
    """Decompose the Hamiltonian of ``potential`` and expand ``wavefunction``.

    Parameters
    ----------
    potential, wavefunction : Datapoints, sympy.Expr, callable, or number
        ``Datapoints`` must hold ``resolution`` samples. A drawn wavefunction
        gets its momentum phase at its own x-values, not at the grid.
    start, end : float
        Grid window, end excluded.
    resolution : int
        Number of grid points.
    momentum : float
        Mean momentum imprinted as ``exp(i * momentum * x)``.

    Raises
    ------
    ValueError
        If a ``Datapoints`` input does not hold ``resolution`` samples, or the
        wavefunction vanishes everywhere.
    """
    xs = grid(start, end, resolution)
    k = to_real(momentum, role="momentum")

    v = np.real(_sample_source(potential, xs, role="potential"))
    phase_xs = wavefunction.xs if isinstance(wavefunction, Datapoints) else xs
    psi = _sample_source(wavefunction, xs, role="wavefunction") * momentum_phase(k, phase_xs)
    if not np.any(psi):
        raise ValueError("wavefunction is zero everywhere")
    psi = normalize(psi)

    diagonal, off_diagonal = hamiltonian(v)
    logger.debug("eigh_tridiagonal on %d points", xs.size)
    eigenvalues, eigenvectors = eigh_tridiagonal(diagonal, off_diagonal)
    eigenvectors = eigenvectors / np.linalg.norm(eigenvectors, axis=0)
    coefficients = eigenvectors.conj().T @ psi

    return Experiment(
        xs=xs,
        potential=v,
        wavefunction=psi,
        eigenvalues=eigenvalues,
        eigenvectors=eigenvectors.astype(complex),
        coefficients=coefficients,
    )


class ExperimentState:
    """Thread-safe holder for the session's current experiment."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._experiment: Optional[Experiment] = None

    @property
    def experiment(self) -> Optional[Experiment]:
        with self._lock:
            return self._experiment

    def simulate(self, potential: Source, wavefunction: Source, **kwargs: Any) -> Experiment:
        """Run :func:`simulate` and store the result; see it for arguments."""
        experiment = simulate(potential, wavefunction, **kwargs)
        with self._lock:
            self._experiment = experiment
        logger.debug("experiment stored (resolution=%d)", experiment.resolution)
        return experiment

    def evolve(self, time: Any) -> Datapoints:
        with self._lock:
            experiment = self._experiment
        if experiment is None:
            return Datapoints()
        return experiment.evolve(time)

    def eigenvector(self, n: int) -> Datapoints:
        with self._lock:
            experiment = self._experiment
        if experiment is None:
            return Datapoints()
        return experiment.eigenvector(n)

    def restart(self) -> None:
        with self._lock:
            self._experiment = None


__all__ = [
    "Experiment",
    "ExperimentState",
    "hamiltonian",
    "hamiltonian_matrix",
    "momentum_phase",
    "simulate",
]
