from __future__ import annotations

import numpy as np
import pytest
import sympy as sp

from wavesketch import Datapoints, ExperimentState, simulate
from wavesketch.experiment import hamiltonian_matrix, momentum_phase
from wavesketch.sampling import grid

N = 40


def _ground_state(xs: np.ndarray) -> Datapoints:
    j = np.arange(1, xs.size + 1)
    return Datapoints.from_arrays(xs, np.sin(np.pi * j / (xs.size + 1)))


def test_hamiltonian_is_tridiagonal_with_potential_on_diagonal() -> None:
    """The Hamiltonian has ``2 + V`` on the diagonal and ``-1`` beside it."""
    h = hamiltonian_matrix([0.0, 1.0, 2.0])

    assert h.tolist() == [[2.0, -1.0, 0.0], [-1.0, 3.0, -1.0], [0.0, -1.0, 4.0]]


def test_free_particle_spectrum_is_ascending_and_analytic() -> None:
    """A flat potential reproduces the analytic spectrum in ascending order."""
    exp = simulate(0.0, 1.0, start=-1, end=1, resolution=N)

    k = np.arange(1, N + 1)
    expected = 2.0 - 2.0 * np.cos(np.pi * k / (N + 1))
    assert np.all(np.diff(exp.eigenvalues) >= 0)
    assert exp.eigenvalues.tolist() == pytest.approx(expected.tolist(), abs=1e-9)


def test_eigenvectors_are_orthonormal() -> None:
    """Eigenvectors form an orthonormal basis and psi is normalized."""
    x = sp.Symbol("x")
    exp = simulate(x**2, sp.exp(-(x**2)), start=-2, end=2, resolution=N)

    gram = exp.eigenvectors.conj().T @ exp.eigenvectors

    assert np.allclose(gram, np.eye(N), atol=1e-9)
    assert np.linalg.norm(exp.wavefunction) == pytest.approx(1.0)


def test_ground_state_is_stationary() -> None:
    """The ground state density does not change in time."""
    xs = grid(-1, 1, N)
    ground = _ground_state(xs)
    exp = simulate(0.0, ground, start=-1, end=1, resolution=N)

    density = exp.evolve(0.7)

    expected = ground.ys**2 / np.sum(ground.ys**2)
    assert density.xs.tolist() == pytest.approx(xs.tolist())
    assert density.ys.tolist() == pytest.approx(expected.tolist(), abs=1e-9)


def test_truncated_evolution_conserves_kept_probability() -> None:
    """Evolution conserves the probability of the kept modes."""
    x = sp.Symbol("x")
    exp = simulate(0.0, sp.exp(-(x**2) * 8), start=-1, end=1, resolution=N, momentum=3.0)

    kept = np.sum(np.abs(exp.coefficients[: N // 2 + 1]) ** 2)
    totals = [float(np.sum(exp.evolve(t).ys)) for t in (0.0, 0.5, 2.0)]

    assert totals == pytest.approx([kept] * 3, abs=1e-9)
    assert kept <= 1.0 + 1e-12


def test_momentum_changes_phase_not_magnitude() -> None:
    """Momentum alters the phase of psi but not its magnitude."""
    x = sp.Symbol("x")
    still = simulate(0.0, sp.exp(-(x**2)), start=-1, end=1, resolution=N)
    moving = simulate(0.0, sp.exp(-(x**2)), start=-1, end=1, resolution=N, momentum=4.0)

    assert np.allclose(np.abs(still.wavefunction), np.abs(moving.wavefunction))
    assert not np.allclose(still.coefficients, moving.coefficients)
    assert momentum_phase(0.0, [1.0, 2.0]).tolist() == [1.0, 1.0]


def test_eigenvector_lookup() -> None:
    """Eigenvectors are looked up by index with range and type checks."""
    exp = simulate(0.0, 1.0, start=0, end=1, resolution=N)

    vec = exp.eigenvector(2)

    assert len(vec) == N
    assert float(np.sum(vec.ys**2)) == pytest.approx(1.0)
    with pytest.raises(IndexError):
        exp.eigenvector(N)
    with pytest.raises(TypeError):
        exp.eigenvector(1.0)  # type: ignore[arg-type]


def test_simulate_validates_inputs() -> None:
    """Mismatched samples and a zero wavefunction are rejected."""
    with pytest.raises(ValueError, match="potential has 3 samples"):
        simulate(Datapoints([(0, 0)] * 3), 1.0, start=0, end=1, resolution=N)
    with pytest.raises(ValueError, match="zero everywhere"):
        simulate(0.0, 0.0, start=0, end=1, resolution=N)


def test_state_lifecycle() -> None:
    """The state is empty, then holds an experiment, then is empty after restart."""
    state = ExperimentState()
    assert len(state.evolve(1.0)) == 0
    assert len(state.eigenvector(0)) == 0

    state.simulate(0.0, 1.0, start=0, end=1, resolution=N)
    assert state.experiment is not None
    assert len(state.evolve(1.0)) == N
    assert len(state.eigenvector(0)) == N

    state.restart()
    assert state.experiment is None
    assert len(state.evolve(1.0)) == 0


def test_drawn_wavefunction_gets_phase_at_its_own_x() -> None:
    """A drawn wavefunction is phased at its own x-values, not at the grid."""
    drawn_xs = np.linspace(10.0, 20.0, 8)
    drawn = Datapoints.from_arrays(drawn_xs, np.ones(8))

    exp = simulate(0.0, drawn, start=0, end=1, resolution=8, momentum=3.0)

    expected = np.exp(3j * drawn_xs) / np.sqrt(8)
    assert np.allclose(exp.wavefunction, expected)
    assert exp.wavefunction[0] == pytest.approx(0.0545 - 0.3493j, abs=1e-4)
