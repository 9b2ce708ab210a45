"""Tests for the banded and dense penalized least-squares solves."""

import numpy as np
import pytest
from scipy import sparse
from scipy.sparse.linalg import spsolve

from whittaker.difference import difference_matrix, penalty_bands
from whittaker.errors import NumericalError
from whittaker.solver import solve_penalized, solve_penalized_dense


def _reference_solve(y, w, lam):
    """Assemble the full sparse system and solve it directly."""
    D = difference_matrix(y.size)
    Z = (sparse.diags(w, 0) + lam * (D.T @ D)).tocsc()
    return spsolve(Z, w * y)


def test_banded_matches_sparse_reference():
    rng = np.random.default_rng(0)
    y = np.cumsum(rng.normal(size=50)) + 20.0
    w = rng.uniform(0.05, 1.0, size=50)
    expected = _reference_solve(y, w, 1e3)
    got = solve_penalized(y, w, penalty_bands(y.size), 1e3)
    np.testing.assert_allclose(got, expected, rtol=1e-8, atol=1e-8)


def test_dense_matches_banded():
    rng = np.random.default_rng(1)
    y = rng.uniform(0.0, 5.0, size=30)
    w = rng.uniform(0.1, 1.0, size=30)
    banded = solve_penalized(y, w, penalty_bands(y.size), 50.0)
    dense = solve_penalized_dense(y, w, 50.0)
    np.testing.assert_allclose(dense, banded, rtol=1e-9, atol=1e-9)


def test_small_smoothness_reproduces_signal():
    y = np.array([1.0, 4.0, 2.0, 8.0, 3.0, 5.0])
    z = solve_penalized(y, np.ones_like(y), penalty_bands(y.size), 1e-9)
    np.testing.assert_allclose(z, y, rtol=1e-6)


def test_large_smoothness_approaches_linear_fit():
    x = np.arange(40, dtype=float)
    y = 2.0 + 0.3 * x + np.where(x % 2 == 0, 1.0, -1.0)
    z = solve_penalized(y, np.ones_like(y), penalty_bands(y.size), 1e9)
    slope, intercept = np.polyfit(x, y, 1)
    np.testing.assert_allclose(z, intercept + slope * x, atol=1e-3)


def test_solve_does_not_modify_inputs():
    y = np.linspace(1.0, 2.0, 10)
    w = np.full(10, 0.5)
    penalty = penalty_bands(10)
    penalty_before = penalty.copy()
    solve_penalized(y, w, penalty, 10.0)
    np.testing.assert_array_equal(penalty, penalty_before)
    np.testing.assert_array_equal(w, np.full(10, 0.5))


@pytest.mark.parametrize("dense", [False, True])
def test_non_positive_definite_system_raises(dense):
    y = np.linspace(0.0, 1.0, 8)
    w = -np.ones(8)
    with pytest.raises(NumericalError):
        if dense:
            solve_penalized_dense(y, w, 1e-3)
        else:
            solve_penalized(y, w, penalty_bands(8), 1e-3)


def test_numerical_error_is_arithmetic_error():
    assert issubclass(NumericalError, ArithmeticError)
