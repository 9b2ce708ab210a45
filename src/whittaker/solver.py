"""Weighted penalized least-squares solve for one Whittaker smoothing step.

Solves ``(diag(w) + lam * D^T D) b = w * y`` where ``D`` is the second-order
difference operator. The system is symmetric positive definite and banded, so
the default path factors it with a banded Cholesky decomposition in O(n).
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray
from scipy.linalg import cho_factor, cho_solve, solveh_banded

from whittaker.difference import penalty_matrix
from whittaker.errors import NumericalError

SOLVER_METHODS = ("banded", "dense")


def _check_solution(baseline: NDArray[np.float64]) -> NDArray[np.float64]:
    if not np.all(np.isfinite(baseline)):
        raise NumericalError("penalized system produced non-finite baseline values")
    return baseline


def solve_penalized(
    y: NDArray[np.float64],
    weights: NDArray[np.float64],
    penalty: NDArray[np.float64],
    smoothness: float,
) -> NDArray[np.float64]:
    """
    Solve the weighted Whittaker system with a banded Cholesky factorization.

    Args:
        y: Signal samples, shape (n,).
        weights: Per-sample weights, shape (n,), non-negative.
        penalty: Lower banded form of D^T D from ``penalty_bands(n)``.
        smoothness: Penalty weight lambda (> 0).

    Returns:
        Baseline estimate, shape (n,).

    Raises:
        NumericalError: if the system is not positive definite.
    """
    ab = smoothness * penalty
    ab[0] += weights
    try:
        baseline = solveh_banded(ab, weights * y, lower=True, check_finite=False)
    except np.linalg.LinAlgError as exc:
        raise NumericalError(f"banded Cholesky factorization failed: {exc}") from exc
    return _check_solution(baseline)


def solve_penalized_dense(
    y: NDArray[np.float64],
    weights: NDArray[np.float64],
    smoothness: float,
) -> NDArray[np.float64]:
    """Dense Cholesky fallback for the same system; O(n^3), meant for small n."""
    A = np.diag(weights) + smoothness * penalty_matrix(y.size).toarray()
    try:
        factor = cho_factor(A, lower=True, check_finite=False)
    except np.linalg.LinAlgError as exc:
        raise NumericalError(f"dense Cholesky factorization failed: {exc}") from exc
    return _check_solution(cho_solve(factor, weights * y, check_finite=False))
