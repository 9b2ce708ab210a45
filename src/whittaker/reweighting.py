"""Asymmetric least squares (ALS) baseline by iterative reweighting.

P.H.C. Eilers, Analytical Chemistry 75 (2003) 3631.
"""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray

from whittaker.difference import penalty_bands
from whittaker.options import DEFAULT_ASYMMETRY, DEFAULT_ITERATIONS, DEFAULT_SMOOTHNESS
from whittaker.solver import SOLVER_METHODS, solve_penalized, solve_penalized_dense

logger = logging.getLogger(__name__)


def update_weights(
    signal: NDArray[np.float64],
    baseline: NDArray[np.float64],
    p: float,
) -> NDArray[np.float64]:
    """
    Recompute per-sample weights from the current baseline.

    Samples above the baseline get ``p``, samples below get ``1 - p`` and
    samples exactly on it get 0.
    """
    return p * (signal > baseline) + (1.0 - p) * (signal < baseline)


def asymmetric_least_squares(
    signal: NDArray[np.float64],
    lam: float = DEFAULT_SMOOTHNESS,
    p: float = DEFAULT_ASYMMETRY,
    niter: int = DEFAULT_ITERATIONS,
    tol: float = 0.0,
    method: str = "banded",
) -> NDArray[np.float64]:
    """
    Estimate a smooth baseline using asymmetric least squares.

    Args:
        signal: Input trace, shape (n,), n >= 3.
        lam: Smoothness parameter (larger = smoother).
        p: Asymmetry parameter (small values force baseline below data).
        niter: Number of reweighting iterations (solves).
        tol: If > 0, stop once the relative baseline change between two
            solves drops to ``tol`` or below. 0 disables the check.
        method: ``"banded"`` (banded Cholesky) or ``"dense"``.

    Returns:
        Estimated baseline array.
    """
    if method not in SOLVER_METHODS:
        raise ValueError(f"Unknown solver method: {method}")
    if niter < 1:
        raise ValueError("niter must be at least 1")
    y = np.asarray(signal, dtype=float)
    L = y.size
    penalty = penalty_bands(L) if method == "banded" else None
    w = np.ones(L)
    z = np.zeros(L)
    for i in range(niter):
        if penalty is not None:
            z_new = solve_penalized(y, w, penalty, lam)
        else:
            z_new = solve_penalized_dense(y, w, lam)
        w = update_weights(y, z_new, p)
        if tol > 0.0 and i > 0:
            change = np.linalg.norm(z_new - z) / max(float(np.linalg.norm(z)), 1e-12)
            if change <= tol:
                logger.debug("ALS converged after %d iterations (change %.3g)", i + 1, change)
                return z_new
        z = z_new
    return z
