"""Column-wise baseline estimation for single traces and trace matrices."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Mapping

import numpy as np
from numpy.typing import ArrayLike, NDArray

from whittaker.options import SmootherOptions, resolve_options
from whittaker.reweighting import asymmetric_least_squares

logger = logging.getLogger(__name__)

MIN_SAMPLES = 3


def _as_signal_matrix(y: ArrayLike) -> tuple[NDArray[np.float64], bool]:
    """Validate ``y`` and return it as a float (n, m) matrix plus a 1-D flag."""
    arr = np.asarray(y)
    if arr.dtype.kind not in "iuf":
        raise TypeError(f"signal must be real-valued numeric data, got dtype {arr.dtype}")
    if arr.ndim not in (1, 2):
        raise ValueError(f"signal must be a vector or a matrix of column signals, got {arr.ndim} dimensions")
    if arr.shape[0] < MIN_SAMPLES:
        raise ValueError(f"signal must contain at least {MIN_SAMPLES} samples, got {arr.shape[0]}")
    matrix = np.array(arr, dtype=np.float64, ndmin=2, copy=True)
    is_vector = arr.ndim == 1
    if is_vector:
        matrix = matrix.T
    if not np.all(np.isfinite(matrix)):
        raise ValueError("signal contains NaN or infinite values")
    return matrix, is_vector


def baseline_column(column: NDArray[np.float64], options: SmootherOptions) -> NDArray[np.float64]:
    """
    Estimate the baseline of one signal column.

    Negative signals are shifted up by ``|min|`` before fitting and the
    baseline is shifted back, so ``baseline(y + c) == baseline(y) + c``.
    A column whose maximum is zero after the shift gets a zero baseline in
    the shifted frame, which is then shifted back like any other.
    """
    y = np.asarray(column, dtype=float)
    correction = 0.0
    if y.min() < 0:
        correction = -float(y.min())
        y = y + correction
    if y.max() == 0:
        logger.debug("Skipping degenerate column (max == 0)")
        return np.zeros_like(y) - correction
    # Zero curvature is fitted exactly by every weighting
    if not np.any(np.diff(y, 2)):
        return y - correction
    z = asymmetric_least_squares(
        y,
        lam=options.smoothness,
        p=options.asymmetry,
        niter=options.iterations,
        tol=options.tolerance,
        method=options.method,
    )
    return z - correction


def smooth(
    y: ArrayLike,
    options: SmootherOptions | Mapping[str, Any] | None = None,
    **overrides: Any,
) -> NDArray[np.float64]:
    """
    Estimate the baseline of one trace or of every column of a trace matrix.

    Args:
        y: Signal vector (n,) or matrix (n, m) with one signal per column, n >= 3.
        options: SmootherOptions, a mapping of option names, or None for defaults.
        **overrides: Individual options (smoothness, asymmetry, iterations,
            tolerance, workers, method) applied on top of ``options``.

    Returns:
        Baseline array with the same shape as ``y``. ``y`` is not modified.
    """
    matrix, is_vector = _as_signal_matrix(y)
    opts = resolve_options(options, **overrides)
    n_cols = matrix.shape[1]

    def run(col: int) -> NDArray[np.float64]:
        return baseline_column(matrix[:, col], opts)

    if opts.workers > 1 and n_cols > 1:
        logger.debug("Fitting %d columns on %d workers", n_cols, opts.workers)
        with ThreadPoolExecutor(max_workers=opts.workers) as ex:
            columns = list(ex.map(run, range(n_cols)))
    else:
        columns = [run(col) for col in range(n_cols)]

    baseline = np.zeros_like(matrix)
    for col, z in enumerate(columns):
        baseline[:, col] = z
    if is_vector:
        return baseline[:, 0]
    return baseline
