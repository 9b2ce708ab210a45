"""Second-order difference operator and its banded penalty D^T D."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray
from scipy import sparse

# Half bandwidth of D^T D for a second-order difference operator
PENALTY_BANDWIDTH = 2


def difference_matrix(size: int) -> sparse.csc_matrix:
    """
    Build the (size - 2) x size second-difference matrix.

    Each row holds ``1, -2, 1`` shifted by one column, so ``D @ y`` is the
    discrete second derivative of ``y``.

    Args:
        size: Number of samples in the signal (at least 3).

    Returns:
        Sparse CSC matrix of shape (size - 2, size).
    """
    if size < 3:
        raise ValueError(f"difference operator needs at least 3 samples, got {size}")
    return sparse.diags([1.0, -2.0, 1.0], [0, 1, 2], shape=(size - 2, size)).tocsc()


def penalty_matrix(size: int) -> sparse.csc_matrix:
    """Return the sparse roughness penalty D^T D (size x size, pentadiagonal)."""
    D = difference_matrix(size)
    return (D.T @ D).tocsc()


def penalty_bands(size: int) -> NDArray[np.float64]:
    """
    Return D^T D in the lower banded layout of ``scipy.linalg.solveh_banded``.

    Row ``k`` holds the k-th subdiagonal, left aligned:
    ``bands[k, j] == P[j + k, j]`` for ``j < size - k``; trailing entries are 0.
    """
    P = penalty_matrix(size)
    bands = np.zeros((PENALTY_BANDWIDTH + 1, size))
    for k in range(PENALTY_BANDWIDTH + 1):
        bands[k, : size - k] = P.diagonal(-k)
    return bands
