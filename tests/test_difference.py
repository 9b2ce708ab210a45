"""二階差分演算子とペナルティ帯行列のテスト。"""

import numpy as np
import pytest

from whittaker.difference import difference_matrix, penalty_bands, penalty_matrix


def test_difference_matrix_rows():
    """各行が (1, -2, 1) を1列ずつずらした形であることを確認。"""
    D = difference_matrix(5).toarray()
    expected = np.array(
        [
            [1, -2, 1, 0, 0],
            [0, 1, -2, 1, 0],
            [0, 0, 1, -2, 1],
        ],
        dtype=float,
    )
    np.testing.assert_array_equal(D, expected)


def test_difference_annihilates_linear_ramp():
    """線形信号の二階差分はゼロ。"""
    ramp = 3.0 + 0.5 * np.arange(12)
    np.testing.assert_allclose(difference_matrix(12) @ ramp, 0.0, atol=1e-12)


def test_penalty_bands_layout():
    """solveh_banded の下三角帯形式になっていることを確認。"""
    bands = penalty_bands(6)
    np.testing.assert_array_equal(bands[0], [1, 5, 6, 6, 5, 1])
    np.testing.assert_array_equal(bands[1], [-2, -4, -4, -4, -2, 0])
    np.testing.assert_array_equal(bands[2], [1, 1, 1, 1, 0, 0])


def test_penalty_bands_match_sparse_penalty():
    """帯形式と疎行列 D^T D の対角成分が一致する。"""
    n = 9
    P = penalty_matrix(n).toarray()
    bands = penalty_bands(n)
    for k in range(3):
        np.testing.assert_array_equal(bands[k, : n - k], np.diag(P, -k))
    np.testing.assert_array_equal(P, P.T)


def test_difference_matrix_rejects_short_signals():
    with pytest.raises(ValueError):
        difference_matrix(2)
