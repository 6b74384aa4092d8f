# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging

import numpy as np

from matperm.elimination import (
    back_substitute,
    forward_eliminate,
    rank_elimination,
    rref,
)
from matperm.matrix import Matrix
from matperm.utils import EPS, random_nonsingular_upper

TEST_ITERATIONS = 50
logger = logging.getLogger(__name__)


def test_forward_eliminate_echelon_structure():
    A = Matrix(np.random.randn(5, 7))
    U = A.clone()
    pivots, free, perm = forward_eliminate(U)
    logger.debug(f"\nEchelon form:\n{U}\n")

    assert sorted(pivots + free) == list(range(7))
    assert sorted(perm) == list(range(5))
    for r, c in enumerate(pivots):
        assert U.get(r, c) == 1.0
        # everything below a pivot is exactly zero
        assert all(v == 0.0 for v in U.col(c)[r + 1 :])


def test_forward_eliminate_partial_pivoting():
    A = Matrix([[1, 1], [4, 2], [-8, 0]])
    pivots, free, perm = forward_eliminate(A)
    # largest magnitude in column 0 is -8 in row 2
    assert perm[0] == 2
    assert pivots == [0, 1]
    assert free == []


def test_forward_eliminate_tie_keeps_topmost_row():
    # |1| and |-1| tie in column 0, the upper row stays the pivot
    A = Matrix([[1, 2], [-1, 3]])
    pivots, free, perm = forward_eliminate(A)
    assert perm == [0, 1]
    assert pivots == [0, 1]
    assert A.to_array() == [[1, 2], [0, 1]]


def test_back_substitute_clears_above_pivots():
    A = Matrix(np.random.randn(4, 4))
    pivots, _free, _perm = forward_eliminate(A)
    back_substitute(A, pivots)
    np.testing.assert_allclose(A.to_numpy(), np.eye(4), atol=1e-10)


def test_rref_idempotent():
    m, n = 6, 8
    A = Matrix(np.random.randn(m, n))
    R1, piv = rref(A)
    logger.debug(f"RREF\n{R1}\n")
    R2, _ = rref(R1)  # RREF of an RREF is itself
    assert np.allclose(R1.to_numpy(), R2.to_numpy(), atol=1e-10)


def test_rref_pivot_structure():
    A = Matrix(np.random.randn(5, 7))
    R, pivots = rref(A)
    # each pivot column should be e_i
    for r, c in enumerate(pivots):
        ei = np.zeros(R.height)
        ei[r] = 1
        assert np.allclose(R.col(c), ei, atol=1e-10)


def test_rref_leaves_input_alone():
    data = np.random.randn(4, 6)
    A = Matrix(data)
    rref(A)
    np.testing.assert_array_equal(A.to_numpy(), data)


def test_rref_singular_leaves_zero_rows():
    R, pivots = rref(Matrix([[1, 2], [2, 4]]))
    assert R.to_array() == [[1, 2], [0, 0]]
    assert pivots == [0]


def test_rref_skips_zero_column():
    R, pivots = rref(Matrix([[0, 1], [0, 2]]))
    assert R.to_array() == [[0, 1], [0, 0]]
    assert pivots == [1]


def test_rref_tall_full_rank():
    R, pivots = rref(Matrix([[1, 2], [3, 4], [5, 7]]))
    np.testing.assert_allclose(R.to_numpy(), [[1, 0], [0, 1], [0, 0]], atol=1e-12)
    assert pivots == [0, 1]


def test_rref_solves_augmented_system():
    n = 6
    for i in range(TEST_ITERATIONS):
        A = random_nonsingular_upper(n, seed=i)
        x_true = np.random.rand(n)
        b = A @ x_true

        R, pivots = rref(Matrix(np.column_stack([A, b])))
        logger.debug(f"\nAugmented RREF:\n{R}\n")
        assert pivots == list(range(n))
        np.testing.assert_allclose(R.col(n), x_true, rtol=1e-6, atol=1e-8)


def test_rank_agreement():
    for _ in range(100):
        A = np.random.randn(8, 6)
        assert rank_elimination(Matrix(A)) == np.linalg.matrix_rank(A, tol=EPS)


def test_rank_deficient():
    for _ in range(TEST_ITERATIONS):
        A = np.random.randn(8, 3) @ np.random.randn(3, 6)  # rank 3
        assert rank_elimination(Matrix(A)) == np.linalg.matrix_rank(A) == 3


def test_tolerance_has_absolute_floor():
    # scale_tol never drops below EPS, so entries that small count as zero
    tiny = Matrix([[1e-13, 0], [0, 1e-13]])
    assert tiny.rank() == 0
    assert tiny.rref().to_array() == [[0.0, 0.0], [0.0, 0.0]]
    assert tiny.determinant() != 0.0

    small = Matrix([[1e-9, 0], [0, 1e-9]])
    assert small.rank() == 2
    assert small.rref().equals(Matrix.identity(2))
